"""
Chart configuration read from a TOML file.

Example TOML:
    [data]
    ndvi = "ndvi.json"
    precip = "precip.json"

    [schedule]
    period_millis = 500
    on_error = "stop"

    [output]
    html = "chart.html"

Relative paths resolve against the directory holding the TOML.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

from ndvicycle.cycler import DEFAULT_PERIOD_MILLIS, ERROR_POLICIES
from ndvicycle.exceptions import ConfigError


@dataclass(frozen=True)
class ChartConfig:
    """Inputs, tick period and output location for one display loop."""

    ndvi_path: Path
    precip_path: Path
    period_millis: int = DEFAULT_PERIOD_MILLIS
    on_error: str = "stop"
    html_path: Optional[Path] = None
    config_path: Optional[Path] = None

    def __post_init__(self):
        p = self.period_millis
        if isinstance(p, bool) or not isinstance(p, int) or p <= 0:
            raise ConfigError(f"schedule.period_millis must be a positive integer, got {p!r}")
        if self.on_error not in ERROR_POLICIES:
            raise ConfigError(
                f"schedule.on_error must be one of {ERROR_POLICIES}, got {self.on_error!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "ChartConfig":
        """Build from parsed TOML; relative paths are joined to ``base_dir``."""
        base_dir = Path(base_dir) if base_dir else Path.cwd()

        def _resolve(value: str) -> Path:
            if not isinstance(value, str):
                raise ConfigError(f"paths must be strings, got {value!r}")
            path = Path(os.path.expanduser(value))
            return path if path.is_absolute() else base_dir / path

        def _table(name: str) -> Dict[str, Any]:
            section = data.get(name, {})
            if not isinstance(section, dict):
                raise ConfigError(f"[{name}] must be a table, got {type(section).__name__}")
            return section

        data_conf = _table("data")
        schedule_conf = _table("schedule")
        output_conf = _table("output")

        for key in ("ndvi", "precip"):
            if not data_conf.get(key):
                raise ConfigError(f"Missing required data.{key} in config TOML")

        html = output_conf.get("html")
        return cls(
            ndvi_path=_resolve(data_conf["ndvi"]),
            precip_path=_resolve(data_conf["precip"]),
            period_millis=schedule_conf.get("period_millis", DEFAULT_PERIOD_MILLIS),
            on_error=schedule_conf.get("on_error", "stop"),
            html_path=_resolve(html) if html else None,
        )

    @classmethod
    def from_toml(cls, config_path: Union[str, Path]) -> "ChartConfig":
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                raw = toml.load(f)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

        config = cls.from_dict(raw, base_dir=config_path.parent.resolve())
        return replace(config, config_path=config_path)
