"""Record types and the input data provider.

Provides:
- MeasurementRecord: one timestamped observation
- AlignedSeries: ascending, positionally matched output handed to a renderer
- CycleState: the active-entity pointer owned by the cycler
- Loaders for the NDVI values payload and the precipitation list

Inputs arrive newest-first, the convention of both upstream sources. Dates
are opaque ordering keys and are never reparsed here.
"""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Hashable, List, Mapping, Sequence, Tuple, Union

import pandas as pd

from ndvicycle.exceptions import ConfigError, MalformedRecordError

__all__ = [
    "MeasurementRecord",
    "Entity",
    "AlignedSeries",
    "CycleState",
    "records_from_list",
    "entities_from_results",
    "load_entities",
    "load_external",
]


@dataclass(frozen=True)
class MeasurementRecord:
    """One observation at one point in time."""

    date: Hashable
    value: Union[int, float]


Entity = Tuple[MeasurementRecord, ...]


@dataclass(frozen=True)
class AlignedSeries:
    """Chronologically ascending series ready for plotting.

    Attributes
    ----------
    labels : tuple
        Dates, oldest first
    primary : tuple
        Entity (NDVI) values matching ``labels`` by position
    secondary : tuple
        External (precipitation) values matching ``labels`` by position
    """

    labels: Tuple[Hashable, ...] = ()
    primary: Tuple[Union[int, float], ...] = ()
    secondary: Tuple[Union[int, float], ...] = ()

    def __len__(self) -> int:
        return len(self.labels)

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame indexed by label."""
        df = pd.DataFrame(
            {"ndvi": list(self.primary), "precip": list(self.secondary)},
            index=pd.Index(list(self.labels), name="date"),
        )
        return df


@dataclass(frozen=True)
class CycleState:
    """Index of the displayed entity within a fixed-size collection."""

    current_index: int
    entity_count: int


def _record_from_item(item: Any, position: int) -> MeasurementRecord:
    if not isinstance(item, Mapping):
        raise MalformedRecordError(f"record {position} is not a mapping: {item!r}")
    try:
        date, value = item["date"], item["value"]
    except KeyError as e:
        raise MalformedRecordError(f"record {position} missing key {e}") from e
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedRecordError(f"record {position} has non-numeric value {value!r}")
    return MeasurementRecord(date=date, value=value)


def records_from_list(items: Sequence[Any]) -> Entity:
    """Convert ``[{"date": ..., "value": ...}, ...]`` into records, keeping order."""
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise MalformedRecordError(f"expected a list of records, got {type(items).__name__}")
    return tuple(_record_from_item(item, i) for i, item in enumerate(items))


def entities_from_results(payload: Mapping[str, Any]) -> List[Entity]:
    """Extract per-field NDVI series from a values API response.

    Each result carries geometry plus ``value.properties.ndvi_values``; the
    geometry is discarded.
    """
    try:
        results = payload["results"]
    except (KeyError, TypeError) as e:
        raise MalformedRecordError("payload has no 'results' list") from e
    if isinstance(results, (str, bytes)) or not isinstance(results, Sequence):
        raise MalformedRecordError(f"payload 'results' is not a list: {type(results).__name__}")

    entities = []
    for i, result in enumerate(results):
        try:
            ndvi_values = result["value"]["properties"]["ndvi_values"]
        except (KeyError, TypeError) as e:
            raise MalformedRecordError(f"result {i} has no value.properties.ndvi_values") from e
        entities.append(records_from_list(ndvi_values))
    return entities


def _read_json(path: Union[str, Path]) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"input file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise MalformedRecordError(f"{path} is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedRecordError(f"could not read {path}: {e}") from e


def load_entities(path: Union[str, Path]) -> List[Entity]:
    """Read a values API response saved as JSON."""
    return entities_from_results(_read_json(path))


def load_external(path: Union[str, Path]) -> Entity:
    """Read the shared precipitation list saved as JSON."""
    return records_from_list(_read_json(path))
