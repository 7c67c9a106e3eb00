"""
Shared pytest fixtures for ndvicycle tests.

This module provides:
- Small newest-first NDVI and precipitation record sets
- A values API payload and matching JSON/TOML files on disk
- A renderer double that records every refresh
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from ndvicycle.records import records_from_list


# =============================================================================
# Record Fixtures
# =============================================================================

FIELD_NDVI = [
    [{"date": "2017-06-21", "value": 0.61}, {"date": "2017-06-05", "value": 0.52},
     {"date": "2017-05-20", "value": 0.33}],
    [{"date": "2017-06-21", "value": 0.44}, {"date": "2017-06-05", "value": 0.41},
     {"date": "2017-05-20", "value": 0.29}],
    [{"date": "2017-06-21", "value": 0.18}, {"date": "2017-06-05", "value": 0.22},
     {"date": "2017-05-20", "value": 0.25}],
]

PRECIP = [
    {"date": "2017-06-21", "value": 0.12},
    {"date": "2017-06-05", "value": 0.0},
    {"date": "2017-05-20", "value": 1.35},
]


class RecordingRenderer:
    """Renderer double that keeps every (series, index) it was handed."""

    def __init__(self):
        self.calls: List[Tuple[Any, int]] = []

    def render(self, series, index):
        self.calls.append((series, index))

    @property
    def indices(self) -> List[int]:
        return [i for _, i in self.calls]


@pytest.fixture
def values_payload() -> Dict[str, Any]:
    """Values API response with geometry and three fields."""
    return {
        "results": [
            {
                "value": {
                    "type": "Feature",
                    "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [0, 1], [1, 1], [0, 0]]]},
                    "properties": {"ndvi_values": ndvi},
                }
            }
            for ndvi in FIELD_NDVI
        ]
    }


@pytest.fixture
def entities():
    return [records_from_list(ndvi) for ndvi in FIELD_NDVI]


@pytest.fixture
def precip():
    return records_from_list(PRECIP)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


# =============================================================================
# On-disk Fixtures
# =============================================================================

@pytest.fixture
def data_files(tmp_path, values_payload) -> Dict[str, Path]:
    """NDVI payload and precipitation list written as JSON."""
    ndvi_file = tmp_path / "ndvi.json"
    precip_file = tmp_path / "precip.json"
    ndvi_file.write_text(json.dumps(values_payload))
    precip_file.write_text(json.dumps(PRECIP))
    return {"ndvi": ndvi_file, "precip": precip_file}


@pytest.fixture
def chart_toml(tmp_path, data_files) -> Path:
    """Chart TOML using relative data paths and a short period."""
    toml_content = """
[data]
ndvi = "ndvi.json"
precip = "precip.json"

[schedule]
period_millis = 1
on_error = "stop"

[output]
html = "chart.html"
"""
    toml_file = tmp_path / "chart.toml"
    toml_file.write_text(toml_content)
    return toml_file
