"""
ndvicycle: cycle per-field NDVI against precipitation on a timer.

Reshapes newest-first NDVI series (one per field) and a shared
precipitation series into ascending, position-matched series, and cycles
the displayed field on a fixed period, handing each refresh to a chart
renderer.

Subpackages:
    records: Measurement records, aligned series and input loaders.
    aligner: Reverse and match one field against the precipitation series.
    cycler: Cycle state transitions and the periodic scheduler.
    viz: Chart renderer collaborators (plotly).

Example:
    >>> from ndvicycle import Cycler, PlotlyRenderer, load_entities, load_external
    >>>
    >>> fields = load_entities("ndvi.json")
    >>> precip = load_external("precip.json")
    >>> cycler = Cycler(fields, precip, PlotlyRenderer("chart.html"))
    >>> cycler.start()
    >>> cycler.tick()
"""

from ndvicycle.aligner import align, align_entity
from ndvicycle.cycler import Cycler, Scheduler, advance, initialize, tick
from ndvicycle.exceptions import (
    ConfigError,
    EmptyEntityCollection,
    IndexOutOfRange,
    MalformedRecordError,
    MismatchedSeriesLength,
    NdviCycleError,
)
from ndvicycle.records import (
    AlignedSeries,
    CycleState,
    MeasurementRecord,
    entities_from_results,
    load_entities,
    load_external,
    records_from_list,
)
from ndvicycle.viz import PlotlyRenderer

__version__ = "0.1.0"

__all__ = [
    "align",
    "align_entity",
    "initialize",
    "advance",
    "tick",
    "Cycler",
    "Scheduler",
    "AlignedSeries",
    "CycleState",
    "MeasurementRecord",
    "records_from_list",
    "entities_from_results",
    "load_entities",
    "load_external",
    "PlotlyRenderer",
    "NdviCycleError",
    "ConfigError",
    "MalformedRecordError",
    "EmptyEntityCollection",
    "MismatchedSeriesLength",
    "IndexOutOfRange",
]
