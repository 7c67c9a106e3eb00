"""Time-series alignment of one entity against the shared external series."""

from __future__ import annotations

from typing import Sequence

from ndvicycle.exceptions import IndexOutOfRange, MismatchedSeriesLength
from ndvicycle.logging import get_logger
from ndvicycle.records import AlignedSeries, Entity, MeasurementRecord

logger = get_logger("aligner")


def align(
    entity_measurements: Sequence[MeasurementRecord],
    external_measurements: Sequence[MeasurementRecord],
) -> AlignedSeries:
    """Reverse two newest-first series into oldest-first, position-matched arrays.

    No sorting by date is done; only the order is reversed. Values pass
    through unchanged.

    Args:
        entity_measurements: One entity's records, newest first.
        external_measurements: Shared external records, newest first.

    Returns:
        AlignedSeries with ``labels`` and ``primary`` from the entity and
        ``secondary`` from the external series.

    Raises:
        MismatchedSeriesLength: If the two series differ in length.
    """
    n_entity, n_external = len(entity_measurements), len(external_measurements)
    if n_entity != n_external:
        logger.warning("align_mismatch", entity_length=n_entity, external_length=n_external)
        raise MismatchedSeriesLength(n_entity, n_external)

    ascending = list(reversed(entity_measurements))
    return AlignedSeries(
        labels=tuple(r.date for r in ascending),
        primary=tuple(r.value for r in ascending),
        secondary=tuple(r.value for r in reversed(external_measurements)),
    )


def align_entity(
    entities: Sequence[Entity],
    index: int,
    external_measurements: Sequence[MeasurementRecord],
) -> AlignedSeries:
    """Align the entity at ``index`` against the external series."""
    if not 0 <= index < len(entities):
        raise IndexOutOfRange(index, len(entities))
    return align(entities[index], external_measurements)
