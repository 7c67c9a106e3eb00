"""Exception hierarchy for ndvicycle.

Every error raised by the package derives from ``NdviCycleError`` so the
scheduler can tell malformed-data failures apart from programming errors.
None of these are retried: the same input produces the same failure.
"""

from __future__ import annotations


class NdviCycleError(Exception):
    """Base exception for all ndvicycle errors."""


class ConfigError(NdviCycleError):
    """Invalid or missing configuration."""


class MalformedRecordError(NdviCycleError):
    """Input payload does not have the expected record shape."""


class EmptyEntityCollection(NdviCycleError):
    """Cycling was requested over zero entities."""

    def __init__(self, message: str = "entity collection is empty") -> None:
        super().__init__(message)


class MismatchedSeriesLength(NdviCycleError):
    """Entity and external series cannot be aligned one-to-one."""

    def __init__(self, entity_length: int, external_length: int) -> None:
        self.entity_length = entity_length
        self.external_length = external_length
        super().__init__(
            f"entity series has {entity_length} records but external series has "
            f"{external_length}"
        )


class IndexOutOfRange(NdviCycleError):
    """An entity index fell outside ``[0, entity_count)``."""

    def __init__(self, index: int, entity_count: int) -> None:
        self.index = index
        self.entity_count = entity_count
        super().__init__(f"entity index {index} outside [0, {entity_count})")
