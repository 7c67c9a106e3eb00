"""
Entity cycling and the periodic tick driver.

Provides:
- initialize / advance / tick: state transitions over an explicit CycleState
- Cycler: owns one CycleState for a fixed entity collection
- Scheduler: fires a callback on a fixed period, one firing at a time

Cycling wraps back to the first entity after the last one, so the display
loops for as long as the scheduler runs.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Sequence

from ndvicycle.aligner import align_entity
from ndvicycle.exceptions import (
    ConfigError,
    EmptyEntityCollection,
    IndexOutOfRange,
    NdviCycleError,
)
from ndvicycle.logging import get_logger
from ndvicycle.records import AlignedSeries, CycleState, Entity, MeasurementRecord
from ndvicycle.viz.renderer import ChartRenderer

__all__ = [
    "initialize",
    "advance",
    "tick",
    "Cycler",
    "Scheduler",
    "DEFAULT_PERIOD_MILLIS",
    "ERROR_POLICIES",
]

DEFAULT_PERIOD_MILLIS = 500
ERROR_POLICIES = ("stop", "skip")

logger = get_logger("cycler")


def _check_state(state: CycleState) -> None:
    if state.entity_count <= 0:
        raise EmptyEntityCollection()
    if not 0 <= state.current_index < state.entity_count:
        raise IndexOutOfRange(state.current_index, state.entity_count)


def initialize(entity_count: int) -> CycleState:
    """Start cycling at the first entity.

    Raises:
        EmptyEntityCollection: If there is nothing to cycle through.
    """
    if entity_count <= 0:
        raise EmptyEntityCollection()
    return CycleState(current_index=0, entity_count=entity_count)


def advance(state: CycleState) -> CycleState:
    """Move to the next entity, wrapping to 0 after the last."""
    _check_state(state)
    return CycleState(
        current_index=(state.current_index + 1) % state.entity_count,
        entity_count=state.entity_count,
    )


def tick(
    state: CycleState,
    entities: Sequence[Entity],
    external_measurements: Sequence[MeasurementRecord],
    renderer: ChartRenderer,
) -> CycleState:
    """Advance, re-align the newly selected entity and push it to the renderer.

    The renderer is only called once alignment succeeds, so a failed tick
    leaves the previous chart on screen.

    Returns:
        The advanced state.
    """
    new_state = advance(state)
    series = align_entity(entities, new_state.current_index, external_measurements)
    renderer.render(series, new_state.current_index)
    logger.debug("tick", index=new_state.current_index, n_obs=len(series))
    return new_state


class Cycler:
    """
    Owns the active-entity pointer for a fixed collection of entities.

    Example:
        cycler = Cycler(entities, precip, renderer)
        cycler.start()        # draws entity 0
        cycler.tick()         # draws entity 1
    """

    def __init__(
        self,
        entities: Sequence[Entity],
        external_measurements: Sequence[MeasurementRecord],
        renderer: ChartRenderer,
    ):
        self._entities = entities
        self._external = external_measurements
        self._renderer = renderer
        self._state = initialize(len(entities))
        self._log = logger.bind(entity_count=len(entities))

    @property
    def state(self) -> CycleState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._state.current_index

    def current(self) -> AlignedSeries:
        """Aligned series for the entity currently selected."""
        return align_entity(self._entities, self._state.current_index, self._external)

    def start(self) -> AlignedSeries:
        """Render the initial view without advancing."""
        series = self.current()
        self._renderer.render(series, self._state.current_index)
        self._log.info("cycler_started", index=self._state.current_index, n_obs=len(series))
        return series

    def tick(self) -> CycleState:
        self._state = tick(self._state, self._entities, self._external, self._renderer)
        return self._state


class Scheduler:
    """
    Fire a callback every ``period_millis`` until stopped.

    Firings never overlap: the wait for the next firing begins only after
    the callback returns. ``stop`` may be called from the callback itself or
    from another thread.

    Args:
        callback: Zero-argument callable run on every firing
        period_millis: Milliseconds between firings, a positive integer
        on_error: "stop" to stop and re-raise on a data error, "skip" to log
            the error and keep firing
    """

    def __init__(
        self,
        callback: Callable[[], object],
        period_millis: int = DEFAULT_PERIOD_MILLIS,
        on_error: str = "stop",
    ):
        if isinstance(period_millis, bool) or not isinstance(period_millis, int) or period_millis <= 0:
            raise ConfigError(f"period_millis must be a positive integer, got {period_millis!r}")
        if on_error not in ERROR_POLICIES:
            raise ConfigError(f"on_error must be one of {ERROR_POLICIES}, got {on_error!r}")
        self._callback = callback
        self._period = period_millis / 1000.0
        self._on_error = on_error
        self._stop_event = threading.Event()
        self.fired = 0
        self.failed = 0
        self._log = logger.bind(period_millis=period_millis, on_error=on_error)

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        self._stop_event.set()

    def reset(self) -> None:
        """Clear a previous ``stop`` so ``run`` can fire again."""
        self._stop_event.clear()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Block and fire until stopped or ``max_ticks`` firings have run.

        A ``stop`` made before ``run`` starts is honoured: nothing fires until
        ``reset`` is called. ``fired`` and ``failed`` keep lifetime totals.

        Returns:
            Number of firings in this run.
        """
        self._log.info("scheduler_started", max_ticks=max_ticks)
        start = time.monotonic()
        count = 0
        while max_ticks is None or count < max_ticks:
            if self._stop_event.wait(self._period):
                break
            count += 1
            self.fired += 1
            try:
                self._callback()
            except NdviCycleError as e:
                self.failed += 1
                if self._on_error == "stop":
                    self._log.error("scheduler_stopped", reason=str(e), fired=count)
                    self._stop_event.set()
                    raise
                self._log.warning("tick_skipped", reason=str(e), fired=count)

        self._log.info(
            "scheduler_stopped",
            fired=count,
            failed=self.failed,
            elapsed=round(time.monotonic() - start, 3),
        )
        return count
