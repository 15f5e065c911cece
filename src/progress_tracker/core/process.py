from __future__ import annotations
import logging
from typing import Callable, List

from progress_tracker.core.errors import InvalidArgument, InvalidState

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class ProcessState:
    """
    Step counters of a tracked process.

    Observers are plain zero-argument callables. They may only be registered
    while the process is still in its initial state (no steps recorded) and
    are invoked synchronously, in registration order, on every nonzero update.
    Exceptions raised by an observer propagate to the caller of ``update``.
    """

    def __init__(self, total_steps: int):
        if not isinstance(total_steps, int) or isinstance(total_steps, bool) or total_steps <= 0:
            raise InvalidArgument(f"Invalid number of process steps: {total_steps!r}")

        self._total_steps = total_steps
        self._current_step = 0
        self._observers: List[Observer] = []
        logger.debug("process created: total_steps=%d", total_steps)

    @property
    def total_steps(self) -> int:
        return self._total_steps

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def progress(self) -> float:
        """Completed fraction; exceeds 1.0 when the process overshoots its total."""
        return self._current_step / self._total_steps

    @property
    def is_complete(self) -> bool:
        return self._current_step >= self._total_steps

    def register_observer(self, callback: Observer) -> None:
        if self._current_step != 0:
            raise InvalidState(
                "Observer registration attempted when process is not in its initial state"
            )
        if callback is None or not callable(callback):
            raise InvalidArgument(f"Observer must be callable, got {callback!r}")

        self._observers.append(callback)
        logger.debug("observer registered (%d total)", len(self._observers))

    def update(self, steps: int = 1) -> None:
        """Record `steps` more completed steps and notify observers."""
        if not isinstance(steps, int) or isinstance(steps, bool) or steps < 0:
            raise InvalidArgument(f"Invalid number of steps updating the process: {steps!r}")

        if steps == 0:
            return

        self._current_step += steps

        for observer in self._observers:
            observer()
