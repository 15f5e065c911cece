from __future__ import annotations
import datetime as _dt
import logging
from typing import Callable, Optional

from progress_tracker.core.errors import InvalidArgument, InvalidState
from progress_tracker.core.process import ProcessState

logger = logging.getLogger(__name__)

Clock = Callable[[], _dt.datetime]

OPENING_BRACKET = "["
CLOSING_BRACKET = "]"
FIELD_SEPARATOR = "|"

CLOCK_PLACEHOLDER = "--:--"
DURATION_PLACEHOLDER = "--:--:--"


def format_clock(value: Optional[_dt.datetime]) -> str:
    """24h wall-clock time as ``HH:MM``; ``--:--`` while not yet available."""
    if value is None:
        return CLOCK_PLACEHOLDER
    return value.strftime("%H:%M")


def format_duration(value: Optional[_dt.timedelta]) -> str:
    """
    Duration as ``HH:MM:SS`` where HH counts total hours (no wrap at 24).
    Sub-second parts are truncated; negative durations carry a leading '-'.
    """
    if value is None:
        return DURATION_PLACEHOLDER
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"


class TimeEstimator:
    """
    Time statistics of a tracked process.

    The process runtime is assumed to begin when the estimator is created.
    Derived values stay ``None`` until the first nonzero step is recorded:
      - average_time_per_step
      - estimated_remaining_runtime (may be zero or negative on overshoot)
      - estimated_finish
    Projections that fall outside the datetime/timedelta range are also ``None``.
    """

    def __init__(self, process: ProcessState, clock: Clock = _dt.datetime.now):
        if process is None:
            raise InvalidArgument("Process to track must not be None")
        if process.current_step != 0:
            raise InvalidState("Process to track is not in its initial state")

        self._process = process
        self._clock = clock

        self._runtime_begin: _dt.datetime = clock()
        self._average_time_per_step: Optional[_dt.timedelta] = None
        self._estimated_remaining_runtime: Optional[_dt.timedelta] = None
        self._estimated_finish: Optional[_dt.datetime] = None

        process.register_observer(self._on_update)

    @property
    def runtime_begin(self) -> _dt.datetime:
        return self._runtime_begin

    @property
    def average_time_per_step(self) -> Optional[_dt.timedelta]:
        return self._average_time_per_step

    @property
    def estimated_remaining_runtime(self) -> Optional[_dt.timedelta]:
        return self._estimated_remaining_runtime

    @property
    def estimated_finish(self) -> Optional[_dt.datetime]:
        return self._estimated_finish

    def elapsed(self) -> _dt.timedelta:
        return self._clock() - self._runtime_begin

    def _on_update(self) -> None:
        current = self._process.current_step
        if current == 0:
            return

        now = self._clock()
        average = (now - self._runtime_begin) / current

        # projections past timedelta/datetime range are left unavailable
        remaining: Optional[_dt.timedelta] = None
        finish: Optional[_dt.datetime] = None
        try:
            remaining = (self._process.total_steps - current) * average
            finish = now + remaining
        except OverflowError:
            logger.debug("estimator: projection out of range at step=%d", current)

        self._average_time_per_step = average
        self._estimated_remaining_runtime = remaining
        self._estimated_finish = finish
        logger.debug(
            "estimator: step=%d avg=%s remaining=%s", current, average, remaining
        )

    def format_summary(self) -> str:
        """``[<runtime begin>|<estimated finish>|<average time per step>]``"""
        fields = (
            format_clock(self.runtime_begin),
            format_clock(self.estimated_finish),
            format_duration(self.average_time_per_step),
        )
        return OPENING_BRACKET + FIELD_SEPARATOR.join(fields) + CLOSING_BRACKET

    def __str__(self) -> str:
        return self.format_summary()
