"""Ready-made progress bars built from the core state, timing and formatting parts.

Example:

    with AdvancedProgressBar(len(chunks), label="Encoding") as bar:
        for chunk in chunks:
            encode(chunk)
            bar.update()
"""
from __future__ import annotations
import datetime as _dt
import logging
from dataclasses import replace
from typing import Optional

from progress_tracker.adapters.terminal import TerminalWriter, supports_unicode
from progress_tracker.core.estimator import Clock, TimeEstimator
from progress_tracker.core.formatter import ADVANCED, REGULAR, SIMPLE, BarConfig, format_line
from progress_tracker.core.process import ProcessState
from progress_tracker.core.reporting import RunReport, build_report

logger = logging.getLogger(__name__)


class ProgressBar:
    """
    A tracked process drawn as a single, continuously redrawn terminal line.

    The time estimator is registered before the redraw observer so every
    redraw sees statistics for the step that triggered it. When `ascii` is
    None, ASCII glyphs are chosen if the writer's stream cannot encode the
    Unicode block glyphs.
    """

    def __init__(
        self,
        total_steps: int,
        config: BarConfig = REGULAR,
        writer: Optional[TerminalWriter] = None,
        clock: Clock = _dt.datetime.now,
        ascii: Optional[bool] = None,
    ):
        self.writer = writer or TerminalWriter()
        if ascii is None:
            ascii = config.ascii or not supports_unicode(self.writer.stream)
        self.config = replace(config, ascii=ascii)

        self.process = ProcessState(total_steps)
        self.estimator = TimeEstimator(self.process, clock=clock)
        self.process.register_observer(self.refresh)
        logger.debug("progress bar '%s' ready (ascii=%s)", self.config.name, ascii)

    @property
    def current_step(self) -> int:
        return self.process.current_step

    @property
    def total_steps(self) -> int:
        return self.process.total_steps

    def update(self, steps: int = 1) -> None:
        self.process.update(steps)

    def render(self) -> str:
        return format_line(self.process, self.config, self.estimator)

    def refresh(self) -> None:
        self.writer.write_line(self.render())

    def finish(self) -> None:
        self.writer.finish()

    def report(self, style: Optional[str] = None, **provenance) -> RunReport:
        return build_report(
            self.process,
            self.estimator,
            style=style or self.config.name,
            provenance=provenance or None,
        )

    def __enter__(self) -> "ProgressBar":
        self.refresh()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish()


class _PresetProgressBar(ProgressBar):
    preset: BarConfig = REGULAR

    def __init__(
        self,
        total_steps: int,
        label: str = "",
        bar_width: Optional[int] = None,
        writer: Optional[TerminalWriter] = None,
        clock: Clock = _dt.datetime.now,
        ascii: Optional[bool] = None,
    ):
        config = replace(self.preset, label=label)
        if bar_width is not None:
            config = replace(config, bar_width=bar_width)
        super().__init__(total_steps, config, writer=writer, clock=clock, ascii=ascii)


class SimpleProgressBar(_PresetProgressBar):
    preset = SIMPLE


class RegularProgressBar(_PresetProgressBar):
    preset = REGULAR


class AdvancedProgressBar(_PresetProgressBar):
    preset = ADVANCED
