from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from progress_tracker.core.bar import ASCII_GLYPHS, UNICODE_GLYPHS, GlyphSet, render_bar
from progress_tracker.core.errors import InvalidArgument
from progress_tracker.core.estimator import TimeEstimator
from progress_tracker.core.process import ProcessState

LABEL_SEPARATOR = "  "


@dataclass(frozen=True)
class BarConfig:
    name: str = "custom"
    bar_width: int = 31
    boundary_chars: Tuple[str, str] = ("|", "|")
    show_ratio: bool = False
    show_time_stats: bool = False
    label: str = ""
    ascii: bool = False

    def __post_init__(self):
        if self.bar_width < 0:
            raise InvalidArgument(f"Invalid bar width: {self.bar_width}")
        if len(self.boundary_chars) != 2:
            raise InvalidArgument(
                f"boundary_chars must be a pair, got {self.boundary_chars!r}"
            )

    @property
    def glyphs(self) -> GlyphSet:
        return ASCII_GLYPHS if self.ascii else UNICODE_GLYPHS


SIMPLE = BarConfig(name="simple")
REGULAR = BarConfig(name="regular", show_ratio=True)
ADVANCED = BarConfig(name="advanced", show_ratio=True, show_time_stats=True)

PRESETS: Dict[str, BarConfig] = {c.name: c for c in (SIMPLE, REGULAR, ADVANCED)}


def format_percentage(progress: float) -> str:
    return f"{round(progress * 100):>3d}%"


def format_ratio(process: ProcessState) -> str:
    return f"[{process.current_step}/{process.total_steps}]"


def format_line(
    process: ProcessState,
    config: BarConfig,
    estimator: Optional[TimeEstimator] = None,
) -> str:
    """
    Compose the display line in fixed field order:
      <label  ><pct>%<left><bar><right>[<current>/<total>] <time summary>
    Fields other than percentage and bar are included per `config`.
    """
    if config.show_time_stats and estimator is None:
        raise InvalidArgument(f"Style '{config.name}' shows time stats but no estimator given")

    left, right = config.boundary_chars
    bar = render_bar(
        process.current_step, process.total_steps, config.bar_width, config.glyphs
    )

    parts = []
    if config.label:
        parts.append(config.label + LABEL_SEPARATOR)
    parts.append(format_percentage(process.progress))
    parts.append(left + bar + right)
    if config.show_ratio:
        parts.append(format_ratio(process))
    if config.show_time_stats:
        parts.append(" " + estimator.format_summary())
    return "".join(parts)
