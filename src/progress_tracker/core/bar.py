from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from progress_tracker.core.errors import InvalidArgument


@dataclass(frozen=True)
class GlyphSet:
    full: str
    empty: str
    # ordered from emptiest to fullest partial cell
    partials: Tuple[str, ...] = ()

    @property
    def subdivisions(self) -> int:
        return len(self.partials) + 1


UNICODE_GLYPHS = GlyphSet(
    full="█",
    empty=" ",
    partials=(
        "▏",
        "▎",
        "▍",
        "▌",
        "▋",
        "▊",
        "▉",
    ),
)

ASCII_GLYPHS = GlyphSet(full="#", empty="-")


def render_bar(
    current: int, total: int, width: int, glyphs: GlyphSet = UNICODE_GLYPHS
) -> str:
    """
    Render `current/total` as a bar of exactly `width` cells.

    Each cell is split into `glyphs.subdivisions` units; the last filled cell
    uses a partial glyph when the fill does not end on a cell boundary.
    Progress beyond `total` fills the bar but never widens it.
    """
    if total <= 0:
        raise InvalidArgument(f"Invalid total for bar rendering: {total}")
    if current < 0:
        raise InvalidArgument(f"Invalid current step for bar rendering: {current}")
    if width < 0:
        raise InvalidArgument(f"Invalid bar width: {width}")

    sub = glyphs.subdivisions
    units = min(current * width * sub // total, width * sub)
    full, rem = divmod(units, sub)

    bar = glyphs.full * full
    used = full
    if rem:
        bar += glyphs.partials[rem - 1]
        used += 1
    return bar + glyphs.empty * (width - used)
