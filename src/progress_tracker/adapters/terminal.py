from __future__ import annotations
import os
import sys
from typing import Optional, TextIO

from progress_tracker.core.bar import UNICODE_GLYPHS

CLEAR_LINE = "\x1b[2K"


def supports_unicode(stream: TextIO) -> bool:
    """True when `stream` can display the block glyphs (PROGRESS_TRACKER_ASCII=1 forces ASCII)."""
    if os.getenv("PROGRESS_TRACKER_ASCII", "0") == "1":
        return False
    encoding = getattr(stream, "encoding", None)
    if not encoding:
        return False
    try:
        (UNICODE_GLYPHS.full + "".join(UNICODE_GLYPHS.partials)).encode(encoding)
    except (LookupError, UnicodeEncodeError):
        return False
    return True


class TerminalWriter:
    """Redraws a single status line in place using carriage returns."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._last_len = 0
        self._open = False

    def is_tty(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def write_line(self, line: str) -> None:
        if self.is_tty():
            out = "\r" + CLEAR_LINE + line
        else:
            out = "\r" + line + " " * max(0, self._last_len - len(line))
        self.stream.write(out)
        self.stream.flush()
        self._last_len = len(line)
        self._open = True

    def finish(self) -> None:
        if not self._open:
            return
        self.stream.write("\n")
        self.stream.flush()
        self._open = False
        self._last_len = 0
