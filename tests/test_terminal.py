import io
import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from progress_tracker.adapters.terminal import CLEAR_LINE, TerminalWriter, supports_unicode


class TtyBuffer(io.StringIO):
    def isatty(self):
        return True


class EncodedBuffer(io.StringIO):
    def __init__(self, encoding):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self):
        return self._encoding


def test_redraw_pads_shorter_lines_when_not_a_tty():
    buf = io.StringIO()
    w = TerminalWriter(buf)
    w.write_line("abcdef")
    w.write_line("xy")
    assert buf.getvalue() == "\rabcdef" + "\rxy    "


def test_redraw_clears_line_on_tty():
    buf = TtyBuffer()
    w = TerminalWriter(buf)
    w.write_line("one")
    assert buf.getvalue() == "\r" + CLEAR_LINE + "one"


def test_finish_writes_single_newline():
    buf = io.StringIO()
    w = TerminalWriter(buf)
    w.finish()
    assert buf.getvalue() == ""

    w.write_line("x")
    w.finish()
    w.finish()
    assert buf.getvalue() == "\rx\n"


def test_supports_unicode_by_encoding(monkeypatch):
    monkeypatch.delenv("PROGRESS_TRACKER_ASCII", raising=False)
    assert supports_unicode(EncodedBuffer("utf-8"))
    assert not supports_unicode(EncodedBuffer("ascii"))
    assert not supports_unicode(EncodedBuffer("latin-1"))
    assert not supports_unicode(io.StringIO())


def test_ascii_override(monkeypatch):
    monkeypatch.setenv("PROGRESS_TRACKER_ASCII", "1")
    assert not supports_unicode(EncodedBuffer("utf-8"))
