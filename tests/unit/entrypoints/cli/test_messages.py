"""Unit tests for `metriq.entrypoints.cli.helpers.messages`.

Glyphs follow whatever encoding Click reports for stderr at call time, and
every message goes to stderr so stdout stays valid JSON.
"""

import io
import sys

import click
import pytest

from metriq.entrypoints.cli.helpers.messages import (
    caution_glyph,
    error,
    error_glyph,
    success,
    success_glyph,
    warn,
)


class EncodedTTY(io.StringIO):
    """A TTY-like text stream with a chosen encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        return self._encoding

    def isatty(self) -> bool:
        return True


@pytest.fixture
def stderr_as(monkeypatch):
    """Point Click's stderr probe and sys.stderr at one EncodedTTY."""

    def _use(encoding: str) -> EncodedTTY:
        stream = EncodedTTY(encoding)
        monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
        monkeypatch.setattr(sys, "stderr", stream, raising=False)
        monkeypatch.delenv("NO_COLOR", raising=False)
        return stream

    return _use


@pytest.mark.parametrize(
    ("encoding", "glyphs"),
    [
        ("ascii", ("[!]", "[OK]", "[X]")),
        ("utf-8", ("⚠️", "✅", "❌")),
    ],
)
def test_glyphs_follow_stderr_encoding(stderr_as, encoding, glyphs):
    stderr_as(encoding)
    assert (caution_glyph(), success_glyph(), error_glyph()) == glyphs


def test_encoding_is_checked_on_every_call(stderr_as):
    stderr_as("ascii")
    assert caution_glyph() == "[!]"
    stderr_as("utf-8")
    assert caution_glyph() == "⚠️"


@pytest.mark.parametrize(
    ("func", "glyph", "color"),
    [
        (warn, "[!]", "\x1b[33m"),
        (success, "[OK]", "\x1b[32m"),
        (error, "[X]", "\x1b[31m"),
    ],
)
def test_messages_are_styled_lines_on_stderr(stderr_as, capsys, func, glyph, color):
    stream = stderr_as("ascii")
    func("account deleted")

    written = stream.getvalue()
    assert f"{glyph}  account deleted" in written
    assert color in written
    assert "\x1b[1m" in written  # bold
    assert capsys.readouterr().out == ""
