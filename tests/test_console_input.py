"""Tests for terminal key decoding and polling."""

import os

import pytest

from pendant_watch.console_input import ConsoleKeyReader, decode_key
from pendant_watch.types import KeyKind, KeyPress


class TestDecodeKey:
    """Test decode_key."""

    @pytest.mark.parametrize("ch", ["\r", "\n"])
    def test_enter(self, ch):
        assert decode_key(ch) == KeyPress(KeyKind.ENTER)

    @pytest.mark.parametrize("ch", ["\x7f", "\x08"])
    def test_backspace(self, ch):
        assert decode_key(ch) == KeyPress(KeyKind.BACKSPACE)

    @pytest.mark.parametrize("ch", ["G", "1", "q", " ", "é", "-"])
    def test_printable(self, ch):
        assert decode_key(ch) == KeyPress(KeyKind.CHAR, ch)

    @pytest.mark.parametrize("ch", ["\x03", "\t", "\x1b", ""])
    def test_other(self, ch):
        assert decode_key(ch).kind is KeyKind.OTHER


class PipeStream:
    """Minimal stdin stand-in backed by a pipe."""

    def __init__(self, fd):
        self.fd = fd

    def fileno(self):
        return self.fd

    def isatty(self):
        return False


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.mark.skipif(os.name == "nt", reason="POSIX terminal polling")
class TestPosixPolling:
    """Test ConsoleKeyReader against a pipe."""

    def test_timeout_returns_none(self, pipe):
        reader = ConsoleKeyReader(PipeStream(pipe[0]))
        assert reader.poll(0) is None

    def test_reads_one_key_at_a_time(self, pipe):
        r, w = pipe
        os.write(w, b"G\r")
        reader = ConsoleKeyReader(PipeStream(r))

        assert reader.poll(0.1) == KeyPress.of("G")
        assert reader.poll(0.1) == KeyPress(KeyKind.ENTER)
        assert reader.poll(0) is None

    def test_multibyte_character(self, pipe):
        r, w = pipe
        os.write(w, "é".encode("utf-8"))
        reader = ConsoleKeyReader(PipeStream(r))

        assert reader.poll(0.1) == KeyPress.of("é")

    def test_escape_sequence_is_swallowed(self, pipe):
        r, w = pipe
        os.write(w, b"\x1b[A")
        reader = ConsoleKeyReader(PipeStream(r))

        assert reader.poll(0.1) == KeyPress(KeyKind.OTHER)
        assert reader.poll(0) is None

    def test_eof(self, pipe):
        r, w = pipe
        os.close(w)
        reader = ConsoleKeyReader(PipeStream(r))

        assert reader.poll(0.1) is None
        assert reader.poll(0) is None

    def test_non_tty_context_is_noop(self, pipe):
        with ConsoleKeyReader(PipeStream(pipe[0])) as reader:
            assert reader.poll(0) is None
