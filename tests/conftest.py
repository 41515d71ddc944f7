"""Shared fakes for the pendant bridge tests."""

import logging
from collections import deque

import pytest

from pendant_watch.event_loop import EventLoop
from pendant_watch.key_injection import RecordingInjectionSink
from pendant_watch.session import Session
from pendant_watch.types import KeyKind, KeyPress
from pendant_watch.utils.exceptions import SerialReadError, SerialWriteError


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeLink:
    """In-memory LineChannel."""

    def __init__(self, lines=()):
        self.lines = deque(lines)
        self.written = []
        self.fail_write = False
        self.fail_read = False
        self.reads = 0

    def read_line(self):
        self.reads += 1
        if self.fail_read:
            raise SerialReadError("Serial read error: device unplugged")
        if self.lines:
            return self.lines.popleft()
        return None

    def write_line(self, text):
        if self.fail_write:
            raise SerialWriteError(f"Failed to send {text!r}: write timeout")
        self.written.append(text + "\n")

    def is_connected(self):
        return True


class ScriptedKeys:
    """KeyReader that replays a fixed list of key presses."""

    def __init__(self, keys=()):
        self.keys = deque(keys)
        self.polls = 0

    def poll(self, timeout):
        self.polls += 1
        if self.keys:
            return self.keys.popleft()
        return None


class RecordingDisplay:
    def __init__(self):
        self.snapshots = []

    def render(self, snapshot):
        self.snapshots.append(snapshot)


def typed(text):
    """Key presses for typing ``text``."""
    return [KeyPress.of(ch) for ch in text]


ENTER = KeyPress(KeyKind.ENTER)
BACKSPACE = KeyPress(KeyKind.BACKSPACE)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return Session(connected=True, clock=clock)


@pytest.fixture
def sink():
    return RecordingInjectionSink()


@pytest.fixture
def link():
    return FakeLink()


@pytest.fixture
def keys():
    return ScriptedKeys()


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def loop(session, link, keys, sink, display):
    return EventLoop(session, link, keys, sink, display, key_poll_timeout=0)


@pytest.fixture
def clean_logging():
    """Detach handlers that setup_logging attaches to module-level loggers."""
    yield
    for name in ("pendant_watch", "pendant_watch.serial"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
