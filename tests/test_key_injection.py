"""Tests for chord synthesis, text typing and sinks."""

import sys
import types

import pytest

from pendant_watch import key_injection
from pendant_watch.key_injection import (
    PynputInjectionSink,
    RecordingInjectionSink,
    chord_for_command,
    create_sink,
    direction_key,
    press_key,
    send_chord,
    type_text,
)
from pendant_watch.types import Axis, KeyChord, MovementCommand, VirtualKey
from pendant_watch.utils.exceptions import InjectionError, InjectionUnavailableError

DIRECTION_CASES = [
    (Axis.Y, 1.0, VirtualKey.UP),
    (Axis.Y, -1.0, VirtualKey.DOWN),
    (Axis.X, 1.0, VirtualKey.RIGHT),
    (Axis.X, -1.0, VirtualKey.LEFT),
    (Axis.Z, 1.0, VirtualKey.PAGE_UP),
    (Axis.Z, -1.0, VirtualKey.PAGE_DOWN),
]


class TestDirectionKey:
    """Test the axis/sign direction table."""

    @pytest.mark.parametrize("axis,magnitude,expected", DIRECTION_CASES)
    def test_table(self, axis, magnitude, expected):
        assert direction_key(MovementCommand(axis, magnitude)) == expected

    @pytest.mark.parametrize(
        "axis,expected",
        [(Axis.X, VirtualKey.LEFT), (Axis.Y, VirtualKey.DOWN), (Axis.Z, VirtualKey.PAGE_DOWN)],
    )
    def test_zero_magnitude_is_non_positive(self, axis, expected):
        assert direction_key(MovementCommand(axis, 0.0)) == expected


class TestSendChord:
    """Test chord ordering through the recording sink."""

    @pytest.mark.parametrize("axis,magnitude,expected", DIRECTION_CASES)
    def test_modifier_strictly_encloses_key(self, axis, magnitude, expected):
        sink = RecordingInjectionSink()
        send_chord(sink, chord_for_command(MovementCommand(axis, magnitude)))

        assert sink.events == [
            ("key_down", VirtualKey.CONTROL),
            ("key_down", expected),
            ("key_up", expected),
            ("key_up", VirtualKey.CONTROL),
        ]

    def test_alternate_modifier(self):
        sink = RecordingInjectionSink()
        chord = chord_for_command(MovementCommand(Axis.X, 2.0), VirtualKey.SHIFT)
        send_chord(sink, chord)

        assert [e[1] for e in sink.events] == [
            VirtualKey.SHIFT,
            VirtualKey.RIGHT,
            VirtualKey.RIGHT,
            VirtualKey.SHIFT,
        ]

    def test_bare_key_without_modifier(self):
        sink = RecordingInjectionSink()
        send_chord(sink, KeyChord(VirtualKey.UP))

        assert sink.events == [("key_down", VirtualKey.UP), ("key_up", VirtualKey.UP)]

    @pytest.mark.parametrize("failing", ["key_down", "key_up"])
    def test_modifier_released_when_direction_key_fails(self, failing):
        class FailingSink(RecordingInjectionSink):
            def _record(self, name, value):
                if name == failing and value is VirtualKey.RIGHT:
                    raise InjectionError("rejected", event=name)
                super()._record(name, value)

        sink = FailingSink()
        with pytest.raises(InjectionError):
            send_chord(sink, KeyChord(VirtualKey.RIGHT, VirtualKey.CONTROL))

        assert sink.events[0] == ("key_down", VirtualKey.CONTROL)
        assert sink.events[-1] == ("key_up", VirtualKey.CONTROL)


class TestTypeText:
    """Test literal text typing."""

    def test_characters_then_enter(self):
        sink = RecordingInjectionSink()
        type_text(sink, "G0 X1")

        chars = [e for e in sink.events if e[0].startswith("char")]
        assert chars == [
            ("char_down", "G"), ("char_up", "G"),
            ("char_down", "0"), ("char_up", "0"),
            ("char_down", " "), ("char_up", " "),
            ("char_down", "X"), ("char_up", "X"),
            ("char_down", "1"), ("char_up", "1"),
        ]
        assert sink.events[-2:] == [("key_down", VirtualKey.ENTER), ("key_up", VirtualKey.ENTER)]

    def test_empty_text_only_presses_enter(self):
        sink = RecordingInjectionSink()
        type_text(sink, "")

        assert sink.events == [("key_down", VirtualKey.ENTER), ("key_up", VirtualKey.ENTER)]

    def test_press_key(self):
        sink = RecordingInjectionSink()
        press_key(sink, VirtualKey.PAGE_UP)

        assert sink.events == [("key_down", VirtualKey.PAGE_UP), ("key_up", VirtualKey.PAGE_UP)]


class TestRecordingInjectionSink:
    """Test the recording sink itself."""

    def test_max_events_keeps_latest(self):
        sink = RecordingInjectionSink(max_events=2)
        type_text(sink, "ab")

        assert sink.events == [("key_down", VirtualKey.ENTER), ("key_up", VirtualKey.ENTER)]

    def test_clear(self):
        sink = RecordingInjectionSink()
        press_key(sink, VirtualKey.UP)
        sink.clear()

        assert sink.events == []

    def test_create_sink_dry_run(self):
        assert isinstance(create_sink(dry_run=True), RecordingInjectionSink)


def _fake_pynput(monkeypatch):
    """Install a minimal ``pynput.keyboard`` module for the duration of a test."""
    key_ns = types.SimpleNamespace(
        **{name: f"Key.{name}" for name in (
            "up", "down", "left", "right", "page_up", "page_down",
            "ctrl", "alt", "shift", "enter",
        )}
    )
    keyboard_mod = types.ModuleType("pynput.keyboard")
    keyboard_mod.Key = key_ns
    keyboard_mod.Controller = object
    pynput_mod = types.ModuleType("pynput")
    pynput_mod.keyboard = keyboard_mod
    monkeypatch.setitem(sys.modules, "pynput", pynput_mod)
    monkeypatch.setitem(sys.modules, "pynput.keyboard", keyboard_mod)


class FakeController:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def press(self, key):
        if self.fail:
            raise ValueError("invalid key")
        self.calls.append(("press", key))

    def release(self, key):
        self.calls.append(("release", key))


class TestPynputInjectionSink:
    """Test the pynput sink with a stand-in controller."""

    def test_chord_maps_to_controller_calls(self, monkeypatch):
        _fake_pynput(monkeypatch)
        controller = FakeController()
        sink = PynputInjectionSink(controller=controller)

        send_chord(sink, chord_for_command(MovementCommand(Axis.Z, 1.0)))

        assert controller.calls == [
            ("press", "Key.ctrl"),
            ("press", "Key.page_up"),
            ("release", "Key.page_up"),
            ("release", "Key.ctrl"),
        ]

    def test_characters_pass_through(self, monkeypatch):
        _fake_pynput(monkeypatch)
        controller = FakeController()
        sink = PynputInjectionSink(controller=controller)

        type_text(sink, "é")

        assert controller.calls == [
            ("press", "é"),
            ("release", "é"),
            ("press", "Key.enter"),
            ("release", "Key.enter"),
        ]

    def test_backend_failure_raises_injection_error(self, monkeypatch):
        _fake_pynput(monkeypatch)
        sink = PynputInjectionSink(controller=FakeController(fail=True))

        with pytest.raises(InjectionError) as exc_info:
            sink.char_down("x")
        assert exc_info.value.event == "char_down"

    def test_missing_backend_is_unavailable(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "pynput", None)

        with pytest.raises(InjectionUnavailableError):
            key_injection.PynputInjectionSink()
