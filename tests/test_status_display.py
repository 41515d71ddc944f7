"""Tests for status bar formatting."""

import io

import pytest

from pendant_watch.status_display import (
    CLEAR_SCREEN,
    TerminalStatusDisplay,
    format_elapsed,
    format_status_line,
    render_lines,
    truncate_command,
)
from pendant_watch.types import Mode, StatusSnapshot


def snapshot(**overrides):
    values = dict(
        mode=Mode.GCODE,
        connected=True,
        last_command=None,
        elapsed=None,
        pending_outbound_text="",
        last_error=None,
    )
    values.update(overrides)
    return StatusSnapshot(**values)


class TestFormatting:
    """Test the individual fields."""

    def test_truncate_short(self):
        assert truncate_command("G91G0X1") == "G91G0X1"

    def test_truncate_exactly_twenty(self):
        assert truncate_command("x" * 20) == "x" * 20

    def test_truncate_long(self):
        assert truncate_command("Typed: G1 X100 Y200 F3000") == "Typed: G1 X100 Y2..."

    def test_truncate_none(self):
        assert truncate_command(None) == "None"

    @pytest.mark.parametrize(
        "seconds,expected",
        [(None, "N/A"), (0.4, "0s"), (59.9, "59s"), (60, "1m0s"), (125, "2m5s")],
    )
    def test_elapsed(self, seconds, expected):
        assert format_elapsed(seconds) == expected

    def test_status_line(self):
        line = format_status_line(
            snapshot(mode=Mode.ARROW, connected=False, last_command="G91G0Y1", elapsed=3)
        )
        assert line == "│ Connected: No │ Last: G91G0Y1 │ Time: 3s │ Mode: Arrow │"


class TestRenderLines:
    """Test mode-specific instructions."""

    def test_gcode_mode_shows_input(self):
        lines = render_lines(snapshot(pending_outbound_text="G0X"))

        assert "Current input: G0X" in lines
        assert any(line.startswith("Gcode Mode:") for line in lines)

    def test_arrow_mode_hides_input(self):
        lines = render_lines(snapshot(mode=Mode.ARROW, pending_outbound_text="G0X"))

        assert not any(line.startswith("Current input") for line in lines)
        assert any(line.startswith("Arrow Mode:") for line in lines)

    def test_error_line(self):
        lines = render_lines(snapshot(last_error="Serial port is not open"))
        assert "Error: Serial port is not open" in lines


class TestTerminalStatusDisplay:
    def test_writes_crlf_after_clear(self):
        out = io.StringIO()
        TerminalStatusDisplay(out).render(snapshot())
        text = out.getvalue()

        assert text.startswith(CLEAR_SCREEN)
        assert "\r\n" in text
        assert "Mode: Gcode" in text

    def test_without_clear(self):
        out = io.StringIO()
        TerminalStatusDisplay(out, clear=False).render(snapshot())
        assert not out.getvalue().startswith(CLEAR_SCREEN)
