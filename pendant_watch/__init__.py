"""Pendant Watch - serial CNC pendant to keyboard bridge.

Turns jog commands from a serial pendant into synthetic key chords, or
types received lines verbatim, while the terminal can switch modes and
send G-code back to the pendant.
"""

__version__ = "0.1.0"

from .event_loop import EventLoop
from .session import Session

__all__ = [
    "EventLoop",
    "Session",
]
