"""
Event types carried from producers to the EventLoop.

The channel carries exactly one of:
- KeyPress: a key read from the keyboard source
- ProgressTick: a new absolute progress value from the timer
- Fatal: a producer failure that must end the loop
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class KeyPress:
    """A single key press; code is the raw character or escape sequence."""

    code: str


@dataclass(frozen=True)
class ProgressTick:
    """Absolute progress value emitted by the ProgressProducer."""

    value: float


@dataclass(frozen=True)
class Fatal:
    """Producer failure forwarded so the loop can restore the terminal."""

    reason: str


Event = Union[KeyPress, ProgressTick, Fatal]
