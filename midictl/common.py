"""Shared helpers: value clamping, range mapping and MIDI message recording."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional

FORCE = True


def constrain(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def map_range(x: int, in_lo: int, in_hi: int, out_lo: int, out_hi: int) -> int:
    """Linearly map ``x`` from one integer range to another.

    Uses integer arithmetic that truncates toward zero, so results match
    the usual microcontroller ``map`` helper.
    """
    if in_lo == in_hi:
        raise ValueError("input range must not be empty")
    numerator = (x - in_lo) * (out_hi - out_lo)
    denominator = in_hi - in_lo
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient + out_lo


class MessageKind(enum.Enum):
    """Kinds of MIDI message the controls emit."""

    NOTE_ON = "note_on"
    CONTROL_CHANGE = "control_change"
    PROGRAM_CHANGE = "program_change"
    REAL_TIME = "real_time"


@dataclass(frozen=True)
class MidiMessage:
    """One outgoing MIDI message."""

    kind: MessageKind
    number: int
    value: Optional[int] = None
    channel: Optional[int] = None


@dataclass
class MidiRecorder:
    """A MIDI output that keeps every message it is asked to send."""

    messages: list[MidiMessage] = field(default_factory=list)

    def send_note_on(self, number: int, velocity: int, channel: int) -> None:
        self.messages.append(
            MidiMessage(MessageKind.NOTE_ON, number, velocity, channel)
        )

    def send_control_change(self, number: int, value: int, channel: int) -> None:
        self.messages.append(
            MidiMessage(MessageKind.CONTROL_CHANGE, number, value, channel)
        )

    def send_program_change(self, program: int, channel: int) -> None:
        self.messages.append(
            MidiMessage(MessageKind.PROGRAM_CHANGE, program, None, channel)
        )

    def send_real_time(self, message: int) -> None:
        self.messages.append(MidiMessage(MessageKind.REAL_TIME, message))

    def __iter__(self) -> Iterator[MidiMessage]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)