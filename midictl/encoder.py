"""Rotary encoder that steps a MIDI control or program value up and down."""

from __future__ import annotations

from typing import Optional, Protocol

from midictl.common import MidiRecorder, constrain

PER_VALUE = 1
PER_DETENT = 4
PROGRAM_CHANGE = 0xC0


class Knob(Protocol):
    """Quadrature counter: ``read`` gives the count, ``write`` sets it."""

    def read(self) -> int: ...

    def write(self, value: int) -> None: ...


class EncoderControl:
    """A control value moved one step per detent (or per count) of a knob.

    If ``number`` is :data:`PROGRAM_CHANGE` the control sends program
    changes instead of control changes.
    """

    def __init__(
        self,
        knob: Knob,
        number: int,
        detent_or_value: int = PER_DETENT,
        *,
        midi=None,
        channel: int = 1,
    ):
        self.knob = knob
        self.number = number
        self.detent_or_value = detent_or_value
        self.value = 0
        self.out_low = 0
        self.out_high = 127
        self.midi = midi if midi is not None else MidiRecorder()
        self.channel = channel

    def read(self) -> Optional[int]:
        """Step the value if the knob has turned far enough; return it or ``None``."""
        count = self.knob.read()
        if count >= self.detent_or_value:
            self.knob.write(0)
            if self.value < self.out_high:
                self.value += 1
                return self.value
            return None
        if count <= -self.detent_or_value:
            self.knob.write(0)
            if self.value > self.out_low:
                self.value -= 1
                return self.value
            return None
        return None

    def send(self, force: bool = False) -> Optional[int]:
        """Read the knob and send any new value.

        With ``force`` the current value is sent as a control change without
        reading the knob.
        """
        if force:
            self.midi.send_control_change(self.number, self.value, self.channel)
            return self.value
        new_value = self.read()
        if new_value is not None:
            self.value = new_value
            if self.number == PROGRAM_CHANGE:
                self.midi.send_program_change(self.value, self.channel)
            else:
                self.midi.send_control_change(self.number, new_value, self.channel)
        return new_value

    def write(self, value: int) -> None:
        """Set the value directly, kept within the output range."""
        self.value = constrain(value, self.out_low, self.out_high)

    def output_range(self, low: int, high: int) -> None:
        """Set the lowest and highest values produced."""
        self.out_low = constrain(low, 0, 127)
        self.out_high = constrain(high, 0, 127)