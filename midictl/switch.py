"""Buttons and touch pads sent as control changes, notes or real-time messages."""

from __future__ import annotations

import enum
from typing import Callable, Optional, Union

from midictl.common import MidiRecorder, constrain
from midictl.timing import ElapsedTimer

START = 0xFA
STOP = 0xFC
CONTINUE = 0xFB
CLOCK = 0xF8
SYSTEM_RESET = 0xFF

REAL_TIME_MESSAGES = frozenset({START, STOP, CONTINUE, CLOCK, SYSTEM_RESET})

DRUM_HOLD_MS = 50


class SwitchMode(enum.IntEnum):
    """How presses and releases become messages."""

    MOMENTARY = 0
    LATCH = 1
    TRIGGER = 2
    NOTE = 5
    DRUM = 6


class InputType(enum.IntEnum):
    """Kind of physical input behind the switch."""

    BINARY = 3
    TOUCH = 4


Option = Union[SwitchMode, InputType, int]


def _classify(option: Option) -> Union[SwitchMode, InputType]:
    if isinstance(option, (SwitchMode, InputType)):
        return option
    value = int(option)
    if value in SwitchMode._value2member_map_:
        return SwitchMode(value)
    if value in InputType._value2member_map_:
        return InputType(value)
    raise ValueError(f"unknown switch option: {option!r}")


class Switch:
    """A two-state input sent as MIDI.

    ``pressed`` returns whether the input is currently held. A control
    number from :data:`REAL_TIME_MESSAGES` makes the switch send that
    real-time message. Up to two options choose the :class:`SwitchMode`
    and :class:`InputType`.
    """

    def __init__(
        self,
        pressed: Callable[[], bool],
        number: int,
        *options: Option,
        midi=None,
        channel: int = 1,
        clock: Optional[Callable[[], int]] = None,
    ):
        if len(options) > 2:
            raise TypeError("at most two options (mode and input type) are accepted")
        self._pressed = pressed
        self.number = number
        self.out_low = 0
        self.out_high = 127
        self.mode = SwitchMode.MOMENTARY
        self.input_type = InputType.BINARY
        self.state = False
        self.midi = midi if midi is not None else MidiRecorder()
        self.channel = channel
        self._timer = ElapsedTimer(clock=clock)

        self._real_time = number in REAL_TIME_MESSAGES
        if self._real_time:
            self.out_high = number
            if len(options) < 2:
                self.mode = SwitchMode.TRIGGER

        for option in options:
            kind = _classify(option)
            if isinstance(kind, SwitchMode):
                self.mode = kind
            else:
                self.input_type = kind

        self.input_state = bool(self._pressed())

    @property
    def real_time(self) -> bool:
        """Whether the switch sends a real-time message."""
        return self._real_time

    def read(self) -> Optional[int]:
        """Return ``out_high`` on a press, ``out_low`` on a release, else ``None``."""
        previous = self.input_state
        self.input_state = bool(self._pressed())
        if self.input_state and not previous:
            return self.out_high
        if previous and not self.input_state:
            return self.out_low
        return None

    def _send_on(self, note: bool) -> None:
        if self._real_time:
            self.midi.send_real_time(self.out_high)
        elif note:
            self.midi.send_note_on(self.number, self.out_high, self.channel)
        else:
            self.midi.send_control_change(self.number, self.out_high, self.channel)

    def _send_off(self) -> None:
        if self._real_time:
            return
        if self.mode is SwitchMode.NOTE:
            self.midi.send_note_on(self.number, self.out_low, self.channel)
        else:
            self.midi.send_control_change(self.number, self.out_low, self.channel)

    def send(self, force: bool = False) -> Optional[int]:
        """Read the input and send whatever the mode calls for.

        Returns the control number (1 for real-time messages) when something
        is switched on, ``out_low`` when switched off, else ``None``. With
        ``force`` the current state is sent without reading the input.
        """
        if force:
            if self.state:
                if self._real_time:
                    self.midi.send_real_time(self.out_high)
                else:
                    self.midi.send_control_change(self.number, self.out_high, self.channel)
                return self.out_high
            if self._real_time:
                self.midi.send_real_time(self.out_high)
            else:
                self.midi.send_control_change(self.number, self.out_low, self.channel)
            return self.out_low

        new_value = self.read()
        on_result = 1 if self._real_time else self.number

        if new_value is not None and new_value == self.out_high:
            if not self.state:
                self._send_on(self.mode in (SwitchMode.NOTE, SwitchMode.DRUM))
                self._timer.reset()
                self.state = True
                return on_result
            if self.mode in (SwitchMode.TRIGGER, SwitchMode.DRUM):
                self._send_on(self.mode is SwitchMode.DRUM)
                return on_result
            self._send_off()
            self.state = False
            return self.out_low

        if (
            new_value is not None
            and new_value == self.out_low
            and self.mode in (SwitchMode.MOMENTARY, SwitchMode.NOTE)
        ):
            self._send_off()
            self.state = False
            return self.out_low

        if (
            self.state
            and self.mode is SwitchMode.DRUM
            and self._timer.elapsed() > DRUM_HOLD_MS
        ):
            self.state = False
        return None

    def set_control_number(self, number: int) -> None:
        """Change the control number; real-time numbers also set ``out_high``."""
        if number in REAL_TIME_MESSAGES:
            self.number = self.out_high = number
            self.out_low = 0
        else:
            self.number = number
            if self.out_high in REAL_TIME_MESSAGES:
                self.out_high = 127

    def output_range(self, low: int, high: int) -> None:
        """Set the values sent for off and on."""
        self.out_low = constrain(low, 0, 127)
        self.out_high = constrain(high, 0, 127)

    def set_mode(self, mode: int) -> None:
        """Set MOMENTARY, LATCH or TRIGGER; other values are clamped to those."""
        self.mode = SwitchMode(constrain(int(mode), 0, 2))