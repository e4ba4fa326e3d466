"""Potentiometer (or any analog sensor) mapped to a MIDI control change."""

from __future__ import annotations

from typing import Callable, Optional

from midictl.common import MidiRecorder, constrain, map_range

SMOOTHING = 50
KILL = 9
OFF = 0
ANALOG_MAX = 1023


def _divider(span_in: int, span_out: int) -> int:
    """Analog steps per MIDI step; never less than 1."""
    if span_out == 0:
        return 1
    return max(1, span_in // span_out)


def _half(value: int) -> int:
    """Halve, truncating toward zero."""
    return -((-value) // 2) if value < 0 else value // 2


class Pot:
    """An analog input sent as a control change when it moves.

    ``sensor`` returns the current analog reading (0-1023). An optional
    ``kill_switch`` control number is switched on as the pot leaves its
    lowest value and off as it returns there.
    """

    def __init__(
        self,
        sensor: Callable[[], int],
        number: int,
        kill_switch: Optional[int] = None,
        *,
        midi=None,
        channel: int = 1,
    ):
        self._sensor = sensor
        self.number = number
        self.value = 0
        self.mode = kill_switch is not None
        self.kill_switch = kill_switch or 0
        self.in_low = 0
        self.in_high = ANALOG_MAX
        self.out_low = 0
        self.out_high = 127
        self.midi = midi if midi is not None else MidiRecorder()
        self.channel = channel
        self._invert = self.out_low > self.out_high
        self._divider = self._compute_divider(self._invert)
        self._buffer = 0
        self._balanced = 0

    @property
    def inverted(self) -> bool:
        """Whether the output range runs from high to low."""
        return self._invert

    def _compute_divider(self, invert: bool) -> int:
        span_out = self.out_low - self.out_high if invert else self.out_high - self.out_low
        return _divider(self.in_high - self.in_low, span_out)

    def _constrain_output(self, value: int) -> int:
        if self._invert:
            return constrain(value, self.out_high, self.out_low)
        return constrain(value, self.out_low, self.out_high)

    def read(self) -> Optional[int]:
        """Return a new control value if the input moved enough, else ``None``."""
        reading = self.smooth(self._sensor(), SMOOTHING)
        if reading >= self.in_high and self.value != self.out_high:
            self.value = self.out_high
            return self.value
        if reading <= self.in_low and self.value != self.out_low:
            self.value = self.out_low
            return self.value
        if reading % self._divider == 0:
            mapped = map_range(
                reading, self.in_low, self.in_high, self.out_low, self.out_high
            )
            mapped = self._constrain_output(mapped)
            return None if mapped == self.value else mapped
        return None

    def send(self, force: bool = False) -> Optional[int]:
        """Read the input and send any new value, with kill-switch messages.

        With ``force`` the raw reading is mapped and sent unconditionally.
        """
        if force:
            self._balanced = self._sensor()
            mapped = map_range(
                self._balanced, self.in_low, self.in_high, self.out_low, self.out_high
            )
            mapped = self._constrain_output(mapped)
            self.midi.send_control_change(self.number, mapped, self.channel)
            return mapped

        new_value = self.read()
        if (
            self.kill_switch != 0
            and self.value == self.out_low
            and new_value is not None
            and new_value > self.out_low
        ):
            self.midi.send_control_change(self.kill_switch, 127, self.channel)

        if new_value is not None:
            self.midi.send_control_change(self.number, new_value, self.channel)
            if (
                self.kill_switch != 0
                and self.value >= self.out_low
                and new_value == self.out_low
            ):
                self.midi.send_control_change(self.kill_switch, 0, self.channel)
            self.value = new_value
        return new_value

    def output_range(self, low: int, high: int) -> None:
        """Set the output limits; ``low`` above ``high`` reverses the pot."""
        self.out_low = constrain(low, 0, 127)
        self.out_high = constrain(high, 0, 127)
        self._divider = self._compute_divider(self._invert)
        self._invert = self.out_high < self.out_low

    def input_range(self, low: int, high: int) -> None:
        """Limit the analog input to the usable range of the sensor."""
        self.in_low = constrain(low, 0, ANALOG_MAX)
        self.in_high = constrain(high, 0, ANALOG_MAX)
        self._divider = self._compute_divider(not self.out_high > self.out_low)

    def set_kill_switch(self, kill: int) -> None:
        """Enable a kill-switch control number, or disable it with 0."""
        if kill == 0:
            self.mode = False
        else:
            self.mode = True
            self.kill_switch = constrain(kill, 1, 127)

    def smooth(self, value: int, noise: int) -> int:
        """Hold the reading steady until drift beyond ``noise`` accumulates."""
        difference = value - self._balanced
        if value == 0:
            self._buffer = -noise
        elif value == self._balanced:
            self._buffer = _half(self._buffer)
        else:
            self._buffer += difference

        if self._buffer * self._buffer >= noise * noise:
            self._balanced = value
            self._buffer = 0
        return self._balanced