"""Piezo drum pad: detects hits and turns their strength into note velocity."""

from __future__ import annotations

import enum
from typing import Callable, Optional

from midictl.common import MidiRecorder, constrain, map_range
from midictl.timing import ElapsedTimer

ANALOG_MAX = 1023


class _Phase(enum.Enum):
    IDLE = 0
    TEST_VELOCITY = 1
    FIND_PEAK = 2
    AFTERSHOCK = 3


class Drum:
    """A drum pad read from an analog sensor.

    ``sensor`` returns the current analog reading (0-1023). Each call to
    :meth:`read` samples it once and yields a velocity when a hit is
    complete, 0 when the pad has gone quiet after a hit, and ``None``
    otherwise.
    """

    def __init__(
        self,
        sensor: Callable[[], int],
        number: int,
        sensitivity: Optional[int] = None,
        *,
        midi=None,
        channel: int = 1,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._sensor = sensor
        self.number = number
        self.midi = midi if midi is not None else MidiRecorder()
        self.channel = channel
        self.out_high = 127
        self.in_high = ANALOG_MAX
        self.wait_time = 0
        if sensitivity is None:
            self.out_low = 1
            self._threshold = 12
        else:
            # The requested sensitivity is clamped but the 90% default applies.
            constrain(sensitivity, 0, 100)
            self.out_low = 0
            self._threshold = 10
        self._sensitivity = 10
        self.upper_threshold = self._threshold + self._sensitivity
        self._is_on = False
        self._peak = 0
        self._phase = _Phase.IDLE
        self._timer = ElapsedTimer(clock=clock)

    @property
    def threshold(self) -> int:
        """Reading that counts as the start of a hit."""
        return self._threshold

    @threshold.setter
    def threshold(self, value: int) -> None:
        self._threshold = constrain(value, 0, ANALOG_MAX)

    def read(self) -> Optional[int]:
        """Sample the sensor and advance the hit detector."""
        reading = self._sensor()

        if self._phase is _Phase.TEST_VELOCITY:
            elapsed = self._timer.elapsed()
            if elapsed < 2 and reading >= self.upper_threshold:
                self._peak = reading
                self._phase = _Phase.FIND_PEAK
            elif elapsed >= 2:
                self._phase = _Phase.AFTERSHOCK
            return None

        if self._phase is _Phase.FIND_PEAK:
            if reading > self._peak:
                self._peak = reading
                return None
            if self._timer.elapsed() >= 10:
                if constrain(self._peak, self.upper_threshold, self.in_high) >= self.in_high:
                    velocity = self.out_high
                else:
                    velocity = map_range(
                        self._peak,
                        self.upper_threshold,
                        self.in_high,
                        self.out_low,
                        self.out_high,
                    )
                self._is_on = True
                self._peak = 0
                self._phase = _Phase.AFTERSHOCK
                self._timer.reset()
                return velocity
            return None

        if self._phase is _Phase.AFTERSHOCK:
            if reading > self._threshold:
                self._timer.reset()
                return None
            if self._timer.elapsed() > self.wait_time:
                self._phase = _Phase.IDLE
                if self._is_on:
                    self._is_on = False
                    return 0
            return None

        if reading >= self._threshold:
            self._phase = _Phase.TEST_VELOCITY
            self._timer.reset()
        return None

    def send(self, velocity: Optional[int] = None) -> Optional[int]:
        """Read the pad and send a note-on for any result.

        If ``velocity`` is given it is sent in place of the measured value;
        the measured value is still what is returned.
        """
        result = self.read()
        if result is not None:
            sent = result if velocity is None else velocity
            self.midi.send_note_on(self.number, sent, self.channel)
        return result

    def output_range(self, low: int, high: int) -> None:
        """Set the lowest and highest velocities produced."""
        self.out_low = constrain(low, 0, 127)
        self.out_high = constrain(high, 0, 127)

    def input_range(self, threshold: int, high: int) -> None:
        """Limit the analog input to the usable range of the sensor."""
        self.threshold = threshold
        self.in_high = constrain(high, 0, ANALOG_MAX)

    def set_sensitivity(self, sensitivity: int) -> None:
        """Set sensitivity in percent.

        At 100 every threshold crossing sounds; at 0 the reading must climb
        100 above the threshold within 2 ms of crossing it.
        """
        sensitivity = constrain(sensitivity, 0, 100)
        self._sensitivity = 100 - sensitivity
        self.upper_threshold = self._threshold + self._sensitivity