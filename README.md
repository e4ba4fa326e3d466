# midictl

`midictl` holds the logic of a hardware MIDI controller. It turns readings from
physical controls into MIDI messages. The package supports switches, smoothed
potentiometers, rotary encoders and velocity-sensitive drum pads.

Each control takes its input from a plain Python callable or object, so it can
be driven by any source of readings. It hands its output to a message sink.

## Controls

All controls take keyword arguments `midi` and `channel`. `midi` is the message
sink and defaults to a new `MidiRecorder`. `channel` defaults to 1.

Each control has two methods:

- `read()` samples the input and returns a new MIDI value, or `None` when there
  is nothing to report.
- `send()` does the same and also sends the matching message.

### `midictl.switch.Switch`

`Switch(pressed, number, *options, clock=None)`

- `pressed()` returns whether the input is held.
- `options` take up to two values. One is a `SwitchMode`: `MOMENTARY`, `LATCH`,
  `TRIGGER`, `NOTE` or `DRUM`. The other is an `InputType`: `BINARY` or `TOUCH`.
- `read()` returns:
  - `out_high` when the input goes from released to pressed;
  - `out_low` when it goes from pressed to released;
  - `None` otherwise.
- If `number` is one of the real-time messages in `REAL_TIME_MESSAGES`, the
  switch sends that real-time message: `START`, `STOP`, `CONTINUE`, `CLOCK` or
  `SYSTEM_RESET`.
- `send()` returns:
  - the control number when something is switched on, or 1 for real-time
    messages;
  - `out_low` when something is switched off;
  - `None` otherwise.
- In `DRUM` mode the "on" state clears after `DRUM_HOLD_MS` milliseconds.
- `send(force=True)` sends the current state without reading the input.
- Other methods are `set_control_number`, `output_range` and `set_mode`.
  `set_mode` clamps its argument to `MOMENTARY`, `LATCH` or `TRIGGER`.

### `midictl.pot.Pot`

`Pot(sensor, number, kill_switch=None)`

- `sensor()` returns an analog reading from 0 to 1023.
- Readings are smoothed by `smooth()` using `SMOOTHING`. They are then mapped
  onto the output range and sent as control changes.
- A kill-switch control number, such as `KILL`, can be given. The pot then
  sends 127 on that control as it leaves its lowest value. It sends 0 as it
  returns there.
- The methods are `output_range`, `input_range` and `set_kill_switch`.
  `output_range` reverses the pot when `low` is above `high`.
- `send(force=True)` maps and sends the raw reading.

### `midictl.encoder.EncoderControl`

`EncoderControl(knob, number, detent_or_value=PER_DETENT)`

- `knob` is any object with `read()` and `write(value)`. It counts quadrature
  steps.
- The value moves one step each time the count reaches `detent_or_value`. That
  is either `PER_DETENT` or `PER_VALUE`.
- If `number` is `PROGRAM_CHANGE`, program changes are sent instead of control
  changes.
- The other methods are `write` and `output_range`.
- `send(force=True)` sends the current value.

### `midictl.drum.Drum`

`Drum(sensor, number, sensitivity=None, clock=None)`

- `sensor()` returns an analog reading.
- A hit starts when the reading crosses `threshold`.
- Its peak is turned into a velocity and sent as a note-on.
- When the pad has stayed below the threshold for longer than `wait_time`
  milliseconds, `read()` returns 0. `send()` then sends a note-on with
  velocity 0.
- `send(velocity)` sends a fixed velocity instead of the measured one.
- The other methods are `output_range`, `input_range` and `set_sensitivity`.

## Example

```python
from midictl.switch import Switch

states = iter([False, True, False])
button = Switch(lambda: next(states), 64)

button.send()   # 64: control change 64 = 127 on channel 1
button.send()   # 0:  control change 64 = 0
for message in button.midi:
    print(message.kind, message.number, message.value, message.channel)
```

## Messages and helpers

`midictl.common` provides the message types and two helpers.

- `MidiRecorder` is the default sink. It keeps each message as a `MidiMessage`
  tagged with a `MessageKind`. It can be iterated over and measured with
  `len()`.
- A sink of your own needs these methods:
  - `send_note_on`
  - `send_control_change`
  - `send_program_change`
  - `send_real_time`
- `constrain(value, low, high)` clamps a value to a range.
- `map_range(x, in_lo, in_hi, out_lo, out_hi)` rescales an integer linearly. It
  truncates toward zero and raises `ValueError` for an empty input range.
- `FORCE` is `True`. It reads well as `send(FORCE)`.

`midictl.timing.ElapsedTimer` counts milliseconds since it was started or reset.
Its clock can be replaced. `Drum` and `Switch` accept a `clock` argument so that
timing can be controlled in tests.

## What it does not do

`midictl` does not read pins, sensors or capacitive touch hardware. It does not
talk to a MIDI port or USB device. Readings come from the callables you pass in,
and messages go to the sink you provide.

- There is no debouncing.
- `InputType.TOUCH` is only recorded on the switch. Touch and binary inputs are
  read the same way.
- There is no command-line program.

## Installing and testing

```
pip install .
pip install .[test]
pytest
```