import pytest

from midictl.common import MessageKind, MidiMessage, MidiRecorder
from midictl.switch import START, STOP, InputType, Switch, SwitchMode


class Button:
    def __init__(self):
        self.down = False

    def __call__(self):
        return self.down


class Clock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


@pytest.fixture
def button():
    return Button()


def cc(number, value, channel=1):
    return MidiMessage(MessageKind.CONTROL_CHANGE, number, value, channel)


def test_momentary_press_and_release(button):
    midi = MidiRecorder()
    sw = Switch(button, 20, midi=midi)
    button.down = True
    assert sw.send() == 20
    assert sw.state is True
    button.down = False
    assert sw.send() == 0
    assert sw.state is False
    assert midi.messages == [cc(20, 127), cc(20, 0)]


def test_no_change_sends_nothing(button):
    midi = MidiRecorder()
    sw = Switch(button, 20, midi=midi)
    assert sw.send() is None
    assert len(midi) == 0


def test_latch_toggles_on_each_press(button):
    midi = MidiRecorder()
    sw = Switch(button, 20, SwitchMode.LATCH, midi=midi)
    button.down = True
    assert sw.send() == 20
    button.down = False
    assert sw.send() is None
    assert sw.state is True
    button.down = True
    assert sw.send() == 0
    assert sw.state is False
    assert midi.messages == [cc(20, 127), cc(20, 0)]


def test_trigger_sends_high_on_every_press(button):
    midi = MidiRecorder()
    sw = Switch(button, 20, SwitchMode.TRIGGER, midi=midi)
    for _ in range(2):
        button.down = True
        assert sw.send() == 20
        button.down = False
        assert sw.send() is None
    assert midi.messages == [cc(20, 127), cc(20, 127)]


def test_real_time_switch(button):
    midi = MidiRecorder()
    sw = Switch(button, START, midi=midi)
    assert sw.real_time
    assert sw.mode is SwitchMode.TRIGGER
    button.down = True
    assert sw.send() == 1
    button.down = False
    sw.send()
    button.down = True
    assert sw.send() == 1
    assert midi.messages == [MidiMessage(MessageKind.REAL_TIME, START)] * 2


def test_note_mode_sends_note_on_and_zero_velocity(button):
    midi = MidiRecorder()
    sw = Switch(button, 60, SwitchMode.NOTE, midi=midi)
    button.down = True
    sw.send()
    button.down = False
    sw.send()
    assert midi.messages == [
        MidiMessage(MessageKind.NOTE_ON, 60, 127, 1),
        MidiMessage(MessageKind.NOTE_ON, 60, 0, 1),
    ]


def test_drum_mode_clears_state_after_hold_time(button):
    midi = MidiRecorder()
    clock = Clock()
    sw = Switch(button, 38, SwitchMode.DRUM, midi=midi, clock=clock)
    button.down = True
    assert sw.send() == 38
    clock.now = 51
    assert sw.send() is None
    assert sw.state is False
    button.down = False
    assert sw.send() is None
    button.down = True
    assert sw.send() == 38
    assert [m.kind for m in midi] == [MessageKind.NOTE_ON, MessageKind.NOTE_ON]


def test_forced_send_reports_state(button):
    midi = MidiRecorder()
    sw = Switch(button, 20, midi=midi)
    assert sw.send(force=True) == 0
    sw.state = True
    assert sw.send(force=True) == 127
    assert midi.messages == [cc(20, 0), cc(20, 127)]


def test_forced_real_time_ignores_state(button):
    midi = MidiRecorder()
    sw = Switch(button, STOP, midi=midi)
    sw.send(force=True)
    assert midi.messages == [MidiMessage(MessageKind.REAL_TIME, STOP)]


def test_two_options_set_mode_and_input(button):
    sw = Switch(button, START, SwitchMode.LATCH, InputType.TOUCH)
    assert sw.mode is SwitchMode.LATCH
    assert sw.input_type is InputType.TOUCH
    assert sw.out_high == START


def test_real_time_with_input_types_only_stays_momentary(button):
    sw = Switch(button, START, InputType.BINARY, InputType.TOUCH)
    assert sw.mode is SwitchMode.MOMENTARY
    assert sw.input_type is InputType.TOUCH


def test_integer_options_are_accepted(button):
    sw = Switch(button, 20, 1)
    assert sw.mode is SwitchMode.LATCH


def test_unknown_option_rejected(button):
    with pytest.raises(ValueError):
        Switch(button, 20, 99)


def test_too_many_options_rejected(button):
    with pytest.raises(TypeError):
        Switch(button, 20, SwitchMode.LATCH, InputType.TOUCH, SwitchMode.NOTE)


def test_set_control_number_real_time_and_back(button):
    sw = Switch(button, 20)
    sw.set_control_number(START)
    assert (sw.number, sw.out_high, sw.out_low) == (START, START, 0)
    sw.set_control_number(21)
    assert (sw.number, sw.out_high) == (21, 127)


def test_set_mode_clamps(button):
    sw = Switch(button, 20)
    sw.set_mode(6)
    assert sw.mode is SwitchMode.TRIGGER
    sw.set_mode(-1)
    assert sw.mode is SwitchMode.MOMENTARY


def test_output_range_clamps_and_is_used(button):
    midi = MidiRecorder()
    sw = Switch(button, 20, midi=midi)
    sw.output_range(-4, 100)
    assert (sw.out_low, sw.out_high) == (0, 100)
    button.down = True
    sw.send()
    assert midi.messages == [cc(20, 100)]


def test_input_held_at_start_is_not_a_press(button):
    button.down = True
    sw = Switch(button, 20)
    assert sw.read() is None
    assert sw.input_state is True