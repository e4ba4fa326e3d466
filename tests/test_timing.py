from midictl.timing import ElapsedTimer


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def test_elapsed_follows_clock():
    clock = FakeClock(1000)
    timer = ElapsedTimer(clock=clock)
    assert timer.elapsed() == 0
    delta = 37
    clock.now += delta
    assert timer.elapsed() == delta
    assert int(timer) == delta


def test_initial_value():
    clock = FakeClock(500)
    timer = ElapsedTimer(25, clock=clock)
    assert timer.elapsed() == 25


def test_reset_restarts_count():
    clock = FakeClock()
    timer = ElapsedTimer(clock=clock)
    clock.now = 90
    timer.reset()
    assert timer.elapsed() == 0
    timer.reset(5)
    assert timer.elapsed() == 5
    clock.now += 10
    assert timer.elapsed() == 5 + 10


def test_add_and_subtract_shift_count():
    clock = FakeClock(200)
    timer = ElapsedTimer(clock=clock)
    timer += 7
    assert timer.elapsed() == 7
    timer -= 3
    assert timer.elapsed() == 7 - 3


def test_default_clock_never_runs_backwards():
    timer = ElapsedTimer()
    first = timer.elapsed()
    second = timer.elapsed()
    assert 0 <= first <= second