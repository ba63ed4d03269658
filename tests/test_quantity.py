"""
Tests for the debounced quantity control.
"""
from sweet_moment.services.diagnostics import INVALID_QUANTITY_RESET
from sweet_moment.services.quantity import QuantityControl
from tests.helpers import FakeClock


def _control(clock, **kwargs):
    return QuantityControl(guard_ms=200, clock=clock, **kwargs)


def test_increase_and_decrease():
    clock = FakeClock()
    control = _control(clock)
    assert control.increase() is True
    clock.advance(250)
    assert control.increase() is True
    clock.advance(250)
    assert control.decrease() is True
    assert control.quantity == 2


def test_double_tap_counts_once():
    clock = FakeClock()
    control = _control(clock)
    assert control.increase() is True
    clock.advance(50)
    assert control.increase() is False
    assert control.quantity == 2


def test_dropped_trigger_is_not_replayed():
    clock = FakeClock()
    control = _control(clock)
    control.increase()
    control.increase()
    clock.advance(1000)
    assert control.quantity == 2


def test_guard_is_shared_between_directions():
    clock = FakeClock()
    control = _control(clock, initial=3)
    control.increase()
    assert control.decrease() is False
    assert control.quantity == 4


def test_floor_is_one():
    control = _control(FakeClock())
    assert control.decrease() is False
    assert control.quantity == 1


def test_cap_is_maximum():
    control = _control(FakeClock(), initial=5, maximum=5)
    assert control.increase() is False
    assert control.quantity == 5


def test_set_is_not_debounced():
    clock = FakeClock()
    control = _control(clock)
    control.increase()
    assert control.set(7) == 7
    assert control.set("9") == 9


def test_set_clamps_to_range():
    control = _control(FakeClock(), maximum=10)
    assert control.set(0) == 1
    assert control.set(-4) == 1
    assert control.set(50) == 10


def test_invalid_value_resets_to_one(recorder):
    control = _control(FakeClock(), initial=4, recorder=recorder)
    assert control.set("lots") == 1
    assert recorder.codes() == [INVALID_QUANTITY_RESET]


def test_invalid_initial_value(recorder):
    control = _control(FakeClock(), initial=None, recorder=recorder)
    assert control.quantity == 1
    assert recorder.codes() == [INVALID_QUANTITY_RESET]
