import pytest

from tapclock.debounce import Debouncer, KeyEvent


def test_event_values_match_wire_codes():
    deb = Debouncer()
    codes = [int(deb.update(s)) for s in (1, 1, 0)]
    assert codes == [0, 2, 1]


def test_press_needs_two_samples():
    deb = Debouncer()
    assert deb.update(1) is KeyEvent.NOCHANGE
    assert deb.update(1) is KeyEvent.DOWN
    assert deb.pressed


def test_held_key_reports_nothing_more():
    deb = Debouncer()
    deb.update(True)
    deb.update(True)
    assert [deb.update(True) for _ in range(5)] == [KeyEvent.NOCHANGE] * 5


def test_release_after_press():
    deb = Debouncer()
    deb.update(1)
    deb.update(1)
    assert deb.update(0) is KeyEvent.UP
    assert not deb.pressed
    assert deb.update(0) is KeyEvent.NOCHANGE


def test_single_glitch_reports_up_without_down():
    deb = Debouncer()
    assert deb.update(1) is KeyEvent.NOCHANGE
    assert deb.update(0) is KeyEvent.UP
    assert deb.update(0) is KeyEvent.NOCHANGE


@pytest.mark.parametrize("samples", [[0, 0, 0], [False, None, 0]])
def test_idle_input_never_fires(samples):
    deb = Debouncer()
    assert {deb.update(s) for s in samples} == {KeyEvent.NOCHANGE}


def test_full_cycle_can_repeat():
    deb = Debouncer()
    events = [deb.update(s) for s in [1, 1, 0, 1, 1, 0]]
    assert events.count(KeyEvent.DOWN) == 2
    assert events.count(KeyEvent.UP) == 2