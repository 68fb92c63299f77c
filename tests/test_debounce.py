import time

from clamp_explorer.debounce import Debouncer, Throttle


def test_debouncer_keeps_only_the_latest_call():
    calls = []
    debouncer = Debouncer(calls.append, 0.05)
    debouncer.call(1)
    debouncer.call(2)
    debouncer.call(3)
    time.sleep(0.3)
    assert calls == [3]
    assert not debouncer.pending


def test_flush_runs_pending_call_now():
    calls = []
    debouncer = Debouncer(calls.append, 60)
    debouncer.call("a")
    assert debouncer.pending
    debouncer.flush()
    assert calls == ["a"]
    debouncer.flush()
    assert calls == ["a"]


def test_cancel_drops_pending_call():
    calls = []
    debouncer = Debouncer(calls.append, 0.05)
    debouncer.call("late")
    debouncer.cancel()
    time.sleep(0.2)
    assert calls == []


def test_instances_do_not_share_timers():
    first, second = [], []
    a = Debouncer(first.append, 60)
    b = Debouncer(second.append, 60)
    a.call(1)
    b.call(2)
    a.cancel()
    b.flush()
    assert first == []
    assert second == [2]


def test_throttle_runs_leading_call_and_defers_the_rest():
    calls = []
    throttle = Throttle(calls.append, 5)
    throttle.call(1)
    throttle.call(2)
    throttle.call(3)
    assert calls == [1]
    throttle.flush()
    assert calls == [1, 3]
    throttle.cancel()
