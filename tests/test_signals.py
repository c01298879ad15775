from __future__ import annotations

from typing import List

from nav_state.signals import REVISION_MODULUS, ChangeBus, next_revision


def test_emit_runs_observers_in_order() -> None:
    bus: ChangeBus[int] = ChangeBus()
    calls: List[str] = []
    bus.subscribe(lambda payload: calls.append(f"a{payload}"))
    bus.subscribe(lambda payload: calls.append(f"b{payload}"))

    bus.emit(1)

    assert calls == ["a1", "b1"]


def test_observer_may_unsubscribe_during_emit() -> None:
    bus: ChangeBus[int] = ChangeBus()
    calls: List[int] = []
    unsubscribe = bus.subscribe(lambda payload: unsubscribe())
    bus.subscribe(calls.append)

    bus.emit(1)
    bus.emit(2)

    assert calls == [1, 2]
    assert len(bus) == 1


def test_unsubscribe_is_idempotent() -> None:
    bus: ChangeBus[int] = ChangeBus()
    unsubscribe = bus.subscribe(lambda payload: None)

    unsubscribe()
    unsubscribe()

    assert len(bus) == 0


def test_revision_wraps() -> None:
    assert next_revision(0) == 1
    assert next_revision(REVISION_MODULUS - 1) == 0
