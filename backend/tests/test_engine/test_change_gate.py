"""Tests for change detection between stable sets."""

from __future__ import annotations

from philens.engine.change_gate import ChangeGate, should_notify
from philens.engine.patterns import PatternClass
from tests.conftest import make_detection


def test_identical_sets_are_quiet():
    current = (make_detection(confidence=0.8),)
    assert not should_notify(current, current)
    assert not should_notify((), ())


def test_size_change_notifies():
    a = make_detection(cx=100.0)
    b = make_detection(cx=400.0)
    assert should_notify((a,), (a, b))
    assert should_notify((a, b), (a,))


def test_confidence_tolerance():
    prev = (make_detection(confidence=0.80),)
    assert not should_notify(prev, (make_detection(confidence=0.85),))
    assert should_notify(prev, (make_detection(confidence=0.95),))


def test_position_tolerance():
    prev = (make_detection(cx=100.0, cy=100.0),)
    assert not should_notify(prev, (make_detection(cx=149.0, cy=100.0),))
    assert should_notify(prev, (make_detection(cx=151.0, cy=100.0),))
    assert should_notify(prev, (make_detection(cx=100.0, cy=151.0),))


def test_class_change_notifies():
    prev = (make_detection(PatternClass.SPIRAL_FIBONACCI),)
    assert should_notify(prev, (make_detection(PatternClass.SHELL_SPIRAL),))


def test_listeners_fire_once_per_change():
    gate = ChangeGate()
    calls = []
    gate.on_significant_change(lambda prev, cur: calls.append((prev, cur)))
    current = (make_detection(),)

    event = gate.evaluate((), current, at=1.0)
    assert calls == [((), current)]
    assert event.best_new == current[0]

    assert gate.evaluate(current, current, at=1.3) is None
    assert len(calls) == 1


def test_unsubscribe():
    gate = ChangeGate()
    calls = []
    unsubscribe = gate.on_significant_change(lambda prev, cur: calls.append(cur))
    unsubscribe()
    unsubscribe()
    gate.evaluate((), (make_detection(),), at=0.0)
    assert calls == []


def test_failing_listener_does_not_block_others():
    gate = ChangeGate()
    calls = []

    def broken(prev, cur):
        raise RuntimeError("listener failed")

    gate.on_significant_change(broken)
    gate.on_significant_change(lambda prev, cur: calls.append(cur))
    gate.evaluate((), (make_detection(),), at=0.0)
    assert len(calls) == 1


def test_best_new_ignores_matched_entries():
    kept = make_detection(confidence=0.95, cx=100.0)
    new_low = make_detection(confidence=0.7, cx=400.0)
    new_high = make_detection(confidence=0.8, cx=700.0)
    event = ChangeGate().evaluate((kept,), (kept, new_low, new_high), at=0.0)
    assert event.appeared == (new_low, new_high)
    assert event.best_new == new_high


def test_shrinking_set_has_no_best_new():
    a = make_detection(cx=100.0)
    b = make_detection(cx=400.0)
    event = ChangeGate().evaluate((a, b), (a,), at=0.0)
    assert event is not None
    assert event.best_new is None


def test_custom_tolerances():
    gate = ChangeGate(confidence_tolerance=0.2, position_tolerance=10.0)
    prev = (make_detection(confidence=0.8, cx=100.0),)
    assert not gate.should_notify(prev, (make_detection(confidence=0.95, cx=105.0),))
    assert gate.should_notify(prev, (make_detection(confidence=0.8, cx=115.0),))
