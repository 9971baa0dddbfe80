from __future__ import annotations

import pytest

from scorewave.core.errors import DomainError, UnsupportedTransitionError
from scorewave.core.limits import MAX_OFFSET, MIN_OFFSET
from scorewave.core.piecewise import PiecewiseFunction
from scorewave.core.transition import (
    Profile,
    Transition,
    TransitionType,
    ValueChange,
    immediate_change,
    linear_change,
    sigmoid_change,
)
from scorewave.core.value_computer import ValueComputer
from scorewave.core.value_updater import ValueUpdater


def test_latest_piece_containing_x_wins() -> None:
    f = PiecewiseFunction()
    f.add_piece((MIN_OFFSET, MAX_OFFSET), lambda x: 1.0)
    f.add_piece((2.0, MAX_OFFSET), lambda x: 2.0)
    f.add_piece((5.0, 6.0), lambda x: 3.0)

    assert f.evaluate_at(0.0) == 1.0
    assert f.evaluate_at(2.0) == 2.0
    assert f.evaluate_at(5.5) == 3.0
    # past the short piece, fall back to the newest piece that still covers x
    assert f.evaluate_at(7.0) == 2.0


def test_same_start_prefers_newest_piece() -> None:
    f = PiecewiseFunction()
    f.add_piece((0.0, 10.0), lambda x: 1.0)
    f.add_piece((0.0, 10.0), lambda x: 2.0)
    assert f.evaluate_at(0.0) == 2.0


def test_piece_domain_checks() -> None:
    f = PiecewiseFunction()
    with pytest.raises(DomainError):
        f.add_piece((MIN_OFFSET - 1, 0.0), lambda x: 0.0)
    with pytest.raises(DomainError):
        f.add_piece((3.0, 2.0), lambda x: 0.0)
    f.add_piece((3.0, 4.0), lambda x: 0.0)
    with pytest.raises(DomainError):
        f.add_piece((1.0, 4.0), lambda x: 0.0)
    with pytest.raises(DomainError):
        f.evaluate_at(0.0)


def test_start_value_only_is_constant_everywhere() -> None:
    vc = ValueComputer(Profile(0.5))
    for x in [ValueComputer.domain_min(), -1000, 0, 1, 5, 100, 10000, ValueComputer.domain_max()]:
        assert vc.value_at(x) == 0.5


def test_domain_bounds_on_class_and_instance() -> None:
    vc = ValueComputer(Profile(1.0))
    assert vc.domain_min() == ValueComputer.domain_min() == MIN_OFFSET
    assert vc.domain_max() == ValueComputer.domain_max() == MAX_OFFSET


def test_evaluating_outside_domain_raises() -> None:
    vc = ValueComputer(Profile(1.0, {1.0: linear_change(2.0, 1.0)}))
    with pytest.raises(DomainError):
        vc.value_at(vc.domain_min() - 1)
    with pytest.raises(DomainError):
        vc.value_at(vc.domain_max() + 1)
    # still a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        vc.value_at(vc.domain_max() + 1)


def test_immediate_change() -> None:
    vc = ValueComputer(Profile(0.5, {1.0: immediate_change(0.25)}))
    assert vc.value_at(vc.domain_min()) == 0.5
    assert vc.value_at(0.999) == 0.5
    assert vc.value_at(1.0) == 0.25
    assert vc.value_at(vc.domain_max()) == 0.25


def test_immediate_ignores_duration() -> None:
    change = ValueChange(0.25, Transition(TransitionType.IMMEDIATE, 3.0))
    vc = ValueComputer(Profile(0.5, {1.0: change}))
    assert vc.value_at(1.0) == 0.25


def test_linear_change() -> None:
    vc = ValueComputer(Profile(0.5, {1.0: linear_change(0.25, 1.0)}))
    assert vc.value_at(0.999) == 0.5
    assert vc.value_at(1.0) == 0.5
    assert vc.value_at(1.25) == 0.4375
    assert vc.value_at(1.5) == 0.375
    assert vc.value_at(1.75) == 0.3125
    assert vc.value_at(2.0) == 0.25
    assert vc.value_at(100.0) == 0.25


def test_zero_length_linear_is_immediate() -> None:
    vc = ValueComputer(Profile(1.0, {2.0: linear_change(3.0, 0.0)}))
    assert vc.value_at(1.99) == 1.0
    assert vc.value_at(2.0) == 3.0


def test_linear_starts_from_level_in_effect() -> None:
    # second ramp starts wherever the first one had got to
    vc = ValueComputer(Profile(0.0, {0.0: linear_change(1.0, 2.0), 1.0: linear_change(0.0, 1.0)}))
    assert vc.value_at(1.0) == pytest.approx(0.5)
    assert vc.value_at(1.5) == pytest.approx(0.25)
    assert vc.value_at(2.0) == 0.0


def test_changes_are_applied_in_offset_order() -> None:
    vc = ValueComputer(Profile(1.0, {3.0: immediate_change(3.0), 2.0: immediate_change(2.0)}))
    assert vc.value_at(2.5) == 2.0
    assert vc.value_at(3.0) == 3.0


def test_linear_piece_rejects_offsets_before_it() -> None:
    vc = ValueComputer(Profile(0.0, {1.0: linear_change(1.0, 1.0)}))
    piece = vc.piecewise_function.pieces[-1]
    with pytest.raises(DomainError):
        piece.func(0.5)


def test_sigmoid_is_unsupported() -> None:
    with pytest.raises(UnsupportedTransitionError):
        ValueComputer(Profile(0.5, {1.0: sigmoid_change(0.25, 1.0)}))
    with pytest.raises(NotImplementedError):
        ValueComputer(Profile(0.5, {1.0: sigmoid_change(0.25, 0.0)}))


def test_negative_transition_duration_rejected() -> None:
    with pytest.raises(ValueError):
        Transition(TransitionType.LINEAR, -1.0)


def test_value_updater_only_reports_changes() -> None:
    vc = ValueComputer(Profile(1.0, {0.5: linear_change(0.2, 0.5)}))
    updater = ValueUpdater(vc, 0.0)
    assert updater.value == 1.0

    updates: list[float] = []
    updater.on_change(updates.append)

    updater.update_value(0.1)
    assert updates == []

    updater.update_value(0.51)
    assert len(updates) == 1

    updater.update_value(0.52)
    assert len(updates) == 2
    assert updates[-1] != updates[0]

    updater.update_value(0.52)
    assert len(updates) == 2

    updater.update_value(0.75)
    assert len(updates) == 3
    assert updates[-1] == pytest.approx(0.6, abs=0.01)

    updater.update_value(1.0)
    assert len(updates) == 4
    assert updates[-1] == pytest.approx(0.2, abs=0.01)

    updater.update_value(1.1)
    assert len(updates) == 4
