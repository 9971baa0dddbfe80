from __future__ import annotations

from typing import Callable

from scorewave.core.errors import DomainError, UnsupportedTransitionError
from scorewave.core.limits import MAX_OFFSET, MIN_OFFSET
from scorewave.core.piecewise import Evaluator, PiecewiseFunction
from scorewave.core.transition import Profile, Transition, TransitionType


def _constant(value: float) -> Evaluator:
    return lambda x: value


def _immediate(fn: PiecewiseFunction, offset: float, value: float, transition: Transition) -> Evaluator:
    return _constant(value)


def _linear(fn: PiecewiseFunction, offset: float, value: float, transition: Transition) -> Evaluator:
    duration = float(transition.duration)
    if duration == 0:
        return _constant(value)

    # the level being left, frozen now; later pieces must not change it
    b = fn.evaluate_at(offset)
    m = (value - b) / duration
    end = offset + duration

    def func(x: float) -> float:
        if not (offset <= x <= MAX_OFFSET):
            raise DomainError(f"{x} is outside [{offset}, {MAX_OFFSET}]")
        if x < end:
            return m * (x - offset) + b
        return value

    return func


def _sigmoid(fn: PiecewiseFunction, offset: float, value: float, transition: Transition) -> Evaluator:
    raise UnsupportedTransitionError(f"sigmoid transition at offset {offset} is not supported")


_TRANSITIONS: dict[TransitionType, Callable[[PiecewiseFunction, float, float, Transition], Evaluator]] = {
    TransitionType.IMMEDIATE: _immediate,
    TransitionType.LINEAR: _linear,
    TransitionType.SIGMOID: _sigmoid,
}


class ValueComputer:
    """Compute the value of a Profile at any offset.

    The start value covers the whole domain; each value change then adds a
    piece running from its offset to MAX_OFFSET.
    """

    def __init__(self, profile: Profile[float]) -> None:
        self.piecewise_function = PiecewiseFunction()
        self.piecewise_function.add_piece((MIN_OFFSET, MAX_OFFSET), _constant(float(profile.start_value)))
        for offset, change in profile.changes():
            self._add_change(offset, float(change.value), change.transition)

    def _add_change(self, offset: float, value: float, transition: Transition) -> None:
        build = _TRANSITIONS[transition.type]
        func = build(self.piecewise_function, offset, value, transition)
        self.piecewise_function.add_piece((offset, MAX_OFFSET), func)

    def value_at(self, offset: float) -> float:
        return self.piecewise_function.evaluate_at(offset)

    @classmethod
    def domain_min(cls) -> float:
        return MIN_OFFSET

    @classmethod
    def domain_max(cls) -> float:
        return MAX_OFFSET
