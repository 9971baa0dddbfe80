from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Iterator, TypeVar

V = TypeVar("V")


class TransitionType(str, Enum):
    IMMEDIATE = "immediate"
    LINEAR = "linear"
    SIGMOID = "sigmoid"


@dataclass(frozen=True)
class Transition:
    """How a value moves from its prior level to a new target.

    Duration is in note lengths and is ignored for immediate transitions.
    """

    type: TransitionType = TransitionType.IMMEDIATE
    duration: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", TransitionType(self.type))
        if self.duration < 0:
            raise ValueError(f"transition duration must be >= 0: {self.duration}")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "duration": float(self.duration)}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Transition":
        return Transition(
            type=TransitionType(str(d.get("type", "immediate")).strip().lower()),
            duration=float(d.get("duration", 0.0) or 0.0),
        )


@dataclass(frozen=True)
class ValueChange(Generic[V]):
    """A new target value, reached through a transition.

    The offset a change happens at is the key it is stored under in a Profile.
    """

    value: V
    transition: Transition = field(default_factory=Transition)


@dataclass
class Profile(Generic[V]):
    """A start value plus sparse value changes keyed by offset.

    A mapping can hold at most one change per offset; the start value is in
    effect for every offset before the first change.
    """

    start_value: V
    value_changes: dict[float, ValueChange[V]] = field(default_factory=dict)

    def changes(self) -> Iterator[tuple[float, ValueChange[V]]]:
        """Yield (offset, change) pairs in increasing offset order."""
        for offset in sorted(self.value_changes):
            yield float(offset), self.value_changes[offset]

    def values(self) -> list[V]:
        return [self.start_value] + [c.value for _, c in self.changes()]

    def values_between(self, lo: float, hi: float) -> bool:
        return all(lo <= float(v) <= hi for v in self.values())  # type: ignore[arg-type]


def immediate_change(value: V) -> ValueChange[V]:
    return ValueChange(value, Transition(TransitionType.IMMEDIATE, 0.0))


def linear_change(value: V, duration: float) -> ValueChange[V]:
    return ValueChange(value, Transition(TransitionType.LINEAR, float(duration)))


def sigmoid_change(value: V, duration: float) -> ValueChange[V]:
    return ValueChange(value, Transition(TransitionType.SIGMOID, float(duration)))
