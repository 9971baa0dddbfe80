from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable

from scorewave.core.errors import DomainError
from scorewave.core.limits import MAX_OFFSET, MIN_OFFSET

Evaluator = Callable[[float], float]


@dataclass(frozen=True)
class Piece:
    start: float
    stop: float  # inclusive
    func: Evaluator

    def contains(self, x: float) -> bool:
        return self.start <= x <= self.stop


def in_domain(x: float) -> bool:
    return MIN_OFFSET <= x <= MAX_OFFSET


class PiecewiseFunction:
    """A function table over the offset domain.

    Pieces are appended in increasing start order and may overlap (a later
    piece usually starts later but runs to the same upper bound). Evaluation
    always prefers the most recently appended piece whose domain contains
    the query point, which is "the latest change in effect at x".

    Lookup is a floor search on piece starts; earlier pieces are only
    visited when the floor piece stops short of x.
    """

    def __init__(self) -> None:
        self._starts: list[float] = []
        self._pieces: list[Piece] = []

    def __len__(self) -> int:
        return len(self._pieces)

    @property
    def pieces(self) -> list[Piece]:
        return list(self._pieces)

    def add_piece(self, domain: tuple[float, float], func: Evaluator) -> None:
        start, stop = float(domain[0]), float(domain[1])
        if not (in_domain(start) and in_domain(stop)):
            raise DomainError(f"piece domain [{start}, {stop}] is outside [{MIN_OFFSET}, {MAX_OFFSET}]")
        if stop < start:
            raise DomainError(f"piece domain [{start}, {stop}] is empty")
        if self._starts and start < self._starts[-1]:
            raise DomainError(f"piece starting at {start} added after a piece starting at {self._starts[-1]}")
        self._starts.append(start)
        self._pieces.append(Piece(start=start, stop=stop, func=func))

    def evaluate_at(self, x: float) -> float:
        if not in_domain(x):
            raise DomainError(f"{x} is outside [{MIN_OFFSET}, {MAX_OFFSET}]")
        # equal starts: bisect_right lands after all of them, so the newest wins
        i = bisect_right(self._starts, x) - 1
        while i >= 0:
            piece = self._pieces[i]
            if piece.contains(x):
                return piece.func(x)
            i -= 1
        raise DomainError(f"no piece is defined at {x}")
