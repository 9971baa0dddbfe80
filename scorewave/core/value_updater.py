from __future__ import annotations

from typing import Callable

from scorewave.core.value_computer import ValueComputer

ChangeCallback = Callable[[float], None]


class ValueUpdater:
    """Follow a ValueComputer as an offset counter moves forward.

    Callbacks registered with `on_change` only hear about values that differ
    from the last one seen.

    A library helper for callers stepping through a profile themselves; the
    conductor does not use it.
    """

    def __init__(self, computer: ValueComputer, start_offset: float = 0.0) -> None:
        self.computer = computer
        self.offset = float(start_offset)
        self.value = computer.value_at(self.offset)
        self._callbacks: list[ChangeCallback] = []

    def on_change(self, callback: ChangeCallback) -> None:
        self._callbacks.append(callback)

    def update_value(self, offset: float) -> float:
        value = self.computer.value_at(offset)
        self.offset = float(offset)
        if value != self.value:
            self.value = value
            for cb in self._callbacks:
                cb(value)
        return self.value
