from __future__ import annotations

from scorewave.core.transition import Profile, ValueChange
from scorewave.core.value_computer import ValueComputer
from scorewave.model.program import Program
from scorewave.model.types import Tempo


def _rate_profile(profile: Profile[Tempo]) -> Profile[float]:
    changes = {
        offset: ValueChange(change.value.notes_per_second(), change.transition)
        for offset, change in profile.changes()
    }
    return Profile(profile.start_value.notes_per_second(), changes)


class TempoComputer(ValueComputer):
    """Tempo as a notes-per-second rate over the offset domain.

    Tempos are converted to rates before the curve is built, so a linear
    tempo change interpolates the rate itself rather than beats per minute.

    With a `program`, `notes_per_second_at` takes offsets counted along the
    program (note lengths played so far) and reads the rate at the score
    offset they land on. `value_at` always takes score offsets.
    """

    def __init__(self, profile: Profile[Tempo], program: Program | None = None) -> None:
        super().__init__(_rate_profile(profile))
        self.program = program if program is not None and program.segments else None

    def notes_per_second_at(self, offset: float) -> float:
        if self.program is not None:
            # the final Euler step may overshoot the end of the program
            offset = self.program.note_offset_for(min(max(offset, 0.0), self.program.length))
        return self.value_at(offset)
