from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scorewave.util.note_time_converter import NoteTimeConverter


@dataclass
class Program:
    """Which stretches of the score are played, and in what order.

    Each segment is a half-open (start, stop) offset range; a segment may be
    repeated to express a repeat sign.
    """

    segments: list[tuple[float, float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        segs: list[tuple[float, float]] = []
        for start, stop in self.segments:
            if stop < start:
                raise ValueError(f"segment ({start}, {stop}) ends before it starts")
            segs.append((float(start), float(stop)))
        self.segments = segs

    @property
    def length(self) -> float:
        return sum(stop - start for start, stop in self.segments)

    def includes(self, offset: float) -> bool:
        return any(start <= offset < stop for start, stop in self.segments)

    def note_offset_for(self, elapsed: float) -> float:
        """Score offset reached after `elapsed` note lengths of the program."""
        if not self.segments:
            raise ValueError("program has no segments")
        if elapsed < 0.0:
            raise ValueError(f"elapsed {elapsed} is less than 0.0")
        if elapsed > self.length:
            raise ValueError(f"elapsed {elapsed} is greater than program length")

        so_far = 0.0
        for start, stop in self.segments:
            seg_len = stop - start
            if so_far + seg_len > elapsed:
                return start + (elapsed - so_far)
            so_far += seg_len
        # elapsed == length lands on the end of the last segment
        return self.segments[-1][1]

    def note_elapsed_at(self, offset: float) -> float:
        """Note lengths played before the first time `offset` is reached."""
        if not self.includes(offset):
            raise ValueError(f"offset {offset} is not included in program")

        elapsed = 0.0
        for start, stop in self.segments:
            if start <= offset < stop:
                return elapsed + (offset - start)
            elapsed += stop - start
        return elapsed

    def time_elapsed_at(self, offset: float, converter: "NoteTimeConverter") -> float:
        """Seconds played before the first time `offset` is reached."""
        if not self.includes(offset):
            raise ValueError(f"offset {offset} is not included in program")

        elapsed = 0.0
        for start, stop in self.segments:
            if start <= offset < stop:
                return elapsed + converter.time_elapsed(start, offset)
            elapsed += converter.time_elapsed(start, stop)
        return elapsed
