from __future__ import annotations

from scorewave.core.errors import OrderingError
from scorewave.util.tempo_computer import TempoComputer


class NoteTimeConverter:
    """Convert between note offsets and seconds under a varying tempo.

    There is no closed form for the integral of an arbitrary piecewise rate,
    so the rate is integrated numerically (Euler steps of one sample period).
    A conversion is off by at most one sample period.
    """

    def __init__(self, tempo_computer: TempoComputer, sample_rate: float) -> None:
        self.tempo_computer = tempo_computer
        self.sample_rate = float(sample_rate)
        self.sample_period = 1.0 / self.sample_rate

    def time_elapsed(self, note_begin: float, note_end: float) -> float:
        """Seconds it takes to play from `note_begin` to `note_end`."""
        if note_end < note_begin:
            raise OrderingError(f"note end {note_end} is less than note begin {note_begin}")

        time = 0.0
        note = float(note_begin)
        while note < note_end:
            notes_per_sample = self.tempo_computer.notes_per_second_at(note) * self.sample_period
            if note + notes_per_sample > note_end:
                # last, partial step
                time += self.sample_period * ((note_end - note) / notes_per_sample)
                note = note_end
            else:
                time += self.sample_period
                note += notes_per_sample
        return time

    def note_offset_after(self, note_begin: float, seconds: float) -> float:
        """Offset reached when playing for `seconds` starting at `note_begin`."""
        if seconds < 0:
            raise OrderingError(f"cannot play for a negative time: {seconds}")

        time = 0.0
        note = float(note_begin)
        while time < seconds:
            notes_per_sample = self.tempo_computer.notes_per_second_at(note) * self.sample_period
            if time + self.sample_period > seconds:
                note += notes_per_sample * ((seconds - time) / self.sample_period)
                time = seconds
            else:
                time += self.sample_period
                note += notes_per_sample
        return note
