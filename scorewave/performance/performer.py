from __future__ import annotations

from scorewave.core.errors import UnresolvedDependencyError
from scorewave.instruments.base import Instrument
from scorewave.model.types import Note, Part


class Performer:
    """Plays one part on one instrument.

    At any moment each note of the part is in exactly one of three lists:
    not yet played, being played, or played. A running note counter moves
    notes from one list to the next; the instrument hears about every move.
    """

    def __init__(self, part: Part, instrument: Instrument | None) -> None:
        if instrument is None:
            raise UnresolvedDependencyError(f"part {part.id} has no instrument")
        self.part = part
        self.instrument = instrument
        self.notes_not_yet_played: list[Note] = []
        self.notes_being_played: list[Note] = []
        self.notes_played: list[Note] = []

    @property
    def start_offset(self) -> float:
        return self.part.start_offset

    @property
    def end_offset(self) -> float:
        return self.part.end_offset

    def prepare_to_perform(self, note_offset: float) -> None:
        self.notes_not_yet_played = [n for n in self.part.notes if n.offset >= note_offset]
        self.notes_being_played = []
        self.notes_played = []

    def perform_sample(self, note_counter: float, time_counter: float) -> float:
        """Start and end whatever notes the counter has reached, then render.

        Starts are sent before ends, and both before the sample is rendered.
        """
        to_start = [n for n in self.notes_not_yet_played if n.offset <= note_counter]
        if to_start:
            self.notes_not_yet_played = [n for n in self.notes_not_yet_played if n.offset > note_counter]

        to_end = [n for n in self.notes_being_played if n.end <= note_counter]
        if to_end:
            self.notes_being_played = [n for n in self.notes_being_played if n.end > note_counter]

        for note in to_start:
            for p in note.pitches:
                self.instrument.start_pitch(p)
            self.notes_being_played.append(note)

        for note in to_end:
            self._end_note(note)

        return self.instrument.render_sample()

    def finish_performance(self) -> None:
        """End every note still sounding."""
        ending, self.notes_being_played = self.notes_being_played, []
        for note in ending:
            self._end_note(note)

    def _end_note(self, note: Note) -> None:
        for p in note.pitches:
            self.instrument.end_pitch(p)
        self.notes_played.append(note)
