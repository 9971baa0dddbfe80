from __future__ import annotations

import pytest

from scorewave.core.transition import Profile, linear_change
from scorewave.model.pitch import DEFAULT_BASE_FREQ, Pitch
from scorewave.model.pitches import PITCHES, pitch
from scorewave.model.program import Program
from scorewave.model.types import Link, LinkRelationship, Note, Part, Tempo
from scorewave.util.note_time_converter import NoteTimeConverter
from scorewave.util.tempo_computer import TempoComputer


def test_pitch_normalizes_and_compares() -> None:
    p = Pitch(octave=4, semitone=0, cent=100)
    assert (p.octave, p.semitone, p.cent) == (4, 1, 0)
    assert p == pitch("Db4")
    assert Pitch(octave=3, semitone=14) == pitch("D4")
    assert pitch("C4") < pitch("Db4") <= pitch("Db4")
    assert pitch("C4") + Pitch(semitone=7) == pitch("G4")
    assert pitch("G4") - Pitch(semitone=7) == pitch("C4")


def test_pitch_frequency() -> None:
    assert Pitch().freq == DEFAULT_BASE_FREQ
    assert pitch("A4").freq == pytest.approx(440.0, rel=1e-9)
    assert pitch("C5").ratio == pytest.approx(2.0 * pitch("C4").ratio)
    assert Pitch.from_freq(440.0) == pitch("A4")
    with pytest.raises(ValueError):
        Pitch.from_ratio(0.0)


def test_pitch_round_to_semitone() -> None:
    assert Pitch(octave=4, cent=49).round_to_semitone() == pitch("C4")
    assert Pitch(octave=4, cent=50).round_to_semitone() == pitch("Db4")


def test_pitch_table_is_a_read_only_piano_range() -> None:
    assert len(PITCHES) == 88
    assert next(iter(PITCHES)) == "A0"
    assert "C8" in PITCHES and "Db8" not in PITCHES and "Ab0" not in PITCHES
    with pytest.raises(TypeError):
        PITCHES["C4"] = Pitch()  # type: ignore[index]
    with pytest.raises(ValueError):
        pitch("H2")


def test_note_validation() -> None:
    n = Note(offset=1, duration=0.25, pitches=[pitch("C4")])
    assert n.end == 1.25
    assert (n.loudness, n.intensity, n.separation) == (0.5, 0.5, 0.5)
    assert n.link.relationship is LinkRelationship.NONE
    with pytest.raises(ValueError):
        Note(offset=0, duration=0)
    with pytest.raises(ValueError):
        Note(offset=0, duration=1, loudness=1.5)
    with pytest.raises(ValueError):
        Note(offset=0, duration=1, separation=-0.1)


def test_link_accepts_relationship_names() -> None:
    link = Link("tie", pitch("C4"))  # type: ignore[arg-type]
    assert link.relationship is LinkRelationship.TIE
    with pytest.raises(ValueError):
        Link("staccato")  # type: ignore[arg-type]


def test_part_offsets_and_order() -> None:
    part = Part(notes=[Note(2.0, 1.0), Note(0.5, 0.5)])
    assert [n.offset for n in part.notes] == [0.5, 2.0]
    assert part.start_offset == 0.0
    assert part.end_offset == 3.0
    assert Part().end_offset == 0.0
    assert Part(notes=[Note(-1.0, 0.5)]).start_offset == -1.0
    assert len(part.id) == 8
    assert Part().id != Part().id


def test_part_loudness_must_stay_in_unit_range() -> None:
    Part(loudness_profile=Profile(0.5, {1.0: linear_change(1.0, 2.0)}))
    with pytest.raises(ValueError):
        Part(loudness_profile=Profile(0.5, {1.0: linear_change(1.2, 2.0)}))


def test_program_offsets() -> None:
    prog = Program([(0.0, 0.75), (0.0, 0.75)])
    assert prog.length == 1.5
    assert prog.includes(0.5)
    assert not prog.includes(0.75)
    assert prog.note_offset_for(0.0) == 0.0
    assert prog.note_offset_for(1.0) == 0.25
    assert prog.note_offset_for(1.5) == 0.75
    assert prog.note_elapsed_at(0.5) == 0.5
    with pytest.raises(ValueError):
        prog.note_offset_for(2.0)
    with pytest.raises(ValueError):
        prog.note_offset_for(-0.1)
    with pytest.raises(ValueError):
        prog.note_elapsed_at(1.0)
    with pytest.raises(ValueError):
        Program([(1.0, 0.0)])


def test_program_time_elapsed() -> None:
    conv = NoteTimeConverter(TempoComputer(Profile(Tempo(120))), 1000)
    prog = Program([(0.0, 1.0), (2.0, 3.0)])
    # a whole segment (2 s) then half a note into the second
    assert prog.time_elapsed_at(2.5, conv) == pytest.approx(3.0, abs=2e-3)
    with pytest.raises(ValueError):
        prog.time_elapsed_at(1.5, conv)
