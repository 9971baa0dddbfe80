"""Named pitches A0 through C8 (the range of a piano keyboard).

The table is built once at import and cannot be modified.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from scorewave.model.pitch import Pitch

NOTE_NAMES = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")


def _build_table() -> Mapping[str, Pitch]:
    table: dict[str, Pitch] = {}
    for octave in range(0, 9):
        for semitone, name in enumerate(NOTE_NAMES):
            if octave == 0 and semitone < 9:
                continue
            if octave == 8 and semitone > 0:
                break
            table[f"{name}{octave}"] = Pitch(octave=octave, semitone=semitone)
    return MappingProxyType(table)


PITCHES: Mapping[str, Pitch] = _build_table()


def pitch(name: str) -> Pitch:
    """Look up a named pitch such as "C4" or "Bb2"."""
    key = str(name).strip()
    try:
        return PITCHES[key]
    except KeyError:
        raise ValueError(f"unknown pitch name: {name!r}") from None
