from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from scorewave.core.transition import Profile
from scorewave.model.pitch import Pitch
from scorewave.model.program import Program


@dataclass(frozen=True)
class Tempo:
    """Beats per minute, where one beat lasts `beat_duration` note lengths."""

    beats_per_minute: float
    beat_duration: float = 0.25

    def __post_init__(self) -> None:
        if self.beats_per_minute <= 0:
            raise ValueError(f"beats_per_minute must be > 0: {self.beats_per_minute}")
        if self.beat_duration <= 0:
            raise ValueError(f"beat_duration must be > 0: {self.beat_duration}")

    def notes_per_second(self) -> float:
        return float(self.beats_per_minute) / 60.0 * float(self.beat_duration)


class LinkRelationship(str, Enum):
    NONE = "none"
    TIE = "tie"  # hold through the next note of the same pitch
    SLUR = "slur"  # next note without rearticulation
    LEGATO = "legato"  # continuous, but rearticulated
    GLISSANDO = "glissando"  # slide through the tones in between
    PORTAMENTO = "portamento"  # uninterrupted glide


@dataclass(frozen=True)
class Link:
    relationship: LinkRelationship = LinkRelationship.NONE
    target_pitch: Pitch | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "relationship", LinkRelationship(self.relationship))


@dataclass
class Note:
    """A note (or chord) in a part.

    Offset and duration are in note lengths (a quarter note lasts 0.25).

    Envelope shaping, each in [0, 1]:
    - loudness: level during the sustain portion
    - intensity: strength of the attack
    - separation: moves the release towards the start of the note
    """

    offset: float
    duration: float
    pitches: list[Pitch] = field(default_factory=list)
    loudness: float = 0.5
    intensity: float = 0.5
    separation: float = 0.5
    link: Link = field(default_factory=Link)

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"duration must be > 0: {self.duration}")
        for name in ("loudness", "intensity", "separation"):
            v = float(getattr(self, name))
            if not (0.0 <= v <= 1.0):
                raise ValueError(f"{name} is outside the range 0.0..1.0: {v}")
            setattr(self, name, v)
        self.offset = float(self.offset)
        self.duration = float(self.duration)
        self.pitches = list(self.pitches)

    @property
    def end(self) -> float:
        return self.offset + self.duration


@dataclass
class InstrumentSpec:
    id: str
    preset: str = "default"
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "preset": str(self.preset),
            "params": dict(self.params or {}),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "InstrumentSpec":
        return InstrumentSpec(
            id=str(d.get("id", "")).strip(),
            preset=str(d.get("preset", "default") or "default"),
            params=dict(d.get("params", {}) or {}),
        )


def make_part_id() -> str:
    return secrets.token_hex(4)


@dataclass
class Part:
    """A sequence of notes played by one instrument.

    `loudness_profile` is carried with the part for callers that shape it
    themselves; the performer does not scale samples by it.
    """

    notes: list[Note] = field(default_factory=list)
    loudness_profile: Profile[float] = field(default_factory=lambda: Profile(0.5))
    instrument: InstrumentSpec | None = None
    effects: list[InstrumentSpec] = field(default_factory=list)
    id: str = field(default_factory=make_part_id)

    def __post_init__(self) -> None:
        if not self.loudness_profile.values_between(0.0, 1.0):
            raise ValueError(f"part {self.id}: loudness profile values must be within 0.0..1.0")
        self.notes = sorted(self.notes, key=lambda n: n.offset)

    @property
    def start_offset(self) -> float:
        """Offset of the earliest note, never later than 0."""
        return min([0.0] + [n.offset for n in self.notes])

    @property
    def end_offset(self) -> float:
        """Offset where the last note ends, never earlier than 0."""
        return max([0.0] + [n.end for n in self.notes])


@dataclass
class Score:
    tempo_profile: Profile[Tempo]
    parts: dict[str, Part] = field(default_factory=dict)
    program: Program | None = None
