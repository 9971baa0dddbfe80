from __future__ import annotations

import math
from dataclasses import dataclass
from functools import total_ordering
from typing import Any

SEMITONES_PER_OCTAVE = 12
CENTS_PER_SEMITONE = 100
CENTS_PER_OCTAVE = SEMITONES_PER_OCTAVE * CENTS_PER_SEMITONE

# C0
DEFAULT_BASE_FREQ = 16.351597831287414


@total_ordering
@dataclass(frozen=True, eq=False)
class Pitch:
    """A pitch as octave/semitone/cent above a base frequency (C0 by default).

    Each octave doubles the frequency ratio; semitones and cents divide the
    octave in twelve-tone equal temperament. The stored fields are always
    normalized, so C4 plus 100 cents compares equal to Db4.
    """

    octave: int = 0
    semitone: int = 0
    cent: int = 0
    base_freq: float = DEFAULT_BASE_FREQ

    def __post_init__(self) -> None:
        if self.base_freq <= 0:
            raise ValueError(f"base_freq must be > 0: {self.base_freq}")
        total = int(self.octave) * CENTS_PER_OCTAVE + int(self.semitone) * CENTS_PER_SEMITONE + int(self.cent)
        octave, rem = divmod(total, CENTS_PER_OCTAVE)
        semitone, cent = divmod(rem, CENTS_PER_SEMITONE)
        object.__setattr__(self, "octave", octave)
        object.__setattr__(self, "semitone", semitone)
        object.__setattr__(self, "cent", cent)

    @property
    def total_cent(self) -> int:
        return self.octave * CENTS_PER_OCTAVE + self.semitone * CENTS_PER_SEMITONE + self.cent

    @property
    def total_semitone(self) -> int:
        return self.octave * SEMITONES_PER_OCTAVE + self.semitone

    @property
    def ratio(self) -> float:
        return 2.0 ** (self.total_cent / CENTS_PER_OCTAVE)

    @property
    def freq(self) -> float:
        return self.ratio * self.base_freq

    @staticmethod
    def from_total_cent(cents: int, base_freq: float = DEFAULT_BASE_FREQ) -> "Pitch":
        return Pitch(cent=int(cents), base_freq=base_freq)

    @staticmethod
    def from_ratio(ratio: float, base_freq: float = DEFAULT_BASE_FREQ) -> "Pitch":
        if ratio <= 0:
            raise ValueError(f"ratio {ratio} is less than or equal to 0.0")
        return Pitch.from_total_cent(round(math.log2(ratio) * CENTS_PER_OCTAVE), base_freq)

    @staticmethod
    def from_freq(freq: float, base_freq: float = DEFAULT_BASE_FREQ) -> "Pitch":
        return Pitch.from_ratio(freq / base_freq, base_freq)

    def round_to_semitone(self) -> "Pitch":
        semitone = self.semitone + (1 if self.cent >= CENTS_PER_SEMITONE // 2 else 0)
        return Pitch(self.octave, semitone, 0, self.base_freq)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return self.total_cent == other.total_cent and self.base_freq == other.base_freq

    def __lt__(self, other: "Pitch") -> bool:
        return self.total_cent < other.total_cent

    def __hash__(self) -> int:
        return hash((self.total_cent, self.base_freq))

    def __add__(self, other: "Pitch") -> "Pitch":
        return Pitch(self.octave + other.octave, self.semitone + other.semitone, self.cent + other.cent, self.base_freq)

    def __sub__(self, other: "Pitch") -> "Pitch":
        return Pitch(self.octave - other.octave, self.semitone - other.semitone, self.cent - other.cent, self.base_freq)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"octave": self.octave, "semitone": self.semitone}
        if self.cent:
            d["cent"] = self.cent
        if self.base_freq != DEFAULT_BASE_FREQ:
            d["base_freq"] = self.base_freq
        return d

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Pitch":
        return Pitch(
            octave=int(d.get("octave", 0) or 0),
            semitone=int(d.get("semitone", 0) or 0),
            cent=int(d.get("cent", 0) or 0),
            base_freq=float(d.get("base_freq", DEFAULT_BASE_FREQ) or DEFAULT_BASE_FREQ),
        )
