from __future__ import annotations

import copy
from dataclasses import dataclass, field

from scorewave.core.errors import UnresolvedDependencyError
from scorewave.core.transition import Profile
from scorewave.instruments.base import Instrument
from scorewave.instruments.registry import DEFAULT_INSTRUMENT, has_instrument, make_instrument
from scorewave.model.program import Program
from scorewave.model.types import InstrumentSpec, Part, Score, Tempo


@dataclass
class Arrangement:
    """Parts of a score, each paired with the instrument that will play it.

    `program`, when set, decides which stretches of the parts are played.
    """

    tempo_profile: Profile[Tempo]
    parts: dict[str, Part] = field(default_factory=dict)
    instruments: dict[str, InstrumentSpec] = field(default_factory=dict)
    program: Program | None = None

    def make_instruments(self, sample_rate: float) -> dict[str, Instrument]:
        return {pid: make_instrument(spec, sample_rate) for pid, spec in self.instruments.items()}


def arrange(score: Score, default_instrument: InstrumentSpec | None = None) -> Arrangement:
    """Resolve an instrument for every part of `score`.

    A part keeps its own instrument when that id is known; otherwise (or when
    it has none) it gets a copy of `default_instrument`.
    """
    default = default_instrument or InstrumentSpec(id=DEFAULT_INSTRUMENT)
    if not has_instrument(default.id):
        raise UnresolvedDependencyError(f"default instrument {default.id!r} is not registered")

    instruments: dict[str, InstrumentSpec] = {}
    for pid, part in score.parts.items():
        if part.instrument is not None and has_instrument(part.instrument.id):
            instruments[pid] = part.instrument
        else:
            # copied so per-part tweaks never leak into other parts
            instruments[pid] = copy.deepcopy(default)

    return Arrangement(
        tempo_profile=score.tempo_profile,
        parts=dict(score.parts),
        instruments=instruments,
        program=score.program,
    )
