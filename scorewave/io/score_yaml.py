from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

from scorewave.core.transition import Profile, Transition, ValueChange
from scorewave.model.pitch import Pitch
from scorewave.model.pitches import pitch
from scorewave.model.program import Program
from scorewave.model.types import InstrumentSpec, Link, Note, Part, Score, Tempo

V = TypeVar("V")


def _as_pitch(x: Any) -> Pitch:
    if isinstance(x, str):
        return pitch(x)
    if isinstance(x, dict):
        return Pitch.from_dict(x)
    raise ValueError(f"expected a pitch name or mapping, got {x!r}")


def _as_tempo(x: Any) -> Tempo:
    if isinstance(x, dict):
        return Tempo(
            beats_per_minute=float(x["beats_per_minute"]),
            beat_duration=float(x.get("beat_duration", 0.25)),
        )
    return Tempo(beats_per_minute=float(x))


def _as_profile(x: Any, convert: Callable[[Any], V]) -> Profile[V]:
    """Read either a bare start value or {start: ..., changes: [...]}."""
    if not isinstance(x, dict) or "start" not in x:
        return Profile(convert(x))

    changes: dict[float, ValueChange[V]] = {}
    for c in x.get("changes") or []:
        offset = float(c["offset"])
        if offset in changes:
            raise ValueError(f"more than one value change at offset {offset}")
        transition = Transition.from_dict(dict(c.get("transition") or {}))
        changes[offset] = ValueChange(convert(c["value"]), transition)
    return Profile(convert(x["start"]), changes)


def _as_link(x: Any) -> Link:
    if not x:
        return Link()
    if isinstance(x, str):
        return Link(relationship=x.strip().lower())  # type: ignore[arg-type]
    target = x.get("target")
    return Link(
        relationship=str(x.get("relationship", "none")).strip().lower(),  # type: ignore[arg-type]
        target_pitch=_as_pitch(target) if target is not None else None,
    )


def _as_notes(items: list[Any]) -> list[Note]:
    # a note without an offset follows straight after the previous one
    notes: list[Note] = []
    cursor = 0.0
    for d in items:
        offset = float(d["offset"]) if d.get("offset") is not None else cursor
        n = Note(
            offset=offset,
            duration=float(d["duration"]),
            pitches=[_as_pitch(p) for p in (d.get("pitches") or [])],
            loudness=float(d.get("loudness", 0.5)),
            intensity=float(d.get("intensity", 0.5)),
            separation=float(d.get("separation", 0.5)),
            link=_as_link(d.get("link")),
        )
        notes.append(n)
        cursor = n.end
    return notes


def _as_part(pid: str, d: dict[str, Any]) -> Part:
    inst = d.get("instrument")
    if isinstance(inst, str):
        inst = {"id": inst}
    return Part(
        id=pid,
        notes=_as_notes(list(d.get("notes") or [])),
        loudness_profile=_as_profile(d.get("loudness", 0.5), float),
        instrument=InstrumentSpec.from_dict(inst) if inst else None,
        effects=[InstrumentSpec.from_dict(e) for e in (d.get("effects") or [])],
    )


def score_from_dict(data: dict[str, Any]) -> Score:
    if "tempo" not in data:
        raise ValueError("score is missing required field: tempo")

    parts_raw = data.get("parts") or {}
    if not isinstance(parts_raw, dict):
        raise ValueError("score parts must be a mapping of part id to part")

    program = data.get("program")
    return Score(
        tempo_profile=_as_profile(data["tempo"], _as_tempo),
        parts={str(pid): _as_part(str(pid), dict(p or {})) for pid, p in parts_raw.items()},
        program=Program([tuple(s) for s in program]) if program else None,  # type: ignore[misc]
    )


def load_score(path: str | Path) -> Score:
    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("score YAML must be a mapping/object")
    return score_from_dict(data)
