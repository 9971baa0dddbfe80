from __future__ import annotations

import math
from typing import Any, Protocol

from scorewave.model.pitch import Pitch


class Instrument(Protocol):
    """What a performer needs from a synthesis backend."""

    def start_pitch(self, pitch: Pitch) -> None:
        ...

    def end_pitch(self, pitch: Pitch) -> None:
        ...

    def render_sample(self) -> float:
        ...


def param_float(params: dict[str, Any], key: str, default: float, lo: float | None = None, hi: float | None = None) -> float:
    raw = params.get(key, default)
    try:
        v = float(raw)
    except (TypeError, ValueError):
        v = float(default)
    if lo is not None:
        v = max(lo, v)
    if hi is not None:
        v = min(hi, v)
    return v


def param_int(params: dict[str, Any], key: str, default: int, lo: int | None = None, hi: int | None = None) -> int:
    raw = params.get(key, default)
    try:
        v = int(raw)
    except (TypeError, ValueError):
        v = int(default)
    if lo is not None:
        v = max(lo, v)
    if hi is not None:
        v = min(hi, v)
    return v


def softclip(x: float, drive: float = 1.0) -> float:
    return math.tanh(x * drive)


class InstrumentBase:
    """Shared preset handling for built-in instruments.

    Subclasses set `id`, list presets, and read their settings from
    `self.params` (the chosen preset overlaid with explicit params).
    """

    id: str = ""

    def __init__(self, sample_rate: float, preset: str = "default", params: dict[str, Any] | None = None) -> None:
        self.sample_rate = float(sample_rate)
        self.sample_period = 1.0 / self.sample_rate
        self.params = self._resolve_params(preset, params)

    @classmethod
    def presets(cls) -> dict[str, dict[str, Any]]:
        return {}

    def _resolve_params(self, preset: str, overrides: dict[str, Any] | None) -> dict[str, Any]:
        presets = self.presets()
        base = dict(presets.get(preset, presets.get("default", {}) or {}))
        for k, v in (overrides or {}).items():
            base[str(k)] = v
        return base
