from __future__ import annotations

from typing import Dict, List

from scorewave.core.errors import UnresolvedDependencyError
from scorewave.instruments.base import Instrument, InstrumentBase
from scorewave.instruments.oscillator import SawInstrument, SineInstrument, SquareInstrument, TriangleInstrument
from scorewave.model.types import InstrumentSpec

DEFAULT_INSTRUMENT = "osc.sine"

_INSTRUMENTS: Dict[str, type[InstrumentBase]] = {}


def _register(cls: type[InstrumentBase]) -> None:
    _INSTRUMENTS[cls.id] = cls


def _init_registry() -> None:
    if _INSTRUMENTS:
        return
    _register(SineInstrument)
    _register(SquareInstrument)
    _register(SawInstrument)
    _register(TriangleInstrument)


def list_instruments() -> List[str]:
    _init_registry()
    return sorted(_INSTRUMENTS)


def has_instrument(inst_id: str) -> bool:
    _init_registry()
    return str(inst_id).strip() in _INSTRUMENTS


def make_instrument(spec: InstrumentSpec, sample_rate: float) -> Instrument:
    """Build a fresh instrument instance for one part."""
    _init_registry()
    cls = _INSTRUMENTS.get(str(spec.id).strip())
    if cls is None:
        raise UnresolvedDependencyError(f"unknown instrument: {spec.id!r}")
    return cls(sample_rate, preset=spec.preset, params=spec.params)
