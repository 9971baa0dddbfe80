from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from scorewave.instruments.base import InstrumentBase, param_float, param_int, softclip
from scorewave.model.pitch import Pitch

TWO_PI = 2.0 * math.pi


def _sine(phase: float) -> float:
    return math.sin(phase)


def _square(phase: float) -> float:
    return 1.0 if math.sin(phase) >= 0 else -1.0


def _saw(phase: float) -> float:
    t = phase / TWO_PI
    return 2.0 * (t - math.floor(t + 0.5))


def _triangle(phase: float) -> float:
    return 2.0 * abs(_saw(phase)) - 1.0


WAVEFORMS = {
    "sine": _sine,
    "square": _square,
    "saw": _saw,
    "triangle": _triangle,
}


@dataclass
class _Voice:
    pitch: Pitch
    inc: float
    phase: float = 0.0
    level: float = 0.0
    releasing: bool = False


class OscillatorInstrument(InstrumentBase):
    """Polyphonic oscillator: one voice per started pitch.

    Voices ramp in over `attack` seconds and out over `release` seconds after
    their pitch is ended. The mix is soft-clipped by `drive` and scaled by
    `gain`.
    """

    id = "osc"
    wave = "sine"

    @classmethod
    def presets(cls) -> dict[str, dict[str, Any]]:
        return {
            "default": {"gain": 0.3, "attack": 0.005, "release": 0.02, "drive": 1.0, "polyphony": 8},
            "soft": {"gain": 0.2, "attack": 0.05, "release": 0.2, "drive": 1.0, "polyphony": 8},
            "hard": {"gain": 0.4, "attack": 0.001, "release": 0.01, "drive": 1.5, "polyphony": 8},
        }

    def __init__(self, sample_rate: float, preset: str = "default", params: dict[str, Any] | None = None) -> None:
        super().__init__(sample_rate, preset, params)
        self.gain = param_float(self.params, "gain", 0.3, 0.0, 1.0)
        self.drive = param_float(self.params, "drive", 1.0, 0.1, 4.0)
        self.polyphony = param_int(self.params, "polyphony", 8, 1, 64)
        attack = param_float(self.params, "attack", 0.005, 0.0, 5.0)
        release = param_float(self.params, "release", 0.02, 0.0, 5.0)
        # per-sample level steps; zero-length ramps jump straight to the target
        self._attack_step = 1.0 if attack <= 0 else min(1.0, self.sample_period / attack)
        self._release_step = 1.0 if release <= 0 else min(1.0, self.sample_period / release)
        self._waveform = WAVEFORMS[self.wave]
        self.voices: list[_Voice] = []

    def start_pitch(self, pitch: Pitch) -> None:
        if len(self.voices) >= self.polyphony:
            self.voices.pop(0)
        inc = TWO_PI * pitch.freq / self.sample_rate
        self.voices.append(_Voice(pitch=pitch, inc=inc))

    def end_pitch(self, pitch: Pitch) -> None:
        for v in self.voices:
            if v.pitch == pitch and not v.releasing:
                v.releasing = True
                return

    def render_sample(self) -> float:
        if not self.voices:
            return 0.0

        mix = 0.0
        for v in self.voices:
            if v.releasing:
                v.level = max(0.0, v.level - self._release_step)
            else:
                v.level = min(1.0, v.level + self._attack_step)
            mix += self._waveform(v.phase) * v.level
            v.phase = (v.phase + v.inc) % TWO_PI
        self.voices = [v for v in self.voices if not (v.releasing and v.level <= 0.0)]

        return softclip(mix, drive=self.drive) * self.gain


class SineInstrument(OscillatorInstrument):
    id = "osc.sine"
    wave = "sine"


class SquareInstrument(OscillatorInstrument):
    id = "osc.square"
    wave = "square"


class SawInstrument(OscillatorInstrument):
    id = "osc.saw"
    wave = "saw"


class TriangleInstrument(OscillatorInstrument):
    id = "osc.triangle"
    wave = "triangle"
