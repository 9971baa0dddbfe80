from __future__ import annotations

import wave
from pathlib import Path


def write_wav_mono(path: Path, samples: list[float], *, sample_rate: int) -> None:
    """Write 16-bit mono PCM. Samples outside [-1, 1] are clamped here, not before."""
    path.parent.mkdir(parents=True, exist_ok=True)

    def _i16(x: float) -> int:
        v = max(-1.0, min(1.0, float(x)))
        return int(v * 32767.0)

    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(int(sample_rate))
        frames = bytearray()
        for s in samples:
            frames += int.to_bytes(_i16(s), 2, "little", signed=True)
        wf.writeframes(bytes(frames))
