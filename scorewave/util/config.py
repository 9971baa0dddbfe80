from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from scorewave.instruments.registry import DEFAULT_INSTRUMENT


def default_config_dir() -> Path:
    return Path.home() / ".config" / "scorewave"


def default_config_path() -> Path:
    return default_config_dir() / "config.json"


@dataclass
class RenderConfig:
    time_conversion_sample_rate: int = 250
    sample_rate: int = 44100
    lead_out: float = 0.5  # seconds rendered past the end of the score
    default_instrument: str = DEFAULT_INSTRUMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "time_conversion_sample_rate": self.time_conversion_sample_rate,
            "sample_rate": self.sample_rate,
            "lead_out": self.lead_out,
            "default_instrument": self.default_instrument,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "RenderConfig":
        base = RenderConfig()
        return RenderConfig(
            time_conversion_sample_rate=int(d.get("time_conversion_sample_rate") or base.time_conversion_sample_rate),
            sample_rate=int(d.get("sample_rate") or base.sample_rate),
            lead_out=float(d.get("lead_out", base.lead_out) or 0.0),
            default_instrument=str(d.get("default_instrument") or base.default_instrument),
        )


def load_config(path: Path | None = None) -> RenderConfig:
    p = path or default_config_path()
    if not p.exists():
        return RenderConfig()
    data = json.loads(p.read_text(encoding="utf-8"))
    return RenderConfig.from_dict(data)


def save_config(cfg: RenderConfig, path: Path | None = None) -> Path:
    p = path or default_config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(cfg.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return p
