from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from scorewave.audio.wav import write_wav_mono
from scorewave.core.errors import ScorewaveError
from scorewave.instruments.registry import list_instruments
from scorewave.io.score_yaml import load_score
from scorewave.model.types import InstrumentSpec
from scorewave.performance.arrangement import arrange
from scorewave.performance.conductor import Conductor
from scorewave.util.config import load_config
from scorewave.util.state_log import log_event


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="scorewave",
        add_help=True,
        formatter_class=argparse.RawTextHelpFormatter,
        description="scorewave: render a YAML score to a mono WAV file, one sample at a time\n",
    )

    p.add_argument("--version", action="store_true", help="Print version and exit.")
    p.add_argument("--config", default=None, help="Path to a config JSON (default: ~/.config/scorewave/config.json)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log performance details to stderr.")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("instruments", help="List built-in instrument ids.")

    render = sub.add_parser("render", help="Render a score to WAV.")
    render.add_argument("input", help="Path to a score (.yaml)")
    render.add_argument("-o", "--out", required=True, help="Output WAV path")
    render.add_argument("--sample-rate", type=int, default=None, dest="sample_rate", help="Rendering sample rate (Hz)")
    render.add_argument(
        "--time-sample-rate",
        type=int,
        default=None,
        dest="time_sample_rate",
        help="Sample rate used to convert note offsets to seconds",
    )
    render.add_argument("--lead-out", type=float, default=None, dest="lead_out", help="Seconds rendered past the end")
    render.add_argument("--instrument", default=None, help="Instrument for parts without a known one")

    return p


def _render(args: argparse.Namespace) -> None:
    cfg = load_config(Path(args.config) if args.config else None)
    sample_rate = args.sample_rate or cfg.sample_rate
    time_rate = args.time_sample_rate or cfg.time_conversion_sample_rate
    lead_out = cfg.lead_out if args.lead_out is None else args.lead_out
    default_inst = InstrumentSpec(id=args.instrument or cfg.default_instrument)

    score = load_score(args.input)
    conductor = Conductor(arrange(score, default_inst), time_rate, sample_rate)
    samples = conductor.perform(lead_out)

    out = Path(args.out)
    write_wav_mono(out, samples, sample_rate=sample_rate)
    print(f"rendered: {args.input} -> {out} ({len(samples)} samples, {conductor.end_of_score:.2f}s of score)")

    # events are kept beside the config in use
    events = Path(args.config).parent / "events.jsonl" if args.config else None
    try:
        log_event({"type": "render", "input": str(args.input), "out": str(out), "samples": len(samples)}, events)
    except OSError:
        pass


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s %(message)s")

    if getattr(args, "version", False):
        from scorewave import __version__

        print(f"scorewave {__version__}")
        return

    if args.cmd == "instruments":
        for inst_id in list_instruments():
            print(inst_id)
        return

    if args.cmd == "render":
        try:
            _render(args)
        except (ScorewaveError, ValueError, KeyError, OSError) as e:
            print(f"scorewave: error: {e}", file=sys.stderr)
            raise SystemExit(2)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
