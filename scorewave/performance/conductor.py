from __future__ import annotations

import logging
from numbers import Real
from typing import Any

from scorewave.core.errors import UnresolvedDependencyError
from scorewave.core.limits import MIN_SAMPLE_RATE
from scorewave.performance.arrangement import Arrangement
from scorewave.performance.collation import collate_part
from scorewave.performance.performer import Performer
from scorewave.util.note_time_converter import NoteTimeConverter
from scorewave.util.tempo_computer import TempoComputer

logger = logging.getLogger(__name__)


def _check_sample_rate(name: str, rate: Any) -> float:
    if isinstance(rate, bool) or not isinstance(rate, Real):
        raise UnresolvedDependencyError(f"{name} is not a number: {rate!r}")
    if rate < MIN_SAMPLE_RATE:
        raise UnresolvedDependencyError(f"{name} is less than {MIN_SAMPLE_RATE}: {rate}")
    return float(rate)


class Conductor:
    """Directs one performance of an arrangement.

    The conductor follows the score tempo, keeps the time, sample and note
    counters, and sums what every performer plays into one mono signal.
    Mixing is a plain sum: there is no normalisation or clipping here.

    `time_conversion_sample_rate` sets the step used when converting the
    score length from note offsets to seconds; `rendering_sample_rate` is the
    rate of the produced audio.

    When the arrangement has a program, parts are collated through it first
    and every note offset the conductor tracks is counted along the program.
    """

    def __init__(self, arrangement: Arrangement, time_conversion_sample_rate: Any, rendering_sample_rate: Any) -> None:
        if not arrangement.parts:
            raise UnresolvedDependencyError("score contains no parts")
        conversion_rate = _check_sample_rate("time_conversion_sample_rate", time_conversion_sample_rate)
        self.sample_rate = _check_sample_rate("rendering_sample_rate", rendering_sample_rate)
        self.sample_period = 1.0 / self.sample_rate

        missing = sorted(pid for pid in arrangement.parts if pid not in arrangement.instruments)
        if missing:
            raise UnresolvedDependencyError(f"no instrument for part(s): {', '.join(missing)}")
        instruments = arrangement.make_instruments(self.sample_rate)

        parts = arrangement.parts
        if arrangement.program is not None:
            parts = {pid: collate_part(part, arrangement.program) for pid, part in parts.items()}

        # fixed part-id order keeps the float sum reproducible
        self.performers = [Performer(parts[pid], instruments[pid]) for pid in sorted(parts)]

        self.tempo_computer = TempoComputer(arrangement.tempo_profile, arrangement.program)
        self.note_time_converter = NoteTimeConverter(self.tempo_computer, conversion_rate)

        self.start_offset = min(p.start_offset for p in self.performers)
        self.end_offset = max(p.end_offset for p in self.performers)
        self.start_of_score = 0.0
        self.end_of_score = self.note_time_converter.time_elapsed(self.start_offset, self.end_offset)
        logger.debug(
            "score spans offsets %s..%s, %.3f s, %d part(s)",
            self.start_offset,
            self.end_offset,
            self.end_of_score,
            len(self.performers),
        )

        self.time_counter = 0.0
        self.sample_counter = 0
        self.note_counter = self.start_offset
        self._prepared_at_sample: int | None = None
        self._finished = False

    def prepare_performance(self) -> None:
        self.prepare_performance_at(self.start_of_score)

    def prepare_performance_at(self, start_time: float = 0.0) -> None:
        """Reset the counters to `start_time` seconds into the score and re-prime performers."""
        self.time_counter = float(start_time)
        self.sample_counter = int(self.time_counter * self.sample_rate)
        self.note_counter = self.note_time_converter.note_offset_after(self.start_offset, self.time_counter)
        self._prepared_at_sample = self.sample_counter
        self._finished = False

        for performer in self.performers:
            performer.prepare_to_perform(self.note_counter)
        logger.debug("prepared at %.3f s (sample %d, offset %s)", self.time_counter, self.sample_counter, self.note_counter)

    def perform(self, lead_out_time: float = 0.0) -> list[float]:
        """Perform to the end of the score, plus `lead_out_time` seconds of tail."""
        self._ensure_prepared()
        stop = self.end_of_score + float(lead_out_time)
        samples: list[float] = []
        while self.time_counter < stop:
            samples.append(self._perform_sample())
        self._prepared_at_sample = self.sample_counter
        return samples

    def perform_seconds(self, time_sec: float) -> list[float]:
        return self.perform_samples(int(float(time_sec) * self.sample_rate))

    def perform_samples(self, n_samples: int) -> list[float]:
        self._ensure_prepared()
        samples = [self._perform_sample() for _ in range(int(n_samples))]
        self._prepared_at_sample = self.sample_counter
        return samples

    def _ensure_prepared(self) -> None:
        if self._prepared_at_sample != self.sample_counter:
            self.prepare_performance()

    def _perform_sample(self) -> float:
        sample = 0.0

        if self.time_counter <= self.end_of_score:
            for performer in self.performers:
                sample += performer.perform_sample(self.note_counter, self.time_counter)
            self.note_counter += self.tempo_computer.notes_per_second_at(self.note_counter) * self.sample_period
        elif not self._finished:
            for performer in self.performers:
                performer.finish_performance()
            self._finished = True

        self.time_counter += self.sample_period
        self.sample_counter += 1
        return sample
