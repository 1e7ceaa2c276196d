from __future__ import annotations

import logging
from collections.abc import Callable

from linerate.core.clock import Clock, Instant, elapsed_seconds, format_rate, monotonic, rate
from linerate.source.reader import LineSource
from linerate.stats.model import RunStats

logger = logging.getLogger(__name__)


class LineRateCounter:
    """Counts lines and reports the average rate between the first and last one."""

    def __init__(self, clock: Clock = monotonic) -> None:
        self._clock = clock
        self.first_seen: Instant | None = None
        self.last_seen: Instant | None = None
        self.count = 0

    def observe(self, ts: Instant) -> None:
        if self.first_seen is None:
            self.first_seen = ts
        self.last_seen = ts
        self.count += 1

    def result(self) -> float | None:
        """Lines per second, or None if no line was observed."""
        if self.first_seen is None or self.last_seen is None:
            return None
        return rate(self.count, elapsed_seconds(self.first_seen, self.last_seen))

    def run(self, source: LineSource, sink: Callable[[str], object] = print) -> RunStats:
        """Read `source` to the end, then emit one "<rate> lines/sec" line to `sink`."""
        stats = RunStats()
        start = monotonic()

        while True:
            outcome = source.read_line()
            if outcome.is_eof:
                break
            if outcome.error is not None:
                logger.warning("Invalid input, ignoring line.")
                logger.debug("Read error on %r: %s", outcome.raw, outcome.error)
                stats.errors += 1
                continue
            self.observe(self._clock())
            stats.processed += 1

        lines_per_sec = self.result()
        if lines_per_sec is not None:
            sink(f"{format_rate(lines_per_sec)} lines/sec")
            stats.emitted += 1

        stats.duration = elapsed_seconds(start, monotonic())
        return stats
