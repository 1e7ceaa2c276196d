from __future__ import annotations

import logging
import math
from collections.abc import Callable

from linerate.core.clock import Clock, Instant, elapsed_seconds, format_rate, monotonic, rate
from linerate.source.reader import LineSource
from linerate.stats.model import RunStats

logger = logging.getLogger(__name__)


def parse_value(line: str) -> float:
    """Parse a line as a float after stripping one trailing line terminator.

    Raises ValueError for non-numeric text, surrounding whitespace, digit
    separators and non-finite values.
    """
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    # float() would also take padded text, digit separators and nan/inf
    if line != line.strip() or "_" in line:
        raise ValueError(f"could not convert string to float: {line!r}")
    value = float(line)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {line!r}")
    return value


class ValueRateDifferentiator:
    """Emits the rate of change between consecutive numeric lines."""

    def __init__(self, clock: Clock = monotonic) -> None:
        self._clock = clock
        self.previous_value: float | None = None
        self.previous_timestamp: Instant | None = None

    def update(self, value: float, ts: Instant) -> float | None:
        """Store (value, ts) and return the rate against the previous pair, if any."""
        result = None
        if self.previous_timestamp is not None and self.previous_value is not None:
            delta_v = value - self.previous_value
            result = rate(delta_v, elapsed_seconds(self.previous_timestamp, ts))
        self.previous_value = value
        self.previous_timestamp = ts
        return result

    def run(self, source: LineSource, sink: Callable[[str], object] = print) -> RunStats:
        """Read `source` to the end, emitting "<rate> 1/s" for every value after the first."""
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
            stats.processed += 1

            try:
                value = parse_value(outcome.line)
            except ValueError as e:
                logger.warning("Ignoring non-numeric input %r: %s", outcome.line, e)
                stats.errors += 1
                continue

            per_sec = self.update(value, self._clock())
            if per_sec is not None:
                sink(f"{format_rate(per_sec)} 1/s")
                stats.emitted += 1

        stats.duration = elapsed_seconds(start, monotonic())
        return stats
