from __future__ import annotations

import math
import time
from collections.abc import Callable

Instant = int  # nanoseconds from a monotonic clock; only differences are meaningful
Clock = Callable[[], Instant]

NANOS_PER_SEC = 1_000_000_000

monotonic: Clock = time.perf_counter_ns


def elapsed_seconds(start: Instant, end: Instant) -> float:
    """Seconds between two instants with nanosecond precision. Never negative."""
    nanos = max(end - start, 0)
    secs, rem = divmod(nanos, NANOS_PER_SEC)
    return secs + rem / NANOS_PER_SEC


def rate(quantity: float, seconds: float) -> float:
    """quantity / seconds. Over zero seconds the result is a signed inf, or 0.0
    when the quantity is zero as well."""
    if seconds > 0:
        return quantity / seconds
    if quantity == 0:
        return 0.0
    return math.copysign(math.inf, quantity)


def format_rate(value: float) -> str:
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(float(value))
