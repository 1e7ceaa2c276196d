from linerate.core.counter import LineRateCounter
from linerate.core.differentiator import ValueRateDifferentiator
from linerate.source.reader import LineSource, ReadOutcome, open_source
from linerate.stats.model import RunStats

__version__ = "0.1.0"

__all__ = [
    "LineRateCounter",
    "ValueRateDifferentiator",
    "LineSource",
    "ReadOutcome",
    "open_source",
    "RunStats",
]
