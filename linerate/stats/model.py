from dataclasses import dataclass


@dataclass
class RunStats:
    processed: int = 0  # lines read successfully from the source
    emitted: int = 0  # rate lines delivered to the sink
    errors: int = 0  # read or parse failures that were skipped
    duration: float = 0.0  # monotonic time spent in the read loop, seconds
