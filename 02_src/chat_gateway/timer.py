"""
Elapsed wall-time measurement for telemetry.
"""
import time


class Timer:
    """Measures milliseconds since construction."""

    def __init__(self):
        self._start = time.perf_counter()

    @property
    def milliseconds_elapsed(self) -> int:
        return int((time.perf_counter() - self._start) * 1000)
