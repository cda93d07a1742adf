"""Timing utilities for repeated rendering.

``--repeat`` exists for benchmarking, so every render call is timed and the
totals are reported through logging once the loop finishes.
"""

import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class TimingContext:
    """Context manager for timing an operation with automatic logging.

    Parameters
    ----------
    operation_name : str
        Name of the operation being timed
    logger_instance : logging.Logger, optional
        Logger to use for output. If None, uses module logger
    log_level : int, default logging.DEBUG
        Log level for timing messages

    Examples
    --------
    >>> with TimingContext("rendering"):
    ...     render(source, config)
    [DEBUG] rendering completed in 12ms

    """

    def __init__(
        self, operation_name: str, logger_instance: Optional[logging.Logger] = None, log_level: int = logging.DEBUG
    ) -> None:
        """Initialize the timing context for an operation."""
        self.operation_name = operation_name
        self.logger = logger_instance or logger
        self.log_level = log_level
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __enter__(self) -> "TimingContext":
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.logger.log(self.log_level, "Starting: %s", self.operation_name)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Stop the timer and log the elapsed time."""
        self.end_time = time.perf_counter()
        if exc_type is None:
            self.logger.log(self.log_level, "%s completed in %s", self.operation_name, format_duration(self.elapsed))
        else:
            self.logger.log(self.log_level, "%s failed after %s", self.operation_name, format_duration(self.elapsed))

    @property
    def elapsed(self) -> float:
        """Elapsed time in seconds (running total while inside the block)."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time


def format_duration(seconds: float) -> str:
    """Format a duration in human-readable form.

    Examples
    --------
    >>> format_duration(0.123)
    '123ms'
    >>> format_duration(65.5)
    '1m 5.5s'

    """
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.0f}us"
    elif seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds % 60:.1f}s"


class RenderTimer:
    """Collect per-iteration durations of the render loop.

    Examples
    --------
    >>> timer = RenderTimer()
    >>> for _ in range(3):
    ...     with timer.iteration():
    ...         render(source, config)
    >>> timer.stats()["count"]
    3

    """

    def __init__(self) -> None:
        """Initialize with no recorded iterations."""
        self.durations: list[float] = []

    def iteration(self) -> "_Iteration":
        """Return a context manager that records one iteration."""
        return _Iteration(self)

    def stats(self) -> dict[str, float]:
        """Return total, count, mean, min and max of the recorded durations."""
        if not self.durations:
            return {"total": 0.0, "count": 0, "mean": 0.0, "min": 0.0, "max": 0.0}
        return {
            "total": sum(self.durations),
            "count": len(self.durations),
            "mean": sum(self.durations) / len(self.durations),
            "min": min(self.durations),
            "max": max(self.durations),
        }

    def report(self, logger_instance: Optional[logging.Logger] = None, log_level: int = logging.INFO) -> str:
        """Log and return a one-line summary."""
        stats = self.stats()
        summary = (
            f"Rendered {stats['count']:.0f} time(s) in {format_duration(stats['total'])} "
            f"(avg: {format_duration(stats['mean'])}, min: {format_duration(stats['min'])}, "
            f"max: {format_duration(stats['max'])})"
        )
        (logger_instance or logger).log(log_level, summary)
        return summary


class _Iteration:
    def __init__(self, timer: RenderTimer) -> None:
        self._timer = timer
        self._start = 0.0

    def __enter__(self) -> "_Iteration":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._timer.durations.append(time.perf_counter() - self._start)
