"""
A simple context manager for code profiling.

This utility measures the execution time of a block of code, which is useful
for verifying that one inference tick fits comfortably inside a frame.
"""
import time
import logging

profiler_log = logging.getLogger('profiler')


class CodeProfiler:
    """
    A context manager to time the execution of a code block.

    Example:
        with CodeProfiler("Inference Tick", budget_ms=2.0):
            engine.evaluate(...)

    Attributes:
        name (str): The name of the code block being timed.
        budget_ms (float): Latency above which a warning is logged.
        elapsed_ms (float): Duration of the last timed block.
    """
    def __init__(self, name="", budget_ms=16.0):
        self.name = name
        self.budget_ms = budget_ms
        self.elapsed_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000
        profiler_log.debug("'%s' execution time: %.3f ms", self.name, self.elapsed_ms)
        if self.elapsed_ms > self.budget_ms:
            profiler_log.warning(
                "'%s' exceeded %.1fms frame budget (%.3f ms).",
                self.name, self.budget_ms, self.elapsed_ms,
            )
