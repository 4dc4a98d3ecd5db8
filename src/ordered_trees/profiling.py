# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""Timing utilities for ordered tree operations."""

import time
import functools
import statistics
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


@dataclass
class OperationMetrics:
    """Timing samples collected for one tree operation."""
    call_count: int = 0
    total_time: float = 0.0
    min_time: float = float('inf')
    max_time: float = 0.0
    times: List[float] = field(default_factory=list)

    def add_measurement(self, elapsed: float) -> None:
        self.call_count += 1
        self.total_time += elapsed
        self.min_time = min(self.min_time, elapsed)
        self.max_time = max(self.max_time, elapsed)
        self.times.append(elapsed)

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count else 0.0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) if self.times else 0.0

    def __str__(self) -> str:
        return (f"Calls: {self.call_count}, "
                f"Total: {self.total_time:.6f}s, "
                f"Avg: {self.avg_time:.6f}s, "
                f"Min: {self.min_time:.6f}s, "
                f"Max: {self.max_time:.6f}s, "
                f"Median: {self.median_time:.6f}s")


class PerformanceTracker:
    """
    Process-wide collector of operation timings.

    Tracking starts disabled; benchmarks switch it on around the code they
    measure so that ordinary tree use pays only for one attribute check.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, OperationMetrics] = defaultdict(OperationMetrics)
        self.enabled = False

    def add_measurement(self, operation: str, elapsed: float) -> None:
        if self.enabled:
            self.metrics[operation].add_measurement(elapsed)

    def reset(self) -> None:
        self.metrics.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self, sort_by: str = 'total_time') -> str:
        """
        Render the collected metrics as a fixed-width table.

        Args:
            sort_by: Any OperationMetrics attribute; rows are sorted descending by it.
        """
        if not self.metrics:
            return "No performance data collected."

        lines = ["Performance Metrics:"]
        lines.append("-" * 80)
        lines.append(f"{'Operation':<40} {'Calls':>8} {'Total (s)':>12} {'Avg (s)':>12} {'Median (s)':>12}")
        lines.append("-" * 80)

        rows = sorted(
            self.metrics.items(),
            key=lambda kv: getattr(kv[1], sort_by),
            reverse=True
        )
        for operation, metrics in rows:
            lines.append(f"{operation:<40} {metrics.call_count:>8} {metrics.total_time:>12.6f} "
                         f"{metrics.avg_time:>12.6f} {metrics.median_time:>12.6f}")
        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Decorator recording the wall-clock time of each call while tracking is enabled.

    Usable bare (`@track_performance`) or with a custom label
    (`@track_performance(tag="bst.put")`).
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                tracker.add_measurement(name, time.perf_counter() - start)
        return wrapper

    if method is None:
        return decorator
    return decorator(method)
