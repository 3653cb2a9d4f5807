"""
Timing utilities.

Provides:
- Deadline: elapsed time + optional ceiling for a single search run
- PerformanceTimer: hierarchical timing report (used by the benchmark)
"""

from __future__ import annotations
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional


class Deadline:
    """
    Wall-clock budget of one search run.

    Args:
        max_time_s: Ceiling in seconds (None = unlimited)

    Notes:
        - expired() is strict: elapsed > max_time_s
        - With max_time_s=0 any measurable elapsed time counts as expired
    """

    def __init__(self, max_time_s: Optional[float] = None):
        self.max_time_s = max_time_s
        self.start = time.perf_counter()

    def elapsed(self) -> float:
        return time.perf_counter() - self.start

    def expired(self) -> bool:
        if self.max_time_s is None:
            return False
        return self.elapsed() > self.max_time_s


class PerformanceTimer:
    """Performance timer with hierarchical timing support."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._stack: List[Dict[str, Any]] = []
        self._results: List[Dict[str, Any]] = []

    @contextmanager
    def time_block(self, name: str):
        """Context manager for timing a code block.

        Args:
            name: Name of the code block being timed

        Yields:
            None
        """
        if not self.enabled:
            yield
            return

        depth = len(self._stack)
        timing_info = {
            'name': name,
            'start': time.perf_counter(),
            'depth': depth,
            'children': []
        }
        self._stack.append(timing_info)

        try:
            yield
        finally:
            timing_info['elapsed'] = time.perf_counter() - timing_info['start']
            self._stack.pop()

            # Nested blocks are attached to their parent
            if self._stack:
                self._stack[-1]['children'].append(timing_info)
            else:
                self._results.append(timing_info)

    @property
    def results(self) -> List[Dict[str, Any]]:
        return list(self._results)

    def format_results(self) -> str:
        """Formatted timing report with hierarchy (empty string if nothing timed)."""
        if not self._results:
            return ""

        lines = ["=" * 80, "PERFORMANCE TIMING REPORT", "=" * 80]
        total_time = sum(r['elapsed'] for r in self._results)

        def format_timing(timing: Dict[str, Any], parent_time: Optional[float]):
            indent = "  " * timing['depth']
            elapsed = timing['elapsed']
            if parent_time:
                percentage = (elapsed / parent_time) * 100
                lines.append(f"{indent}{timing['name']}: {elapsed:.3f}s ({percentage:.1f}%)")
            else:
                lines.append(f"{indent}{timing['name']}: {elapsed:.3f}s")
            for child in timing['children']:
                format_timing(child, elapsed)

        for result in self._results:
            format_timing(result, total_time)

        lines.append("-" * 80)
        lines.append(f"TOTAL: {total_time:.3f}s")
        lines.append("=" * 80)
        return "\n".join(lines)

    def print_results(self):
        """Print the timing report and clear the results."""
        if not self.enabled:
            return
        report = self.format_results()
        if report:
            print("\n" + report + "\n")
        self._results = []
