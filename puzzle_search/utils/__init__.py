"""
Search Engine Utilities.

This module provides helpers shared by the drivers and tools:
- diagnostics: Debug tracing and progress lines
- timing: Run deadline and hierarchical timing report
"""

from .diagnostics import SearchTracer
from .timing import Deadline, PerformanceTimer

__all__ = [
    "SearchTracer",
    "Deadline",
    "PerformanceTimer",
]
