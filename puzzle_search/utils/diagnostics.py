"""Debug tracing and progress output for the search drivers."""

from __future__ import annotations
from typing import Optional


class SearchTracer:
    """
    Prints search events to stdout.

    Args:
        debug: Print a line for every traced event
        progress_every: Print a progress line every N iterations (None = off)
        name: Prefix for every line (driver name)

    Notes:
        - Purely diagnostic, never changes the search
    """

    def __init__(self, debug: bool = False, progress_every: Optional[int] = None,
                 name: str = "search"):
        self.debug = debug
        self.progress_every = progress_every
        self.name = name

    def iteration(self, iterations: int, queue_size: int) -> None:
        if self.debug:
            print(f"[{self.name}] ===== ===== ===== ===== =====")
            print(f"[{self.name}] iteration: {iterations}, queue size: {queue_size}")
        elif self.progress_every and iterations % self.progress_every == 0:
            print(f"[{self.name}] iteration: {iterations}, queue size: {queue_size}")

    def trace(self, message: str) -> None:
        if self.debug:
            print(f"[{self.name}] {message}")
