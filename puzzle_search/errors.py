"""
Search Engine Exceptions.

Error taxonomy of the search engine:
- SearchError: Base class for everything raised by the engine
- SearchConfigError: Invalid or unsupported configuration
- NoSolutionError: Mutate/undo drivers exhausted the space (opt-in signalling)
- LevelFormatError: Malformed puzzle level file

Timeouts are NOT exceptions. They are reported through SearchResult.status.
"""


class SearchError(RuntimeError):
    """Base class for search engine errors."""
    pass


class SearchConfigError(SearchError, ValueError):
    """
    Raised when a search configuration is invalid.

    Examples: unknown traversal mode, scored traversal without a score
    function, breadth-first traversal requested from a mutate/undo driver.

    The snapshot driver catches this error and reports it as
    SearchStatus.CONFIG_ERROR in the result instead of propagating it.
    """
    pass


class NoSolutionError(SearchError):
    """
    Raised by the mutate/undo drivers when the reachable space is exhausted.

    Only raised when SearchConfig.raise_on_no_solution is True. By default
    the drivers return a SearchResult with status NO_SOLUTION.
    """

    def __init__(self, iterations: int, message: str = "No solution found"):
        super().__init__(message)
        self.iterations = iterations


class LevelFormatError(ValueError):
    """Raised when a puzzle level/board description cannot be parsed."""

    def __init__(self, message: str, row: int | None = None, col: int | None = None):
        if row is not None and col is not None:
            message = f"{message} at {row}:{col}"
        super().__init__(message)
        self.row = row
        self.col = col
