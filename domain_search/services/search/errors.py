class SearchExecutionError(Exception):
    """The store rejected or failed a statement during one search phase."""

    def __init__(self, phase: str, message: str) -> None:
        self.phase = phase
        super().__init__(f"Domain search {phase} query failed: {message}")


class QueryAssemblyError(RuntimeError):
    """COUNT and SELECT statements disagree on their filter parameters."""
