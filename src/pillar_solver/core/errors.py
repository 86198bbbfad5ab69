"""Exceptions raised for malformed or inconsistent puzzle definitions."""


class PuzzleError(Exception):
    """Base class for fatal puzzle definition errors."""
    pass


class ConservationError(PuzzleError):
    """Raised when total initial tokens differ from total required tokens."""

    def __init__(self, total_initial: int, total_required: int):
        self.total_initial = total_initial
        self.total_required = total_required
        super().__init__(
            f"Initial != required: {total_initial} tokens present, "
            f"{total_required} tokens required"
        )


class InconsistentMoveGraphError(PuzzleError):
    """Raised when a symmetrical move has no reverse move after pruning."""

    def __init__(self, source: int, target: int):
        self.source = source
        self.target = target
        super().__init__(f"Cannot find reverse move for {source} -> {target}")
