"""Core data models for the pillar solver."""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple
import numpy as np


# Sentinel hop distance for node pairs with no connecting path
UNREACHABLE = np.iinfo(np.int64).max // 4


@dataclass
class PuzzleNode:
    """A pillar holding a count of tokens."""

    index: int
    initial: int
    required: int
    adjacent: List[int] = field(default_factory=list)  # Directly linked node indices


@dataclass(frozen=True)
class Move:
    """Precomputed transfer of `distance` tokens from `source` to `target`.

    `reverse` is the index of the opposite move in the same arena and is only
    set for symmetrical moves.
    """

    index: int
    source: int
    target: int
    distance: int
    is_symmetrical: bool = False
    reverse: Optional[int] = None

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.source, self.target, self.distance)

    def describe(self) -> str:
        """Format the move the way the diagnostic dump prints it."""
        text = f"{self.source} -> {self.target} = {self.distance}"
        if self.is_symmetrical:
            text += " [SYM]"
        return text


class SolutionStep(NamedTuple):
    """A move as reported to callers of the solve entry point."""

    source: int
    target: int
    distance: int

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} = {self.distance}"


@dataclass(frozen=True, eq=False)
class MoveGraph:
    """Candidate moves of every node, built once per puzzle definition."""

    nodes: Tuple[PuzzleNode, ...]
    moves: Tuple[Move, ...]
    node_moves: Tuple[Tuple[int, ...], ...]  # Move indices per node, construction order
    distances: np.ndarray  # N x N hop distances, UNREACHABLE where no path exists

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def candidate_count(self) -> int:
        return len(self.moves)

    @property
    def symmetric_count(self) -> int:
        return sum(1 for move in self.moves if move.is_symmetrical)

    def moves_from(self, node_index: int) -> List[Move]:
        """Get the candidate moves of a node in search order."""
        return [self.moves[i] for i in self.node_moves[node_index]]

    def find_move(self, source: int, target: int) -> Optional[Move]:
        """Look up the candidate move between two nodes, if it survived pruning."""
        for move_index in self.node_moves[source]:
            move = self.moves[move_index]
            if move.target == target:
                return move
        return None

    def describe(self) -> List[str]:
        """Diagnostic dump: one line per candidate move, grouped by node."""
        lines = []
        for node in self.nodes:
            for move in self.moves_from(node.index):
                lines.append(move.describe())
        return lines
