"""Puzzle construction API and solve entry points."""

import logging
from typing import List, Optional, Sequence, Tuple

from pillar_solver.core.data_models import MoveGraph, PuzzleNode, SolutionStep
from pillar_solver.core.errors import ConservationError
from pillar_solver.search.distance_matrix import build_move_graph
from pillar_solver.search.branch_and_bound import (
    BranchAndBoundSearcher, SearchConfig, SearchResult
)

logger = logging.getLogger(__name__)


class Puzzle:
    """A set of pillars connected by directed links."""

    def __init__(self, name: Optional[str] = None):
        """Initialize an empty puzzle.

        Args:
            name: Optional label used in logs and reports
        """
        self.name = name or "puzzle"
        self.nodes: List[PuzzleNode] = []
        self.links: List[Tuple[int, int, bool]] = []  # (from, to, bidirectional) as added
        self._graph: Optional[MoveGraph] = None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def total_tokens(self) -> int:
        return sum(node.initial for node in self.nodes)

    def add_node(self, initial: int, required: int) -> int:
        """Add a pillar and return its index."""
        index = len(self.nodes)
        self.nodes.append(PuzzleNode(index=index, initial=initial, required=required))
        self._graph = None
        return index

    def _node(self, index: int) -> PuzzleNode:
        if not 0 <= index < len(self.nodes):
            raise IndexError(f"Node index {index} out of range 0..{len(self.nodes) - 1}")
        return self.nodes[index]

    def add_mono_link(self, i1: int, i2: int) -> None:
        """Link i1 to i2 in one direction only."""
        source = self._node(i1)
        self._node(i2)
        source.adjacent.append(i2)
        self.links.append((i1, i2, False))
        self._graph = None

    def add_bi_link(self, i1: int, i2: int) -> None:
        """Link i1 and i2 in both directions."""
        first = self._node(i1)
        second = self._node(i2)
        first.adjacent.append(i2)
        second.adjacent.append(i1)
        self.links.append((i1, i2, True))
        self._graph = None

    def check_sums(self) -> None:
        """Raise ConservationError unless tokens are conserved."""
        total_initial = sum(node.initial for node in self.nodes)
        total_required = sum(node.required for node in self.nodes)
        if total_initial != total_required:
            raise ConservationError(total_initial, total_required)

    def build_move_graph(self) -> MoveGraph:
        """Precompute candidate moves, reusing them until the puzzle changes."""
        if self._graph is None:
            self._graph = build_move_graph(self.nodes)
        return self._graph

    def search(self, target_length: int,
               config: Optional[SearchConfig] = None) -> SearchResult:
        """Run the search for a move budget and return the full result.

        Raises:
            ConservationError: If total initial != total required
        """
        self.check_sums()
        graph = self.build_move_graph()
        logger.info(f"Solving '{self.name}': {graph.node_count} nodes, "
                    f"{graph.candidate_count} candidate moves")
        return BranchAndBoundSearcher(graph, config).search(target_length)

    def solve(self, target_length: int) -> List[SolutionStep]:
        """Find a move sequence of at most `target_length` moves.

        Returns:
            (source, target, distance) steps, or an empty list if none exists
        """
        return self.search(target_length).steps

    def solve_shortest(self, max_moves: int, min_moves: int = 0,
                       config: Optional[SearchConfig] = None) -> SearchResult:
        """Iterative deepening: try budgets min_moves..max_moves in turn.

        Returns:
            The first successful result, or the failed result for max_moves
        """
        if min_moves > max_moves:
            raise ValueError(f"min_moves ({min_moves}) exceeds max_moves ({max_moves})")
        self.check_sums()
        result = None
        for budget in range(min_moves, max_moves + 1):
            result = self.search(budget, config)
            if result.success:
                return result
            logger.debug(f"No solution with {budget} moves, deepening")
        return result

    def dump_moves(self) -> List[str]:
        """Diagnostic dump of every node's candidate moves."""
        return self.build_move_graph().describe()

    def verify(self, steps: Sequence[Tuple[int, int, int]]) -> bool:
        """Replay steps from the initial counts and check the targets are met."""
        counts = [node.initial for node in self.nodes]
        for source, target, distance in steps:
            if counts[source] < distance:
                return False
            counts[source] -= distance
            counts[target] += distance
        return all(count == node.required for count, node in zip(counts, self.nodes))
