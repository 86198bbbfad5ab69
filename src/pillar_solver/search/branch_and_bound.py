"""Branch-and-bound search for pillar puzzles.

This module implements the bounded depth-first search that looks for a move
sequence bringing every node to its required token count. The search mutates a
single SearchContext in place and restores it exactly on backtrack.
"""

import time
import logging
from typing import Optional, List, Dict, Tuple, Any
from dataclasses import dataclass, field

from pillar_solver.core.data_models import MoveGraph, SolutionStep

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for branch-and-bound search."""
    track_statistics: bool = True  # Count expansions, prunes and rejected moves
    log_progress_every: int = 0  # Debug record every N expanded nodes, 0 disables


@dataclass
class SearchStatistics:
    """Counters collected while searching."""
    nodes_expanded: int = 0
    moves_applied: int = 0
    bound_prunes: int = 0
    illegal_moves: int = 0
    max_depth_reached: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'nodes_expanded': self.nodes_expanded,
            'moves_applied': self.moves_applied,
            'bound_prunes': self.bound_prunes,
            'illegal_moves': self.illegal_moves,
            'max_depth_reached': self.max_depth_reached
        }


@dataclass
class SearchResult:
    """Result from branch-and-bound search."""
    success: bool
    steps: List[SolutionStep] = field(default_factory=list)
    solution_length: int = 0
    target_length: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    statistics: SearchStatistics = field(default_factory=SearchStatistics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serialisable dictionary."""
        return {
            'success': self.success,
            'solution_length': self.solution_length,
            'target_length': self.target_length,
            'moves': [
                {'source': s.source, 'target': s.target, 'distance': s.distance}
                for s in self.steps
            ],
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'search_stats': self.statistics.to_dict()
        }


class SearchContext:
    """Mutable search state for one solve call.

    Holds the live token counts, the ban counter of every move and the
    deficiency count (nodes whose count differs from the required one).
    Puzzle definition data stays in the MoveGraph and is never touched.
    """

    def __init__(self, graph: MoveGraph):
        self.graph = graph
        self.required = [node.required for node in graph.nodes]
        self.current = [node.initial for node in graph.nodes]
        self.ban_counts = [0] * graph.candidate_count
        self.deficiency = sum(
            1 for cur, req in zip(self.current, self.required) if cur != req
        )
        self.path: List[int] = []

    def _shift(self, node: int, delta: int) -> None:
        """Change a node's count, keeping the deficiency count in step."""
        if self.current[node] == self.required[node]:
            self.deficiency += 1
        self.current[node] += delta
        if self.current[node] == self.required[node]:
            self.deficiency -= 1

    def can_apply(self, move_index: int) -> bool:
        """A move is legal when it is not banned and the source has enough tokens."""
        move = self.graph.moves[move_index]
        return (self.ban_counts[move_index] == 0
                and self.current[move.source] >= move.distance)

    def apply_move(self, move_index: int) -> bool:
        """Apply a move if legal.

        Returns:
            True if the move was applied, False if it was rejected
        """
        if not self.can_apply(move_index):
            return False
        move = self.graph.moves[move_index]
        self._shift(move.source, -move.distance)
        self._shift(move.target, move.distance)
        # Moved A -> B symmetrically: ban B -> A for the next step
        if move.reverse is not None:
            self.ban_counts[move.reverse] += 1
        self.path.append(move_index)
        return True

    def undo_move(self, move_index: int) -> None:
        """Exact inverse of apply_move."""
        move = self.graph.moves[move_index]
        self._shift(move.source, move.distance)
        self._shift(move.target, -move.distance)
        if move.reverse is not None:
            self.ban_counts[move.reverse] -= 1
        self.path.pop()

    @property
    def is_solved(self) -> bool:
        return self.deficiency == 0

    def steps(self) -> List[SolutionStep]:
        """Moves applied so far, as caller-facing steps."""
        return [SolutionStep(*self.graph.moves[i].as_tuple()) for i in self.path]

    def snapshot(self) -> Tuple:
        """Hashable copy of the full mutable state."""
        return (tuple(self.current), tuple(self.ban_counts),
                self.deficiency, tuple(self.path))


class BranchAndBoundSearcher:
    """Depth-first search with a deficiency bound and reversal bans."""

    def __init__(self, graph: MoveGraph, config: Optional[SearchConfig] = None):
        """Initialize searcher.

        Args:
            graph: Precomputed candidate moves
            config: Search configuration parameters
        """
        self.graph = graph
        self.config = config or SearchConfig()
        self._stats = SearchStatistics()
        self._target_length = 0

    def search(self, target_length: int) -> SearchResult:
        """Look for a move sequence of at most `target_length` moves.

        The first success found in canonical order is returned, which may be
        shorter than `target_length`.

        Args:
            target_length: Move budget K

        Returns:
            SearchResult; success is False when no sequence fits the budget
        """
        if target_length < 0:
            raise ValueError(f"target_length must be non-negative, got {target_length}")

        start_time = time.perf_counter()
        self._stats = SearchStatistics()
        self._target_length = target_length
        context = SearchContext(self.graph)

        logger.info(f"Searching for a solution within {target_length} moves "
                    f"(deficiency {context.deficiency})")

        solved = self._recurse(context, 0)
        elapsed = time.perf_counter() - start_time

        if solved:
            steps = context.steps()
            logger.info(f"Solution of length {len(steps)} found in {elapsed:.3f}s")
            return SearchResult(
                success=True,
                steps=steps,
                solution_length=len(steps),
                target_length=target_length,
                computation_time=elapsed,
                termination_reason="solved",
                statistics=self._stats
            )

        logger.info(f"No solution within {target_length} moves ({elapsed:.3f}s)")
        return SearchResult(
            success=False,
            target_length=target_length,
            computation_time=elapsed,
            termination_reason="exhausted",
            statistics=self._stats
        )

    def _recurse(self, context: SearchContext, depth: int) -> bool:
        """Explore every legal continuation at `depth`.

        On success the context is left holding the solution path.
        """
        track = self.config.track_statistics
        if track:
            self._record_expansion(depth)

        if context.deficiency == 0:
            return True

        # Each move changes at most two nodes
        remaining = self._target_length - depth
        if remaining * 2 < context.deficiency:
            if track:
                self._stats.bound_prunes += 1
            return False

        for node in self.graph.nodes:
            if context.current[node.index] == 0:
                continue
            for move_index in self.graph.node_moves[node.index]:
                if not context.apply_move(move_index):
                    if track:
                        self._stats.illegal_moves += 1
                    continue
                if track:
                    self._stats.moves_applied += 1
                if self._recurse(context, depth + 1):
                    return True
                context.undo_move(move_index)

        return False

    def _record_expansion(self, depth: int) -> None:
        stats = self._stats
        stats.nodes_expanded += 1
        if depth > stats.max_depth_reached:
            stats.max_depth_reached = depth
        interval = self.config.log_progress_every
        if interval > 0 and stats.nodes_expanded % interval == 0:
            logger.debug(f"Expanded {stats.nodes_expanded} nodes, "
                         f"{stats.bound_prunes} pruned, max depth {stats.max_depth_reached}")


def create_searcher(graph: MoveGraph,
                    track_statistics: bool = True,
                    log_progress_every: int = 0) -> BranchAndBoundSearcher:
    """Factory function to create a configured searcher.

    Args:
        graph: Precomputed candidate moves
        track_statistics: Whether to count expansions and prunes
        log_progress_every: Debug logging interval in expanded nodes

    Returns:
        Configured BranchAndBoundSearcher instance
    """
    config = SearchConfig(
        track_statistics=track_statistics,
        log_progress_every=log_progress_every
    )
    return BranchAndBoundSearcher(graph, config)
