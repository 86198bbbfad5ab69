"""Distance matrix builder for pillar puzzles.

This module computes all-pairs shortest hop distances over the directed link
graph, classifies which node pairs are symmetrical (equal distance in both
directions), and turns the surviving pairs into per-node candidate moves with
reverse-move cross references.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np

from pillar_solver.core.data_models import Move, MoveGraph, PuzzleNode, UNREACHABLE
from pillar_solver.core.errors import InconsistentMoveGraphError

logger = logging.getLogger(__name__)


def initial_distance_table(nodes: Sequence[PuzzleNode]) -> np.ndarray:
    """Build the N x N table before relaxation.

    Args:
        nodes: Puzzle nodes with their adjacency lists

    Returns:
        Table with 0 on the diagonal, 1 for direct links, UNREACHABLE elsewhere
    """
    n = len(nodes)
    dist = np.full((n, n), UNREACHABLE, dtype=np.int64)
    for node in nodes:
        for neighbour in node.adjacent:
            dist[node.index, neighbour] = 1
    np.fill_diagonal(dist, 0)
    return dist


def compute_shortest_distances(nodes: Sequence[PuzzleNode]) -> np.ndarray:
    """All-pairs shortest hop distances (Floyd-Warshall).

    Each pass relaxes every pair through intermediate node k at once:
    dist[i][j] = min(dist[i][j], dist[i][k] + dist[k][j]).
    """
    dist = initial_distance_table(nodes)
    for k in range(len(nodes)):
        np.minimum(dist, dist[:, k:k + 1] + dist[k:k + 1, :], out=dist)
    return dist


def symmetry_mask(dist: np.ndarray) -> np.ndarray:
    """Pairs whose distance equals the distance back."""
    return dist == dist.T


def find_reverse_move(index: Dict[Tuple[int, int], int],
                      source: int, target: int) -> Optional[int]:
    """Locate the surviving move target -> source, if any."""
    return index.get((target, source))


def build_move_graph(nodes: Sequence[PuzzleNode]) -> MoveGraph:
    """Precompute the candidate moves of every node.

    Args:
        nodes: Puzzle nodes in index order

    Returns:
        MoveGraph with pruned, annotated candidate moves

    Raises:
        InconsistentMoveGraphError: If a symmetrical move has no reverse move
    """
    dist = compute_shortest_distances(nodes)
    symmetric = symmetry_mask(dist)

    # Prune no-op and unreachable pairs; survivors keep increasing target order
    entries: List[Tuple[int, int, int, bool]] = []
    for u in range(len(nodes)):
        for v in range(len(nodes)):
            d = int(dist[u, v])
            if d == 0 or d >= UNREACHABLE:
                continue
            entries.append((u, v, d, bool(symmetric[u, v])))

    position = {(u, v): i for i, (u, v, _, _) in enumerate(entries)}

    moves: List[Move] = []
    node_moves: List[List[int]] = [[] for _ in nodes]
    for i, (u, v, d, is_symmetrical) in enumerate(entries):
        reverse = None
        if is_symmetrical:
            reverse = find_reverse_move(position, u, v)
            if reverse is None:
                raise InconsistentMoveGraphError(u, v)
        moves.append(Move(index=i, source=u, target=v, distance=d,
                          is_symmetrical=is_symmetrical, reverse=reverse))
        node_moves[u].append(i)

    graph = MoveGraph(
        nodes=tuple(nodes),
        moves=tuple(moves),
        node_moves=tuple(tuple(m) for m in node_moves),
        distances=dist,
    )
    logger.debug(f"Move graph built: {graph.node_count} nodes, "
                 f"{graph.candidate_count} candidate moves, "
                 f"{graph.symmetric_count} symmetrical")
    return graph
