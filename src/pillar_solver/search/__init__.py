"""Search algorithms for the pillar solver.

This module implements the all-pairs distance precomputation that produces
candidate moves and the branch-and-bound search that combines them into a
minimal move sequence.
"""

from .distance_matrix import build_move_graph, compute_shortest_distances, find_reverse_move
from .branch_and_bound import (
    BranchAndBoundSearcher, SearchContext, SearchResult, SearchConfig,
    SearchStatistics, create_searcher
)

__all__ = [
    'build_move_graph',
    'compute_shortest_distances',
    'find_reverse_move',
    'BranchAndBoundSearcher',
    'SearchContext',
    'SearchResult',
    'SearchConfig',
    'SearchStatistics',
    'create_searcher'
]
