"""Pillar solver: shortest move sequences for token redistribution puzzles."""

from pillar_solver.core.puzzle import Puzzle
from pillar_solver.core.data_models import Move, MoveGraph, SolutionStep
from pillar_solver.core.errors import PuzzleError, ConservationError, InconsistentMoveGraphError

__version__ = "0.1.0"

__all__ = [
    'Puzzle',
    'Move',
    'MoveGraph',
    'SolutionStep',
    'PuzzleError',
    'ConservationError',
    'InconsistentMoveGraphError'
]
