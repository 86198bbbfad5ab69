"""Puzzle definition types and the solve entry point."""

from .data_models import PuzzleNode, Move, MoveGraph, SolutionStep, UNREACHABLE
from .errors import PuzzleError, ConservationError, InconsistentMoveGraphError

__all__ = [
    'PuzzleNode',
    'Move',
    'MoveGraph',
    'SolutionStep',
    'UNREACHABLE',
    'PuzzleError',
    'ConservationError',
    'InconsistentMoveGraphError'
]
