"""Puzzle description file support."""

from .io import load_puzzle, parse_puzzle_data, puzzle_to_dict, puzzle_moves

__all__ = [
    'load_puzzle',
    'parse_puzzle_data',
    'puzzle_to_dict',
    'puzzle_moves'
]
