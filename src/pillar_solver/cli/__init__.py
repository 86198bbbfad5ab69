"""Command-line interface for the pillar solver.

This module provides CLI commands for solving puzzle files and built-in levels.
"""

from .main import main_cli
from .commands import solve_command, scenario_command, dump_command, config_command
from .utils import setup_logging, load_puzzle_from_file, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'scenario_command',
    'dump_command',
    'config_command',
    'setup_logging',
    'load_puzzle_from_file',
    'save_results'
]
