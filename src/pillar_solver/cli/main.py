"""Main CLI entry point for the pillar solver."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='pillar-solver',
        description='Pillar Solver - shortest move sequences for token redistribution puzzles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pillar-solver solve puzzle.json               # Shortest solution by iterative deepening
  pillar-solver solve puzzle.json --moves 7     # Search a fixed move budget
  pillar-solver scenario 95                     # Solve a built-in level
  pillar-solver dump --scenario 97              # Show precomputed candidate moves
  pillar-solver config show                     # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration override (e.g., solver.max_moves=10)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a puzzle file',
        description='Solve a puzzle described in a JSON file'
    )

    solve_parser.add_argument(
        'puzzle_file',
        type=str,
        help='Path to puzzle JSON file'
    )

    solve_parser.add_argument(
        '--moves', '-m',
        type=int,
        help='Search exactly this move budget instead of deepening'
    )

    solve_parser.add_argument(
        '--max-moves',
        type=int,
        help='Upper bound for iterative deepening'
    )

    solve_parser.add_argument(
        '--min-moves',
        type=int,
        help='Lower bound for iterative deepening'
    )

    solve_parser.add_argument(
        '--show-candidates',
        action='store_true',
        help='Print the precomputed candidate moves before the solution'
    )

    # Scenario command
    scenario_parser = subparsers.add_parser(
        'scenario',
        help='Solve a built-in level',
        description='Solve one of the built-in reference levels'
    )

    scenario_parser.add_argument(
        'name',
        nargs='?',
        help='Scenario name (see --list)'
    )

    scenario_parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List available scenarios'
    )

    scenario_parser.add_argument(
        '--moves', '-m',
        type=int,
        help='Move budget (default: the level\'s own budget)'
    )

    scenario_parser.add_argument(
        '--show-candidates',
        action='store_true',
        help='Print the precomputed candidate moves before the solution'
    )

    # Dump command
    dump_parser = subparsers.add_parser(
        'dump',
        help='Show candidate moves',
        description='Print every node\'s candidate moves with distance and symmetry'
    )

    dump_parser.add_argument(
        'puzzle_file',
        type=str,
        nargs='?',
        help='Path to puzzle JSON file'
    )

    dump_parser.add_argument(
        '--scenario', '-s',
        type=str,
        help='Dump a built-in scenario instead of a file'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Manage solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 2 when no solution exists, 1 for errors)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'scenario':
            return commands.scenario_command(parsed_args)
        if parsed_args.command == 'dump':
            return commands.dump_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
