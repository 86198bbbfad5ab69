"""CLI command implementations."""

import logging
import time
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from pillar_solver.config import load_config, validate_config, ConfigValidationError
from pillar_solver.config.validators import validate_parameter_ranges
from pillar_solver.core.errors import PuzzleError
from pillar_solver.core.puzzle import Puzzle
from pillar_solver.integration.io import puzzle_to_dict
from pillar_solver.scenarios import get_scenario, list_scenarios, default_moves
from pillar_solver.search.branch_and_bound import SearchConfig

from .utils import (
    load_puzzle_from_file, save_results, format_duration, format_solution
)

logger = logging.getLogger(__name__)

# Exit code for a well-formed puzzle with no solution in the budget
EXIT_NO_SOLUTION = 2


class PillarSolver:
    """Ties configuration to the puzzle search entry points."""

    def __init__(self, config_overrides: Optional[List[str]] = None):
        """Initialize solver.

        Args:
            config_overrides: List of configuration overrides
        """
        try:
            self.config = load_config(overrides=config_overrides or [])
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        solver_cfg = self.config.get('solver', {})
        self.min_moves = int(solver_cfg.get('min_moves', 0))
        self.max_moves = int(solver_cfg.get('max_moves', 12))
        self.iterative_deepening = bool(solver_cfg.get('iterative_deepening', True))

        bnb_cfg = self.config.get('search', {}).get('branch_and_bound', {})
        self.search_config = SearchConfig(
            track_statistics=bool(bnb_cfg.get('track_statistics', True)),
            log_progress_every=int(bnb_cfg.get('log_progress_every', 0))
        )

        output_cfg = self.config.get('output', {})
        self.show_candidate_moves = bool(output_cfg.get('show_candidate_moves', False))
        self.pretty_json = bool(output_cfg.get('pretty_json', True))

        logger.info("Pillar solver initialized successfully")

    def solve_puzzle(self, puzzle: Puzzle, moves: Optional[int] = None) -> Dict[str, Any]:
        """Solve a puzzle and describe the outcome.

        Args:
            puzzle: Puzzle to solve
            moves: Exact move budget; iterative deepening is used when None

        Returns:
            Dictionary with solution results

        Raises:
            PuzzleError: If the puzzle definition is inconsistent
        """
        start_time = time.perf_counter()

        if moves is not None:
            result = puzzle.search(moves, self.search_config)
        elif self.iterative_deepening:
            result = puzzle.solve_shortest(self.max_moves, self.min_moves, self.search_config)
        else:
            result = puzzle.search(self.max_moves, self.search_config)

        report = result.to_dict()
        report.update({
            'puzzle': puzzle_to_dict(puzzle),
            'total_time': time.perf_counter() - start_time,
        })
        if self.show_candidate_moves:
            report['candidate_moves'] = puzzle.dump_moves()
        return report


def _config_overrides(args) -> List[str]:
    overrides = []
    if getattr(args, 'max_moves', None) is not None:
        overrides.append(f"solver.max_moves={args.max_moves}")
    if getattr(args, 'min_moves', None) is not None:
        overrides.append(f"solver.min_moves={args.min_moves}")
    if getattr(args, 'show_candidates', False):
        overrides.append("output.show_candidate_moves=true")
    if getattr(args, 'config', None):
        overrides.append(args.config)
    return overrides


def _report(solver: PillarSolver, result: Dict[str, Any], args) -> int:
    """Print or save a solve report and map it to an exit code."""
    if args.output:
        save_results(result, args.output, pretty=solver.pretty_json)
        logger.info(f"Results saved to {args.output}")

    for line in result.get('candidate_moves', []):
        print(line)

    if result['success']:
        steps = [f"{m['source']} -> {m['target']} = {m['distance']}" for m in result['moves']]
        for line in format_solution(steps):
            print(line)
    else:
        print(f"No solution within {result['target_length']} moves")

    if not args.quiet:
        stats = result['search_stats']
        print(f"\nPuzzle: {result['puzzle']['name']}")
        print(f"Nodes expanded: {stats['nodes_expanded']}")
        print(f"Computation time: {format_duration(result['total_time'])}")

    return 0 if result['success'] else EXIT_NO_SOLUTION


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        logger.info(f"Loading puzzle from {args.puzzle_file}")
        puzzle, file_moves = load_puzzle_from_file(args.puzzle_file)

        overrides = _config_overrides(args)
        # A budget stored in the file bounds the deepening unless overridden
        if file_moves is not None and args.max_moves is None:
            overrides.insert(0, f"solver.max_moves={file_moves}")

        solver = PillarSolver(overrides)
        result = solver.solve_puzzle(puzzle, moves=args.moves)
        result['puzzle_file'] = str(args.puzzle_file)
        return _report(solver, result, args)

    except PuzzleError as e:
        logger.error(f"Invalid puzzle: {e}")
        return 1
    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def scenario_command(args) -> int:
    """Handle scenario command: solve or list the built-in levels."""
    try:
        if args.list or not args.name:
            for name in list_scenarios():
                print(f"{name}: {default_moves(name)} moves")
            return 0

        puzzle = get_scenario(args.name)
        moves = args.moves if args.moves is not None else default_moves(args.name)

        solver = PillarSolver(_config_overrides(args))
        result = solver.solve_puzzle(puzzle, moves=moves)
        return _report(solver, result, args)

    except KeyError as e:
        logger.error(str(e).strip("'\""))
        return 1
    except PuzzleError as e:
        logger.error(f"Invalid puzzle: {e}")
        return 1
    except Exception as e:
        logger.error(f"Scenario command failed: {e}")
        return 1


def dump_command(args) -> int:
    """Handle dump command: print every node's candidate moves."""
    try:
        if args.scenario:
            puzzle = get_scenario(args.scenario)
        elif args.puzzle_file:
            puzzle, _ = load_puzzle_from_file(args.puzzle_file)
        else:
            print("Either a puzzle file or --scenario is required")
            return 1

        for line in puzzle.dump_moves():
            print(line)
        return 0

    except Exception as e:
        logger.error(f"Dump command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=_config_overrides(args))
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=_config_overrides(args), validate=False)
                validate_config(config)
                print("✅ Configuration is valid")
                for warning in validate_parameter_ranges(config):
                    print(f"⚠️  {warning}")
                return 0
            except ConfigValidationError as e:
                print(f"❌ Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
