"""Built-in reference puzzles.

Each scenario is plain data: (initial, required) per pillar, bi-links,
mono-links, and the move budget the level is known to be solvable in.
"""

from typing import Dict, List, Tuple, Any

from pillar_solver.core.puzzle import Puzzle


SCENARIOS: Dict[str, Dict[str, Any]] = {
    # Pillars anticlockwise from the top, linked in a ring
    "95": {
        "nodes": [(4, 9), (4, 3), (1, 0), (7, 9), (1, 3), (7, 0)],
        "links": [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0)],
        "mono_links": [],
        "moves": 7,
    },
    # Top row, then bottom row
    "96": {
        "nodes": [(0, 0), (0, 0), (0, 0), (2, 0), (0, 6), (0, 0), (1, 0), (3, 0)],
        "links": [(4, 0), (0, 1), (1, 5), (5, 6), (6, 2), (6, 3), (3, 7)],
        "mono_links": [],
        "moves": 4,
    },
    # Top row, middle row, bottom row
    "97": {
        "nodes": [(2, 0), (3, 0), (0, 4), (2, 6), (0, 1), (5, 0), (0, 1)],
        "links": [(0, 2), (1, 2), (1, 4), (4, 5), (5, 6), (3, 6)],
        "mono_links": [(3, 2)],
        "moves": 6,
    },
    # Top, second row, main row, bottom row
    "100": {
        "nodes": [(0, 4), (0, 4), (0, 4), (0, 0), (0, 0), (0, 0), (0, 0), (6, 0), (6, 0)],
        "links": [(3, 4), (4, 5), (5, 6)],
        "mono_links": [(1, 0), (2, 0), (3, 1), (6, 2), (7, 3), (8, 6)],
        "moves": 8,
    },
}


def list_scenarios() -> List[str]:
    """Names of the built-in scenarios."""
    return list(SCENARIOS)


def default_moves(name: str) -> int:
    """Move budget a scenario is meant to be solved in."""
    return SCENARIOS[name]["moves"]


def get_scenario(name: str) -> Puzzle:
    """Build a fresh Puzzle for a built-in scenario.

    Raises:
        KeyError: If no scenario has that name
    """
    if name not in SCENARIOS:
        raise KeyError(f"Unknown scenario '{name}', available: {', '.join(SCENARIOS)}")
    data = SCENARIOS[name]
    puzzle = Puzzle(name=f"level-{name}")
    for initial, required in data["nodes"]:
        puzzle.add_node(initial, required)
    _add_links(puzzle, data["links"], data["mono_links"])
    return puzzle


def _add_links(puzzle: Puzzle, links: List[Tuple[int, int]],
               mono_links: List[Tuple[int, int]]) -> None:
    for a, b in links:
        puzzle.add_bi_link(a, b)
    for a, b in mono_links:
        puzzle.add_mono_link(a, b)
