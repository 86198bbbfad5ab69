"""Reading and writing puzzle description files.

A puzzle file is a JSON object:

    {
        "name": "level-95",
        "nodes": [[4, 9], {"initial": 4, "required": 3}, ...],
        "links": [[0, 1], ...],        # two-directional
        "mono_links": [[3, 2], ...],   # one-directional
        "moves": 7                     # optional move budget
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pillar_solver.core.puzzle import Puzzle


def _parse_node(entry: Any, position: int) -> Tuple[int, int]:
    if isinstance(entry, dict):
        try:
            return int(entry["initial"]), int(entry["required"])
        except KeyError as e:
            raise ValueError(f"Node {position} is missing field {e}")
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        return int(entry[0]), int(entry[1])
    raise ValueError(f"Node {position} must be [initial, required] or an object, got {entry!r}")


def _parse_links(data: Dict[str, Any], key: str) -> List[Tuple[int, int]]:
    links = []
    for position, entry in enumerate(data.get(key, [])):
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"{key}[{position}] must be a pair of node indices, got {entry!r}")
        links.append((int(entry[0]), int(entry[1])))
    return links


def parse_puzzle_data(data: Dict[str, Any], name: Optional[str] = None) -> Puzzle:
    """Build a Puzzle from a decoded puzzle description.

    Args:
        data: Decoded JSON object
        name: Fallback name when the data carries none

    Returns:
        Puzzle with nodes and links added in file order

    Raises:
        ValueError: If the description is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Puzzle description must be a JSON object")
    if "nodes" not in data:
        raise ValueError("Puzzle description has no 'nodes'")

    puzzle = Puzzle(name=data.get("name", name))
    for position, entry in enumerate(data["nodes"]):
        initial, required = _parse_node(entry, position)
        puzzle.add_node(initial, required)

    try:
        for a, b in _parse_links(data, "links"):
            puzzle.add_bi_link(a, b)
        for a, b in _parse_links(data, "mono_links"):
            puzzle.add_mono_link(a, b)
    except IndexError as e:
        raise ValueError(f"Invalid link: {e}")

    return puzzle


def puzzle_moves(data: Dict[str, Any]) -> Optional[int]:
    """Move budget stored in a puzzle description, if any."""
    moves = data.get("moves")
    return int(moves) if moves is not None else None


def load_puzzle(file_path: Union[str, Path]) -> Tuple[Puzzle, Optional[int]]:
    """Load a puzzle file.

    Returns:
        (puzzle, move budget from the file or None)
    """
    file_path = Path(file_path)
    with open(file_path, 'r') as f:
        data = json.load(f)
    return parse_puzzle_data(data, name=file_path.stem), puzzle_moves(data)


def puzzle_to_dict(puzzle: Puzzle, moves: Optional[int] = None) -> Dict[str, Any]:
    """Serialise a Puzzle back to its description format."""
    data: Dict[str, Any] = {
        "name": puzzle.name,
        "nodes": [[node.initial, node.required] for node in puzzle.nodes],
        "links": [[a, b] for a, b, bidirectional in puzzle.links if bidirectional],
        "mono_links": [[a, b] for a, b, bidirectional in puzzle.links if not bidirectional],
    }
    if moves is not None:
        data["moves"] = moves
    return data

