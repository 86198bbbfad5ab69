"""Configuration validation for the pillar solver."""

import logging
from typing import Any, List
from omegaconf import DictConfig

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_solver_config(config.get('solver', {}))
        validate_search_config(config.get('search', {}))
        validate_output_config(config.get('output', {}))

        logger.info("Configuration validation passed")

    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_solver_config(solver_config: DictConfig) -> None:
    """Validate solver configuration section.

    Args:
        solver_config: Solver configuration section
    """
    if not solver_config:
        return

    max_moves = solver_config.get('max_moves', 12)
    if not _is_int(max_moves) or max_moves < 0:
        raise ConfigValidationError(
            f"max_moves must be non-negative integer, got {max_moves}"
        )

    min_moves = solver_config.get('min_moves', 0)
    if not _is_int(min_moves) or min_moves < 0 or min_moves > max_moves:
        raise ConfigValidationError(
            f"min_moves must be integer between 0 and max_moves ({max_moves}), got {min_moves}"
        )

    deepening = solver_config.get('iterative_deepening', True)
    if not isinstance(deepening, bool):
        raise ConfigValidationError(
            f"iterative_deepening must be boolean, got {deepening}"
        )


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    bnb_config = search_config.get('branch_and_bound', {})
    if bnb_config:
        track = bnb_config.get('track_statistics', True)
        if not isinstance(track, bool):
            raise ConfigValidationError(
                f"branch_and_bound.track_statistics must be boolean, got {track}"
            )

        interval = bnb_config.get('log_progress_every', 0)
        if not _is_int(interval) or interval < 0:
            raise ConfigValidationError(
                f"branch_and_bound.log_progress_every must be non-negative integer, got {interval}"
            )


def validate_output_config(output_config: DictConfig) -> None:
    """Validate output configuration section."""
    if not output_config:
        return

    for key in ['show_candidate_moves', 'pretty_json']:
        value = output_config.get(key, False)
        if not isinstance(value, bool):
            raise ConfigValidationError(
                f"output.{key} must be boolean, got {value}"
            )


def validate_parameter_ranges(config: DictConfig) -> List[str]:
    """Validate parameter ranges and return warnings.

    Args:
        config: Configuration to validate

    Returns:
        List of warning messages
    """
    warnings = []

    solver_config = config.get('solver', {})
    if solver_config:
        max_moves = solver_config.get('max_moves', 12)
        if max_moves > 20:
            warnings.append(
                f"max_moves {max_moves} may make exhaustive search impractically slow"
            )
        if not solver_config.get('iterative_deepening', True) and solver_config.get('min_moves', 0) > 0:
            warnings.append("min_moves has no effect when iterative_deepening is disabled")

    return warnings
