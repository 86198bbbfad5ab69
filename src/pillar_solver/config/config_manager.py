"""Hydra-composed solver configuration."""

import logging
from typing import List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

# Package defaults, shipped as package data
DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "conf"

# Most recently loaded configuration
_global_config: Optional[DictConfig] = None


class ConfigManager:
    """Composes solver settings from a Hydra config directory."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Directory holding `<name>.yaml`; package defaults if None

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        self.config_dir = Path(config_dir or DEFAULT_CONFIG_DIR).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose a configuration with Hydra override strings applied.

        Args:
            config_name: Config file name without the .yaml suffix
            overrides: Overrides such as "solver.max_moves=8"
            validate: Run validate_config on the composed result

        Returns:
            Composed configuration, also kept as the global configuration

        Raises:
            ConfigValidationError: If validation is requested and fails
        """
        global _global_config

        # Hydra refuses to initialize twice in one process
        GlobalHydra.instance().clear()
        with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
            cfg = compose(config_name=config_name, overrides=overrides or [])

        if validate:
            validate_config(cfg)

        self.config = cfg
        _global_config = cfg

        logger.debug(f"Composed '{config_name}' from {self.config_dir} "
                     f"with overrides {overrides or []}")
        return cfg


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Compose a configuration through a fresh ConfigManager."""
    return ConfigManager(config_dir).load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Configuration from the last load_config call, or None."""
    return _global_config
