"""Configuration manager using Hydra for hierarchical configuration."""

import logging
from typing import Any, List, Optional, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from .validators import validate_config

logger = logging.getLogger(__name__)

# Global configuration instance, read by SearchConfig.from_config()
_global_config: Optional[DictConfig] = None

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "conf"


class ConfigManager:
    """Composes the search configuration from a Hydra config directory."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory. If None, uses the packaged defaults.
        """
        if config_dir is None:
            config_dir = DEFAULT_CONFIG_DIR

        self.config_dir = Path(config_dir).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Configuration manager initialized with config_dir: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Load configuration with optional overrides.

        The loaded configuration also becomes the global one.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra overrides, e.g. ``search.discipline=fifo``
            validate: Whether to validate the configuration

        Returns:
            Loaded configuration

        Raises:
            ConfigValidationError: If validation is requested and fails
        """
        GlobalHydra.instance().clear()

        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides or [])

            if validate:
                validate_config(cfg)

        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise
        finally:
            GlobalHydra.instance().clear()

        self.config = cfg

        global _global_config
        _global_config = cfg

        logger.info(f"Configuration loaded: {config_name}")
        if overrides:
            logger.info(f"Applied overrides: {overrides}")

        return cfg

    def to_yaml(self, resolve: bool = True) -> str:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return OmegaConf.to_yaml(self.config, resolve=resolve)


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager.

    Args:
        config_name: Name of the main config file
        overrides: List of configuration overrides
        config_dir: Path to configuration directory
        validate: Whether to validate the configuration

    Returns:
        Loaded configuration
    """
    manager = ConfigManager(config_dir)
    return manager.load_config(config_name, overrides, validate)


def get_config() -> Optional[DictConfig]:
    """Get the global configuration, or None if nothing was loaded."""
    return _global_config


def reset_config() -> None:
    global _global_config
    _global_config = None


def get_parameter(key: str, default: Any = None) -> Any:
    """Get a parameter from global configuration.

    Args:
        key: Parameter key (supports dot notation, e.g. 'cli.show_path')
        default: Default value if key not found

    Returns:
        Parameter value or default
    """
    config = get_config()
    if config is None:
        logger.warning("No global configuration loaded")
        return default

    return OmegaConf.select(config, key, default=default)
