"""Configuration validation for the search engine."""

import logging
from typing import List
from omegaconf import DictConfig

from statespace.search.frontier import Discipline, TIE_BREAKERS

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_logging_config(config.get('logging', {}))
        validate_cli_config(config.get('cli', {}))

        logger.debug("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    discipline = search_config.get('discipline', 'priority')
    try:
        Discipline.parse(discipline)
    except ValueError:
        raise ConfigValidationError(
            f"search.discipline must be fifo, lifo or priority, got {discipline}"
        )

    tie_breaker = search_config.get('tie_breaker', 'fifo')
    if tie_breaker not in TIE_BREAKERS:
        raise ConfigValidationError(
            f"search.tie_breaker must be one of {list(TIE_BREAKERS)}, got {tie_breaker}"
        )

    skip_stale = search_config.get('skip_stale_entries', True)
    if not isinstance(skip_stale, bool):
        raise ConfigValidationError(
            f"search.skip_stale_entries must be boolean, got {skip_stale}"
        )

    interval = search_config.get('progress_interval', 0)
    if not isinstance(interval, int) or isinstance(interval, bool) or interval < 0:
        raise ConfigValidationError(
            f"search.progress_interval must be non-negative integer, got {interval}"
        )


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section.

    Args:
        logging_config: Logging configuration section
    """
    if not logging_config:
        return

    level = logging_config.get('level', 'WARNING')
    if str(level).upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {list(LOG_LEVELS)}, got {level}"
        )


def validate_cli_config(cli_config: DictConfig) -> None:
    if not cli_config:
        return

    for key in ('show_path', 'show_stats'):
        value = cli_config.get(key, False)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"cli.{key} must be boolean, got {value}")


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check configuration consistency and return issues.

    Args:
        config: Configuration to check

    Returns:
        List of consistency issues (empty when consistent)
    """
    issues = []

    search_config = config.get('search', {})
    discipline = search_config.get('discipline', 'priority')
    try:
        uses_heap = Discipline.parse(discipline) is Discipline.PRIORITY
    except ValueError:
        return [f"Unknown discipline: {discipline}"]

    if not uses_heap and search_config.get('tie_breaker', 'fifo') != 'fifo':
        issues.append(f"tie_breaker has no effect for {discipline} discipline")
    if not uses_heap and not search_config.get('skip_stale_entries', True):
        issues.append(f"skip_stale_entries has no effect for {discipline} discipline")

    return issues
