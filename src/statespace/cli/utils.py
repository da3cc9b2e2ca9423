"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from omegaconf import OmegaConf

from statespace.search.driver import SearchResult


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    # basicConfig leaves an already-configured root logger alone
    logging.getLogger().setLevel(level)

    # Reduce noise from Hydra's own loggers
    logging.getLogger('hydra').setLevel(logging.WARNING)


def verbosity_to_level(verbose: int, quiet: bool = False) -> int:
    if quiet:
        return logging.ERROR
    if verbose == 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def logging_settings(cfg) -> Tuple[int, Optional[str]]:
    """Read the logging level and format from a loaded configuration.

    Unknown level names fall back to WARNING; validation reports them.
    """
    name = str(OmegaConf.select(cfg, 'logging.level', default='WARNING')).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
    format_string = OmegaConf.select(cfg, 'logging.format', default=None)
    return level, format_string


def parse_position(text: str) -> Tuple[int, int]:
    """Parse a ``row,col`` pair.

    Raises:
        ValueError: If the text is not two comma-separated integers
    """
    parts = text.split(',')
    if len(parts) != 2:
        raise ValueError(f"Position must be 'row,col', got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Position must be 'row,col', got {text!r}") from None


def result_to_dict(result: SearchResult, include_path: bool = False) -> Dict[str, Any]:
    """Convert a search result to a JSON-serializable dictionary."""
    payload: Dict[str, Any] = {
        'found': result.found,
        'terminal': result.terminal,
        'cost': result.cost,
        'stats': result.stats(),
    }
    if include_path and result.found:
        payload['path'] = result.path()
    return payload


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Tuples (grid positions) and numpy scalars are not JSON types
    def convert(obj):
        if hasattr(obj, 'tolist'):
            return obj.tolist()
        elif isinstance(obj, dict):
            return {k: convert(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [convert(item) for item in obj]
        else:
            return obj

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(convert(results), f, indent=2, sort_keys=True)
        else:
            json.dump(convert(results), f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
