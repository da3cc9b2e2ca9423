"""Command-line interface for the statespace search engine.

This module provides CLI commands for searching weighted grids and labeled
graphs and for inspecting the configuration.
"""

from .main import main_cli, create_parser
from .commands import grid_command, graph_command, config_command
from .utils import setup_logging, save_results, parse_position, result_to_dict

__all__ = [
    'main_cli',
    'create_parser',
    'grid_command',
    'graph_command',
    'config_command',
    'setup_logging',
    'save_results',
    'parse_position',
    'result_to_dict'
]
