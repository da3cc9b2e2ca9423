"""CLI command implementations."""

import json
import logging
from typing import Any, Dict, Tuple

from statespace.config import (
    ConfigManager, load_config, get_parameter, validate_config, check_config_consistency, ConfigValidationError
)
from statespace.graphs import AdjacencyGraph, WeightedGrid
from statespace.search.driver import SearchConfig
from statespace.search.frontier import Discipline

from .utils import format_duration, parse_position, result_to_dict, save_results

logger = logging.getLogger(__name__)

# CLI discipline name -> (engine discipline, use heuristic)
DISCIPLINES = {
    'bfs': ('fifo', False),
    'dfs': ('lifo', False),
    'ucs': ('priority', False),
    'astar': ('priority', True),
}


def _resolve_discipline(args, search_config: SearchConfig) -> Tuple[str, str, bool]:
    """Pick the discipline from --discipline, else from search.discipline.

    Returns:
        (reported name, engine discipline, use heuristic)
    """
    name = args.discipline or search_config.discipline
    if name in DISCIPLINES:
        return (name,) + DISCIPLINES[name]
    return name, Discipline.parse(name).value, False


def _load_settings(args) -> SearchConfig:
    """Load the configuration with the -c overrides; it becomes the global one."""
    load_config(overrides=list(getattr(args, 'config', None) or []))
    return SearchConfig.from_config()


def _emit(payload: Dict[str, Any], args) -> None:
    if getattr(args, 'output', None):
        save_results(payload, args.output)
        logger.info(f"Results saved to {args.output}")
    else:
        print(json.dumps(payload, indent=2, default=list))


def _print_stats(payload: Dict[str, Any]) -> None:
    stats = payload['stats']
    print(f"Enqueued: {stats['enqueued']} Dequeued: {stats['dequeued']} "
          f"Expanded: {stats['expanded']} Visited: {stats['visited_states']}")
    print(f"Computation time: {format_duration(stats['computation_time'])}")


def grid_command(args) -> int:
    """Handle grid command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        search_config = _load_settings(args)
        grid = WeightedGrid.load(args.grid_file)
        start = parse_position(args.start)
        goal = parse_position(args.goal) if args.goal else grid.corner_goal()
        name, discipline, use_heuristic = _resolve_discipline(args, search_config)

        logger.info(f"Searching {grid} from {start} to {goal} with {name}")
        result = grid.shortest_path(start, goal, discipline, use_heuristic, search_config)

        show_path = args.show_path or bool(get_parameter('cli.show_path', False))
        payload = result_to_dict(result, include_path=show_path)
        payload.update({'grid_file': str(args.grid_file), 'discipline': name})
        _emit(payload, args)

        if args.stats or get_parameter('cli.show_stats', False):
            _print_stats(payload)
        if not result.found:
            logger.warning(f"Goal {goal} is unreachable from {start}")
        return 0

    except Exception as e:
        logger.error(f"Grid command failed: {e}")
        return 1


def graph_command(args) -> int:
    """Handle graph command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        search_config = _load_settings(args)
        graph = AdjacencyGraph.load(args.graph_file, directed=args.directed)

        if args.all_paths:
            paths = graph.all_simple_paths(args.start, args.goal)
            _emit({'graph_file': str(args.graph_file), 'count': len(paths), 'paths': paths}, args)
            return 0

        name, discipline, use_heuristic = _resolve_discipline(args, search_config)
        if use_heuristic:
            logger.info("No heuristic is available for labeled graphs; running uniform-cost search")
        result = graph.shortest_path(args.start, args.goal, discipline, search_config)

        show_path = args.show_path or bool(get_parameter('cli.show_path', False))
        payload = result_to_dict(result, include_path=show_path)
        payload.update({'graph_file': str(args.graph_file), 'discipline': name})
        _emit(payload, args)

        if args.stats or get_parameter('cli.show_stats', False):
            _print_stats(payload)
        return 0

    except Exception as e:
        logger.error(f"Graph command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        overrides = list(getattr(args, 'config', None) or [])
        if args.config_action == 'show':
            manager = ConfigManager()
            manager.load_config(overrides=overrides)
            print("Current Configuration:")
            print("=" * 50)
            print(manager.to_yaml())
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=overrides, validate=False)
                validate_config(config)
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1
            for issue in check_config_consistency(config):
                print(f"Warning: {issue}")
            print("Configuration is valid")
            return 0

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
