"""Main CLI entry point for the statespace search engine."""

import sys
import argparse
import logging
from typing import List, Optional

from statespace.config import load_config

from . import commands
from .utils import logging_settings, setup_logging, verbosity_to_level

DISCIPLINE_CHOICES = ['bfs', 'dfs', 'ucs', 'astar']


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='statespace',
        description='Generic BFS / DFS / uniform-cost / A* state-space search',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  statespace grid risks.txt                          # Cheapest path, top-left to bottom-right
  statespace grid risks.txt --discipline astar --stats
  statespace graph edges.txt --start A --goal D      # Cheapest route between labels
  statespace graph caves.txt --start start --goal end --all-paths
  statespace config show                             # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        help='Configuration override (e.g., search.tie_breaker=lifo); repeatable'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Grid command
    grid_parser = subparsers.add_parser(
        'grid',
        help='Search a grid of digit weights',
        description='Find the cheapest path through a file of digit rows'
    )
    grid_parser.add_argument('grid_file', type=str, help='Path to a file of digit rows')
    grid_parser.add_argument(
        '--discipline', '-d',
        choices=DISCIPLINE_CHOICES,
        default=None,
        help='Search discipline (default: search.discipline from the configuration)'
    )
    grid_parser.add_argument('--start', type=str, default='0,0', help='Start cell as row,col (default: 0,0)')
    grid_parser.add_argument('--goal', type=str, help='Goal cell as row,col (default: bottom-right)')
    grid_parser.add_argument('--show-path', action='store_true', help='Include the path in the output')
    grid_parser.add_argument('--stats', action='store_true', help='Print enqueue/dequeue counters')

    # Graph command
    graph_parser = subparsers.add_parser(
        'graph',
        help='Search a labeled edge list',
        description="Search a graph given as lines 'a-b' or 'a-b:cost'"
    )
    graph_parser.add_argument('graph_file', type=str, help='Path to the edge list')
    graph_parser.add_argument('--start', type=str, required=True, help='Start label')
    graph_parser.add_argument('--goal', type=str, required=True, help='Goal label')
    graph_parser.add_argument(
        '--discipline', '-d',
        choices=DISCIPLINE_CHOICES,
        default=None,
        help='Search discipline (default: search.discipline from the configuration)'
    )
    graph_parser.add_argument('--directed', action='store_true', help='Treat edges as one-way')
    graph_parser.add_argument('--all-paths', action='store_true',
                              help='Enumerate every simple path instead of the cheapest one')
    graph_parser.add_argument('--show-path', action='store_true', help='Include the path in the output')
    graph_parser.add_argument('--stats', action='store_true', help='Print enqueue/dequeue counters')

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect the search configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        level = verbosity_to_level(parsed_args.verbose, parsed_args.quiet)
        format_string = None
        if not parsed_args.verbose and not parsed_args.quiet:
            # Without -v/-q the configured logging section applies
            cfg = load_config(overrides=list(parsed_args.config or []), validate=False)
            level, format_string = logging_settings(cfg)
        setup_logging(level, format_string)

        if parsed_args.command == 'grid':
            return commands.grid_command(parsed_args)
        if parsed_args.command == 'graph':
            return commands.graph_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
