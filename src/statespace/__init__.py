"""statespace: generic breadth-first, depth-first, uniform-cost and A* search."""

from statespace.search import (
    Discipline, SearchConfig, SearchDriver, SearchResult, SearchSignal, SearchStatus,
    search, breadth_first_search, depth_first_search, best_first_search, reconstruct_path
)

__version__ = "0.1.0"

__all__ = [
    'Discipline',
    'SearchConfig',
    'SearchDriver',
    'SearchResult',
    'SearchSignal',
    'SearchStatus',
    'search',
    'breadth_first_search',
    'depth_first_search',
    'best_first_search',
    'reconstruct_path',
    '__version__'
]
