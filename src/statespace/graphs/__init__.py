"""Reference collaborators: weighted grids and labeled graphs wired to the search engine."""

from .grid import WeightedGrid, Position, MANHATTAN_DIRECTIONS
from .adjacency import AdjacencyGraph

__all__ = [
    'WeightedGrid',
    'Position',
    'MANHATTAN_DIRECTIONS',
    'AdjacencyGraph'
]
