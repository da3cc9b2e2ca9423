"""Generic state-space search engine.

This module unifies breadth-first, depth-first, uniform-cost and A* search
behind one driver loop with interchangeable frontier disciplines, a visited
ledger with dominance, and parent-pointer path reconstruction.
"""

from .cost import CostModel, FrontierEntry, check_cost
from .ledger import VisitedLedger, LedgerEntry, StateNotFoundError
from .frontier import (
    Discipline, Frontier, FifoFrontier, LifoFrontier, PriorityFrontier, create_frontier
)
from .path import reconstruct_path, path_cost, PathReconstructionError
from .arena import PathArena
from .driver import (
    SearchDriver, SearchHandle, SearchResult, SearchConfig, SearchSignal, SearchStatus,
    search, breadth_first_search, depth_first_search, best_first_search
)

__all__ = [
    'CostModel',
    'FrontierEntry',
    'check_cost',
    'VisitedLedger',
    'LedgerEntry',
    'StateNotFoundError',
    'Discipline',
    'Frontier',
    'FifoFrontier',
    'LifoFrontier',
    'PriorityFrontier',
    'create_frontier',
    'reconstruct_path',
    'path_cost',
    'PathReconstructionError',
    'PathArena',
    'SearchDriver',
    'SearchHandle',
    'SearchResult',
    'SearchConfig',
    'SearchSignal',
    'SearchStatus',
    'search',
    'breadth_first_search',
    'depth_first_search',
    'best_first_search'
]
