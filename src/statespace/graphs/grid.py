"""Weighted 2-D grid collaborator.

Positions are (row, col) tuples. Entering a cell costs that cell's weight,
so the origin's own weight is never paid.
"""

import logging
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, Iterator, Optional, Tuple, Union
import numpy as np

from statespace.search.cost import Cost
from statespace.search.driver import (
    SearchConfig, SearchHandle, SearchResult, SearchSignal, breadth_first_search, search
)
from statespace.search.frontier import Discipline

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# N, E, S, W as (d_row, d_col)
MANHATTAN_DIRECTIONS = ((-1, 0), (0, 1), (1, 0), (0, -1))


class WeightedGrid:
    """Rectangular grid of non-negative cell weights."""

    def __init__(self, weights):
        weights = np.asarray(weights)
        if weights.ndim != 2 or weights.size == 0:
            raise ValueError(f"Grid must be a non-empty 2-D array, got shape {weights.shape}")
        if not np.issubdtype(weights.dtype, np.number):
            raise ValueError(f"Grid weights must be numeric, got {weights.dtype}")
        if (weights < 0).any():
            raise ValueError("Grid weights must be non-negative")
        self.weights = weights

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Cost]]) -> 'WeightedGrid':
        return cls(np.array([list(row) for row in rows]))

    @classmethod
    def from_digits(cls, lines: Iterable[str]) -> 'WeightedGrid':
        """Build a grid from lines of single-digit weights.

        Args:
            lines: Text rows such as ``"1163"``; blank lines are skipped

        Returns:
            WeightedGrid with integer weights
        """
        rows = []
        for line in lines:
            line = line.strip()
            if not line:
                continue
            if not line.isdigit():
                raise ValueError(f"Non-digit characters in grid row: {line!r}")
            rows.append([int(c) for c in line])
        if not rows:
            raise ValueError("Grid has no rows")
        if len({len(row) for row in rows}) != 1:
            raise ValueError("Grid rows have different lengths")
        return cls(np.array(rows, dtype=np.int64))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'WeightedGrid':
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Grid file not found: {path}")
        with open(path, 'r') as f:
            return cls.from_digits(f)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.weights.shape

    @property
    def height(self) -> int:
        return self.weights.shape[0]

    @property
    def width(self) -> int:
        return self.weights.shape[1]

    @property
    def min_weight(self) -> Cost:
        return self.weights.min().item()

    def in_bounds(self, p: Position) -> bool:
        row, col = p
        return 0 <= row < self.height and 0 <= col < self.width

    def weight(self, p: Position) -> Cost:
        if not self.in_bounds(p):
            raise IndexError(f"Position out of bounds: {p}")
        return self.weights[p].item()

    def neighbors(self, p: Position) -> Iterator[Position]:
        """In-bounds 4-directional neighbors."""
        row, col = p
        for d_row, d_col in MANHATTAN_DIRECTIONS:
            n = (row + d_row, col + d_col)
            if self.in_bounds(n):
                yield n

    @staticmethod
    def manhattan(p: Position, q: Position) -> int:
        return abs(p[0] - q[0]) + abs(p[1] - q[1])

    def corner_goal(self) -> Position:
        return (self.height - 1, self.width - 1)

    def heuristic_to(self, goal: Position) -> Callable[[Position], Cost]:
        """Admissible estimate: every remaining step costs at least the minimum weight."""
        floor = self.min_weight
        return lambda p: self.manhattan(p, goal) * floor

    def shortest_path(self,
                      start: Position = (0, 0),
                      goal: Optional[Position] = None,
                      discipline='priority',
                      use_heuristic: bool = False,
                      config: Optional[SearchConfig] = None) -> SearchResult:
        """Find a cheapest route between two cells.

        Args:
            start: Origin cell
            goal: Target cell, bottom-right corner when None
            discipline: 'fifo' counts steps; 'priority' sums entered weights
            use_heuristic: Order the priority frontier by Manhattan estimate (A*)
            config: Driver settings

        Returns:
            SearchResult; exhausted if the goal cannot be reached
        """
        goal = self.corner_goal() if goal is None else goal
        for p in (start, goal):
            if not self.in_bounds(p):
                raise IndexError(f"Position out of bounds: {p}")

        discipline = Discipline.parse(discipline)
        weighted = discipline is Discipline.PRIORITY
        heuristic = self.heuristic_to(goal) if weighted and use_heuristic else None

        def expand(p: Position, handle: SearchHandle) -> SearchSignal:
            if p == goal:
                return SearchSignal.STOP
            for n in self.neighbors(p):
                handle.enqueue(n, self.weight(n) if weighted else 1)
            return SearchSignal.CONTINUE

        return search([start], expand, discipline, heuristic, config)

    def flood_fill(self, start: Position, passable: Callable[[Cost], bool]) -> FrozenSet[Position]:
        """Cells reachable from start through cells whose weight is passable.

        Args:
            start: Origin cell, included regardless of its weight
            passable: Predicate over a cell weight

        Returns:
            Set of reached positions
        """
        def expand(p: Position, handle: SearchHandle) -> None:
            for n in self.neighbors(p):
                if passable(self.weight(n)):
                    handle.enqueue(n)

        result = breadth_first_search(start, expand)
        return frozenset(result.ledger)

    def __repr__(self) -> str:
        return f"WeightedGrid(shape={self.shape})"
