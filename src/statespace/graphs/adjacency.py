"""Labeled graph collaborator backed by adjacency maps."""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from statespace.search.arena import PathArena
from statespace.search.cost import Cost, check_cost
from statespace.search.driver import (
    SearchConfig, SearchHandle, SearchResult, SearchSignal, depth_first_search, search
)
from statespace.search.frontier import Discipline

logger = logging.getLogger(__name__)


class AdjacencyGraph:
    """Graph of string labels with non-negative edge costs."""

    def __init__(self):
        self._edges: Dict[str, Dict[str, Cost]] = {}

    def add_label(self, label: str) -> None:
        self._edges.setdefault(label, {})

    def connect(self, a: str, b: str, cost: Cost = 1) -> None:
        """Add a one-way edge from a to b."""
        check_cost(cost, "edge cost")
        self.add_label(a)
        self.add_label(b)
        self._edges[a][b] = cost

    def connect2(self, a: str, b: str, cost: Cost = 1) -> None:
        """Add an edge in both directions."""
        self.connect(a, b, cost)
        self.connect(b, a, cost)

    def neighbors_of(self, label: str) -> List[str]:
        if label not in self._edges:
            raise KeyError(f"Unknown label: {label}")
        return list(self._edges[label])

    def edge_cost(self, a: str, b: str) -> Cost:
        return self._edges[a][b]

    def labels(self) -> List[str]:
        return list(self._edges)

    def __contains__(self, label: str) -> bool:
        return label in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    @classmethod
    def from_edges(cls, lines: Iterable[str], directed: bool = False) -> 'AdjacencyGraph':
        """Build a graph from edge lines.

        Each non-blank line is ``a-b`` (cost 1) or ``a-b:cost``.

        Args:
            lines: Edge lines
            directed: Create one-way edges instead of two-way edges

        Returns:
            Populated graph
        """
        graph = cls()
        for number, line in enumerate(lines, 1):
            line = line.strip()
            if not line:
                continue
            edge, _, cost_text = line.partition(':')
            parts = edge.split('-')
            if len(parts) != 2 or not all(parts):
                raise ValueError(f"Line {number}: expected 'a-b' or 'a-b:cost', got {line!r}")
            try:
                cost = int(cost_text) if cost_text else 1
            except ValueError:
                raise ValueError(f"Line {number}: invalid edge cost {cost_text!r}") from None
            a, b = (p.strip() for p in parts)
            if directed:
                graph.connect(a, b, cost)
            else:
                graph.connect2(a, b, cost)
        return graph

    @classmethod
    def load(cls, path: Union[str, Path], directed: bool = False) -> 'AdjacencyGraph':
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Graph file not found: {path}")
        with open(path, 'r') as f:
            return cls.from_edges(f, directed)

    def shortest_path(self, start: str, goal: str, discipline='priority',
                      config: Optional[SearchConfig] = None) -> SearchResult:
        """Search from start to goal using edge costs (ignored by fifo/lifo)."""
        for label in (start, goal):
            if label not in self:
                raise KeyError(f"Unknown label: {label}")

        weighted = Discipline.parse(discipline) is Discipline.PRIORITY

        def expand(label: str, handle: SearchHandle) -> SearchSignal:
            if label == goal:
                return SearchSignal.STOP
            for n, cost in self._edges[label].items():
                handle.enqueue(n, cost if weighted else 1)
            return SearchSignal.CONTINUE

        return search([start], expand, discipline, config=config)

    def all_simple_paths(self, start: str, goal: str,
                         revisitable: Optional[Callable[[str], bool]] = None) -> List[List[str]]:
        """Enumerate every path from start to goal by depth-first search.

        Each partial path is an arena slot, so each is a distinct search state
        and shared prefixes are stored once.

        Args:
            start: First label of every path
            goal: Last label of every path; paths stop there
            revisitable: Labels for which repeated visits are allowed. Two
                adjacent revisitable labels make the path set infinite.

        Returns:
            Paths in the order the search completes them
        """
        for label in (start, goal):
            if label not in self:
                raise KeyError(f"Unknown label: {label}")

        arena = PathArena()
        paths: List[List[str]] = []

        def expand(index: int, handle: SearchHandle) -> None:
            label = arena.get(index)
            if label == goal:
                paths.append(arena.path_to(index))
                return
            for n in self._edges[label]:
                if (revisitable is not None and revisitable(n)) or not arena.contains(index, n):
                    handle.enqueue(arena.alloc(n, index))

        result = depth_first_search(arena.alloc(start), expand)
        logger.debug(f"Enumerated {len(paths)} paths over {result.expanded} partial paths")
        return paths
