"""Frontier (open list) implementations for the three search disciplines."""

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Tuple

from statespace.search.cost import CostModel, FrontierEntry

logger = logging.getLogger(__name__)

TIE_BREAKERS = ('fifo', 'lifo')


class Discipline(Enum):
    """Order in which pending states are expanded."""
    FIFO = "fifo"  # breadth-first
    LIFO = "lifo"  # depth-first
    PRIORITY = "priority"  # uniform-cost or A*

    @classmethod
    def parse(cls, name) -> 'Discipline':
        """Resolve a discipline from its name or a common algorithm alias.

        Args:
            name: Discipline instance or name such as 'bfs', 'dfs', 'astar'

        Returns:
            Matching Discipline

        Raises:
            ValueError: If the name is not recognized
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace('-', '_')
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown search discipline: {name!r}") from None

    @property
    def uses_dominance(self) -> bool:
        return self is Discipline.PRIORITY


_ALIASES = {
    'fifo': Discipline.FIFO,
    'bfs': Discipline.FIFO,
    'breadth_first': Discipline.FIFO,
    'lifo': Discipline.LIFO,
    'dfs': Discipline.LIFO,
    'depth_first': Discipline.LIFO,
    'priority': Discipline.PRIORITY,
    'ucs': Discipline.PRIORITY,
    'dijkstra': Discipline.PRIORITY,
    'astar': Discipline.PRIORITY,
    'a*': Discipline.PRIORITY,
    'a_star': Discipline.PRIORITY,
    'best_first': Discipline.PRIORITY,
}


class Frontier(ABC):
    """Open list of discovered but unexpanded entries."""

    discipline: Discipline

    @abstractmethod
    def enqueue(self, entry: FrontierEntry) -> None:
        pass

    @abstractmethod
    def dequeue(self) -> Optional[FrontierEntry]:
        """Remove and return the next entry, or None when empty."""
        pass

    @abstractmethod
    def peek(self) -> Optional[FrontierEntry]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __bool__(self) -> bool:
        return len(self) > 0


class FifoFrontier(Frontier):
    """Queue: earliest enqueued entry comes out first."""

    discipline = Discipline.FIFO

    def __init__(self):
        self._queue: Deque[FrontierEntry] = deque()

    def enqueue(self, entry: FrontierEntry) -> None:
        self._queue.append(entry)

    def dequeue(self) -> Optional[FrontierEntry]:
        return self._queue.popleft() if self._queue else None

    def peek(self) -> Optional[FrontierEntry]:
        return self._queue[0] if self._queue else None

    def __len__(self) -> int:
        return len(self._queue)


class LifoFrontier(Frontier):
    """Stack: most recently enqueued entry comes out first."""

    discipline = Discipline.LIFO

    def __init__(self):
        self._stack: List[FrontierEntry] = []

    def enqueue(self, entry: FrontierEntry) -> None:
        self._stack.append(entry)

    def dequeue(self) -> Optional[FrontierEntry]:
        return self._stack.pop() if self._stack else None

    def peek(self) -> Optional[FrontierEntry]:
        return self._stack[-1] if self._stack else None

    def __len__(self) -> int:
        return len(self._stack)


class PriorityFrontier(Frontier):
    """Binary min-heap ordered by the cost model's key.

    Heap items are (key, sequence, entry). heapq is a min-heap, so the entry
    with the smallest key is dequeued first; the sequence number breaks ties
    by insertion order ('fifo') or reverse insertion order ('lifo') and keeps
    states themselves from ever being compared.
    """

    discipline = Discipline.PRIORITY

    def __init__(self, cost_model: Optional[CostModel] = None, tie_breaker: str = 'fifo'):
        if tie_breaker not in TIE_BREAKERS:
            raise ValueError(f"tie_breaker must be one of {TIE_BREAKERS}, got {tie_breaker!r}")
        self.cost_model = cost_model or CostModel()
        self.tie_breaker = tie_breaker
        self._heap: List[Tuple] = []
        self._counter = itertools.count()

    def enqueue(self, entry: FrontierEntry) -> None:
        sequence = next(self._counter)
        if self.tie_breaker == 'lifo':
            sequence = -sequence
        heapq.heappush(self._heap, (self.cost_model.key(entry), sequence, entry))

    def dequeue(self) -> Optional[FrontierEntry]:
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Optional[FrontierEntry]:
        return self._heap[0][2] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)


def create_frontier(discipline, cost_model: Optional[CostModel] = None,
                    tie_breaker: str = 'fifo') -> Frontier:
    """Factory function to create a frontier for a discipline.

    Args:
        discipline: Discipline or discipline name
        cost_model: Cost model ordering a priority frontier
        tie_breaker: Tie-breaking order for equal priority keys

    Returns:
        Empty frontier
    """
    discipline = Discipline.parse(discipline)
    if discipline is Discipline.FIFO:
        return FifoFrontier()
    if discipline is Discipline.LIFO:
        return LifoFrontier()
    return PriorityFrontier(cost_model, tie_breaker)
