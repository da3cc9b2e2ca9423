"""Search driver: the dequeue/expand loop shared by every discipline.

The driver knows nothing about states beyond hashing and equality. Callers
supply origins and an expansion callback; the callback receives each
dequeued state together with a SearchHandle through which it enqueues
successors, and returns SearchSignal.STOP once the state satisfies its goal.
"""

import time
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from statespace.search.cost import Cost, CostModel, FrontierEntry, Heuristic
from statespace.search.frontier import Discipline, Frontier, TIE_BREAKERS, create_frontier
from statespace.search.ledger import VisitedLedger
from statespace.search.path import PathReconstructionError, reconstruct_path

logger = logging.getLogger(__name__)


class SearchSignal(Enum):
    """Returned by the expansion callback."""
    CONTINUE = "continue"
    STOP = "stop"


class SearchStatus(Enum):
    """Lifecycle of a single search run."""
    RUNNING = "running"
    EXHAUSTED = "exhausted"  # frontier emptied, no goal reached
    TERMINATED = "terminated"  # callback signalled STOP


@dataclass
class SearchConfig:
    """Configuration for the search driver."""
    discipline: str = "priority"
    tie_breaker: str = "fifo"  # order among equal priority keys
    skip_stale_entries: bool = True  # drop heap entries superseded by a cheaper path
    progress_interval: int = 0  # debug-log every N dequeues, 0 disables

    def __post_init__(self):
        Discipline.parse(self.discipline)
        if self.tie_breaker not in TIE_BREAKERS:
            raise ValueError(f"tie_breaker must be one of {TIE_BREAKERS}, got {self.tie_breaker!r}")
        if self.progress_interval < 0:
            raise ValueError(f"progress_interval must be non-negative, got {self.progress_interval}")

    @classmethod
    def from_config(cls, cfg=None) -> 'SearchConfig':
        """Build driver settings from a loaded Hydra configuration.

        Args:
            cfg: Configuration to read; the global configuration when None

        Returns:
            SearchConfig with defaults for any missing keys
        """
        if cfg is None:
            from statespace.config import get_config as _get_cfg
            cfg = _get_cfg()
        if cfg is None or 'search' not in cfg:
            return cls()

        scfg = cfg.search
        return cls(
            discipline=str(scfg.get('discipline', cls.discipline)),
            tie_breaker=str(scfg.get('tie_breaker', cls.tie_breaker)),
            skip_stale_entries=bool(scfg.get('skip_stale_entries', cls.skip_stale_entries)),
            progress_interval=int(scfg.get('progress_interval', cls.progress_interval)),
        )


@dataclass
class SearchResult:
    """Outcome of a search run."""
    status: SearchStatus
    terminal: Any = None
    cost: Optional[Cost] = None
    enqueued: int = 0
    dequeued: int = 0
    expanded: int = 0
    stale_skipped: int = 0
    max_frontier_size: int = 0
    computation_time: float = 0.0
    ledger: Optional[VisitedLedger] = field(default=None, repr=False)

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.TERMINATED

    @property
    def exhausted(self) -> bool:
        return self.status is SearchStatus.EXHAUSTED

    def path(self) -> List[Hashable]:
        """Reconstruct the path from origin to the terminal state.

        Raises:
            PathReconstructionError: If the search did not terminate at a goal
        """
        if not self.found:
            raise PathReconstructionError(f"No terminal state: search {self.status.value}")
        return reconstruct_path(self.ledger, self.terminal)

    def path_to(self, state: Hashable) -> List[Hashable]:
        """Reconstruct the path to any state admitted during the run."""
        return reconstruct_path(self.ledger, state)

    def stats(self) -> Dict[str, Any]:
        """Convert counters to dictionary."""
        return {
            'status': self.status.value,
            'cost': self.cost,
            'enqueued': self.enqueued,
            'dequeued': self.dequeued,
            'expanded': self.expanded,
            'stale_skipped': self.stale_skipped,
            'max_frontier_size': self.max_frontier_size,
            'visited_states': len(self.ledger) if self.ledger is not None else 0,
            'computation_time': self.computation_time,
        }


class SearchHandle:
    """View of the running search given to the expansion callback."""

    def __init__(self, driver: 'SearchDriver', entry: FrontierEntry):
        self._driver = driver
        self._entry = entry

    @property
    def state(self) -> Hashable:
        return self._entry.state

    @property
    def cost(self) -> Cost:
        """Accumulated cost of the state being expanded."""
        return self._entry.cost

    @property
    def depth(self) -> int:
        return self._entry.depth

    @property
    def ledger(self) -> VisitedLedger:
        return self._driver.ledger

    def enqueue(self, successor: Hashable, step_cost: Cost = 1) -> bool:
        """Offer a successor of the current state to the frontier.

        Args:
            successor: State reachable from the current state
            step_cost: Incremental cost of the edge to the successor

        Returns:
            True if the ledger admitted the successor and it was enqueued
        """
        return self._driver._offer(self._entry, successor, step_cost)


Expansion = Callable[[Hashable, SearchHandle], Optional[SearchSignal]]


class SearchDriver:
    """Runs one search from a set of origins to termination or exhaustion."""

    def __init__(self,
                 origins: Iterable[Hashable],
                 expand: Expansion,
                 discipline=None,
                 heuristic: Optional[Heuristic] = None,
                 config: Optional[SearchConfig] = None):
        """Initialize the driver and seed the frontier.

        Args:
            origins: One or more start states, each at cost 0
            expand: Expansion callback invoked once per dequeued state
            discipline: Frontier discipline; config.discipline when None
            heuristic: Remaining-cost estimate for A* (priority discipline only)
            config: Driver settings
        """
        self.config = config or SearchConfig()
        self.discipline = Discipline.parse(discipline if discipline is not None else self.config.discipline)
        if heuristic is not None and self.discipline is not Discipline.PRIORITY:
            logger.warning(f"Heuristic ignored for {self.discipline.value} discipline")
            heuristic = None

        self.expand = expand
        self.cost_model = CostModel(heuristic)
        self.frontier: Frontier = create_frontier(self.discipline, self.cost_model, self.config.tie_breaker)
        self.ledger = VisitedLedger(dominance=self.discipline.uses_dominance)
        self.status = SearchStatus.RUNNING

        self.enqueued = 0
        self.dequeued = 0
        self.expanded = 0
        self.stale_skipped = 0
        self.max_frontier_size = 0

        for origin in origins:
            if self.ledger.admit(origin, 0):
                self._push(self.cost_model.entry(origin, 0, 0))
        if not self.frontier:
            logger.warning("Search started without origin states")

    def _push(self, entry: FrontierEntry) -> None:
        self.frontier.enqueue(entry)
        self.enqueued += 1
        if len(self.frontier) > self.max_frontier_size:
            self.max_frontier_size = len(self.frontier)

    def _offer(self, parent: FrontierEntry, successor: Hashable, step_cost: Cost) -> bool:
        cost = self.cost_model.extend(parent.cost, step_cost)
        if not self.ledger.admit(successor, cost, parent.state):
            return False
        self._push(self.cost_model.entry(successor, cost, parent.depth + 1))
        return True

    def run(self) -> SearchResult:
        """Dequeue and expand states until STOP or an empty frontier.

        Returns:
            SearchResult with the terminal state (if any) and counters

        Raises:
            RuntimeError: If the driver has already run
            TypeError: If the callback returns something other than a SearchSignal or None
        """
        if self.status is not SearchStatus.RUNNING:
            raise RuntimeError(f"Search already finished: {self.status.value}")

        start_time = time.perf_counter()
        logger.info(f"Starting {self.discipline.value} search from {len(self.frontier)} origin(s)"
                    f"{' with heuristic' if self.cost_model.informed else ''}")

        skip_stale = self.ledger.dominance and self.config.skip_stale_entries
        interval = self.config.progress_interval
        terminal: Optional[FrontierEntry] = None

        while True:
            entry = self.frontier.dequeue()
            if entry is None:
                self.status = SearchStatus.EXHAUSTED
                break
            self.dequeued += 1

            if interval and self.dequeued % interval == 0:
                logger.debug(f"Dequeued {self.dequeued}, frontier={len(self.frontier)}, "
                             f"visited={len(self.ledger)}, cost={entry.cost}")

            if skip_stale and self.ledger.is_stale(entry.state, entry.cost):
                self.stale_skipped += 1
                continue

            self.expanded += 1
            signal = self.expand(entry.state, SearchHandle(self, entry))
            if signal is None or signal is SearchSignal.CONTINUE:
                continue
            if signal is SearchSignal.STOP:
                terminal = entry
                self.status = SearchStatus.TERMINATED
                break
            raise TypeError(f"Expansion callback must return SearchSignal or None, got {signal!r}")

        computation_time = time.perf_counter() - start_time
        result = SearchResult(
            status=self.status,
            terminal=terminal.state if terminal is not None else None,
            cost=terminal.cost if terminal is not None else None,
            enqueued=self.enqueued,
            dequeued=self.dequeued,
            expanded=self.expanded,
            stale_skipped=self.stale_skipped,
            max_frontier_size=self.max_frontier_size,
            computation_time=computation_time,
            ledger=self.ledger,
        )
        logger.info(f"Search {self.status.value}: cost={result.cost}, enqueued={self.enqueued}, "
                    f"dequeued={self.dequeued}, time={computation_time:.4f}s")
        return result


def search(origins: Iterable[Hashable],
           expand: Expansion,
           discipline=None,
           heuristic: Optional[Heuristic] = None,
           config: Optional[SearchConfig] = None) -> SearchResult:
    """Run a search from several origins.

    Args:
        origins: Start states
        expand: Expansion callback
        discipline: 'fifo', 'lifo', 'priority' or an alias such as 'astar'
        heuristic: Remaining-cost estimate for A*
        config: Driver settings

    Returns:
        SearchResult of the run
    """
    return SearchDriver(origins, expand, discipline, heuristic, config).run()


def _origin_list(start: Hashable, expand: Optional[Expansion],
                 origins: Optional[Iterable[Hashable]]) -> List[Hashable]:
    if expand is None:
        raise TypeError("An expansion callback is required")
    return list(origins) if origins is not None else [start]


def breadth_first_search(start: Hashable = None, expand: Optional[Expansion] = None,
                         config: Optional[SearchConfig] = None,
                         origins: Optional[Iterable[Hashable]] = None) -> SearchResult:
    """Breadth-first search from start, or from every state in origins when given."""
    return search(_origin_list(start, expand, origins), expand, Discipline.FIFO, config=config)


def depth_first_search(start: Hashable = None, expand: Optional[Expansion] = None,
                       config: Optional[SearchConfig] = None,
                       origins: Optional[Iterable[Hashable]] = None) -> SearchResult:
    return search(_origin_list(start, expand, origins), expand, Discipline.LIFO, config=config)


def best_first_search(start: Hashable = None, expand: Optional[Expansion] = None,
                      heuristic: Optional[Heuristic] = None,
                      config: Optional[SearchConfig] = None,
                      origins: Optional[Iterable[Hashable]] = None) -> SearchResult:
    """Uniform-cost search, or A* when a heuristic is given.

    Args:
        start: Single origin state
        expand: Expansion callback
        heuristic: Remaining-cost estimate; None for uniform-cost search
        config: Driver settings
        origins: Several origin states, used instead of start when given

    Returns:
        SearchResult of the run
    """
    return search(_origin_list(start, expand, origins), expand, Discipline.PRIORITY, heuristic, config)
