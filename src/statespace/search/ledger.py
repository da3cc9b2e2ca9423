"""Visited ledger: best known cost and parent for every admitted state."""

import logging
from typing import Any, Dict, Hashable, Iterator, NamedTuple, Optional

from statespace.search.cost import Cost

logger = logging.getLogger(__name__)


class StateNotFoundError(KeyError):
    """Raised when a state is looked up that the ledger never admitted."""
    pass


class LedgerEntry(NamedTuple):
    """Best cost recorded for a state and the parent that achieved it.

    Origins have ``origin`` set and ``parent`` None; any other entry's
    parent is a real state, which may itself be None.
    """
    cost: Cost
    parent: Optional[Hashable]
    origin: bool = False


# Marks "no parent" so that None stays usable as a state
_NO_PARENT = object()


class VisitedLedger:
    """Mapping from state to (best cost, parent).

    In seen-set mode (breadth-first and depth-first search) a state is
    admitted exactly once. In dominance mode (uniform-cost and A*) a state is
    also re-admitted whenever a strictly cheaper path to it is found, and the
    new cost and parent replace the old ones.
    """

    def __init__(self, dominance: bool = False):
        """Initialize an empty ledger.

        Args:
            dominance: Re-admit states reached at a strictly lower cost
        """
        self.dominance = dominance
        self._entries: Dict[Hashable, LedgerEntry] = {}
        self.readmissions = 0

    def admit(self, state: Hashable, cost: Cost = 0, parent: Any = _NO_PARENT) -> bool:
        """Record a state if it is worth exploring.

        Args:
            state: Newly generated state
            cost: Accumulated cost of the path reaching it
            parent: Predecessor state; omit for an origin

        Returns:
            True if the state was recorded and should be enqueued
        """
        previous = self._entries.get(state)
        if previous is not None:
            if not self.dominance or cost >= previous.cost:
                return False
            self.readmissions += 1
            logger.debug(f"Cheaper path to {state!r}: {previous.cost} -> {cost}")
        if parent is _NO_PARENT:
            self._entries[state] = LedgerEntry(cost, None, origin=True)
        else:
            self._entries[state] = LedgerEntry(cost, parent)
        return True

    def entry(self, state: Hashable) -> LedgerEntry:
        try:
            return self._entries[state]
        except KeyError:
            raise StateNotFoundError(state) from None

    def cost_of(self, state: Hashable) -> Cost:
        return self.entry(state).cost

    def parent_of(self, state: Hashable) -> Optional[Hashable]:
        """Predecessor of a state; None for origins (see is_origin)."""
        return self.entry(state).parent

    def is_origin(self, state: Hashable) -> bool:
        return self.entry(state).origin

    def is_stale(self, state: Hashable, cost: Cost) -> bool:
        """Check whether a cheaper path to the state has since been recorded."""
        previous = self._entries.get(state)
        return previous is not None and cost > previous.cost

    def items(self) -> Iterator:
        return iter(self._entries.items())

    def to_dict(self) -> Dict[Any, Dict[str, Any]]:
        """Convert the ledger to a plain dictionary."""
        return {
            state: {'cost': entry.cost, 'parent': entry.parent}
            for state, entry in self._entries.items()
        }

    def __contains__(self, state: Hashable) -> bool:
        return state in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __repr__(self) -> str:
        mode = "dominance" if self.dominance else "seen-set"
        return f"VisitedLedger({mode}, states={len(self)})"
