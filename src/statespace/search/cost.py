"""Cost model for priority-ordered search.

A frontier entry carries the accumulated path cost g(n) and, for A*, a
heuristic estimate h(n) of the cost remaining to a goal. The ordering key is
g(n) for uniform-cost search and g(n) + h(n) for A*.
"""

import math
import logging
from typing import Any, Callable, Hashable, Optional, Union
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Cost = Union[int, float]
Heuristic = Callable[[Hashable], Cost]


def check_cost(value: Cost, what: str = "cost") -> Cost:
    """Reject costs the engine cannot order correctly.

    Args:
        value: Cost value to check
        what: Name used in the error message

    Returns:
        The value unchanged

    Raises:
        ValueError: If the value is negative
        OverflowError: If a float value is not finite
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise OverflowError(f"{what} is not finite: {value!r}")
    if value < 0:
        raise ValueError(f"{what} must be non-negative, got {value!r}")
    return value


@dataclass(frozen=True)
class FrontierEntry:
    """Pending state with its accumulated cost and optional estimate."""
    state: Any
    cost: Cost = 0  # g(n)
    estimate: Optional[Cost] = None  # h(n), None outside A*
    depth: int = 0

    @property
    def priority(self) -> Cost:
        """Ordering key: g(n) or g(n) + h(n)."""
        if self.estimate is None:
            return self.cost
        return self.cost + self.estimate


class CostModel:
    """Builds frontier entries and their ordering keys.

    With no heuristic the model orders by accumulated cost alone (Dijkstra).
    With a heuristic it orders by accumulated cost plus estimate (A*). The
    heuristic is trusted: an overestimating heuristic loses the optimality
    guarantee but is not detected here.
    """

    def __init__(self, heuristic: Optional[Heuristic] = None):
        self.heuristic = heuristic

    @property
    def informed(self) -> bool:
        return self.heuristic is not None

    def estimate(self, state: Hashable) -> Optional[Cost]:
        if self.heuristic is None:
            return None
        return check_cost(self.heuristic(state), "heuristic estimate")

    def entry(self, state: Hashable, cost: Cost = 0, depth: int = 0) -> FrontierEntry:
        """Create a frontier entry for a state reached at the given cost."""
        return FrontierEntry(state, check_cost(cost), self.estimate(state), depth)

    def extend(self, cost: Cost, step: Cost) -> Cost:
        """Accumulate an edge cost onto a path cost.

        Args:
            cost: Accumulated cost of the path so far
            step: Incremental cost of the edge being taken

        Returns:
            The new accumulated cost
        """
        check_cost(step, "step cost")
        return check_cost(cost + step)

    def key(self, entry: FrontierEntry) -> Cost:
        return entry.priority
