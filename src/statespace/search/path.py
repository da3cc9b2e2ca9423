"""Path reconstruction from the visited ledger's parent pointers."""

from typing import Hashable, List

from statespace.search.cost import Cost
from statespace.search.ledger import VisitedLedger


class PathReconstructionError(RuntimeError):
    """Raised when parent pointers do not lead back to an origin."""
    pass


def reconstruct_path(ledger: VisitedLedger, terminal: Hashable) -> List[Hashable]:
    """Walk parent pointers from a terminal state back to its origin.

    Args:
        ledger: Ledger produced by the search that reached the terminal state
        terminal: State to reconstruct the path to

    Returns:
        States from origin to terminal, inclusive

    Raises:
        StateNotFoundError: If the terminal (or a parent) is not in the ledger
        PathReconstructionError: If the parent pointers form a cycle
    """
    path = [terminal]
    seen = {terminal}
    state = terminal
    while not ledger.is_origin(state):
        state = ledger.parent_of(state)
        if state in seen:
            raise PathReconstructionError(f"Parent cycle through {state!r}")
        seen.add(state)
        path.append(state)
    path.reverse()
    return path


def path_cost(ledger: VisitedLedger, terminal: Hashable) -> Cost:
    return ledger.cost_of(terminal)
