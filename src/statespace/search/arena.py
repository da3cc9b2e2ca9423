"""Index-addressed arena of path fragments.

Each slot holds a value and the index of its parent slot, so a family of
paths sharing prefixes is stored as a tree and no growing sequence is ever
copied. Arena indices are plain integers, which makes them convenient search
states for exhaustive depth-first enumeration: every partial path is a
distinct state.
"""

from typing import Any, Iterator, List, Optional, Tuple


class PathArena:
    """Tree of values linked by parent indices."""

    def __init__(self):
        self._slots: List[Tuple[Any, Optional[int]]] = []

    def alloc(self, value: Any, parent: Optional[int] = None) -> int:
        """Store a value below a parent slot.

        Args:
            value: Value to store
            parent: Index of the parent slot, None for a root

        Returns:
            Index of the new slot
        """
        if parent is not None and not 0 <= parent < len(self._slots):
            raise IndexError(f"Parent index out of range: {parent}")
        self._slots.append((value, parent))
        return len(self._slots) - 1

    def get(self, index: int) -> Any:
        return self._slots[index][0]

    def parent_of(self, index: int) -> Optional[int]:
        return self._slots[index][1]

    def iter_from(self, index: int) -> Iterator[Any]:
        """Yield values from a slot back to its root."""
        current: Optional[int] = index
        while current is not None:
            value, current = self._slots[current]
            yield value

    def path_to(self, index: int) -> List[Any]:
        """Values from the root down to the given slot."""
        path = list(self.iter_from(index))
        path.reverse()
        return path

    def depth_of(self, index: int) -> int:
        return sum(1 for _ in self.iter_from(index)) - 1

    def contains(self, index: int, value: Any) -> bool:
        """Check whether a value occurs on the path ending at a slot."""
        return any(v == value for v in self.iter_from(index))

    def __len__(self) -> int:
        return len(self._slots)
