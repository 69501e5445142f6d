from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Hashable, List, Tuple, TypeVar, Union

T = TypeVar("T", bound=Hashable)


@dataclass
class DSUEntry(Generic[T]):
    val: T
    parent: int


class DSU(Generic[T]):
    """Union-find over arbitrary hashable values.

    Values live in a growable list of slots (``entries``); ``indices`` maps a
    value to its slot. Unions attach root(x) under root(y) with no size or
    rank balancing, so only path compression keeps the trees shallow.

    Example
    -------
    >>> dsu = DSU()
    >>> dsu.union("a", "b")
    True
    >>> dsu.find("a") == dsu.find("b")
    True
    """

    def __init__(self) -> None:
        self.entries: List[DSUEntry[T]] = []
        self.indices: Dict[T, int] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, val: object) -> bool:
        return val in self.indices

    def add_unchecked(self, val: T) -> int:
        """Allocate a fresh slot for `val` and point the lookup table at it.

        If `val` already had a slot, that slot stays linked in the forest but
        can no longer be reached by value. Callers must guarantee uniqueness.
        """
        i = len(self.entries)
        self.entries.append(DSUEntry(val=val, parent=i))
        self.indices[val] = i
        return i

    def add(self, val: T) -> bool:
        if val in self.indices:
            return False
        self.add_unchecked(val)
        return True

    def _index(self, val: T) -> int:
        i = self.indices.get(val)
        if i is None:
            i = self.add_unchecked(val)
        return i

    def _find_by_index(self, x: int) -> int:
        entries = self.entries
        root = x
        while entries[root].parent != root:
            root = entries[root].parent

        # path compression: every slot on the way points at the root
        while entries[x].parent != root:
            nxt = entries[x].parent
            entries[x].parent = root
            x = nxt
        return root

    def find_unchecked(self, val: T) -> int:
        """Root slot of `val`; raises KeyError if `val` was never added."""
        try:
            x = self.indices[val]
        except KeyError:
            raise KeyError(f"value {val!r} is not tracked by this DSU") from None
        return self._find_by_index(x)

    def find(self, val: T) -> int:
        return self._find_by_index(self._index(val))

    def union_unchecked(self, val_x: T, val_y: T) -> bool:
        px, py = self.find_unchecked(val_x), self.find_unchecked(val_y)
        self.entries[px].parent = py
        return px != py

    def union(self, val_x: T, val_y: T) -> bool:
        px, py = self.find(val_x), self.find(val_y)
        self.entries[px].parent = py
        return px != py


@dataclass(frozen=True)
class Root:
    size: int


@dataclass(frozen=True)
class Linked:
    parent: int


FastDSUEntry = Union[Root, Linked]


class FastDSU:
    """Union by size with full path compression, keyed by integer ids.

    Each tracked id holds either ``Root(size)`` (it represents its component)
    or ``Linked(parent)``. Used by ``GeneralUndiGraph.lcc``.
    """

    def __init__(self) -> None:
        self.parent: Dict[int, FastDSUEntry] = {}

    def __len__(self) -> int:
        return len(self.parent)

    def __contains__(self, x: object) -> bool:
        return x in self.parent

    def add(self, x: int) -> None:
        if x in self.parent:
            raise KeyError(f"id {x} is already tracked; add each id exactly once")
        self.parent[x] = Root(1)

    def find(self, x: int) -> int:
        """Root of `x` without touching the forest."""
        entry = self.parent[x]
        while isinstance(entry, Linked):
            x = entry.parent
            entry = self.parent[x]
        return x

    def find_all(self, x: int) -> Tuple[int, int]:
        """(root, size) of the component of `x`, compressing the path."""
        path: List[int] = []
        entry = self.parent[x]
        while isinstance(entry, Linked):
            path.append(x)
            x = entry.parent
            entry = self.parent[x]
        root, size = x, entry.size

        link = Linked(root)
        for node in path:
            self.parent[node] = link
        return root, size

    def union(self, x: int, y: int) -> bool:
        x, x_num = self.find_all(x)
        y, y_num = self.find_all(y)
        if x == y:
            return False
        if x_num < y_num:
            self.parent[x] = Linked(y)
            self.parent[y] = Root(x_num + y_num)
        else:
            self.parent[y] = Linked(x)
            self.parent[x] = Root(x_num + y_num)
        return True

    def retain_map(self) -> Dict[int, bool]:
        """Map every tracked id to whether it lies in the largest component.

        Among equally large components the winner is whichever root comes
        first in dict iteration order; do not depend on it.
        """
        if not self.parent:
            return {}
        root = max(
            self.parent,
            key=lambda k: self.parent[k].size if isinstance(self.parent[k], Root) else -1,
        )
        return {x: self.find(x) == root for x in self.parent}
