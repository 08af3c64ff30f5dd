"""Union-find over integer ids, used to keep Kruskal's carving acyclic."""

from __future__ import annotations

from typing import List


class DisjointSet:
    """Parent array with union by size and path-compressed find."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must be non-negative")
        self._parent: List[int] = list(range(size))
        self._size: List[int] = [1] * size
        self.components = size

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, first: int, second: int) -> bool:
        """Merge the sets holding ``first`` and ``second``; False if already joined."""

        root_a = self.find(first)
        root_b = self.find(second)
        if root_a == root_b:
            return False
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        self.components -= 1
        return True

    def connected(self, first: int, second: int) -> bool:
        return self.find(first) == self.find(second)

    def size_of(self, item: int) -> int:
        return self._size[self.find(item)]


__all__ = ["DisjointSet"]
