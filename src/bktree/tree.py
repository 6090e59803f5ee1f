from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Generic, Iterable, Iterator, TypeVar

from bktree.distance import Distance, DistanceFn, LevenshteinDistance, resolve_distance


T = TypeVar("T")


@dataclass
class BKNode(Generic[T]):
    word: T
    children: dict[int, "BKNode[T]"] = field(default_factory=dict)


class BkTree(Generic[T]):
    """Burkhard-Keller tree over a discrete metric.

    ``dist`` must be a true metric (non-negative, symmetric, triangle
    inequality). This is not checked; a non-metric silently drops matches
    from ``find``. Items at distance 0 from a stored item are treated as that
    item and are not stored again. Not safe for concurrent mutation.
    """

    def __init__(self, dist: Distance | DistanceFn = LevenshteinDistance()):
        self.dist = dist
        self._distance = resolve_distance(dist)
        self.root: BKNode[T] | None = None
        self._size = 0

    @classmethod
    def from_root(cls, root: BKNode[T] | None, dist: Distance | DistanceFn) -> "BkTree[T]":
        """Wrap an already-built node structure."""
        tree = cls(dist)
        tree.root = root
        tree._size = sum(1 for _ in tree.nodes())
        return tree

    def insert(self, item: T) -> bool:
        """Insert ``item``; returns False if it collided with a stored item."""
        if self.root is None:
            self.root = BKNode(word=item)
            self._size = 1
            return True
        node = self.root
        while True:
            k = self._distance(node.word, item)
            if k == 0:
                return False
            nxt = node.children.get(k)
            if nxt is None:
                node.children[k] = BKNode(word=item)
                self._size += 1
                return True
            node = nxt

    def insert_all(self, items: Iterable[T]) -> "BkTree[T]":
        for it in items:
            self.insert(it)
        return self

    build = insert_all

    def find(self, query: T, max_dist: int) -> list[tuple[T, int]]:
        """All stored items within ``max_dist`` of ``query``, with their distances.

        Results come in breadth-first traversal order, not sorted by distance.
        """
        if self.root is None:
            return []
        found: list[tuple[T, int]] = []
        candidates: deque[BKNode[T]] = deque([self.root])
        while candidates:
            node = candidates.popleft()
            d = self._distance(node.word, query)
            if d <= max_dist:
                found.append((node.word, d))
            # a child at edge ``arc`` is at least |arc - d| away from query
            candidates.extend(
                child for arc, child in node.children.items() if abs(arc - d) <= max_dist
            )
        return found

    def closest(self, query: T, max_dist: int) -> list[tuple[T, int]]:
        return sorted(self.find(query, max_dist), key=lambda x: x[1])

    def nodes(self) -> Iterator[BKNode[T]]:
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            stack.extend(node.children.values())
            yield node

    def iter(self) -> Iterator[T]:
        """Iterate stored items in no particular order; the tree is unchanged."""
        for node in self.nodes():
            yield node.word

    def __iter__(self) -> Iterator[T]:
        return self.iter()

    def drain(self) -> Iterator[T]:
        """Iterate stored items while emptying the tree."""
        root, self.root, self._size = self.root, None, 0
        return _drain(root)

    def depth(self) -> int:
        if self.root is None:
            return 0
        deepest = 0
        stack = [(self.root, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children.values())
        return deepest

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self.root is not None

    def __contains__(self, item: object) -> bool:
        return bool(self.find(item, 0))  # type: ignore[arg-type]


def _drain(root: BKNode[T] | None) -> Iterator[T]:
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        children, node.children = node.children, {}
        stack.extend(children.values())
        yield node.word
