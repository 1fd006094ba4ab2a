"""
Quadtree implementation for Barnes-Hut force approximation.

The quadtree recursively subdivides a fixed rectangular region into
quadrants, enabling O(n log n) approximate n-body force calculations.

Points are inserted one at a time. Every internal node keeps the number
of points below it and their centroid, updated incrementally on each
insertion, so no separate mass-distribution pass is needed before
querying the tree.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union

from ..types import Box, Point
from ..validation import EmptyNodeError, PointOutsideRegionError, validate_box

NW = 0
NE = 1
SW = 2
SE = 3


@dataclass(eq=False)
class Leaf:
    """
    A leaf of the quadtree.

    Holds no point or a single point. Several points are only stored
    together when they are exactly equal, since no subdivision could
    ever separate them.

    Attributes:
        box: Region covered by this leaf
        contents: Stored points (empty, one point, or copies of one point)
    """

    box: Box
    contents: list[Point] = field(default_factory=list)

    def is_leaf(self) -> bool:
        return True

    def points(self) -> list[Point]:
        """All points in this leaf."""
        return list(self.contents)

    def has_points(self) -> bool:
        return bool(self.contents)

    def count(self) -> int:
        return len(self.contents)

    def centroid(self) -> Point:
        """
        Mean of the stored points.

        Raises:
            EmptyNodeError: If the leaf holds no point.
        """
        n = len(self.contents)
        if n == 0:
            raise EmptyNodeError(f"Leaf {self.box!r} has no points")
        x = sum(p.x for p in self.contents)
        y = sum(p.y for p in self.contents)
        return Point(x / n, y / n)

    def children(self) -> list[SpatialNode]:
        return []


@dataclass(eq=False)
class Internal:
    """
    An internal node of the quadtree.

    Attributes:
        box: Region covered by this node
        quadrants: Four children [NW, NE, SW, SE]
        total: Number of points in this subtree
        center: Centroid of the points in this subtree
    """

    box: Box
    quadrants: list[SpatialNode]
    total: int
    center: Point

    def is_leaf(self) -> bool:
        return False

    def points(self) -> list[Point]:
        """All points in this subtree, children in [NW, NE, SW, SE] order."""
        result: list[Point] = []
        for child in self.quadrants:
            result.extend(child.points())
        return result

    def has_points(self) -> bool:
        return self.total != 0

    def count(self) -> int:
        return self.total

    def centroid(self) -> Point:
        return self.center

    def children(self) -> list[SpatialNode]:
        return list(self.quadrants)


SpatialNode = Union[Leaf, Internal]


class QuadTree:
    """
    Barnes-Hut quadtree over a fixed region.

    The tree is meant to be built, queried and discarded: a layout
    algorithm builds a fresh tree from the current positions on every
    iteration, and all insertions complete before the first query.

    Usage:
        tree = QuadTree(Box(0, 0, 100, 100))
        for p in points:
            tree.insert(p)

        root = tree.root
        root.count()      # number of points
        root.centroid()   # their mean

    Insertion of a point outside the region raises PointOutsideRegionError;
    the region is never grown to fit.
    """

    def __init__(self, region: Box) -> None:
        """
        Initialize an empty tree.

        Args:
            region: Area covered by the tree

        Raises:
            InvalidBoxError: If region is None or degenerate.
        """
        self._region: Box = validate_box(region)
        self._root: SpatialNode = Leaf(self._region)
        self._size: int = 0

    @classmethod
    def from_points(cls, region: Box, points: Iterable[Point]) -> QuadTree:
        """Build a tree over region containing all of points."""
        tree = cls(region)
        for p in points:
            tree.insert(p)
        return tree

    @property
    def region(self) -> Box:
        return self._region

    @property
    def root(self) -> SpatialNode:
        return self._root

    def __len__(self) -> int:
        return self._size

    def insert(self, p: Point) -> None:
        """
        Insert a point.

        Descends from the root, updating count and centroid of every
        internal node on the way, until a leaf absorbs the point. An
        occupied leaf is split into four quadrants first.

        Raises:
            PointOutsideRegionError: If p is outside the tree's region.
        """
        if not self._region.contains(p):
            raise PointOutsideRegionError(p, self._region)

        parent: Union[Internal, None] = None
        slot = -1
        node: SpatialNode = self._root

        while True:
            if isinstance(node, Leaf):
                if not node.contents or node.contents[0] == p:
                    node.contents.append(p)
                    self._size += 1
                    return

                node = self._split(node)
                if parent is None:
                    self._root = node
                else:
                    parent.quadrants[slot] = node

            # Incremental weighted mean, no recomputation from the subtree
            node.total += 1
            node.center = (node.center * (node.total - 1) + p) / node.total

            for i, child in enumerate(node.quadrants):
                if child.box.contains(p):
                    parent, slot, node = node, i, child
                    break
            else:
                raise PointOutsideRegionError(p, node.box)

    def _split(self, leaf: Leaf) -> Internal:
        """Turn an occupied leaf into an internal node with four leaf children."""
        children: list[SpatialNode] = [Leaf(box) for box in leaf.box.quadrants()]

        for p in leaf.contents:
            for child in children:
                if child.box.contains(p):
                    assert isinstance(child, Leaf)
                    child.contents.append(p)
                    break
            else:
                raise PointOutsideRegionError(p, leaf.box)

        return Internal(
            box=leaf.box,
            quadrants=children,
            total=len(leaf.contents),
            center=leaf.centroid(),
        )

    def walk(self) -> Iterator[SpatialNode]:
        """Iterate over all nodes breadth-first, starting at the root."""
        queue: deque[SpatialNode] = deque([self._root])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children())

    def __repr__(self) -> str:
        return f"QuadTree(region={self._region!r}, points={self._size})"


__all__ = ["Leaf", "Internal", "SpatialNode", "QuadTree", "NW", "NE", "SW", "SE"]
