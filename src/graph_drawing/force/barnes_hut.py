"""
Barnes-Hut approximation of repulsive forces over a quadtree.

For a query point v the tree is walked breadth-first. A subtree whose
box is small compared to its distance from v (box size / distance < theta,
where size is the longer side of the box) and does not contain v
is treated as a single source at its centroid instead of visiting every
point in it, reducing a full pass over n query points from O(n^2) to
O(n log n) force evaluations.
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from ..spatial.quadtree import Leaf, QuadTree, SpatialNode
from ..types import ORIGIN, Point
from ..validation import validate_positive, validate_theta

DEFAULT_THETA = 0.5
DEFAULT_TOLERANCE = 1e-9


def inverse_distance(distance: float) -> float:
    """Default repulsion law, f(d) = 1 / d."""
    return 1.0 / distance


class BarnesHutEvaluator:
    """
    Approximate repulsive displacement from all points indexed in a QuadTree.

    The theta parameter controls the accuracy/speed tradeoff:
    - theta = 0: Exact calculation (every point visited)
    - theta = 0.5: Good balance (default)
    - theta = 1.0: Coarsest approximation allowed

    Comparisons that were avoided thanks to the approximation are counted
    cumulatively in saved_comparisons. For a query point taken from a set
    of n distinct indexed points, one evaluate() call satisfies

        saved + performed == n - 1

    where performed is the number of force contributions accumulated.

    Example:
        tree = QuadTree.from_points(Box(0, 0, 100, 100), points)
        evaluator = BarnesHutEvaluator(theta=0.5, repulsive_force=lambda d: k * k / d)
        disp = evaluator.evaluate(tree, points[0])
    """

    def __init__(
        self,
        theta: float = DEFAULT_THETA,
        repulsive_force: Callable[[float], float] = inverse_distance,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            theta: Barnes-Hut threshold in [0, 1]
            repulsive_force: Force magnitude as a function of distance. Must be
                the same law as the exact evaluator for theta=0 to match it.
            tolerance: Coordinates closer than this are considered coincident

        Raises:
            InvalidThetaError: If theta is outside [0, 1].
            InvalidParameterError: If tolerance is not positive.
        """
        self._theta: float = validate_theta(theta)
        self._repulsive_force = repulsive_force
        self._tolerance: float = validate_positive(tolerance, "tolerance")
        self._saved_comparisons: int = 0
        self._performed_comparisons: int = 0

    @property
    def theta(self) -> float:
        """Get Barnes-Hut threshold."""
        return self._theta

    @theta.setter
    def theta(self, value: float) -> None:
        """Set Barnes-Hut threshold, rejecting values outside [0, 1]."""
        self._theta = validate_theta(value)

    @property
    def tolerance(self) -> float:
        """Get tolerance used when comparing coordinates."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        self._tolerance = validate_positive(value, "tolerance")

    @property
    def saved_comparisons(self) -> int:
        """Cumulative number of pairwise comparisons avoided."""
        return self._saved_comparisons

    @property
    def performed_comparisons(self) -> int:
        """Cumulative number of force contributions computed."""
        return self._performed_comparisons

    def reset(self) -> None:
        """Zero both comparison counters."""
        self._saved_comparisons = 0
        self._performed_comparisons = 0

    def evaluate(self, tree: QuadTree, v: Point) -> Point:
        """
        Compute the total repulsive displacement on v.

        Args:
            tree: Fully built quadtree, in the same frame as v
            v: Query position

        Returns:
            Displacement vector pointing away from the other points
        """
        eps = self._tolerance
        disp_x = 0.0
        disp_y = 0.0

        queue: deque[SpatialNode] = deque([tree.root])
        while queue:
            node = queue.popleft()

            if isinstance(node, Leaf):
                if not node.contents:
                    continue
                u = node.contents[0]
                self._saved_comparisons += len(node.contents) - 1
                if v.is_close(u, eps):
                    # Self or coincident point
                    continue
            else:
                centroid = node.center
                distance = (v - centroid).length()
                if distance < eps:
                    self._saved_comparisons += node.total - 1
                    continue
                box = node.box
                # A box holding v is always opened, so v never counts itself
                if max(box.width, box.height) / distance < self._theta and not box.contains(v):
                    u = centroid
                    self._saved_comparisons += node.total - 1
                else:
                    queue.extend(node.quadrants)
                    continue

            dx = v.x - u.x
            dy = v.y - u.y
            length = (dx * dx + dy * dy) ** 0.5
            scale = self._repulsive_force(length) / length
            disp_x += dx * scale
            disp_y += dy * scale
            self._performed_comparisons += 1

        if disp_x == 0.0 and disp_y == 0.0:
            return ORIGIN
        return Point(disp_x, disp_y)


__all__ = ["BarnesHutEvaluator", "DEFAULT_THETA", "DEFAULT_TOLERANCE", "inverse_distance"]
