"""
Kamada-Kawai force-directed layout algorithm.

Based on the paper:
"An Algorithm for Drawing General Undirected Graphs"
by Kamada and Kawai (1989)

Every vertex pair is joined by a spring whose natural length is
proportional to the graph-theoretic distance between the two vertices.
The total spring energy is minimized one vertex at a time with
Newton-Raphson steps.
"""

from __future__ import annotations

import logging
import math
import random
from collections import deque
from typing import TYPE_CHECKING, Callable, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from ..base import IterativeLayout
from ..graph import GraphLike
from ..model import LayoutModel
from ..types import Box, Event, EventType, Initializer, Point, V
from ..validation import validate_positive

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 300
DEFAULT_STRENGTH = 1.0
DEFAULT_EPSILON = 0.01
DEFAULT_MAX_INNER_ITERATIONS = 30


class KamadaKawaiLayout(IterativeLayout[V]):
    """
    Kamada-Kawai spring-energy layout.

    The ideal distance between vertices i and j is l_ij = L * d_ij, where
    d_ij is the shortest-path length and L the length of a single edge.
    Spring stiffness is k_ij = strength / d_ij^2. Each outer iteration
    moves the free vertex with the largest energy gradient until the
    largest gradient drops to epsilon or below.

    Example:
        graph = Graph.from_edges([(1, 2), (2, 3), (3, 4), (4, 1)])
        model = MapLayoutModel(Box(0, 0, 400, 400))
        KamadaKawaiLayout(random_seed=3).layout(graph, model)
    """

    def __init__(
        self,
        *,
        initializer: Optional[Initializer[V]] = None,
        rng: Optional[random.Random] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # IterativeLayout parameters
        iterations: int = DEFAULT_ITERATIONS,
        # KamadaKawai-specific parameters
        strength: float = DEFAULT_STRENGTH,
        epsilon: float = DEFAULT_EPSILON,
        edge_length: Optional[float] = None,
        max_inner_iterations: int = DEFAULT_MAX_INNER_ITERATIONS,
    ) -> None:
        """
        Initialize Kamada-Kawai layout.

        Args:
            initializer: Starting positions (mapping or function of the vertex)
            rng: Random source for the initial scatter
            random_seed: Seed for a private random source
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Maximum outer iterations (vertex moves)
            strength: Spring stiffness scale K in k_ij = K / d_ij^2
            epsilon: Convergence threshold on the gradient norm
            edge_length: Ideal length of a single edge. If None, derived from
                the drawable area and the graph diameter.
            max_inner_iterations: Maximum Newton-Raphson steps per vertex move

        Raises:
            InvalidParameterError: If strength, epsilon or edge_length is not positive.
        """
        super().__init__(
            initializer=initializer,
            rng=rng,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            iterations=iterations,
        )

        self._strength: float = validate_positive(strength, "strength")
        self._epsilon: float = validate_positive(epsilon, "epsilon")
        self._edge_length: Optional[float] = (
            validate_positive(edge_length, "edge_length") if edge_length is not None else None
        )
        self._max_inner_iterations: int = int(max_inner_iterations)

        # Internal state, valid during a run
        self._k_matrix: Optional[np.ndarray] = None
        self._l_matrix: Optional[np.ndarray] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def strength(self) -> float:
        """Get spring stiffness scale."""
        return self._strength

    @strength.setter
    def strength(self, value: float) -> None:
        self._strength = validate_positive(value, "strength")

    @property
    def epsilon(self) -> float:
        """Get convergence threshold."""
        return self._epsilon

    @epsilon.setter
    def epsilon(self, value: float) -> None:
        self._epsilon = validate_positive(value, "epsilon")

    @property
    def edge_length(self) -> Optional[float]:
        """Get ideal length of a single edge (None = derived from the area)."""
        return self._edge_length

    @edge_length.setter
    def edge_length(self, value: Optional[float]) -> None:
        self._edge_length = validate_positive(value, "edge_length") if value is not None else None

    @property
    def max_inner_iterations(self) -> int:
        """Get maximum Newton-Raphson steps per vertex move."""
        return self._max_inner_iterations

    @max_inner_iterations.setter
    def max_inner_iterations(self, value: int) -> None:
        self._max_inner_iterations = int(value)

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    @staticmethod
    def shortest_paths(vertices: Sequence[V], edges: Sequence[tuple[V, V]]) -> np.ndarray:
        """
        All-pairs hop distances by breadth-first search.

        Returns:
            Matrix where dist[i, j] is the shortest path length between
            vertices[i] and vertices[j], inf if they are disconnected.
        """
        n = len(vertices)
        index = {v: i for i, v in enumerate(vertices)}
        adj: list[list[int]] = [[] for _ in range(n)]
        for u, v in edges:
            i, j = index[u], index[v]
            adj[i].append(j)
            adj[j].append(i)

        dist = np.full((n, n), np.inf)
        for start in range(n):
            dist[start, start] = 0
            queue = deque([start])
            while queue:
                curr = queue.popleft()
                for neighbor in adj[curr]:
                    if dist[start, neighbor] == np.inf:
                        dist[start, neighbor] = dist[start, curr] + 1
                        queue.append(neighbor)
        return dist

    def _initialize_matrices(self, dist: np.ndarray, area: Box) -> None:
        """Set up ideal-length and stiffness matrices from hop distances."""
        n = dist.shape[0]
        finite = dist[np.isfinite(dist)]
        diameter = float(finite.max()) if finite.size else 0.0

        # Disconnected pairs get a distance longer than any path
        disconnected = max(diameter * 1.5, n)
        dist = np.where(np.isfinite(dist), dist, disconnected)

        if self._edge_length is not None:
            unit = self._edge_length
        else:
            unit = 0.9 * min(area.width, area.height) / max(diameter, 1.0)

        self._l_matrix = dist * unit
        with np.errstate(divide="ignore", invalid="ignore"):
            self._k_matrix = np.where(dist > 0, self._strength / (dist * dist), 0.0)

    def _gradient(self, m: int, xs: np.ndarray, ys: np.ndarray) -> tuple[float, float]:
        """Partial derivatives of the energy with respect to vertex m."""
        assert self._k_matrix is not None
        assert self._l_matrix is not None

        dx = xs[m] - xs
        dy = ys[m] - ys
        dist = np.hypot(dx, dy)
        mask = dist > 0
        k = self._k_matrix[m, mask]
        l = self._l_matrix[m, mask]  # noqa: E741
        factor = k * (1 - l / dist[mask])
        return float((factor * dx[mask]).sum()), float((factor * dy[mask]).sum())

    def _move_vertex(self, m: int, xs: np.ndarray, ys: np.ndarray) -> None:
        """Move vertex m towards its energy minimum with Newton-Raphson steps."""
        assert self._k_matrix is not None
        assert self._l_matrix is not None

        for _ in range(self._max_inner_iterations):
            grad_x, grad_y = self._gradient(m, xs, ys)
            if math.hypot(grad_x, grad_y) < self._epsilon:
                break

            dx = xs[m] - xs
            dy = ys[m] - ys
            dist = np.hypot(dx, dy)
            mask = dist > 0
            dx, dy, dist = dx[mask], dy[mask], dist[mask]
            k = self._k_matrix[m, mask]
            l = self._l_matrix[m, mask]  # noqa: E741
            dist_cubed = dist**3

            h_xx = float((k * (1 - l * dy * dy / dist_cubed)).sum())
            h_yy = float((k * (1 - l * dx * dx / dist_cubed)).sum())
            h_xy = float((k * l * dx * dy / dist_cubed).sum())

            # Solve H * delta = -grad with Cramer's rule
            det = h_xx * h_yy - h_xy * h_xy
            if abs(det) < 1e-10:
                break

            xs[m] += (-grad_x * h_yy + grad_y * h_xy) / det
            ys[m] += (grad_x * h_xy - grad_y * h_xx) / det

    def energy(self, xs: np.ndarray, ys: np.ndarray) -> float:
        """Total spring energy of a configuration (valid during or after a run)."""
        assert self._k_matrix is not None
        assert self._l_matrix is not None

        dist = np.hypot(xs[:, None] - xs[None, :], ys[:, None] - ys[None, :])
        stretch = dist - self._l_matrix
        return float(0.25 * (self._k_matrix * stretch * stretch).sum())

    def layout(self, graph: GraphLike[V], model: LayoutModel[V]) -> Self:
        """
        Run the layout algorithm and publish the result to the model.

        Returns:
            self for chaining
        """
        vertices = list(graph.vertices())
        n = len(vertices)
        if n == 0 or self._iterations <= 0:
            return self

        area = model.drawable_area
        edges = [(u, v) for u, v in graph.edges() if u != v]
        self._initialize_matrices(self.shortest_paths(vertices, edges), area)

        positions = self._initial_positions(vertices, model)
        xs = np.array([positions[v].x for v in vertices], dtype=np.float64)
        ys = np.array([positions[v].y for v in vertices], dtype=np.float64)
        free = [i for i, v in enumerate(vertices) if not model.is_fixed(v)]

        self.trigger({"type": EventType.start, "iteration": 0})

        iteration = 0
        while iteration < self._iterations and free:
            # Free vertex with the largest gradient
            max_delta = 0.0
            max_vertex = -1
            for i in free:
                delta = math.hypot(*self._gradient(i, xs, ys))
                if delta > max_delta:
                    max_delta = delta
                    max_vertex = i

            if max_vertex < 0 or max_delta <= self._epsilon:
                break

            self._move_vertex(max_vertex, xs, ys)
            self.trigger({"type": EventType.tick, "iteration": iteration, "stress": max_delta})
            iteration += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "KamadaKawaiLayout: %d vertices, %d moves, energy=%.4f",
                n,
                iteration,
                self.energy(xs, ys),
            )

        if len(free) == n:
            # Nothing is pinned, so the drawing can be recentred freely
            center = area.center
            xs += center.x - (xs.min() + xs.max()) / 2
            ys += center.y - (ys.min() + ys.max()) / 2

        self._publish(
            {vertices[i]: area.clamp(Point(float(xs[i]), float(ys[i]))) for i in free},
            model,
        )

        self.trigger({"type": EventType.end, "iteration": iteration})
        return self


__all__ = ["KamadaKawaiLayout", "DEFAULT_ITERATIONS"]
