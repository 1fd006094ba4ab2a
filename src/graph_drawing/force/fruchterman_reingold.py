"""
Fruchterman-Reingold force-directed layout algorithm.

Based on the paper:
"Graph Drawing by Force-directed Placement" by Fruchterman and Reingold (1991)

The algorithm simulates a physical system where:
- All vertices repel each other (like electrical charges)
- Connected vertices attract each other (like springs)
- A "temperature" parameter limits movement and decreases over time

This module computes repulsion exactly over all vertex pairs. See
IndexedFruchtermanReingoldLayout for the O(n log n) Barnes-Hut variant.
"""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING, Callable, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from ..base import IterativeLayout
from ..graph import GraphLike
from ..model import LayoutModel
from ..types import ORIGIN, Box, Event, EventType, Initializer, Point, TemperatureModel, V
from ..validation import validate_positive
from .temperature import LinearTemperatureModel

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 100
DEFAULT_NORMALIZATION_FACTOR = 0.5
DEFAULT_TOLERANCE = 1e-9


class FruchtermanReingoldLayout(IterativeLayout[V]):
    """
    Fruchterman-Reingold force-directed graph layout.

    This algorithm positions vertices by simulating a physical system where:
    - All vertex pairs have repulsive forces, f_r(d) = k^2 / d
    - Connected vertex pairs have attractive forces, f_a(d) = d^2 / k
    - Movement is capped by a "temperature" that cools over iterations

    The optimal distance k is normalization_factor * sqrt(area / n).

    Each iteration has a read phase, where the displacement of every free
    vertex is computed from the same snapshot of positions, and a write
    phase, where all moves are applied. Positions are published to the
    model once the iteration budget is exhausted.

    Example:
        graph = Graph.from_edges([(1, 2), (2, 3), (3, 1)])
        model = MapLayoutModel(Box(0, 0, 800, 600))

        FruchtermanReingoldLayout(iterations=100, random_seed=7).layout(graph, model)

        for vertex, point in model:
            print(f"{vertex}: ({point.x:.1f}, {point.y:.1f})")
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
        # FruchtermanReingold-specific parameters
        normalization_factor: float = DEFAULT_NORMALIZATION_FACTOR,
        tolerance: float = DEFAULT_TOLERANCE,
        temperature_model: Optional[TemperatureModel] = None,
    ) -> None:
        """
        Initialize Fruchterman-Reingold layout.

        Args:
            initializer: Starting positions (mapping or function of the vertex).
                If None, vertices are scattered uniformly at random.
            rng: Random source for the initial scatter
            random_seed: Seed for a private random source (ignored if rng is given)
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of iterations. Values <= 0 make layout() a no-op.
            normalization_factor: Scale of the optimal distance. Default 0.5.
            tolerance: Coordinates closer than this are considered coincident
            temperature_model: Cooling schedule, called as (iteration, iterations).
                If None, decays linearly from min(width, height) / 10 to zero.

        Raises:
            InvalidParameterError: If normalization_factor or tolerance is not positive.
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

        self._normalization_factor: float = validate_positive(
            normalization_factor, "normalization_factor"
        )
        self._tolerance: float = validate_positive(tolerance, "tolerance")
        self._temperature_model: Optional[TemperatureModel] = temperature_model

        # Set at the start of each run
        self._optimal_distance: Optional[float] = None

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def normalization_factor(self) -> float:
        """Get normalization factor of the optimal distance."""
        return self._normalization_factor

    @normalization_factor.setter
    def normalization_factor(self, value: float) -> None:
        """Set normalization factor of the optimal distance."""
        self._normalization_factor = validate_positive(value, "normalization_factor")

    @property
    def tolerance(self) -> float:
        """Get tolerance used when comparing coordinates."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: float) -> None:
        self._tolerance = validate_positive(value, "tolerance")

    @property
    def temperature_model(self) -> Optional[TemperatureModel]:
        """Get the cooling schedule (None = linear decay)."""
        return self._temperature_model

    @temperature_model.setter
    def temperature_model(self, value: Optional[TemperatureModel]) -> None:
        self._temperature_model = value

    @property
    def optimal_distance(self) -> Optional[float]:
        """Optimal distance k of the last run (None before the first run)."""
        return self._optimal_distance

    # -------------------------------------------------------------------------
    # Force laws
    # -------------------------------------------------------------------------

    def repulsive_force(self, distance: float | np.ndarray) -> float | np.ndarray:
        """
        Repulsive force magnitude, k^2 / d.

        Works on floats and numpy arrays alike.
        """
        k = self._optimal_distance
        assert k is not None
        return k * k / distance

    def attractive_force(self, distance: float) -> float:
        """Attractive force magnitude, d^2 / k."""
        k = self._optimal_distance
        assert k is not None
        return distance * distance / k

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def layout(self, graph: GraphLike[V], model: LayoutModel[V]) -> Self:
        """
        Run the layout algorithm and publish the result to the model.

        Empty graphs and non-positive iteration counts leave the model
        untouched.

        Returns:
            self for chaining
        """
        vertices = list(graph.vertices())
        n = len(vertices)
        if n == 0 or self._iterations <= 0:
            return self

        area = model.drawable_area
        iterations = self._iterations

        self._optimal_distance = self._normalization_factor * math.sqrt(area.area / n)
        temperature_model = self._temperature_model
        if temperature_model is None:
            temperature_model = LinearTemperatureModel.decaying(
                min(area.width, area.height) / 10, iterations
            )

        positions = self._initial_positions(vertices, model)
        free = [v for v in vertices if not model.is_fixed(v)]
        edges = [(u, v) for u, v in graph.edges() if u != v and u in positions and v in positions]

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s: %d vertices (%d free), %d edges, %d iterations, k=%.4f",
                type(self).__name__,
                n,
                len(free),
                len(edges),
                iterations,
                self._optimal_distance,
            )

        self._begin_run()
        self.trigger(
            {"type": EventType.start, "iteration": 0, "temperature": temperature_model(0, iterations)}
        )

        for iteration in range(iterations):
            temperature = temperature_model(iteration, iterations)

            # Read phase: every displacement comes from the same snapshot
            repulsive = self._repulsive_displacements(vertices, free, positions, area)
            attractive = self._attractive_displacements(edges, positions)

            # Write phase
            moved: dict[V, Point] = {}
            for v in free:
                disp = repulsive.get(v, ORIGIN) + attractive.get(v, ORIGIN)
                length = disp.length()
                if length == 0.0:
                    continue
                step = disp * (min(length, temperature) / length)
                moved[v] = area.clamp(positions[v] + step)
            positions.update(moved)

            self.trigger(
                {"type": EventType.tick, "iteration": iteration, "temperature": temperature}
            )

        self._publish({v: positions[v] for v in free}, model)
        self._end_run()

        self.trigger({"type": EventType.end, "iteration": iterations, "temperature": 0.0})
        return self

    def _begin_run(self) -> None:
        """Hook called once per run, before the first iteration."""
        pass

    def _end_run(self) -> None:
        """Hook called once per run, after positions are published."""
        pass

    def _repulsive_displacements(
        self,
        vertices: Sequence[V],
        free: Sequence[V],
        positions: dict[V, Point],
        area: Box,
    ) -> dict[V, Point]:
        """Compute exact repulsive displacements of free vertices, O(n^2)."""
        if not free:
            return {}

        index = {v: i for i, v in enumerate(vertices)}
        xs = np.fromiter((positions[v].x for v in vertices), dtype=np.float64, count=len(vertices))
        ys = np.fromiter((positions[v].y for v in vertices), dtype=np.float64, count=len(vertices))
        rows = np.fromiter((index[v] for v in free), dtype=np.int64, count=len(free))

        dx = xs[rows, None] - xs[None, :]
        dy = ys[rows, None] - ys[None, :]
        coincident = (np.abs(dx) < self._tolerance) & (np.abs(dy) < self._tolerance)
        dist = np.hypot(dx, dy)

        # force(d) / d for every pair, zero for self and coincident pairs
        with np.errstate(divide="ignore", invalid="ignore"):
            scale = np.where(coincident, 0.0, self.repulsive_force(dist) / dist)

        disp_x = (dx * scale).sum(axis=1)
        disp_y = (dy * scale).sum(axis=1)
        return {v: Point(float(disp_x[i]), float(disp_y[i])) for i, v in enumerate(free)}

    def _attractive_displacements(
        self,
        edges: Sequence[tuple[V, V]],
        positions: dict[V, Point],
    ) -> dict[V, Point]:
        """Compute spring displacements along edges."""
        disp: dict[V, Point] = {}
        for u, v in edges:
            delta = positions[v] - positions[u]
            length = delta.length()
            if length < self._tolerance:
                continue
            contribution = delta * (self.attractive_force(length) / length)
            disp[v] = disp.get(v, ORIGIN) - contribution
            disp[u] = disp.get(u, ORIGIN) + contribution
        return disp


__all__ = [
    "FruchtermanReingoldLayout",
    "DEFAULT_ITERATIONS",
    "DEFAULT_NORMALIZATION_FACTOR",
    "DEFAULT_TOLERANCE",
]
