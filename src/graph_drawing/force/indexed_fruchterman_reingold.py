"""
Fruchterman-Reingold layout with Barnes-Hut indexing.

Repulsive forces are approximated with a quadtree rebuilt from the
current positions on every iteration: distant groups of vertices act as
a single source at their centroid. Attraction along edges is computed
exactly, as in the plain algorithm.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional, Sequence

from ..spatial.quadtree import QuadTree
from ..types import Box, Event, Initializer, Point, TemperatureModel, V
from .barnes_hut import DEFAULT_THETA, BarnesHutEvaluator
from .fruchterman_reingold import (
    DEFAULT_ITERATIONS,
    DEFAULT_NORMALIZATION_FACTOR,
    DEFAULT_TOLERANCE,
    FruchtermanReingoldLayout,
)

logger = logging.getLogger(__name__)


class IndexedFruchtermanReingoldLayout(FruchtermanReingoldLayout[V]):
    """
    Fruchterman-Reingold layout using the Barnes-Hut technique with a quadtree.

    The theta parameter controls the accuracy/speed tradeoff:
    - theta = 0: Exact repulsion (the tree is fully traversed)
    - theta = 0.5: Good balance (default)
    - theta = 1.0: Fastest, least accurate

    After a run, saved_comparisons holds the number of pairwise repulsion
    evaluations the index made unnecessary.

    Example:
        layout = IndexedFruchtermanReingoldLayout(theta=0.5, random_seed=17)
        layout.layout(graph, model)
        print(layout.saved_comparisons)
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
        iterations: int = DEFAULT_ITERATIONS,
        normalization_factor: float = DEFAULT_NORMALIZATION_FACTOR,
        tolerance: float = DEFAULT_TOLERANCE,
        temperature_model: Optional[TemperatureModel] = None,
        # Barnes-Hut parameters
        theta: float = DEFAULT_THETA,
    ) -> None:
        """
        Initialize indexed Fruchterman-Reingold layout.

        Args:
            initializer: Starting positions (mapping or function of the vertex)
            rng: Random source for the initial scatter
            random_seed: Seed for a private random source
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of iterations
            normalization_factor: Scale of the optimal distance
            tolerance: Coordinates closer than this are considered coincident
            temperature_model: Cooling schedule
            theta: Barnes-Hut threshold in [0, 1]

        Raises:
            InvalidThetaError: If theta is outside [0, 1].
        """
        super().__init__(
            initializer=initializer,
            rng=rng,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            iterations=iterations,
            normalization_factor=normalization_factor,
            tolerance=tolerance,
            temperature_model=temperature_model,
        )
        self._evaluator = BarnesHutEvaluator(
            theta=theta,
            repulsive_force=self.repulsive_force,  # type: ignore[arg-type]
            tolerance=self._tolerance,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def theta(self) -> float:
        """Get Barnes-Hut threshold."""
        return self._evaluator.theta

    @theta.setter
    def theta(self, value: float) -> None:
        """Set Barnes-Hut threshold, rejecting values outside [0, 1]."""
        self._evaluator.theta = value

    @property
    def saved_comparisons(self) -> int:
        """Repulsion comparisons avoided by indexing during the last run."""
        return self._evaluator.saved_comparisons

    @property
    def performed_comparisons(self) -> int:
        """Repulsion contributions computed during the last run."""
        return self._evaluator.performed_comparisons

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _begin_run(self) -> None:
        self._evaluator.tolerance = self._tolerance
        self._evaluator.reset()

    def _end_run(self) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Barnes-Hut (theta=%.2f): %d comparisons saved, %d performed",
                self._evaluator.theta,
                self._evaluator.saved_comparisons,
                self._evaluator.performed_comparisons,
            )

    def _repulsive_displacements(
        self,
        vertices: Sequence[V],
        free: Sequence[V],
        positions: dict[V, Point],
        area: Box,
    ) -> dict[V, Point]:
        """Compute repulsive displacements of free vertices using a fresh quadtree."""
        if not free:
            return {}

        # Index in a local frame whose origin is the minimum corner of the
        # area widened to cover every position, fixed vertices included
        min_x, min_y = area.min_x, area.min_y
        max_x, max_y = area.max_x, area.max_y
        for v in vertices:
            p = positions[v]
            min_x = min(min_x, p.x)
            min_y = min(min_y, p.y)
            max_x = max(max_x, p.x)
            max_y = max(max_y, p.y)
        origin = Point(min_x, min_y)
        region = Box(0.0, 0.0, max_x - min_x, max_y - min_y)
        # Clamping absorbs rounding of the translation
        local: dict[V, Point] = {v: region.clamp(positions[v] - origin) for v in vertices}

        tree = QuadTree(region)
        for v in vertices:
            tree.insert(local[v])

        evaluate = self._evaluator.evaluate
        return {v: evaluate(tree, local[v]) for v in free}


__all__ = ["IndexedFruchtermanReingoldLayout"]
