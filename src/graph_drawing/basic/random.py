"""
Random layout algorithm.

Places vertices at random positions within the drawable area.
Useful as a baseline for comparing layout quality and as a starting
point for iterative algorithms.
"""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence

from ..base import StaticLayout
from ..graph import GraphLike
from ..model import LayoutModel
from ..types import Box, Event, Point, V


class RandomLayout(StaticLayout[V]):
    """
    Random layout - positions vertices uniformly within the drawable area.

    Positions are drawn from the layout's random source, so two runs with
    the same random_seed produce the same drawing. Fixed vertices keep
    their positions.

    Example:
        model = MapLayoutModel(Box(0, 0, 800, 600))
        RandomLayout(random_seed=42, margin=50).layout(graph, model)
    """

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # Random-specific parameters
        margin: float = 0.0,
    ) -> None:
        """
        Initialize Random layout.

        Args:
            rng: Random source. Takes precedence over random_seed.
            random_seed: Seed for a private random source
            on_start: Callback for start event
            on_end: Callback for end event
            margin: Padding from the area edges (default 0). Ignored along an
                axis where it leaves no room.
        """
        super().__init__(rng=rng, random_seed=random_seed, on_start=on_start, on_end=on_end)
        self._margin: float = max(0.0, float(margin))

    @property
    def margin(self) -> float:
        """Get margin (padding from the area edges)."""
        return self._margin

    @margin.setter
    def margin(self, value: float) -> None:
        self._margin = max(0.0, float(value))

    def _compute(
        self, vertices: Sequence[V], graph: GraphLike[V], model: LayoutModel[V]
    ) -> dict[V, Point]:
        area = model.drawable_area
        margin = self._margin

        # Handle margins too large for the area
        min_x, width = area.min_x, area.width
        if width > 2 * margin:
            min_x, width = min_x + margin, width - 2 * margin
        min_y, height = area.min_y, area.height
        if height > 2 * margin:
            min_y, height = min_y + margin, height - 2 * margin

        free = [v for v in vertices if not model.is_fixed(v)]
        return self._scatter(free, Box(min_x, min_y, width, height))


__all__ = ["RandomLayout"]
