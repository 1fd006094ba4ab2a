"""
Circular layout algorithm.

Places all vertices evenly distributed on a circle.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Sequence

from ..base import StaticLayout
from ..graph import GraphLike
from ..model import LayoutModel
from ..types import Event, Point, V
from ..validation import validate_positive


class CircularLayout(StaticLayout[V]):
    """
    Circular layout - positions vertices on a circle.

    The circle is centred on the drawable area. Vertex i of n (in graph
    order, or sorted by sort_key) is placed at angle start_angle + 2*pi*i/n.

    Example:
        model = MapLayoutModel(Box(0, 0, 800, 600))
        CircularLayout(sort_key=str).layout(graph, model)
    """

    def __init__(
        self,
        *,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # Circular-specific parameters
        radius: Optional[float] = None,
        start_angle: float = 0.0,
        sort_key: Optional[Callable[[V], Any]] = None,
    ) -> None:
        """
        Initialize Circular layout.

        Args:
            on_start: Callback for start event
            on_end: Callback for end event
            radius: Circle radius. If None, min(width, height) / 2 of the area.
            start_angle: Angle of the first vertex in radians (default 0)
            sort_key: Key function ordering vertices around the circle.
                None keeps graph order.

        Raises:
            InvalidParameterError: If radius is not positive.
        """
        super().__init__(on_start=on_start, on_end=on_end)
        self._radius: Optional[float] = (
            validate_positive(radius, "radius") if radius is not None else None
        )
        self._start_angle: float = float(start_angle)
        self._sort_key: Optional[Callable[[V], Any]] = sort_key

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def radius(self) -> Optional[float]:
        """Get circle radius (None = fit to the drawable area)."""
        return self._radius

    @radius.setter
    def radius(self, value: Optional[float]) -> None:
        self._radius = validate_positive(value, "radius") if value is not None else None

    @property
    def start_angle(self) -> float:
        """Get starting angle in radians."""
        return self._start_angle

    @start_angle.setter
    def start_angle(self, value: float) -> None:
        self._start_angle = float(value)

    @property
    def sort_key(self) -> Optional[Callable[[V], Any]]:
        """Get key function for vertex ordering."""
        return self._sort_key

    @sort_key.setter
    def sort_key(self, value: Optional[Callable[[V], Any]]) -> None:
        self._sort_key = value

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(
        self, vertices: Sequence[V], graph: GraphLike[V], model: LayoutModel[V]
    ) -> dict[V, Point]:
        area = model.drawable_area
        center = area.center
        radius = self._radius if self._radius is not None else min(area.width, area.height) / 2

        ordered = list(vertices)
        if self._sort_key is not None:
            ordered.sort(key=self._sort_key)

        angle_step = 2 * math.pi / len(ordered)
        positions: dict[V, Point] = {}
        for i, v in enumerate(ordered):
            angle = self._start_angle + i * angle_step
            positions[v] = Point(
                center.x + radius * math.cos(angle),
                center.y + radius * math.sin(angle),
            )
        return positions


__all__ = ["CircularLayout"]
