"""
Common types for graph drawing algorithms.

This module provides the fundamental types used across all layout algorithms:
- Point: Immutable 2D coordinate pair
- Box: Immutable axis-aligned rectangle
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Hashable, Mapping, Optional, TypedDict, TypeVar, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Layout iterations have begun
    - tick: Fired once per iteration (for animation)
    - end: Layout has finished
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    iteration: int
    temperature: float
    stress: Optional[float]


@dataclass(frozen=True)
class Point:
    """
    Immutable point in the plane.

    Supports vector arithmetic so that displacements can be summed and
    scaled directly:

        delta = v - u
        disp = disp + delta * (force / delta.length())
    """

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Point:
        return Point(self.x / scalar, self.y / scalar)

    def length(self) -> float:
        """Euclidean norm of the point seen as a vector."""
        return math.hypot(self.x, self.y)

    def is_close(self, other: Point, tolerance: float) -> bool:
        """True if both coordinates differ by less than tolerance."""
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance

    def __repr__(self) -> str:
        return f"Point(x={self.x:.4f}, y={self.y:.4f})"


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Box:
    """
    Immutable axis-aligned rectangle given by its minimum corner and size.

    Containment is closed on every side, so points on the boundary belong
    to the box. Splitting produces children whose far edges are taken from
    the parent, so the children partition the parent exactly.
    """

    min_x: float
    min_y: float
    width: float
    height: float

    @classmethod
    def from_bounds(cls, min_x: float, min_y: float, max_x: float, max_y: float) -> Box:
        """Create a box from its two corners."""
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    @property
    def origin(self) -> Point:
        """Minimum corner of the box."""
        return Point(self.min_x, self.min_y)

    @property
    def center(self) -> Point:
        return Point(self.min_x + self.width / 2, self.min_y + self.height / 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, p: Point) -> bool:
        """Check if point p lies within the box (boundary included)."""
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def clamp(self, p: Point) -> Point:
        """Return the point of the box closest to p."""
        return Point(
            min(self.max_x, max(self.min_x, p.x)),
            min(self.max_y, max(self.min_y, p.y)),
        )

    def split_along_x(self) -> tuple[Box, Box]:
        """
        Split the box into a west and an east half.

        Returns:
            (west, east)
        """
        mid_x = self.min_x + self.width / 2
        west = Box(self.min_x, self.min_y, mid_x - self.min_x, self.height)
        east = Box(mid_x, self.min_y, self.max_x - mid_x, self.height)
        return west, east

    def split_along_y(self) -> tuple[Box, Box]:
        """
        Split the box into a south (lower y) and a north (upper y) half.

        Returns:
            (south, north)
        """
        mid_y = self.min_y + self.height / 2
        south = Box(self.min_x, self.min_y, self.width, mid_y - self.min_y)
        north = Box(self.min_x, mid_y, self.width, self.max_y - mid_y)
        return south, north

    def quadrants(self) -> tuple[Box, Box, Box, Box]:
        """
        Split the box into four equal quadrants.

        Returns:
            (NW, NE, SW, SE) where "north" is the half with larger y.
        """
        west, east = self.split_along_x()
        south_west, north_west = west.split_along_y()
        south_east, north_east = east.split_along_y()
        return north_west, north_east, south_west, south_east

    def __repr__(self) -> str:
        return (
            f"Box(min_x={self.min_x:.4f}, min_y={self.min_y:.4f}, "
            f"width={self.width:.4f}, height={self.height:.4f})"
        )


# Vertices can be any hashable value
V = TypeVar("V", bound=Hashable)

Initializer = Union[Callable[[V], Optional[Point]], Mapping[V, Point]]
"""Starting positions: a function of the vertex or a mapping. None/missing = unset."""

TemperatureModel = Callable[[int, int], float]
"""Cooling schedule: (iteration, max_iterations) -> temperature."""


__all__ = [
    "EventType",
    "Event",
    "Point",
    "ORIGIN",
    "Box",
    "V",
    "Initializer",
    "TemperatureModel",
]
