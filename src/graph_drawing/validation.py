"""
Input validation utilities for graph drawing algorithms.

Provides centralized validation functions for drawable areas, the
Barnes-Hut threshold and other layout parameters. Raises descriptive
exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any

from .types import Box, Point


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidBoxError(ValidationError):
    """Raised when a drawable area or index region is degenerate."""

    pass


class InvalidThetaError(ValidationError):
    """Raised when the Barnes-Hut threshold is outside [0, 1]."""

    pass


class InvalidParameterError(ValidationError):
    """Raised when a numeric layout parameter is out of range."""

    pass


class PointOutsideRegionError(ValidationError):
    """Raised when a point is inserted outside the region of a spatial index."""

    def __init__(self, point: Point, region: Box) -> None:
        super().__init__(f"Point {point!r} lies outside index region {region!r}")
        self.point = point
        self.region = region


class EmptyNodeError(ValidationError):
    """Raised when the centroid of an empty spatial node is requested."""

    pass


def validate_box(box: Any) -> Box:
    """
    Validate a drawable area / index region.

    Args:
        box: Box instance

    Returns:
        The validated box

    Raises:
        InvalidBoxError: If box is missing, non-finite or has non-positive size
    """
    if box is None:
        raise InvalidBoxError("Region must not be None")
    if not isinstance(box, Box):
        raise InvalidBoxError(f"Region must be a Box, got {type(box).__name__}")

    values = (box.min_x, box.min_y, box.width, box.height)
    if not all(math.isfinite(v) for v in values):
        raise InvalidBoxError(f"Region must have finite coordinates, got {box!r}")
    if box.width <= 0:
        raise InvalidBoxError(f"Region width must be positive, got {box.width}")
    if box.height <= 0:
        raise InvalidBoxError(f"Region height must be positive, got {box.height}")

    return box


def validate_theta(theta: float) -> float:
    """
    Validate the Barnes-Hut threshold.

    Args:
        theta: Threshold value

    Returns:
        Validated theta as float

    Raises:
        InvalidThetaError: If theta not in [0, 1]
    """
    theta = float(theta)
    if not 0.0 <= theta <= 1.0:
        raise InvalidThetaError(f"theta must be in [0, 1], got {theta}")
    return theta


def validate_positive(value: float, name: str) -> float:
    """
    Validate a strictly positive, finite parameter.

    Args:
        value: Parameter value
        name: Parameter name used in the error message

    Returns:
        Validated value as float

    Raises:
        InvalidParameterError: If value <= 0 or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


__all__ = [
    "ValidationError",
    "InvalidBoxError",
    "InvalidThetaError",
    "InvalidParameterError",
    "PointOutsideRegionError",
    "EmptyNodeError",
    "validate_box",
    "validate_theta",
    "validate_positive",
]
