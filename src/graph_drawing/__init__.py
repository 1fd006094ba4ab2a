"""
graph-drawing: force-directed graph drawing with Barnes-Hut indexing.

This package positions the vertices of a graph inside a rectangular
drawable area and writes the result to a layout model.

Available algorithms:
- force: Fruchterman-Reingold (exact and quadtree-indexed), Kamada-Kawai
- circular: Circular layout
- basic: Random layout
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
    StaticLayout,
)

# Basic layouts
from .basic import RandomLayout

# Circular layouts
from .circular import CircularLayout

# Force-directed layouts
from .force import (
    BarnesHutEvaluator,
    ExponentialTemperatureModel,
    FruchtermanReingoldLayout,
    IndexedFruchtermanReingoldLayout,
    KamadaKawaiLayout,
    LinearTemperatureModel,
)

# Graph and layout models
from .graph import Graph, GraphLike
from .model import LayoutModel, ListenableLayoutModel, MapLayoutModel

# Spatial data structures
from .spatial import Internal, Leaf, QuadTree, SpatialNode

# Shared types
from .types import ORIGIN, Box, Event, EventType, Initializer, Point, TemperatureModel

# Validation utilities
from .validation import (
    EmptyNodeError,
    InvalidBoxError,
    InvalidParameterError,
    InvalidThetaError,
    PointOutsideRegionError,
    ValidationError,
    validate_box,
    validate_positive,
    validate_theta,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Point",
    "ORIGIN",
    "Box",
    "EventType",
    "Event",
    "Initializer",
    "TemperatureModel",
    # Graph and models
    "Graph",
    "GraphLike",
    "LayoutModel",
    "MapLayoutModel",
    "ListenableLayoutModel",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    # Force-directed layouts
    "FruchtermanReingoldLayout",
    "IndexedFruchtermanReingoldLayout",
    "KamadaKawaiLayout",
    "BarnesHutEvaluator",
    "LinearTemperatureModel",
    "ExponentialTemperatureModel",
    # Circular and basic layouts
    "CircularLayout",
    "RandomLayout",
    # Spatial data structures
    "QuadTree",
    "Leaf",
    "Internal",
    "SpatialNode",
    # Validation
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
