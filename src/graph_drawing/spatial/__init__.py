"""
Spatial data structures for efficient force calculations.

Provides quadtree implementation for Barnes-Hut O(n log n) force approximation.
"""

from .quadtree import Internal, Leaf, QuadTree, SpatialNode

__all__ = ["Internal", "Leaf", "QuadTree", "SpatialNode"]
