"""
Circular graph layout algorithms.

- CircularLayout: Positions vertices evenly on a circle
"""

from .circular import CircularLayout

__all__ = ["CircularLayout"]
