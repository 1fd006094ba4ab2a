"""
Basic layout algorithms.

- RandomLayout: Uniform random placement
"""

from .random import RandomLayout

__all__ = ["RandomLayout"]
