"""
Force-directed graph layout algorithms.

This module provides classic force-directed layout algorithms:
- FruchtermanReingold: Repulsion/attraction with exact all-pairs repulsion
- IndexedFruchtermanReingold: Same, with Barnes-Hut approximated repulsion
- KamadaKawai: Spring-energy minimization based on graph-theoretic distances
"""

from .barnes_hut import BarnesHutEvaluator
from .fruchterman_reingold import FruchtermanReingoldLayout
from .indexed_fruchterman_reingold import IndexedFruchtermanReingoldLayout
from .kamada_kawai import KamadaKawaiLayout
from .temperature import ExponentialTemperatureModel, LinearTemperatureModel

__all__ = [
    "BarnesHutEvaluator",
    "FruchtermanReingoldLayout",
    "IndexedFruchtermanReingoldLayout",
    "KamadaKawaiLayout",
    "LinearTemperatureModel",
    "ExponentialTemperatureModel",
]
