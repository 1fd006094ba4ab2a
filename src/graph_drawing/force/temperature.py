"""
Cooling schedules for force-directed layouts.

The temperature caps how far a vertex may move in one iteration. It is a
function of the iteration number only, never of a measured energy, so a
run always performs the same amount of work and is reproducible for a
fixed random seed.
"""

from __future__ import annotations


class LinearTemperatureModel:
    """
    Temperature decreasing linearly with the iteration number.

        t(i) = slope * i + start

    Example:
        model = LinearTemperatureModel.decaying(start=100.0, iterations=50)
        model(0, 50)   # 100.0
        model(25, 50)  # 50.0
    """

    def __init__(self, slope: float, start: float) -> None:
        """
        Args:
            slope: Change per iteration (negative to cool down)
            start: Temperature at iteration 0
        """
        self._slope = float(slope)
        self._start = float(start)

    @classmethod
    def decaying(cls, start: float, iterations: int) -> LinearTemperatureModel:
        """Schedule going from start at iteration 0 to 0 at iteration `iterations`."""
        if iterations <= 0:
            return cls(0.0, start)
        return cls(-start / iterations, start)

    @property
    def slope(self) -> float:
        return self._slope

    @property
    def start(self) -> float:
        return self._start

    def __call__(self, iteration: int, max_iterations: int) -> float:
        return max(0.0, self._slope * iteration + self._start)

    def __repr__(self) -> str:
        return f"LinearTemperatureModel(slope={self._slope}, start={self._start})"


class ExponentialTemperatureModel:
    """
    Temperature decaying geometrically, t(i) = start * factor ** i.

    Cools quickly at first and keeps a long tail of small moves, as in
    simulated annealing.
    """

    def __init__(self, start: float, factor: float = 0.95) -> None:
        self._start = float(start)
        # Clamp to [0, 1] so the schedule never heats up
        self._factor = max(0.0, min(1.0, float(factor)))

    @property
    def start(self) -> float:
        return self._start

    @property
    def factor(self) -> float:
        return self._factor

    def __call__(self, iteration: int, max_iterations: int) -> float:
        return self._start * self._factor**iteration

    def __repr__(self) -> str:
        return f"ExponentialTemperatureModel(start={self._start}, factor={self._factor})"


__all__ = ["LinearTemperatureModel", "ExponentialTemperatureModel"]
