"""
Base classes for graph drawing algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for all layout algorithms:

- BaseLayout: Abstract base with event system, random source and
  starting-position handling
- IterativeLayout: For layouts that run a fixed number of iterations
- StaticLayout: For single-pass layouts (random, circular, ...)

Every algorithm is driven the same way: construct it with its parameters,
then call layout(graph, model). The graph is only read; results are
written to the model through model.put().
"""

from __future__ import annotations

import random
import warnings
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Generic, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .graph import GraphLike
from .model import LayoutModel
from .types import Box, Event, EventType, Initializer, Point, V


class BaseLayout(ABC, Generic[V]):
    """
    Abstract base class for all layout algorithms.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Injected random source for reproducible runs
    - Starting positions from an initializer or a random scatter

    Example:
        model = MapLayoutModel(Box(0, 0, 800, 600))
        SomeLayout(random_seed=42).layout(graph, model)

        for vertex, point in model:
            print(f"{vertex}: ({point.x}, {point.y})")
    """

    def __init__(
        self,
        *,
        initializer: Optional[Initializer[V]] = None,
        rng: Optional[random.Random] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            initializer: Starting positions, as a mapping or a function of the
                vertex. Vertices it leaves unset start at the minimum corner of
                the drawable area. If None, vertices are scattered at random.
            rng: Random source. Takes precedence over random_seed.
            random_seed: Seed for a private random source
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event
        """
        self._initializer: Optional[Initializer[V]] = initializer
        self._rng: random.Random = rng if rng is not None else random.Random(random_seed)
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}

        # Register event callbacks
        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def initializer(self) -> Optional[Initializer[V]]:
        """Get the starting-position initializer."""
        return self._initializer

    @initializer.setter
    def initializer(self, value: Optional[Initializer[V]]) -> None:
        """Set the starting-position initializer (None = random scatter)."""
        self._initializer = value

    @property
    def rng(self) -> random.Random:
        """Get the random source."""
        return self._rng

    @rng.setter
    def rng(self, value: random.Random) -> None:
        """Set the random source."""
        if value is None:
            raise ValueError("rng cannot be None")
        self._rng = value

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def layout(self, graph: GraphLike[V], model: LayoutModel[V]) -> Self:
        """
        Run the layout algorithm.

        Implementations read the graph, compute positions and publish them
        with model.put(). An empty graph is a no-op.

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _scatter(self, vertices: Sequence[V], area: Box) -> dict[V, Point]:
        """Uniformly random positions within area, drawn from the layout's rng."""
        rng = self._rng
        return {
            v: Point(
                area.min_x + rng.random() * area.width,
                area.min_y + rng.random() * area.height,
            )
            for v in vertices
        }

    def _initial_positions(
        self, vertices: Sequence[V], model: LayoutModel[V]
    ) -> dict[V, Point]:
        """
        Compute starting positions for a run.

        Only the given vertices are looked up in the initializer, so any
        other keys it may hold are ignored. Fixed vertices keep the point
        stored in the model; free vertices are clamped into the drawable area.
        """
        area = model.drawable_area

        if self._initializer is not None:
            lookup: Callable[[V], Optional[Point]]
            if isinstance(self._initializer, Mapping):
                lookup = self._initializer.get
            else:
                lookup = self._initializer
            positions: dict[V, Point] = {}
            for v in vertices:
                p = lookup(v)
                positions[v] = p if p is not None else area.origin
        else:
            positions = self._scatter(vertices, area)

        for v in vertices:
            if model.is_fixed(v):
                current = model.get(v)
                if current is not None:
                    positions[v] = current
                else:
                    warnings.warn(
                        f"Fixed vertex {v!r} has no position in the model; "
                        "using its initial position as a source",
                        stacklevel=3,
                    )
            else:
                positions[v] = area.clamp(positions[v])

        return positions

    def _publish(self, positions: Mapping[V, Point], model: LayoutModel[V]) -> None:
        """Write final positions of all non-fixed vertices to the model."""
        for v, p in positions.items():
            if not model.is_fixed(v):
                model.put(v, p)


class IterativeLayout(BaseLayout[V]):
    """
    Base class for layout algorithms running a fixed iteration budget.

    A non-positive iteration count makes layout() a no-op.
    """

    def __init__(
        self,
        *,
        initializer: Optional[Initializer[V]] = None,
        rng: Optional[random.Random] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        iterations: int = 100,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            initializer: Starting positions (see BaseLayout)
            rng: Random source
            random_seed: Seed for a private random source
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of iterations
        """
        super().__init__(
            initializer=initializer,
            rng=rng,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._iterations: int = int(iterations)

    @property
    def iterations(self) -> int:
        """Get iteration budget."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set iteration budget (values <= 0 disable the layout)."""
        self._iterations = int(value)


class StaticLayout(BaseLayout[V]):
    """
    Base class for single-pass layout algorithms.

    These layouts compute positions in one pass without iteration.
    Examples: random, circular layouts.
    """

    def layout(self, graph: GraphLike[V], model: LayoutModel[V]) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes positions, publishes them for non-fixed
        vertices and fires end event.

        Returns:
            self (for chaining)
        """
        vertices = list(graph.vertices())
        if not vertices:
            return self

        self.trigger({"type": EventType.start, "iteration": 0})
        positions = self._compute(vertices, graph, model)
        self._publish(positions, model)
        self.trigger({"type": EventType.end, "iteration": 0})
        return self

    @abstractmethod
    def _compute(
        self, vertices: Sequence[V], graph: GraphLike[V], model: LayoutModel[V]
    ) -> dict[V, Point]:
        """
        Compute vertex positions.

        Subclasses must implement this to perform the actual layout computation.
        """
        pass


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
]

