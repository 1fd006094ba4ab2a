"""
Layout models: where vertex positions live.

A layout model stores the current point of each vertex, a per-vertex
"fixed" flag and the drawable area the algorithms must stay within.
Algorithms read starting positions from the model and publish their
result back through put(), which leaves fixed vertices untouched.
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterator, Optional, Protocol, TypeVar

from .types import Box, Point
from .validation import validate_box

VertexT = TypeVar("VertexT", bound=Hashable)

Listener = Callable[[VertexT, Point], None]


class LayoutModel(Protocol[VertexT]):
    """Position store consumed by layout algorithms."""

    @property
    def drawable_area(self) -> Box: ...

    def get(self, vertex: VertexT) -> Optional[Point]: ...

    def put(self, vertex: VertexT, point: Point) -> Optional[Point]: ...

    def is_fixed(self, vertex: VertexT) -> bool: ...

    def set_fixed(self, vertex: VertexT, fixed: bool) -> None: ...

    def collect(self) -> dict[VertexT, Point]: ...

    def __iter__(self) -> Iterator[tuple[VertexT, Point]]: ...


class MapLayoutModel(Generic[VertexT]):
    """
    Layout model backed by dictionaries.

    Example:
        model = MapLayoutModel(Box(0, 0, 800, 600))
        model.put("a", Point(10, 10))
        model.set_fixed("a", True)
        model.put("a", Point(50, 50))  # ignored, "a" is fixed
        assert model.get("a") == Point(10, 10)
    """

    def __init__(self, drawable_area: Box) -> None:
        """
        Initialize an empty model.

        Args:
            drawable_area: Region the layout must stay within

        Raises:
            InvalidBoxError: If the area is degenerate.
        """
        self._drawable_area: Box = validate_box(drawable_area)
        self._points: dict[VertexT, Point] = {}
        self._fixed: set[VertexT] = set()

    @property
    def drawable_area(self) -> Box:
        """Get the drawable area."""
        return self._drawable_area

    @drawable_area.setter
    def drawable_area(self, value: Box) -> None:
        """Set the drawable area."""
        self._drawable_area = validate_box(value)

    def get(self, vertex: VertexT) -> Optional[Point]:
        """Current point of vertex, or None if it has never been placed."""
        return self._points.get(vertex)

    def put(self, vertex: VertexT, point: Point) -> Optional[Point]:
        """
        Place a vertex.

        Fixed vertices are not moved; their current point is returned.

        Returns:
            The previous point (None if the vertex had none)
        """
        if vertex in self._fixed:
            return self._points.get(vertex)
        previous = self._points.get(vertex)
        self._points[vertex] = point
        return previous

    def is_fixed(self, vertex: VertexT) -> bool:
        return vertex in self._fixed

    def set_fixed(self, vertex: VertexT, fixed: bool) -> None:
        if fixed:
            self._fixed.add(vertex)
        else:
            self._fixed.discard(vertex)

    def collect(self) -> dict[VertexT, Point]:
        """Snapshot of all vertex positions."""
        return dict(self._points)

    def __iter__(self) -> Iterator[tuple[VertexT, Point]]:
        return iter(list(self._points.items()))

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"MapLayoutModel(area={self._drawable_area!r}, vertices={len(self._points)})"


class ListenableLayoutModel(Generic[VertexT]):
    """
    Layout model wrapper which notifies listeners of every position change.

    Listeners are called synchronously with (vertex, point) after a
    successful put(). Puts on fixed vertices do not notify.

    Example:
        model = ListenableLayoutModel(MapLayoutModel(Box(0, 0, 100, 100)))
        model.add_listener(lambda v, p: print(f"{v} moved to {p}"))
    """

    def __init__(self, model: LayoutModel[VertexT]) -> None:
        if model is None:
            raise ValueError("Wrapped model cannot be None")
        self._model = model
        self._listeners: list[Listener[VertexT]] = []

    @property
    def drawable_area(self) -> Box:
        return self._model.drawable_area

    def get(self, vertex: VertexT) -> Optional[Point]:
        return self._model.get(vertex)

    def put(self, vertex: VertexT, point: Point) -> Optional[Point]:
        if self._model.is_fixed(vertex):
            return self._model.get(vertex)
        previous = self._model.put(vertex, point)
        self._notify(vertex, point)
        return previous

    def is_fixed(self, vertex: VertexT) -> bool:
        return self._model.is_fixed(vertex)

    def set_fixed(self, vertex: VertexT, fixed: bool) -> None:
        self._model.set_fixed(vertex, fixed)

    def collect(self) -> dict[VertexT, Point]:
        return self._model.collect()

    def __iter__(self) -> Iterator[tuple[VertexT, Point]]:
        return iter(self._model)

    def add_listener(self, listener: Listener[VertexT]) -> Listener[VertexT]:
        """Register a listener. Returns it so it can be removed later."""
        self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: Listener[VertexT]) -> bool:
        """Unregister a listener. Returns False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def _notify(self, vertex: VertexT, point: Point) -> None:
        for listener in list(self._listeners):
            listener(vertex, point)


__all__ = ["LayoutModel", "MapLayoutModel", "ListenableLayoutModel", "Listener"]
