"""
Minimal undirected graph used as input to the layout algorithms.

Layout algorithms only need to enumerate vertices and edges, so they accept
anything implementing the GraphLike protocol. Graph is a small adjacency-set
implementation that keeps vertices in insertion order.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterable, Iterator, Protocol, TypeVar

VertexT = TypeVar("VertexT", bound=Hashable)


class GraphLike(Protocol[VertexT]):
    """Read-only view of a graph consumed by layout algorithms."""

    def vertices(self) -> Iterable[VertexT]: ...

    def edges(self) -> Iterable[tuple[VertexT, VertexT]]: ...


class Graph(Generic[VertexT]):
    """
    Simple undirected graph.

    Parallel edges are collapsed; self-loops are stored but ignored by the
    force-directed algorithms.

    Example:
        graph = Graph.from_edges([(1, 2), (2, 3), (3, 4), (4, 1)])
        graph.add_vertex(5)

        for u, v in graph.edges():
            print(u, v)
    """

    def __init__(self) -> None:
        self._adj: dict[VertexT, set[VertexT]] = {}
        self._edges: list[tuple[VertexT, VertexT]] = []

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[VertexT, VertexT]],
        vertices: Iterable[VertexT] = (),
    ) -> Graph[VertexT]:
        """
        Build a graph from an edge list.

        Args:
            edges: (u, v) pairs; endpoints are added as vertices
            vertices: Extra (possibly isolated) vertices, added first

        Returns:
            New Graph
        """
        graph: Graph[VertexT] = cls()
        for v in vertices:
            graph.add_vertex(v)
        for u, v in edges:
            graph.add_edge(u, v)
        return graph

    def add_vertex(self, v: VertexT) -> bool:
        """Add a vertex. Returns False if it was already present."""
        if v in self._adj:
            return False
        self._adj[v] = set()
        return True

    def add_edge(self, u: VertexT, v: VertexT) -> bool:
        """Add an undirected edge, adding missing endpoints. Returns False if present."""
        self.add_vertex(u)
        self.add_vertex(v)
        if v in self._adj[u]:
            return False
        self._adj[u].add(v)
        self._adj[v].add(u)
        self._edges.append((u, v))
        return True

    def vertices(self) -> list[VertexT]:
        """Vertices in insertion order."""
        return list(self._adj)

    def edges(self) -> list[tuple[VertexT, VertexT]]:
        """Edges in insertion order."""
        return list(self._edges)

    def neighbors(self, v: VertexT) -> set[VertexT]:
        """Vertices adjacent to v."""
        return set(self._adj[v])

    def degree(self, v: VertexT) -> int:
        """Number of edges incident to v (a self-loop counts twice)."""
        return len(self._adj[v]) + (1 if v in self._adj[v] else 0)

    def __contains__(self, v: object) -> bool:
        return v in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __iter__(self) -> Iterator[VertexT]:
        return iter(self._adj)

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self._adj)}, edges={len(self._edges)})"


__all__ = ["GraphLike", "Graph"]
