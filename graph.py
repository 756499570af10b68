"""
Weighted graph abstraction for the spanning-tree engines.

Vertices are Vertex instances minted by the graph itself.
Edges are stored directed: source -> destination with an optional float
weight. An undirected edge is two directed edges sharing one weight.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence

from vertices import Edge, EdgeType, T, Vertex


class Graph(ABC, Generic[T]):
    """Weighted graph over Vertex objects."""

    @property
    @abstractmethod
    def vertices(self) -> Sequence[Vertex[T]]:
        """All vertices, in a stable per-instance order."""
        raise NotImplementedError

    @abstractmethod
    def create_vertex(self, data: T) -> Vertex[T]:
        """Register a new vertex carrying data with the next free index."""
        raise NotImplementedError

    @abstractmethod
    def add_directed_edge(
        self, source: Vertex[T], destination: Vertex[T], weight: Optional[float]
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def edges(self, source: Vertex[T]) -> List[Edge[T]]:
        """
        Outgoing edges of source.

        An unknown vertex has no edges; this is not an error.
        """
        raise NotImplementedError

    @abstractmethod
    def weight(self, source: Vertex[T], destination: Vertex[T]) -> Optional[float]:
        """
        Weight of the first source -> destination edge.

        None when there is no such edge or the edge carries no weight.
        """
        raise NotImplementedError

    # --- Derived behaviour ---------------------------------------------------

    def add_undirected_edge(
        self, source: Vertex[T], destination: Vertex[T], weight: Optional[float]
    ) -> None:
        self.add_directed_edge(source, destination, weight)
        self.add_directed_edge(destination, source, weight)

    def add(
        self,
        edge_type: EdgeType,
        source: Vertex[T],
        destination: Vertex[T],
        weight: Optional[float],
    ) -> None:
        if edge_type is EdgeType.DIRECTED:
            self.add_directed_edge(source, destination, weight)
        else:
            self.add_undirected_edge(source, destination, weight)
