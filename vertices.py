"""
Vertex and edge value types for the spanning-tree graphs.

Vertices are only minted by a Graph (which assigns the index); edges are only
created by the graph's edge-insertion methods.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, Hashable, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


class EdgeType(Enum):
    DIRECTED = auto()
    UNDIRECTED = auto()


@dataclass(frozen=True)
class Vertex(Generic[T]):
    """
    Graph node: a stable per-graph index plus a caller-chosen payload.

    Equality uses both fields, so two vertices with the same payload but
    different indices never collide in an adjacency map.
    """

    index: int
    data: T

    def __str__(self) -> str:
        return f"{self.index}: {self.data}"


@dataclass(frozen=True)
class Edge(Generic[T]):
    """
    Directed, optionally weighted connection source -> destination.

    weight is None when the edge carries no numeric weight.
    """

    source: Vertex[T]
    destination: Vertex[T]
    weight: Optional[float]

    def __str__(self) -> str:
        return f"source: {self.source} and destination {self.destination} ---> {self.weight}"
