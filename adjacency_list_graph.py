"""
Concrete weighted graph implementation for the spanning-tree engines.

Implements the Graph interface using a vertex -> [Edge] adjacency list.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from graph import Graph
from vertices import Edge, T, Vertex


class AdjacencyListGraph(Graph[T]):
    """
    Weighted graph backed by an insertion-ordered vertex -> edges mapping.

    Edge order within a vertex's list is insertion order, which fixes
    traversal order (and therefore tie-breaking) for the engines.
    """

    def __init__(self) -> None:
        self._adj: Dict[Vertex[T], List[Edge[T]]] = {}

    # --- Graph interface -----------------------------------------------------

    @property
    def vertices(self) -> Sequence[Vertex[T]]:
        return list(self._adj.keys())

    def create_vertex(self, data: T) -> Vertex[T]:
        vertex = Vertex(index=len(self._adj), data=data)
        self._adj[vertex] = []
        return vertex

    def add_directed_edge(
        self, source: Vertex[T], destination: Vertex[T], weight: Optional[float]
    ) -> None:
        assert source in self._adj, f"vertex {source} does not belong to this graph"
        assert destination in self._adj, f"vertex {destination} does not belong to this graph"
        self._adj[source].append(Edge(source, destination, weight))

    def edges(self, source: Vertex[T]) -> List[Edge[T]]:
        return list(self._adj.get(source, ()))  # defensive copy

    def weight(self, source: Vertex[T], destination: Vertex[T]) -> Optional[float]:
        for edge in self._adj.get(source, ()):
            if edge.destination == destination:
                return edge.weight
        return None

    # --- Helpers (not part of Graph interface) -------------------------------

    def copy_vertices_from(self, other: Graph[T]) -> None:
        """
        Register every vertex of other here with an empty edge list.

        Vertices already present keep their edges.
        """
        for vertex in other.vertices:
            self._adj.setdefault(vertex, [])

    def edge_count(self) -> int:
        """Number of stored directed edges."""
        return sum(len(edges) for edges in self._adj.values())

    def undirected_edges(self) -> List[Tuple[Vertex[T], Vertex[T], Optional[float]]]:
        """
        Each undirected pair once, as (lower-index vertex, higher-index vertex, weight).

        Directed edges without a reverse twin are reported too, normalised the
        same way.
        """
        seen = set()
        pairs: List[Tuple[Vertex[T], Vertex[T], Optional[float]]] = []
        for edges in self._adj.values():
            for edge in edges:
                a, b = edge.source, edge.destination
                if b.index < a.index:
                    a, b = b, a
                key = (a.index, b.index)
                if key in seen:
                    continue
                seen.add(key)
                pairs.append((a, b, edge.weight))
        return pairs

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dump of vertices and directed edges."""
        return {
            "vertices": [{"index": v.index, "data": v.data} for v in self._adj],
            "edges": [
                {
                    "source": e.source.index,
                    "destination": e.destination.index,
                    "weight": e.weight,
                }
                for edges in self._adj.values()
                for e in edges
            ],
        }

    def __str__(self) -> str:
        lines = []
        for vertex, edges in self._adj.items():
            destinations = ", ".join(str(edge.destination) for edge in edges)
            lines.append(f"{vertex} ---> [ {destinations} ]")
        return "\n".join(lines)
