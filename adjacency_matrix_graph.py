"""
Dense weighted graph implementation for the spanning-tree engines.

Implements the Graph interface with a square vertex x vertex matrix. Cell
[source][destination] holds the Edge between them, or None when there is
no edge, so an edge without a weight is still distinguishable from a
missing edge.
"""

from typing import List, Optional, Sequence

import numpy as np

from graph import Graph
from vertices import Edge, T, Vertex


class AdjacencyMatrixGraph(Graph[T]):
    """
    Weighted graph backed by a list-of-rows edge matrix.

    At most one edge per ordered vertex pair: adding source -> destination
    again replaces the previous edge. edges() walks a row in column order,
    i.e. by destination index rather than insertion order.
    """

    def __init__(self) -> None:
        self._vertices: List[Vertex[T]] = []
        self._cells: List[List[Optional[Edge[T]]]] = []

    def _owns(self, vertex: Vertex[T]) -> bool:
        return 0 <= vertex.index < len(self._vertices) and self._vertices[vertex.index] == vertex

    # --- Graph interface -----------------------------------------------------

    @property
    def vertices(self) -> Sequence[Vertex[T]]:
        return list(self._vertices)

    def create_vertex(self, data: T) -> Vertex[T]:
        vertex = Vertex(index=len(self._vertices), data=data)
        self._vertices.append(vertex)
        for row in self._cells:
            row.append(None)
        self._cells.append([None] * len(self._vertices))
        return vertex

    def add_directed_edge(
        self, source: Vertex[T], destination: Vertex[T], weight: Optional[float]
    ) -> None:
        assert self._owns(source), f"vertex {source} does not belong to this graph"
        assert self._owns(destination), f"vertex {destination} does not belong to this graph"
        self._cells[source.index][destination.index] = Edge(source, destination, weight)

    def edges(self, source: Vertex[T]) -> List[Edge[T]]:
        if not self._owns(source):
            return []
        return [edge for edge in self._cells[source.index] if edge is not None]

    def weight(self, source: Vertex[T], destination: Vertex[T]) -> Optional[float]:
        if not (self._owns(source) and self._owns(destination)):
            return None
        edge = self._cells[source.index][destination.index]
        return None if edge is None else edge.weight

    # --- Helpers (not part of Graph interface) -------------------------------

    def weight_matrix(self, missing: float = np.nan) -> np.ndarray:
        """
        n x n float matrix of weights; cells without a weighted edge hold missing.
        """
        size = len(self._vertices)
        matrix = np.full((size, size), missing, dtype=float)
        for i, row in enumerate(self._cells):
            for j, edge in enumerate(row):
                if edge is not None and edge.weight is not None:
                    matrix[i, j] = edge.weight
        return matrix

    def __str__(self) -> str:
        header = "\n".join(str(v) for v in self._vertices)
        grid = []
        for row in self._cells:
            cells = []
            for edge in row:
                if edge is None:
                    cells.append("ø")
                elif edge.weight is None:
                    cells.append("-")
                else:
                    cells.append(f"{edge.weight:g}")
            grid.append("\t".join(cells))
        return header + "\n\n" + "\n".join(grid)
