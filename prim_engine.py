"""
Heap-based Prim engine for minimum spanning trees.

Grows the tree one vertex at a time from a start vertex, always taking the
cheapest frontier edge out of a PriorityQueue. Stale frontier entries (whose
destination was reached by a cheaper edge first) are skipped when dequeued
rather than removed eagerly.
"""

from collections import deque
from typing import Callable, Optional, Sequence, Set

from adjacency_list_graph import AdjacencyListGraph
from algorithms import (
    MissingWeightPolicy,
    SpanningTree,
    SpanningTreeCancelled,
    SpanningTreeEngine,
)
from graph import Graph
from points import Point, create_complete_graph
from priority_queue import PriorityQueue
from vertices import Edge, T, Vertex


class PrimEngine(SpanningTreeEngine):
    """
    Prim's algorithm over any Graph implementation.

    Frontier order is ascending weight (None counts as 0.0). When
    should_prioritize_alphabetically is set, two edges with the same
    non-zero weight are ordered by their *source* payload.

    Complexity:
        O(E log E); each directed edge is enqueued at most once.
    """

    def __init__(
        self,
        should_prioritize_alphabetically: bool = False,
        missing_weight_policy: MissingWeightPolicy = MissingWeightPolicy.ZERO,
    ) -> None:
        self.should_prioritize_alphabetically = should_prioritize_alphabetically
        self.missing_weight_policy = missing_weight_policy

    def produce_minimum_spanning_tree(
        self,
        graph: Graph[T],
        start: Optional[Vertex[T]] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> SpanningTree:
        """
        Compute (cost, mst) for the component containing start.

        start defaults to the graph's first vertex. A disconnected graph
        yields a tree over start's component only; the other vertices are
        still present in mst, without edges.
        """
        cost = 0.0
        mst: AdjacencyListGraph[T] = AdjacencyListGraph()
        mst.copy_vertices_from(graph)
        visited: Set[Vertex[T]] = set()
        frontier: PriorityQueue[Edge[T]] = PriorityQueue(self._sorts_before)

        vertices = graph.vertices
        if not vertices:
            return SpanningTree(cost, mst)
        if start is None:
            start = vertices[0]

        visited.add(start)
        self._add_available_edges(start, graph, visited, frontier)

        while not frontier.is_empty:
            if should_cancel is not None and should_cancel():
                raise SpanningTreeCancelled(
                    f"cancelled after visiting {len(visited)} of {len(vertices)} vertices"
                )
            smallest = frontier.dequeue()
            vertex = smallest.destination
            # Skip outdated entries
            if vertex in visited:
                continue
            visited.add(vertex)
            cost += self._weight_of(smallest)
            mst.add_undirected_edge(smallest.source, smallest.destination, smallest.weight)
            self._add_available_edges(vertex, graph, visited, frontier)

        return SpanningTree(cost, mst)

    def produce_minimum_spanning_tree_for_points(
        self,
        points: Sequence[Point],
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> SpanningTree:
        """Euclidean MST over points, via their complete graph."""
        complete = create_complete_graph(points)
        return self.produce_minimum_spanning_tree(complete, should_cancel=should_cancel)

    # --- Internals -----------------------------------------------------------

    def _weight_of(self, edge: Edge[T]) -> float:
        if edge.weight is None:
            if self.missing_weight_policy is MissingWeightPolicy.FORBID:
                raise ValueError(f"edge has no weight: {edge}")
            return 0.0
        return edge.weight

    def _sorts_before(self, first: Edge[T], second: Edge[T]) -> bool:
        first_weight = self._weight_of(first)
        second_weight = self._weight_of(second)
        if (
            self.should_prioritize_alphabetically
            and first_weight != 0.0
            and second_weight != 0.0
            and first_weight == second_weight
        ):
            return first.source.data < second.source.data
        return first_weight < second_weight

    def _add_available_edges(
        self,
        vertex: Vertex[T],
        graph: Graph[T],
        visited: Set[Vertex[T]],
        frontier: PriorityQueue[Edge[T]],
    ) -> None:
        for edge in graph.edges(vertex):
            if edge.destination not in visited:
                if edge.weight is None and self.missing_weight_policy is MissingWeightPolicy.FORBID:
                    raise ValueError(f"edge has no weight: {edge}")
                frontier.enqueue(edge)


def spans(graph: Graph[T], mst: Graph[T]) -> bool:
    """
    True when mst's edges connect every vertex of graph.

    The engine never reports disconnection itself; callers use this to
    detect a partial tree.
    """
    vertices = graph.vertices
    if not vertices:
        return True
    seen = {vertices[0]}
    pending = deque([vertices[0]])
    while pending:
        current = pending.popleft()
        for edge in mst.edges(current):
            if edge.destination not in seen:
                seen.add(edge.destination)
                pending.append(edge.destination)
    return len(seen) == len(vertices)
