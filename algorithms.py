"""
Algorithm interfaces for spanning-tree construction.

Keeps the tree engines separate from graph storage and experiment wiring.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, NamedTuple, Optional

from adjacency_list_graph import AdjacencyListGraph
from graph import Graph
from vertices import T, Vertex


class MissingWeightPolicy(Enum):
    """How an engine treats an edge whose weight is None."""

    ZERO = "zero"      # order and cost it as 0.0
    FORBID = "forbid"  # reject with ValueError


class SpanningTreeCancelled(RuntimeError):
    """Raised when a caller's should_cancel hook stops a running engine."""


class SpanningTree(NamedTuple):
    cost: float
    mst: AdjacencyListGraph


class SpanningTreeEngine(ABC):
    """
    Interface for minimum-spanning-tree computation.
    """

    @abstractmethod
    def produce_minimum_spanning_tree(
        self,
        graph: Graph[T],
        start: Optional[Vertex[T]] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> SpanningTree:
        """
        Grow a minimum spanning tree of graph.

        Returns:
            (cost, mst) where mst holds every vertex of graph and the chosen
            undirected edges, and cost is the sum of their weights.
        """
        raise NotImplementedError
