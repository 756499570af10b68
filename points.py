"""
2D point payloads and complete-graph construction for geometric MSTs.

Edge weights are Euclidean distances computed in one vectorised pass.
"""

from dataclasses import dataclass
import math
from typing import List, Sequence

import numpy as np

from adjacency_list_graph import AdjacencyListGraph


@dataclass(frozen=True, order=True)
class Point:
    """
    Planar point. Ordering is lexicographic on (x, y), which is what the
    alphabetical tie-break uses when points are payloads.
    """

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def pairwise_distances(points: Sequence[Point]) -> np.ndarray:
    """
    Dense n x n Euclidean distance matrix.
    """
    coords = np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)
    diff = coords[:, None, :] - coords[None, :, :]
    return np.sqrt((diff ** 2).sum(axis=-1))


def create_complete_graph(points: Sequence[Point]) -> AdjacencyListGraph[Point]:
    """
    One vertex per point, plus a directed edge for every ordered pair of
    distinct vertices weighted by their distance.

    Duplicate points still get separate vertices (and a 0.0 edge between them).
    """
    graph: AdjacencyListGraph[Point] = AdjacencyListGraph()
    vertices = [graph.create_vertex(p) for p in points]
    dist = pairwise_distances(points)
    for i, current in enumerate(vertices):
        for j, other in enumerate(vertices):
            if i != j:
                graph.add_directed_edge(current, other, float(dist[i, j]))
    return graph


def sample_points(
    count: int,
    seed: int,
    width: float = 100.0,
    height: float = 100.0,
) -> List[Point]:
    """
    Uniform random points in the box [0, width] x [0, height].
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    rng = np.random.default_rng(seed)
    xs = rng.uniform(0.0, width, size=count)
    ys = rng.uniform(0.0, height, size=count)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]
