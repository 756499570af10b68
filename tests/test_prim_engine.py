"""
Unit tests for PrimEngine using AdjacencyListGraph.
"""

import math

import pytest

from adjacency_list_graph import AdjacencyListGraph
from adjacency_matrix_graph import AdjacencyMatrixGraph
from algorithms import MissingWeightPolicy, SpanningTreeCancelled
from points import Point
from prim_engine import PrimEngine, spans


def _labelled_graph(labels, edges, graph_type=AdjacencyListGraph):
    g = graph_type()
    by_label = {label: g.create_vertex(label) for label in labels}
    for src, dst, weight in edges:
        g.add_undirected_edge(by_label[src], by_label[dst], weight)
    return g, by_label


def _tree_edges(mst):
    return {(a.data, b.data, w) for a, b, w in mst.undirected_edges()}


def six_vertex_graph(graph_type=AdjacencyListGraph):
    return _labelled_graph(
        "ABCDEF",
        [
            ("A", "C", 6.0),
            ("A", "E", 1.0),
            ("A", "F", 5.0),
            ("A", "D", 5.0),
            ("A", "B", 4.0),
            ("C", "D", 3.0),
            ("D", "E", 6.0),
            ("E", "F", 5.0),
            ("F", "B", 2.0),
            ("B", "C", 6.0),
        ],
        graph_type,
    )


def unweighted_links_graph(graph_type=AdjacencyListGraph):
    return _labelled_graph(
        "ABCDE",
        [
            ("B", "A", 2.0),
            ("A", "D", None),
            ("A", "C", None),
            ("B", "D", 8.0),
            ("B", "C", 6.0),
            ("C", "E", None),
            ("B", "E", 2.0),
            ("E", "D", None),
        ],
        graph_type,
    )


def test_six_vertex_graph_cost_and_edges():
    g, _ = six_vertex_graph()

    cost, mst = PrimEngine().produce_minimum_spanning_tree(g)

    assert cost == 15.0
    assert _tree_edges(mst) == {
        ("A", "E", 1.0),
        ("B", "F", 2.0),
        ("C", "D", 3.0),
        ("A", "B", 4.0),
        ("A", "D", 5.0),
    }
    assert mst.vertices == g.vertices
    assert len(mst.undirected_edges()) == len(g.vertices) - 1
    assert spans(g, mst)


def test_alphabetical_flag_does_not_change_cost():
    g, _ = six_vertex_graph()

    cost, mst = PrimEngine(should_prioritize_alphabetically=True).produce_minimum_spanning_tree(g)

    assert cost == 15.0
    assert len(mst.undirected_edges()) == 5


def test_missing_weights_count_as_zero_from_explicit_start():
    g, v = unweighted_links_graph()
    engine = PrimEngine(should_prioritize_alphabetically=True)

    cost, mst = engine.produce_minimum_spanning_tree(g, start=v["B"])

    assert cost == 2.0
    assert _tree_edges(mst) == {
        ("A", "B", 2.0),
        ("A", "D", None),
        ("A", "C", None),
        ("D", "E", None),
    }

    # Deterministic across reruns.
    for _ in range(3):
        again_cost, again_mst = engine.produce_minimum_spanning_tree(g, start=v["B"])
        assert again_cost == cost
        assert again_mst.to_dict() == mst.to_dict()


def test_missing_weights_default_start():
    g, _ = unweighted_links_graph()

    cost, mst = PrimEngine(should_prioritize_alphabetically=True).produce_minimum_spanning_tree(g)

    assert cost == 2.0
    assert len(mst.undirected_edges()) == 4
    assert spans(g, mst)


def test_alphabetical_tie_break_uses_source_payload():
    # B is reached before A, so without the flag heap order keeps B -> X
    # ahead of the equally weighted A -> X.
    labels = ["S", "A", "B", "X"]
    edges = [("S", "B", 1.0), ("S", "A", 1.0), ("A", "X", 5.0), ("B", "X", 5.0)]

    g, _ = _labelled_graph(labels, edges)
    cost, mst = PrimEngine().produce_minimum_spanning_tree(g)
    assert cost == 7.0
    assert ("B", "X", 5.0) in _tree_edges(mst)
    assert ("A", "X", 5.0) not in _tree_edges(mst)

    g, v = _labelled_graph(labels, edges)
    cost, mst = PrimEngine(should_prioritize_alphabetically=True).produce_minimum_spanning_tree(g)
    assert cost == 7.0
    assert mst.weight(v["A"], v["X"]) == 5.0
    assert mst.weight(v["B"], v["X"]) is None


def test_idempotent_on_unmodified_graph():
    g, _ = six_vertex_graph()
    engine = PrimEngine()

    first = engine.produce_minimum_spanning_tree(g)
    second = engine.produce_minimum_spanning_tree(g)

    assert first.cost == second.cost
    assert first.mst.to_dict() == second.mst.to_dict()
    assert first.mst is not second.mst


def test_empty_graph():
    cost, mst = PrimEngine().produce_minimum_spanning_tree(AdjacencyListGraph())

    assert cost == 0.0
    assert mst.vertices == []
    assert mst.edge_count() == 0


def test_disconnected_graph_covers_start_component_only():
    g, _ = _labelled_graph("ABCD", [("A", "B", 1.0), ("C", "D", 2.0)])

    cost, mst = PrimEngine().produce_minimum_spanning_tree(g)

    assert cost == 1.0
    assert mst.vertices == g.vertices
    assert _tree_edges(mst) == {("A", "B", 1.0)}
    assert not spans(g, mst)


def test_forbid_policy_rejects_unweighted_edges():
    g, _ = unweighted_links_graph()
    engine = PrimEngine(missing_weight_policy=MissingWeightPolicy.FORBID)

    with pytest.raises(ValueError):
        engine.produce_minimum_spanning_tree(g)

    weighted, _ = six_vertex_graph()
    cost, _ = engine.produce_minimum_spanning_tree(weighted)
    assert cost == 15.0


def test_cancellation_hook_stops_the_loop():
    g, _ = six_vertex_graph()
    calls = []

    def should_cancel():
        calls.append(1)
        return len(calls) > 2

    with pytest.raises(SpanningTreeCancelled):
        PrimEngine().produce_minimum_spanning_tree(g, should_cancel=should_cancel)
    assert len(calls) == 3


def test_points_triangle_uses_two_shortest_sides():
    points = [Point(0.0, 0.0), Point(3.0, 0.0), Point(0.0, 4.0)]

    cost, mst = PrimEngine().produce_minimum_spanning_tree_for_points(points)

    assert cost == pytest.approx(7.0)
    assert len(mst.undirected_edges()) == 2
    assert 5.0 not in {w for _, _, w in mst.undirected_edges()}


def test_points_scatter_spans_all_points():
    points = [Point(3, 17), Point(6, 16), Point(5, 14), Point(18, 7), Point(4, 0), Point(10, 1)]

    cost, mst = PrimEngine(should_prioritize_alphabetically=True).produce_minimum_spanning_tree_for_points(points)

    assert len(mst.vertices) == 6
    assert len(mst.undirected_edges()) == 5
    assert sum(w for _, _, w in mst.undirected_edges()) == pytest.approx(cost)
    # Cheapest edge in the cloud must be in the tree.
    assert any(math.isclose(w, math.hypot(1, 2)) for _, _, w in mst.undirected_edges())


GRAPH_TYPES = [AdjacencyListGraph, AdjacencyMatrixGraph]


@pytest.mark.parametrize("graph_type", GRAPH_TYPES)
def test_six_vertex_fixture_on_each_graph_type(graph_type):
    g, _ = six_vertex_graph(graph_type)

    cost, mst = PrimEngine().produce_minimum_spanning_tree(g)

    assert cost == 15.0
    assert _tree_edges(mst) == {
        ("A", "E", 1.0),
        ("B", "F", 2.0),
        ("C", "D", 3.0),
        ("A", "B", 4.0),
        ("A", "D", 5.0),
    }
    assert mst.vertices == list(g.vertices)


@pytest.mark.parametrize("graph_type", GRAPH_TYPES)
def test_unweighted_fixture_on_each_graph_type(graph_type):
    g, v = unweighted_links_graph(graph_type)
    engine = PrimEngine(should_prioritize_alphabetically=True)

    cost, mst = engine.produce_minimum_spanning_tree(g, start=v["B"])

    assert cost == 2.0
    assert len(mst.undirected_edges()) == 4
    assert ("A", "B", 2.0) in _tree_edges(mst)
    assert spans(g, mst)
    again_cost, again_mst = engine.produce_minimum_spanning_tree(g, start=v["B"])
    assert again_cost == cost
    assert again_mst.to_dict() == mst.to_dict()


@pytest.mark.parametrize("graph_type", GRAPH_TYPES)
def test_disconnected_fixture_on_each_graph_type(graph_type):
    g, _ = _labelled_graph("ABCD", [("A", "B", 1.0), ("C", "D", 2.0)], graph_type)

    cost, mst = PrimEngine().produce_minimum_spanning_tree(g)

    assert cost == 1.0
    assert len(mst.vertices) == 4
    assert not spans(g, mst)
