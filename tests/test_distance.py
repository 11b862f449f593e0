import math
import random

import networkx as nx
import numpy as np
import pytest

from genetic_tsp.distance import DistanceMat


def test_constructor_keeps_table():
    mat = DistanceMat([[0.0, 1.0], [1.0, 0.0]])
    assert mat.distances.tolist() == [[0.0, 1.0], [1.0, 0.0]]
    assert mat.n_units() == 2
    assert len(mat) == 2


def test_table_is_read_only(dist_mat):
    with pytest.raises(ValueError):
        dist_mat.distances[0, 1] = 5.0


def test_same_node(dist_mat):
    assert dist_mat.get_distance([0, 0]) == 0.0
    assert dist_mat.get_distance([2]) == 0.0


def test_two_nodes(dist_mat):
    assert dist_mat.get_distance([0, 1]) == 2.0
    assert dist_mat.get_distance([0, 2]) == 4.0
    assert dist_mat.get_distance([1, 2]) == 6.0


def test_three_nodes(dist_mat):
    assert dist_mat.get_distance([1, 0, 2]) == 6.0
    assert dist_mat.get_distance([0, 1, 2]) == 6.0
    assert dist_mat.get_distance([0, 2, 1]) == 6.0


def test_repeat_visit_is_summed(dist_mat):
    assert dist_mat.get_distance([0, 2, 1, 2]) == 10.0


def test_matches_fold_formula_and_reversal():
    rng = random.Random(5)
    n = 9
    points = [(rng.uniform(0, 10), rng.uniform(0, 10)) for _ in range(n)]
    mat = DistanceMat.from_coordinates(points)
    d = mat.distances
    for _ in range(20):
        tour = list(range(n))
        rng.shuffle(tour)
        expected = d[tour[-1]][tour[0]] + sum(d[tour[t]][tour[t + 1]] for t in range(n - 1))
        assert mat.get_distance(tour) == pytest.approx(expected)
        assert mat.get_distance(tour[::-1]) == pytest.approx(mat.get_distance(tour))


@pytest.mark.parametrize("route", [[0, 3], [-1, 0], []])
def test_out_of_range_route(dist_mat, route):
    with pytest.raises(IndexError):
        dist_mat.get_distance(route)


@pytest.mark.parametrize(
    "table",
    [
        [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0]],
        [[0.0, 1.0], [2.0, 0.0]],
        [[1.0, 1.0], [1.0, 0.0]],
        [[0.0, -1.0], [-1.0, 0.0]],
        [[0.0, math.inf], [math.inf, 0.0]],
        [],
    ],
)
def test_invalid_tables(table):
    with pytest.raises(ValueError):
        DistanceMat(table)


def test_from_graph_uses_node_order():
    g = nx.Graph()
    g.add_weighted_edges_from([("a", "b", 1.0), ("b", "c", 3.0), ("a", "c", 2.0)])
    mat = DistanceMat.from_graph(g, nodelist=["a", "b", "c"])
    assert mat.distances.tolist() == [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [2.0, 3.0, 0.0]]


def test_from_graph_rejects_missing_edges():
    g = nx.path_graph(3)
    with pytest.raises(ValueError):
        DistanceMat.from_graph(g)


def test_as_tensor(dist_mat):
    t = dist_mat.as_tensor()
    assert np.array_equal(t.numpy(), dist_mat.distances)
    assert dist_mat.as_tensor() is t
