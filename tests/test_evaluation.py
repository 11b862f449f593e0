import random

import pytest
import torch

from genetic_tsp.distance import DistanceMat
from genetic_tsp.evaluation import aggregate_fitness, evaluate_routes, tour_lengths
from genetic_tsp.routes import Route


def test_tour_lengths_matches_get_distance(dist_mat):
    tours = torch.tensor([[1, 0, 2], [0, 2, 1], [2, 2, 2]])
    lengths = tour_lengths(dist_mat.as_tensor(), tours).tolist()
    assert lengths == [6.0, 6.0, 0.0]


def test_evaluate_routes_batched_equals_scalar():
    rng = random.Random(8)
    points = [(rng.random(), rng.random()) for _ in range(15)]
    mat = DistanceMat.from_coordinates(points)
    routes = [Route.random(15, rng) for _ in range(12)]
    fitnesses = evaluate_routes(mat, routes)
    for route, fit in zip(routes, fitnesses):
        assert route.fitness == fit
        assert fit == pytest.approx(mat.get_distance(route.tour))


def test_evaluate_routes_keeps_cached_fitness(dist_mat):
    cached = Route([0, 1, 2], fitness=99.0)
    fresh = Route([1, 0, 2])
    assert evaluate_routes(dist_mat, [cached, fresh]) == [99.0, 6.0]


def test_evaluate_routes_rejects_wrong_dimension(dist_mat):
    with pytest.raises(ValueError):
        evaluate_routes(dist_mat, [Route([0, 1, 2, 3])])


def test_aggregate_fitness():
    stats = aggregate_fitness(3, [4.0, 2.0, 6.0])
    assert (stats.generation, stats.best, stats.mean, stats.worst) == (3, 2.0, 4.0, 6.0)
    assert aggregate_fitness(0, []).best == float("inf")
