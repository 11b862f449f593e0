import random

import pytest

from genetic_tsp.distance import DistanceMat


@pytest.fixture
def dist_mat():
    return DistanceMat([[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [2.0, 3.0, 0.0]])


@pytest.fixture
def square_mat():
    # Unit square corners 0-1-2-3; the perimeter tour has length 4.
    d = 2 ** 0.5
    return DistanceMat(
        [
            [0.0, 1.0, d, 1.0],
            [1.0, 0.0, 1.0, d],
            [d, 1.0, 0.0, 1.0],
            [1.0, d, 1.0, 0.0],
        ]
    )


@pytest.fixture
def rng():
    return random.Random(2024)
