import random
from typing import Optional, Sequence

import numpy as np

from .base import Individual, Tour
from .operators import MutationOperator, is_permutation, ordered_crossover, random_permutation, swap


class Route(Individual):
    """
    One candidate tour: a permutation of the node indices 0..n-1.

    The node order is stored as a read-only numpy array. Operators never touch
    it and return new routes instead, so a route is a value and `fitness` is
    only a cache of its length.
    """

    __slots__ = ("_nodes", "fitness")

    def __init__(self, nodes, fitness: Optional[float] = None):
        arr = np.array(nodes, dtype=np.int64)
        if arr.ndim != 1:
            raise ValueError("A route must be a 1-D sequence of node indices.")
        arr.flags.writeable = False
        self._nodes = arr
        self.fitness = fitness

    @classmethod
    def random(cls, n: int, rng: random.Random) -> "Route":
        return cls(random_permutation(n, rng))

    @classmethod
    def from_tour(cls, tour: Sequence[int], n: Optional[int] = None) -> "Route":
        if not is_permutation(tour, n):
            expected = len(tour) if n is None else n
            raise ValueError(f"Tour {list(tour)} is not a permutation of 0..{expected - 1}.")
        return cls(tour)

    @property
    def nodes(self) -> np.ndarray:
        return self._nodes

    @property
    def tour(self) -> Tour:
        return self._nodes.tolist()

    def is_permutation(self) -> bool:
        return is_permutation(self._nodes)

    def crossover(self, other: "Route", start: int, end: int) -> "Route":
        return Route(ordered_crossover(self._nodes, other.nodes, start, end))

    def mutate(self, pos_a: int, pos_b: int, operator: MutationOperator = swap) -> "Route":
        return Route(operator(self._nodes, pos_a, pos_b))

    def copy(self) -> "Route":
        return Route(self._nodes, fitness=self.fitness)

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return bool(np.array_equal(self._nodes, other.nodes))

    def __hash__(self) -> int:
        return hash(self._nodes.tobytes())

    def __repr__(self) -> str:
        fit = "n/a" if self.fitness is None else f"{self.fitness:.2f}"
        return f"Route(tour={self.tour}, fitness={fit})"
