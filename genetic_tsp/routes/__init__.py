from .base import Individual, Tour
from .operators import (
    MUTATION_POLICIES,
    insertion,
    inversion,
    is_permutation,
    ordered_crossover,
    random_permutation,
    swap,
)
from .route import Route
from .subsequence import Subsequence

__all__ = [
    "Individual",
    "Tour",
    "Route",
    "Subsequence",
    "MUTATION_POLICIES",
    "ordered_crossover",
    "swap",
    "inversion",
    "insertion",
    "is_permutation",
    "random_permutation",
]
