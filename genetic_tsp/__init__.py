"""
Genetic algorithm for the Traveling Salesman Problem: permutation routes,
ordered crossover and an elitist generational population.
"""

from .distance import DistanceMat
from .evolutionary import EvolutionConfig, Population
from .routes import Route, Subsequence

__all__ = [
    "data",
    "distance",
    "evaluation",
    "evolutionary",
    "selection",
    "routes",
    "DistanceMat",
    "EvolutionConfig",
    "Population",
    "Route",
    "Subsequence",
]
