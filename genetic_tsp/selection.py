"""
Parent selection policies.

A policy takes the fitness (tour length, lower is better) of every member of
the population, the number of parents to draw and the population's random
source, and returns population indices. Draws are with replacement: the same
individual may be picked several times.
"""

import functools
import random
from typing import Callable, Dict, List, Sequence

SelectionPolicy = Callable[[Sequence[float], int, random.Random], List[int]]


def roulette_selection(fitnesses: Sequence[float], k: int, rng: random.Random) -> List[int]:
    """Fitness-proportionate selection over 1 / tour length."""
    if any(f == 0 for f in fitnesses):
        # A zero-length tour would get an infinite share; split all mass among them.
        weights = [1.0 if f == 0 else 0.0 for f in fitnesses]
    else:
        weights = [1.0 / f for f in fitnesses]
    return rng.choices(range(len(fitnesses)), weights=weights, k=k)


def rank_selection(fitnesses: Sequence[float], k: int, rng: random.Random) -> List[int]:
    """Linear ranking: the shortest tour weighs P, the longest weighs 1."""
    order = sorted(range(len(fitnesses)), key=lambda i: fitnesses[i])
    weights = [0.0] * len(fitnesses)
    for rank, idx in enumerate(order):
        weights[idx] = float(len(fitnesses) - rank)
    return rng.choices(range(len(fitnesses)), weights=weights, k=k)


def tournament_selection(
    fitnesses: Sequence[float], k: int, rng: random.Random, tournament_size: int = 3
) -> List[int]:
    size = min(tournament_size, len(fitnesses))
    selected = []
    for _ in range(k):
        contestants = rng.sample(range(len(fitnesses)), size)
        selected.append(min(contestants, key=lambda i: fitnesses[i]))
    return selected


SELECTION_POLICIES: Dict[str, SelectionPolicy] = {
    "roulette": roulette_selection,
    "rank": rank_selection,
    "tournament": tournament_selection,
}


def build_selection(name: str, tournament_size: int = 3) -> SelectionPolicy:
    if name not in SELECTION_POLICIES:
        raise ValueError(f"Unknown selection policy {name!r}; choose from {sorted(SELECTION_POLICIES)}.")
    if name == "tournament":
        return functools.partial(tournament_selection, tournament_size=tournament_size)
    return SELECTION_POLICIES[name]
