from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import torch

from .distance import DistanceMat
from .routes import Route


@dataclass
class GenerationStats:
    generation: int
    best: float
    mean: float
    worst: float


def tour_lengths(dist: torch.Tensor, tours: torch.Tensor) -> torch.Tensor:
    # tours: [P, n] node indices; every row closes back on its first node.
    nxt = tours.roll(-1, dims=1)
    return dist[tours, nxt].sum(dim=1)


def evaluate_routes(distance_mat: DistanceMat, routes: Sequence[Route], device="cpu") -> List[float]:
    """
    Fill in the fitness of every route that has none yet, in a single batched
    gather over the distance tensor, and return the fitness of all routes.
    """
    pending = [r for r in routes if r.fitness is None]
    if pending:
        n = distance_mat.n_units()
        for r in pending:
            if len(r) != n:
                raise ValueError(f"Route of length {len(r)} does not match a distance table of size {n}.")
        dist = distance_mat.as_tensor(device)
        idx = torch.as_tensor(np.stack([r.nodes for r in pending]), dtype=torch.long, device=dist.device)
        lengths = tour_lengths(dist, idx).tolist()
        for r, length in zip(pending, lengths):
            r.fitness = float(length)
    return [r.fitness for r in routes]


def aggregate_fitness(generation: int, fitnesses: List[float]) -> GenerationStats:
    if not fitnesses:
        inf = float("inf")
        return GenerationStats(generation=generation, best=inf, mean=inf, worst=inf)
    return GenerationStats(
        generation=generation,
        best=min(fitnesses),
        mean=sum(fitnesses) / len(fitnesses),
        worst=max(fitnesses),
    )
