import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import networkx as nx
import tsplib95

from .distance import DistanceMat


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    graph: nx.Graph
    optimum: Optional[float]
    # Graph node label of each distance-matrix index.
    node_order: List = field(default_factory=list)

    def __post_init__(self):
        if not self.node_order:
            self.node_order = list(self.graph.nodes())

    def distance_mat(self) -> DistanceMat:
        return DistanceMat.from_graph(self.graph, nodelist=self.node_order)

    def labels(self, tour: Sequence[int]) -> List:
        return [self.node_order[i] for i in tour]


def tour_length(graph: nx.Graph, tour: Sequence) -> float:
    dist = 0.0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        if a != b:
            dist += graph[a][b]["weight"]
    return float(dist)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(graph: nx.Graph, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.load(candidate)
        if not tour_file.tours:
            continue
        return tour_length(graph, list(tour_file.tours[0]))
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No TSPLIB instance at {path}.")
    problem = tsplib95.load(path)
    graph = problem.get_graph()
    if graph.number_of_nodes() == 0:
        raise RuntimeError(f"TSPLIB instance {path} has no nodes.")
    optimum = _load_optimum(graph, path)
    return Instance(name=problem.name or path.stem, path=path, graph=graph, optimum=optimum)


def random_instance(n: int, seed: int = 0, scale: float = 100.0) -> Instance:
    """Uniform random points in a square, on a complete graph with Euclidean weights."""
    if n < 1:
        raise ValueError(f"A random instance needs at least one node, got {n}.")
    rng = random.Random(seed)
    graph = nx.complete_graph(n)
    for node in graph.nodes():
        graph.nodes[node]["pos"] = (rng.uniform(0, scale), rng.uniform(0, scale))
    for u, v in graph.edges():
        (x1, y1), (x2, y2) = graph.nodes[u]["pos"], graph.nodes[v]["pos"]
        graph[u][v]["weight"] = ((x1 - x2) ** 2 + (y1 - y2) ** 2) ** 0.5
    return Instance(name=f"random{n}-s{seed}", path=None, graph=graph, optimum=None)
