import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .distance import DistanceMat
from .evaluation import GenerationStats, aggregate_fitness, evaluate_routes
from .routes import MUTATION_POLICIES, Route
from .routes.operators import MutationOperator
from .selection import SELECTION_POLICIES, SelectionPolicy, build_selection


@dataclass
class EvolutionConfig:
    population_size: int = 50
    crossover_rate: float = 0.8
    mutation_rate: float = 0.2
    elitism: bool = True
    generation_count: int = 200
    # Either a registered name or a callable policy.
    selection: Union[str, SelectionPolicy] = "roulette"
    tournament_size: int = 3
    mutation: Union[str, MutationOperator] = "swap"
    random_seed: Optional[int] = 123
    device: str = "cpu"

    def validate(self) -> None:
        if self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}.")
        for name in ("crossover_rate", "mutation_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {rate}.")
        if self.generation_count < 0:
            raise ValueError(f"generation_count must be non-negative, got {self.generation_count}.")
        if self.tournament_size < 1:
            raise ValueError(f"tournament_size must be at least 1, got {self.tournament_size}.")
        if not callable(self.selection) and self.selection not in SELECTION_POLICIES:
            raise ValueError(f"Unknown selection policy {self.selection!r}.")
        if not callable(self.mutation) and self.mutation not in MUTATION_POLICIES:
            raise ValueError(f"Unknown mutation policy {self.mutation!r}.")


GenerationCallback = Callable[["Population", GenerationStats], None]


class Population:
    """
    Fixed-size population of routes evolved generation by generation.

    All random draws (initial tours, selection, cut points, mutation positions)
    come from `self.rng`, so a seed fully determines a run.
    """

    def __init__(
        self,
        distance_mat: DistanceMat,
        config: Optional[EvolutionConfig] = None,
        rng: Optional[random.Random] = None,
        initial_tours: Optional[Sequence[Sequence[int]]] = None,
    ):
        self.cfg = config or EvolutionConfig()
        self.cfg.validate()
        self.distance_mat = distance_mat
        self.n = distance_mat.n_units()
        self.rng = rng or random.Random(self.cfg.random_seed)
        if callable(self.cfg.selection):
            self.select = self.cfg.selection
        else:
            self.select = build_selection(self.cfg.selection, self.cfg.tournament_size)
        if callable(self.cfg.mutation):
            self.mutation = self.cfg.mutation
        else:
            self.mutation = MUTATION_POLICIES[self.cfg.mutation]

        if initial_tours is None:
            self.routes: List[Route] = [
                Route.random(self.n, self.rng) for _ in range(self.cfg.population_size)
            ]
        else:
            if len(initial_tours) != self.cfg.population_size:
                raise ValueError(
                    f"Got {len(initial_tours)} initial tours for a population of {self.cfg.population_size}."
                )
            self.routes = [Route.from_tour(t, self.n) for t in initial_tours]

        self.generation = 0
        self.history: List[GenerationStats] = []
        self._best: Optional[Route] = None
        self._evaluate()

    def _evaluate(self) -> List[float]:
        fitnesses = evaluate_routes(self.distance_mat, self.routes, self.cfg.device)
        for route in self.routes:
            if self._best is None or route.fitness < self._best.fitness:
                self._best = route.copy()
        return fitnesses

    def fitnesses(self) -> List[float]:
        return self._evaluate()

    def _cut_points(self) -> Tuple[int, int]:
        a = self.rng.randint(0, self.n)
        b = self.rng.randint(0, self.n)
        return (a, b) if a <= b else (b, a)

    def _mutate(self, route: Route) -> Route:
        if self.n < 2:
            return route
        pos_a, pos_b = self.rng.sample(range(self.n), 2)
        return route.mutate(pos_a, pos_b, operator=self.mutation)

    def _reproduce(self, fitnesses: List[float]) -> List[Route]:
        size = self.cfg.population_size
        parents = self.select(fitnesses, size + size % 2, self.rng)
        offspring: List[Route] = []
        for a_idx, b_idx in zip(parents[::2], parents[1::2]):
            a, b = self.routes[a_idx], self.routes[b_idx]
            if self.rng.random() < self.cfg.crossover_rate:
                start, end = self._cut_points()
                children = [a.crossover(b, start, end), b.crossover(a, start, end)]
            else:
                children = [a.copy(), b.copy()]
            for child in children:
                if self.rng.random() < self.cfg.mutation_rate:
                    child = self._mutate(child)
                offspring.append(child)
        return offspring[:size]

    def step(self) -> GenerationStats:
        fitnesses = self._evaluate()
        elite = self.routes[min(range(len(fitnesses)), key=lambda i: fitnesses[i])]

        offspring = self._reproduce(fitnesses)
        offspring_fit = evaluate_routes(self.distance_mat, offspring, self.cfg.device)
        if self.cfg.elitism:
            weakest = max(range(len(offspring_fit)), key=lambda i: offspring_fit[i])
            offspring[weakest] = elite.copy()

        self.routes = offspring
        self.generation += 1
        stats = aggregate_fitness(self.generation, self._evaluate())
        self.history.append(stats)
        return stats

    def run(
        self, generations: Optional[int] = None, callback: Optional[GenerationCallback] = None
    ) -> Tuple[Route, float]:
        """
        Evolve for `generations` generations (config.generation_count by default)
        and return the best route seen so far with its length. Calling run again
        continues from the current generation.
        """
        if generations is None:
            generations = self.cfg.generation_count
        if generations < 0:
            raise ValueError(f"generations must be non-negative, got {generations}.")
        for _ in range(generations):
            stats = self.step()
            if callback is not None:
                callback(self, stats)
        return self.best(), self.best_fitness

    def best(self) -> Route:
        return self._best.copy()

    @property
    def best_fitness(self) -> float:
        return self._best.fitness

    def __len__(self) -> int:
        return len(self.routes)
