from abc import ABC, abstractmethod
from typing import List, Optional


Tour = List[int]


class Individual(ABC):
    """A candidate solution the evolutionary loop can recombine and mutate."""

    __slots__ = ()
    fitness: Optional[float] = None

    @abstractmethod
    def crossover(self, other: "Individual", start: int, end: int) -> "Individual":
        raise NotImplementedError

    @abstractmethod
    def mutate(self, pos_a: int, pos_b: int) -> "Individual":
        raise NotImplementedError

    @property
    def evaluated(self) -> bool:
        return self.fitness is not None
