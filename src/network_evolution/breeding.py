"""Breeding capability consumed by the evolutionary algorithm."""

from __future__ import annotations

import random
from typing import Any, Protocol, TypeVar

from .dsl import NetworkShapeConfig
from .genome import NetworkGenome
from .mutations import Mutator

GenomeT = TypeVar("GenomeT")


class Breedable(Protocol):
    def crossover(self, other: Any, rng: random.Random) -> Any: ...

    def mutate(self, mutator: Mutator, rng: random.Random) -> Any: ...


class Breeder(Protocol[GenomeT]):
    """Produces one offspring from two parents."""

    def crossover(self, left: GenomeT, right: GenomeT, rng: random.Random) -> GenomeT: ...

    def mutate(self, genome: GenomeT, rng: random.Random) -> GenomeT: ...


class GenomeBreeder:
    """Breeder for any genome exposing ``crossover`` and ``mutate``."""

    def __init__(self, mutator: Mutator | None = None) -> None:
        self.mutator = mutator or Mutator()

    def crossover(self, left: Breedable, right: Breedable, rng: random.Random) -> Any:
        return left.crossover(right, rng)

    def mutate(self, genome: Breedable, rng: random.Random) -> Any:
        return self.mutator.mutate(genome, rng)


def breed(breeder: Breeder[GenomeT], left: GenomeT, right: GenomeT, rng: random.Random) -> GenomeT:
    offspring = breeder.crossover(left, right, rng)
    return breeder.mutate(offspring, rng)


class Stocker:
    """Fills a generation with randomly generated network genomes."""

    def __init__(self, shape: NetworkShapeConfig) -> None:
        self.shape = shape

    def generate(self, rng: random.Random) -> NetworkGenome:
        return NetworkGenome.generate(self.shape, rng)

    def stock(self, size: int, rng: random.Random) -> list[NetworkGenome]:
        return [self.generate(rng) for _ in range(size)]
