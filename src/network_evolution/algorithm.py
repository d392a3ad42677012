"""Generation replacement: rank, breed, and re-inject elites."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Generic, TypeVar

from .breeding import Breeder, breed
from .candidates import CompareRecord
from .dsl import AlgorithmConfig, ElitePlacement
from .errors import BreedingExhaustedError, ConfigurationError, EmptyPoolError, FitnessError
from .evaluation import FitnessCalc, Predictor
from .selection import Tournament

GenomeT = TypeVar("GenomeT", bound=Predictor)
ItemT = TypeVar("ItemT")


def sort_generation(ranked: Sequence[CompareRecord[ItemT]]) -> list[CompareRecord[ItemT]]:
    """Stable ascending sort by fitness."""
    return sorted(ranked, key=lambda record: record.fitness)


def unrank_generation(ranked: Sequence[CompareRecord[ItemT]]) -> list[ItemT]:
    return [record.genome for record in ranked]


def inject_elites(
    generation: Sequence[ItemT],
    elites: Sequence[ItemT],
    rng: random.Random,
    placement: ElitePlacement = "random",
) -> list[ItemT]:
    """Overwrite slots of ``generation`` with ``elites``.

    ``random`` draws an independent slot per elite, so a later elite can
    overwrite an earlier one. ``distinct`` places elites on the prefix of a
    random permutation of slots and never collides while there are enough slots.
    """
    result = list(generation)
    if not result:
        return result
    if placement == "distinct":
        slots = rng.sample(range(len(result)), min(len(elites), len(result)))
        for slot, elite in zip(slots, elites):
            result[slot] = elite
        return result
    for elite in elites:
        result[rng.randrange(len(result))] = elite
    return result


class Algorithm(Generic[GenomeT]):
    """One evolutionary step from a generation to the next one of equal size."""

    def __init__(
        self,
        breeder: Breeder[GenomeT] | None,
        fitness: FitnessCalc | None,
        config: AlgorithmConfig | None = None,
    ) -> None:
        if breeder is None:
            raise ConfigurationError("Algorithm requires a breeder.")
        if fitness is None:
            raise ConfigurationError("Algorithm requires a fitness calculator.")
        self.breeder = breeder
        self.fitness = fitness
        self.config = config or AlgorithmConfig()
        self.tournament = Tournament(self.config.tournament_size)

    def run(self, generation: Sequence[GenomeT], rng: random.Random) -> list[GenomeT]:
        return unrank_generation(self.step(generation, rng))

    def step(
        self, generation: Sequence[GenomeT], rng: random.Random
    ) -> list[CompareRecord[GenomeT]]:
        """Like ``run`` but keeps the fitness computed for every returned genome."""
        if not generation:
            return []
        ranked = self.rank_generation(generation)
        if not ranked:
            msg = f"all {len(generation)} genomes failed fitness evaluation"
            raise EmptyPoolError(msg)

        offspring = self.new_generation(ranked, len(generation), rng)

        elitism = min(self.config.elitism, len(ranked))
        elites = sort_generation(ranked)[:elitism]
        return inject_elites(offspring, elites, rng, self.config.elite_placement)

    def rank_generation(self, generation: Sequence[GenomeT]) -> list[CompareRecord[GenomeT]]:
        return self.fitness.rank(generation)

    def new_generation(
        self,
        ranked: Sequence[CompareRecord[GenomeT]],
        size: int,
        rng: random.Random,
    ) -> list[CompareRecord[GenomeT]]:
        """Breed offspring from tournament winners until ``size`` survive evaluation."""
        next_generation: list[CompareRecord[GenomeT]] = []
        failures = 0
        while len(next_generation) < size:
            left = self.tournament.select(ranked, rng)
            right = self.tournament.select(ranked, rng)
            if left is not None and right is not None:
                child = breed(self.breeder, left.genome, right.genome, rng)
                try:
                    fitness = self.fitness.check(child)
                except FitnessError:
                    pass
                else:
                    next_generation.append(CompareRecord(fitness=fitness, genome=child))
                    failures = 0
                    continue
            failures += 1
            if failures >= self.config.max_offspring_attempts:
                msg = (
                    f"{failures} consecutive offspring failed selection or evaluation "
                    f"({len(next_generation)}/{size} bred)"
                )
                raise BreedingExhaustedError(msg)
        return next_generation
