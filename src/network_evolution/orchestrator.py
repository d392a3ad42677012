"""Evolution loop orchestration."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from .algorithm import Algorithm, unrank_generation
from .breeding import GenomeBreeder, Stocker
from .candidates import CompareRecord
from .dsl import RunConfig
from .errors import ConfigurationError
from .evaluation import FitnessCalc
from .genome import NetworkGenome
from .mutations import Mutator
from .network import save_network

console = Console()


@dataclass
class GenerationStats:
    index: int
    best: float
    mean: float
    evaluated: int

    def serialize(self) -> dict[str, Any]:
        return {
            "generation": self.index,
            "best": self.best,
            "mean": self.mean,
            "evaluated": self.evaluated,
        }


class EvolutionRunner:
    """Wires a ``RunConfig`` into an ``Algorithm`` and drives it across generations."""

    def __init__(self, config: RunConfig, seed: int = 0, quiet: bool = False) -> None:
        self.config = config
        self.rng = random.Random(seed)  # noqa: S311  # nosec B311 - seeded per run
        self.quiet = quiet
        self.stocker = Stocker(config.shape)
        self.mutator = Mutator(config.mutation)
        self.breeder = GenomeBreeder(self.mutator)
        self.fitness = FitnessCalc(config.training)
        self.algorithm: Algorithm[NetworkGenome] = Algorithm(
            breeder=self.breeder,
            fitness=self.fitness,
            config=config.algorithm,
        )
        self.generation: list[NetworkGenome] = []
        self.history: list[GenerationStats] = []
        self._best: CompareRecord[NetworkGenome] | None = None

    def seed_population(self, genomes: list[NetworkGenome] | None = None) -> None:
        """Start from ``genomes`` or a freshly stocked random population."""
        if genomes is not None:
            if not genomes:
                raise ConfigurationError("Cannot seed an empty population.")
            self.generation = list(genomes)
        else:
            self.generation = self.stocker.stock(self.config.population, self.rng)
        self._track(self.fitness.rank(self.generation))

    def run(self, generations: int | None = None) -> list[NetworkGenome]:
        if not self.generation:
            self.seed_population()
        total = generations if generations is not None else self.config.generations
        target = self.config.target_fitness
        for _ in range(total):
            if target is not None and self._best is not None and self._best.fitness <= target:
                self._print(f"[green]Target fitness {target:g} reached[/]")
                break
            ranked = self.algorithm.step(self.generation, self.rng)
            self.generation = unrank_generation(ranked)
            stats = self._track(ranked)
            self._print(
                f"[cyan]Generation {stats.index}[/] best={stats.best:.6f} "
                f"mean={stats.mean:.6f} evaluated={stats.evaluated}/{len(self.generation)}"
            )
        return self.generation

    def _track(self, ranked: list[CompareRecord[NetworkGenome]]) -> GenerationStats:
        best = min(ranked, key=lambda record: record.fitness, default=None)
        if best is not None and (self._best is None or best.fitness < self._best.fitness):
            self._best = best
        stats = GenerationStats(
            index=len(self.history),
            best=best.fitness if best is not None else float("nan"),
            mean=sum(r.fitness for r in ranked) / len(ranked) if ranked else float("nan"),
            evaluated=len(ranked),
        )
        self.history.append(stats)
        return stats

    def best(self) -> CompareRecord[NetworkGenome] | None:
        """Fittest genome seen so far across all generations."""
        return self._best

    def history_table(self) -> Table:
        table = Table(title="Evolution history")
        table.add_column("Generation", justify="right")
        table.add_column("Best", justify="right")
        table.add_column("Mean", justify="right")
        table.add_column("Evaluated", justify="right")
        for stats in self.history:
            table.add_row(
                str(stats.index),
                f"{stats.best:.6f}",
                f"{stats.mean:.6f}",
                str(stats.evaluated),
            )
        return table

    def save_best(self, path: Path) -> None:
        best = self.best()
        if best is None:
            raise RuntimeError("No genome has been evaluated yet.")
        save_network(best.genome.create(), path)

    def _print(self, message: str) -> None:
        if not self.quiet:
            console.print(message)
