"""Tournament selection over a ranked generation."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from .candidates import CompareRecord
from .errors import ConfigurationError

GenomeT = TypeVar("GenomeT")


class Tournament:
    """Samples ``size`` distinct records and keeps the fittest."""

    def __init__(self, size: int) -> None:
        if size < 1:
            msg = f"tournament size must be >= 1, got {size}"
            raise ConfigurationError(msg)
        self.size = size

    def select(
        self, ranked: Sequence[CompareRecord[GenomeT]], rng: random.Random
    ) -> CompareRecord[GenomeT] | None:
        if not ranked:
            return None
        sample = rng.sample(range(len(ranked)), min(self.size, len(ranked)))
        winner = ranked[sample[0]]
        for idx in sample[1:]:
            # strict comparison keeps the first-sampled record on ties
            if ranked[idx].fitness < winner.fitness:
                winner = ranked[idx]
        return winner
