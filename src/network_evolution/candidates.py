"""Ranking records and comparators."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

GenomeT = TypeVar("GenomeT")


@dataclass(frozen=True)
class CompareRecord(Generic[GenomeT]):
    """A genome paired with its fitness (lower is better)."""

    fitness: float
    genome: GenomeT


Comparator = Callable[[CompareRecord[Any], CompareRecord[Any]], int]


def compare_fitness(left: CompareRecord[Any], right: CompareRecord[Any]) -> int:
    """Order by ascending fitness with NaN/infinite values last."""
    left_bad = not math.isfinite(left.fitness)
    right_bad = not math.isfinite(right.fitness)
    if left_bad or right_bad:
        return int(left_bad) - int(right_bad)
    if left.fitness < right.fitness:
        return -1
    if left.fitness > right.fitness:
        return 1
    return 0
