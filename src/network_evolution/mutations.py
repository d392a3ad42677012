"""Mutation gate, value mutation, and structural sequence mutations."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from .dsl import MutationConfig

VecMutationKind = Literal["insert", "replace", "remove", "swap", "reverse"]

VEC_MUTATION_KINDS: tuple[VecMutationKind, ...] = ("insert", "replace", "remove", "swap", "reverse")
LENGTH_PRESERVING: frozenset[VecMutationKind] = frozenset({"replace", "swap", "reverse"})


class Mutator:
    """Draws mutation decisions and magnitudes from a caller-supplied RNG."""

    def __init__(self, config: MutationConfig | None = None) -> None:
        self.config = config or MutationConfig()

    def check_mutate(self, rng: random.Random) -> bool:
        return rng.random() < self.config.mutation_rate

    def mutation_size(self, rng: random.Random) -> float:
        """Signed magnitude in ``(-mutation_size, mutation_size)``."""
        return self.config.mutation_size * rng.uniform(-1.0, 1.0)

    def should_mutate(self, rng: random.Random) -> bool:
        if self.config.gate == "signed":
            return self.mutation_size(rng) > 0.0 and self.check_mutate(rng)
        return self.check_mutate(rng)

    def check_structural(self, rng: random.Random) -> bool:
        return rng.random() < self.config.structural_rate

    def mutate(self, target: Any, rng: random.Random) -> Any:
        return mutate_value(target, self, rng)


def mutate_float(value: float, mutator: Mutator, rng: random.Random) -> float:
    if mutator.should_mutate(rng):
        value += rng.random() * mutator.mutation_size(rng)
    return value


def mutate_bool(value: bool, mutator: Mutator, rng: random.Random) -> bool:
    if mutator.should_mutate(rng):
        value = not value
    return value


def mutate_sequence(
    values: Sequence[Any], mutator: Mutator, rng: random.Random
) -> tuple[Any, ...]:
    return tuple(mutate_value(value, mutator, rng) for value in values)


def mutate_value(value: Any, mutator: Mutator, rng: random.Random) -> Any:
    if isinstance(value, bool):
        return mutate_bool(value, mutator, rng)
    if isinstance(value, (int, float)):
        return mutate_float(float(value), mutator, rng)
    if isinstance(value, (list, tuple)):
        return mutate_sequence(value, mutator, rng)
    return value.mutate(mutator, rng)


@dataclass(frozen=True)
class VecMutation:
    """A single structural edit of a float sequence.

    ``index``/``other`` bound the span for ``swap`` and ``reverse`` (inclusive);
    ``value`` is only meaningful for ``insert`` and ``replace``.
    """

    kind: VecMutationKind
    index: int
    other: int = 0
    value: float = 0.0

    @property
    def preserves_length(self) -> bool:
        return self.kind in LENGTH_PRESERVING


def finite_bounds(values: Sequence[float]) -> tuple[float, float]:
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return -1.0, 1.0
    return min(finite), max(finite)


def random_vec_mutation(values: Sequence[float], rng: random.Random) -> VecMutation:
    """Pick a structural edit uniformly; new values come from the observed range."""
    low, high = finite_bounds(values)
    size = len(values)
    if size == 0:
        return VecMutation("insert", index=0, value=rng.uniform(low, high))
    kind = rng.choice(VEC_MUTATION_KINDS)
    if kind == "insert":
        return VecMutation(kind, index=rng.randrange(size + 1), value=rng.uniform(low, high))
    if kind == "replace":
        return VecMutation(kind, index=rng.randrange(size), value=rng.uniform(low, high))
    if kind == "remove":
        return VecMutation(kind, index=rng.randrange(size))
    first, second = sorted((rng.randrange(size), rng.randrange(size)))
    return VecMutation(kind, index=first, other=second)


def _insert(values: list[float], op: VecMutation) -> None:
    values.insert(op.index, op.value)


def _replace(values: list[float], op: VecMutation) -> None:
    values[op.index] = op.value


def _remove(values: list[float], op: VecMutation) -> None:
    del values[op.index]


def _swap(values: list[float], op: VecMutation) -> None:
    values[op.index], values[op.other] = values[op.other], values[op.index]


def _reverse(values: list[float], op: VecMutation) -> None:
    values[op.index : op.other + 1] = values[op.index : op.other + 1][::-1]


REGISTRY: dict[VecMutationKind, Callable[[list[float], VecMutation], None]] = {
    "insert": _insert,
    "replace": _replace,
    "remove": _remove,
    "swap": _swap,
    "reverse": _reverse,
}


def apply_vec_mutation(values: Sequence[float], op: VecMutation) -> tuple[float, ...]:
    edited = list(values)
    REGISTRY[op.kind](edited, op)
    return tuple(edited)
