"""Crossover helpers for blending two parent values into one offspring."""

from __future__ import annotations

import math
import random
import sys
from collections.abc import Sequence
from typing import Any


def crossover_float(a: float, b: float, rng: random.Random) -> float:
    """Draw the offspring uniformly between the parents.

    Non-finite parents are replaced by a uniform draw in ``[-1, 1]`` first so a
    single NaN cannot poison every descendant.
    """
    if not math.isfinite(a):
        a = rng.uniform(-1.0, 1.0)
    if not math.isfinite(b):
        b = rng.uniform(-1.0, 1.0)
    low, high = min(a, b), max(a, b)
    if abs(high - low) < sys.float_info.epsilon:
        return low
    # interpolate without forming ``high - low``, which can overflow to inf
    t = rng.random()
    return min(max(low * (1.0 - t) + high * t, low), high)


def crossover_bool(a: bool, b: bool, rng: random.Random) -> bool:
    return a if rng.random() < 0.5 else b


def crossover_sequence(a: Sequence[Any], b: Sequence[Any], rng: random.Random) -> tuple[Any, ...]:
    """Cross the shared prefix element-wise and keep the longer parent's tail."""
    shared = min(len(a), len(b))
    longer = a if len(a) > len(b) else b
    blended = [crossover_value(left, right, rng) for left, right in zip(a, b)]
    return tuple(blended) + tuple(longer[shared:])


def crossover_value(a: Any, b: Any, rng: random.Random) -> Any:
    # bool first: it is a subclass of int
    if isinstance(a, bool) and isinstance(b, bool):
        return crossover_bool(a, b, rng)
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return crossover_float(float(a), float(b), rng)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return crossover_sequence(a, b, rng)
    if type(a) is not type(b):
        msg = f"cannot cross {type(a).__name__} with {type(b).__name__}"
        raise TypeError(msg)
    return a.crossover(b, rng)
