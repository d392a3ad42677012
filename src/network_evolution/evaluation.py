"""Fitness evaluation: mean squared error against a fixed training set."""

from __future__ import annotations

import functools
import math
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from .candidates import Comparator, CompareRecord, compare_fitness
from .dsl import TrainingRecord
from .errors import CannotConvert, FitnessError, ResultInfinite, ResultNaN


class Predictor(Protocol):
    def predict(self, inputs: list[float]) -> list[float]: ...


PredictorT = TypeVar("PredictorT", bound=Predictor)


def convert(count: int) -> float:
    """Convert a count to float, refusing lossy conversions."""
    try:
        result = float(count)
    except OverflowError as exc:
        raise CannotConvert() from exc
    if int(result) != count:
        raise CannotConvert()
    return result


def checked_divide(numerator: float, denominator: float) -> float:
    """Divide and classify NaN/infinite results instead of returning them."""
    if denominator == 0.0:
        # IEEE semantics: 0/0 and nan/0 are NaN, anything else is infinite
        if numerator == 0.0 or math.isnan(numerator):
            raise ResultNaN()
        raise ResultInfinite()
    result = numerator / denominator
    if math.isnan(result):
        raise ResultNaN()
    if math.isinf(result):
        raise ResultInfinite()
    return result


def squared_errors(record: TrainingRecord, actual: Sequence[float]) -> list[float]:
    """Per-element squared error over the paired (expected, actual) values."""
    errors = []
    for expected, value in zip(record.output, actual):
        diff = expected - value
        errors.append(diff * diff)
    return errors


class FitnessCalc:
    """Scores candidates by MSE over the training set; lower is better."""

    def __init__(self, training: Iterable[TrainingRecord]) -> None:
        self.training: tuple[TrainingRecord, ...] = tuple(training)

    def record_mse(self, candidate: Predictor, record: TrainingRecord) -> float:
        errors = squared_errors(record, candidate.predict(list(record.input)))
        return checked_divide(sum(errors), convert(len(errors)))

    def check(self, candidate: Predictor) -> float:
        """Return the candidate's fitness.

        Raises ``CannotConvert``, ``ResultNaN`` or ``ResultInfinite`` (all
        ``FitnessError``) when the fitness cannot be expressed as a finite number.
        """
        count = convert(len(self.training))
        total = 0.0
        for record in self.training:
            total += self.record_mse(candidate, record)
        return checked_divide(total, count)

    def rank(self, candidates: Iterable[PredictorT]) -> list[CompareRecord[PredictorT]]:
        """Score every candidate, dropping those whose fitness cannot be computed."""
        ranked = []
        for candidate in candidates:
            try:
                fitness = self.check(candidate)
            except FitnessError:
                continue
            ranked.append(CompareRecord(fitness=fitness, genome=candidate))
        return ranked

    def best_entity(
        self,
        candidates: Sequence[PredictorT],
        compare: Comparator = compare_fitness,
    ) -> PredictorT | None:
        """Return the candidate ranked first by ``compare``; ties keep the earliest.

        Any ``FitnessError`` from the candidates propagates.
        """
        records = [CompareRecord(fitness=self.check(c), genome=c) for c in candidates]
        if not records:
            return None
        best = min(records, key=functools.cmp_to_key(compare))
        return best.genome
