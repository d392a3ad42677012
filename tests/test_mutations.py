import random

import pytest

from network_evolution.dsl import MutationConfig
from network_evolution.mutations import (
    REGISTRY,
    VEC_MUTATION_KINDS,
    Mutator,
    VecMutation,
    apply_vec_mutation,
    finite_bounds,
    mutate_bool,
    mutate_float,
    mutate_sequence,
    random_vec_mutation,
)


def test_zero_rate_never_mutates():
    rng = random.Random(0)  # noqa: S311 - deterministic unit tests
    for gate in ("signed", "rate"):
        mutator = Mutator(MutationConfig(mutation_rate=0.0, mutation_size=5.0, gate=gate))
        for _ in range(100):
            assert mutate_float(1.5, mutator, rng) == 1.5
            assert mutate_bool(True, mutator, rng) is True


def test_rate_gate_always_flips_at_full_rate():
    rng = random.Random(1)  # noqa: S311 - deterministic unit tests
    mutator = Mutator(MutationConfig(mutation_rate=1.0, gate="rate"))
    for _ in range(50):
        assert mutate_bool(False, mutator, rng) is True


def test_signed_gate_fires_about_half_the_time():
    rng = random.Random(2)  # noqa: S311 - deterministic unit tests
    mutator = Mutator(MutationConfig(mutation_rate=1.0, gate="signed"))
    flips = sum(mutate_bool(False, mutator, rng) for _ in range(2000))
    assert 800 < flips < 1200


def test_float_mutation_is_bounded_by_size():
    rng = random.Random(3)  # noqa: S311 - deterministic unit tests
    mutator = Mutator(MutationConfig(mutation_rate=1.0, mutation_size=0.5, gate="rate"))
    results = [mutate_float(1.0, mutator, rng) for _ in range(200)]
    assert all(abs(value - 1.0) <= 0.5 for value in results)
    assert any(value != 1.0 for value in results)


def test_mutation_size_is_signed():
    rng = random.Random(4)  # noqa: S311 - deterministic unit tests
    mutator = Mutator(MutationConfig(mutation_size=2.0))
    sizes = [mutator.mutation_size(rng) for _ in range(200)]
    assert all(-2.0 <= size <= 2.0 for size in sizes)
    assert any(size < 0 for size in sizes)
    assert any(size > 0 for size in sizes)


def test_sequence_mutation_preserves_length():
    rng = random.Random(5)  # noqa: S311 - deterministic unit tests
    mutator = Mutator(MutationConfig(mutation_rate=1.0, mutation_size=1.0, gate="rate"))
    values = (0.1, -0.2, 0.3, 0.4)
    mutated = mutate_sequence(values, mutator, rng)
    assert isinstance(mutated, tuple)
    assert len(mutated) == len(values)


def test_mutator_delegates_to_value_rules():
    rng = random.Random(6)  # noqa: S311 - deterministic unit tests
    mutator = Mutator(MutationConfig(mutation_rate=0.0))
    assert mutator.mutate([1.0, 2.0], rng) == (1.0, 2.0)
    assert mutator.mutate(3, rng) == 3.0


@pytest.mark.parametrize(
    ("op", "expected"),
    [
        (VecMutation("insert", index=1, value=9.0), (1.0, 9.0, 2.0, 3.0, 4.0)),
        (VecMutation("insert", index=4, value=9.0), (1.0, 2.0, 3.0, 4.0, 9.0)),
        (VecMutation("replace", index=2, value=9.0), (1.0, 2.0, 9.0, 4.0)),
        (VecMutation("remove", index=0), (2.0, 3.0, 4.0)),
        (VecMutation("swap", index=0, other=3), (4.0, 2.0, 3.0, 1.0)),
        (VecMutation("reverse", index=0, other=2), (3.0, 2.0, 1.0, 4.0)),
        (VecMutation("reverse", index=1, other=1), (1.0, 2.0, 3.0, 4.0)),
    ],
)
def test_apply_vec_mutation(op, expected):
    values = (1.0, 2.0, 3.0, 4.0)
    assert apply_vec_mutation(values, op) == expected
    assert values == (1.0, 2.0, 3.0, 4.0)


def test_registry_covers_every_kind():
    assert set(REGISTRY) == set(VEC_MUTATION_KINDS)


def test_length_preserving_kinds():
    assert VecMutation("replace", 0).preserves_length
    assert VecMutation("swap", 0).preserves_length
    assert VecMutation("reverse", 0).preserves_length
    assert not VecMutation("insert", 0).preserves_length
    assert not VecMutation("remove", 0).preserves_length


def test_empty_sequence_only_allows_insert():
    rng = random.Random(7)  # noqa: S311 - deterministic unit tests
    for _ in range(20):
        op = random_vec_mutation((), rng)
        assert op.kind == "insert"
        assert op.index == 0
        assert -1.0 <= op.value <= 1.0
        assert apply_vec_mutation((), op) == (op.value,)


def test_random_vec_mutation_stays_in_range():
    rng = random.Random(8)  # noqa: S311 - deterministic unit tests
    values = (0.5, -0.25, 2.0)
    kinds = set()
    for _ in range(300):
        op = random_vec_mutation(values, rng)
        kinds.add(op.kind)
        if op.kind in ("insert", "replace"):
            assert -0.25 <= op.value <= 2.0
        if op.kind in ("swap", "reverse"):
            assert 0 <= op.index <= op.other < len(values)
        edited = apply_vec_mutation(values, op)
        delta = {"insert": 1, "remove": -1}.get(op.kind, 0)
        assert len(edited) == len(values) + delta
    assert kinds == set(VEC_MUTATION_KINDS)


def test_finite_bounds_ignores_non_finite():
    assert finite_bounds([float("nan"), 3.0, -1.0, float("inf")]) == (-1.0, 3.0)
    assert finite_bounds([float("nan")]) == (-1.0, 1.0)
    assert finite_bounds([]) == (-1.0, 1.0)
