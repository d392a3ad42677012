import pytest

from network_evolution.dsl import NetworkShapeConfig, RunConfig


@pytest.fixture()
def tiny_shape() -> NetworkShapeConfig:
    return NetworkShapeConfig(inputs=2, layers=[2, 1])


@pytest.fixture()
def xor_config() -> RunConfig:
    return RunConfig(
        population=8,
        generations=3,
        shape={"inputs": 2, "layers": [2, 1], "activations": ["sigmoid", "linear"]},
        mutation={"mutation_rate": 0.2, "mutation_size": 0.5},
        algorithm={"elitism": 2, "tournament_size": 3, "elite_placement": "distinct"},
        training=[
            {"input": [0.0, 0.0], "output": [0.0]},
            {"input": [0.0, 1.0], "output": [1.0]},
            {"input": [1.0, 0.0], "output": [1.0]},
            {"input": [1.0, 1.0], "output": [0.0]},
        ],
    )
