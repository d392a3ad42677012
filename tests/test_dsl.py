from pathlib import Path

import pytest
from pydantic import ValidationError

from network_evolution import api
from network_evolution.dsl import (
    AlgorithmConfig,
    MutationConfig,
    NetworkShapeConfig,
    RunConfig,
    load_run_config,
)
from network_evolution.errors import ConfigurationError
from network_evolution.network import Activation

EXAMPLE = Path(__file__).resolve().parents[1] / "configs" / "xor.yaml"


def test_config_defaults() -> None:
    mutation = MutationConfig()
    assert mutation.mutation_rate == 0.15
    assert mutation.mutation_size == 0.15
    assert mutation.gate == "signed"
    algorithm = AlgorithmConfig()
    assert algorithm.elitism == 2
    assert algorithm.elite_placement == "random"
    shape = NetworkShapeConfig(inputs=1, layers=[1])
    assert shape.activations == [Activation.LINEAR, Activation.SIGMOID]
    assert shape.outputs == 1


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_config_round_trip(xor_config: RunConfig, tmp_path: Path, suffix: str) -> None:
    path = tmp_path / f"run{suffix}"
    api.save_config(xor_config, path)
    loaded = api.load_config(path)
    assert loaded.model_dump() == xor_config.model_dump()
    assert loaded.summary()["training_records"] == 4


def test_example_config_loads() -> None:
    config = load_run_config(EXAMPLE)
    assert config.shape.inputs == 2
    assert config.shape.outputs == 1
    assert len(config.training) == 4


def test_training_must_match_shape(xor_config: RunConfig) -> None:
    data = xor_config.model_dump()
    data["training"][0]["input"] = [1.0]
    with pytest.raises(ValidationError):
        RunConfig(**data)
    data = xor_config.model_dump()
    data["training"][1]["output"] = [1.0, 0.0]
    with pytest.raises(ValidationError):
        RunConfig(**data)


def test_invalid_knobs_are_rejected() -> None:
    with pytest.raises(ValidationError):
        MutationConfig(mutation_rate=1.5)
    with pytest.raises(ValidationError):
        MutationConfig(mutation_size=-0.1)
    with pytest.raises(ValidationError):
        AlgorithmConfig(tournament_size=0)
    with pytest.raises(ValidationError):
        NetworkShapeConfig(inputs=2, layers=[3, 0])
    with pytest.raises(ValidationError):
        NetworkShapeConfig(inputs=2, layers=[1], weight_range=(1.0, -1.0))
    with pytest.raises(ValidationError):
        NetworkShapeConfig(inputs=2, layers=[1], activations=["relu"])


def test_load_reports_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("population: 4\n")
    with pytest.raises(ConfigurationError):
        load_run_config(path)
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationError):
        load_run_config(path)
