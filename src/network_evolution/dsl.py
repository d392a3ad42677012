"""Typed configuration DSL for evolutionary network search."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .network import Activation

ElitePlacement = Literal["random", "distinct"]


class TrainingRecord(BaseModel):
    """One (input, expected output) pair of the training set."""

    input: list[float]
    output: list[float]

    model_config = {"frozen": True}


class MutationConfig(BaseModel):
    """Mutation gate and magnitude.

    ``gate="signed"`` keeps the historical gate where a scalar only mutates when a
    freshly drawn signed magnitude is positive *and* the rate check passes, so the
    effective probability is roughly half of ``mutation_rate``. ``gate="rate"``
    applies ``mutation_rate`` directly.
    """

    mutation_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    mutation_size: float = Field(default=0.15, ge=0.0)
    structural_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    gate: Literal["signed", "rate"] = "signed"

    model_config = {"frozen": True}


class AlgorithmConfig(BaseModel):
    """Selection and replacement knobs for one generation step."""

    elitism: int = Field(default=2, ge=0)
    tournament_size: int = Field(default=3, ge=1)
    # "random" may overwrite one elite with another; "distinct" never does
    elite_placement: ElitePlacement = "random"
    max_offspring_attempts: int = Field(default=100, ge=1)

    model_config = {"frozen": True}


class NetworkShapeConfig(BaseModel):
    """Shape of randomly generated network genomes."""

    inputs: int = Field(ge=1)
    layers: list[int] = Field(min_length=1)
    weight_range: tuple[float, float] = (-1.0, 1.0)
    bias_range: tuple[float, float] = (-2.0, 2.0)
    activations: list[Activation] = Field(
        default_factory=lambda: [Activation.LINEAR, Activation.SIGMOID], min_length=1
    )

    model_config = {"frozen": True}

    @field_validator("layers")
    @classmethod
    def positive_widths(cls, value: list[int]) -> list[int]:
        if any(width < 1 for width in value):
            raise ValueError("shape.layers widths must be >= 1")
        return value

    @field_validator("weight_range", "bias_range")
    @classmethod
    def ordered_range(cls, value: tuple[float, float]) -> tuple[float, float]:
        low, high = value
        if low > high:
            raise ValueError(f"range {value} must be ordered as (low, high)")
        return value

    @property
    def outputs(self) -> int:
        return self.layers[-1]


class RunConfig(BaseModel):
    """Top-level DSL entity for one evolutionary run."""

    population: int = Field(default=50, ge=1)
    generations: int = Field(default=100, ge=1)
    target_fitness: float | None = Field(default=None, ge=0.0)
    shape: NetworkShapeConfig
    mutation: MutationConfig = Field(default_factory=MutationConfig)
    algorithm: AlgorithmConfig = Field(default_factory=AlgorithmConfig)
    training: list[TrainingRecord] = Field(min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def training_matches_shape(self) -> RunConfig:
        for idx, record in enumerate(self.training):
            if len(record.input) != self.shape.inputs:
                raise ValueError(
                    f"training[{idx}].input has {len(record.input)} values, "
                    f"expected {self.shape.inputs}"
                )
            if len(record.output) != self.shape.outputs:
                raise ValueError(
                    f"training[{idx}].output has {len(record.output)} values, "
                    f"expected {self.shape.outputs}"
                )
        return self

    def summary(self) -> dict[str, Any]:
        """Return a JSON-friendly summary for reporting."""
        return {
            "population": self.population,
            "generations": self.generations,
            "layers": list(self.shape.layers),
            "training_records": len(self.training),
            "elitism": self.algorithm.elitism,
            "tournament_size": self.algorithm.tournament_size,
        }


def load_run_config(path: str | Path) -> RunConfig:
    """Load a run config from YAML or JSON."""
    path = Path(path)
    data: Any
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid config {path}: expected a mapping")
    try:
        return RunConfig(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config {path}") from exc


def save_run_config(config: RunConfig, path: str | Path) -> None:
    """Persist a run config as YAML or JSON based on file suffix."""
    path = Path(path)
    data = config.model_dump(mode="json")
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(data, sort_keys=False))
    else:
        path.write_text(json.dumps(data, indent=2))
