"""Feed-forward network evaluated by the fitness calculator."""

from __future__ import annotations

import math
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import ujson as json
from pydantic import BaseModel, Field

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .genome import NetworkGenome


class Activation(str, Enum):
    """Closed set of activation functions a neuron may use."""

    LINEAR = "linear"
    SIGMOID = "sigmoid"

    def activate(self, x: float) -> float:
        if self is Activation.LINEAR:
            return x
        # split on sign so math.exp never overflows
        if x >= 0:
            return 1.0 / (1.0 + math.exp(-x))
        z = math.exp(x)
        return z / (1.0 + z)


class Neuron(BaseModel):
    weights: list[float] = Field(default_factory=list)
    bias: float = 0.0
    activation: Activation = Activation.SIGMOID

    model_config = {"frozen": True}

    def activate(self, inputs: list[float]) -> float:
        total = sum(weight * value for weight, value in zip(self.weights, inputs))
        return self.activation.activate(total + self.bias)


class Layer(BaseModel):
    neurons: list[Neuron] = Field(default_factory=list)

    model_config = {"frozen": True}

    def activate(self, inputs: list[float]) -> list[float]:
        return [neuron.activate(inputs) for neuron in self.neurons]


class Network(BaseModel):
    """Layers applied in order; each layer consumes the previous layer's output."""

    layers: list[Layer] = Field(default_factory=list)

    model_config = {"frozen": True}

    def predict(self, inputs: list[float]) -> list[float]:
        values = list(inputs)
        for layer in self.layers:
            values = layer.activate(values)
        return values

    def genome(self) -> NetworkGenome:
        """Extract the genome that recreates this network."""
        from .genome import NetworkGenome

        return NetworkGenome.extract(self)


def load_network(path: str | Path) -> Network:
    path = Path(path)
    try:
        return Network(**json.loads(path.read_text()))
    except ValueError as exc:  # ujson decode errors and pydantic ValidationError
        raise ConfigurationError(f"Invalid network file {path}") from exc


def save_network(network: Network, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(network.model_dump(mode="json"), indent=2))
