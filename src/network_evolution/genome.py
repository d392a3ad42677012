"""Genome hierarchy: network -> layer -> neuron -> activation.

Every level is an immutable value. Crossover and mutation return new genomes and
delegate child sequences to the shared sequence rules, so two parents whose
sequences have diverged in length can still be bred.
"""

from __future__ import annotations

import random

from pydantic import BaseModel, Field

from .crossover import crossover_float, crossover_sequence
from .dsl import NetworkShapeConfig
from .mutations import (
    Mutator,
    apply_vec_mutation,
    mutate_float,
    mutate_sequence,
    random_vec_mutation,
)
from .network import Activation, Layer, Network, Neuron


class ActivationGenome(BaseModel):
    activation: Activation = Activation.SIGMOID

    model_config = {"frozen": True}

    def crossover(self, other: ActivationGenome, rng: random.Random) -> ActivationGenome:
        return self if rng.random() < 0.5 else other

    def mutate(self, mutator: Mutator, rng: random.Random) -> ActivationGenome:
        """Switch to a different activation when the mutation gate opens."""
        if not mutator.should_mutate(rng):
            return self
        choices = [act for act in Activation if act is not self.activation]
        return ActivationGenome(activation=rng.choice(choices))

    def create(self) -> Activation:
        return self.activation

    @classmethod
    def generate(cls, choices: list[Activation], rng: random.Random) -> ActivationGenome:
        return cls(activation=rng.choice(choices))


class NeuronGenome(BaseModel):
    activation: ActivationGenome = Field(default_factory=ActivationGenome)
    weights: tuple[float, ...] = ()
    bias: float = 0.0

    model_config = {"frozen": True}

    def crossover(self, other: NeuronGenome, rng: random.Random) -> NeuronGenome:
        return NeuronGenome(
            activation=self.activation.crossover(other.activation, rng),
            weights=crossover_sequence(self.weights, other.weights, rng),
            bias=crossover_float(self.bias, other.bias, rng),
        )

    def mutate(self, mutator: Mutator, rng: random.Random) -> NeuronGenome:
        activation = mutator.mutate(self.activation, rng)
        weights = mutate_sequence(self.weights, mutator, rng)
        if mutator.check_structural(rng):
            op = random_vec_mutation(weights, rng)
            # insert/remove would break the match with the previous layer's width
            if op.preserves_length:
                weights = apply_vec_mutation(weights, op)
        bias = mutate_float(self.bias, mutator, rng)
        return NeuronGenome(activation=activation, weights=weights, bias=bias)

    def create(self) -> Neuron:
        return Neuron(
            weights=list(self.weights),
            bias=self.bias,
            activation=self.activation.create(),
        )

    @classmethod
    def extract(cls, neuron: Neuron) -> NeuronGenome:
        return cls(
            activation=ActivationGenome(activation=neuron.activation),
            weights=tuple(neuron.weights),
            bias=neuron.bias,
        )

    @classmethod
    def generate(
        cls, n_weights: int, shape: NetworkShapeConfig, rng: random.Random
    ) -> NeuronGenome:
        return cls(
            activation=ActivationGenome.generate(shape.activations, rng),
            weights=tuple(rng.uniform(*shape.weight_range) for _ in range(n_weights)),
            bias=rng.uniform(*shape.bias_range),
        )


class LayerGenome(BaseModel):
    neurons: tuple[NeuronGenome, ...] = ()

    model_config = {"frozen": True}

    def crossover(self, other: LayerGenome, rng: random.Random) -> LayerGenome:
        return LayerGenome(neurons=crossover_sequence(self.neurons, other.neurons, rng))

    def mutate(self, mutator: Mutator, rng: random.Random) -> LayerGenome:
        return LayerGenome(neurons=mutate_sequence(self.neurons, mutator, rng))

    def create(self) -> Layer:
        return Layer(neurons=[neuron.create() for neuron in self.neurons])

    @classmethod
    def extract(cls, layer: Layer) -> LayerGenome:
        return cls(neurons=tuple(NeuronGenome.extract(neuron) for neuron in layer.neurons))

    @classmethod
    def generate(
        cls, width: int, fan_in: int, shape: NetworkShapeConfig, rng: random.Random
    ) -> LayerGenome:
        return cls(neurons=tuple(NeuronGenome.generate(fan_in, shape, rng) for _ in range(width)))


class NetworkGenome(BaseModel):
    """Root genome; converts to an evaluable ``Network`` via ``create``."""

    layers: tuple[LayerGenome, ...] = ()

    model_config = {"frozen": True}

    def crossover(self, other: NetworkGenome, rng: random.Random) -> NetworkGenome:
        return NetworkGenome(layers=crossover_sequence(self.layers, other.layers, rng))

    def mutate(self, mutator: Mutator, rng: random.Random) -> NetworkGenome:
        return NetworkGenome(layers=mutate_sequence(self.layers, mutator, rng))

    def create(self) -> Network:
        return Network(layers=[layer.create() for layer in self.layers])

    def predict(self, inputs: list[float]) -> list[float]:
        return self.create().predict(inputs)

    @classmethod
    def extract(cls, network: Network) -> NetworkGenome:
        return cls(layers=tuple(LayerGenome.extract(layer) for layer in network.layers))

    @classmethod
    def generate(cls, shape: NetworkShapeConfig, rng: random.Random) -> NetworkGenome:
        layers = []
        fan_in = shape.inputs
        for width in shape.layers:
            layers.append(LayerGenome.generate(width, fan_in, shape, rng))
            fan_in = width
        return cls(layers=tuple(layers))
