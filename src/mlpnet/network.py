from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import math

import numpy as np

from mlpnet.errors import ConfigurationError, NumericAnomaly
from mlpnet.layer import Layer, LayerConfig
from mlpnet.neuron import NeuronOutput
from mlpnet.training.config import MomentumState, SampleLike, TrainConfig, as_sample
from mlpnet.weights import LinkKey, WeightStore, WeightTriple

# (delta, link). applied to the store only after the full backward pass.
Delta = Tuple[float, LinkKey]

@dataclass
class GuessResult:
    output: List[float]

    """per-layer outputs for every layer except the output layer. [0] echoes the inputs."""
    layer_neuron_outputs: List[List[NeuronOutput]]

    output_response: List[NeuronOutput]

"""
Strictly layered feed-forward network. Links run from every neuron of layer i
to every neuron of layer i+1, plus a self-loop per neuron in inline_bias
layers.

Usage:
    net = Network()
    net.push_layer(LayerConfig(neurons_number=2, is_input=True, bias=True))
    net.push_layer(LayerConfig(neurons_number=2, inline_bias=True))
    net.push_layer(LayerConfig(neurons_number=1, is_output=True, inline_bias=True))
    net.create_weights()
    net.guess([0.0, 1.0]).output
"""
class Network:
    layers: List[Layer]
    weights: WeightStore
    weights_created: bool

    def __init__(self, weights: WeightStore = None, rng: np.random.Generator = None):
        self.layers = list()
        self.weights = weights if weights is not None else WeightStore(rng=rng)
        self.weights_created = False

    @property
    def input_layer(self) -> Layer:
        return self.layers[0]

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    @property
    def has_bias(self) -> bool:
        return bool(self.layers) and self.layers[0].config.bias

    def push_layer(self, config: LayerConfig = None, **kwargs) -> Layer:
        if config is None:
            config = LayerConfig(**kwargs)
        elif kwargs:
            raise ConfigurationError("pass either a LayerConfig or keyword arguments, not both")

        if self.layers:
            if config.is_input:
                raise ConfigurationError("only the first layer can be the input layer")
            if self.layers[-1].config.is_output:
                raise ConfigurationError("can't add a layer after the output layer")
        elif not config.is_input:
            raise ConfigurationError("the first layer must be the input layer (is_input=True)")

        layer = Layer.build(config)
        self.layers.append(layer)

        # new neurons have no links yet.
        self.weights_created = False
        return layer

    """
    every link the declared topology has, in creation order: for each layer,
    its inline-bias self-loops, then its links into the next layer.
    """
    def link_keys(self) -> Iterable[LinkKey]:
        for idx, layer in enumerate(self.layers):
            if layer.config.inline_bias:
                for neuron in layer.neurons:
                    yield (neuron.id, neuron.id)

            if idx + 1 == len(self.layers):
                break
            next_layer = self.layers[idx + 1]
            for neuron in layer.neurons:
                for next_neuron in next_layer.neurons:
                    yield (neuron.id, next_neuron.id)

    def create_weights(self):
        for origin, dest in self.link_keys():
            self.weights.create(origin, dest)
        self.weights_created = True

    def reset_weights(self):
        self.weights.clear()
        self.weights_created = False

    def check_ready(self):
        if not self.weights_created:
            raise ConfigurationError("create_weights() must be called after the last push_layer() and before use")
        if not self.layers:
            raise ConfigurationError("network has no layers")
        if not self.output_layer.config.is_output:
            raise ConfigurationError("network has no output layer (is_output=True)")

    # prepend the constant bias input if the input layer has a bias neuron.
    def input_vector(self, features: Sequence[float]) -> List[float]:
        if not self.layers:
            raise ConfigurationError("network has no layers")
        nfeatures = self.input_layer.nfeatures
        if len(features) != nfeatures:
            raise ConfigurationError(f"expected {nfeatures} inputs, got {len(features)}")
        values = [float(value) for value in features]
        if self.has_bias:
            values = [1.0] + values
        return values

    """
    outputs for every layer, input layer included. values has one entry per
    input neuron (bias first, if present).
    """
    def _forward(self, values: Sequence[float], weights: WeightStore) -> List[List[NeuronOutput]]:
        input_neurons = self.input_layer.neurons
        if len(values) != len(input_neurons):
            raise ConfigurationError(f"expected {len(input_neurons)} input neuron values, got {len(values)}")

        for neuron, value in zip(input_neurons, values):
            neuron.in_value = float(value)

        records = [[NeuronOutput(origin=neuron, value=float(value))
                    for neuron, value in zip(input_neurons, values)]]
        for layer in self.layers[1:]:
            prev_outputs = records[-1]
            inline_bias = layer.config.inline_bias
            records.append([neuron.receive(prev_outputs, weights, inline_bias)
                            for neuron in layer.neurons])
        return records

    def guess(self, inputs: Sequence[float], weights: WeightStore = None) -> GuessResult:
        self.check_ready()
        values = self.input_vector(inputs)
        records = self._forward(values, weights if weights is not None else self.weights)
        return GuessResult(output=[record.value for record in records[-1]],
                           layer_neuron_outputs=records[:-1],
                           output_response=records[-1])

    def _link_delta(self, config: TrainConfig, momentum_state: Optional[MomentumState],
                    gradient: float, feeder_value: float, key: LinkKey) -> float:
        delta = -config.learning_rate * gradient * feeder_value
        if config.momentum and momentum_state is not None:
            delta += config.momentum * momentum_state.get(key, 0.0)
        return delta

    """
    forward + backward pass for one sample, without touching the weights.

    inputs is the full input-neuron vector (use input_vector() to prepend the
    bias). returns the instantaneous error E = 1/2 sum((desired - y)^2) and
    one (delta, link) per link of the network.
    """
    def compute_deltas(self, inputs: Sequence[float], desired_outputs: Sequence[float],
                       config: TrainConfig, momentum_state: MomentumState = None) -> Tuple[float, List[Delta]]:
        self.check_ready()
        noutputs = len(self.output_layer.neurons)
        if len(desired_outputs) != noutputs:
            raise ConfigurationError(f"expected {noutputs} desired outputs, got {len(desired_outputs)}")

        records = self._forward(inputs, self.weights)
        output_response = records[-1]
        error = 0.0
        for desired, output in zip(desired_outputs, output_response):
            diff = desired - output.value
            error += diff * diff
        error *= 0.5

        deltas: List[Delta] = list()
        # local gradients of the layer one step closer to the output
        next_gradients: List[float] = list()
        last_idx = len(self.layers) - 1

        # input layer (idx 0) gets no gradient.
        for idx in range(last_idx, 0, -1):
            layer = self.layers[idx]
            layer_outputs = records[idx]

            gradients: List[float] = list()
            if idx == last_idx:
                for neuron, output, desired in zip(layer.neurons, layer_outputs, desired_outputs):
                    deriv = neuron.activation.derivative(output.weighted_sum)
                    gradients.append(-(desired - output.value) * deriv)
            else:
                next_neurons = self.layers[idx + 1].neurons
                for neuron, output in zip(layer.neurons, layer_outputs):
                    downstream = 0.0
                    for next_gradient, next_neuron in zip(next_gradients, next_neurons):
                        downstream += next_gradient * self.weights.get(neuron.id, next_neuron.id)
                    gradients.append(neuron.activation.derivative(output.weighted_sum) * downstream)

            for feeder in records[idx - 1]:
                for neuron, gradient in zip(layer.neurons, gradients):
                    key = (feeder.origin.id, neuron.id)
                    delta = self._link_delta(config, momentum_state, gradient, feeder.value, key)
                    deltas.append((delta, key))

            if layer.config.inline_bias:
                for neuron, gradient in zip(layer.neurons, gradients):
                    key = (neuron.id, neuron.id)
                    delta = self._link_delta(config, momentum_state, gradient, 1.0, key)
                    deltas.append((delta, key))

            next_gradients = gradients

        return error, deltas

    def apply_deltas(self, deltas: List[Delta], config: TrainConfig, momentum_state: MomentumState = None):
        if config.check_finite:
            for delta, (origin, dest) in deltas:
                if not math.isfinite(self.weights.get(origin, dest) + delta):
                    raise NumericAnomaly(f"non-finite weight for {origin}_to_{dest} after {delta=}")

        record_momentum = bool(config.momentum) and momentum_state is not None
        for delta, (origin, dest) in deltas:
            self.weights.add(origin, dest, delta)
            if record_momentum:
                momentum_state[(origin, dest)] = delta

    def train_iteration(self, inputs: Sequence[float], desired_outputs: Sequence[float],
                        config: TrainConfig, momentum_state: MomentumState = None) -> float:
        error, deltas = self.compute_deltas(inputs, desired_outputs, config, momentum_state)
        if config.check_finite and not math.isfinite(error):
            raise NumericAnomaly(f"non-finite error {error}")
        self.apply_deltas(deltas, config, momentum_state)
        return error

    """
    forward pass over test_set. error per sample is the sum of absolute output
    errors; test_iteration(error, output, desired) is called for each one.
    """
    def test(self, test_set: Iterable[SampleLike],
             test_iteration: Callable[[float, List[float], List[float]], None] = None) -> List[float]:
        errors: List[float] = list()
        for sample in test_set:
            sample = as_sample(sample)
            output = self.guess(sample.inputs).output
            if len(sample.desired_outputs) != len(output):
                raise ConfigurationError(f"expected {len(output)} desired outputs, got {len(sample.desired_outputs)}")

            error = sum(abs(desired - value) for desired, value in zip(sample.desired_outputs, output))
            errors.append(error)
            if test_iteration is not None:
                test_iteration(error, output, sample.desired_outputs)
        return errors

    def neuron_ids(self) -> List[List[int]]:
        return [layer.neuron_ids for layer in self.layers]

    def layer_configs(self) -> List[LayerConfig]:
        return [layer.config for layer in self.layers]

    def links_ws(self) -> Dict[str, float]:
        return self.weights.links_ws()

    def export_weights(self) -> List[WeightTriple]:
        return self.weights.to_triples()

    # replace all weights. the triples must cover exactly this topology.
    def load_weights(self, triples: Iterable[WeightTriple]):
        loaded = {(int(origin), int(dest)): float(value) for origin, dest, value in triples}
        declared = set(self.link_keys())

        unknown = set(loaded.keys()) - declared
        if unknown:
            origin, dest = sorted(unknown)[0]
            raise ConfigurationError(f"{len(unknown)} weights don't match this topology, e.g. {origin}_to_{dest}")
        missing = declared - set(loaded.keys())
        if missing:
            origin, dest = sorted(missing)[0]
            raise ConfigurationError(f"{len(missing)} links have no weight, e.g. {origin}_to_{dest}")

        self.weights.replace(loaded)
        self.weights_created = True

    def __repr__(self) -> str:
        sizes = ", ".join(f"{layer.role.value}:{len(layer.neurons)}" for layer in self.layers)
        return f"Network({sizes}; {len(self.weights)} links)"
