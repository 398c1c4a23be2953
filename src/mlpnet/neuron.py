from dataclasses import dataclass
from typing import Iterable, Optional
import itertools

from mlpnet.activations import Activation, Identity, get_activation
from mlpnet.weights import WeightStore

# process-wide, so ids stay unique across networks. never reused.
_next_id = itertools.count()

@dataclass
class NeuronOutput:
    origin: 'Neuron'
    value: float                          # y, the activated output
    weighted_sum: Optional[float] = None  # v; None for input neurons

class Neuron:
    id: int
    activation: Activation
    is_input = False

    def __init__(self, activation: Activation = None):
        self.id = next(_next_id)
        self.activation = activation or get_activation('sigmoid')

    """
    weighted sum of the previous layer's outputs into this neuron. with
    inline_bias, the self-loop weight is added with coefficient 1.
    """
    def input_function(self, inputs: Iterable[NeuronOutput], weights: WeightStore, inline_bias: bool = False) -> float:
        total = 0.0
        for output in inputs:
            total += output.value * weights.get(output.origin.id, self.id)
        if inline_bias:
            total += weights.get(self.id, self.id)
        return total

    def receive(self, inputs: Iterable[NeuronOutput], weights: WeightStore, inline_bias: bool = False) -> NeuronOutput:
        weighted_sum = self.input_function(inputs, weights, inline_bias)
        return NeuronOutput(origin=self, weighted_sum=weighted_sum,
                            value=self.activation.activate(weighted_sum))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, activation={self.activation.name})"

class InputNeuron(Neuron):
    in_value: float
    is_input = True

    def __init__(self, in_value: float = 0.0):
        super().__init__(activation=Identity())
        self.in_value = in_value

    def output(self) -> NeuronOutput:
        return NeuronOutput(origin=self, value=self.in_value)

# constant 1 input. at most one per network, first in the input layer.
class BiasNeuron(InputNeuron):
    def __init__(self):
        super().__init__(in_value=1.0)
