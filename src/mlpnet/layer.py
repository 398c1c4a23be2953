from dataclasses import dataclass, field
from typing import Any, Dict, List, Union
import enum

from mlpnet.activations import ACTIVATIONS, Activation, ActivationName, get_activation
from mlpnet.errors import ConfigurationError
from mlpnet.neuron import BiasNeuron, InputNeuron, Neuron

class LayerRole(str, enum.Enum):
    INPUT = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"

@dataclass(kw_only=True)
class LayerConfig:
    neurons_number: int
    is_input: bool = False
    is_output: bool = False

    """explicit bias neuron (value 1) prepended to the layer. input layer only."""
    bias: bool = False

    """self-loop link per neuron, added to its weighted sum. non-input layers only."""
    inline_bias: bool = False

    activation_function: Union[ActivationName, Activation] = "sigmoid"

    @property
    def is_hidden(self) -> bool:
        return not self.is_input and not self.is_output

    @property
    def role(self) -> LayerRole:
        if self.is_input:
            return LayerRole.INPUT
        if self.is_output:
            return LayerRole.OUTPUT
        return LayerRole.HIDDEN

    def validate(self):
        if self.neurons_number < 1:
            raise ConfigurationError(f"layer needs at least one neuron, got {self.neurons_number=}")
        if self.is_input and self.is_output:
            raise ConfigurationError("a layer can't be both input and output: it would have no links")
        if self.bias and not self.is_input:
            raise ConfigurationError("bias neuron is only supported on the input layer")
        if self.inline_bias and self.is_input:
            raise ConfigurationError("inline_bias is only supported on hidden and output layers")

    def metadata_dict(self) -> Dict[str, Any]:
        activation = get_activation(self.activation_function)
        builtin = ACTIVATIONS.get(activation.name)
        if builtin is None or type(activation) is not type(builtin):
            raise ConfigurationError(f"can't serialize custom activation {activation!r}")
        return dict(
            neurons_number=self.neurons_number,
            is_input=self.is_input,
            is_output=self.is_output,
            bias=self.bias,
            inline_bias=self.inline_bias,
            activation_function=activation.name,
        )

@dataclass
class Layer:
    config: LayerConfig
    neurons: List[Neuron] = field(default_factory=list)

    @property
    def role(self) -> LayerRole:
        return self.config.role

    @property
    def neuron_ids(self) -> List[int]:
        return [neuron.id for neuron in self.neurons]

    # number of inputs a caller supplies, i.e. excluding the bias neuron.
    @property
    def nfeatures(self) -> int:
        return self.config.neurons_number

    @staticmethod
    def build(config: LayerConfig) -> 'Layer':
        config.validate()

        neurons: List[Neuron] = list()
        if config.bias:
            neurons.append(BiasNeuron())

        if config.is_input:
            for _ in range(config.neurons_number):
                neurons.append(InputNeuron())
        else:
            activation = get_activation(config.activation_function)
            for _ in range(config.neurons_number):
                neurons.append(Neuron(activation=activation))

        return Layer(config=config, neurons=neurons)
