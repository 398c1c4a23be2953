from typing import Callable, Dict, Literal, Union
import math

from mlpnet.errors import ConfigurationError

ActivationName = Literal['sigmoid', 'relu', 'tanh', 'identity']

class Activation:
    name: str

    def activate(self, v: float) -> float:
        raise NotImplementedError("not implemented")

    # derivative is always evaluated at the pre-activation sum v.
    def derivative(self, v: float) -> float:
        raise NotImplementedError("not implemented")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

class Sigmoid(Activation):
    name = "sigmoid"

    def activate(self, v: float) -> float:
        # split on sign so math.exp never sees a large positive argument.
        if v >= 0:
            return 1.0 / (1.0 + math.exp(-v))
        exp_v = math.exp(v)
        return exp_v / (1.0 + exp_v)

    # e^-v / (1 + e^-v)^2, which is symmetric in v.
    def derivative(self, v: float) -> float:
        exp_neg = math.exp(-abs(v))
        return exp_neg / (1.0 + exp_neg) ** 2

class ReLU(Activation):
    name = "relu"

    def activate(self, v: float) -> float:
        return v if v > 0 else 0.0

    def derivative(self, v: float) -> float:
        return 1.0 if v > 0 else 0.0

class Tanh(Activation):
    name = "tanh"

    def activate(self, v: float) -> float:
        return math.tanh(v)

    def derivative(self, v: float) -> float:
        tanh_v = math.tanh(v)
        return 1.0 - tanh_v * tanh_v

# input neurons pass their value through.
class Identity(Activation):
    name = "identity"

    def activate(self, v: float) -> float:
        return v

    def derivative(self, v: float) -> float:
        return 1.0

class CustomActivation(Activation):
    """
    user-supplied activation/derivative pair. the derivative gets the
    pre-activation sum, same as the built-in variants.
    """
    activate_fn: Callable[[float], float]
    derivative_fn: Callable[[float], float]

    def __init__(self, activate: Callable[[float], float], derivative: Callable[[float], float], name: str = "custom"):
        self.activate_fn = activate
        self.derivative_fn = derivative
        self.name = name

    def activate(self, v: float) -> float:
        return self.activate_fn(v)

    def derivative(self, v: float) -> float:
        return self.derivative_fn(v)

    def __repr__(self) -> str:
        return f"CustomActivation(name={self.name!r})"

ACTIVATIONS: Dict[str, Activation] = {
    'sigmoid': Sigmoid(),
    'relu': ReLU(),
    'tanh': Tanh(),
    'identity': Identity(),
}

def get_activation(activation: Union[ActivationName, Activation, None]) -> Activation:
    if activation is None:
        return ACTIVATIONS['sigmoid']
    if isinstance(activation, Activation):
        return activation
    if activation not in ACTIVATIONS:
        raise ConfigurationError(f"unknown activation {activation!r}; expected one of {sorted(ACTIVATIONS.keys())}")
    return ACTIVATIONS[activation]
