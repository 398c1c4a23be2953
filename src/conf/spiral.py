from typing import List

from mlpnet.layer import LayerConfig

# inputs are the 7 spiral features: x, y, xy, x^2, y^2, sin(x), sin(y)
layers: List[LayerConfig] = [
    LayerConfig(neurons_number=7, is_input=True),
    LayerConfig(neurons_number=9, inline_bias=True, activation_function='tanh'),
    LayerConfig(neurons_number=8, inline_bias=True, activation_function='tanh'),
    LayerConfig(neurons_number=8, inline_bias=True, activation_function='tanh'),
    LayerConfig(neurons_number=8, inline_bias=True, activation_function='tanh'),
    LayerConfig(neurons_number=1, is_output=True, activation_function='tanh'),
]

epochs = 3115
iterations = 500
learning_rate = 0.04
momentum = 0.04
