from typing import List

from mlpnet.layer import LayerConfig

# 2-2-1 sigmoid; the bias neuron and inline biases let it separate xor.
layers: List[LayerConfig] = [
    LayerConfig(neurons_number=2, is_input=True, bias=True),
    LayerConfig(neurons_number=2, inline_bias=True, activation_function='sigmoid'),
    LayerConfig(neurons_number=1, is_output=True, inline_bias=True, activation_function='sigmoid'),
]

epochs = 10
iterations = 1000
learning_rate = 0.5
