from typing import Callable, Dict, List, Sequence, Tuple
import math

import numpy as np

from mlpnet.network import Network
from mlpnet.training.config import TrainingSample

FeatureFn = Callable[[float, float], List[float]]

def xor_set() -> List[TrainingSample]:
    return [
        TrainingSample(inputs=[0.0, 0.0], desired_outputs=[0.0]),
        TrainingSample(inputs=[0.0, 1.0], desired_outputs=[1.0]),
        TrainingSample(inputs=[1.0, 0.0], desired_outputs=[1.0]),
        TrainingSample(inputs=[1.0, 1.0], desired_outputs=[0.0]),
    ]

# map v from [lo, hi] onto [min_allowed, max_allowed].
def scale_between(v: float, min_allowed: float, max_allowed: float, lo: float, hi: float) -> float:
    if hi == lo:
        return (min_allowed + max_allowed) / 2.0
    return (max_allowed - min_allowed) * (v - lo) / (hi - lo) + min_allowed

"""
returns (x, y) points on a spiral arm, n points, with uniform noise in
[-noise, noise] on each coordinate.
"""
def gen_spiral(n: int, delta_t: float, noise: float = 0.001,
               rng: np.random.Generator = None) -> np.ndarray:
    rng = rng or np.random.default_rng()
    idx = np.arange(n)
    radius = idx / n * 0.4
    theta = 1.75 * idx / n * 2 * math.pi + delta_t
    xs = radius * np.sin(theta) + rng.uniform(-1, 1, size=n) * noise
    ys = radius * np.cos(theta) + rng.uniform(-1, 1, size=n) * noise
    return np.stack([xs, ys], axis=1)

# x, y, x*y, x^2, y^2, sin(x), sin(y)
def spiral_features(x: float, y: float) -> List[float]:
    return [x, y, x * y, x ** 2, y ** 2, math.sin(x), math.sin(y)]

def raw_features(x: float, y: float) -> List[float]:
    return [x, y]

"""
two interleaved spirals: the one starting at angle 0 labelled 1, the one
starting at pi labelled -1. samples use features(x, y) as inputs.
"""
def spiral_set(n: int = 100, noise: float = 0.001, features: FeatureFn = spiral_features,
               rng: np.random.Generator = None) -> List[TrainingSample]:
    rng = rng or np.random.default_rng()
    res: List[TrainingSample] = list()
    for delta_t, label in [(0.0, 1.0), (math.pi, -1.0)]:
        for x, y in gen_spiral(n, delta_t, noise=noise, rng=rng):
            res.append(TrainingSample(inputs=features(float(x), float(y)), desired_outputs=[label]))
    return res

"""
min-max scale each input feature to [-1, 1]. returns the scaled samples and
the per-feature (lows, highs) so the same scaling can be applied later.
"""
def scale_set(samples: Sequence[TrainingSample]) -> Tuple[List[TrainingSample], Tuple[np.ndarray, np.ndarray]]:
    inputs = np.array([sample.inputs for sample in samples], dtype=np.float64)
    lows = inputs.min(axis=0)
    highs = inputs.max(axis=0)

    res = [TrainingSample(inputs=scale_inputs(sample.inputs, lows, highs),
                          desired_outputs=list(sample.desired_outputs))
           for sample in samples]
    return res, (lows, highs)

def scale_inputs(inputs: Sequence[float], lows: Sequence[float], highs: Sequence[float]) -> List[float]:
    return [scale_between(float(v), -1.0, 1.0, float(lo), float(hi))
            for v, lo, hi in zip(inputs, lows, highs)]

"""
evaluate net over a size x size grid covering [lo, hi] in both directions.
returns neuron id -> (size, size) array of that neuron's output, for every
neuron in the network; grid[i][j] is x = lo + (hi-lo)*i/size,
y = -(lo + (hi-lo)*j/size).
"""
def boundary_grid(net: Network, size: int = 25, lo: float = -6.0, hi: float = 6.0,
                  features: FeatureFn = spiral_features,
                  transform: Callable[[List[float]], List[float]] = None) -> Dict[int, np.ndarray]:
    grids: Dict[int, np.ndarray] = {neuron_id: np.zeros((size, size))
                                    for layer_ids in net.neuron_ids()
                                    for neuron_id in layer_ids}
    for i in range(size):
        for j in range(size):
            x = scale_between(i, lo, hi, 0, size)
            y = -1 * scale_between(j, lo, hi, 0, size)
            inputs = features(x, y)
            if transform is not None:
                inputs = transform(inputs)

            res = net.guess(inputs)
            for layer_outputs in res.layer_neuron_outputs + [res.output_response]:
                for output in layer_outputs:
                    grids[output.origin.id][i][j] = output.value
    return grids
