import unittest
from typing import List
from pathlib import Path
import tempfile

import numpy as np

from mlpnet.layer import LayerConfig
from mlpnet.network import Network
from mlpnet.training.config import SampleLike, TrainConfig

def make_net(sizes: List[int], seed: int = 0,
             bias: bool = False, inline_bias: bool = False,
             activation: str = "sigmoid") -> Network:
    """
    sizes[0] input neurons, sizes[-1] output neurons, hidden in between.
    inline_bias applies to every non-input layer.
    """
    net = Network(rng=np.random.default_rng(seed))
    last = len(sizes) - 1
    for idx, size in enumerate(sizes):
        if idx == 0:
            net.push_layer(LayerConfig(neurons_number=size, is_input=True, bias=bias))
        else:
            net.push_layer(LayerConfig(neurons_number=size, is_output=(idx == last),
                                       inline_bias=inline_bias, activation_function=activation))
    net.create_weights()
    return net

def quiet_config(training_set: List[SampleLike], **kwargs) -> TrainConfig:
    kwargs.setdefault('epochs', 1)
    kwargs.setdefault('iterations', 10)
    kwargs.setdefault('learning_rate', 0.5)
    return TrainConfig(training_set=training_set, silent=True, **kwargs)

class TestBase(unittest.TestCase):
    _runs_dir: Path = None

    def _ensure_runsdir(self):
        if self._runs_dir is None:
            self._runs_dir = Path(tempfile.mkdtemp())

    @property
    def runs_dir(self) -> Path:
        self._ensure_runsdir()
        return self._runs_dir

    def assertWeightsEqual(self, net1: Network, net2: Network):
        ws1 = [value for _origin, _dest, value in net1.export_weights()]
        ws2 = [value for _origin, _dest, value in net2.export_weights()]
        self.assertEqual(ws1, ws2)

    def tearDown(self) -> None:
        super().tearDown()

        def walk(path: Path) -> int:
            num_removed = 0
            if not path.is_dir():
                path.unlink()
                return 1
            for subpath in path.iterdir():
                num_removed += walk(subpath)
            path.rmdir()
            return num_removed

        if self._runs_dir is not None:
            walk(self._runs_dir)

        self._runs_dir = None
