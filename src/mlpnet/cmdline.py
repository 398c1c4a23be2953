import argparse
import datetime
from pathlib import Path
from typing import Any, Dict, List

import numpy as np

from mlpnet.layer import LayerConfig
from mlpnet.loggers.chain import ChainLogger
from mlpnet.loggers.csv import CsvLogger
from mlpnet.network import Network
from mlpnet.training.config import SampleLike, TrainConfig
from mlpnet.training.trainer import TrainerLogger
from mlpnet import checkpoint_util

class BaseConfig(argparse.Namespace):
    seed: int
    silent: bool
    debug: bool

    parser: argparse.ArgumentParser

    def __init__(self):
        self.parser = argparse.ArgumentParser()
        self.parser.add_argument("--seed", type=int, default=None, help="seed for weight init and sampling")
        self.parser.add_argument("--silent", default=False, action='store_true')
        self.parser.add_argument("--debug", default=False, action='store_true')

    def parse_args(self, args: List[str] = None) -> 'BaseConfig':
        return self.parser.parse_args(args, namespace=self)

    def add_argument(self, *args, **kwargs):
        return self.parser.add_argument(*args, **kwargs)

    def error(self, *args, **kwargs):
        return self.parser.error(*args, **kwargs)

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

"""
Training options from the command line, and the network layout from a
python config file (-c). The config file is exec'd and must define

    layers: List[LayerConfig]

and may also set any of: epochs, iterations, learning_rate, momentum. Values
given on the command line win over the config file.
"""
class TrainerConfig(BaseConfig):
    basename: str
    config_file: str
    epochs: int
    iterations: int
    learning_rate: float
    momentum: float
    csv_path: Path
    save_path: Path
    load_path: Path
    do_plot: bool

    started_at: datetime.datetime

    layers: List[LayerConfig]
    config_values: Dict[str, Any]

    def __init__(self, basename: str):
        super().__init__()
        self.add_argument("-c", "--config_file", required=True)
        self.add_argument("-n", "--epochs", type=int, default=None)
        self.add_argument("-i", "--iterations", type=int, default=None, help="iterations per epoch")
        self.add_argument("--lr", "--learning_rate", dest='learning_rate', type=float, default=None)
        self.add_argument("-m", "--momentum", type=float, default=None)
        self.add_argument("--csv", dest='csv_path', type=Path, default=None, help="write per-epoch errors here")
        self.add_argument("--save", dest='save_path', type=Path, default=None, help="save trained weights (json)")
        self.add_argument("--load", dest='load_path', type=Path, default=None, help="start from saved weights (json)")
        self.add_argument("--plot", dest='do_plot', default=False, action='store_true')

        self.basename = basename
        self.started_at = datetime.datetime.now()
        self.layers = list()
        self.config_values = dict()

    def parse_args(self, args: List[str] = None) -> 'TrainerConfig':
        super().parse_args(args)
        self.load_config_file()
        return self

    def load_config_file(self):
        config_globals: Dict[str, Any] = dict(LayerConfig=LayerConfig)
        with open(self.config_file, "r") as cfile:
            if not self.silent:
                print(f"reading {self.config_file}")
            exec(cfile.read(), config_globals)

        if not config_globals.get('layers'):
            self.error(f"{self.config_file} doesn't define 'layers'")
        self.layers = list(config_globals['layers'])

        for field in ['epochs', 'iterations', 'learning_rate', 'momentum']:
            if field in config_globals:
                self.config_values[field] = config_globals[field]

    def _value(self, field: str, default: Any) -> Any:
        val = getattr(self, field, None)
        if val is not None:
            return val
        return self.config_values.get(field, default)

    def build_network(self, rng: np.random.Generator = None) -> Network:
        net = Network(rng=rng)
        for layer_config in self.layers:
            net.push_layer(layer_config)

        if self.load_path is not None:
            if not self.silent:
                print(f"loading weights from {self.load_path}")
            checkpoint_util.load_weights_into(net, self.load_path)
        else:
            net.create_weights()
        return net

    def train_config(self, training_set: List[SampleLike]) -> TrainConfig:
        return TrainConfig(
            epochs=self._value('epochs', 100),
            iterations=self._value('iterations', 500),
            learning_rate=self._value('learning_rate', 0.1),
            momentum=self._value('momentum', None),
            training_set=training_set,
            silent=self.silent,
            debug=self.debug,
        )

    def get_logger(self) -> TrainerLogger:
        loggers: List[TrainerLogger] = list()
        if self.csv_path is not None:
            loggers.append(CsvLogger(self.csv_path))
        return ChainLogger(*loggers)

    def save(self, net: Network):
        if self.save_path is None:
            return
        checkpoint_util.save_network(net, self.save_path)
        if not self.silent:
            print(f"  saved weights to {self.save_path}")
