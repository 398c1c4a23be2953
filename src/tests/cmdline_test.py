from pathlib import Path

from .base import TestBase
from mlpnet import checkpoint_util
from mlpnet.cmdline import TrainerConfig
from mlpnet.datasets import xor_set
from mlpnet.layer import LayerRole
from mlpnet.training.trainer import Trainer

CONFIG = """
layers = [
    LayerConfig(neurons_number=2, is_input=True, bias=True),
    LayerConfig(neurons_number=3, inline_bias=True, activation_function='tanh'),
    LayerConfig(neurons_number=1, is_output=True),
]
epochs = 4
learning_rate = 0.25
"""

class TestTrainerConfig(TestBase):
    def write_config(self, text: str = CONFIG) -> Path:
        path = Path(self.runs_dir, "conf.py")
        path.write_text(text)
        return path

    def test_config_file(self):
        path = self.write_config()
        cfg = TrainerConfig("test").parse_args(["-c", str(path), "--silent", "--seed", "3"])

        assert [layer.neurons_number for layer in cfg.layers] == [2, 3, 1]
        net = cfg.build_network(rng=cfg.rng())
        assert [layer.role for layer in net.layers] == [LayerRole.INPUT, LayerRole.HIDDEN, LayerRole.OUTPUT]
        assert net.weights_created

        config = cfg.train_config(xor_set())
        assert config.epochs == 4
        assert config.learning_rate == 0.25
        assert config.iterations == 500
        assert config.momentum is None
        assert config.silent

    def test_cmdline_wins(self):
        path = self.write_config()
        cfg = TrainerConfig("test").parse_args(["-c", str(path), "-n", "2", "--lr", "0.1", "-m", "0.5", "-i", "7", "--silent"])
        config = cfg.train_config(xor_set())
        assert config.epochs == 2
        assert config.learning_rate == 0.1
        assert config.momentum == 0.5
        assert config.iterations == 7

    def test_missing_layers(self):
        path = self.write_config("epochs = 3\n")
        with self.assertRaises(SystemExit):
            TrainerConfig("test").parse_args(["-c", str(path), "--silent"])

    def test_train_save_load(self):
        path = self.write_config()
        save_path = Path(self.runs_dir, "weights.json")
        csv_path = Path(self.runs_dir, "errors.csv")
        cfg = TrainerConfig("test").parse_args(["-c", str(path), "--silent", "-i", "5", "--seed", "1",
                                                "--save", str(save_path), "--csv", str(csv_path)])
        rng = cfg.rng()
        net = cfg.build_network(rng=rng)
        Trainer(net, logger=cfg.get_logger(), rng=rng).train(cfg.train_config(xor_set()))
        cfg.save(net)

        assert save_path.exists()
        assert csv_path.exists()

        cfg2 = TrainerConfig("test").parse_args(["-c", str(path), "--silent", "--load", str(save_path)])
        net2 = cfg2.build_network()
        assert net2.guess([1.0, 0.0]).output == net.guess([1.0, 0.0]).output
        assert len(checkpoint_util.network_dict(net2)['weights']) == len(net.weights)
