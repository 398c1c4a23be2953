from pathlib import Path
import json
import math

from .base import TestBase, make_net
from mlpnet import checkpoint_util
from mlpnet.activations import CustomActivation
from mlpnet.errors import ConfigurationError
from mlpnet.layer import LayerConfig
from mlpnet.network import Network

class TestCheckpoints(TestBase):
    def test_save_writes_json(self):
        net = make_net([2, 3, 1], bias=True, inline_bias=True, activation='tanh')
        path = Path(self.runs_dir, "net.json")
        checkpoint_util.save_network(net, path)

        assert path.exists()
        assert not Path(str(path) + ".tmp").exists()
        with open(path) as file:
            saved = json.load(file)
        assert [layer['neurons_number'] for layer in saved['layers']] == [2, 3, 1]
        assert saved['layers'][1]['activation_function'] == 'tanh'
        assert saved['neuron_ids'] == net.neuron_ids()
        assert len(saved['weights']) == len(net.weights)

    def test_load_network(self):
        net = make_net([2, 3, 2], bias=True, inline_bias=True, activation='tanh')
        path = Path(self.runs_dir, "net.json")
        checkpoint_util.save_network(net, path)

        loaded = checkpoint_util.load_network(path)
        assert loaded.neuron_ids() != net.neuron_ids()
        assert [len(ids) for ids in loaded.neuron_ids()] == [len(ids) for ids in net.neuron_ids()]
        self.assertWeightsEqual(net, loaded)
        for inputs in [[0.0, 0.0], [0.3, -0.9], [1.0, 1.0]]:
            assert loaded.guess(inputs).output == net.guess(inputs).output

    def test_load_weights_into(self):
        net = make_net([2, 2, 1], inline_bias=True, seed=1)
        other = make_net([2, 2, 1], inline_bias=True, seed=2)
        path = Path(self.runs_dir, "net.json")
        checkpoint_util.save_network(net, path)

        checkpoint_util.load_weights_into(other, path)
        assert other.guess([0.5, 0.25]).output == net.guess([0.5, 0.25]).output

    def test_load_into_mismatched(self):
        net = make_net([2, 2, 1])
        other = make_net([2, 3, 1])
        path = Path(self.runs_dir, "net.json")
        checkpoint_util.save_network(net, path)

        with self.assertRaises(ConfigurationError):
            checkpoint_util.load_weights_into(other, path)

    def test_custom_activation(self):
        net = Network()
        net.push_layer(LayerConfig(neurons_number=1, is_input=True))
        net.push_layer(LayerConfig(neurons_number=1, is_output=True,
                                   activation_function=CustomActivation(math.sin, math.cos)))
        net.create_weights()
        with self.assertRaises(ConfigurationError):
            checkpoint_util.save_network(net, Path(self.runs_dir, "net.json"))
