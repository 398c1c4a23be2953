from pathlib import Path
from typing import Any, Dict, List
import datetime
import json

import numpy as np

from mlpnet.errors import ConfigurationError
from mlpnet.layer import LayerConfig
from mlpnet.network import Network

TIME_FORMAT = "%Y%m%d-%H%M%S"

def network_dict(net: Network) -> Dict[str, Any]:
    return dict(
        layers=[config.metadata_dict() for config in net.layer_configs()],
        neuron_ids=net.neuron_ids(),
        weights=[[origin, dest, value] for origin, dest, value in net.export_weights()],
        saved_at=datetime.datetime.now().strftime(TIME_FORMAT),
    )

"""
Save layer configs, neuron ids and weights as json. Written to a .tmp
file first and renamed into place.
"""
def save_network(net: Network, path: Path):
    path = Path(path)
    net.check_ready()
    md_dict = network_dict(net)

    temp_path = Path(str(path) + ".tmp")
    with open(temp_path, "w") as json_file:
        json.dump(md_dict, json_file, indent=2)
    temp_path.rename(path)

def _read(path: Path) -> Dict[str, Any]:
    with open(path, "r") as json_file:
        return json.load(json_file)

"""
Neuron ids are process-unique, so the ids stored in a file won't match a
freshly built network. Map them positionally: neuron k of layer i in the file
is neuron k of layer i in net.
"""
def _remap_weights(net: Network, saved: Dict[str, Any]) -> List[List[float]]:
    saved_ids: List[List[int]] = saved['neuron_ids']
    net_ids = net.neuron_ids()
    if [len(ids) for ids in saved_ids] != [len(ids) for ids in net_ids]:
        raise ConfigurationError(f"layer sizes don't match: saved {[len(ids) for ids in saved_ids]}, "
                                 f"network {[len(ids) for ids in net_ids]}")

    id_map: Dict[int, int] = dict()
    for saved_layer, net_layer in zip(saved_ids, net_ids):
        for saved_id, net_id in zip(saved_layer, net_layer):
            id_map[int(saved_id)] = net_id

    res: List[List[float]] = list()
    for origin, dest, value in saved['weights']:
        if int(origin) not in id_map or int(dest) not in id_map:
            raise ConfigurationError(f"weight {origin}_to_{dest} refers to an unknown neuron")
        res.append([id_map[int(origin)], id_map[int(dest)], float(value)])
    return res

def load_weights_into(net: Network, path: Path):
    saved = _read(Path(path))
    net.load_weights(_remap_weights(net, saved))

def load_network(path: Path, rng: np.random.Generator = None) -> Network:
    saved = _read(Path(path))

    net = Network(rng=rng)
    for layer_dict in saved['layers']:
        net.push_layer(LayerConfig(**layer_dict))
    net.load_weights(_remap_weights(net, saved))
    return net
