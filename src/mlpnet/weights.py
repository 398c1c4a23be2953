from typing import Dict, Iterable, Iterator, List, Mapping, Tuple
import re

import numpy as np

from mlpnet.errors import ConfigurationError, LinkNotFound

# (origin_id, destination_id). origin == destination is an inline bias.
LinkKey = Tuple[int, int]
WeightTriple = Tuple[int, int, float]

RE_LINK_NAME = re.compile(r"^(\d+)_to_(\d+)$")

def link_name(origin: int, dest: int) -> str:
    return f"{origin}_to_{dest}"

def parse_link_name(name: str) -> LinkKey:
    match = RE_LINK_NAME.match(name)
    if match is None:
        raise ConfigurationError(f"bad link name {name!r}")
    origin, dest = match.groups()
    return int(origin), int(dest)

class WeightStore:
    """
    Link weights keyed by (origin_id, destination_id).

    Each Network owns one of these; two networks in the same process never
    share weights unless the same store is passed to both.
    """
    _weights: Dict[LinkKey, float]
    rng: np.random.Generator

    def __init__(self, rng: np.random.Generator = None):
        self._weights = dict()
        self.rng = rng or np.random.default_rng()

    def get(self, origin: int, dest: int) -> float:
        try:
            return self._weights[(origin, dest)]
        except KeyError:
            raise LinkNotFound(origin, dest) from None

    def set(self, origin: int, dest: int, value: float):
        self._weights[(origin, dest)] = float(value)

    def add(self, origin: int, dest: int, delta: float):
        self._weights[(origin, dest)] = self.get(origin, dest) + delta

    # new link, initialized uniformly in [-1, 1]. returns the weight.
    def create(self, origin: int, dest: int) -> float:
        value = float(self.rng.uniform(-1.0, 1.0))
        self._weights[(origin, dest)] = value
        return value

    def clear(self):
        self._weights = dict()

    def replace(self, weights: Mapping[LinkKey, float]):
        new_weights = {(int(origin), int(dest)): float(value)
                       for (origin, dest), value in weights.items()}
        self._weights = new_weights

    def snapshot(self) -> 'WeightStore':
        res = WeightStore(rng=self.rng)
        res._weights = dict(self._weights)
        return res

    def keys(self) -> Iterable[LinkKey]:
        return self._weights.keys()

    def items(self) -> Iterable[Tuple[LinkKey, float]]:
        return self._weights.items()

    def __len__(self) -> int:
        return len(self._weights)

    def __contains__(self, key: LinkKey) -> bool:
        return key in self._weights

    def __iter__(self) -> Iterator[LinkKey]:
        return iter(self._weights)

    """
    string-keyed copy, "{origin}_to_{dest}" -> weight. this is what renderers
    use to look up edge colors/thickness.
    """
    def links_ws(self) -> Dict[str, float]:
        return {link_name(origin, dest): value
                for (origin, dest), value in self._weights.items()}

    def to_triples(self) -> List[WeightTriple]:
        return [(origin, dest, value) for (origin, dest), value in self._weights.items()]

    @staticmethod
    def from_triples(triples: Iterable[WeightTriple], rng: np.random.Generator = None) -> 'WeightStore':
        res = WeightStore(rng=rng)
        res.replace({(origin, dest): value for origin, dest, value in triples})
        return res
