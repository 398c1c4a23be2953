import numpy as np

from .base import TestBase
from mlpnet.errors import ConfigurationError, LinkNotFound
from mlpnet.weights import WeightStore, link_name, parse_link_name

class TestWeightStore(TestBase):
    def test_create_in_range(self):
        store = WeightStore(rng=np.random.default_rng(1))
        for dest in range(200):
            value = store.create(0, dest)
            assert -1.0 <= value <= 1.0
            assert store.get(0, dest) == value
        assert len(store) == 200

    def test_get_missing(self):
        store = WeightStore()
        with self.assertRaises(LinkNotFound) as ctx:
            store.get(3, 4)
        assert ctx.exception.origin == 3
        assert ctx.exception.dest == 4
        assert isinstance(ctx.exception, ConfigurationError)
        assert "3_to_4" in str(ctx.exception)

    def test_set_add(self):
        store = WeightStore()
        store.set(1, 2, 0.25)
        store.add(1, 2, 0.5)
        assert store.get(1, 2) == 0.75

        with self.assertRaises(LinkNotFound):
            store.add(2, 1, 0.5)

    def test_direction_matters(self):
        store = WeightStore()
        store.set(1, 2, 0.25)
        assert (1, 2) in store
        assert (2, 1) not in store

    def test_clear(self):
        store = WeightStore()
        store.create(0, 1)
        store.create(1, 1)
        store.clear()
        assert len(store) == 0

    def test_replace(self):
        store = WeightStore()
        store.create(0, 1)
        store.replace({(5, 6): 0.5, (6, 6): -0.5})
        assert sorted(store.keys()) == [(5, 6), (6, 6)]
        assert (0, 1) not in store

    def test_snapshot_independent(self):
        store = WeightStore()
        store.set(0, 1, 0.5)
        snap = store.snapshot()
        store.add(0, 1, 1.0)
        assert snap.get(0, 1) == 0.5
        assert store.get(0, 1) == 1.5

    def test_links_ws(self):
        store = WeightStore()
        store.set(0, 3, 0.5)
        store.set(3, 3, -0.25)
        assert store.links_ws() == {"0_to_3": 0.5, "3_to_3": -0.25}

    def test_triples(self):
        store = WeightStore()
        store.set(0, 3, 0.5)
        store.set(1, 3, -0.25)
        loaded = WeightStore.from_triples(store.to_triples())
        assert dict(loaded.items()) == dict(store.items())

    def test_seeded_create_repeatable(self):
        store1 = WeightStore(rng=np.random.default_rng(42))
        store2 = WeightStore(rng=np.random.default_rng(42))
        assert [store1.create(0, i) for i in range(5)] == [store2.create(0, i) for i in range(5)]

class TestLinkName(TestBase):
    def test_format(self):
        assert link_name(12, 7) == "12_to_7"

    def test_parse(self):
        assert parse_link_name("12_to_7") == (12, 7)

    def test_parse_bad(self):
        with self.assertRaises(ConfigurationError):
            parse_link_name("12-7")
