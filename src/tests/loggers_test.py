from pathlib import Path

import numpy as np

from .base import TestBase, make_net, quiet_config
from mlpnet.datasets import xor_set
from mlpnet.loggers.chain import ChainLogger
from mlpnet.loggers.csv import CsvLogger, read_rows
from mlpnet.training.trainer import Trainer

class TestCsvLogger(TestBase):
    def test_rows(self):
        path = Path(self.runs_dir, "errors.csv")
        net = make_net([2, 2, 1], bias=True)
        tr = Trainer(net, logger=CsvLogger(path, write_every=2), rng=np.random.default_rng(0))
        result = tr.train(quiet_config(xor_set(), epochs=5, iterations=10, momentum=0.25))

        rows = read_rows(path)
        assert len(rows) == 5
        assert [int(row['epoch']) for row in rows] == list(range(5))
        for row, mean_error in zip(rows, result.epoch_errors):
            self.assertAlmostEqual(float(row['mean_error']), mean_error)
            assert float(row['momentum']) == 0.25
            assert int(row['iterations']) == 10
        assert not Path(str(path) + ".tmp").exists()

class TestChainLogger(TestBase):
    def test_fans_out(self):
        path1 = Path(self.runs_dir, "one.csv")
        path2 = Path(self.runs_dir, "two.csv")
        logger = ChainLogger(CsvLogger(path1), CsvLogger(path2))

        net = make_net([2, 2, 1])
        Trainer(net, logger=logger).train(quiet_config(xor_set(), epochs=3))

        assert len(read_rows(path1)) == 3
        assert read_rows(path1) == read_rows(path2)
