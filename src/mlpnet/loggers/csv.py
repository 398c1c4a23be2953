from typing import Any, Dict, List
from pathlib import Path
import csv
import datetime

from mlpnet.network import Network
from mlpnet.training.config import TrainConfig
from mlpnet.training.trainer import TrainerLogger, TrainResult

FIELD_NAMES = 'epoch mean_error learning_rate momentum iterations elapsed'.split()

"""
One row per epoch. The file is rewritten (via .tmp + rename) every
write_every epochs and at the end of training, so a partially-trained run
still leaves a readable csv.
"""
class CsvLogger(TrainerLogger):
    path: Path
    write_every: int
    rows: List[Dict[str, Any]]
    started_at: datetime.datetime

    def __init__(self, path: Path, write_every: int = 10):
        self.path = Path(path)
        self.write_every = write_every
        self.rows = list()
        self.started_at = None

    def on_train_start(self, network: Network, config: TrainConfig):
        self.rows = list()
        self.started_at = datetime.datetime.now()

    def on_epoch_end(self, epoch: int, mean_error: float, config: TrainConfig):
        elapsed = (datetime.datetime.now() - self.started_at).total_seconds()
        self.rows.append(dict(
            epoch=epoch,
            mean_error=mean_error,
            learning_rate=config.learning_rate,
            momentum=config.momentum or 0.0,
            iterations=config.iterations,
            elapsed=f"{elapsed:.3f}",
        ))
        if len(self.rows) % self.write_every == 0:
            self._write()

    def on_train_end(self, result: TrainResult):
        self._write()

    def _write(self):
        temp_path = Path(str(self.path) + ".tmp")
        with open(temp_path, "w", newline="") as file:
            writer = csv.DictWriter(file, FIELD_NAMES)
            writer.writeheader()
            for row in self.rows:
                writer.writerow(row)
        temp_path.rename(self.path)

def read_rows(path: Path) -> List[Dict[str, str]]:
    with open(path, "r", newline="") as file:
        return list(csv.DictReader(file))
