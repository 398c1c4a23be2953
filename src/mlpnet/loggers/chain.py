from typing import List

from mlpnet.network import Network
from mlpnet.training.config import TrainConfig
from mlpnet.training.trainer import TrainerLogger, TrainResult

class ChainLogger(TrainerLogger):
    def __init__(self, *loggers: TrainerLogger):
        self.loggers: List[TrainerLogger] = list(loggers)

    def on_train_start(self, network: Network, config: TrainConfig):
        for logger in self.loggers:
            logger.on_train_start(network, config)

    def on_epoch_end(self, epoch: int, mean_error: float, config: TrainConfig):
        for logger in self.loggers:
            logger.on_epoch_end(epoch, mean_error, config)

    def print_status(self, epoch: int, iteration: int, error_epoch: float, config: TrainConfig):
        for logger in self.loggers:
            logger.print_status(epoch, iteration, error_epoch, config)

    def on_train_end(self, result: TrainResult):
        for logger in self.loggers:
            logger.on_train_end(result)
