from dataclasses import dataclass, field
from typing import Any, Dict, List
import asyncio
import datetime
import inspect

import numpy as np

from mlpnet.network import Network
from mlpnet.training.config import MomentumState, TrainConfig, TrainingSample
from mlpnet.errors import ConfigurationError

@dataclass(kw_only=True)
class TrainResult:
    """epochs requested"""
    epochs: int

    """epochs actually run; less than epochs if stop_condition fired"""
    epochs_run: int

    mean_error: float
    std_error: float        # population std dev of the epoch mean errors
    min_error: float
    max_error: float
    error_diff: float       # max - min
    last_error: float
    learning_rate: float
    iterations_per_epoch: int

    epoch_errors: List[float] = field(default_factory=list)

    def metadata_dict(self) -> Dict[str, Any]:
        res = {name: getattr(self, name) for name in self.__dataclass_fields__}
        res.pop('epoch_errors')
        return res

class TrainerLogger:
    def on_train_start(self, network: Network, config: TrainConfig):
        pass

    """
    gets called after every epoch, after config.on_epoch_end.

         epoch: 0-based, just-ended epoch
    mean_error: accumulated error / iterations for this epoch
    """
    def on_epoch_end(self, epoch: int, mean_error: float, config: TrainConfig):
        pass

    """
    gets called every 100 iterations when config.debug is set.
     error_epoch: accumulated error for the epoch so far
    """
    def print_status(self, epoch: int, iteration: int, error_epoch: float, config: TrainConfig):
        pass

    def on_train_end(self, result: TrainResult):
        pass

"""
Per epoch:
- config.iterations single-sample steps, drawn uniformly with replacement
- config.on_epoch_end(epoch, mean_error), completed before anything else
- logger.on_epoch_end
- config.stop_condition(epoch, accumulated_error)

The network (and its weights) belong to the trainer for the duration of
train(); nothing else should mutate them until it returns.
"""
class Trainer:
    network: Network
    logger: TrainerLogger
    rng: np.random.Generator

    total_iterations = 0   # iterations trained so far
    total_epochs = 0       # epochs trained so far

    started_at: datetime.datetime = None
    last_epoch_started_at: datetime.datetime = None

    def __init__(self, network: Network, logger: TrainerLogger = None, rng: np.random.Generator = None):
        self.network = network
        self.logger = logger
        self.rng = rng or np.random.default_rng()

    def _prepare(self, config: TrainConfig) -> List[TrainingSample]:
        config.validate()
        self.network.check_ready()
        samples = config.samples()

        ninputs = self.network.input_layer.nfeatures
        noutputs = len(self.network.output_layer.neurons)
        for idx, sample in enumerate(samples):
            if len(sample.inputs) != ninputs:
                raise ConfigurationError(f"sample {idx}: expected {ninputs} inputs, got {len(sample.inputs)}")
            if len(sample.desired_outputs) != noutputs:
                raise ConfigurationError(f"sample {idx}: expected {noutputs} desired outputs, got {len(sample.desired_outputs)}")

        self.started_at = datetime.datetime.now()
        if self.logger is not None:
            self.logger.on_train_start(self.network, config)
        return samples

    def train_epoch(self, epoch: int, config: TrainConfig, samples: List[TrainingSample],
                    momentum_state: MomentumState) -> float:
        """returns the accumulated (not mean) error of the epoch."""
        self.last_epoch_started_at = datetime.datetime.now()

        error = 0.0
        for iteration in range(config.iterations):
            sample = samples[int(self.rng.integers(len(samples)))]
            inputs = self.network.input_vector(sample.inputs)

            if config.debug and iteration % 100 == 0:
                print(f"epoch {epoch}/{config.epochs} | iteration {iteration}/{config.iterations}")
                if self.logger is not None:
                    self.logger.print_status(epoch, iteration, error, config)

            error += self.network.train_iteration(inputs, sample.desired_outputs, config, momentum_state)
            self.total_iterations += 1

        self.total_epochs += 1
        return error

    def print_status(self, epoch: int, mean_error: float, config: TrainConfig):
        if config.silent:
            return

        now = datetime.datetime.now()
        epoch_elapsed = (now - self.last_epoch_started_at).total_seconds()
        train_elapsed = (now - self.started_at).total_seconds()
        print(f"epoch {epoch + 1}/{config.epochs} "
              f"| \033[1;32mtrain error {mean_error:.5f}\033[0m "
              f"| epoch {epoch_elapsed:.2f}s, total {train_elapsed:.2f}s")

    def _record_epoch(self, epoch: int, error: float, config: TrainConfig, epoch_errors: List[float]) -> float:
        mean_error = error / config.iterations
        epoch_errors.append(mean_error)
        self.print_status(epoch, mean_error, config)
        return mean_error

    # returns True if training should stop.
    def _end_epoch(self, epoch: int, error: float, mean_error: float, config: TrainConfig) -> bool:
        if self.logger is not None:
            self.logger.on_epoch_end(epoch, mean_error, config)
        return config.stop_condition is not None and bool(config.stop_condition(epoch, error))

    def _finish(self, config: TrainConfig, epoch_errors: List[float]) -> TrainResult:
        errors = np.array(epoch_errors, dtype=np.float64)
        result = TrainResult(
            epochs=config.epochs,
            epochs_run=len(epoch_errors),
            mean_error=float(np.mean(errors)),
            std_error=float(np.std(errors)),
            min_error=float(np.min(errors)),
            max_error=float(np.max(errors)),
            error_diff=float(np.max(errors) - np.min(errors)),
            last_error=float(errors[-1]),
            learning_rate=config.learning_rate,
            iterations_per_epoch=config.iterations,
            epoch_errors=list(epoch_errors),
        )
        if not config.silent:
            print(f"\033[1mtrained {result.epochs_run}/{result.epochs} epochs\033[0m "
                  f"| mean {result.mean_error:.5f} +/- {result.std_error:.5f} "
                  f"| min {result.min_error:.5f}, max {result.max_error:.5f} "
                  f"| last \033[1;32m{result.last_error:.5f}\033[0m")
        if self.logger is not None:
            self.logger.on_train_end(result)
        return result

    def train(self, config: TrainConfig) -> TrainResult:
        samples = self._prepare(config)

        # fresh for every call.
        momentum_state: MomentumState = dict()
        epoch_errors: List[float] = list()
        for epoch in range(config.epochs):
            error = self.train_epoch(epoch, config, samples, momentum_state)
            mean_error = self._record_epoch(epoch, error, config, epoch_errors)
            if config.on_epoch_end is not None:
                res = config.on_epoch_end(epoch, mean_error)
                if inspect.isawaitable(res):
                    if inspect.iscoroutine(res):
                        res.close()
                    raise ConfigurationError("on_epoch_end returned an awaitable; use train_async()")

            if self._end_epoch(epoch, error, mean_error, config):
                break

        return self._finish(config, epoch_errors)

    """
    same loop as train(), but yields to the event loop before each epoch
    (asyncio.sleep(config.epoch_delay)) and awaits on_epoch_end if it returns
    an awaitable. the next epoch never starts before that callback finishes.
    """
    async def train_async(self, config: TrainConfig) -> TrainResult:
        samples = self._prepare(config)

        momentum_state: MomentumState = dict()
        epoch_errors: List[float] = list()
        for epoch in range(config.epochs):
            await asyncio.sleep(config.epoch_delay)

            error = self.train_epoch(epoch, config, samples, momentum_state)
            mean_error = self._record_epoch(epoch, error, config, epoch_errors)
            if config.on_epoch_end is not None:
                res = config.on_epoch_end(epoch, mean_error)
                if inspect.isawaitable(res):
                    await res

            if self._end_epoch(epoch, error, mean_error, config):
                break

        return self._finish(config, epoch_errors)

def train(network: Network, config: TrainConfig, logger: TrainerLogger = None,
          rng: np.random.Generator = None) -> TrainResult:
    return Trainer(network, logger=logger, rng=rng).train(config)
