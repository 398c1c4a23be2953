from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from mlpnet.errors import ConfigurationError
from mlpnet.weights import LinkKey

# previous iteration's delta per link. lives for one train() call.
MomentumState = Dict[LinkKey, float]

@dataclass
class TrainingSample:
    inputs: List[float]
    desired_outputs: List[float]

SampleLike = Union[TrainingSample, Tuple[Sequence[float], Sequence[float]], Mapping[str, Sequence[float]]]

def as_sample(sample: SampleLike) -> TrainingSample:
    if isinstance(sample, TrainingSample):
        return sample
    if isinstance(sample, Mapping):
        return TrainingSample(inputs=list(sample['inputs']),
                              desired_outputs=list(sample['desired_outputs']))
    inputs, desired_outputs = sample
    return TrainingSample(inputs=list(inputs), desired_outputs=list(desired_outputs))

@dataclass(kw_only=True)
class TrainConfig:
    """epochs to run, unless stop_condition ends training early"""
    epochs: int

    """single-sample iterations per epoch"""
    iterations: int

    learning_rate: float
    training_set: List[SampleLike] = field(default_factory=list)

    """fraction of the previous delta added to each link's delta. None/0 disables."""
    momentum: Optional[float] = None

    """(epoch, accumulated epoch error) -> True to stop after this epoch"""
    stop_condition: Optional[Callable[[int, float], bool]] = None

    """(epoch, mean epoch error), called before the next epoch starts"""
    on_epoch_end: Optional[Callable[[int, float], Any]] = None

    debug: bool = False
    silent: bool = False

    """seconds to pause before each epoch in Trainer.train_async"""
    epoch_delay: float = 0.0

    """raise NumericAnomaly instead of writing non-finite weights"""
    check_finite: bool = True

    def samples(self) -> List[TrainingSample]:
        return [as_sample(sample) for sample in self.training_set]

    def validate(self):
        if self.epochs < 1:
            raise ConfigurationError(f"need at least one epoch, got {self.epochs=}")
        if self.iterations < 1:
            raise ConfigurationError(f"need at least one iteration per epoch, got {self.iterations=}")
        if not len(self.training_set):
            raise ConfigurationError("training_set is empty")
