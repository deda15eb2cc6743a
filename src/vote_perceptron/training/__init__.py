"""Training utilities for the vote perceptron."""

from .retry import (
    RetryConfig,
    TrainingBudgetExhaustedError,
    TrainingOutcome,
    train_until_success,
    train_with_retries,
)
from .trainer import (
    EpochMetrics,
    InsufficientlyTrainedError,
    PerceptronTrainer,
    TrainingConfig,
    TrainingHistory,
    train_attempt,
)

__all__ = [
    "EpochMetrics",
    "InsufficientlyTrainedError",
    "PerceptronTrainer",
    "RetryConfig",
    "TrainingBudgetExhaustedError",
    "TrainingConfig",
    "TrainingHistory",
    "TrainingOutcome",
    "train_attempt",
    "train_until_success",
    "train_with_retries",
]
