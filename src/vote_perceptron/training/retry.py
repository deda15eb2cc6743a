"""Retry training from scratch until the perceptron reaches its accuracy target."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

import torch
from torch import nn

from ..data.votes import VoteDataset
from ..models.perceptron import MultiLevelPerceptronConfig
from .trainer import InsufficientlyTrainedError, TrainingConfig, TrainingHistory, train_attempt


class TrainingBudgetExhaustedError(RuntimeError):
    """Raised when no attempt reached the target within the retry budget."""

    def __init__(self, attempts: int, last_error: Optional[InsufficientlyTrainedError] = None) -> None:
        super().__init__(f"Target accuracy not reached after {attempts} attempt(s)")
        self.attempts = attempts
        self.last_error = last_error


@dataclass(slots=True)
class RetryConfig:
    """Budget for :func:`train_with_retries`.

    ``max_attempts=None`` retries forever. ``timeout`` is measured in seconds of
    wall-clock time and is checked before each new attempt.
    """

    max_attempts: Optional[int] = 100
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts <= 0:
            raise ValueError("max_attempts must be positive or None")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive or None")


@dataclass(slots=True)
class TrainingOutcome:
    model: nn.Module
    history: TrainingHistory
    attempts: int


def train_with_retries(
    dataset: VoteDataset,
    *,
    config: Optional[TrainingConfig] = None,
    model_config: Optional[MultiLevelPerceptronConfig] = None,
    retry: Optional[RetryConfig] = None,
    device: Optional[torch.device | str] = None,
    seed: Optional[int] = None,
    verbose: bool = True,
    log_wandb: bool = False,
    model_factory: Optional[Callable[[], nn.Module]] = None,
) -> TrainingOutcome:
    """Discard failed attempts and retrain from a fresh initialisation.

    Only :class:`InsufficientlyTrainedError` is retried; any other exception
    aborts immediately.
    """

    retry = retry or RetryConfig()
    if seed is not None:
        torch.manual_seed(seed)
    deadline = None if retry.timeout is None else time.monotonic() + retry.timeout
    attempts = 0
    last_error: Optional[InsufficientlyTrainedError] = None

    while retry.max_attempts is None or attempts < retry.max_attempts:
        if deadline is not None and attempts > 0 and time.monotonic() >= deadline:
            break
        attempts += 1
        if verbose:
            print("Trying to train neural network.")
        try:
            trainer = train_attempt(
                dataset,
                config=config,
                model_config=model_config,
                device=device,
                verbose=verbose,
                log_wandb=log_wandb,
                model_factory=model_factory,
                attempt=attempts,
            )
        except InsufficientlyTrainedError as exc:
            last_error = exc
            if verbose:
                print(f"Error: {exc}")
            continue
        return TrainingOutcome(model=trainer.model, history=trainer.history, attempts=attempts)

    raise TrainingBudgetExhaustedError(attempts, last_error)


def train_until_success(dataset: VoteDataset, **kwargs) -> nn.Module:
    """Return the first model that reaches the target test accuracy."""

    return train_with_retries(dataset, **kwargs).model


__all__ = [
    "RetryConfig",
    "TrainingBudgetExhaustedError",
    "TrainingOutcome",
    "train_until_success",
    "train_with_retries",
]
