"""Single-attempt training loop for the vote perceptron."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import torch
from torch import nn
from torch.nn import functional as F

from ..data.votes import VoteDataset
from ..inference import predict_classes
from ..models.perceptron import MultiLevelPerceptron, MultiLevelPerceptronConfig
from ..utils.device import resolve_device

try:  # pragma: no cover - optional dependency
    import wandb
except Exception:  # pragma: no cover - fallback when wandb is unavailable
    wandb = None  # type: ignore


class InsufficientlyTrainedError(RuntimeError):
    """Raised when an attempt ends below the target test accuracy."""

    def __init__(
        self,
        message: str = "The model is not trained well enough.",
        *,
        accuracy: float = 0.0,
    ) -> None:
        super().__init__(message)
        self.accuracy = accuracy


@dataclass(slots=True)
class TrainingConfig:
    """Hyperparameters for one training attempt.

    Parameters
    ----------
    epochs:
        Maximum number of full-batch epochs per attempt.
    learning_rate:
        Step size used by stochastic gradient descent.
    target_accuracy:
        Test accuracy, in percent, that ends an attempt successfully. Training
        stops at the first epoch whose accuracy is at least this value.
    """

    epochs: int = 10
    learning_rate: float = 0.05
    target_accuracy: float = 100.0

    def __post_init__(self) -> None:
        if self.epochs <= 0:
            raise ValueError("epochs must be positive")
        if self.learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        if not 0.0 < self.target_accuracy <= 100.0:
            raise ValueError("target_accuracy must lie in (0, 100]")


@dataclass(slots=True)
class EpochMetrics:
    epoch: int
    loss: float
    accuracy: float


@dataclass(slots=True)
class TrainingHistory:
    """Metrics collected during :meth:`PerceptronTrainer.train`."""

    epochs: List[EpochMetrics] = field(default_factory=list)

    @property
    def final_accuracy(self) -> float:
        if not self.epochs:
            return 0.0
        return self.epochs[-1].accuracy


def format_progress(metrics: EpochMetrics) -> str:
    return (
        f"Epoch: {metrics.epoch:3d} Train loss: {metrics.loss:8.5f} "
        f"Test accuracy: {metrics.accuracy:5.2f}%"
    )


class PerceptronTrainer:
    """Full-batch SGD loop that stops once the test set is classified perfectly."""

    def __init__(
        self,
        model: nn.Module,
        *,
        optimizer: torch.optim.Optimizer,
        dataset: VoteDataset,
        config: Optional[TrainingConfig] = None,
        device: Optional[torch.device | str] = None,
        verbose: bool = True,
        log_wandb: bool = False,
    ) -> None:
        self.device = resolve_device(device)
        self.model = model.to(self.device)
        self.optimizer = optimizer
        self.dataset = dataset.to(self.device)
        self.config = config or TrainingConfig()
        self.verbose = verbose
        self.log_wandb = log_wandb and wandb is not None
        self.history = TrainingHistory()

    def train_step(self) -> float:
        """Run one epoch over the training split and return its loss."""

        self.model.train()
        logits = self.model(self.dataset.train_votes)
        log_probs = F.log_softmax(logits, dim=-1)
        loss = F.nll_loss(log_probs, self.dataset.train_results)
        self.optimizer.zero_grad()
        loss.backward()
        self.optimizer.step()
        return float(loss.detach())

    @torch.no_grad()
    def evaluate(self) -> float:
        """Return test accuracy as a percentage."""

        self.model.eval()
        predicted = predict_classes(self.model, self.dataset.test_votes)
        correct = int((predicted == self.dataset.test_results).sum().item())
        return 100.0 * correct / self.dataset.num_test

    def train(self, attempt: Optional[int] = None) -> nn.Module:
        """Train until the target accuracy is hit or the epoch budget runs out."""

        self.history = TrainingHistory()
        for epoch in range(1, self.config.epochs + 1):
            loss = self.train_step()
            accuracy = self.evaluate()
            metrics = EpochMetrics(epoch=epoch, loss=loss, accuracy=accuracy)
            self.history.epochs.append(metrics)
            if self.verbose:
                print(format_progress(metrics))
            if self.log_wandb:
                wandb.log(
                    {
                        "train/loss": loss,
                        "test/accuracy": accuracy,
                        "epoch": epoch,
                        "attempt": attempt or 1,
                    }
                )
            if accuracy >= self.config.target_accuracy:
                break

        final_accuracy = self.history.final_accuracy
        if final_accuracy < self.config.target_accuracy:
            raise InsufficientlyTrainedError(accuracy=final_accuracy)
        return self.model


def train_attempt(
    dataset: VoteDataset,
    *,
    config: Optional[TrainingConfig] = None,
    model_config: Optional[MultiLevelPerceptronConfig] = None,
    device: Optional[torch.device | str] = None,
    verbose: bool = True,
    log_wandb: bool = False,
    model_factory: Optional[Callable[[], nn.Module]] = None,
    attempt: Optional[int] = None,
) -> PerceptronTrainer:
    """Train a freshly initialised model once.

    Returns the trainer so callers can inspect both the model and its history.
    Raises :class:`InsufficientlyTrainedError` when the attempt fails.
    """

    config = config or TrainingConfig()
    if model_factory is not None:
        model = model_factory()
    else:
        model = MultiLevelPerceptron.from_config(model_config or MultiLevelPerceptronConfig())
    optimizer = torch.optim.SGD(model.parameters(), lr=config.learning_rate)
    trainer = PerceptronTrainer(
        model,
        optimizer=optimizer,
        dataset=dataset,
        config=config,
        device=device,
        verbose=verbose,
        log_wandb=log_wandb,
    )
    trainer.train(attempt=attempt)
    return trainer


__all__ = [
    "EpochMetrics",
    "InsufficientlyTrainedError",
    "PerceptronTrainer",
    "TrainingConfig",
    "TrainingHistory",
    "format_progress",
    "train_attempt",
]
