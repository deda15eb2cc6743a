"""Three-layer perceptron mapping two votes to result logits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from torch import Tensor, nn
from torch.nn import functional as F


@dataclass(slots=True)
class MultiLevelPerceptronConfig:
    """Configuration for :class:`MultiLevelPerceptron`.

    Parameters
    ----------
    input_dim:
        Number of vote features per row.
    hidden_dims:
        Widths of the two hidden layers.
    num_results:
        Number of result classes. The output layer is sized
        ``num_results + 1`` so that every label index up to and including
        ``num_results`` has a logit.
    """

    input_dim: int = 2
    hidden_dims: Tuple[int, int] = (4, 2)
    num_results: int = 1

    def __post_init__(self) -> None:
        if self.input_dim <= 0:
            raise ValueError("input_dim must be positive")
        if len(self.hidden_dims) != 2:
            raise ValueError("hidden_dims must contain exactly two widths")
        if any(width <= 0 for width in self.hidden_dims):
            raise ValueError("hidden_dims entries must be positive")
        if self.num_results <= 0:
            raise ValueError("num_results must be positive")

    @property
    def output_dim(self) -> int:
        return self.num_results + 1


class MultiLevelPerceptron(nn.Module):
    """Linear -> ReLU -> Linear -> ReLU -> Linear classifier."""

    def __init__(
        self,
        input_dim: int = 2,
        *,
        hidden_dims: Sequence[int] = (4, 2),
        num_results: int = 1,
    ) -> None:
        super().__init__()
        config = MultiLevelPerceptronConfig(
            input_dim=input_dim,
            hidden_dims=tuple(hidden_dims),
            num_results=num_results,
        )
        self.input_dim = config.input_dim
        self.output_dim = config.output_dim
        hidden1, hidden2 = config.hidden_dims
        self.ln1 = nn.Linear(config.input_dim, hidden1)
        self.ln2 = nn.Linear(hidden1, hidden2)
        self.ln3 = nn.Linear(hidden2, config.output_dim)

    @classmethod
    def from_config(cls, config: MultiLevelPerceptronConfig) -> "MultiLevelPerceptron":
        return cls(
            config.input_dim,
            hidden_dims=config.hidden_dims,
            num_results=config.num_results,
        )

    def forward(self, votes: Tensor) -> Tensor:
        """Return unnormalised logits of shape ``(rows, output_dim)``."""

        if votes.ndim != 2 or votes.size(-1) != self.input_dim:
            raise ValueError(f"votes must have shape (rows, {self.input_dim})")
        hidden = F.relu(self.ln1(votes))
        hidden = F.relu(self.ln2(hidden))
        return self.ln3(hidden)


__all__ = ["MultiLevelPerceptron", "MultiLevelPerceptronConfig"]
