"""Hand-coded vote dataset with train and test splits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import torch
from torch import Tensor

VOTE_DIM = 2

TRAIN_VOTES = (15, 10, 10, 15, 5, 12, 30, 20, 16, 12, 13, 25, 6, 14, 31, 21)
TRAIN_RESULTS = (1, 0, 0, 1, 1, 0, 0, 1)
TEST_VOTES = (13, 9, 8, 14, 3, 10)
TEST_RESULTS = (1, 0, 0)

# Unseen input classified once training succeeds.
REAL_WORLD_VOTES = (13, 22)


def votes_tensor(
    flat: Sequence[float],
    *,
    device: Optional[torch.device | str] = None,
) -> Tensor:
    """Reshape a flat vote buffer into a ``(rows, VOTE_DIM)`` float tensor."""

    if len(flat) == 0 or len(flat) % VOTE_DIM != 0:
        raise ValueError(f"vote buffer length must be a positive multiple of {VOTE_DIM}")
    votes = torch.tensor(list(flat), device=device)
    return votes.reshape(len(flat) // VOTE_DIM, VOTE_DIM).to(torch.float32)


def results_tensor(
    flat: Sequence[int],
    *,
    device: Optional[torch.device | str] = None,
) -> Tensor:
    return torch.tensor(list(flat), dtype=torch.long, device=device)


@dataclass(frozen=True, slots=True)
class VoteDataset:
    """Immutable bundle of train/test votes and their binary results.

    Parameters
    ----------
    train_votes:
        Float tensor of shape ``(n_train, VOTE_DIM)``.
    train_results:
        Integer class indices of shape ``(n_train,)`` with values in ``{0, 1}``.
    test_votes:
        Float tensor of shape ``(n_test, VOTE_DIM)``.
    test_results:
        Integer class indices of shape ``(n_test,)`` with values in ``{0, 1}``.
    """

    train_votes: Tensor
    train_results: Tensor
    test_votes: Tensor
    test_results: Tensor

    def __post_init__(self) -> None:
        _check_split("train", self.train_votes, self.train_results)
        _check_split("test", self.test_votes, self.test_results)

    @property
    def num_train(self) -> int:
        return int(self.train_votes.size(0))

    @property
    def num_test(self) -> int:
        return int(self.test_votes.size(0))

    def to(self, device: torch.device | str) -> "VoteDataset":
        """Return a copy of the dataset with every tensor placed on ``device``."""

        return VoteDataset(
            train_votes=self.train_votes.to(device),
            train_results=self.train_results.to(device),
            test_votes=self.test_votes.to(device),
            test_results=self.test_results.to(device),
        )


def _check_split(name: str, votes: Tensor, results: Tensor) -> None:
    if votes.ndim != 2 or votes.size(1) != VOTE_DIM:
        raise ValueError(f"{name}_votes must have shape (rows, {VOTE_DIM})")
    if results.ndim != 1:
        raise ValueError(f"{name}_results must be one-dimensional")
    if votes.size(0) == 0:
        raise ValueError(f"{name} split must not be empty")
    if votes.size(0) != results.size(0):
        raise ValueError(f"{name}_votes and {name}_results must have the same number of rows")
    if torch.is_floating_point(results):
        raise ValueError(f"{name}_results must hold integer class indices")
    if bool(((results != 0) & (results != 1)).any()):
        raise ValueError(f"{name}_results values must lie in {{0, 1}}")


def build_dataset(device: Optional[torch.device | str] = None) -> VoteDataset:
    """Build the literal vote dataset, optionally placing it on ``device``."""

    return VoteDataset(
        train_votes=votes_tensor(TRAIN_VOTES, device=device),
        train_results=results_tensor(TRAIN_RESULTS, device=device),
        test_votes=votes_tensor(TEST_VOTES, device=device),
        test_results=results_tensor(TEST_RESULTS, device=device),
    )


__all__ = [
    "REAL_WORLD_VOTES",
    "TEST_RESULTS",
    "TEST_VOTES",
    "TRAIN_RESULTS",
    "TRAIN_VOTES",
    "VOTE_DIM",
    "VoteDataset",
    "build_dataset",
    "results_tensor",
    "votes_tensor",
]
