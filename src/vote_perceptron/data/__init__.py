"""Vote datasets used to train and evaluate the perceptron."""

from .votes import REAL_WORLD_VOTES, VOTE_DIM, VoteDataset, build_dataset, votes_tensor

__all__ = ["REAL_WORLD_VOTES", "VOTE_DIM", "VoteDataset", "build_dataset", "votes_tensor"]
