"""Tiny multi-layer perceptron that predicts a binary result from two votes.

The package exposes a small shared API:

- :func:`vote_perceptron.data.build_dataset` builds the fixed train/test split,
- :func:`vote_perceptron.training.train_until_success` retrains from scratch
  until the test split is classified perfectly, and
- :func:`vote_perceptron.inference.predict` classifies one unseen vote row.
"""

__all__ = [
    "data",
    "inference",
    "models",
    "training",
    "utils",
]
