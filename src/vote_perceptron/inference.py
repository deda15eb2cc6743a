"""Prediction helpers for trained perceptrons."""

from __future__ import annotations

from typing import Sequence

import torch
from torch import Tensor, nn

from .data.votes import votes_tensor


@torch.no_grad()
def predict_classes(model: nn.Module, votes: Tensor) -> Tensor:
    """Return the argmax class index for every row of ``votes``."""

    return model(votes).argmax(dim=-1)


def predict(model: nn.Module, votes: Tensor | Sequence[float]) -> int:
    """Classify a single vote row and return the predicted class index."""

    device = next(model.parameters()).device
    if isinstance(votes, Tensor):
        row = votes.to(device=device, dtype=torch.float32)
    else:
        row = votes_tensor(votes, device=device)
    if row.ndim == 1:
        row = row.unsqueeze(0)
    if row.ndim != 2 or row.size(0) != 1:
        raise ValueError("predict expects exactly one vote row")
    was_training = model.training
    model.eval()
    try:
        result = predict_classes(model, row)
    finally:
        model.train(was_training)
    return int(result[0].item())


__all__ = ["predict", "predict_classes"]
