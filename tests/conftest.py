import pytest

torch = pytest.importorskip("torch")
from torch import nn


def _fixed_linear(weight, bias) -> nn.Linear:
    layer = nn.Linear(2, 2)
    with torch.no_grad():
        layer.weight.copy_(torch.tensor(weight, dtype=torch.float32))
        layer.bias.copy_(torch.tensor(bias, dtype=torch.float32))
    return layer


def make_oracle() -> nn.Linear:
    """Predict result 1 exactly when the first vote beats the second."""

    return _fixed_linear([[0.0, 1.0], [1.0, 0.0]], [0.0, 0.0])


def make_inverted() -> nn.Linear:
    """Predict the opposite of :func:`make_oracle` on every literal row."""

    return _fixed_linear([[1.0, 0.0], [0.0, 1.0]], [0.0, 0.0])


def make_constant_zero() -> nn.Linear:
    return _fixed_linear([[0.0, 0.0], [0.0, 0.0]], [1.0, 0.0])


@pytest.fixture
def oracle_factory():
    return make_oracle


@pytest.fixture
def inverted_factory():
    return make_inverted


@pytest.fixture
def constant_zero_factory():
    return make_constant_zero
