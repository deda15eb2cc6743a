"""Model definitions for the vote perceptron."""

from .perceptron import MultiLevelPerceptron, MultiLevelPerceptronConfig

__all__ = ["MultiLevelPerceptron", "MultiLevelPerceptronConfig"]
