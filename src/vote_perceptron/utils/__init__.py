"""Utility helpers for the vote perceptron."""

from .device import resolve_device

__all__ = ["resolve_device"]
