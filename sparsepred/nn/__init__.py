"""Torch-backed scalar predictors."""

from sparsepred.nn.linear import LinearModel, TorchLinearPredictor

__all__ = ["LinearModel", "TorchLinearPredictor"]
