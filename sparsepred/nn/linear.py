"""
Torch-backed linear scorer.

``TorchLinearPredictor`` holds a single-output ``nn.Linear`` and exposes the
same scalar-predictor contract as ``sparsepred.predictors.LinearPredictor``,
so it can be wrapped by ``SignPredictor`` and persisted through an
``Archiver``. Scoring runs under ``torch.no_grad()`` and returns a Python
float.

Archive fields
--------------
- ``input_dim`` : int
- ``weight``    : list of ``input_dim`` floats
- ``bias``      : float
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

import torch
import torch.nn as nn

from sparsepred.archiving import Archiver, IArchivable, Unarchiver
from sparsepred.utils import get_device

logger = logging.getLogger(__name__)


class LinearModel(nn.Module):
    """Single-output linear layer."""
    def __init__(self, d: int):
        super().__init__()
        self.linear = nn.Linear(d, 1)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.linear(x).squeeze(-1)


class TorchLinearPredictor(IArchivable):
    """
    Scalar predictor backed by a torch ``LinearModel``.

    Parameters
    ----------
    input_dim : int, optional
        Dimension of the data vectors. If None, the predictor stays
        uninitialized until ``read_from_archive`` is called.
    device : str or torch.device, optional
        Device for the model. Defaults to ``get_device()``.
    """

    data_vector_type = torch.Tensor

    def __init__(
        self,
        input_dim: Optional[int] = None,
        device: Optional[Union[str, torch.device]] = None,
    ) -> None:
        self.device = torch.device(device) if device is not None else get_device()
        self.model: Optional[LinearModel] = None
        if input_dim is not None:
            self.model = self._new_model(input_dim)

    def _new_model(self, input_dim: int) -> LinearModel:
        if input_dim <= 0:
            raise ValueError(f"input_dim must be > 0, got {input_dim}.")
        model = LinearModel(input_dim).to(self.device)
        model.eval()
        return model

    @property
    def input_dim(self) -> Optional[int]:
        return None if self.model is None else self.model.linear.in_features

    # ------------------------------------------------------------------

    def predict(self, data_vector: Any) -> float:
        """
        Score a single 1-D data vector.

        Raises
        ------
        ValueError
            If the predictor is uninitialized or the vector has the wrong shape.
        """
        if self.model is None:
            raise ValueError("TorchLinearPredictor is not initialized (no input_dim).")

        x = torch.as_tensor(data_vector, dtype=torch.float32, device=self.device)
        if x.shape != (self.input_dim,):
            raise ValueError(f"Expected a vector of shape ({self.input_dim},), got {tuple(x.shape)}.")

        with torch.no_grad():
            return self.model(x).item()

    # ------------------------------------------------------------------

    def write_to_archive(self, archiver: Archiver) -> None:
        if self.model is None:
            raise ValueError("Cannot archive an uninitialized TorchLinearPredictor.")
        archiver["input_dim"] = self.input_dim
        archiver["weight"] = self.model.linear.weight.view(-1)
        archiver["bias"] = self.model.linear.bias.item()

    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        # Load into a fresh model; self.model is only replaced on success.
        model = self._new_model(int(unarchiver["input_dim"]))
        weight = torch.as_tensor(unarchiver["weight"], dtype=torch.float32)
        bias = torch.as_tensor([unarchiver["bias"]], dtype=torch.float32)
        model.linear.load_state_dict({"weight": weight.view(1, -1), "bias": bias})
        self.model = model
        logger.debug("TorchLinearPredictor restored with input_dim=%d", self.input_dim)

