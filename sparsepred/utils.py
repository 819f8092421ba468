"""
utils
==============

Small, reusable utilities shared across sparsepred modules.

This module is intentionally lightweight and focused on:
- device selection (CUDA / MPS / CPU) for torch-backed predictors
- turning numpy / torch values into plain Python values for archives
"""

from __future__ import annotations

from typing import Any

import numpy as np
import torch


def get_device() -> torch.device:
    """
    Return the best available PyTorch device.

    Returns
    -------
    torch.device
        "cuda" if available, else "mps" if available, else "cpu".
    """
    if torch.cuda.is_available():
        return torch.device("cuda")
    if torch.backends.mps.is_available():
        return torch.device("mps")
    return torch.device("cpu")


def to_plain(value: Any) -> Any:
    """
    Convert numpy / torch values into JSON-friendly Python values.

    Arrays and tensors become (nested) lists, numpy scalars become Python
    scalars. Lists, tuples and dict values are converted element-wise.
    Anything else is returned unchanged.
    """
    if isinstance(value, torch.Tensor):
        return value.detach().cpu().tolist()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    return value
