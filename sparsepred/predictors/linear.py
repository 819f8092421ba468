"""
Linear predictor scored over the non-zero entries of its input.

    score(x) = b + Σ_{i : x_i ≠ 0} w_i x_i

The sum runs over ``make_vector_index_value_iterator(x)``, so zero entries
of a dense input cost nothing beyond being skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from sparsepred.archiving import Archiver, IArchivable, Unarchiver
from sparsepred.iterators import make_vector_index_value_iterator

logger = logging.getLogger(__name__)


class LinearPredictor(IArchivable):
    """
    Affine scalar predictor ``w·x + b``.

    Parameters
    ----------
    weights : array-like, optional
        Weight vector ``w``. Defaults to an empty vector.
    bias : float, optional
        Bias term ``b``. Default is 0.0.

    Attributes
    ----------
    data_vector_type : type
        Type of the data vectors this predictor is meant to score.
    """

    data_vector_type = np.ndarray

    def __init__(self, weights: Optional[Sequence[float]] = None, bias: float = 0.0) -> None:
        if weights is None:
            weights = []
        w = np.array(weights, dtype=np.float64)
        if w.ndim != 1:
            raise ValueError(f"weights must be 1-D, got shape {w.shape}.")
        self._weights = w
        self._bias = float(bias)

    # ------------------------------------------------------------------

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def bias(self) -> float:
        return self._bias

    @bias.setter
    def bias(self, value: float) -> None:
        self._bias = float(value)

    @property
    def size(self) -> int:
        return self._weights.shape[0]

    def resize(self, size: int) -> None:
        """Truncate or zero-pad the weight vector to ``size`` entries."""
        if size < 0:
            raise ValueError("size must be >= 0")
        w = np.zeros(size, dtype=np.float64)
        n = min(size, self.size)
        w[:n] = self._weights[:n]
        self._weights = w

    def scale(self, factor: float) -> None:
        """Multiply both the weights and the bias by ``factor``."""
        self._weights *= factor
        self._bias *= factor

    # ------------------------------------------------------------------

    def predict(self, data_vector: Any) -> float:
        """
        Score a dense data vector.

        Parameters
        ----------
        data_vector :
            A 1-D list, numpy array or torch tensor.

        Returns
        -------
        float
            ``b + Σ w_i x_i`` over the non-zero entries of ``data_vector``.

        Raises
        ------
        ValueError
            If a non-zero entry falls beyond the weight vector.
        """
        score = self._bias
        for index, value in make_vector_index_value_iterator(data_vector):
            if index >= self.size:
                raise ValueError(
                    f"Non-zero entry at index {index} but predictor has {self.size} weights."
                )
            score += self._weights[index] * float(value)
        return float(score)

    # ------------------------------------------------------------------

    def write_to_archive(self, archiver: Archiver) -> None:
        archiver["w"] = self._weights
        archiver["b"] = self._bias

    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        w = unarchiver.unarchive_array("w", dtype=np.float64)
        b = float(unarchiver["b"])
        if w.ndim != 1:
            raise ValueError(f"Archived weights must be 1-D, got shape {w.shape}.")
        self._weights = w
        self._bias = b
        logger.debug("LinearPredictor restored with %d weights", self.size)

    def __repr__(self) -> str:
        return f"LinearPredictor(size={self.size}, bias={self._bias})"
