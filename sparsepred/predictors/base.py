"""Structural contract shared by predictors that can be decorated."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from sparsepred.archiving import Archiver, Unarchiver


@runtime_checkable
class ScalarPredictor(Protocol):
    """
    A predictor returning a single number per data vector.

    Implementations may also declare a ``data_vector_type`` class attribute
    naming the type of data vector they expect.
    """

    def predict(self, data_vector: Any) -> float:
        ...

    def write_to_archive(self, archiver: Archiver) -> None:
        ...

    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        ...
