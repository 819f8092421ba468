"""
Sign predictor: turn a scalar predictor into a boolean one.

``SignPredictor`` wraps (owns) exactly one inner predictor. Predictions are
forwarded to it and reduced to their sign bit; persistence is forwarded
unchanged, so an archived ``SignPredictor`` is field-for-field identical to
its archived inner predictor.

---------------------------------------------------------------------
Sign convention
---------------------------------------------------------------------
The only choice the decorator makes is what to do with a score of exactly
zero:

- ``SignConvention.ZERO_IS_POSITIVE`` (default): ``score >= 0`` -> True
- ``SignConvention.ZERO_IS_NEGATIVE``:           ``score > 0``  -> True

The convention is fixed at construction and is not written to archives.
"""

from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Any, Generic, Optional, Type, TypeVar

from sparsepred.archiving import Archiver, IArchivable, Unarchiver
from sparsepred.predictors.base import ScalarPredictor

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=ScalarPredictor)


class SignConvention(Enum):
    """How a score of exactly zero is mapped to a boolean."""

    ZERO_IS_POSITIVE = "zero_is_positive"
    ZERO_IS_NEGATIVE = "zero_is_negative"

    def apply(self, score: float) -> bool:
        if self is SignConvention.ZERO_IS_POSITIVE:
            return score >= 0
        return score > 0


class SignPredictor(IArchivable, Generic[P]):
    """
    Boolean predictor exposing the sign bit of an inner scalar predictor.

    Parameters
    ----------
    predictor : P, optional
        Inner predictor. The decorator takes ownership of it: callers should
        not keep mutating the instance they passed in.
    predictor_type : type, optional
        Used when ``predictor`` is omitted: the inner predictor is then
        built with ``predictor_type()``. This is typically followed by
        ``read_from_archive``.
    convention : SignConvention, optional
        Treatment of a zero score. Default is ``ZERO_IS_POSITIVE``.

    Raises
    ------
    ValueError
        If neither ``predictor`` nor ``predictor_type`` is given.
    """

    def __init__(
        self,
        predictor: Optional[P] = None,
        *,
        predictor_type: Optional[Type[P]] = None,
        convention: SignConvention = SignConvention.ZERO_IS_POSITIVE,
    ) -> None:
        if predictor is None:
            if predictor_type is None:
                raise ValueError("Either predictor or predictor_type must be provided.")
            predictor = predictor_type()
        self._predictor: P = predictor
        self._convention = SignConvention(convention)

    # ------------------------------------------------------------------

    @property
    def predictor(self) -> P:
        """The owned inner predictor."""
        return self._predictor

    @property
    def convention(self) -> SignConvention:
        return self._convention

    @property
    def data_vector_type(self) -> Optional[type]:
        """Type of data vector expected by the inner predictor, if it declares one."""
        return getattr(type(self._predictor), "data_vector_type", None)

    def predict(self, data_vector: Any) -> bool:
        """
        Return the sign bit of the inner prediction for ``data_vector``.

        Exceptions raised by the inner predictor propagate unchanged.
        """
        return self._convention.apply(float(self._predictor.predict(data_vector)))

    # ------------------------------------------------------------------
    # Persistence: pure delegation, no fields of our own.

    def write_to_archive(self, archiver: Archiver) -> None:
        self._predictor.write_to_archive(archiver)

    def read_from_archive(self, unarchiver: Unarchiver) -> None:
        self._predictor.read_from_archive(unarchiver)
        logger.debug("Restored %s inner predictor", type(self._predictor).__name__)

    # ------------------------------------------------------------------
    # Copies own their inner predictor.

    def copy(self) -> SignPredictor[P]:
        return type(self)(copy.deepcopy(self._predictor), convention=self._convention)

    def __copy__(self) -> SignPredictor[P]:
        return self.copy()

    def __repr__(self) -> str:
        return f"SignPredictor({self._predictor!r}, convention={self._convention.name})"


def make_sign_predictor(
    predictor: P,
    convention: SignConvention = SignConvention.ZERO_IS_POSITIVE,
) -> SignPredictor[P]:
    """
    Wrap ``predictor`` in a ``SignPredictor``.

    Parameters
    ----------
    predictor : P
        Inner scalar predictor.
    convention : SignConvention, optional
        Treatment of a zero score.

    Returns
    -------
    SignPredictor
    """
    return SignPredictor(predictor, convention=convention)
