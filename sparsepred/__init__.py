"""
sparsepred: sparse index/value iteration and sign-transform predictors.

Building blocks shared by sparse-vector and composed-predictor types:
an iterator that walks a dense vector and exposes only its non-zero
(index, value) pairs, and a decorator that turns any scalar predictor
into a boolean one while passing persistence through to it.
"""

from sparsepred.archiving import Archiver, IArchivable, Unarchiver
from sparsepred.exceptions import (
    ArchiveError,
    InvalidRangeError,
    IteratorExhaustedError,
    SparsepredError,
)
from sparsepred.iterators import (
    IndexValue,
    IndexValueIterator,
    make_vector_index_value_iterator,
)
from sparsepred.predictors import (
    LinearPredictor,
    ScalarPredictor,
    SignConvention,
    SignPredictor,
    make_sign_predictor,
)

__version__ = "0.1.0"

__all__ = [
    "Archiver",
    "ArchiveError",
    "IArchivable",
    "IndexValue",
    "IndexValueIterator",
    "InvalidRangeError",
    "IteratorExhaustedError",
    "LinearPredictor",
    "ScalarPredictor",
    "SignConvention",
    "SignPredictor",
    "SparsepredError",
    "Unarchiver",
    "make_sign_predictor",
    "make_vector_index_value_iterator",
]
