"""Predictors: a sparse-aware linear scorer and the sign decorator."""

from sparsepred.predictors.base import ScalarPredictor
from sparsepred.predictors.linear import LinearPredictor
from sparsepred.predictors.sign import SignConvention, SignPredictor, make_sign_predictor

__all__ = [
    "LinearPredictor",
    "ScalarPredictor",
    "SignConvention",
    "SignPredictor",
    "make_sign_predictor",
]
