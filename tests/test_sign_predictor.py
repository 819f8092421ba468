import copy

import numpy as np
import pytest

from sparsepred.archiving import Archiver, Unarchiver
from sparsepred.predictors import (
    LinearPredictor,
    ScalarPredictor,
    SignConvention,
    SignPredictor,
    make_sign_predictor,
)


class ConstantPredictor:
    """Inner predictor returning a fixed score, whatever the input."""

    data_vector_type = list

    def __init__(self, score: float = 0.0):
        self.score = score
        self.calls = []

    def predict(self, data_vector):
        self.calls.append(data_vector)
        return self.score

    def write_to_archive(self, archiver):
        archiver["score"] = self.score

    def read_from_archive(self, unarchiver):
        self.score = unarchiver["score"]


class FailingPredictor(ConstantPredictor):
    def predict(self, data_vector):
        raise RuntimeError("inner failure")


def test_negative_score_is_false():
    assert make_sign_predictor(ConstantPredictor(-2.5)).predict([1.0]) is False


def test_positive_score_is_true():
    assert make_sign_predictor(ConstantPredictor(0.1)).predict([1.0]) is True


@pytest.mark.parametrize(
    "convention, expected",
    [
        (SignConvention.ZERO_IS_POSITIVE, True),
        (SignConvention.ZERO_IS_NEGATIVE, False),
    ],
)
def test_zero_score_follows_convention(convention, expected):
    sp = make_sign_predictor(ConstantPredictor(0.0), convention=convention)
    assert sp.predict([1.0]) is expected


def test_default_convention_treats_zero_as_positive():
    assert SignPredictor(ConstantPredictor(0.0)).predict([]) is True


def test_input_is_forwarded_to_inner_predictor():
    inner = ConstantPredictor(1.0)
    sp = SignPredictor(inner)
    x = [0.0, 3.0]
    sp.predict(x)
    assert sp.predictor.calls == [x]


@pytest.mark.parametrize("score", [-3.0, -1e-12, 0.0, 1e-12, 7.0])
def test_matches_sign_of_inner_prediction(score):
    inner = ConstantPredictor(score)
    for convention in SignConvention:
        sp = SignPredictor(inner, convention=convention)
        expected = score >= 0 if convention is SignConvention.ZERO_IS_POSITIVE else score > 0
        assert sp.predict([]) == expected


def test_scalar_types_from_numpy():
    assert SignPredictor(ConstantPredictor(np.float32(-1.0))).predict([]) is False
    assert SignPredictor(ConstantPredictor(np.array(2.0))).predict([]) is True


def test_inner_failures_propagate():
    sp = SignPredictor(FailingPredictor())
    with pytest.raises(RuntimeError, match="inner failure"):
        sp.predict([1.0])


def test_default_construction_from_type():
    sp = SignPredictor(predictor_type=LinearPredictor)
    assert isinstance(sp.predictor, LinearPredictor)
    assert sp.predictor.size == 0
    assert sp.predict([]) is True


def test_construction_requires_predictor_or_type():
    with pytest.raises(ValueError):
        SignPredictor()


def test_data_vector_type():
    assert SignPredictor(ConstantPredictor()).data_vector_type is list
    assert SignPredictor(LinearPredictor()).data_vector_type is np.ndarray


def test_predictor_accessor_allows_mutation():
    sp = SignPredictor(LinearPredictor([1.0], bias=0.0))
    assert sp.predict([-1.0]) is False
    sp.predictor.bias = 2.0
    assert sp.predict([-1.0]) is True


def test_copies_do_not_share_inner_predictor():
    sp = SignPredictor(LinearPredictor([1.0]), convention=SignConvention.ZERO_IS_NEGATIVE)
    for clone in (sp.copy(), copy.copy(sp), copy.deepcopy(sp)):
        assert clone.predictor is not sp.predictor
        assert clone.convention is SignConvention.ZERO_IS_NEGATIVE
        clone.predictor.bias = -10.0
        assert sp.predictor.bias == 0.0


def test_inner_predictors_satisfy_protocol():
    assert isinstance(ConstantPredictor(), ScalarPredictor)
    assert isinstance(LinearPredictor(), ScalarPredictor)


def test_archive_round_trip():
    original = make_sign_predictor(LinearPredictor([0.5, -1.0, 2.0], bias=-0.25))
    archiver = Archiver()
    original.write_to_archive(archiver)

    restored = SignPredictor(predictor_type=LinearPredictor)
    restored.read_from_archive(Unarchiver.from_json(archiver.to_json()))

    rng = np.random.default_rng(0)
    for _ in range(50):
        x = rng.normal(size=3)
        x[rng.integers(0, 3)] = 0.0
        assert restored.predict(x) == original.predict(x)


def test_archive_is_inner_archive():
    sp = SignPredictor(ConstantPredictor(4.0))
    archiver = Archiver()
    sp.write_to_archive(archiver)
    assert archiver.to_dict() == {"score": 4.0}


def test_copy_keeps_subclass():
    class NamedSignPredictor(SignPredictor):
        pass

    sp = NamedSignPredictor(ConstantPredictor(1.0))
    for clone in (sp.copy(), copy.copy(sp)):
        assert type(clone) is NamedSignPredictor
        assert clone.predictor is not sp.predictor
