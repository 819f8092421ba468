import numpy as np
import pytest
import torch

from sparsepred.archiving import Archiver, Unarchiver, archive_object, restore_object
from sparsepred.exceptions import ArchiveError
from sparsepred.predictors import LinearPredictor, SignPredictor


def test_archiver_converts_arrays_and_tensors():
    archiver = Archiver()
    archiver["a"] = np.array([1.0, 2.0])
    archiver["t"] = torch.tensor([3.0, 4.0])
    archiver["s"] = np.float64(0.5)
    archiver.archive("name", "linear")
    assert archiver.to_dict() == {"a": [1.0, 2.0], "t": [3.0, 4.0], "s": 0.5, "name": "linear"}
    assert "a" in archiver
    assert len(archiver) == 4


def test_missing_field_raises():
    unarchiver = Unarchiver({"x": 1})
    assert unarchiver["x"] == 1
    assert unarchiver.unarchive("y", default=None) is None
    with pytest.raises(ArchiveError):
        unarchiver["y"]
    with pytest.raises(KeyError):
        unarchiver.unarchive("y")


def test_unarchiver_rejects_non_dict():
    with pytest.raises(ValueError):
        Unarchiver([1, 2, 3])


def test_nested_objects():
    inner = LinearPredictor([1.0, -1.0], bias=0.5)
    archiver = Archiver()
    archiver["model"] = inner
    archiver["version"] = 1

    unarchiver = Unarchiver.from_json(archiver.to_json())
    restored = unarchiver.unarchive_object("model", LinearPredictor())
    np.testing.assert_allclose(restored.weights, [1.0, -1.0])
    assert restored.bias == 0.5
    assert unarchiver["version"] == 1


def test_save_and_load(tmp_path):
    path = tmp_path / "predictor.json"
    archiver = Archiver()
    LinearPredictor([2.0, 0.0, 1.0], bias=-1.0).write_to_archive(archiver)
    archiver.save(path)

    restored = LinearPredictor()
    restored.read_from_archive(Unarchiver.load(path))
    assert restored.predict([1.0, 5.0, 1.0]) == pytest.approx(2.0)


def test_sign_predictor_adds_no_fields():
    inner = LinearPredictor([1.0, 2.0], bias=3.0)
    assert archive_object(SignPredictor(inner)) == archive_object(inner)


def test_restore_object_helper():
    fields = archive_object(LinearPredictor([4.0]))
    restored = restore_object(LinearPredictor(), fields)
    assert restored.predict([0.5]) == pytest.approx(2.0)


def test_dict_values_with_numpy_scalars_serialize():
    archiver = Archiver()
    archiver.archive("m", {"a": np.float32(1.0), "b": np.array([1, 2])})
    assert Unarchiver.from_json(archiver.to_json())["m"] == {"a": 1.0, "b": [1, 2]}
