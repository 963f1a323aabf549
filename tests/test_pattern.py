import numpy as np
import pytest

from polytrack.labeling import Point
from polytrack.pattern import ColorSpaceModel, Pattern, load_pattern


def _write(tmp_path, text):
    path = tmp_path / "conf.maha"
    path.write_text(text)
    return path


def test_load_pattern_reads_samples(tmp_path):
    path = _write(
        tmp_path,
        "# training samples\n2\n# x y r g b\n10 20 1.0 2.0 3.0\n30 40 4.5 5.5 6.5\n",
    )
    pattern = load_pattern(path)
    assert pattern.size() == 2
    assert pattern.dim() == 3
    assert pattern.coordinates == [Point(10, 20), Point(30, 40)]
    np.testing.assert_array_equal(pattern.data, [[1.0, 2.0, 3.0], [4.5, 5.5, 6.5]])


def test_load_pattern_default_color_model(tmp_path):
    pattern = load_pattern(_write(tmp_path, "1\n0 0 1 2 3\n"))
    assert pattern.color_model is ColorSpaceModel.RGB
    assert len(pattern) == 1


def test_load_pattern_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pattern(tmp_path / "absent.maha")


def test_load_pattern_zero_patterns(tmp_path):
    with pytest.raises(ValueError):
        load_pattern(_write(tmp_path, "# nothing\n0\n"))


def test_load_pattern_truncated(tmp_path):
    with pytest.raises(ValueError):
        load_pattern(_write(tmp_path, "3\n1 2 3 4 5\n"))


def test_load_pattern_malformed_entry(tmp_path):
    with pytest.raises(ValueError):
        load_pattern(_write(tmp_path, "1\n1 two 3 4 5\n"))


def test_pattern_accepts_tuples_as_coordinates():
    pattern = Pattern([(1, 2), (3, 4)], [[0.5, 0.5, 0.5], [1, 1, 1]])
    assert pattern.coordinates[1] == Point(3, 4)
    assert pattern.data.shape == (2, 3)


def test_pattern_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Pattern([(1, 2)], [[1, 2, 3], [4, 5, 6]])