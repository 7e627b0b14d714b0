"""
Tests for nn_feature_select.dataset
"""

import numpy as np
import pytest

from nn_feature_select import DatasetFormatError, load_dataset, normalize
from nn_feature_select.dataset import parse_lines


SAMPLE = """\
2.0000000e+00  1.0000000e+00  4.0000000e+00
1.0000000e+00  3.0000000e+00  -2.0000000e+00

1.0000000e+00  5.0000000e+00  0.0000000e+00
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write(tmp_path, text, name="data.txt"):
    path = tmp_path / name
    path.write_text(text)
    return path


# ---------------------------------------------------------------------------
# Tests: parsing
# ---------------------------------------------------------------------------

class TestParseLines:
    def test_scientific_notation(self):
        X, y = parse_lines(SAMPLE.splitlines())
        assert y.tolist() == [2, 1, 1]
        assert X.tolist() == [[1., 4.], [3., -2.], [5., 0.]]

    def test_labels_are_integers(self):
        _, y = parse_lines(["1 0.5", "2 0.1"])
        assert y.dtype.kind == "i"

    def test_blank_lines_ignored(self):
        X, _ = parse_lines(["", "1 2 3", "   ", "2 4 5", ""])
        assert X.shape == (2, 2)

    def test_ragged_rows_raise(self):
        with pytest.raises(DatasetFormatError, match="line 2: expected 2 features"):
            parse_lines(["1 2 3", "2 4"])

    def test_non_integer_label_raises(self):
        with pytest.raises(DatasetFormatError, match="not an integer"):
            parse_lines(["1.5 2 3"])

    def test_non_numeric_token_raises(self):
        with pytest.raises(DatasetFormatError, match="line 1"):
            parse_lines(["1 abc 3"])

    def test_label_without_features_raises(self):
        with pytest.raises(DatasetFormatError, match="no feature values"):
            parse_lines(["1"])

    @pytest.mark.parametrize("token", ["nan", "inf", "-inf", "NaN"])
    def test_non_finite_value_raises(self, token):
        with pytest.raises(DatasetFormatError, match="line 1: non-finite value"):
            parse_lines([f"1 {token} 0", "1 0 0", "2 5 5"])

    def test_non_finite_label_raises(self):
        with pytest.raises(DatasetFormatError, match="line 2: non-finite value"):
            parse_lines(["1 0 0", "inf 1 1"])

    def test_empty_input_raises(self):
        with pytest.raises(DatasetFormatError, match="no instances"):
            parse_lines(["", "  "])

    def test_format_error_is_value_error(self):
        assert issubclass(DatasetFormatError, ValueError)


# ---------------------------------------------------------------------------
# Tests: normalization
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_zscore(self):
        rng = np.random.default_rng(0)
        X = rng.normal(5, 3, size=(50, 3))
        Z = normalize(X, "zscore")
        assert np.allclose(Z.mean(axis=0), 0.0)
        assert np.allclose(Z.std(axis=0), 1.0)

    def test_minmax(self):
        rng = np.random.default_rng(1)
        X = rng.normal(5, 3, size=(50, 3))
        M = normalize(X, "minmax")
        assert np.allclose(M.min(axis=0), 0.0)
        assert np.allclose(M.max(axis=0), 1.0)

    def test_none_returns_copy(self):
        X = np.array([[1., 2.], [3., 4.]])
        out = normalize(X, "none")
        assert np.array_equal(out, X)
        assert out is not X

    def test_constant_column_has_no_nans(self):
        X = np.array([[1., 7.], [2., 7.], [3., 7.]])
        for strategy in ("zscore", "minmax"):
            out = normalize(X, strategy)
            assert not np.isnan(out).any()
            assert np.allclose(out[:, 1], 0.0)

    def test_unknown_strategy_raises(self):
        with pytest.raises(ValueError, match="normalization"):
            normalize(np.zeros((2, 2)), "log")


# ---------------------------------------------------------------------------
# Tests: load_dataset
# ---------------------------------------------------------------------------

class TestLoadDataset:
    def test_load_raw(self, tmp_path):
        X, y = load_dataset(write(tmp_path, SAMPLE), normalization="none")
        assert X.shape == (3, 2)
        assert y.tolist() == [2, 1, 1]

    def test_load_zscore_default(self, tmp_path):
        X, _ = load_dataset(write(tmp_path, SAMPLE))
        assert np.allclose(X.mean(axis=0), 0.0)

    def test_arrays_read_only(self, tmp_path):
        X, y = load_dataset(write(tmp_path, SAMPLE))
        assert not X.flags.writeable
        assert not y.flags.writeable
        with pytest.raises(ValueError):
            X[0, 0] = 1.0

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope.txt")

    def test_unknown_normalization_raises(self, tmp_path):
        with pytest.raises(ValueError, match="normalization"):
            load_dataset(write(tmp_path, SAMPLE), normalization="rank")

    def test_non_utf8_file_raises_format_error(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"2 \xff 1\n")
        with pytest.raises(DatasetFormatError, match="not a UTF-8 text file"):
            load_dataset(path)
