"""Matrix helpers used to build polynomial Mahalanobis spaces."""

from __future__ import annotations

from itertools import combinations

import numpy as np

_NULL_VARIANCE_RATIO = 1e-8


def _matrix(a) -> np.ndarray:
    arr = np.asarray(a, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError("expected a two-dimensional matrix")
    return arr


def calc_mean(data) -> np.ndarray:
    """Mean of each component over a list of vectors."""
    arr = _matrix(data)
    if arr.shape[0] == 0:
        raise ValueError("cannot take the mean of no vectors")
    return arr.mean(axis=0)


def pair_combinations(n: int) -> list[tuple[int, int]]:
    """All index pairs ``(i, j)`` with ``0 <= i < j < n``, in lexicographic order."""
    if n < 0:
        raise ValueError("n must not be negative")
    return list(combinations(range(n), 2))


def find_indices(opt: int, values) -> np.ndarray:
    """Indices of values below (-1), equal to (0) or above (+1) zero."""
    arr = np.asarray(values, dtype=np.float64)
    if opt == -1:
        mask = arr < 0
    elif opt == 0:
        mask = arr == 0
    elif opt == 1:
        mask = arr > 0
    else:
        raise ValueError(f"opt must be -1, 0 or 1, not {opt!r}")
    return np.flatnonzero(mask)


def cross_terms(proj) -> np.ndarray:
    """Products of every pair of distinct columns, in pair order."""
    arr = _matrix(proj)
    pairs = pair_combinations(arr.shape[1])
    if not pairs:
        return np.zeros((arr.shape[0], 0))
    first = [i for i, _ in pairs]
    second = [j for _, j in pairs]
    return arr[:, first] * arr[:, second]


def new_projection(a, cross=None) -> np.ndarray:
    """Concatenate ``a``, its element-wise square and the optional cross terms."""
    arr = _matrix(a)
    parts = [arr, arr * arr]
    if cross is not None:
        extra = _matrix(cross)
        if extra.shape[0] != arr.shape[0]:
            raise ValueError("cross terms must have as many rows as the matrix")
        parts.append(extra)
    return np.hstack(parts)


def variance(a) -> float:
    """Sample variance of all elements of a matrix taken as one vector."""
    arr = _matrix(a)
    if arr.size < 2:
        raise ValueError("variance needs at least two values")
    return float(np.var(arr, ddof=1))


def column_variances(a) -> np.ndarray:
    """Sample variance of each column."""
    arr = _matrix(a)
    if arr.shape[0] < 2:
        raise ValueError("column variances need at least two rows")
    return np.var(arr, axis=0, ddof=1)


def remove_null_dimensions(a) -> tuple[np.ndarray, np.ndarray]:
    """Drop columns whose variance is negligible next to the largest one.

    Returns the reduced matrix and the indices of the kept columns.
    """
    arr = _matrix(a)
    variances = column_variances(arr)
    max_var = max(0.0, float(variances.max())) if variances.size else 0.0
    kept = np.flatnonzero(variances > _NULL_VARIANCE_RATIO * max_var)
    return arr[:, kept], kept


def select_columns(a, indices) -> np.ndarray:
    """The columns of ``a`` at ``indices``, in that order."""
    arr = _matrix(a)
    idx = np.asarray(indices, dtype=np.int64)
    if idx.size and (idx.min() < 0 or idx.max() >= arr.shape[1]):
        raise IndexError("column index out of range")
    return arr[:, idx]