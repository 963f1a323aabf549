"""Polynomial Mahalanobis classifier: training and evaluation of colour samples."""

from __future__ import annotations

import numpy as np

from polytrack.pattern import Pattern
from polytrack.poly_model import LevelBasis, PolyModel, make_space
from polytrack.poly_utils import cross_terms, new_projection, select_columns


def _level_distance(values: np.ndarray, level: LevelBasis) -> np.ndarray:
    """Distance contribution of one level, clipped at zero."""
    proj_sq = (values @ level.a_basis) ** 2
    q1 = (values * values * level.sigma_inv).sum(axis=1)
    q2 = (proj_sq * level.dms).sum(axis=1)
    return np.maximum(q1 + q2, 0.0)


def _next_dimensions(values: np.ndarray, level: LevelBasis) -> np.ndarray:
    """Polynomial expansion of the normalised projection on a level's basis."""
    proj = (values @ level.a_basis) / level.max_ap
    if level.d_proj > 1:
        return new_projection(proj, cross_terms(proj))
    return new_projection(proj)


class PolyMahalanobis:
    """Builds a polynomial space from a pattern and measures distances in it."""

    def __init__(self) -> None:
        self._pattern: Pattern | None = None
        self._model: PolyModel | None = None

    @property
    def model(self) -> PolyModel:
        if self._model is None:
            raise RuntimeError("no space has been made yet")
        return self._model

    def set_pattern(self, pattern: Pattern) -> bool:
        """Use ``pattern`` as the training set, replacing any previous one."""
        self._pattern = pattern
        return True

    def make_space(self, order: int) -> bool:
        """Build a space of up to ``order`` polynomial levels from the pattern."""
        if self._pattern is None:
            raise RuntimeError("pattern is not defined")
        self._model = make_space(self._pattern, order)
        return True

    def _samples(self, data) -> np.ndarray:
        model = self.model
        dims = model.num_initialdim
        arr = np.asarray(data, dtype=np.float64)
        if arr.ndim == 1:
            if dims == 0 or arr.size % dims:
                raise ValueError(f"{arr.size} values do not form {dims}-dimensional samples")
            arr = arr.reshape(-1, dims)
        if arr.ndim != 2 or arr.shape[1] != dims:
            raise ValueError(f"samples must have {dims} components")
        return arr

    def evaluate_to_vector(self, data, ref_vector) -> np.ndarray:
        """Cumulative distances of each sample from ``ref_vector``.

        Returns an array of shape (levels, samples); row ``k`` holds the
        distance summed over the first ``k + 1`` levels. Rows for levels the
        space does not have stay zero.
        """
        model = self.model
        samples = self._samples(data)
        ref = np.asarray(ref_vector, dtype=np.float64).reshape(-1)
        if ref.size != samples.shape[1]:
            raise ValueError(f"reference vector must have {samples.shape[1]} components")

        result = np.zeros((model.num_levels, samples.shape[0]))
        model.max_level = 0
        x = samples - ref
        first = model.levels[0]
        result[0] = _level_distance(x, first)
        model.max_level = 1

        if model.num_levels > 1:
            new_dim = _next_dimensions(x, first)
            for k, level in enumerate(model.levels[1 : model.num_levels], start=1):
                used = select_columns(new_dim, level.ind_use)
                result[k] = _level_distance(used, level) + result[k - 1]
                new_dim = _next_dimensions(used, level)
                model.max_level += 1
        return result

    def evaluate_to_center(self, data) -> np.ndarray:
        """Cumulative distances of each sample from the centre of the space."""
        return self.evaluate_to_vector(data, self.model.center)

    def max_q_order(self) -> int:
        """The number of polynomial levels the space was made with."""
        return self.model.num_levels

    def center(self) -> np.ndarray:
        """The centre of the space."""
        return np.array(self.model.center, dtype=np.float64)

    def is_sampled(self) -> bool:
        """Whether a space has been made."""
        return self._model is not None and self._model.num_levels > -1

    def has_pattern(self) -> bool:
        """Whether a training pattern has been set."""
        return self._pattern is not None