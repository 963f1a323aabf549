"""Construction of polynomial Mahalanobis spaces from training patterns."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from polytrack.pattern import Pattern
from polytrack.poly_utils import (
    calc_mean,
    cross_terms,
    new_projection,
    remove_null_dimensions,
    variance,
)

# Relative threshold below which singular values and variances count as null.
SIGMA_MAX = 4e-6


@dataclass
class LevelBasis:
    """The PCA basis and weights of one polynomial level."""

    a_basis: np.ndarray
    max_ap: float
    ind_use: np.ndarray
    d_proj: int
    dms: np.ndarray
    sigma_inv: float

    @property
    def ind_usesize(self) -> int:
        return len(self.ind_use)


@dataclass
class PolyModel:
    """A polynomial space: the centre of the pattern and one basis per level."""

    center: np.ndarray
    num_levels: int
    num_initialdim: int
    levels: list[LevelBasis] = field(default_factory=list)
    max_level: int = 0


@dataclass
class _Pca:
    basis: np.ndarray
    lambdas: np.ndarray
    s_min: float


def _pca(a: np.ndarray, eps: float) -> _Pca:
    nt, dt = a.shape
    if nt < dt:
        raise ValueError(
            f"{nt} samples are too few for {dt} dimensions; "
            "a space needs at least as many samples as dimensions"
        )
    ata = a.T @ a
    u, s_val, _ = np.linalg.svd(ata)
    s_max = float(s_val.max()) if s_val.size else 0.0
    s_min = eps * s_max
    if s_min <= 0.0:
        raise ValueError("the pattern has no variance to build a space from")
    s_val = np.where(s_val < s_min, 0.0, s_val)
    basis_idx = np.flatnonzero(s_val > 0)
    lambdas = s_val[basis_idx]
    return _Pca(u[:, : len(basis_idx)], lambdas, s_min)


def _project(a: np.ndarray, basis: np.ndarray, eps: float) -> tuple[np.ndarray, float]:
    proj = a @ basis
    max_ap = float(np.abs(proj).max()) if proj.size else 0.0
    if max_ap > eps:
        proj = proj / max_ap
    else:
        max_ap = 1.0
    return proj, max_ap


def _level(pca: _Pca, max_ap: float, ind_use: np.ndarray, d_proj: int) -> LevelBasis:
    dms = -pca.lambdas / (pca.s_min * (pca.lambdas + pca.s_min))
    return LevelBasis(
        a_basis=pca.basis,
        max_ap=max_ap,
        ind_use=np.asarray(ind_use, dtype=np.int64),
        d_proj=d_proj,
        dms=dms,
        sigma_inv=1.0 / pca.s_min,
    )


def _expand(proj: np.ndarray, eps: float) -> tuple[np.ndarray | None, bool]:
    if proj.shape[1] <= 1:
        return None, False
    new_dim = new_projection(proj, cross_terms(proj))
    return new_dim, variance(new_dim) > eps


def make_space(pattern: Pattern, order: int) -> PolyModel:
    """Build a polynomial space of up to ``order`` levels from ``pattern``."""
    if order < 1:
        raise ValueError("the order of a space must be at least 1")
    eps = SIGMA_MAX
    data = np.asarray(pattern.data, dtype=np.float64)
    center = calc_mean(data)
    model = PolyModel(center=center, num_levels=order, num_initialdim=pattern.dim())

    a = data - center
    pca = _pca(a, eps)
    proj, max_ap = _project(a, pca.basis, eps)
    model.levels.append(
        _level(pca, max_ap, np.arange(len(pca.lambdas)), proj.shape[1])
    )

    new_dim, cont = _expand(proj, eps)
    if order == 1:
        cont = False

    while cont and new_dim is not None:
        if new_dim.shape[1] == 1:
            a = new_dim
            ind_use = np.array([0], dtype=np.int64)
        else:
            a, ind_use = remove_null_dimensions(new_dim)
        pca = _pca(a, eps)
        proj, max_ap = _project(a, pca.basis, eps)
        model.levels.append(_level(pca, max_ap, ind_use, proj.shape[1]))

        new_dim, cont = _expand(proj, eps)
        if len(model.levels) >= order:
            cont = False

    return model