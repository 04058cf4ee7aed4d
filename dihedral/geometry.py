"""Dihedral (torsion) angles from four points.

The signed variant follows the biochemistry convention: looking down the
p1 -> p2 axis, a clockwise rotation taking p0 onto p3 is positive.

All functions accept single points (shape (3,)) or stacks of points
(shape (..., 3)) that broadcast against each other. A single quadruple
gives a float, a batch gives an np.ndarray.

References:
    https://math.stackexchange.com/a/47084
    https://en.wikipedia.org/wiki/Dihedral_angle#In_stereochemistry
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from dihedral.constants import DEGENERATE_TOL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point3:
    """A point in 3D space.

    Array-like, so it can be passed anywhere a (3,) array is expected.
    """

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=dtype)


class DegenerateDihedralError(ValueError):
    """Raised in strict mode when three or more points are collinear or coincident."""


def _as_points(p0, p1, p2, p3):
    """Broadcast the four inputs to float64 arrays of a common (..., 3) shape."""
    points = [np.asarray(p, dtype=np.float64) for p in (p0, p1, p2, p3)]

    for p in points:
        if p.ndim == 0 or p.shape[-1] != 3:
            raise ValueError(f"points must have shape (..., 3), got {p.shape}.")
    try:
        points = np.broadcast_arrays(*points)
    except ValueError as exc:
        shapes = [p.shape for p in points]
        raise ValueError(f"point shapes do not broadcast: {shapes}") from exc

    if not all(np.isfinite(p).all() for p in points):
        raise ValueError("points must have finite coordinates.")
    return points


def _bond_vectors(p0, p1, p2, p3):
    b1 = p1 - p0
    b2 = p2 - p1
    b3 = p3 - p2
    return b1, b2, b3


def _degenerate_mask(b1, b2, b3, n1, n2):
    """True where either plane normal is too short relative to its bonds.

    |a x b| = |a| |b| sin(theta), so the check is on sin(theta) and does not
    depend on the length scale of the coordinates.
    """
    len_b1 = np.linalg.norm(b1, axis=-1)
    len_b2 = np.linalg.norm(b2, axis=-1)
    len_b3 = np.linalg.norm(b3, axis=-1)

    bad_n1 = np.linalg.norm(n1, axis=-1) <= DEGENERATE_TOL * len_b1 * len_b2
    bad_n2 = np.linalg.norm(n2, axis=-1) <= DEGENERATE_TOL * len_b2 * len_b3
    return bad_n1 | bad_n2


def _finish(angle, degenerate, strict):
    n_bad = int(np.count_nonzero(degenerate))
    if n_bad:
        if strict:
            raise DegenerateDihedralError(
                f"{n_bad} of {degenerate.size} dihedral(s) undefined: "
                "three or more points are collinear or coincident."
            )
        logger.debug("%d of %d dihedral(s) degenerate, returning nan", n_bad, degenerate.size)
        angle = np.where(degenerate, np.nan, angle)

    if angle.ndim == 0:
        return float(angle)
    return angle


def dihedral(p0, p1, p2, p3, *, strict: bool = False):
    """Signed dihedral angle of four ordered points, in radians.

    Args:
        p0, p1, p2, p3: array-likes of shape (3,) or (..., 3).
        strict (bool): raise DegenerateDihedralError for collinear or
            coincident points instead of returning nan.

    Returns:
        float or np.ndarray: angle(s) in (-pi, pi].
    """
    p0, p1, p2, p3 = _as_points(p0, p1, p2, p3)
    b1, b2, b3 = _bond_vectors(p0, p1, p2, p3)

    # plane normals
    n1 = np.cross(b1, b2)
    n2 = np.cross(b2, b3)
    degenerate = _degenerate_mask(b1, b2, b3, n1, n2)

    with np.errstate(divide="ignore", invalid="ignore"):
        u2 = b2 / np.linalg.norm(b2, axis=-1, keepdims=True)
        y = np.sum(np.cross(n1, n2) * u2, axis=-1)
        x = np.sum(n1 * n2, axis=-1)
        angle = np.arctan2(y, x)

        # atan2 can return -pi for a trans geometry; keep the range half-open
        angle = np.where(angle == -np.pi, np.pi, angle)

    return _finish(angle, degenerate, strict)


dihedral_signed = dihedral


def dihedral_unsigned(p0, p1, p2, p3, *, strict: bool = False):
    """Unsigned dihedral angle of four ordered points, in radians.

    Cheaper than `dihedral`: no n1 x n2 and no arctan2, but the direction
    of rotation is lost.

    Args:
        p0, p1, p2, p3: array-likes of shape (3,) or (..., 3).
        strict (bool): raise DegenerateDihedralError instead of returning nan.

    Returns:
        float or np.ndarray: angle(s) in [0, pi].
    """
    p0, p1, p2, p3 = _as_points(p0, p1, p2, p3)
    b1, b2, b3 = _bond_vectors(p0, p1, p2, p3)

    n1 = np.cross(b1, b2)
    n2 = np.cross(b2, b3)
    degenerate = _degenerate_mask(b1, b2, b3, n1, n2)

    with np.errstate(divide="ignore", invalid="ignore"):
        cos = np.sum(n1 * n2, axis=-1) / (
            np.linalg.norm(n1, axis=-1) * np.linalg.norm(n2, axis=-1)
        )
        angle = np.arccos(np.clip(cos, -1.0, 1.0))

    return _finish(angle, degenerate, strict)


def dihedral_series(points, *, signed: bool = True, strict: bool = False):
    """Dihedrals of every window of four consecutive points in a chain.

    Args:
        points: array-like of shape (..., N, 3) with N >= 4.
        signed (bool): signed angles if True, else unsigned.
        strict (bool): see `dihedral`.

    Returns:
        np.ndarray: shape (..., N - 3).
    """
    points = np.asarray(points, dtype=np.float64)
    if points.ndim < 2 or points.shape[-1] != 3:
        raise ValueError(f"points must have shape (..., N, 3), got {points.shape}.")
    if points.shape[-2] < 4:
        raise ValueError(
            f"need at least 4 points for a dihedral, got {points.shape[-2]}."
        )

    p0 = points[..., :-3, :]
    p1 = points[..., 1:-2, :]
    p2 = points[..., 2:-1, :]
    p3 = points[..., 3:, :]

    func = dihedral if signed else dihedral_unsigned
    return np.asarray(func(p0, p1, p2, p3, strict=strict))
