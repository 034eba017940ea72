"""Rigid-body transforms between coordinate frames.

Right-handed frames. Rotations are given as intrinsic X-Y-Z Euler angles in
radians, so ``R = Rx(r[0]) @ Ry(r[1]) @ Rz(r[2])``. Translations use whatever
length unit the tree file uses.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from .types import FloatArray

EULER_ORDER = "XYZ"  # uppercase: intrinsic rotations in scipy


class Isometry:
    """Rotation plus translation.

    ``a @ b`` applies ``b`` first and then ``a``, so a child's world transform
    is ``parent_world @ child_local``.
    """

    __slots__ = ("translation", "rotation")

    def __init__(
        self,
        translation: Sequence[float] | FloatArray | None = None,
        rotation: Sequence[Sequence[float]] | FloatArray | None = None,
    ):
        if translation is None:
            self.translation = np.zeros(3, dtype=np.float64)
        else:
            self.translation = np.array(translation, dtype=np.float64).reshape(3)
        if rotation is None:
            self.rotation = np.eye(3, dtype=np.float64)
        else:
            self.rotation = np.array(rotation, dtype=np.float64).reshape(3, 3)

    @classmethod
    def identity(cls) -> Isometry:
        return cls()

    @classmethod
    def from_euler(cls, t: Sequence[float], r: Sequence[float]) -> Isometry:
        """Build a transform from a translation and intrinsic XYZ Euler angles.

        Args:
            t: Translation (x, y, z)
            r: Euler angles (roll, pitch, yaw) in radians

        Returns:
            Isometry
        """
        rot = Rotation.from_euler(EULER_ORDER, np.asarray(r, dtype=np.float64))
        return cls(t, rot.as_matrix())

    @classmethod
    def from_matrix(cls, matrix: FloatArray) -> Isometry:
        """Build a transform from a 4x4 homogeneous matrix."""
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 matrix, got shape {matrix.shape}")
        return cls(matrix[:3, 3], matrix[:3, :3])

    def euler(self) -> FloatArray:
        """Intrinsic XYZ Euler angles in radians."""
        return Rotation.from_matrix(self.rotation).as_euler(EULER_ORDER)

    def matrix(self) -> FloatArray:
        """4x4 homogeneous matrix."""
        T = np.eye(4, dtype=np.float64)
        T[:3, :3] = self.rotation
        T[:3, 3] = self.translation
        return T

    def inverse(self) -> Isometry:
        # Inverse rotation is transpose
        R_inv = self.rotation.T
        return Isometry(-(R_inv @ self.translation), R_inv)

    def apply(self, points: Sequence[float] | FloatArray) -> FloatArray:
        """Map points from this transform's frame into its reference frame.

        Args:
            points: Points, shape (3,) or (N, 3)

        Returns:
            Transformed points with the same shape
        """
        p = np.asarray(points, dtype=np.float64)
        return p @ self.rotation.T + self.translation

    def allclose(self, other: Isometry, atol: float = 1e-9) -> bool:
        return bool(
            np.allclose(self.translation, other.translation, atol=atol)
            and np.allclose(self.rotation, other.rotation, atol=atol)
        )

    def copy(self) -> Isometry:
        return Isometry(self.translation, self.rotation)

    def __matmul__(self, other: Isometry) -> Isometry:
        if not isinstance(other, Isometry):
            return NotImplemented
        return Isometry(
            self.rotation @ other.translation + self.translation,
            self.rotation @ other.rotation,
        )

    def __repr__(self) -> str:
        t = np.array2string(self.translation, precision=4)
        r = np.array2string(self.euler(), precision=4)
        return f"Isometry(t={t}, r_xyz={r})"


def identity() -> Isometry:
    """Create an identity transform."""
    return Isometry.identity()


def compose_chain(transforms: Iterable[Isometry]) -> Isometry:
    """Compose a chain of transforms ordered from the root down to the leaf."""
    result = identity()
    for T in transforms:
        result = result @ T
    return result


__all__ = [
    "EULER_ORDER",
    "Isometry",
    "identity",
    "compose_chain",
]
