"""Rotation matrix (DCM) representation.

Provides the ``RotationMatrix`` class representing a frame rotation as a
3x3 orthogonal matrix with determinant +1 (SO(3)).

The public constructors validate that the matrix is a proper rotation
matrix.  The ``_from_internal`` classmethod bypasses validation; the model
builders use it because their outputs are products of elementary
rotations and must stay traceable under ``jax.jit``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp

from framejax.config import get_dtype
from framejax.rotations._tolerance import get_rotation_epsilon
from framejax.rotations.conversions import rotation_matrix_to_quaternion
from framejax.rotations.elementary import Rx, Ry, Rz

if TYPE_CHECKING:
    from framejax.rotations.quaternion import Quaternion


def _is_so3(matrix: jax.Array, tol: float = 1e-6) -> bool:
    """Check if a matrix is in SO(3).

    Tests orthogonality (R^T R ≈ I) and positive determinant (det ≈ +1).

    Args:
        matrix (jax.Array): Array of shape ``(3, 3)``.
        tol (float): Tolerance for the checks.

    Returns:
        bool: ``True`` if the matrix is a proper rotation matrix.
    """
    rtr = matrix.T @ matrix
    orth_err = jnp.max(jnp.abs(rtr - jnp.eye(3)))
    det = jnp.linalg.det(matrix)
    return bool(orth_err < tol and det > 0.0)


class RotationMatrix:
    """3x3 rotation matrix (Direction Cosine Matrix).

    ``D.apply(v)`` is ``D @ v`` and maps vector components from the source
    frame to the target frame.  ``D_ab.compose(D_bc)`` is ``D_bc @ D_ab``,
    the rotation from A to C.

    This class is registered as a JAX pytree with the data matrix as
    the sole leaf.

    Args:
        r11 (float): Element (0, 0).
        r12 (float): Element (0, 1).
        r13 (float): Element (0, 2).
        r21 (float): Element (1, 0).
        r22 (float): Element (1, 1).
        r23 (float): Element (1, 2).
        r31 (float): Element (2, 0).
        r32 (float): Element (2, 1).
        r33 (float): Element (2, 2).

    Raises:
        ValueError: If the elements do not form a proper rotation matrix.
    """

    __slots__ = ("_data",)

    def __init__(
        self,
        r11: float,
        r12: float,
        r13: float,
        r21: float,
        r22: float,
        r23: float,
        r31: float,
        r32: float,
        r33: float,
    ) -> None:
        data = jnp.array(
            [[r11, r12, r13], [r21, r22, r23], [r31, r32, r33]],
            dtype=get_dtype(),
        )
        if not _is_so3(data):
            raise ValueError(
                f"Matrix is not a proper rotation matrix. det={float(jnp.linalg.det(data)):.6f}"
            )
        self._data = data

    @classmethod
    def _from_internal(cls, data: jax.Array) -> RotationMatrix:
        """Create from a raw JAX array without validation.

        Args:
            data (jax.Array): Array of shape ``(3, 3)``.

        Returns:
            RotationMatrix: New instance.
        """
        obj = object.__new__(cls)
        obj._data = data
        return obj

    # Factory methods

    @classmethod
    def from_matrix(cls, matrix: jax.Array, validate: bool = True) -> RotationMatrix:
        """Create from a 3x3 array.

        Args:
            matrix (jax.Array): Array-like of shape ``(3, 3)``.
            validate (bool): If ``True``, check SO(3) membership. Default: ``True``.

        Returns:
            RotationMatrix: New instance.

        Raises:
            ValueError: If ``validate=True`` and matrix is not SO(3).
        """
        data = jnp.asarray(matrix, dtype=get_dtype())
        if validate and not _is_so3(data):
            raise ValueError(
                f"Matrix is not a proper rotation matrix. det={float(jnp.linalg.det(data)):.6f}"
            )
        return cls._from_internal(data)

    @classmethod
    def identity(cls) -> RotationMatrix:
        """Return the 3x3 identity rotation."""
        return cls._from_internal(jnp.eye(3, dtype=get_dtype()))

    @classmethod
    def rotation_x(cls, angle: float, use_degrees: bool = False) -> RotationMatrix:
        """Frame rotation about the x-axis (``Rx``)."""
        return cls._from_internal(Rx(angle, use_degrees))

    @classmethod
    def rotation_y(cls, angle: float, use_degrees: bool = False) -> RotationMatrix:
        """Frame rotation about the y-axis (``Ry``)."""
        return cls._from_internal(Ry(angle, use_degrees))

    @classmethod
    def rotation_z(cls, angle: float, use_degrees: bool = False) -> RotationMatrix:
        """Frame rotation about the z-axis (``Rz``)."""
        return cls._from_internal(Rz(angle, use_degrees))

    # Rotation interface

    def inverse(self) -> RotationMatrix:
        """Return the inverse rotation (the transpose)."""
        return RotationMatrix._from_internal(self._data.T)

    def compose(self, other: RotationMatrix) -> RotationMatrix:
        """Return the rotation ``self`` followed by ``other``.

        Args:
            other (RotationMatrix): Rotation applied second.

        Returns:
            RotationMatrix: ``other @ self``.

        Raises:
            TypeError: If *other* is not a ``RotationMatrix``.
        """
        if not isinstance(other, RotationMatrix):
            raise TypeError(f"Cannot compose RotationMatrix with {type(other).__name__}")
        return RotationMatrix._from_internal(other._data @ self._data)

    def apply(self, vector: jax.Array) -> jax.Array:
        """Express a 3-vector in the rotated frame (``D @ v``)."""
        return self._data @ jnp.asarray(vector)

    # Operators

    def __mul__(self, vector: jax.Array) -> jax.Array:
        """Shorthand for :meth:`apply`, ``R * v``.

        Products of two rotations are written with :meth:`compose`, which
        states the order explicitly.
        """
        if isinstance(vector, RotationMatrix):
            return NotImplemented
        v = jnp.asarray(vector)
        if v.shape != (3,):
            return NotImplemented
        return self._data @ v

    def __getitem__(self, idx: int | tuple[int, int]) -> jax.Array:
        return self._data[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RotationMatrix):
            return NotImplemented
        eps = get_rotation_epsilon()
        return jnp.all(jnp.abs(self._data - other._data) < eps)

    # Conversion methods

    def to_matrix(self) -> jax.Array:
        """Return the underlying 3x3 array."""
        return self._data

    def to_quaternion(self) -> Quaternion:
        """Convert to ``Quaternion``."""
        from framejax.rotations.quaternion import Quaternion

        return Quaternion._from_internal(rotation_matrix_to_quaternion(self._data))

    def to_rotation_matrix(self) -> RotationMatrix:
        """Return a copy."""
        return RotationMatrix._from_internal(self._data)

    # String representations

    def __repr__(self) -> str:
        d = self._data
        return (
            f"RotationMatrix(\n"
            f"  [{float(d[0, 0]):10.6f} {float(d[0, 1]):10.6f} {float(d[0, 2]):10.6f}]\n"
            f"  [{float(d[1, 0]):10.6f} {float(d[1, 1]):10.6f} {float(d[1, 2]):10.6f}]\n"
            f"  [{float(d[2, 0]):10.6f} {float(d[2, 1]):10.6f} {float(d[2, 2]):10.6f}])"
        )


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    RotationMatrix,
    lambda r: ((r._data,), None),
    lambda _, children: RotationMatrix._from_internal(children[0]),
)
