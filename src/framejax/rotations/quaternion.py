"""Quaternion rotation representation.

Provides the ``Quaternion`` class representing a frame rotation as a unit
quaternion in scalar-first convention ``[w, x, y, z]``.

A quaternion ``q`` and the matrix ``q.to_matrix()`` describe the same
passive rotation: ``q.apply(v) == q.to_matrix() @ v``.  Composition is
written ``q_ab.compose(q_bc)`` (first A to B, then B to C) and is the
Hamilton product ``q_ab * q_bc``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp

from framejax.config import get_dtype
from framejax.rotations._tolerance import get_rotation_epsilon
from framejax.rotations.conversions import (
    quaternion_multiply,
    quaternion_rotate_vector,
    quaternion_to_rotation_matrix,
)
from framejax.rotations.elementary import Qx, Qy, Qz

if TYPE_CHECKING:
    from framejax.rotations.rotation_matrix import RotationMatrix


class Quaternion:
    """Unit quaternion representing a 3D frame rotation.

    Internal storage is a shape ``(4,)`` array in scalar-first order
    ``[w, x, y, z]``.  The quaternion is normalized on construction.

    This class is registered as a JAX pytree with the data array as
    the sole leaf and no auxiliary data.

    Args:
        s (float): Scalar (real) component.
        v1 (float): First vector (imaginary) component.
        v2 (float): Second vector (imaginary) component.
        v3 (float): Third vector (imaginary) component.
    """

    __slots__ = ('_data',)

    def __init__(self, s: float, v1: float, v2: float, v3: float) -> None:
        _float = get_dtype()
        q = jnp.array([_float(s), _float(v1), _float(v2), _float(v3)])
        self._data = q / jnp.linalg.norm(q)

    @classmethod
    def _from_internal(cls, data: jax.Array) -> Quaternion:
        """Create from a raw JAX array without normalization.

        Used by pytree unflatten and the model builders.

        Args:
            data (jax.Array): Array of shape ``(4,)`` in scalar-first order.

        Returns:
            Quaternion: New instance.
        """
        obj = object.__new__(cls)
        obj._data = data
        return obj

    # Properties

    @property
    def w(self) -> jax.Array:
        """Scalar component."""
        return self._data[0]

    # Factory methods

    @classmethod
    def from_vector(cls, v: jax.Array, scalar_first: bool = True) -> Quaternion:
        """Create from a 4-element vector.

        Args:
            v (jax.Array): Array-like of shape ``(4,)``.
            scalar_first (bool): If ``True``, ``v = [w, x, y, z]``.
                If ``False``, ``v = [x, y, z, w]``.

        Returns:
            Quaternion: New normalized quaternion.
        """
        if scalar_first:
            return cls(v[0], v[1], v[2], v[3])
        return cls(v[3], v[0], v[1], v[2])

    def to_vector(self, scalar_first: bool = True) -> jax.Array:
        """Return the quaternion as a 4-element vector.

        Args:
            scalar_first (bool): If ``True``, return ``[w, x, y, z]``.
                If ``False``, return ``[x, y, z, w]``.

        Returns:
            jnp.ndarray: Array of shape ``(4,)``.
        """
        if scalar_first:
            return self._data
        return jnp.array([self._data[1], self._data[2], self._data[3], self._data[0]])

    @classmethod
    def identity(cls) -> Quaternion:
        """Return the identity rotation ``[1, 0, 0, 0]``."""
        return cls._from_internal(jnp.array([1.0, 0.0, 0.0, 0.0], dtype=get_dtype()))

    @classmethod
    def rotation_x(cls, angle: float, use_degrees: bool = False) -> Quaternion:
        """Frame rotation about the x-axis, equivalent to ``Rx(angle)``."""
        return cls._from_internal(Qx(angle, use_degrees))

    @classmethod
    def rotation_y(cls, angle: float, use_degrees: bool = False) -> Quaternion:
        """Frame rotation about the y-axis, equivalent to ``Ry(angle)``."""
        return cls._from_internal(Qy(angle, use_degrees))

    @classmethod
    def rotation_z(cls, angle: float, use_degrees: bool = False) -> Quaternion:
        """Frame rotation about the z-axis, equivalent to ``Rz(angle)``."""
        return cls._from_internal(Qz(angle, use_degrees))

    # Rotation interface

    def norm(self) -> jax.Array:
        """Return the Euclidean norm."""
        return jnp.linalg.norm(self._data)

    def conjugate(self) -> Quaternion:
        """Return the conjugate quaternion ``[w, -x, -y, -z]``."""
        return Quaternion._from_internal(self._data * jnp.array([1.0, -1.0, -1.0, -1.0]))

    def inverse(self) -> Quaternion:
        """Return the inverse rotation.

        For a unit quaternion this is the conjugate; for non-unit
        quaternions the conjugate is divided by the squared norm.

        Returns:
            Quaternion: Inverse quaternion.
        """
        return Quaternion._from_internal(self.conjugate()._data / jnp.dot(self._data, self._data))

    def compose(self, other: Quaternion) -> Quaternion:
        """Return the rotation ``self`` followed by ``other``.

        Args:
            other (Quaternion): Rotation applied second.

        Returns:
            Quaternion: Combined rotation.

        Raises:
            TypeError: If *other* is not a ``Quaternion``.
        """
        if not isinstance(other, Quaternion):
            raise TypeError(f"Cannot compose Quaternion with {type(other).__name__}")
        return self * other

    def apply(self, vector: jax.Array) -> jax.Array:
        """Express a 3-vector in the rotated frame.

        Args:
            vector (jax.Array): Vector of shape ``(3,)``.

        Returns:
            jax.Array: ``conj(q) * v * q``, equal to ``self.to_matrix() @ vector``.
        """
        return quaternion_rotate_vector(self._data, jnp.asarray(vector))

    # Operators

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Hamilton product (quaternion * quaternion)."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion._from_internal(quaternion_multiply(self._data, other._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        eps = get_rotation_epsilon()
        d1 = self._data / jnp.linalg.norm(self._data)
        d2 = other._data / jnp.linalg.norm(other._data)
        # q and -q are the same rotation
        return jnp.all(jnp.abs(d1 - d2) < eps) | jnp.all(jnp.abs(d1 + d2) < eps)

    # Conversion methods

    def to_matrix(self) -> jax.Array:
        """Return the equivalent 3x3 direction cosine matrix."""
        return quaternion_to_rotation_matrix(self._data)

    def to_rotation_matrix(self) -> RotationMatrix:
        """Convert to ``RotationMatrix``."""
        from framejax.rotations.rotation_matrix import RotationMatrix

        return RotationMatrix._from_internal(self.to_matrix())

    def to_quaternion(self) -> Quaternion:
        """Return a copy."""
        return Quaternion._from_internal(self._data)

    # String representations

    def __repr__(self) -> str:
        return (
            f"Quaternion(w={float(self._data[0])}, "
            f"x={float(self._data[1])}, "
            f"y={float(self._data[2])}, "
            f"z={float(self._data[3])})"
        )


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    Quaternion,
    lambda q: ((q._data,), None),
    lambda _, children: Quaternion._from_internal(children[0]),
)
