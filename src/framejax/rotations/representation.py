"""Representation-generic rotation building.

Every frame-rotation builder in :mod:`framejax.frames` is written once in
terms of the helpers below and returns either a :class:`RotationMatrix` or
a :class:`Quaternion`, selected by a :class:`Representation` value.  Both
types provide the same interface (``compose``, ``apply``, ``inverse``,
``to_matrix``, ``to_quaternion``), so callers never need to branch on the
representation.

Sequences are written in application order: ``rotation_sequence((a, b, c),
"ZYZ")`` is ``Rz(c) @ Ry(b) @ Rz(a)`` as a matrix, i.e. the rotation about
Z by ``a`` is applied first.
"""

from __future__ import annotations

import enum
from functools import reduce
from typing import Union

from jax.typing import ArrayLike

from framejax.rotations.quaternion import Quaternion
from framejax.rotations.rotation_matrix import RotationMatrix

Rotation = Union[RotationMatrix, Quaternion]
"""Either rotation representation."""


class Representation(enum.Enum):
    """Output representation of a frame rotation.

    Attributes:
        MATRIX: 3x3 direction cosine matrix (:class:`RotationMatrix`).
        QUATERNION: Unit quaternion (:class:`Quaternion`).
    """

    MATRIX = "matrix"
    QUATERNION = "quaternion"


_BACKENDS = {
    Representation.MATRIX: RotationMatrix,
    Representation.QUATERNION: Quaternion,
}


def elementary_rotation(
    axis: str,
    angle: ArrayLike,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Frame rotation about one coordinate axis.

    Args:
        axis: ``"X"``, ``"Y"`` or ``"Z"`` (case-insensitive).
        angle: Rotation angle [rad].
        representation: Output representation.

    Returns:
        The rotation in the requested representation.

    Raises:
        ValueError: If *axis* is not one of X, Y, Z.
    """
    backend = _BACKENDS[Representation(representation)]
    axis = axis.upper()
    if axis == "X":
        return backend.rotation_x(angle)
    if axis == "Y":
        return backend.rotation_y(angle)
    if axis == "Z":
        return backend.rotation_z(angle)
    raise ValueError(f"Unknown rotation axis '{axis}'")


def compose_rotations(first: Rotation, *rest: Rotation) -> Rotation:
    """Compose rotations given in application order.

    Args:
        first: Rotation applied first.
        *rest: Rotations applied afterwards, in order.

    Returns:
        The combined rotation, in the representation of the inputs.
    """
    return reduce(lambda acc, nxt: acc.compose(nxt), rest, first)


def rotation_sequence(
    angles: tuple[ArrayLike, ...],
    axes: str,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Compose elementary rotations given in application order.

    Args:
        angles: Rotation angles [rad], one per axis.
        axes: Axis sequence, e.g. ``"ZYZ"``.
        representation: Output representation.

    Returns:
        The combined rotation.

    Raises:
        ValueError: If the number of angles and axes differ.

    Examples:
        ```python
        from framejax.rotations import Representation, rotation_sequence
        # Rz(c) @ Ry(b) @ Rz(a)
        q = rotation_sequence((0.1, 0.2, 0.3), "ZYZ", Representation.QUATERNION)
        ```
    """
    if len(angles) != len(axes):
        raise ValueError(f"Got {len(angles)} angles for axis sequence '{axes}'")
    rotations = [elementary_rotation(ax, ang, representation) for ax, ang in zip(axes, angles)]
    return compose_rotations(*rotations)


def identity_rotation(representation: Representation = Representation.MATRIX) -> Rotation:
    """Return the identity rotation in the requested representation."""
    return _BACKENDS[Representation(representation)].identity()


def as_representation(rotation: Rotation, representation: Representation) -> Rotation:
    """Convert *rotation* to *representation* (no-op if it already matches)."""
    if Representation(representation) == Representation.QUATERNION:
        return rotation.to_quaternion()
    return rotation.to_rotation_matrix()
