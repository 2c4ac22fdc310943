"""Rotation representations for frame transformations.

Provides two interchangeable representations of a passive (frame)
rotation and the representation-generic helpers used by every frame
builder:

- :class:`RotationMatrix` -- 3x3 direction cosine matrix (SO(3))
- :class:`Quaternion` -- unit quaternion (scalar-first ``[w, x, y, z]``)
- :class:`Representation` -- selector passed to the frame builders

Also re-exports the elementary rotation functions :func:`Rx`, :func:`Ry`,
:func:`Rz`.
"""

from .elementary import Rx, Ry, Rz
from .quaternion import Quaternion
from .rotation_matrix import RotationMatrix
from .representation import (
    Representation,
    Rotation,
    as_representation,
    compose_rotations,
    elementary_rotation,
    identity_rotation,
    rotation_sequence,
)
from ._tolerance import get_rotation_epsilon

__all__ = [
    # Elementary rotations
    "Rx",
    "Ry",
    "Rz",
    # Representations
    "Quaternion",
    "RotationMatrix",
    "Representation",
    "Rotation",
    # Generic helpers
    "as_representation",
    "compose_rotations",
    "elementary_rotation",
    "get_rotation_epsilon",
    "identity_rotation",
    "rotation_sequence",
]
