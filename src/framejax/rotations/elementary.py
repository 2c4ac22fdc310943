"""Elementary frame rotations about the coordinate axes.

``Rx``, ``Ry`` and ``Rz`` rotate the *coordinate frame* (passive
convention): for a vector with components ``v_A`` in frame A, the
components in a frame B obtained by turning A through ``angle`` about its
z-axis are ``v_B = Rz(angle) @ v_A``.  This is the same convention as the
IAU SOFA ``R1``/``R2``/``R3`` routines, so the IERS/SOFA formulas can be
written down unchanged.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


def _radians(angle: ArrayLike, use_degrees: bool) -> Array:
    return jnp.deg2rad(angle) if use_degrees else jnp.asarray(angle)


def Rx(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = _radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[1.0,  0.0,  0.0],
                      [0.0,   +c,   +s],
                      [0.0,   -s,   +c]])


def Ry(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the y-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.
    """
    angle = _radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,  0.0,   -s],
                      [0.0, +1.0,  0.0],
                      [ +s,  0.0,   +c]])


def Rz(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Rotation matrix.
    """
    angle = _radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,   +s,  0.0],
                      [ -s,   +c,  0.0],
                      [0.0,  0.0,  1.0]])


def Qx(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Unit quaternion ``[w, x, y, z]`` equivalent to :func:`Rx`.

    Args:
        angle (float): Rotation angle.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Quaternion of shape ``(4,)``.
    """
    half = 0.5 * _radians(angle, use_degrees)
    return jnp.array([jnp.cos(half), jnp.sin(half), 0.0, 0.0])


def Qy(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Unit quaternion ``[w, x, y, z]`` equivalent to :func:`Ry`."""
    half = 0.5 * _radians(angle, use_degrees)
    return jnp.array([jnp.cos(half), 0.0, jnp.sin(half), 0.0])


def Qz(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Unit quaternion ``[w, x, y, z]`` equivalent to :func:`Rz`."""
    half = 0.5 * _radians(angle, use_degrees)
    return jnp.array([jnp.cos(half), 0.0, 0.0, jnp.sin(half)])
