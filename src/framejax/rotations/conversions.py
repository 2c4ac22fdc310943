"""Array kernels shared by :class:`Quaternion` and :class:`RotationMatrix`.

The kernels take and return raw JAX arrays so that the two class modules
do not import each other.  Quaternions are scalar-first ``[w, x, y, z]``
with vector part ``u = [x, y, z]``.  Both representations are passive: a
unit quaternion ``q`` and the matrix

.. math::

    R(q) = (w^2 - u \\cdot u) I + 2 u u^T - 2 w [u]_\\times

map the components of a vector from the old frame to the new one, and
``R(q1 * q2) = R(q2) @ R(q1)``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp


def _skew(u: jax.Array) -> jax.Array:
    """Cross-product matrix, ``_skew(u) @ v == cross(u, v)``."""
    return jnp.array([
        [0.0, -u[2], u[1]],
        [u[2], 0.0, -u[0]],
        [-u[1], u[0], 0.0],
    ])


# ---------------------------------------------------------------------------
# Quaternion <-> Rotation Matrix
# ---------------------------------------------------------------------------

def quaternion_to_rotation_matrix(q: jax.Array) -> jax.Array:
    """Rotation matrix ``R(q)`` of a unit quaternion.

    Args:
        q (jax.Array): Quaternion ``[w, x, y, z]``.

    Returns:
        jnp.ndarray: Matrix of shape ``(3, 3)``.
    """
    w, u = q[0], q[1:]
    return (w * w - jnp.dot(u, u)) * jnp.eye(3, dtype=q.dtype) + 2.0 * jnp.outer(u, u) - 2.0 * w * _skew(u)


def rotation_matrix_to_quaternion(R: jax.Array) -> jax.Array:
    """Unit quaternion of a rotation matrix.

    Each of the four components can be recovered from the diagonal; the
    largest one is used as the pivot so the division is well conditioned
    (Shepperd's method).  All four candidates are formed and the pivot is
    selected by index, keeping the function branch-free under ``jax.jit``.
    The sign is fixed by making the pivot component positive.

    Args:
        R (jax.Array): Rotation matrix of shape ``(3, 3)``.

    Returns:
        jnp.ndarray: Quaternion ``[w, x, y, z]``.
    """
    d = jnp.diagonal(R)
    # 4 q_i^2 for i = w, x, y, z
    four_sq = jnp.array([
        1.0 + d[0] + d[1] + d[2],
        1.0 + d[0] - d[1] - d[2],
        1.0 - d[0] + d[1] - d[2],
        1.0 - d[0] - d[1] + d[2],
    ])
    # Antisymmetric part gives 4 w u, symmetric part gives 4 u_i u_j
    a = jnp.array([R[1, 2] - R[2, 1], R[2, 0] - R[0, 2], R[0, 1] - R[1, 0]])
    s_xy = R[0, 1] + R[1, 0]
    s_xz = R[2, 0] + R[0, 2]
    s_yz = R[1, 2] + R[2, 1]
    products = jnp.array([
        [four_sq[0], a[0], a[1], a[2]],
        [a[0], four_sq[1], s_xy, s_xz],
        [a[1], s_xy, four_sq[2], s_yz],
        [a[2], s_xz, s_yz, four_sq[3]],
    ])

    pivot = jnp.argmax(four_sq)
    return products[pivot] / (2.0 * jnp.sqrt(four_sq[pivot]))


# ---------------------------------------------------------------------------
# Quaternion algebra
# ---------------------------------------------------------------------------

def quaternion_multiply(q1: jax.Array, q2: jax.Array) -> jax.Array:
    """Hamilton product ``q1 * q2``, renormalized.

    Under the passive convention this is the rotation ``q1`` followed by
    ``q2``.
    """
    s1, v1 = q1[0], q1[1:]
    s2, v2 = q2[0], q2[1:]

    s = s1 * s2 - jnp.dot(v1, v2)
    v = s1 * v2 + s2 * v1 + jnp.cross(v1, v2)

    result = jnp.concatenate([jnp.array([s]), v])
    return result / jnp.linalg.norm(result)


def quaternion_rotate_vector(q: jax.Array, v: jax.Array) -> jax.Array:
    """Components of *v* in the frame reached by rotating through *q*.

    The vector part of ``conj(q) * [0, v] * q``, evaluated without the
    intermediate products.  Equal to ``quaternion_to_rotation_matrix(q) @ v``.
    """
    w, u = q[0], q[1:]
    uv = jnp.cross(u, v)
    return v - 2.0 * w * uv + 2.0 * jnp.cross(u, uv)
