"""Equality tolerance for rotation objects."""

from __future__ import annotations

import jax.numpy as jnp

from framejax.config import get_dtype

# Element-wise tolerance per dtype; half precision types fall back to the
# coarsest value.
_ROTATION_TOLERANCE = {
    "float64": 1e-12,
    "float32": 1e-6,
}
_HALF_PRECISION_TOLERANCE = 1e-3


def get_rotation_epsilon() -> float:
    """Absolute tolerance used when two rotations are compared with ``==``.

    Returns:
        float: ``1e-12`` in float64, ``1e-6`` in float32 and ``1e-3`` in
        float16 or bfloat16.
    """
    name = jnp.dtype(get_dtype()).name
    return _ROTATION_TOLERANCE.get(name, _HALF_PRECISION_TOLERANCE)
