"""Floating-point precision used by every framejax computation.

framejax builds its angles, epochs and rotation objects with the dtype
returned by :func:`get_dtype`.  The default is ``jnp.float32`` so that the
library runs unchanged on accelerators, but reference-frame work needs
``jnp.float64``: a Julian Date held in ``float32`` resolves only about 20
seconds of time, which is several kilometres of Earth rotation at the
equator, and the nutation series sum terms at the microarcsecond level.

Selecting ``jnp.float64`` turns on ``jax_enable_x64``.  Because
``get_dtype()`` is read while a function is traced, change the dtype
before the first ``jax.jit`` compilation of any transformation.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_SUPPORTED_DTYPES = {
    "float16": jnp.float16,
    "bfloat16": jnp.bfloat16,
    "float32": jnp.float32,
    "float64": jnp.float64,
}

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Select the float dtype for all subsequent framejax computations.

    Args:
        dtype: ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32`` or
            ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not one of the supported float types.

    Examples:
        ```python
        import jax.numpy as jnp
        from framejax.config import set_dtype
        set_dtype(jnp.float64)
        ```
    """
    global _dtype
    if not any(dtype is candidate for candidate in _SUPPORTED_DTYPES.values()):
        names = ", ".join(f"jnp.{name}" for name in _SUPPORTED_DTYPES)
        raise ValueError(f"Unsupported dtype {dtype!r}. Must be one of: {names}")
    if dtype is jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the float dtype in use (``jnp.float32`` unless changed)."""
    return _dtype
