"""JIT-compatible EOP interpolation and query functions.

All functions use only JAX primitives (``jnp.searchsorted``, array indexing,
``jnp.where``) for the interpolation itself and are compatible with
``jax.jit``, ``jax.vmap``, and ``jax.grad``.

The ``extrapolation`` parameter is a Python enum resolved at trace time.
With the default :attr:`EOPExtrapolation.ERROR`, a concrete query outside
``[mjd_min, mjd_max]`` raises :class:`~framejax.errors.InvalidTimeRangeError`;
abstract (traced) queries skip the check and hold the boundary value.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax.eop._types import EOPData, EOPExtrapolation, EOPIau1980, EOPIau2000A
from framejax.errors import EOPModelMismatchError, InvalidTimeRangeError


def _is_traced(*values) -> bool:
    return any(isinstance(v, jax.core.Tracer) for v in values)


def _check_range(eop: EOPData, mjd: Array) -> None:
    """Raise if a concrete *mjd* lies outside the dataset span."""
    if _is_traced(mjd, eop.mjd_min, eop.mjd_max):
        return
    mjd_min = float(eop.mjd_min)
    mjd_max = float(eop.mjd_max)
    flat = jnp.ravel(mjd)
    outside = flat[(flat < mjd_min) | (flat > mjd_max)]
    if outside.size:
        raise InvalidTimeRangeError(float(outside[0]), mjd_min, mjd_max)


def _interpolate_scalar(
    eop: EOPData,
    mjd: Array,
    values: Array,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Array:
    """Linearly interpolate a single EOP field at the given MJD.

    Uses ``jnp.searchsorted`` for O(log n) lookup, then linear interpolation
    between bracketing points. Out-of-range queries are handled by the
    extrapolation mode.

    Args:
        eop: EOP dataset with sorted MJD array.
        mjd: MJD (UTC) to query.
        values: The EOP field array to interpolate, shape ``(N,)``.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Interpolated value.

    Raises:
        InvalidTimeRangeError: If *extrapolation* is ``ERROR`` and the
            concrete *mjd* is outside the data range.
    """
    if extrapolation == EOPExtrapolation.ERROR:
        _check_range(eop, mjd)

    n = eop.mjd.shape[0]

    # Binary search: idx is the insertion point (right side)
    idx = jnp.searchsorted(eop.mjd, mjd, side="right")

    # Bracket indices, clamped to valid range
    idx_lo = jnp.clip(idx - 1, 0, n - 1)
    idx_hi = jnp.clip(idx, 0, n - 1)

    mjd_lo = eop.mjd[idx_lo]
    mjd_hi = eop.mjd[idx_hi]
    val_lo = values[idx_lo]
    val_hi = values[idx_hi]

    # frac=0 when the bracket collapses at either end of the table
    dmjd = mjd_hi - mjd_lo
    frac = jnp.where(dmjd > 0.0, (mjd - mjd_lo) / jnp.where(dmjd > 0.0, dmjd, 1.0), 0.0)
    interpolated = val_lo + frac * (val_hi - val_lo)

    if extrapolation == EOPExtrapolation.ZERO:
        in_range = (mjd >= eop.mjd_min) & (mjd <= eop.mjd_max)
        return jnp.where(in_range, interpolated, 0.0)
    return interpolated


def get_ut1_utc(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Array:
    """Query UT1-UTC offset at the given MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        UT1-UTC offset [seconds].

    Examples:
        ```python
        from framejax.eop import zero_eop, get_ut1_utc
        eop = zero_eop()
        ut1_utc = get_ut1_utc(eop, 59569.0)
        ```
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    return _interpolate_scalar(eop, mjd, eop.ut1_utc, extrapolation)


def get_pm(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> tuple[Array, Array]:
    """Query polar motion components at the given MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Tuple of (pm_x, pm_y) polar motion components [rad].
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    pm_x = _interpolate_scalar(eop, mjd, eop.pm_x, extrapolation)
    pm_y = _interpolate_scalar(eop, mjd, eop.pm_y, extrapolation)
    return pm_x, pm_y


def get_lod(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Array:
    """Query length-of-day excess at the given MJD.

    Past the last LOD sample of an IERS file the final value is held (see
    :func:`~framejax.eop.load_eop_from_file`).

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Length of day excess [seconds].
    """
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    return _interpolate_scalar(eop, mjd, eop.lod, extrapolation)


def get_dxdy(
    eop: EOPIau2000A,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> tuple[Array, Array]:
    """Query the CIP offsets dX, dY at the given MJD.

    Args:
        eop: IAU 2000A EOP dataset.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Tuple of (dX, dY) celestial pole offsets [rad].

    Raises:
        EOPModelMismatchError: If *eop* is an IAU 1980 dataset.
    """
    if not isinstance(eop, EOPIau2000A):
        raise EOPModelMismatchError("dX/dY offsets require an IAU 2000A EOP dataset")
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    dx = _interpolate_scalar(eop, mjd, eop.dX, extrapolation)
    dy = _interpolate_scalar(eop, mjd, eop.dY, extrapolation)
    return dx, dy


def get_nutation_corrections(
    eop: EOPIau1980,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> tuple[Array, Array]:
    """Query the IAU 1980 nutation corrections dPsi, dEps at the given MJD.

    Args:
        eop: IAU 1980 EOP dataset.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Tuple of (dpsi, deps) nutation corrections [rad].

    Raises:
        EOPModelMismatchError: If *eop* is an IAU 2000A dataset.
    """
    if not isinstance(eop, EOPIau1980):
        raise EOPModelMismatchError("dPsi/dEps corrections require an IAU 1980 EOP dataset")
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    dpsi = _interpolate_scalar(eop, mjd, eop.dpsi, extrapolation)
    deps = _interpolate_scalar(eop, mjd, eop.deps, extrapolation)
    return dpsi, deps


def get_eop(
    eop: EOPData,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Query all EOP values at the given MJD.

    Args:
        eop: EOP dataset.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Tuple of (pm_x, pm_y, ut1_utc, lod, offset_1, offset_2) where the
        offsets are (dpsi, deps) for IAU 1980 data and (dX, dY) for
        IAU 2000A data.  Units: rad, rad, s, s, rad, rad.

    Examples:
        ```python
        from framejax.eop import zero_eop, get_eop
        eop = zero_eop()
        pm_x, pm_y, ut1_utc, lod, dx, dy = get_eop(eop, 59569.0)
        ```
    """
    pm_x, pm_y = get_pm(eop, mjd, extrapolation)
    ut1_utc = get_ut1_utc(eop, mjd, extrapolation)
    lod = get_lod(eop, mjd, extrapolation)
    if isinstance(eop, EOPIau1980):
        c1, c2 = get_nutation_corrections(eop, mjd, extrapolation)
    else:
        c1, c2 = get_dxdy(eop, mjd, extrapolation)
    return pm_x, pm_y, ut1_utc, lod, c1, c2


def get_uncertainty(
    eop: EOPData,
    field: str,
    mjd: ArrayLike,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Array | None:
    """Query the interpolated uncertainty of one EOP field.

    Args:
        eop: EOP dataset.
        field: Name of the field, e.g. ``"pm_x"``, ``"ut1_utc"`` or ``"dX"``.
        mjd: Modified Julian Date (UTC) to query.
        extrapolation: Extrapolation mode for out-of-range queries.

    Returns:
        Interpolated 1-sigma uncertainty in the field's units, or ``None``
        when the dataset carries no uncertainty for *field*.

    Raises:
        ValueError: If *field* is not a field of *eop*.
    """
    err_name = f"{field}_err"
    if err_name not in eop._fields:
        raise ValueError(f"{type(eop).__name__} has no field '{field}'")
    values = getattr(eop, err_name)
    if values is None:
        return None
    mjd = jnp.asarray(mjd, dtype=eop.mjd.dtype)
    return _interpolate_scalar(eop, mjd, values, extrapolation)
