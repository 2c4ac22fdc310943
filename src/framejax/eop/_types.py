"""Type definitions for Earth Orientation Parameters (EOP).

Provides the core data types for EOP storage and lookup:

- :class:`EOPIau1980`: EOP tables whose celestial pole offsets are the
  nutation corrections ``dpsi``/``deps`` consumed by the FK5 chain.
- :class:`EOPIau2000A`: EOP tables whose celestial pole offsets are the
  CIP corrections ``dX``/``dY`` consumed by the IAU 2006 chains.
- :class:`EOPModel`: Selects which of the two layouts a file or factory
  produces.
- :class:`EOPExtrapolation`: Controls behavior when querying outside the
  data range.

Both datasets are :class:`~typing.NamedTuple` instances, which JAX treats
as pytrees automatically, so they can be passed straight through
``jax.jit`` and ``jax.vmap``.  Uncertainty fields default to ``None``
(an empty pytree) when the source carries no error columns.

Units are SI throughout: angles in radians, times in seconds.
"""

from __future__ import annotations

import enum
from typing import NamedTuple, Union

from jax import Array


class EOPIau1980(NamedTuple):
    """Earth Orientation Parameters relative to the IAU 1980 nutation theory.

    Attributes:
        mjd: Sorted Modified Julian Dates (UTC), shape ``(N,)``.
        pm_x: Polar motion x-component [rad], shape ``(N,)``.
        pm_y: Polar motion y-component [rad], shape ``(N,)``.
        ut1_utc: UT1-UTC offset [s], shape ``(N,)``.
        lod: Length of day excess [s], shape ``(N,)``. Missing samples are held.
        dpsi: Nutation correction in longitude [rad]. Missing samples are held.
        deps: Nutation correction in obliquity [rad]. Missing samples are held.
        mjd_min: Scalar, first MJD in the dataset.
        mjd_max: Scalar, last MJD in the dataset.
        pm_x_err: Optional uncertainty of ``pm_x`` [rad].
        pm_y_err: Optional uncertainty of ``pm_y`` [rad].
        ut1_utc_err: Optional uncertainty of ``ut1_utc`` [s].
        lod_err: Optional uncertainty of ``lod`` [s].
        dpsi_err: Optional uncertainty of ``dpsi`` [rad].
        deps_err: Optional uncertainty of ``deps`` [rad].
    """

    mjd: Array
    pm_x: Array
    pm_y: Array
    ut1_utc: Array
    lod: Array
    dpsi: Array
    deps: Array
    mjd_min: Array
    mjd_max: Array
    pm_x_err: Array | None = None
    pm_y_err: Array | None = None
    ut1_utc_err: Array | None = None
    lod_err: Array | None = None
    dpsi_err: Array | None = None
    deps_err: Array | None = None


class EOPIau2000A(NamedTuple):
    """Earth Orientation Parameters relative to the IAU 2000A theory.

    Attributes:
        mjd: Sorted Modified Julian Dates (UTC), shape ``(N,)``.
        pm_x: Polar motion x-component [rad], shape ``(N,)``.
        pm_y: Polar motion y-component [rad], shape ``(N,)``.
        ut1_utc: UT1-UTC offset [s], shape ``(N,)``.
        lod: Length of day excess [s], shape ``(N,)``. Missing samples are held.
        dX: Celestial pole offset X [rad]. Missing samples are held.
        dY: Celestial pole offset Y [rad]. Missing samples are held.
        mjd_min: Scalar, first MJD in the dataset.
        mjd_max: Scalar, last MJD in the dataset.
        pm_x_err: Optional uncertainty of ``pm_x`` [rad].
        pm_y_err: Optional uncertainty of ``pm_y`` [rad].
        ut1_utc_err: Optional uncertainty of ``ut1_utc`` [s].
        lod_err: Optional uncertainty of ``lod`` [s].
        dX_err: Optional uncertainty of ``dX`` [rad].
        dY_err: Optional uncertainty of ``dY`` [rad].
    """

    mjd: Array
    pm_x: Array
    pm_y: Array
    ut1_utc: Array
    lod: Array
    dX: Array
    dY: Array
    mjd_min: Array
    mjd_max: Array
    pm_x_err: Array | None = None
    pm_y_err: Array | None = None
    ut1_utc_err: Array | None = None
    lod_err: Array | None = None
    dX_err: Array | None = None
    dY_err: Array | None = None


EOPData = Union[EOPIau1980, EOPIau2000A]
"""Either EOP layout."""


class EOPModel(enum.Enum):
    """Theory the celestial pole offsets of an EOP dataset refer to.

    Attributes:
        IAU1980: Offsets are ``dpsi``/``deps`` (IERS ``finals.all`` files).
        IAU2000A: Offsets are ``dX``/``dY`` (IERS ``finals2000A`` files).
    """

    IAU1980 = "IAU1980"
    IAU2000A = "IAU2000A"


class EOPExtrapolation(enum.Enum):
    """Behavior for EOP queries outside the data range.

    Resolved at trace time (Python value), not at runtime.

    Attributes:
        ERROR: Raise :class:`~framejax.errors.InvalidTimeRangeError` when the
            query epoch is concrete and out of range.  Under ``jax.jit`` the
            epoch is abstract and cannot be checked, so the boundary value is
            held instead.
        HOLD: Clamp to the nearest boundary value.
        ZERO: Return zero for out-of-range queries.
    """

    ERROR = "error"
    HOLD = "hold"
    ZERO = "zero"


def eop_model(eop: EOPData) -> EOPModel:
    """Return the :class:`EOPModel` of an EOP dataset.

    Args:
        eop: EOP dataset.

    Returns:
        The model its celestial pole offsets refer to.

    Raises:
        TypeError: If *eop* is not an EOP dataset.
    """
    if isinstance(eop, EOPIau1980):
        return EOPModel.IAU1980
    if isinstance(eop, EOPIau2000A):
        return EOPModel.IAU2000A
    raise TypeError(f"Expected EOPIau1980 or EOPIau2000A, got {type(eop).__name__}")
