"""Time scales and Earth-orientation values at one epoch.

Every rotation builder in the composer needs the same handful of
quantities derived from a UTC Julian Date and an EOP dataset: the TT and
UT1 Julian Dates, the polar motion, the length of day and the celestial
pole offsets.  :func:`earth_orientation` evaluates them once per epoch.

When no EOP dataset is given ("no-EOP mode") all corrections are zero and
UT1 is approximated by UTC.  Datasets loaded from IERS files carry no
NaN (missing samples are held, see
:func:`~framejax.eop.load_eop_from_file`); any NaN left in a dataset built
by hand is replaced by zero.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax.config import get_dtype
from framejax.constants import JD_MJD_OFFSET
from framejax.eop._lookup import get_eop
from framejax.eop._types import EOPData, EOPExtrapolation
from framejax.time import jd_utc_to_tt, jd_utc_to_ut1

logger = logging.getLogger(__name__)


class EarthOrientation(NamedTuple):
    """Time scales and Earth-orientation values at one epoch.

    Attributes:
        jd_utc: Julian Date (UTC).
        jd_tt: Julian Date (TT).
        jd_ut1: Julian Date (UT1).
        pm_x: Polar motion x-component [rad].
        pm_y: Polar motion y-component [rad].
        lod: Length of day excess [s].
        offset_1: ``dpsi`` (IAU 1980 data) or ``dX`` (IAU 2000A data) [rad].
        offset_2: ``deps`` (IAU 1980 data) or ``dY`` (IAU 2000A data) [rad].
    """

    jd_utc: Array
    jd_tt: Array
    jd_ut1: Array
    pm_x: Array
    pm_y: Array
    lod: Array
    offset_1: Array
    offset_2: Array


def _finite_or_zero(value: Array) -> Array:
    return jnp.where(jnp.isnan(value), 0.0, value)


def earth_orientation(
    jd_utc: ArrayLike,
    eop: EOPData | None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> EarthOrientation:
    """Evaluate the time scales and EOP values at a UTC epoch.

    Args:
        jd_utc: Julian Date (UTC).
        eop: EOP dataset, or ``None`` for no-EOP mode.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The :class:`EarthOrientation` at *jd_utc*.

    Raises:
        InvalidTimeRangeError: If *jd_utc* is outside the EOP data span and
            *extrapolation* is ``ERROR``.
    """
    jd_utc = jnp.asarray(jd_utc, dtype=get_dtype())
    jd_tt = jd_utc_to_tt(jd_utc)

    if eop is None:
        logger.debug("No EOP data supplied: Earth-orientation corrections set to zero")
        zero = jnp.zeros((), dtype=get_dtype())
        return EarthOrientation(jd_utc, jd_tt, jd_utc_to_ut1(jd_utc), zero, zero, zero, zero, zero)

    values = get_eop(eop, jd_utc - JD_MJD_OFFSET, extrapolation)
    pm_x, pm_y, ut1_utc, lod, c1, c2 = (_finite_or_zero(v) for v in values)

    return EarthOrientation(
        jd_utc=jd_utc,
        jd_tt=jd_tt,
        jd_ut1=jd_utc_to_ut1(jd_utc, ut1_utc),
        pm_x=pm_x,
        pm_y=pm_y,
        lod=lod,
        offset_1=c1,
        offset_2=c2,
    )
