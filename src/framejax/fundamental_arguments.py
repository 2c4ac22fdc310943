"""Fundamental arguments of the luni-solar and planetary series.

All functions take ``t``, Julian centuries of TT since J2000.0, and return
angles in radians reduced to ``[0, 2*pi)`` (the general precession
in longitude is the exception: it is returned unreduced).

Two sets of Delaunay arguments are provided:

- :func:`delaunay_iau1980` -- the IAU 1980 expressions used by the FK5
  nutation series.
- :func:`fal03` .. :func:`faom03` -- the IERS Conventions (2003)
  expressions used by the IAU 2000A nutation and the IAU 2006 CIO
  locator series.

The planetary longitudes :func:`fame03` .. :func:`faur03` complete the
arguments of the 2000A planetary terms, see :func:`planetary_arguments`.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

TURNAS: float = 1296000.0
"""Arcseconds in a full circle."""

DAS2R: float = 4.848136811095359935899141e-6
"""Arcseconds to radians."""

D2PI: float = 6.283185307179586476925287
"""2*pi."""


def _arcsec_to_angle(value: Array) -> Array:
    """Reduce an angle in arcseconds to ``[0, 2*pi)`` radians."""
    return jnp.mod(value, TURNAS) * DAS2R


# ---------------------------------------------------------------------------
# IAU 1980 (FK5) Delaunay arguments
# ---------------------------------------------------------------------------


def delaunay_iau1980(t: Array) -> tuple[Array, Array, Array, Array, Array]:
    """Delaunay arguments of the IAU 1980 nutation theory.

    Each argument is a cubic polynomial in arcseconds plus a whole number
    of revolutions per century.

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        Tuple ``(l, l', F, D, Omega)`` in radians:

        - ``l``: mean anomaly of the Moon
        - ``l'``: mean anomaly of the Sun
        - ``F``: mean argument of latitude of the Moon
        - ``D``: mean elongation of the Moon from the Sun
        - ``Omega``: longitude of the ascending node of the Moon's mean orbit

    References:

        1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2013, eq. 3-82.
    """
    el = 485866.733 + t * (715922.633 + t * (31.310 + t * 0.064)) + 1325.0 * TURNAS * t
    elp = 1287099.804 + t * (1292581.224 + t * (-0.577 + t * (-0.012))) + 99.0 * TURNAS * t
    f = 335778.877 + t * (295263.137 + t * (-13.257 + t * 0.011)) + 1342.0 * TURNAS * t
    d = 1072261.307 + t * (1105601.328 + t * (-6.891 + t * 0.019)) + 1236.0 * TURNAS * t
    om = 450160.280 + t * (-482890.539 + t * (7.455 + t * 0.008)) - 5.0 * TURNAS * t

    return (
        _arcsec_to_angle(el),
        _arcsec_to_angle(elp),
        _arcsec_to_angle(f),
        _arcsec_to_angle(d),
        _arcsec_to_angle(om),
    )

# ---------------------------------------------------------------------------
# IERS Conventions (2003)
# ---------------------------------------------------------------------------


def fal03(t: Array) -> Array:
    """Mean anomaly of the Moon (IERS 2003).

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        l in radians.
    """
    return _arcsec_to_angle(
        485868.249036
        + t * (1717915923.2178 + t * (31.8792 + t * (0.051635 + t * (-0.00024470))))
    )


def falp03(t: Array) -> Array:
    """Mean anomaly of the Sun (IERS 2003).

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        l' in radians.
    """
    return _arcsec_to_angle(
        1287104.793048
        + t * (129596581.0481 + t * (-0.5532 + t * (0.000136 + t * (-0.00001149))))
    )


def faf03(t: Array) -> Array:
    """Mean argument of the latitude of the Moon (IERS 2003).

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        F in radians.
    """
    return _arcsec_to_angle(
        335779.526232
        + t * (1739527262.8478 + t * (-12.7512 + t * (-0.001037 + t * (0.00000417))))
    )


def fad03(t: Array) -> Array:
    """Mean elongation of the Moon from the Sun (IERS 2003).

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        D in radians.
    """
    return _arcsec_to_angle(
        1072260.703692
        + t * (1602961601.2090 + t * (-6.3706 + t * (0.006593 + t * (-0.00003169))))
    )


def faom03(t: Array) -> Array:
    """Mean longitude of the Moon's ascending node (IERS 2003).

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        Omega in radians.
    """
    return _arcsec_to_angle(
        450160.398036 + t * (-6962890.5431 + t * (7.4722 + t * (0.007702 + t * (-0.00005939))))
    )


def fame03(t: Array) -> Array:
    """Mean longitude of Mercury (IERS 2003)."""
    return jnp.mod(4.402608842 + 2608.7903141574 * t, D2PI)


def fave03(t: Array) -> Array:
    """Mean longitude of Venus (IERS 2003)."""
    return jnp.mod(3.176146697 + 1021.3285546211 * t, D2PI)


def fae03(t: Array) -> Array:
    """Mean longitude of Earth (IERS 2003)."""
    return jnp.mod(1.753470314 + 628.3075849991 * t, D2PI)


def fama03(t: Array) -> Array:
    """Mean longitude of Mars (IERS 2003)."""
    return jnp.mod(6.203480913 + 334.0612426700 * t, D2PI)


def faju03(t: Array) -> Array:
    """Mean longitude of Jupiter (IERS 2003)."""
    return jnp.mod(0.599546497 + 52.9690962641 * t, D2PI)


def fasa03(t: Array) -> Array:
    """Mean longitude of Saturn (IERS 2003)."""
    return jnp.mod(0.874016757 + 21.3299104960 * t, D2PI)


def faur03(t: Array) -> Array:
    """Mean longitude of Uranus (IERS 2003)."""
    return jnp.mod(5.481293872 + 7.4781598567 * t, D2PI)


def fapa03(t: Array) -> Array:
    """General accumulated precession in longitude (IERS 2003).

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        General precession in radians (not reduced).
    """
    return (0.024381750 + 0.00000538691 * t) * t


def cio_arguments(t: Array) -> Array:
    """Stack the eight arguments of the CIO locator series.

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        Array ``[l, l', F, D, Omega, LVe, LE, pA]`` of shape ``(8,)``.
    """
    return jnp.array([fal03(t), falp03(t), faf03(t), fad03(t), faom03(t), fave03(t), fae03(t), fapa03(t)])


# ---------------------------------------------------------------------------
# IAU 2000A nutation arguments
# ---------------------------------------------------------------------------


def luni_solar_arguments(t: Array) -> Array:
    """Stack the Delaunay arguments of the IAU 2000A luni-solar series.

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        Array ``[l, l', F, D, Omega]`` of shape ``(5,)``.
    """
    return jnp.array([fal03(t), falp03(t), faf03(t), fad03(t), faom03(t)])


def planetary_arguments(t: Array) -> Array:
    """Stack the thirteen arguments of the IAU 2000A planetary series.

    The lunar arguments and the longitude of Neptune are the linear MHB2000
    expressions; the other planetary longitudes and the general precession
    are the IERS 2003 ones.

    Args:
        t: TT Julian centuries since J2000.0.

    Returns:
        Array ``[l, F, D, Omega, LMe, LVe, LE, LMa, LJu, LSa, LU, LN, pA]``
        of shape ``(13,)``.

    References:

        1. P. M. Mathews, T. A. Herring, B. A. Buffett, *Modeling of nutation
           and precession*, J. Geophys. Res. 107, B4, 2002.
    """
    al = jnp.mod(2.35555598 + 8328.6914269554 * t, D2PI)
    af = jnp.mod(1.627905234 + 8433.466158131 * t, D2PI)
    ad = jnp.mod(5.198466741 + 7771.3771468121 * t, D2PI)
    aom = jnp.mod(2.18243920 - 33.757045 * t, D2PI)
    ane = jnp.mod(5.321159000 + 3.8127774000 * t, D2PI)
    return jnp.array(
        [
            al,
            af,
            ad,
            aom,
            fame03(t),
            fave03(t),
            fae03(t),
            fama03(t),
            faju03(t),
            fasa03(t),
            faur03(t),
            ane,
            fapa03(t),
        ]
    )
