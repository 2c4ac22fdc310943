"""Precession, nutation and Earth-rotation series.

JAX implementations of the classical IAU 1976/1980/1982/1994 expressions
used by the FK5 reduction and of the IAU 2006/2000 expressions used by
the CIO-based and equinox-based IAU 2006 reductions.  The IAU 2006
routines follow the structure of the IAU SOFA library.  Uses routines and
computations derived from software provided by SOFA under license to the
user. Does not itself constitute software provided by and/or endorsed by
SOFA.

Every function is a pure function of its (scalar) time argument and is
traceable under ``jax.jit``.  Times are single-part Julian Dates; all
angles are returned in radians.

All functions respect :func:`~framejax.config.get_dtype` for float
precision.  Accurate results need ``float64``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax import _nutation_iau2000a_data as nutation_data
from framejax import _series_data as data
from framejax.config import get_dtype
from framejax.constants import DAYS_PER_JULIAN_CENTURY, JD2000
from framejax.fundamental_arguments import (
    D2PI,
    DAS2R,
    cio_arguments,
    delaunay_iau1980,
    luni_solar_arguments,
    planetary_arguments,
)
from framejax.rotations import Representation, Rotation, rotation_sequence

# Units of 0.1 mas to radians (IAU 1980 series)
_U1980: float = DAS2R * 1e-4

# Units of 0.1 uas to radians (IAU 2000 series)
_U2R: float = DAS2R / 1e7


def julian_centuries(jd: ArrayLike) -> Array:
    """Julian centuries elapsed since J2000.0.

    Args:
        jd: Julian Date in any time scale.

    Returns:
        ``(jd - 2451545.0) / 36525``.
    """
    return (jnp.asarray(jd, dtype=get_dtype()) - JD2000) / DAYS_PER_JULIAN_CENTURY


# ---------------------------------------------------------------------------
# Generic series evaluator
# ---------------------------------------------------------------------------


def evaluate_series(multipliers: Array, amplitudes: Array, arguments: Array) -> Array:
    """Evaluate a trigonometric series.

    Computes ``sum_i a_i * sin(n_i . phi) + b_i * cos(n_i . phi)`` with all
    terms summed in table order.

    Args:
        multipliers: Integer argument multipliers, shape ``(N, K)``.
        amplitudes: Sine and cosine amplitudes, shape ``(N, 2)``.
        arguments: Fundamental arguments, shape ``(K,)``.

    Returns:
        The series value (same unit as *amplitudes*).
    """
    args = multipliers @ arguments
    return jnp.sum(amplitudes[:, 0] * jnp.sin(args) + amplitudes[:, 1] * jnp.cos(args))


# ---------------------------------------------------------------------------
# IAU 1976/1980 (FK5)
# ---------------------------------------------------------------------------


def obliquity_iau1976(jd_tt: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 1976.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Mean obliquity in radians.
    """
    t = julian_centuries(jd_tt)
    return (84381.448 + t * (-46.8150 + t * (-0.00059 + t * 0.001813))) * DAS2R


def precession_iau1976(jd_tt: ArrayLike) -> tuple[Array, Array, Array]:
    """Equatorial precession angles, IAU 1976.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Tuple ``(zeta, theta, z)`` in radians.

    References:

        1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2013, eq. 3-88.
    """
    t = julian_centuries(jd_tt)
    zeta = t * (2306.2181 + t * (0.30188 + t * 0.017998))
    theta = t * (2004.3109 + t * (-0.42665 + t * (-0.041833)))
    z = t * (2306.2181 + t * (1.09468 + t * 0.018203))
    return zeta * DAS2R, theta * DAS2R, z * DAS2R


def nutation_iau1980(jd_tt: ArrayLike) -> tuple[Array, Array, Array]:
    """Nutation, IAU 1980 theory (106 terms).

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Tuple ``(mean_obliquity, deps, dpsi)`` in radians: the IAU 1976
        mean obliquity, the nutation in obliquity and the nutation in
        longitude.  EOP corrections are not included.
    """
    dtype = get_dtype()
    t = julian_centuries(jd_tt)

    fa = jnp.array(delaunay_iau1980(t))
    table = jnp.array(data.NUTATION_IAU1980, dtype=dtype)

    # Rates are per Julian millennium
    tm = t / 10.0
    dpsi_amp = jnp.stack([table[:, 5] + table[:, 6] * tm, jnp.zeros_like(table[:, 5])], axis=1)
    deps_amp = jnp.stack([jnp.zeros_like(table[:, 7]), table[:, 7] + table[:, 8] * tm], axis=1)

    dpsi = evaluate_series(table[:, :5], dpsi_amp, fa) * _U1980
    deps = evaluate_series(table[:, :5], deps_amp, fa) * _U1980

    return obliquity_iau1976(jd_tt), deps, dpsi


def gmst_iau1982(jd_ut1: ArrayLike) -> Array:
    """Greenwich Mean Sidereal Time, IAU 1982.

    Args:
        jd_ut1: Julian Date (UT1).

    Returns:
        GMST in radians, in ``[0, 2*pi)``.
    """
    t = julian_centuries(jd_ut1)
    gmst = 67310.54841 + t * ((876600.0 * 3600.0 + 8640184.812866) + t * (0.093104 + t * (-6.2e-6)))
    return jnp.mod(gmst, 86400.0) * (jnp.pi / 43200.0)


def equation_of_equinoxes_iau1994(jd_tt: ArrayLike, ddpsi: ArrayLike = 0.0) -> Array:
    """Equation of the equinoxes, IAU 1994 (with the 1997 lunar node terms).

    Args:
        jd_tt: Julian Date (TT).
        ddpsi: EOP correction to the nutation in longitude [rad].

    Returns:
        Equation of the equinoxes in radians.
    """
    t = julian_centuries(jd_tt)
    mean_obliquity, _, dpsi = nutation_iau1980(jd_tt)

    # Mean longitude of the Moon's ascending node (degrees)
    om = 125.04452222 + t * (-(5.0 * 360.0 + 134.1362608) + t * (0.0020708 + t * 2.2e-6))
    om = jnp.mod(om, 360.0) * (jnp.pi / 180.0)

    return (dpsi + ddpsi) * jnp.cos(mean_obliquity) + (
        0.002640 * jnp.sin(om) + 0.000063 * jnp.sin(2.0 * om)
    ) * DAS2R


# ---------------------------------------------------------------------------
# IAU 2006 precession
# ---------------------------------------------------------------------------


def obliquity_iau2006(jd_tt: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 2006 precession.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Obliquity of the ecliptic in radians.
    """
    t = julian_centuries(jd_tt)
    eps0 = 84381.406 + t * (
        -46.836769 + t * (-0.0001831 + t * (0.00200340 + t * (-0.000000576 + t * (-0.0000000434))))
    )
    return eps0 * DAS2R


def precession_fw_iau2006(jd_tt: ArrayLike) -> tuple[Array, Array, Array, Array]:
    """Precession angles, IAU 2006, Fukushima-Williams 4-angle formulation.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Tuple of ``(gamb, phib, psib, epsa)`` in radians.
    """
    t = julian_centuries(jd_tt)

    gamb = (
        -0.052928
        + t * (10.556378 + t * (0.4932044 + t * (-0.00031238 + t * (-0.000002788 + t * (0.0000000260)))))
    ) * DAS2R

    phib = (
        84381.412819
        + t * (-46.811016 + t * (0.0511268 + t * (0.00053289 + t * (-0.000000440 + t * (-0.0000000176)))))
    ) * DAS2R

    psib = (
        -0.041775
        + t * (5038.481484 + t * (1.5584175 + t * (-0.00018522 + t * (-0.000026452 + t * (-0.0000000148)))))
    ) * DAS2R

    epsa = obliquity_iau2006(jd_tt)

    return gamb, phib, psib, epsa


# ---------------------------------------------------------------------------
# IAU 2000A / 2006 nutation
# ---------------------------------------------------------------------------


def nutation_iau2000a(jd_tt: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 2000A model (MHB2000 luni-solar and planetary).

    Evaluates all 678 luni-solar and 687 planetary terms with one matmul
    per table.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Tuple of ``(dpsi, deps)`` nutation in longitude and obliquity [radians].
    """
    dtype = get_dtype()
    t = julian_centuries(jd_tt)

    # Luni-solar terms, with the secular rates of the leading amplitudes
    ls = jnp.array(nutation_data.NUTATION_IAU2000A_LUNI_SOLAR, dtype=dtype)
    ls_dpsi = jnp.stack([ls[:, 5] + ls[:, 6] * t, ls[:, 7]], axis=1)
    ls_deps = jnp.stack([ls[:, 10], ls[:, 8] + ls[:, 9] * t], axis=1)
    fa = luni_solar_arguments(t)
    dpsi_ls = evaluate_series(ls[:, :5], ls_dpsi, fa)
    deps_ls = evaluate_series(ls[:, :5], ls_deps, fa)

    # Planetary terms
    pl = jnp.array(nutation_data.NUTATION_IAU2000A_PLANETARY, dtype=dtype)
    pa = planetary_arguments(t)
    dpsi_pl = evaluate_series(pl[:, :13], pl[:, 13:15], pa)
    deps_pl = evaluate_series(pl[:, :13], pl[:, 15:17], pa)

    return (dpsi_ls + dpsi_pl) * _U2R, (deps_ls + deps_pl) * _U2R


def nutation_iau2006(jd_tt: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 2006/2000A.

    Applies the P03 adjustments to the IAU 2000A nutation: the correction
    for the J2 secular rate and, in longitude, the rescaling to the P03
    value of the precession rate.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Tuple of ``(dpsi, deps)`` nutation in longitude and obliquity [radians].
    """
    t = julian_centuries(jd_tt)
    fj2 = -2.7774e-6 * t

    dp, de = nutation_iau2000a(jd_tt)

    return dp * (1.0 + 0.4697e-6 + fj2), de * (1.0 + fj2)


# ---------------------------------------------------------------------------
# Fukushima-Williams angles to rotation
# ---------------------------------------------------------------------------


def fw2m(
    gamb: ArrayLike,
    phib: ArrayLike,
    psi: ArrayLike,
    eps: ArrayLike,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Fukushima-Williams angles to rotation.

    Forms ``R_1(-eps) . R_3(-psi) . R_1(phib) . R_3(gamb)``, the rotation
    from the GCRS to the frame defined by the angles.

    Args:
        gamb: F-W angle gamma_bar (radians).
        phib: F-W angle phi_bar (radians).
        psi: F-W angle psi (radians).
        eps: F-W angle epsilon (radians).
        representation: Output representation.

    Returns:
        The rotation in the requested representation.
    """
    return rotation_sequence((gamb, phib, -psi, -eps), "ZXZX", representation)


def frame_bias_iau2006(representation: Representation = Representation.MATRIX) -> Rotation:
    """Frame bias from the GCRS to the mean equator and equinox of J2000.0.

    Args:
        representation: Output representation.

    Returns:
        The bias rotation ``B``.
    """
    gamb, phib, psib, epsa = precession_fw_iau2006(JD2000)
    return fw2m(gamb, phib, psib, epsa, representation)


def bias_precession_iau2006(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Bias-precession rotation ``PB`` from the GCRS to the mean equinox of date."""
    gamb, phib, psib, epsa = precession_fw_iau2006(jd_tt)
    return fw2m(gamb, phib, psib, epsa, representation)


def bias_precession_nutation_iau2006(
    jd_tt: ArrayLike,
    ddpsi: ArrayLike = 0.0,
    ddeps: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Bias-precession-nutation rotation ``NPB`` from the GCRS to the true equinox of date.

    Args:
        jd_tt: Julian Date (TT).
        ddpsi: Correction to the nutation in longitude [rad].
        ddeps: Correction to the nutation in obliquity [rad].
        representation: Output representation.

    Returns:
        The ``NPB`` rotation.
    """
    gamb, phib, psib, epsa = precession_fw_iau2006(jd_tt)
    dpsi, deps = nutation_iau2006(jd_tt)
    return fw2m(gamb, phib, psib + dpsi + ddpsi, epsa + deps + ddeps, representation)


# ---------------------------------------------------------------------------
# CIP and CIO
# ---------------------------------------------------------------------------


def bpn2xy(rbpn: Array) -> tuple[Array, Array]:
    """Extract CIP X, Y coordinates from the bias-precession-nutation matrix.

    Args:
        rbpn: 3x3 bias-precession-nutation matrix.

    Returns:
        Tuple of (x, y) CIP coordinates.
    """
    return rbpn[2, 0], rbpn[2, 1]


def cio_locator_s(jd_tt: ArrayLike, x: ArrayLike, y: ArrayLike) -> Array:
    """CIO locator s, IAU 2006 (66-term series).

    The series is actually for s + XY/2. The function subtracts XY/2 to
    return s itself.

    Args:
        jd_tt: Julian Date (TT).
        x: CIP x coordinate.
        y: CIP y coordinate.

    Returns:
        CIO locator s in radians.
    """
    dtype = get_dtype()
    t = julian_centuries(jd_tt)
    fa = cio_arguments(t)

    orders = (
        (data.S06_S0_MULTIPLIERS, data.S06_S0_AMPLITUDES),
        (data.S06_S1_MULTIPLIERS, data.S06_S1_AMPLITUDES),
        (data.S06_S2_MULTIPLIERS, data.S06_S2_AMPLITUDES),
        (data.S06_S3_MULTIPLIERS, data.S06_S3_AMPLITUDES),
        (data.S06_S4_MULTIPLIERS, data.S06_S4_AMPLITUDES),
    )
    w = [
        dtype(data.S06_POLYNOMIAL[k])
        + evaluate_series(jnp.array(nfa, dtype=dtype), jnp.array(sc, dtype=dtype), fa)
        for k, (nfa, sc) in enumerate(orders)
    ]
    w.append(dtype(data.S06_POLYNOMIAL[5]))

    # Horner form, arcseconds to radians
    s = (w[0] + (w[1] + (w[2] + (w[3] + (w[4] + w[5] * t) * t) * t) * t) * t) * DAS2R
    return s - x * y / 2.0


def xys_iau2006(jd_tt: ArrayLike) -> tuple[Array, Array, Array]:
    """CIP X, Y coordinates and CIO locator s, IAU 2006.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        Tuple of ``(x, y, s)`` in radians.  No EOP corrections are applied.
    """
    rbpn = bias_precession_nutation_iau2006(jd_tt).to_matrix()
    x, y = bpn2xy(rbpn)
    return x, y, cio_locator_s(jd_tt, x, y)


def c2ixys(
    x: ArrayLike,
    y: ArrayLike,
    s: ArrayLike,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Form the celestial-to-intermediate rotation given CIP X, Y and CIO locator s.

    Uses ``Rz(-(e+s)) @ Ry(d) @ Rz(e)`` where
    ``d = arctan(sqrt((x^2 + y^2) / (1 - x^2 - y^2)))`` and ``e = atan2(y, x)``.

    Args:
        x: CIP x coordinate.
        y: CIP y coordinate.
        s: CIO locator.
        representation: Output representation.

    Returns:
        The GCRS to CIRS rotation.
    """
    r2 = x * x + y * y
    e = jnp.where(r2 > 0.0, jnp.arctan2(y, x), 0.0)
    d = jnp.arctan(jnp.sqrt(r2 / (1.0 - r2)))
    return rotation_sequence((e, d, -(e + s)), "ZYZ", representation)


def equation_of_origins(rnpb: Array, s: ArrayLike) -> Array:
    """Equation of the origins, given the NPB matrix and the CIO locator.

    Args:
        rnpb: 3x3 bias-precession-nutation matrix.
        s: CIO locator [rad].

    Returns:
        Equation of the origins (ERA - GST) in radians.
    """
    x = rnpb[2, 0]
    ax = x / (1.0 + rnpb[2, 2])
    xs = 1.0 - ax * x
    ys = -ax * rnpb[2, 1]
    zs = -x
    p = rnpb[0, 0] * xs + rnpb[0, 1] * ys + rnpb[0, 2] * zs
    q = rnpb[1, 0] * xs + rnpb[1, 1] * ys + rnpb[1, 2] * zs
    return jnp.where((p != 0.0) | (q != 0.0), s - jnp.arctan2(q, p), s)


# ---------------------------------------------------------------------------
# Earth rotation
# ---------------------------------------------------------------------------


def earth_rotation_angle(jd_ut1: ArrayLike) -> Array:
    """Earth Rotation Angle (IAU 2000 model).

    Args:
        jd_ut1: Julian Date (UT1).

    Returns:
        Earth Rotation Angle in radians (0 to 2*pi).
    """
    jd = jnp.asarray(jd_ut1, dtype=get_dtype())
    t = jd - JD2000
    f = jnp.mod(jd, 1.0)
    return jnp.mod(f + 0.7790572732640 + 0.00273781191135448 * t, 1.0) * D2PI


def tio_locator_sp(jd_tt: ArrayLike) -> Array:
    """TIO locator s', positioning the Terrestrial Intermediate Origin.

    Uses the dominant secular term ``-47 uas * t``.

    Args:
        jd_tt: Julian Date (TT).

    Returns:
        TIO locator s' in radians.
    """
    return -47e-6 * julian_centuries(jd_tt) * DAS2R
