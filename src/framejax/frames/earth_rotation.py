"""Earth rotation and polar motion.

Rotations between the Earth-fixed frames and the intermediate
(of-date) inertial frames:

- **ITRF <-> PEF** (FK5): polar motion
- **ITRF <-> TIRS** (IAU 2006): polar motion with the TIO locator s'
- **PEF <-> TOD** (FK5): Greenwich Apparent Sidereal Time (IAU 1982 GMST
  plus the IAU 1994 equation of the equinoxes)
- **TIRS <-> CIRS** (IAU 2006): Earth Rotation Angle
- **TIRS <-> ERS** (IAU 2006): Greenwich Apparent Sidereal Time
  ``ERA - EO``

Plus :func:`earth_angular_velocity`, the LOD-corrected rotation rate used
by the state-vector transformations.

Polar motion is built from exact elementary rotations rather than the
small-angle approximation; the two agree to second order in ``x_p, y_p``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax.config import get_dtype
from framejax.constants import OMEGA_EARTH, SECONDS_PER_DAY
from framejax.frames.iau2006_equinox import equation_of_origins_iau2006
from framejax.rotations import Representation, Rotation, elementary_rotation, rotation_sequence
from framejax.series import (
    earth_rotation_angle,
    equation_of_equinoxes_iau1994,
    gmst_iau1982,
    tio_locator_sp,
)

# ---------------------------------------------------------------------------
# Polar motion
# ---------------------------------------------------------------------------


def rotation_itrf_to_pef_fk5(
    x_p: ArrayLike, y_p: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the ITRF to the Pseudo-Earth Fixed frame.

    Args:
        x_p: Polar motion x-component [rad].
        y_p: Polar motion y-component [rad].
        representation: Output representation.

    Returns:
        The ITRF -> PEF rotation ``Ry(x_p) Rx(y_p)``.
    """
    return rotation_sequence((y_p, x_p), "XY", representation)


def rotation_pef_to_itrf_fk5(
    x_p: ArrayLike, y_p: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the Pseudo-Earth Fixed frame to the ITRF."""
    return rotation_sequence((-x_p, -y_p), "YX", representation)


def rotation_itrf_to_tirs_iau2006(
    jd_tt: ArrayLike,
    x_p: ArrayLike,
    y_p: ArrayLike,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the ITRF to the Terrestrial Intermediate Reference System.

    Args:
        jd_tt: Julian Date (TT), for the TIO locator s'.
        x_p: Polar motion x-component [rad].
        y_p: Polar motion y-component [rad].
        representation: Output representation.

    Returns:
        The ITRF -> TIRS rotation ``Rz(-s') Ry(x_p) Rx(y_p)``.
    """
    sp = tio_locator_sp(jd_tt)
    return rotation_sequence((y_p, x_p, -sp), "XYZ", representation)


def rotation_tirs_to_itrf_iau2006(
    jd_tt: ArrayLike,
    x_p: ArrayLike,
    y_p: ArrayLike,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the TIRS to the ITRF (the IAU SOFA polar motion matrix)."""
    sp = tio_locator_sp(jd_tt)
    return rotation_sequence((sp, -x_p, -y_p), "ZYX", representation)


# ---------------------------------------------------------------------------
# Sidereal rotation (FK5)
# ---------------------------------------------------------------------------


def gast_iau1994(jd_ut1: ArrayLike, jd_tt: ArrayLike, ddpsi: ArrayLike = 0.0) -> Array:
    """Greenwich Apparent Sidereal Time, IAU 1982 GMST + IAU 1994 equation of the equinoxes.

    Args:
        jd_ut1: Julian Date (UT1).
        jd_tt: Julian Date (TT).
        ddpsi: EOP correction to the nutation in longitude [rad].

    Returns:
        GAST in radians.
    """
    return gmst_iau1982(jd_ut1) + equation_of_equinoxes_iau1994(jd_tt, ddpsi)


def rotation_pef_to_tod_fk5(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the Pseudo-Earth Fixed frame to the True of Date frame.

    Args:
        jd_ut1: Julian Date (UT1).
        jd_tt: Julian Date (TT).
        ddpsi: EOP correction to the nutation in longitude [rad].
        representation: Output representation.

    Returns:
        The PEF -> TOD rotation ``Rz(-GAST)``.
    """
    return elementary_rotation("Z", -gast_iau1994(jd_ut1, jd_tt, ddpsi), representation)


def rotation_tod_to_pef_fk5(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the True of Date frame to the Pseudo-Earth Fixed frame."""
    return elementary_rotation("Z", gast_iau1994(jd_ut1, jd_tt, ddpsi), representation)


# ---------------------------------------------------------------------------
# Earth rotation (IAU 2006)
# ---------------------------------------------------------------------------


def rotation_tirs_to_cirs_iau2006(
    jd_ut1: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the TIRS to the Celestial Intermediate Reference System.

    Args:
        jd_ut1: Julian Date (UT1).
        representation: Output representation.

    Returns:
        The TIRS -> CIRS rotation ``Rz(-ERA)``.
    """
    return elementary_rotation("Z", -earth_rotation_angle(jd_ut1), representation)


def rotation_cirs_to_tirs_iau2006(
    jd_ut1: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the CIRS to the TIRS, ``Rz(ERA)``."""
    return elementary_rotation("Z", earth_rotation_angle(jd_ut1), representation)


def gast_iau2006(
    jd_ut1: ArrayLike, jd_tt: ArrayLike, dX: ArrayLike = 0.0, dY: ArrayLike = 0.0
) -> Array:
    """Greenwich Apparent Sidereal Time, IAU 2006 (``ERA - EO``).

    Args:
        jd_ut1: Julian Date (UT1).
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].

    Returns:
        GAST in radians.
    """
    return earth_rotation_angle(jd_ut1) - equation_of_origins_iau2006(jd_tt, dX, dY)


def rotation_tirs_to_ers_iau2006(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the TIRS to the Earth Reference System (true equinox of date).

    Args:
        jd_ut1: Julian Date (UT1).
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].
        representation: Output representation.

    Returns:
        The TIRS -> ERS rotation ``Rz(-GAST)``.
    """
    return elementary_rotation("Z", -gast_iau2006(jd_ut1, jd_tt, dX, dY), representation)


def rotation_ers_to_tirs_iau2006(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the ERS to the TIRS, ``Rz(GAST)``."""
    return elementary_rotation("Z", gast_iau2006(jd_ut1, jd_tt, dX, dY), representation)


# ---------------------------------------------------------------------------
# Angular velocity
# ---------------------------------------------------------------------------


def earth_angular_velocity(lod: ArrayLike = 0.0) -> Array:
    """Earth's angular velocity vector in an Earth-fixed frame.

    Args:
        lod: Length of day excess [s].

    Returns:
        ``[0, 0, OMEGA_EARTH * (1 - lod / 86400)]`` [rad/s].
    """
    dtype = get_dtype()
    omega = OMEGA_EARTH * (1.0 - jnp.asarray(lod, dtype=dtype) / SECONDS_PER_DAY)
    return jnp.array([0.0, 0.0, omega], dtype=dtype)
