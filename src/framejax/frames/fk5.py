"""IAU-76/FK5 precession-nutation rotations.

Rotations between the inertial frames of the FK5 reduction:

- **GCRF <-> MOD**: IAU 1976 precession
- **MOD <-> TOD**: IAU 1980 nutation, with optional EOP corrections
  ``ddeps`` (obliquity) and ``ddpsi`` (longitude)
- **TOD <-> TEME**: geometric equation of the equinoxes
- **GCRF <-> J2000**: the difference between the GCRF and the mean
  equator and equinox of J2000 as realised by reducing *without* the EOP
  nutation corrections; the two reductions meet at the PEF, so this leg
  also takes the UT1 date

The builders take the TT Julian Date and return a
:class:`~framejax.rotations.RotationMatrix` or
:class:`~framejax.rotations.Quaternion` according to ``representation``.
Each ``rotation_a_to_b`` maps vector components in frame ``a`` to
components in frame ``b``.

References:

    1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, 2013, sec. 3.7.
    2. D. Vallado et al., *Revisiting Spacetrack Report #3*, AIAA 2006-6753.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax.typing import ArrayLike

from framejax.rotations import (
    Representation,
    Rotation,
    compose_rotations,
    elementary_rotation,
    rotation_sequence,
)
from framejax.frames.earth_rotation import rotation_pef_to_tod_fk5, rotation_tod_to_pef_fk5
from framejax.series import nutation_iau1980, precession_iau1976

# ---------------------------------------------------------------------------
# Precession
# ---------------------------------------------------------------------------


def rotation_gcrf_to_mod_fk5(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the GCRF to the Mean of Date frame (IAU 1976 precession).

    Args:
        jd_tt: Julian Date (TT).
        representation: Output representation.

    Returns:
        The GCRF -> MOD rotation ``Rz(-z) Ry(theta) Rz(-zeta)``.
    """
    zeta, theta, z = precession_iau1976(jd_tt)
    return rotation_sequence((-zeta, theta, -z), "ZYZ", representation)


def rotation_mod_to_gcrf_fk5(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the Mean of Date frame to the GCRF.

    Args:
        jd_tt: Julian Date (TT).
        representation: Output representation.

    Returns:
        The MOD -> GCRF rotation.
    """
    zeta, theta, z = precession_iau1976(jd_tt)
    return rotation_sequence((z, -theta, zeta), "ZYZ", representation)


# ---------------------------------------------------------------------------
# Nutation
# ---------------------------------------------------------------------------


def rotation_mod_to_tod_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the Mean of Date to the True of Date frame (IAU 1980 nutation).

    Args:
        jd_tt: Julian Date (TT).
        ddeps: EOP correction to the nutation in obliquity [rad].
        ddpsi: EOP correction to the nutation in longitude [rad].
        representation: Output representation.

    Returns:
        The MOD -> TOD rotation ``Rx(-eps) Rz(-dpsi) Rx(eps0)``.
    """
    mean_obliquity, deps, dpsi = nutation_iau1980(jd_tt)
    true_obliquity = mean_obliquity + deps + ddeps
    return rotation_sequence(
        (mean_obliquity, -(dpsi + ddpsi), -true_obliquity), "XZX", representation
    )


def rotation_tod_to_mod_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the True of Date to the Mean of Date frame.

    Args:
        jd_tt: Julian Date (TT).
        ddeps: EOP correction to the nutation in obliquity [rad].
        ddpsi: EOP correction to the nutation in longitude [rad].
        representation: Output representation.

    Returns:
        The TOD -> MOD rotation.
    """
    return rotation_mod_to_tod_fk5(jd_tt, ddeps, ddpsi, representation).inverse()


# ---------------------------------------------------------------------------
# TEME
# ---------------------------------------------------------------------------


def equation_of_equinoxes_teme(jd_tt: ArrayLike, ddpsi: ArrayLike = 0.0):
    """Geometric equation of the equinoxes separating TOD and TEME.

    Only the ``dpsi * cos(eps0)`` term is used; the 1994 lunar node terms
    are not part of the TEME definition.

    Args:
        jd_tt: Julian Date (TT).
        ddpsi: EOP correction to the nutation in longitude [rad].

    Returns:
        Equation of the equinoxes [rad].
    """
    mean_obliquity, _, dpsi = nutation_iau1980(jd_tt)
    return (dpsi + ddpsi) * jnp.cos(mean_obliquity)


def rotation_tod_to_teme_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the True of Date frame to TEME.

    ``ddeps`` does not change the result; it is accepted so that every
    nutation-dependent builder shares one signature.

    Args:
        jd_tt: Julian Date (TT).
        ddeps: EOP correction to the nutation in obliquity [rad].
        ddpsi: EOP correction to the nutation in longitude [rad].
        representation: Output representation.

    Returns:
        The TOD -> TEME rotation ``Rz(EqEq)``.
    """
    return elementary_rotation("Z", equation_of_equinoxes_teme(jd_tt, ddpsi), representation)


def rotation_teme_to_tod_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from TEME to the True of Date frame, ``Rz(-EqEq)``."""
    return elementary_rotation("Z", -equation_of_equinoxes_teme(jd_tt, ddpsi), representation)


def rotation_mod_to_teme_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the Mean of Date frame to TEME (through TOD)."""
    return compose_rotations(
        rotation_mod_to_tod_fk5(jd_tt, ddeps, ddpsi, representation),
        rotation_tod_to_teme_fk5(jd_tt, ddeps, ddpsi, representation),
    )


def rotation_teme_to_mod_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from TEME to the Mean of Date frame (through TOD)."""
    return rotation_mod_to_teme_fk5(jd_tt, ddeps, ddpsi, representation).inverse()


# ---------------------------------------------------------------------------
# GCRF <-> TOD and J2000
# ---------------------------------------------------------------------------


def rotation_gcrf_to_tod_fk5(
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the GCRF to the True of Date frame (precession then nutation)."""
    return compose_rotations(
        rotation_gcrf_to_mod_fk5(jd_tt, representation),
        rotation_mod_to_tod_fk5(jd_tt, ddeps, ddpsi, representation),
    )


def rotation_gcrf_to_j2000_fk5(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the GCRF to the J2000 frame.

    The J2000 frame is what the FK5 reduction yields when every step is
    computed without the EOP nutation corrections, including the
    sidereal time that carries the earth-fixed frame to the true equator.
    The two reductions share the PEF, so the rotation is::

        GCRF -> TOD (corrected) -> PEF -> TOD' (uncorrected) -> J2000

    and it reduces to the identity when ``ddeps = ddpsi = 0``.

    Args:
        jd_ut1: Julian Date (UT1).
        jd_tt: Julian Date (TT).
        ddeps: EOP correction to the nutation in obliquity [rad].
        ddpsi: EOP correction to the nutation in longitude [rad].
        representation: Output representation.

    Returns:
        The GCRF -> J2000 rotation.
    """
    return compose_rotations(
        rotation_gcrf_to_tod_fk5(jd_tt, ddeps, ddpsi, representation),
        rotation_tod_to_pef_fk5(jd_ut1, jd_tt, ddpsi, representation),
        rotation_pef_to_tod_fk5(jd_ut1, jd_tt, 0.0, representation),
        rotation_tod_to_j2000_fk5(jd_tt, representation),
    )


def rotation_j2000_to_gcrf_fk5(
    jd_ut1: ArrayLike,
    jd_tt: ArrayLike,
    ddeps: ArrayLike = 0.0,
    ddpsi: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the J2000 frame to the GCRF."""
    return rotation_gcrf_to_j2000_fk5(jd_ut1, jd_tt, ddeps, ddpsi, representation).inverse()


def rotation_j2000_to_tod_fk5(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the J2000 frame to the True of Date frame.

    Precession and nutation without EOP corrections.  The result is the
    true equator the uncorrected reduction reaches, which differs from the
    EOP-corrected TOD by the nutation correction in the equation of the
    equinoxes.
    """
    return rotation_gcrf_to_tod_fk5(jd_tt, 0.0, 0.0, representation)


def rotation_tod_to_j2000_fk5(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the uncorrected True of Date frame to the J2000 frame."""
    return rotation_j2000_to_tod_fk5(jd_tt, representation).inverse()
