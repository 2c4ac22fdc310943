"""IAU 2006/2000 equinox-based celestial rotations.

The chain ``GCRF -> MJ2000 -> MOD06 -> ERS``:

- **GCRF -> MJ2000**: frame bias ``B``
- **MJ2000 -> MOD06**: precession, ``PB . B^T``
- **MOD06 -> ERS**: nutation, ``NPB . (PB)^T``

``ERS`` (true equator and equinox of date) is linked to the CIO-based
``CIRS`` by the equation of the origins, so the two IAU 2006 sub-chains
can be crossed without going back to the GCRF.

Celestial pole offsets dX, dY are turned into nutation corrections with
``ddpsi = dX / sin(eps_A)`` and ``ddeps = dY``.

Uses routines and computations derived from software provided by SOFA
under license. Does not itself constitute software provided by and/or
endorsed by SOFA.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax.rotations import Representation, Rotation, compose_rotations, elementary_rotation
from framejax.series import (
    bias_precession_iau2006,
    bias_precession_nutation_iau2006,
    bpn2xy,
    cio_locator_s,
    equation_of_origins,
    frame_bias_iau2006,
    obliquity_iau2006,
)


def nutation_corrections_from_pole_offsets(
    jd_tt: ArrayLike, dX: ArrayLike = 0.0, dY: ArrayLike = 0.0
) -> tuple[Array, Array]:
    """Convert CIP offsets to corrections of the nutation angles.

    Args:
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].

    Returns:
        Tuple ``(ddpsi, ddeps)`` [rad].
    """
    return dX / jnp.sin(obliquity_iau2006(jd_tt)), jnp.asarray(dY)


def _npb(jd_tt, dX, dY, representation):
    ddpsi, ddeps = nutation_corrections_from_pole_offsets(jd_tt, dX, dY)
    return bias_precession_nutation_iau2006(jd_tt, ddpsi, ddeps, representation)


# ---------------------------------------------------------------------------
# Bias and precession
# ---------------------------------------------------------------------------


def rotation_gcrf_to_mj2000_iau2006(
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the GCRF to the mean equator and equinox of J2000.0 (frame bias)."""
    return frame_bias_iau2006(representation)


def rotation_mj2000_to_gcrf_iau2006(
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the MJ2000 frame to the GCRF."""
    return frame_bias_iau2006(representation).inverse()


def rotation_mj2000_to_mod06_iau2006(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the MJ2000 frame to the mean equator and equinox of date.

    Args:
        jd_tt: Julian Date (TT).
        representation: Output representation.

    Returns:
        The MJ2000 -> MOD06 rotation (IAU 2006 precession).
    """
    return compose_rotations(
        frame_bias_iau2006(representation).inverse(),
        bias_precession_iau2006(jd_tt, representation),
    )


def rotation_mod06_to_mj2000_iau2006(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the MOD06 frame to the MJ2000 frame."""
    return rotation_mj2000_to_mod06_iau2006(jd_tt, representation).inverse()


def rotation_gcrf_to_mod06_iau2006(
    jd_tt: ArrayLike, representation: Representation = Representation.MATRIX
) -> Rotation:
    """Rotation from the GCRF to the MOD06 frame (bias and precession)."""
    return bias_precession_iau2006(jd_tt, representation)


# ---------------------------------------------------------------------------
# Nutation
# ---------------------------------------------------------------------------


def rotation_mod06_to_ers_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the MOD06 frame to the Earth Reference System (true of date).

    Args:
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].
        representation: Output representation.

    Returns:
        The MOD06 -> ERS rotation (IAU 2000 nutation with P03 adjustments).
    """
    return compose_rotations(
        bias_precession_iau2006(jd_tt, representation).inverse(),
        _npb(jd_tt, dX, dY, representation),
    )


def rotation_ers_to_mod06_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the ERS to the MOD06 frame."""
    return rotation_mod06_to_ers_iau2006(jd_tt, dX, dY, representation).inverse()


def rotation_gcrf_to_ers_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the GCRF to the ERS (bias-precession-nutation ``NPB``)."""
    return _npb(jd_tt, dX, dY, representation)


# ---------------------------------------------------------------------------
# Bridge to the CIO-based chain
# ---------------------------------------------------------------------------


def equation_of_origins_iau2006(
    jd_tt: ArrayLike, dX: ArrayLike = 0.0, dY: ArrayLike = 0.0
) -> Array:
    """Equation of the origins, IAU 2006.

    The CIO locator is evaluated from the model CIP coordinates and the
    NPB matrix includes the pole offsets.

    Args:
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].

    Returns:
        Equation of the origins [rad].
    """
    x, y = bpn2xy(bias_precession_nutation_iau2006(jd_tt).to_matrix())
    s = cio_locator_s(jd_tt, x, y)
    rnpb = _npb(jd_tt, dX, dY, Representation.MATRIX).to_matrix()
    return equation_of_origins(rnpb, s)


def rotation_cirs_to_ers_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the CIRS to the ERS, ``Rz(EO)``.

    Args:
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].
        representation: Output representation.

    Returns:
        The CIRS -> ERS rotation.
    """
    return elementary_rotation("Z", equation_of_origins_iau2006(jd_tt, dX, dY), representation)


def rotation_ers_to_cirs_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the ERS to the CIRS, ``Rz(-EO)``."""
    return elementary_rotation("Z", -equation_of_origins_iau2006(jd_tt, dX, dY), representation)
