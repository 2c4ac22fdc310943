"""Orbit state vector transformations between frames.

Positions are rotated directly.  Velocities and accelerations crossing
between an Earth-fixed and an inertial frame also pick up the terms of
the rotating frame, with the Earth's angular velocity

.. math::

    \\boldsymbol{\\omega} = [0, 0, \\omega_\\oplus (1 - \\text{LOD} / 86400)]

expressed in the Earth-fixed intermediate frame (PEF or TIRS):

.. math::

    \\mathbf{r}_{\\text{ECI}} &= D \\, \\mathbf{r}_f \\\\
    \\mathbf{v}_{\\text{ECI}} &= D \\left( \\mathbf{v}_f
        + \\boldsymbol{\\omega} \\times \\mathbf{r}_f \\right) \\\\
    \\mathbf{a}_{\\text{ECI}} &= D \\left( \\mathbf{a}_f
        + 2 \\boldsymbol{\\omega} \\times \\mathbf{v}_f
        + \\boldsymbol{\\omega} \\times (\\boldsymbol{\\omega} \\times \\mathbf{r}_f) \\right)

where ``D`` is the rotation from the intermediate frame to the inertial
frame.  The epoch of the state is never changed.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framejax.config import get_dtype
from framejax.eop._types import EOPData, EOPExtrapolation
from framejax.errors import UnsupportedFramePairError
from framejax.frames._orientation import earth_orientation
from framejax.frames._types import ECEF_FRAMES, ECI_FRAMES, Frame, Theory
from framejax.frames.composer import (
    NO_EOP,
    check_domain,
    earth_fixed_intermediate,
    ecef_chain,
    ecef_to_eci_chain,
    is_same_epoch,
    rotation_ecef_to_ecef,
    rotation_eci_to_eci,
    select_theory,
)
from framejax.frames.earth_rotation import earth_angular_velocity
from framejax.rotations import Representation, Rotation


class OrbitStateVector(NamedTuple):
    """Position, velocity and optional acceleration at an epoch.

    Attributes:
        t: Julian Date (UTC) of the state.
        r: Position vector, shape ``(3,)``.
        v: Velocity vector, shape ``(3,)``.
        a: Acceleration vector, shape ``(3,)``, or ``None``.
    """

    t: Array
    r: Array
    v: Array
    a: Optional[Array] = None


def orbit_state_vector(
    t: ArrayLike, r: ArrayLike, v: ArrayLike, a: ArrayLike | None = None
) -> OrbitStateVector:
    """Build an :class:`OrbitStateVector` with arrays of the configured dtype.

    Args:
        t: Julian Date (UTC).
        r: Position vector.
        v: Velocity vector.
        a: Acceleration vector, or ``None``.

    Returns:
        The state vector.
    """
    dtype = get_dtype()
    return OrbitStateVector(
        t=jnp.asarray(t, dtype=dtype),
        r=jnp.asarray(r, dtype=dtype),
        v=jnp.asarray(v, dtype=dtype),
        a=None if a is None else jnp.asarray(a, dtype=dtype),
    )


def _rotate_state(sv: OrbitStateVector, D: Rotation) -> OrbitStateVector:
    a = None if sv.a is None else D.apply(jnp.asarray(sv.a))
    return OrbitStateVector(sv.t, D.apply(jnp.asarray(sv.r)), D.apply(jnp.asarray(sv.v)), a)


# ---------------------------------------------------------------------------
# Same-domain transformations
# ---------------------------------------------------------------------------


def sv_ecef_to_ecef(
    sv: OrbitStateVector,
    src: Frame,
    dst: Frame,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> OrbitStateVector:
    """Transform a state vector between two Earth-fixed frames.

    Args:
        sv: State in *src*.
        src: Source Earth-fixed frame.
        dst: Target Earth-fixed frame.
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Representation used for the rotation.
        theory: Theory to use when the frames do not determine it.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The state in *dst*.
    """
    D = rotation_ecef_to_ecef(src, dst, sv.t, eop, representation, theory, extrapolation)
    return _rotate_state(sv, D)


def sv_eci_to_eci(
    sv: OrbitStateVector,
    src: Frame,
    dst: Frame,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    jd_utc_dst: ArrayLike | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> OrbitStateVector:
    """Transform a state vector between two inertial frames.

    With *jd_utc_dst* the target frame is evaluated at that epoch (for
    example TOD of a different date).  The epoch of the state itself is
    unchanged.

    Args:
        sv: State in *src*, the source frame being evaluated at ``sv.t``.
        src: Source inertial frame.
        dst: Target inertial frame.
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Representation used for the rotation.
        theory: Theory to use when the frames do not determine it.
        jd_utc_dst: Julian Date (UTC) of the target frame. Default: ``sv.t``.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The state in *dst*.
    """
    D = rotation_eci_to_eci(
        src, dst, sv.t, eop, representation, theory, jd_utc_dst, extrapolation
    )
    return _rotate_state(sv, D)


# ---------------------------------------------------------------------------
# Earth-fixed <-> inertial
# ---------------------------------------------------------------------------


def sv_ecef_to_eci(
    sv: OrbitStateVector,
    src: Frame,
    dst: Frame,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> OrbitStateVector:
    """Transform a state vector from an Earth-fixed to an inertial frame.

    The state is first rotated into the Earth-fixed intermediate frame
    (PEF or TIRS), where the Earth's angular velocity is applied.

    Args:
        sv: State in *src*.
        src: Source Earth-fixed frame.
        dst: Target inertial frame.
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Representation used for the rotations.
        theory: Theory to use when the frames do not determine it.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The state in *dst*.

    Examples:
        ```python
        from framejax.frames import Frame, orbit_state_vector, sv_ecef_to_eci
        sv = orbit_state_vector(2460000.5, [7000.0, 0.0, 0.0], [0.0, 7.5, 0.0])
        sv_gcrf = sv_ecef_to_eci(sv, Frame.ITRF, Frame.GCRF)
        ```
    """
    check_domain(src, dst, ECEF_FRAMES, ECI_FRAMES, "sv_ecef_to_eci")
    src, dst = Frame(src), Frame(dst)
    selected = select_theory(src, dst, eop, theory)
    fixed = earth_fixed_intermediate(selected)
    o = earth_orientation(sv.t, eop, extrapolation)

    P = ecef_chain(selected, src, fixed, o, representation)
    D = ecef_to_eci_chain(selected, fixed, dst, o, representation)
    w = earth_angular_velocity(o.lod)

    r_f = P.apply(jnp.asarray(sv.r))
    v_f = P.apply(jnp.asarray(sv.v))

    r = D.apply(r_f)
    v = D.apply(v_f + jnp.cross(w, r_f))
    a = None
    if sv.a is not None:
        a_f = P.apply(jnp.asarray(sv.a))
        a = D.apply(a_f + 2.0 * jnp.cross(w, v_f) + jnp.cross(w, jnp.cross(w, r_f)))
    return OrbitStateVector(sv.t, r, v, a)


def sv_eci_to_ecef(
    sv: OrbitStateVector,
    src: Frame,
    dst: Frame,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> OrbitStateVector:
    """Transform a state vector from an inertial to an Earth-fixed frame.

    The inverse of :func:`sv_ecef_to_eci`: the rotating-frame terms are
    removed in the Earth-fixed intermediate frame, after rotating.

    Args:
        sv: State in *src*.
        src: Source inertial frame.
        dst: Target Earth-fixed frame.
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Representation used for the rotations.
        theory: Theory to use when the frames do not determine it.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The state in *dst*.
    """
    check_domain(src, dst, ECI_FRAMES, ECEF_FRAMES, "sv_eci_to_ecef")
    src, dst = Frame(src), Frame(dst)
    selected = select_theory(src, dst, eop, theory)
    fixed = earth_fixed_intermediate(selected)
    o = earth_orientation(sv.t, eop, extrapolation)

    D = ecef_to_eci_chain(selected, fixed, src, o, representation).inverse()
    P = ecef_chain(selected, fixed, dst, o, representation)
    w = earth_angular_velocity(o.lod)

    r_f = D.apply(jnp.asarray(sv.r))
    v_f = D.apply(jnp.asarray(sv.v)) - jnp.cross(w, r_f)

    a = None
    if sv.a is not None:
        a_f = D.apply(jnp.asarray(sv.a)) - 2.0 * jnp.cross(w, v_f) - jnp.cross(w, jnp.cross(w, r_f))
        a = P.apply(a_f)
    return OrbitStateVector(sv.t, P.apply(r_f), P.apply(v_f), a)


# ---------------------------------------------------------------------------
# Generic
# ---------------------------------------------------------------------------


def transform_state(
    sv: OrbitStateVector,
    src: Frame,
    dst: Frame,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    jd_utc_dst: ArrayLike | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> OrbitStateVector:
    """Transform a state vector between any two frames.

    Args:
        sv: State in *src*.
        src: Source frame.
        dst: Target frame.
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Representation used for the rotations.
        theory: Theory to use when the frames do not determine it.
        jd_utc_dst: Epoch of the target frame (inertial pairs only).
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The state in *dst*.

    Raises:
        UnsupportedFramePairError: If the frames belong to different
            theories, or *jd_utc_dst* differs from ``sv.t`` for a pair that
            is not inertial-to-inertial.
        EOPModelMismatchError: If *eop* belongs to the other theory.
    """
    src, dst = Frame(src), Frame(dst)
    if src in ECI_FRAMES and dst in ECI_FRAMES:
        return sv_eci_to_eci(sv, src, dst, eop, representation, theory, jd_utc_dst, extrapolation)
    if not is_same_epoch(sv.t, jd_utc_dst):
        raise UnsupportedFramePairError(src, dst, "a second epoch is only defined between inertial frames")
    if src in ECEF_FRAMES and dst in ECEF_FRAMES:
        return sv_ecef_to_ecef(sv, src, dst, eop, representation, theory, extrapolation)
    if src in ECEF_FRAMES:
        return sv_ecef_to_eci(sv, src, dst, eop, representation, theory, extrapolation)
    return sv_eci_to_ecef(sv, src, dst, eop, representation, theory, extrapolation)
