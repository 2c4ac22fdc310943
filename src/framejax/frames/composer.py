"""Frame graph: rotation between any two supported frames.

The composer resolves a ``(source, target)`` pair of :class:`Frame` tags
into a single rotation, built from the per-step builders of
:mod:`~framejax.frames.fk5`, :mod:`~framejax.frames.iau2006_cio`,
:mod:`~framejax.frames.iau2006_equinox` and
:mod:`~framejax.frames.earth_rotation`.

Routing:

- **ECEF <-> ECEF** goes through the ITRF.
- **ECI <-> ECI** goes through the GCRF, except for the direct pairs in
  :data:`ECI_SHORTCUTS` (MOD/TOD/TEME, CIRS/ERS, MJ2000/MOD06/ERS) when
  both sides share one epoch.  Of-date frames may be evaluated at two
  different epochs (``jd_utc`` for the source, ``jd_utc_dst`` for the
  target).
- **ECEF <-> ECI** crosses the Earth rotation between the intermediate
  frames: PEF <-> TOD (FK5), TIRS <-> CIRS (IAU 2006 CIO) or
  TIRS <-> ERS (IAU 2006 equinox).

The theory of a request is taken from its theory-specific frame tags,
then from the EOP dataset type, then from the ``theory`` argument, and
defaults to IAU 2006.

Passing ``eop=None`` (alias :data:`NO_EOP`) selects no-EOP mode: polar
motion, UT1-UTC, LOD and the celestial pole offsets are all zero.

Examples:
    ```python
    from framejax.frames import Frame, rotation_eci_to_eci
    D = rotation_eci_to_eci(Frame.GCRF, Frame.TOD, 2453101.827411875)
    ```
"""

from __future__ import annotations

from typing import Callable

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from framejax.eop._types import EOPData, EOPExtrapolation, EOPModel, eop_model
from framejax.errors import EOPModelMismatchError, UnsupportedFramePairError
from framejax.frames import earth_rotation, fk5, iau2006_cio, iau2006_equinox
from framejax.frames._orientation import EarthOrientation, earth_orientation
from framejax.frames._types import (
    ECEF_FRAMES,
    ECI_FRAMES,
    Frame,
    Theory,
    frame_theory,
)
from framejax.rotations import Representation, Rotation, compose_rotations, identity_rotation

NO_EOP = None
"""Explicit name for no-EOP mode (all Earth-orientation corrections zero)."""

Leg = Callable[[EarthOrientation, Representation], Rotation]

_EOP_THEORY = {
    EOPModel.IAU1980: Theory.FK5,
    EOPModel.IAU2000A: Theory.IAU2006,
}


# ---------------------------------------------------------------------------
# Dispatch tables
# ---------------------------------------------------------------------------

# GCRF -> frame, per theory

ECI_LEGS: dict[Theory, dict[Frame, Leg]] = {
    Theory.FK5: {
        Frame.GCRF: lambda o, rep: identity_rotation(rep),
        Frame.J2000: lambda o, rep: fk5.rotation_gcrf_to_j2000_fk5(
            o.jd_ut1, o.jd_tt, o.offset_2, o.offset_1, rep
        ),
        Frame.MOD: lambda o, rep: fk5.rotation_gcrf_to_mod_fk5(o.jd_tt, rep),
        Frame.TOD: lambda o, rep: fk5.rotation_gcrf_to_tod_fk5(o.jd_tt, o.offset_2, o.offset_1, rep),
        Frame.TEME: lambda o, rep: compose_rotations(
            fk5.rotation_gcrf_to_tod_fk5(o.jd_tt, o.offset_2, o.offset_1, rep),
            fk5.rotation_tod_to_teme_fk5(o.jd_tt, o.offset_2, o.offset_1, rep),
        ),
    },
    Theory.IAU2006: {
        Frame.GCRF: lambda o, rep: identity_rotation(rep),
        Frame.CIRS: lambda o, rep: iau2006_cio.rotation_gcrf_to_cirs_iau2006(
            o.jd_tt, o.offset_1, o.offset_2, rep
        ),
        Frame.MJ2000: lambda o, rep: iau2006_equinox.rotation_gcrf_to_mj2000_iau2006(rep),
        Frame.MOD06: lambda o, rep: iau2006_equinox.rotation_gcrf_to_mod06_iau2006(o.jd_tt, rep),
        Frame.ERS: lambda o, rep: iau2006_equinox.rotation_gcrf_to_ers_iau2006(
            o.jd_tt, o.offset_1, o.offset_2, rep
        ),
    },
}
"""Rotation from the GCRF to each inertial frame of a theory."""

# ITRF -> frame, per theory

ECEF_LEGS: dict[Theory, dict[Frame, Leg]] = {
    Theory.FK5: {
        Frame.ITRF: lambda o, rep: identity_rotation(rep),
        Frame.PEF: lambda o, rep: earth_rotation.rotation_itrf_to_pef_fk5(o.pm_x, o.pm_y, rep),
    },
    Theory.IAU2006: {
        Frame.ITRF: lambda o, rep: identity_rotation(rep),
        Frame.TIRS: lambda o, rep: earth_rotation.rotation_itrf_to_tirs_iau2006(
            o.jd_tt, o.pm_x, o.pm_y, rep
        ),
    },
}
"""Rotation from the ITRF to each Earth-fixed frame of a theory."""

# Direct rotations between inertial frames at a common epoch

ECI_SHORTCUTS: dict[tuple[Frame, Frame], Leg] = {
    (Frame.MOD, Frame.TOD): lambda o, rep: fk5.rotation_mod_to_tod_fk5(
        o.jd_tt, o.offset_2, o.offset_1, rep
    ),
    (Frame.TOD, Frame.MOD): lambda o, rep: fk5.rotation_tod_to_mod_fk5(
        o.jd_tt, o.offset_2, o.offset_1, rep
    ),
    (Frame.TOD, Frame.TEME): lambda o, rep: fk5.rotation_tod_to_teme_fk5(
        o.jd_tt, o.offset_2, o.offset_1, rep
    ),
    (Frame.TEME, Frame.TOD): lambda o, rep: fk5.rotation_teme_to_tod_fk5(
        o.jd_tt, o.offset_2, o.offset_1, rep
    ),
    (Frame.MOD, Frame.TEME): lambda o, rep: fk5.rotation_mod_to_teme_fk5(
        o.jd_tt, o.offset_2, o.offset_1, rep
    ),
    (Frame.TEME, Frame.MOD): lambda o, rep: fk5.rotation_teme_to_mod_fk5(
        o.jd_tt, o.offset_2, o.offset_1, rep
    ),
    (Frame.CIRS, Frame.ERS): lambda o, rep: iau2006_equinox.rotation_cirs_to_ers_iau2006(
        o.jd_tt, o.offset_1, o.offset_2, rep
    ),
    (Frame.ERS, Frame.CIRS): lambda o, rep: iau2006_equinox.rotation_ers_to_cirs_iau2006(
        o.jd_tt, o.offset_1, o.offset_2, rep
    ),
    (Frame.MJ2000, Frame.MOD06): lambda o, rep: iau2006_equinox.rotation_mj2000_to_mod06_iau2006(
        o.jd_tt, rep
    ),
    (Frame.MOD06, Frame.MJ2000): lambda o, rep: iau2006_equinox.rotation_mod06_to_mj2000_iau2006(
        o.jd_tt, rep
    ),
    (Frame.MOD06, Frame.ERS): lambda o, rep: iau2006_equinox.rotation_mod06_to_ers_iau2006(
        o.jd_tt, o.offset_1, o.offset_2, rep
    ),
    (Frame.ERS, Frame.MOD06): lambda o, rep: iau2006_equinox.rotation_ers_to_mod06_iau2006(
        o.jd_tt, o.offset_1, o.offset_2, rep
    ),
}
"""Rotations between inertial frames that skip the GCRF."""

# Earth rotation: Earth-fixed intermediate -> inertial intermediate

EARTH_ROTATIONS: dict[tuple[Frame, Frame], Leg] = {
    (Frame.PEF, Frame.TOD): lambda o, rep: earth_rotation.rotation_pef_to_tod_fk5(
        o.jd_ut1, o.jd_tt, o.offset_1, rep
    ),
    (Frame.TIRS, Frame.CIRS): lambda o, rep: earth_rotation.rotation_tirs_to_cirs_iau2006(
        o.jd_ut1, rep
    ),
    (Frame.TIRS, Frame.ERS): lambda o, rep: earth_rotation.rotation_tirs_to_ers_iau2006(
        o.jd_ut1, o.jd_tt, o.offset_1, o.offset_2, rep
    ),
}
"""Rotation about the pole between the Earth-fixed and the inertial intermediate frames."""

_EQUINOX_FRAMES = frozenset({Frame.MJ2000, Frame.MOD06, Frame.ERS})


def earth_fixed_intermediate(theory: Theory) -> Frame:
    """Earth-fixed frame on which the Earth rotation acts (PEF or TIRS)."""
    return Frame.PEF if theory == Theory.FK5 else Frame.TIRS


def inertial_intermediate(theory: Theory, eci_frame: Frame) -> Frame:
    """Inertial frame reached by the Earth rotation on the way to *eci_frame*.

    Args:
        theory: Theory of the request.
        eci_frame: Inertial end of the transformation.

    Returns:
        ``TOD`` for FK5; ``ERS`` for the IAU 2006 equinox-based frames and
        ``CIRS`` otherwise.
    """
    if theory == Theory.FK5:
        return Frame.TOD
    return Frame.ERS if eci_frame in _EQUINOX_FRAMES else Frame.CIRS


# ---------------------------------------------------------------------------
# Validation and theory selection
# ---------------------------------------------------------------------------


def check_domain(src: Frame, dst: Frame, src_domain, dst_domain, operation: str) -> None:
    """Raise :class:`UnsupportedFramePairError` unless *src* and *dst* lie in the given frame sets."""
    src, dst = Frame(src), Frame(dst)
    if src not in src_domain or dst not in dst_domain:
        raise UnsupportedFramePairError(src, dst, f"not a valid pair for {operation}")


def select_theory(
    src: Frame,
    dst: Frame,
    eop: EOPData | None = None,
    theory: Theory | None = None,
) -> Theory:
    """Select the theory used to rotate from *src* to *dst*.

    The theory comes from the theory-specific frame tags, then from the
    type of *eop*, then from *theory*, and defaults to IAU 2006.

    Args:
        src: Source frame.
        dst: Target frame.
        eop: EOP dataset, or ``None``.
        theory: Requested theory, or ``None``.

    Returns:
        The selected :class:`Theory`.

    Raises:
        UnsupportedFramePairError: If the frames belong to different
            theories, or *theory* contradicts the frames.
        EOPModelMismatchError: If *eop* belongs to the other theory.
    """
    tag_theories = {t for t in (frame_theory(src), frame_theory(dst)) if t is not None}
    if len(tag_theories) > 1:
        raise UnsupportedFramePairError(src, dst, "frames belong to different theories")
    tag_theory = tag_theories.pop() if tag_theories else None

    if theory is not None:
        theory = Theory(theory)
        if tag_theory is not None and theory != tag_theory:
            raise UnsupportedFramePairError(
                src, dst, f"frames belong to {tag_theory.value}, requested {theory.value}"
            )

    eop_theory = None if eop is None else _EOP_THEORY[eop_model(eop)]
    required = tag_theory if tag_theory is not None else theory
    if eop_theory is not None and required is not None and eop_theory != required:
        raise EOPModelMismatchError(
            f"{eop_model(eop).value} EOP data cannot be used with the {required.value} theory"
        )

    for candidate in (tag_theory, eop_theory, theory):
        if candidate is not None:
            return candidate
    return Theory.IAU2006


def is_same_epoch(jd_a, jd_b) -> bool:
    """Whether a second epoch *jd_b* denotes the same instant as *jd_a*.

    ``None`` means "same as the first".  Traced values compare unequal, so a
    jitted two-epoch call always takes the route through the GCRF.
    """
    if jd_b is None or jd_b is jd_a:
        return True
    if isinstance(jd_a, jax.core.Tracer) or isinstance(jd_b, jax.core.Tracer):
        return False
    return bool(jnp.asarray(jd_a) == jnp.asarray(jd_b))


# ---------------------------------------------------------------------------
# Chain builders (orientation already evaluated)
# ---------------------------------------------------------------------------


def eci_chain(
    theory: Theory,
    src: Frame,
    dst: Frame,
    o_src: EarthOrientation,
    o_dst: EarthOrientation,
    same_epoch: bool,
    rep: Representation,
) -> Rotation:
    """Inertial-to-inertial rotation; *o_src* and *o_dst* are the orientations at each epoch."""
    if same_epoch:
        if src == dst:
            return identity_rotation(rep)
        shortcut = ECI_SHORTCUTS.get((src, dst))
        if shortcut is not None:
            return shortcut(o_src, rep)
    legs = ECI_LEGS[theory]
    return compose_rotations(legs[src](o_src, rep).inverse(), legs[dst](o_dst, rep))


def ecef_chain(theory: Theory, src: Frame, dst: Frame, o: EarthOrientation, rep: Representation) -> Rotation:
    """Earth-fixed rotation through the ITRF."""
    if src == dst:
        return identity_rotation(rep)
    legs = ECEF_LEGS[theory]
    return compose_rotations(legs[src](o, rep).inverse(), legs[dst](o, rep))


def ecef_to_eci_chain(theory: Theory, src: Frame, dst: Frame, o: EarthOrientation, rep: Representation) -> Rotation:
    """Earth-fixed to inertial rotation across the Earth rotation of *theory*."""
    fixed = earth_fixed_intermediate(theory)
    inertial = inertial_intermediate(theory, dst)
    return compose_rotations(
        ecef_chain(theory, src, fixed, o, rep),
        EARTH_ROTATIONS[(fixed, inertial)](o, rep),
        eci_chain(theory, inertial, dst, o, o, True, rep),
    )


# ---------------------------------------------------------------------------
# Public operators
# ---------------------------------------------------------------------------


def rotation_ecef_to_ecef(
    src: Frame,
    dst: Frame,
    jd_utc: ArrayLike,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Rotation:
    """Rotation between two Earth-fixed frames.

    Args:
        src: Source frame (``ITRF``, ``PEF`` or ``TIRS``).
        dst: Target frame (``ITRF``, ``PEF`` or ``TIRS``).
        jd_utc: Julian Date (UTC).
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Output representation.
        theory: Theory to use when the frames do not determine it.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The ``src -> dst`` rotation.

    Raises:
        UnsupportedFramePairError: If a frame is not Earth-fixed, or the
            frames belong to different theories.
        EOPModelMismatchError: If *eop* belongs to the other theory.
        InvalidTimeRangeError: If *jd_utc* is outside the EOP data span.
    """
    check_domain(src, dst, ECEF_FRAMES, ECEF_FRAMES, "rotation_ecef_to_ecef")
    src, dst = Frame(src), Frame(dst)
    if src == dst:
        return identity_rotation(representation)
    selected = select_theory(src, dst, eop, theory)
    o = earth_orientation(jd_utc, eop, extrapolation)
    return ecef_chain(selected, src, dst, o, representation)


def rotation_eci_to_eci(
    src: Frame,
    dst: Frame,
    jd_utc: ArrayLike,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    jd_utc_dst: ArrayLike | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Rotation:
    """Rotation between two inertial frames, optionally at two epochs.

    With ``jd_utc_dst`` the source frame is evaluated at ``jd_utc`` and the
    target frame at ``jd_utc_dst``; the result equals rotating from the
    source to the GCRF at the first epoch and from the GCRF to the target
    at the second.

    Args:
        src: Source inertial frame.
        dst: Target inertial frame.
        jd_utc: Julian Date (UTC) of the source frame.
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Output representation.
        theory: Theory to use when the frames do not determine it.
        jd_utc_dst: Julian Date (UTC) of the target frame. Default: ``jd_utc``.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The ``src -> dst`` rotation.

    Raises:
        UnsupportedFramePairError: If a frame is not inertial, or the
            frames belong to different theories.
        EOPModelMismatchError: If *eop* belongs to the other theory.
        InvalidTimeRangeError: If an epoch is outside the EOP data span.
    """
    check_domain(src, dst, ECI_FRAMES, ECI_FRAMES, "rotation_eci_to_eci")
    src, dst = Frame(src), Frame(dst)
    same_epoch = is_same_epoch(jd_utc, jd_utc_dst)
    if src == dst and same_epoch:
        return identity_rotation(representation)

    selected = select_theory(src, dst, eop, theory)
    o_src = earth_orientation(jd_utc, eop, extrapolation)
    o_dst = o_src if same_epoch else earth_orientation(jd_utc_dst, eop, extrapolation)
    return eci_chain(selected, src, dst, o_src, o_dst, same_epoch, representation)


def rotation_ecef_to_eci(
    src: Frame,
    dst: Frame,
    jd_utc: ArrayLike,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Rotation:
    """Rotation from an Earth-fixed to an inertial frame.

    Args:
        src: Source Earth-fixed frame.
        dst: Target inertial frame.
        jd_utc: Julian Date (UTC).
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Output representation.
        theory: Theory to use when the frames do not determine it.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The ``src -> dst`` rotation.

    Raises:
        UnsupportedFramePairError: If the domains do not match, or the
            frames belong to different theories.
        EOPModelMismatchError: If *eop* belongs to the other theory.
        InvalidTimeRangeError: If *jd_utc* is outside the EOP data span.

    Examples:
        ```python
        from framejax.eop import EOPModel, zero_eop
        from framejax.frames import Frame, rotation_ecef_to_eci
        D = rotation_ecef_to_eci(Frame.ITRF, Frame.GCRF, 2460000.5, zero_eop(EOPModel.IAU1980))
        ```
    """
    check_domain(src, dst, ECEF_FRAMES, ECI_FRAMES, "rotation_ecef_to_eci")
    src, dst = Frame(src), Frame(dst)
    selected = select_theory(src, dst, eop, theory)
    o = earth_orientation(jd_utc, eop, extrapolation)
    return ecef_to_eci_chain(selected, src, dst, o, representation)


def rotation_eci_to_ecef(
    src: Frame,
    dst: Frame,
    jd_utc: ArrayLike,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Rotation:
    """Rotation from an inertial to an Earth-fixed frame.

    The inverse of :func:`rotation_ecef_to_eci` with the frames swapped.

    Args:
        src: Source inertial frame.
        dst: Target Earth-fixed frame.
        jd_utc: Julian Date (UTC).
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Output representation.
        theory: Theory to use when the frames do not determine it.
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The ``src -> dst`` rotation.
    """
    check_domain(src, dst, ECI_FRAMES, ECEF_FRAMES, "rotation_eci_to_ecef")
    return rotation_ecef_to_eci(
        dst, src, jd_utc, eop, representation, theory, extrapolation
    ).inverse()


def frame_rotation(
    src: Frame,
    dst: Frame,
    jd_utc: ArrayLike,
    eop: EOPData | None = NO_EOP,
    representation: Representation = Representation.MATRIX,
    theory: Theory | None = None,
    jd_utc_dst: ArrayLike | None = None,
    extrapolation: EOPExtrapolation = EOPExtrapolation.ERROR,
) -> Rotation:
    """Rotation between any two frames, dispatched on their domains.

    Args:
        src: Source frame.
        dst: Target frame.
        jd_utc: Julian Date (UTC).
        eop: EOP dataset, or ``None`` for no-EOP mode.
        representation: Output representation.
        theory: Theory to use when the frames do not determine it.
        jd_utc_dst: Epoch of the target frame (inertial pairs only).
        extrapolation: Behavior for epochs outside the EOP data span.

    Returns:
        The ``src -> dst`` rotation.

    Raises:
        UnsupportedFramePairError: If *jd_utc_dst* is given for a pair that
            is not inertial-to-inertial, or the frames belong to different
            theories.
    """
    src, dst = Frame(src), Frame(dst)
    if src in ECI_FRAMES and dst in ECI_FRAMES:
        return rotation_eci_to_eci(
            src, dst, jd_utc, eop, representation, theory, jd_utc_dst, extrapolation
        )
    if not is_same_epoch(jd_utc, jd_utc_dst):
        raise UnsupportedFramePairError(src, dst, "a second epoch is only defined between inertial frames")
    if src in ECEF_FRAMES and dst in ECEF_FRAMES:
        return rotation_ecef_to_ecef(src, dst, jd_utc, eop, representation, theory, extrapolation)
    if src in ECEF_FRAMES:
        return rotation_ecef_to_eci(src, dst, jd_utc, eop, representation, theory, extrapolation)
    return rotation_eci_to_ecef(src, dst, jd_utc, eop, representation, theory, extrapolation)
