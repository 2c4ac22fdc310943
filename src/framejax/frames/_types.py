"""Frame and theory identifiers.

Thirteen frame tags in four families:

============================  ==========================================
Family                        Frames
============================  ==========================================
ECEF, FK5                     ``ITRF``, ``PEF``
ECI, FK5                      ``GCRF``, ``J2000``, ``MOD``, ``TOD``, ``TEME``
ECEF, IAU 2006                ``ITRF``, ``TIRS``
ECI, IAU 2006 (CIO/equinox)   ``GCRF``, ``CIRS``, ``MJ2000``, ``MOD06``, ``ERS``
============================  ==========================================

``ITRF`` and ``GCRF`` belong to both theories.  Tags are plain enum
members, so they are static (hashable) arguments under ``jax.jit``.
"""

from __future__ import annotations

import enum


class Frame(enum.Enum):
    """Reference frame tag."""

    ITRF = "ITRF"
    PEF = "PEF"
    TIRS = "TIRS"
    GCRF = "GCRF"
    J2000 = "J2000"
    MOD = "MOD"
    TOD = "TOD"
    TEME = "TEME"
    CIRS = "CIRS"
    MJ2000 = "MJ2000"
    MOD06 = "MOD06"
    ERS = "ERS"

    def __str__(self) -> str:
        return self.value


class Theory(enum.Enum):
    """Precession-nutation theory.

    Attributes:
        FK5: IAU 1976 precession, IAU 1980 nutation, IAU 1982 GMST.
        IAU2006: IAU 2006 precession, IAU 2000 nutation, Earth Rotation Angle.
    """

    FK5 = "FK5"
    IAU2006 = "IAU2006"


ECEF_FRAMES = frozenset({Frame.ITRF, Frame.PEF, Frame.TIRS})
"""Earth-fixed frames."""

ECI_FRAMES = frozenset(
    {
        Frame.GCRF,
        Frame.J2000,
        Frame.MOD,
        Frame.TOD,
        Frame.TEME,
        Frame.CIRS,
        Frame.MJ2000,
        Frame.MOD06,
        Frame.ERS,
    }
)
"""Inertial (celestial) frames."""

FK5_ONLY_FRAMES = frozenset({Frame.PEF, Frame.J2000, Frame.MOD, Frame.TOD, Frame.TEME})
"""Frames that exist only in the FK5 theory."""

IAU2006_ONLY_FRAMES = frozenset({Frame.TIRS, Frame.CIRS, Frame.MJ2000, Frame.MOD06, Frame.ERS})
"""Frames that exist only in the IAU 2006 theory."""

SHARED_FRAMES = frozenset({Frame.ITRF, Frame.GCRF})
"""Frames common to both theories."""

OF_DATE_FRAMES = frozenset({Frame.MOD, Frame.TOD, Frame.TEME, Frame.CIRS, Frame.MOD06, Frame.ERS})
"""Inertial frames defined relative to an epoch."""


def frame_theory(frame: Frame) -> Theory | None:
    """Return the theory a frame belongs to, or ``None`` for shared frames."""
    if frame in FK5_ONLY_FRAMES:
        return Theory.FK5
    if frame in IAU2006_ONLY_FRAMES:
        return Theory.IAU2006
    return None
