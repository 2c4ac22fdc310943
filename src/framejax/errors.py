"""Exception types raised by framejax.

All errors derive from :class:`ValueError` because every failure mode in
the library is a bad argument (a frame pair with no defined path, an EOP
dataset of the wrong theory, or an epoch outside the EOP data span)
rather than a transient condition.
"""

from __future__ import annotations


class FrameError(ValueError):
    """Base class for reference-frame composition errors."""


class UnsupportedFramePairError(FrameError):
    """Raised when no rotation path exists between two frame tags.

    This happens when a pair mixes a frame that only exists in the FK5
    theory (``PEF``, ``J2000``, ``MOD``, ``TOD``, ``TEME``) with one that
    only exists in the IAU 2006 theory (``TIRS``, ``CIRS``, ``MJ2000``,
    ``MOD06``, ``ERS``), or when a tag is passed to an operator for the
    wrong domain (e.g. an ECI frame to ``rotation_ecef_to_ecef``).

    Args:
        src: Source frame tag.
        dst: Destination frame tag.
        reason: Human-readable explanation.
    """

    def __init__(self, src, dst, reason: str = "") -> None:
        self.src = src
        self.dst = dst
        msg = f"No rotation defined from {src} to {dst}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class EOPModelMismatchError(FrameError):
    """Raised when the EOP dataset belongs to the other theory.

    IAU 1980 data carries nutation corrections (dPsi, dEps) that only make
    sense for the FK5 chain, and IAU 2000A data carries CIP offsets
    (dX, dY) for the IAU 2006 chain.
    """


class InvalidTimeRangeError(ValueError):
    """Raised when an EOP query falls outside the dataset's MJD span.

    Args:
        mjd: Requested Modified Julian Date (UTC).
        mjd_min: First MJD covered by the dataset.
        mjd_max: Last MJD covered by the dataset.
    """

    def __init__(self, mjd: float, mjd_min: float, mjd_max: float) -> None:
        self.mjd = mjd
        self.mjd_min = mjd_min
        self.mjd_max = mjd_max
        super().__init__(
            f"EOP query at MJD {mjd:.6f} is outside the data range "
            f"[{mjd_min:.6f}, {mjd_max:.6f}]"
        )
