"""IAU 2006/2000 CIO-based celestial rotations.

GCRF <-> CIRS through the CIP coordinates X, Y and the CIO locator s.
Celestial pole offsets dX, dY from IAU 2000A EOP data are added to X, Y
after s has been evaluated from the model values, the order used by the
IERS Conventions and by SOFA.

Uses routines and computations derived from software provided by SOFA
under license. Does not itself constitute software provided by and/or
endorsed by SOFA.
"""

from __future__ import annotations

from jax.typing import ArrayLike

from framejax.rotations import Representation, Rotation
from framejax.series import c2ixys, xys_iau2006


def rotation_gcrf_to_cirs_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the GCRF to the Celestial Intermediate Reference System.

    Args:
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].
        representation: Output representation.

    Returns:
        The GCRF -> CIRS rotation.

    Examples:
        ```python
        from framejax.frames import rotation_gcrf_to_cirs_iau2006
        D = rotation_gcrf_to_cirs_iau2006(2453101.828154745)
        D.to_matrix().shape
        ```
    """
    x, y, s = xys_iau2006(jd_tt)
    return c2ixys(x + dX, y + dY, s, representation)


def rotation_cirs_to_gcrf_iau2006(
    jd_tt: ArrayLike,
    dX: ArrayLike = 0.0,
    dY: ArrayLike = 0.0,
    representation: Representation = Representation.MATRIX,
) -> Rotation:
    """Rotation from the CIRS to the GCRF.

    Args:
        jd_tt: Julian Date (TT).
        dX: CIP offset dX [rad].
        dY: CIP offset dY [rad].
        representation: Output representation.

    Returns:
        The CIRS -> GCRF rotation.
    """
    return rotation_gcrf_to_cirs_iau2006(jd_tt, dX, dY, representation).inverse()
