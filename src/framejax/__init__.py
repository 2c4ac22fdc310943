"""
framejax is a reference frame transformation library for Earth orbits implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    MAS2RAD,
    JD_MJD_OFFSET,
    JD2000,
    MJD2000,
    OMEGA_EARTH,
)

from .config import set_dtype, get_dtype

from .errors import (
    FrameError,
    UnsupportedFramePairError,
    EOPModelMismatchError,
    InvalidTimeRangeError,
)

from .rotations import (
    Rx,
    Ry,
    Rz,
    Quaternion,
    RotationMatrix,
    Representation,
)

from .eop import (
    EOPExtrapolation,
    EOPModel,
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)

from .frames import (
    NO_EOP,
    Frame,
    Theory,
    OrbitStateVector,
    orbit_state_vector,
    frame_rotation,
    rotation_ecef_to_ecef,
    rotation_ecef_to_eci,
    rotation_eci_to_ecef,
    rotation_eci_to_eci,
    sv_ecef_to_ecef,
    sv_ecef_to_eci,
    sv_eci_to_ecef,
    sv_eci_to_eci,
    transform_state,
)

from .time import caldate_to_jd, caldate_to_mjd
