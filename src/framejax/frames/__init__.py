"""Reference frame transformations.

This sub-module provides rotations and state-vector transformations
between the Earth-fixed and inertial frames of two theories:

- **FK5** (IAU 1976 precession, IAU 1980 nutation): ``ITRF``, ``PEF``,
  ``GCRF``, ``J2000``, ``MOD``, ``TOD``, ``TEME``.
- **IAU 2006** (IAU 2006 precession, IAU 2000 nutation): ``ITRF``,
  ``TIRS``, ``GCRF``, ``CIRS`` (CIO-based) and ``MJ2000``, ``MOD06``,
  ``ERS`` (equinox-based).

Every rotation is available as a :class:`~framejax.rotations.RotationMatrix`
or a :class:`~framejax.rotations.Quaternion`.  The per-step builders
(``rotation_<a>_to_<b>_<theory>``) are composed by the frame graph in
:mod:`~framejax.frames.composer`; :mod:`~framejax.frames.state_vector`
adds the Earth-rotation terms for velocities and accelerations.
"""

from ._orientation import EarthOrientation, earth_orientation
from ._types import (
    ECEF_FRAMES,
    ECI_FRAMES,
    FK5_ONLY_FRAMES,
    IAU2006_ONLY_FRAMES,
    OF_DATE_FRAMES,
    SHARED_FRAMES,
    Frame,
    Theory,
    frame_theory,
)
from .composer import (
    NO_EOP,
    frame_rotation,
    rotation_ecef_to_ecef,
    rotation_ecef_to_eci,
    rotation_eci_to_ecef,
    rotation_eci_to_eci,
    select_theory,
)
from .earth_rotation import (
    earth_angular_velocity,
    gast_iau1994,
    gast_iau2006,
    rotation_cirs_to_tirs_iau2006,
    rotation_ers_to_tirs_iau2006,
    rotation_itrf_to_pef_fk5,
    rotation_itrf_to_tirs_iau2006,
    rotation_pef_to_itrf_fk5,
    rotation_pef_to_tod_fk5,
    rotation_tirs_to_cirs_iau2006,
    rotation_tirs_to_ers_iau2006,
    rotation_tirs_to_itrf_iau2006,
    rotation_tod_to_pef_fk5,
)
from .fk5 import (
    equation_of_equinoxes_teme,
    rotation_gcrf_to_j2000_fk5,
    rotation_gcrf_to_mod_fk5,
    rotation_gcrf_to_tod_fk5,
    rotation_j2000_to_gcrf_fk5,
    rotation_j2000_to_tod_fk5,
    rotation_mod_to_gcrf_fk5,
    rotation_mod_to_teme_fk5,
    rotation_mod_to_tod_fk5,
    rotation_teme_to_mod_fk5,
    rotation_teme_to_tod_fk5,
    rotation_tod_to_j2000_fk5,
    rotation_tod_to_mod_fk5,
    rotation_tod_to_teme_fk5,
)
from .iau2006_cio import rotation_cirs_to_gcrf_iau2006, rotation_gcrf_to_cirs_iau2006
from .iau2006_equinox import (
    equation_of_origins_iau2006,
    nutation_corrections_from_pole_offsets,
    rotation_cirs_to_ers_iau2006,
    rotation_ers_to_cirs_iau2006,
    rotation_ers_to_mod06_iau2006,
    rotation_gcrf_to_ers_iau2006,
    rotation_gcrf_to_mj2000_iau2006,
    rotation_gcrf_to_mod06_iau2006,
    rotation_mj2000_to_gcrf_iau2006,
    rotation_mj2000_to_mod06_iau2006,
    rotation_mod06_to_ers_iau2006,
    rotation_mod06_to_mj2000_iau2006,
)
from .state_vector import (
    OrbitStateVector,
    orbit_state_vector,
    sv_ecef_to_ecef,
    sv_ecef_to_eci,
    sv_eci_to_ecef,
    sv_eci_to_eci,
    transform_state,
)
