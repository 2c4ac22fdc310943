"""Tests for the IAU 2006/2000 celestial rotations (CIO and equinox based).

Reference values:

- Vallado, Fundamentals of Astrodynamics and Applications (4th Ed.),
  Example 3-14/3-15 (see ``conftest.py``).
- IAU SOFA Tools for Earth Attitude, Example 5.5 (2007 April 5, 12:00 UTC).

Celestial matrices are compared with the published references at the
uas level.  Matrices that include the Earth rotation angle are limited by
the resolution of a single-part Julian Date (about 20 us of UT1).
"""

import jax
import jax.numpy as jnp
import pytest

from framejax.config import set_dtype
from framejax.constants import AS2RAD, MAS2RAD
from framejax.eop import static_eop
from framejax.frames import (
    Frame,
    equation_of_origins_iau2006,
    nutation_corrections_from_pole_offsets,
    rotation_cirs_to_ers_iau2006,
    rotation_cirs_to_gcrf_iau2006,
    rotation_eci_to_ecef,
    rotation_ers_to_cirs_iau2006,
    rotation_ers_to_mod06_iau2006,
    rotation_gcrf_to_cirs_iau2006,
    rotation_gcrf_to_ers_iau2006,
    rotation_gcrf_to_mj2000_iau2006,
    rotation_gcrf_to_mod06_iau2006,
    rotation_mj2000_to_gcrf_iau2006,
    rotation_mj2000_to_mod06_iau2006,
    rotation_mod06_to_ers_iau2006,
    rotation_mod06_to_mj2000_iau2006,
)
from framejax.rotations import Representation, compose_rotations
from framejax.series import bias_precession_iau2006, frame_bias_iau2006, obliquity_iau2006

# Module-level reference arrays need float64 at import time
set_dtype(jnp.float64)

_DX = -0.000205 * AS2RAD
_DY = -0.000136 * AS2RAD

_POS_TOL = 1e-4  # km
_VEL_TOL = 1e-7  # km/s
_TOL = 1e-11
_ERA_TOL = 3e-9


def _max_err(a, b):
    return float(jnp.max(jnp.abs(a - b)))


# ---------------------------------------------------------------------------
# SOFA Example 5.5
# ---------------------------------------------------------------------------

_SOFA_JD_UTC = 2454196.0
_SOFA_JD_TT = 2454196.0 + 65.184 / 86400.0
_SOFA_EOP = static_eop(
    pm_x=0.0349282 * AS2RAD,
    pm_y=0.4833163 * AS2RAD,
    ut1_utc=-0.072073685,
    dX=0.1750 * MAS2RAD,
    dY=-0.2259 * MAS2RAD,
)

# GCRS -> CIRS, Step 4
_BPN_REF = jnp.array(
    [
        [+0.999999746339445, -0.000000005138822, -0.000712264729525],
        [-0.000000026475227, +0.999999999014975, -0.000044385242827],
        [+0.000712264729599, +0.000044385250426, +0.999999745354420],
    ]
)

# GCRS -> TIRS, Step 5
_ER_BPN_REF = jnp.array(
    [
        [+0.973104317573127, +0.230363826247709, -0.000703332818845],
        [-0.230363798804182, +0.973104570735574, +0.000120888549586],
        [+0.000712264729599, +0.000044385250426, +0.999999745354420],
    ]
)

# GCRS -> ITRS, Step 7
_GCRF_TO_ITRF_REF = jnp.array(
    [
        [+0.973104317697535, +0.230363826239128, -0.000703163482198],
        [-0.230363800456037, +0.973104570632801, +0.000118545366625],
        [+0.000711560162668, +0.000046626403995, +0.999999745754024],
    ]
)


class TestSOFAExample:
    def test_gcrf_to_cirs(self):
        R = rotation_gcrf_to_cirs_iau2006(_SOFA_JD_TT, 0.1750 * MAS2RAD, -0.2259 * MAS2RAD)
        assert jnp.allclose(R.to_matrix(), _BPN_REF, rtol=0, atol=_TOL), (
            f"Max error: {_max_err(R.to_matrix(), _BPN_REF)}"
        )

    def test_gcrf_to_tirs(self):
        R = rotation_eci_to_ecef(Frame.GCRF, Frame.TIRS, _SOFA_JD_UTC, _SOFA_EOP)
        assert jnp.allclose(R.to_matrix(), _ER_BPN_REF, rtol=0, atol=_ERA_TOL), (
            f"Max error: {_max_err(R.to_matrix(), _ER_BPN_REF)}"
        )

    def test_gcrf_to_itrf(self):
        R = rotation_eci_to_ecef(Frame.GCRF, Frame.ITRF, _SOFA_JD_UTC, _SOFA_EOP)
        assert jnp.allclose(R.to_matrix(), _GCRF_TO_ITRF_REF, rtol=0, atol=_ERA_TOL), (
            f"Max error: {_max_err(R.to_matrix(), _GCRF_TO_ITRF_REF)}"
        )

    def test_gcrf_to_itrf_quaternion(self):
        q = rotation_eci_to_ecef(
            Frame.GCRF, Frame.ITRF, _SOFA_JD_UTC, _SOFA_EOP, Representation.QUATERNION
        )
        assert jnp.allclose(q.to_matrix(), _GCRF_TO_ITRF_REF, rtol=0, atol=_ERA_TOL), (
            f"Max error: {_max_err(q.to_matrix(), _GCRF_TO_ITRF_REF)}"
        )

    def test_bpn_orthogonal(self):
        bpn = rotation_gcrf_to_cirs_iau2006(_SOFA_JD_TT).to_matrix()
        assert jnp.allclose(bpn.T @ bpn, jnp.eye(3), rtol=0, atol=1e-14)
        assert abs(float(jnp.linalg.det(bpn)) - 1.0) < 1e-14


# ---------------------------------------------------------------------------
# CIO-based chain
# ---------------------------------------------------------------------------


class TestCIOChain:
    def test_gcrf_to_cirs(self, vallado_jd_tt, vallado_states):
        r_gcrf, v_gcrf = vallado_states["GCRF_IAU2006"]
        r_cirs, v_cirs = vallado_states["CIRS"]
        R = rotation_gcrf_to_cirs_iau2006(vallado_jd_tt, _DX, _DY)
        assert jnp.allclose(R.apply(r_gcrf), r_cirs, rtol=0, atol=_POS_TOL), (
            f"Max error: {_max_err(R.apply(r_gcrf), r_cirs)}"
        )
        assert jnp.allclose(R.apply(v_gcrf), v_cirs, rtol=0, atol=_VEL_TOL), (
            f"Max error: {_max_err(R.apply(v_gcrf), v_cirs)}"
        )

    def test_cirs_to_gcrf_is_inverse(self, vallado_jd_tt):
        fwd = rotation_gcrf_to_cirs_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        back = rotation_cirs_to_gcrf_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-14)

    def test_pole_offsets_move_cip(self, vallado_jd_tt):
        plain = rotation_gcrf_to_cirs_iau2006(vallado_jd_tt).to_matrix()
        shifted = rotation_gcrf_to_cirs_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        assert float(shifted[2, 0] - plain[2, 0]) == pytest.approx(_DX, abs=1e-15)
        assert float(shifted[2, 1] - plain[2, 1]) == pytest.approx(_DY, abs=1e-15)


# ---------------------------------------------------------------------------
# Equinox-based chain
# ---------------------------------------------------------------------------


class TestEquinoxChain:
    def test_gcrf_to_mj2000_is_frame_bias(self):
        B = rotation_gcrf_to_mj2000_iau2006().to_matrix()
        assert jnp.allclose(B, frame_bias_iau2006().to_matrix(), rtol=0, atol=1e-16)
        back = rotation_mj2000_to_gcrf_iau2006().to_matrix()
        assert jnp.allclose(back @ B, jnp.eye(3), rtol=0, atol=1e-15)

    def test_gcrf_to_mod06_through_mj2000(self, vallado_jd_tt):
        via = compose_rotations(
            rotation_gcrf_to_mj2000_iau2006(),
            rotation_mj2000_to_mod06_iau2006(vallado_jd_tt),
        ).to_matrix()
        direct = rotation_gcrf_to_mod06_iau2006(vallado_jd_tt).to_matrix()
        assert jnp.allclose(via, direct, rtol=0, atol=1e-15)
        assert jnp.allclose(direct, bias_precession_iau2006(vallado_jd_tt).to_matrix(), rtol=0, atol=1e-16)

    def test_gcrf_to_ers_through_mod06(self, vallado_jd_tt):
        via = compose_rotations(
            rotation_gcrf_to_mod06_iau2006(vallado_jd_tt),
            rotation_mod06_to_ers_iau2006(vallado_jd_tt, _DX, _DY),
        ).to_matrix()
        direct = rotation_gcrf_to_ers_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        assert jnp.allclose(via, direct, rtol=0, atol=1e-15)

    def test_inverses(self, vallado_jd_tt):
        a = rotation_mod06_to_mj2000_iau2006(vallado_jd_tt).to_matrix()
        b = rotation_mj2000_to_mod06_iau2006(vallado_jd_tt).to_matrix()
        assert jnp.allclose(a @ b, jnp.eye(3), rtol=0, atol=1e-15)
        c = rotation_ers_to_mod06_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        d = rotation_mod06_to_ers_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        assert jnp.allclose(c @ d, jnp.eye(3), rtol=0, atol=1e-15)

    def test_mj2000_close_to_gcrf(self, vallado_states):
        # The frame bias is below 25 mas
        r_gcrf, _ = vallado_states["GCRF_IAU2006"]
        r = rotation_gcrf_to_mj2000_iau2006().apply(r_gcrf)
        assert float(jnp.linalg.norm(r - r_gcrf)) < 25e-3 * AS2RAD * float(jnp.linalg.norm(r_gcrf))

    def test_nutation_corrections_from_pole_offsets(self, vallado_jd_tt):
        ddpsi, ddeps = nutation_corrections_from_pole_offsets(vallado_jd_tt, _DX, _DY)
        assert float(ddpsi) == pytest.approx(_DX / float(jnp.sin(obliquity_iau2006(vallado_jd_tt))))
        assert float(ddeps) == pytest.approx(_DY)


class TestCIOEquinoxBridge:
    @pytest.mark.parametrize("dX, dY", [(0.0, 0.0), (_DX, _DY)])
    def test_cirs_to_ers_closes_the_loop(self, vallado_jd_tt, dX, dY):
        # GCRF -> CIRS -> ERS equals GCRF -> ERS
        via_cirs = compose_rotations(
            rotation_gcrf_to_cirs_iau2006(vallado_jd_tt, dX, dY),
            rotation_cirs_to_ers_iau2006(vallado_jd_tt, dX, dY),
        ).to_matrix()
        direct = rotation_gcrf_to_ers_iau2006(vallado_jd_tt, dX, dY).to_matrix()
        assert jnp.allclose(via_cirs, direct, rtol=0, atol=1e-10), f"Max error: {_max_err(via_cirs, direct)}"

    def test_ers_to_cirs_is_inverse(self, vallado_jd_tt):
        a = rotation_cirs_to_ers_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        b = rotation_ers_to_cirs_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        assert jnp.allclose(b @ a, jnp.eye(3), rtol=0, atol=1e-15)

    def test_equation_of_origins_magnitude(self, vallado_jd_tt):
        # Dominated by the accumulated precession in right ascension since J2000
        eo = float(equation_of_origins_iau2006(vallado_jd_tt))
        assert -2e-3 < eo < 0.0


class TestRepresentations:
    @pytest.mark.parametrize(
        "builder",
        [
            lambda jd, rep: rotation_gcrf_to_cirs_iau2006(jd, _DX, _DY, rep),
            lambda jd, rep: rotation_gcrf_to_mj2000_iau2006(rep),
            lambda jd, rep: rotation_mj2000_to_mod06_iau2006(jd, rep),
            lambda jd, rep: rotation_mod06_to_ers_iau2006(jd, _DX, _DY, rep),
            lambda jd, rep: rotation_cirs_to_ers_iau2006(jd, _DX, _DY, rep),
        ],
    )
    def test_matrix_and_quaternion_agree(self, builder, vallado_jd_tt):
        R = builder(vallado_jd_tt, Representation.MATRIX).to_matrix()
        Q = builder(vallado_jd_tt, Representation.QUATERNION).to_matrix()
        assert jnp.allclose(Q, R, rtol=0, atol=1e-13), f"Max error: {_max_err(Q, R)}"


class TestJIT:
    def test_gcrf_to_cirs_jit(self, vallado_jd_tt):
        f = jax.jit(lambda jd, dx, dy: rotation_gcrf_to_cirs_iau2006(jd, dx, dy).to_matrix())
        expected = rotation_gcrf_to_cirs_iau2006(vallado_jd_tt, _DX, _DY).to_matrix()
        assert jnp.allclose(f(vallado_jd_tt, _DX, _DY), expected, rtol=0, atol=1e-15)

    def test_grad_through_cirs(self, vallado_jd_tt):
        def x_component(dx):
            return rotation_gcrf_to_cirs_iau2006(vallado_jd_tt, dx, 0.0).to_matrix()[2, 0]

        # The CIP X coordinate is the bottom-left element
        assert float(jax.grad(x_component)(0.0)) == pytest.approx(1.0, abs=1e-6)
