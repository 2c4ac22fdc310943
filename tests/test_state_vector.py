"""Tests for orbit state vector transformations.

Reference values from Vallado, Fundamentals of Astrodynamics and
Applications (4th Ed.), Example 3-15 (see ``conftest.py``).
"""

import jax
import jax.numpy as jnp
import pytest

from framejax.constants import OMEGA_EARTH
from framejax.errors import UnsupportedFramePairError
from framejax.frames import (
    Frame,
    OrbitStateVector,
    Theory,
    frame_rotation,
    orbit_state_vector,
    sv_ecef_to_ecef,
    sv_ecef_to_eci,
    sv_eci_to_ecef,
    sv_eci_to_eci,
    transform_state,
)
from framejax.rotations import Representation

# Earth-fixed <-> inertial, limited by the sidereal time models
_POS_TOL = 3e-4  # km
_VEL_TOL = 1e-6  # km/s


def _max_err(a, b):
    return float(jnp.max(jnp.abs(a - b)))


@pytest.fixture
def sv_itrf(vallado_jd_utc, vallado_states):
    r, v = vallado_states["ITRF"]
    return orbit_state_vector(vallado_jd_utc, r, v)


class TestOrbitStateVector:
    def test_fields(self, vallado_jd_utc):
        sv = orbit_state_vector(vallado_jd_utc, [7000.0, 0.0, 0.0], [0.0, 7.5, 0.0])
        assert isinstance(sv, OrbitStateVector)
        assert sv.a is None
        assert sv.r.dtype == jnp.float64
        assert float(sv.t) == vallado_jd_utc

    def test_is_pytree(self, vallado_jd_utc):
        sv = orbit_state_vector(vallado_jd_utc, [7000.0, 0.0, 0.0], [0.0, 7.5, 0.0])
        leaves = jax.tree_util.tree_leaves(sv)
        assert len(leaves) == 3


class TestEarthFixedToInertial:
    def test_itrf_to_gcrf_fk5(self, sv_itrf, vallado_eop_fk5, vallado_states):
        r_exp, v_exp = vallado_states["GCRF_FK5"]
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.GCRF, vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=_POS_TOL), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=_VEL_TOL), f"Max error: {_max_err(out.v, v_exp)}"

    def test_itrf_to_gcrf_iau2006(self, sv_itrf, vallado_eop_iau2006, vallado_states):
        r_exp, v_exp = vallado_states["GCRF_IAU2006"]
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.GCRF, vallado_eop_iau2006)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=_POS_TOL), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=_VEL_TOL), f"Max error: {_max_err(out.v, v_exp)}"

    @pytest.mark.parametrize("frame", ["TOD", "MOD", "TEME"])
    def test_itrf_to_fk5_of_date(self, frame, sv_itrf, vallado_eop_fk5, vallado_states):
        r_exp, v_exp = vallado_states[frame]
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame(frame), vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=_POS_TOL), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=_VEL_TOL), f"Max error: {_max_err(out.v, v_exp)}"

    def test_itrf_to_cirs(self, sv_itrf, vallado_eop_iau2006, vallado_states):
        r_exp, v_exp = vallado_states["CIRS"]
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.CIRS, vallado_eop_iau2006)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=1e-4), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=1e-7), f"Max error: {_max_err(out.v, v_exp)}"

    def test_position_matches_rotation(self, sv_itrf, vallado_eop_iau2006):
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.GCRF, vallado_eop_iau2006)
        R = frame_rotation(Frame.ITRF, Frame.GCRF, sv_itrf.t, vallado_eop_iau2006)
        assert jnp.allclose(out.r, R.apply(sv_itrf.r), rtol=0, atol=1e-9)

    def test_velocity_includes_earth_rotation(self, sv_itrf):
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.GCRF)
        R = frame_rotation(Frame.ITRF, Frame.GCRF, sv_itrf.t)
        rotated_only = R.apply(sv_itrf.v)
        # |w x r| is of order OMEGA_EARTH * |r_xy|
        expected = OMEGA_EARTH * float(jnp.linalg.norm(sv_itrf.r[:2]))
        assert float(jnp.linalg.norm(out.v - rotated_only)) == pytest.approx(expected, rel=1e-3)

    def test_epoch_unchanged(self, sv_itrf):
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.GCRF)
        assert float(out.t) == float(sv_itrf.t)


class TestInertialToEarthFixed:
    def test_gcrf_to_itrf_fk5(self, vallado_jd_utc, vallado_eop_fk5, vallado_states):
        r, v = vallado_states["GCRF_FK5"]
        r_exp, v_exp = vallado_states["ITRF"]
        sv = orbit_state_vector(vallado_jd_utc, r, v)
        out = sv_eci_to_ecef(sv, Frame.GCRF, Frame.ITRF, vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=_POS_TOL), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=_VEL_TOL), f"Max error: {_max_err(out.v, v_exp)}"

    def test_gcrf_to_pef(self, vallado_jd_utc, vallado_eop_fk5, vallado_states):
        r, v = vallado_states["GCRF_FK5"]
        r_exp, v_exp = vallado_states["PEF"]
        sv = orbit_state_vector(vallado_jd_utc, r, v)
        out = sv_eci_to_ecef(sv, Frame.GCRF, Frame.PEF, vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=_POS_TOL), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=_VEL_TOL), f"Max error: {_max_err(out.v, v_exp)}"

    @pytest.mark.parametrize("theory, dst", [(Theory.FK5, Frame.TEME), (Theory.IAU2006, Frame.ERS)])
    @pytest.mark.parametrize("representation", list(Representation))
    def test_round_trip(self, theory, dst, representation, sv_itrf, vallado_eop_fk5, vallado_eop_iau2006):
        eop = vallado_eop_fk5 if theory == Theory.FK5 else vallado_eop_iau2006
        eci = sv_ecef_to_eci(sv_itrf, Frame.ITRF, dst, eop, representation)
        back = sv_eci_to_ecef(eci, dst, Frame.ITRF, eop, representation)
        assert jnp.allclose(back.r, sv_itrf.r, rtol=0, atol=1e-8), f"Max error: {_max_err(back.r, sv_itrf.r)}"
        assert jnp.allclose(back.v, sv_itrf.v, rtol=0, atol=1e-11), f"Max error: {_max_err(back.v, sv_itrf.v)}"


class TestAcceleration:
    def test_acceleration_round_trip(self, vallado_jd_utc, vallado_eop_iau2006, vallado_states):
        r, v = vallado_states["ITRF"]
        a = jnp.array([0.001, -0.002, -0.005])
        sv = orbit_state_vector(vallado_jd_utc, r, v, a)
        eci = sv_ecef_to_eci(sv, Frame.ITRF, Frame.GCRF, vallado_eop_iau2006)
        back = sv_eci_to_ecef(eci, Frame.GCRF, Frame.ITRF, vallado_eop_iau2006)
        assert jnp.allclose(back.a, a, rtol=0, atol=1e-14), f"Max error: {_max_err(back.a, a)}"

    def test_body_at_rest_has_centripetal_acceleration(self, vallado_jd_utc):
        # A point fixed on the rotating Earth: a_inertial = w x (w x r)
        r = jnp.array([6378.137, 0.0, 0.0])
        sv = orbit_state_vector(vallado_jd_utc, r, jnp.zeros(3), jnp.zeros(3))
        out = sv_ecef_to_eci(sv, Frame.PEF, Frame.TOD)
        assert float(jnp.linalg.norm(out.a)) == pytest.approx(
            OMEGA_EARTH**2 * 6378.137, rel=1e-12
        )
        assert float(jnp.linalg.norm(out.v)) == pytest.approx(OMEGA_EARTH * 6378.137, rel=1e-12)

    def test_missing_acceleration_stays_missing(self, sv_itrf):
        out = sv_ecef_to_eci(sv_itrf, Frame.ITRF, Frame.GCRF)
        assert out.a is None


class TestSameDomain:
    def test_gcrf_to_j2000(self, vallado_jd_utc, vallado_eop_fk5, vallado_states):
        r, v = vallado_states["GCRF_FK5"]
        r_exp, v_exp = vallado_states["J2000"]
        sv = orbit_state_vector(vallado_jd_utc, r, v)
        out = sv_eci_to_eci(sv, Frame.GCRF, Frame.J2000, vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=1e-4), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=1e-7), f"Max error: {_max_err(out.v, v_exp)}"

    def test_gcrf_to_mod(self, vallado_jd_utc, vallado_eop_fk5, vallado_states):
        r, v = vallado_states["GCRF_FK5"]
        r_exp, v_exp = vallado_states["MOD"]
        sv = orbit_state_vector(vallado_jd_utc, r, v)
        out = sv_eci_to_eci(sv, Frame.GCRF, Frame.MOD, vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=1e-4), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=1e-7), f"Max error: {_max_err(out.v, v_exp)}"

    def test_itrf_to_pef(self, sv_itrf, vallado_eop_fk5, vallado_states):
        r_exp, v_exp = vallado_states["PEF"]
        out = sv_ecef_to_ecef(sv_itrf, Frame.ITRF, Frame.PEF, vallado_eop_fk5)
        assert jnp.allclose(out.r, r_exp, rtol=0, atol=1e-6), f"Max error: {_max_err(out.r, r_exp)}"
        assert jnp.allclose(out.v, v_exp, rtol=0, atol=1e-9), f"Max error: {_max_err(out.v, v_exp)}"

    def test_second_epoch(self, vallado_jd_utc, vallado_states):
        r, v = vallado_states["GCRF_FK5"]
        sv = orbit_state_vector(vallado_jd_utc, r, v)
        jd2 = vallado_jd_utc + 100.0
        out = sv_eci_to_eci(sv, Frame.GCRF, Frame.TOD, jd_utc_dst=jd2)
        R = frame_rotation(Frame.GCRF, Frame.TOD, jd2)
        assert jnp.allclose(out.r, R.apply(r), rtol=0, atol=1e-9)
        assert float(out.t) == float(sv.t)


class TestTransformState:
    @pytest.mark.parametrize(
        "src, dst, specific",
        [
            (Frame.ITRF, Frame.GCRF, sv_ecef_to_eci),
            (Frame.GCRF, Frame.ITRF, sv_eci_to_ecef),
            (Frame.GCRF, Frame.CIRS, sv_eci_to_eci),
            (Frame.ITRF, Frame.TIRS, sv_ecef_to_ecef),
        ],
    )
    def test_dispatch_matches_specific(self, src, dst, specific, vallado_jd_utc, vallado_states):
        r, v = vallado_states["ITRF"]
        sv = orbit_state_vector(vallado_jd_utc, r, v)
        out = transform_state(sv, src, dst)
        expected = specific(sv, src, dst)
        assert jnp.allclose(out.r, expected.r, rtol=0, atol=0.0)
        assert jnp.allclose(out.v, expected.v, rtol=0, atol=0.0)

    def test_second_epoch_rejected(self, sv_itrf):
        with pytest.raises(UnsupportedFramePairError):
            transform_state(sv_itrf, Frame.ITRF, Frame.GCRF, jd_utc_dst=sv_itrf.t + 1.0)

    def test_mixed_theories_rejected(self, sv_itrf):
        with pytest.raises(UnsupportedFramePairError):
            transform_state(sv_itrf, Frame.PEF, Frame.CIRS)

    def test_jit(self, sv_itrf, vallado_eop_iau2006):
        f = jax.jit(lambda sv, eop: transform_state(sv, Frame.ITRF, Frame.GCRF, eop))
        out = f(sv_itrf, vallado_eop_iau2006)
        expected = transform_state(sv_itrf, Frame.ITRF, Frame.GCRF, vallado_eop_iau2006)
        assert jnp.allclose(out.r, expected.r, rtol=0, atol=1e-9)
        assert jnp.allclose(out.v, expected.v, rtol=0, atol=1e-12)
