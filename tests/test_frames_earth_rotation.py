"""Tests for polar motion, sidereal rotation and the Earth's angular velocity."""

import jax
import jax.numpy as jnp
import pytest

from framejax.constants import AS2RAD, OMEGA_EARTH
from framejax.frames import (
    earth_angular_velocity,
    gast_iau1994,
    gast_iau2006,
    rotation_cirs_to_ers_iau2006,
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
from framejax.rotations import Representation, compose_rotations, rotation_sequence
from framejax.series import earth_rotation_angle, gmst_iau1982

_XP = -0.140682 * AS2RAD
_YP = 0.333309 * AS2RAD
_DDPSI = -0.052195 * AS2RAD
_UT1_UTC = -0.4399619


def _max_err(a, b):
    return float(jnp.max(jnp.abs(a - b)))


@pytest.fixture
def jd_ut1(vallado_jd_utc):
    return vallado_jd_utc + _UT1_UTC / 86400.0


# ---------------------------------------------------------------------------
# Polar motion
# ---------------------------------------------------------------------------


class TestPolarMotion:
    def test_itrf_to_pef(self, vallado_states):
        r_itrf, v_itrf = vallado_states["ITRF"]
        r_pef, v_pef = vallado_states["PEF"]
        W = rotation_itrf_to_pef_fk5(_XP, _YP)
        assert jnp.allclose(W.apply(r_itrf), r_pef, rtol=0, atol=1e-6), (
            f"Max error: {_max_err(W.apply(r_itrf), r_pef)}"
        )
        assert jnp.allclose(W.apply(v_itrf), v_pef, rtol=0, atol=1e-9), (
            f"Max error: {_max_err(W.apply(v_itrf), v_pef)}"
        )

    def test_itrf_to_tirs(self, vallado_jd_tt, vallado_states):
        r_itrf, _ = vallado_states["ITRF"]
        r_tirs, _ = vallado_states["TIRS"]
        W = rotation_itrf_to_tirs_iau2006(vallado_jd_tt, _XP, _YP)
        assert jnp.allclose(W.apply(r_itrf), r_tirs, rtol=0, atol=1e-6), (
            f"Max error: {_max_err(W.apply(r_itrf), r_tirs)}"
        )

    def test_pef_to_itrf_is_inverse(self):
        fwd = rotation_itrf_to_pef_fk5(_XP, _YP).to_matrix()
        back = rotation_pef_to_itrf_fk5(_XP, _YP).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-15)

    def test_tirs_to_itrf_is_inverse(self, vallado_jd_tt):
        fwd = rotation_itrf_to_tirs_iau2006(vallado_jd_tt, _XP, _YP).to_matrix()
        back = rotation_tirs_to_itrf_iau2006(vallado_jd_tt, _XP, _YP).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-15)

    def test_small_angle_approximation(self):
        # W ~ [[1, 0, -xp], [0, 1, yp], [xp, -yp, 1]] for ITRF -> PEF
        W = rotation_itrf_to_pef_fk5(_XP, _YP).to_matrix()
        approx = jnp.array([[1.0, 0.0, -_XP], [0.0, 1.0, _YP], [_XP, -_YP, 1.0]])
        assert jnp.allclose(W, approx, rtol=0, atol=5e-12)

    def test_tio_locator_only_differs_by_sp(self, vallado_jd_tt):
        from framejax.series import tio_locator_sp

        sp = tio_locator_sp(vallado_jd_tt)
        expected = rotation_sequence((_YP, _XP, -sp), "XYZ").to_matrix()
        W = rotation_itrf_to_tirs_iau2006(vallado_jd_tt, _XP, _YP).to_matrix()
        assert jnp.allclose(W, expected, rtol=0, atol=1e-16)


# ---------------------------------------------------------------------------
# Sidereal rotation (FK5)
# ---------------------------------------------------------------------------


class TestSiderealRotation:
    def test_pef_to_tod(self, jd_ut1, vallado_jd_tt, vallado_states):
        r_pef, _ = vallado_states["PEF"]
        r_tod, _ = vallado_states["TOD"]
        R = rotation_pef_to_tod_fk5(jd_ut1, vallado_jd_tt, _DDPSI)
        assert jnp.allclose(R.apply(r_pef), r_tod, rtol=0, atol=3e-4), (
            f"Max error: {_max_err(R.apply(r_pef), r_tod)}"
        )

    def test_pef_to_tod_without_correction(self, jd_ut1, vallado_jd_tt, vallado_states):
        r_pef, _ = vallado_states["PEF"]
        r_tod, _ = vallado_states["TOD_UNCORRECTED"]
        R = rotation_pef_to_tod_fk5(jd_ut1, vallado_jd_tt)
        assert jnp.allclose(R.apply(r_pef), r_tod, rtol=0, atol=3e-4), (
            f"Max error: {_max_err(R.apply(r_pef), r_tod)}"
        )

    def test_tod_to_pef_is_inverse(self, jd_ut1, vallado_jd_tt):
        fwd = rotation_pef_to_tod_fk5(jd_ut1, vallado_jd_tt, _DDPSI).to_matrix()
        back = rotation_tod_to_pef_fk5(jd_ut1, vallado_jd_tt, _DDPSI).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-15)

    def test_gast_close_to_gmst(self, jd_ut1, vallado_jd_tt):
        # The equation of the equinoxes never exceeds about 1.2 s of time
        diff = float(gast_iau1994(jd_ut1, vallado_jd_tt) - gmst_iau1982(jd_ut1))
        assert abs(diff) < 1.2 * 15.0 * AS2RAD

    def test_z_axis_preserved(self, jd_ut1, vallado_jd_tt, vallado_states):
        r_pef, _ = vallado_states["PEF"]
        r = rotation_pef_to_tod_fk5(jd_ut1, vallado_jd_tt, _DDPSI).apply(r_pef)
        assert float(r[2]) == pytest.approx(float(r_pef[2]), abs=1e-9)


# ---------------------------------------------------------------------------
# Earth rotation (IAU 2006)
# ---------------------------------------------------------------------------


class TestEarthRotationAngle:
    def test_tirs_to_cirs(self, jd_ut1, vallado_states):
        r_tirs, _ = vallado_states["TIRS"]
        r_cirs, _ = vallado_states["CIRS"]
        R = rotation_tirs_to_cirs_iau2006(jd_ut1)
        assert jnp.allclose(R.apply(r_tirs), r_cirs, rtol=0, atol=1e-4), (
            f"Max error: {_max_err(R.apply(r_tirs), r_cirs)}"
        )

    def test_cirs_to_tirs_is_inverse(self, jd_ut1):
        fwd = rotation_tirs_to_cirs_iau2006(jd_ut1).to_matrix()
        back = rotation_cirs_to_tirs_iau2006(jd_ut1).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-15)

    def test_tirs_to_ers_through_cirs(self, jd_ut1, vallado_jd_tt):
        via_cirs = compose_rotations(
            rotation_tirs_to_cirs_iau2006(jd_ut1),
            rotation_cirs_to_ers_iau2006(vallado_jd_tt),
        ).to_matrix()
        direct = rotation_tirs_to_ers_iau2006(jd_ut1, vallado_jd_tt).to_matrix()
        assert jnp.allclose(via_cirs, direct, rtol=0, atol=1e-14), f"Max error: {_max_err(via_cirs, direct)}"

    def test_ers_to_tirs_is_inverse(self, jd_ut1, vallado_jd_tt):
        fwd = rotation_tirs_to_ers_iau2006(jd_ut1, vallado_jd_tt).to_matrix()
        back = rotation_ers_to_tirs_iau2006(jd_ut1, vallado_jd_tt).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-15)

    def test_gast_theories_agree(self, jd_ut1, vallado_jd_tt):
        # IAU 2006 and IAU 1982/1994 sidereal times agree to a few mas
        gast06 = gast_iau2006(jd_ut1, vallado_jd_tt)
        gast94 = gast_iau1994(jd_ut1, vallado_jd_tt)
        diff = float(jnp.arctan2(jnp.sin(gast06 - gast94), jnp.cos(gast06 - gast94)))
        assert abs(diff) < 0.05 * AS2RAD

    def test_representation(self, jd_ut1):
        R = rotation_tirs_to_cirs_iau2006(jd_ut1, Representation.MATRIX).to_matrix()
        Q = rotation_tirs_to_cirs_iau2006(jd_ut1, Representation.QUATERNION).to_matrix()
        assert jnp.allclose(Q, R, rtol=0, atol=1e-14)

    def test_era_rate(self, jd_ut1):
        # One UT1 day advances the ERA by 1.00273781191135448 revolutions
        d_era = earth_rotation_angle(jd_ut1 + 1.0) - earth_rotation_angle(jd_ut1)
        expected = jnp.mod(0.00273781191135448 * 2.0 * jnp.pi, 2.0 * jnp.pi)
        assert float(jnp.mod(d_era, 2.0 * jnp.pi)) == pytest.approx(float(expected), abs=1e-7)


# ---------------------------------------------------------------------------
# Angular velocity
# ---------------------------------------------------------------------------


class TestAngularVelocity:
    def test_nominal(self):
        w = earth_angular_velocity()
        assert jnp.allclose(w, jnp.array([0.0, 0.0, OMEGA_EARTH]), rtol=0, atol=0.0)

    def test_length_of_day_correction(self):
        w = earth_angular_velocity(0.0015563)
        assert float(w[2]) == pytest.approx(OMEGA_EARTH * (1.0 - 0.0015563 / 86400.0), rel=1e-15)
        assert float(w[2]) < OMEGA_EARTH

    def test_jit(self):
        w = jax.jit(earth_angular_velocity)(0.001)
        assert w.shape == (3,)
