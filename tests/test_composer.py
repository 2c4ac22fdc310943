"""Tests for the frame graph (rotation between any two frames)."""

import itertools
import logging

import jax
import jax.numpy as jnp
import pytest

from framejax.eop import EOPExtrapolation, EOPModel, static_eop, zero_eop
from framejax.errors import (
    EOPModelMismatchError,
    FrameError,
    InvalidTimeRangeError,
    UnsupportedFramePairError,
)
from framejax.frames import (
    ECEF_FRAMES,
    ECI_FRAMES,
    NO_EOP,
    Frame,
    Theory,
    frame_rotation,
    frame_theory,
    rotation_ecef_to_ecef,
    rotation_ecef_to_eci,
    rotation_eci_to_ecef,
    rotation_eci_to_eci,
    select_theory,
)
from framejax.frames.composer import (
    EARTH_ROTATIONS,
    ECEF_LEGS,
    ECI_LEGS,
    ECI_SHORTCUTS,
    check_domain,
    earth_fixed_intermediate,
    inertial_intermediate,
    is_same_epoch,
)
from framejax.rotations import Quaternion, Representation, RotationMatrix, compose_rotations

_FK5_FRAMES = sorted(
    (f for f in Frame if frame_theory(f) in (Theory.FK5, None)), key=lambda f: f.value
)
_IAU2006_FRAMES = sorted(
    (f for f in Frame if frame_theory(f) in (Theory.IAU2006, None)), key=lambda f: f.value
)
_FK5_PAIRS = list(itertools.product(_FK5_FRAMES, repeat=2))
_IAU2006_PAIRS = list(itertools.product(_IAU2006_FRAMES, repeat=2))


def _max_err(a, b):
    return float(jnp.max(jnp.abs(a - b)))


def _eop_for(theory, fk5_eop, iau_eop):
    return fk5_eop if theory == Theory.FK5 else iau_eop


# ---------------------------------------------------------------------------
# Frame sets and dispatch tables
# ---------------------------------------------------------------------------


class TestDispatchTables:
    def test_frame_count(self):
        assert len(Frame) == 12
        assert ECEF_FRAMES | ECI_FRAMES == set(Frame)
        assert not ECEF_FRAMES & ECI_FRAMES

    @pytest.mark.parametrize("theory", list(Theory))
    def test_every_frame_of_a_theory_has_a_leg(self, theory):
        expected = {f for f in Frame if frame_theory(f) in (theory, None)}
        assert set(ECI_LEGS[theory]) | set(ECEF_LEGS[theory]) == expected
        assert set(ECI_LEGS[theory]) <= ECI_FRAMES
        assert set(ECEF_LEGS[theory]) <= ECEF_FRAMES

    def test_shortcuts_come_in_pairs(self):
        for src, dst in ECI_SHORTCUTS:
            assert (dst, src) in ECI_SHORTCUTS
            assert frame_theory(src) == frame_theory(dst)

    @pytest.mark.parametrize("theory", list(Theory))
    def test_earth_rotation_exists_for_every_inertial_frame(self, theory):
        fixed = earth_fixed_intermediate(theory)
        for frame in ECI_LEGS[theory]:
            assert (fixed, inertial_intermediate(theory, frame)) in EARTH_ROTATIONS

    def test_intermediates(self):
        assert earth_fixed_intermediate(Theory.FK5) == Frame.PEF
        assert earth_fixed_intermediate(Theory.IAU2006) == Frame.TIRS
        assert inertial_intermediate(Theory.FK5, Frame.TEME) == Frame.TOD
        assert inertial_intermediate(Theory.IAU2006, Frame.GCRF) == Frame.CIRS
        assert inertial_intermediate(Theory.IAU2006, Frame.MOD06) == Frame.ERS


# ---------------------------------------------------------------------------
# Theory selection and errors
# ---------------------------------------------------------------------------


class TestSelectTheory:
    def test_default_is_iau2006(self):
        assert select_theory(Frame.ITRF, Frame.GCRF) == Theory.IAU2006

    def test_from_frame_tags(self):
        assert select_theory(Frame.PEF, Frame.GCRF) == Theory.FK5
        assert select_theory(Frame.ITRF, Frame.CIRS) == Theory.IAU2006

    def test_from_eop(self):
        assert select_theory(Frame.ITRF, Frame.GCRF, zero_eop(EOPModel.IAU1980)) == Theory.FK5
        assert select_theory(Frame.ITRF, Frame.GCRF, zero_eop(EOPModel.IAU2000A)) == Theory.IAU2006

    def test_from_argument(self):
        assert select_theory(Frame.ITRF, Frame.GCRF, theory=Theory.FK5) == Theory.FK5

    def test_mixed_theories(self):
        with pytest.raises(UnsupportedFramePairError, match="different theories"):
            select_theory(Frame.PEF, Frame.CIRS)

    def test_argument_contradicts_frames(self):
        with pytest.raises(UnsupportedFramePairError):
            select_theory(Frame.TOD, Frame.GCRF, theory=Theory.IAU2006)

    def test_eop_contradicts_frames(self):
        with pytest.raises(EOPModelMismatchError):
            select_theory(Frame.TOD, Frame.GCRF, zero_eop(EOPModel.IAU2000A))
        with pytest.raises(EOPModelMismatchError):
            select_theory(Frame.TIRS, Frame.GCRF, zero_eop(EOPModel.IAU1980))

    def test_eop_contradicts_argument(self):
        with pytest.raises(EOPModelMismatchError):
            select_theory(Frame.ITRF, Frame.GCRF, zero_eop(EOPModel.IAU1980), Theory.IAU2006)

    def test_errors_share_a_base(self):
        assert issubclass(UnsupportedFramePairError, FrameError)
        assert issubclass(EOPModelMismatchError, FrameError)


class TestDomainErrors:
    def test_ecef_operator_rejects_inertial(self):
        with pytest.raises(UnsupportedFramePairError):
            rotation_ecef_to_ecef(Frame.ITRF, Frame.GCRF, 2453101.5)

    def test_eci_operator_rejects_earth_fixed(self):
        with pytest.raises(UnsupportedFramePairError):
            rotation_eci_to_eci(Frame.ITRF, Frame.GCRF, 2453101.5)

    def test_ecef_to_eci_direction(self):
        with pytest.raises(UnsupportedFramePairError):
            rotation_ecef_to_eci(Frame.GCRF, Frame.ITRF, 2453101.5)
        with pytest.raises(UnsupportedFramePairError):
            rotation_eci_to_ecef(Frame.ITRF, Frame.GCRF, 2453101.5)

    def test_second_epoch_only_for_inertial_pairs(self):
        with pytest.raises(UnsupportedFramePairError, match="second epoch"):
            frame_rotation(Frame.ITRF, Frame.GCRF, 2453101.5, jd_utc_dst=2453102.5)

    def test_same_second_epoch_is_accepted(self):
        R = frame_rotation(Frame.ITRF, Frame.GCRF, 2453101.5, jd_utc_dst=2453101.5)
        assert isinstance(R, RotationMatrix)

    def test_string_tags(self):
        a = frame_rotation("ITRF", "PEF", 2453101.5, theory=Theory.FK5).to_matrix()
        b = frame_rotation(Frame.ITRF, Frame.PEF, 2453101.5).to_matrix()
        assert jnp.array_equal(a, b)

    def test_check_domain(self):
        check_domain(Frame.ITRF, Frame.GCRF, ECEF_FRAMES, ECI_FRAMES, "op")
        with pytest.raises(UnsupportedFramePairError, match="op"):
            check_domain(Frame.GCRF, Frame.ITRF, ECEF_FRAMES, ECI_FRAMES, "op")

    def test_is_same_epoch(self):
        assert is_same_epoch(2453101.5, None)
        assert is_same_epoch(2453101.5, 2453101.5)
        assert not is_same_epoch(2453101.5, 2453101.75)

    def test_traced_epochs_are_distinct(self):
        seen = []

        def f(jd):
            seen.append(is_same_epoch(jd, jd + 0.0))
            return jd

        jax.jit(f)(2453101.5)
        assert seen == [False]


class TestEOPRange:
    def test_out_of_range_raises(self):
        eop = static_eop(mjd_min=53000.0, mjd_max=53050.0)
        with pytest.raises(InvalidTimeRangeError):
            frame_rotation(Frame.ITRF, Frame.GCRF, 2453101.5, eop)

    def test_hold_extrapolation(self):
        eop = static_eop(ut1_utc=-0.3, mjd_min=53000.0, mjd_max=53050.0)
        R = frame_rotation(
            Frame.ITRF, Frame.GCRF, 2453101.5, eop, extrapolation=EOPExtrapolation.HOLD
        )
        assert jnp.all(jnp.isfinite(R.to_matrix()))


# ---------------------------------------------------------------------------
# Algebraic properties
# ---------------------------------------------------------------------------


class TestIdentity:
    @pytest.mark.parametrize("frame", list(Frame))
    @pytest.mark.parametrize("representation", list(Representation))
    def test_same_frame(self, frame, representation, vallado_jd_utc):
        R = frame_rotation(frame, frame, vallado_jd_utc, representation=representation)
        assert jnp.allclose(R.to_matrix(), jnp.eye(3), rtol=0, atol=0.0)

    def test_same_frame_ignores_eop_theory(self, vallado_jd_utc):
        # No theory is needed to stay in the same Earth-fixed frame
        R = rotation_ecef_to_ecef(
            Frame.PEF, Frame.PEF, vallado_jd_utc, zero_eop(EOPModel.IAU2000A)
        )
        assert jnp.allclose(R.to_matrix(), jnp.eye(3), rtol=0, atol=0.0)


class TestRoundTrip:
    @pytest.mark.parametrize("src, dst", _FK5_PAIRS)
    def test_fk5(self, src, dst, vallado_jd_utc, vallado_eop_fk5):
        fwd = frame_rotation(src, dst, vallado_jd_utc, vallado_eop_fk5).to_matrix()
        back = frame_rotation(dst, src, vallado_jd_utc, vallado_eop_fk5).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-12), (
            f"Max error: {_max_err(back @ fwd, jnp.eye(3))}"
        )

    @pytest.mark.parametrize("src, dst", _IAU2006_PAIRS)
    def test_iau2006(self, src, dst, vallado_jd_utc, vallado_eop_iau2006):
        fwd = frame_rotation(src, dst, vallado_jd_utc, vallado_eop_iau2006).to_matrix()
        back = frame_rotation(dst, src, vallado_jd_utc, vallado_eop_iau2006).to_matrix()
        assert jnp.allclose(back @ fwd, jnp.eye(3), rtol=0, atol=1e-10), (
            f"Max error: {_max_err(back @ fwd, jnp.eye(3))}"
        )


class TestRepresentationEquivalence:
    @pytest.mark.parametrize(
        "src, dst",
        [
            (Frame.ITRF, Frame.GCRF),
            (Frame.ITRF, Frame.TEME),
            (Frame.PEF, Frame.J2000),
            (Frame.TIRS, Frame.MOD06),
            (Frame.GCRF, Frame.ERS),
            (Frame.TOD, Frame.MOD),
            (Frame.CIRS, Frame.ITRF),
        ],
    )
    def test_matrix_and_quaternion_agree(self, src, dst, vallado_jd_utc):
        R = frame_rotation(src, dst, vallado_jd_utc, representation=Representation.MATRIX)
        q = frame_rotation(src, dst, vallado_jd_utc, representation=Representation.QUATERNION)
        assert isinstance(R, RotationMatrix)
        assert isinstance(q, Quaternion)
        assert jnp.allclose(q.to_matrix(), R.to_matrix(), rtol=0, atol=1e-12), (
            f"Max error: {_max_err(q.to_matrix(), R.to_matrix())}"
        )

    def test_quaternion_is_unit(self, vallado_jd_utc, vallado_eop_iau2006):
        q = frame_rotation(
            Frame.ITRF, Frame.GCRF, vallado_jd_utc, vallado_eop_iau2006, Representation.QUATERNION
        )
        assert float(q.norm()) == pytest.approx(1.0, abs=1e-14)


class TestOrthonormality:
    @pytest.mark.parametrize("src, dst", [(Frame.ITRF, Frame.GCRF), (Frame.PEF, Frame.TEME)])
    def test_orthonormal(self, src, dst, vallado_jd_utc):
        R = frame_rotation(src, dst, vallado_jd_utc).to_matrix()
        assert jnp.allclose(R.T @ R, jnp.eye(3), rtol=0, atol=1e-14)
        assert abs(float(jnp.linalg.det(R)) - 1.0) < 1e-14


class TestPathIndependence:
    @pytest.mark.parametrize(
        "src, dst, tol",
        [
            (Frame.MOD, Frame.TOD, 1e-15),
            (Frame.TOD, Frame.TEME, 1e-15),
            (Frame.TEME, Frame.MOD, 1e-15),
            (Frame.MJ2000, Frame.MOD06, 1e-15),
            (Frame.MOD06, Frame.ERS, 1e-15),
            (Frame.CIRS, Frame.ERS, 1e-10),
        ],
    )
    def test_shortcut_matches_gcrf_route(self, src, dst, tol, vallado_jd_utc):
        eop = None
        direct = rotation_eci_to_eci(src, dst, vallado_jd_utc, eop).to_matrix()
        via_gcrf = compose_rotations(
            rotation_eci_to_eci(src, Frame.GCRF, vallado_jd_utc, eop),
            rotation_eci_to_eci(Frame.GCRF, dst, vallado_jd_utc, eop),
        ).to_matrix()
        assert jnp.allclose(direct, via_gcrf, rtol=0, atol=tol), f"Max error: {_max_err(direct, via_gcrf)}"

    @pytest.mark.parametrize("dst", [Frame.GCRF, Frame.TEME, Frame.J2000])
    def test_fk5_earth_fixed_chain(self, dst, vallado_jd_utc, vallado_eop_fk5):
        direct = rotation_ecef_to_eci(Frame.ITRF, dst, vallado_jd_utc, vallado_eop_fk5).to_matrix()
        via = compose_rotations(
            rotation_ecef_to_ecef(Frame.ITRF, Frame.PEF, vallado_jd_utc, vallado_eop_fk5),
            rotation_ecef_to_eci(Frame.PEF, Frame.TOD, vallado_jd_utc, vallado_eop_fk5),
            rotation_eci_to_eci(Frame.TOD, dst, vallado_jd_utc, vallado_eop_fk5),
        ).to_matrix()
        assert jnp.allclose(direct, via, rtol=0, atol=1e-14), f"Max error: {_max_err(direct, via)}"

    def test_iau2006_cio_and_equinox_routes_agree(self, vallado_jd_utc, vallado_eop_iau2006):
        # ITRF -> GCRF through CIRS, and ITRF -> MJ2000 (through ERS) -> GCRF
        cio = rotation_ecef_to_eci(Frame.ITRF, Frame.GCRF, vallado_jd_utc, vallado_eop_iau2006)
        equinox = compose_rotations(
            rotation_ecef_to_eci(Frame.ITRF, Frame.MJ2000, vallado_jd_utc, vallado_eop_iau2006),
            rotation_eci_to_eci(Frame.MJ2000, Frame.GCRF, vallado_jd_utc, vallado_eop_iau2006),
        )
        assert jnp.allclose(cio.to_matrix(), equinox.to_matrix(), rtol=0, atol=1e-10), (
            f"Max error: {_max_err(cio.to_matrix(), equinox.to_matrix())}"
        )

    def test_eci_to_ecef_is_inverse(self, vallado_jd_utc, vallado_eop_iau2006):
        a = rotation_ecef_to_eci(Frame.ITRF, Frame.ERS, vallado_jd_utc, vallado_eop_iau2006)
        b = rotation_eci_to_ecef(Frame.ERS, Frame.ITRF, vallado_jd_utc, vallado_eop_iau2006)
        assert jnp.allclose(b.to_matrix() @ a.to_matrix(), jnp.eye(3), rtol=0, atol=1e-14)


class TestJ2000Frame:
    def test_gcrf_to_j2000(self, vallado_jd_utc, vallado_eop_fk5, vallado_states):
        r_gcrf, v_gcrf = vallado_states["GCRF_FK5"]
        r_exp, v_exp = vallado_states["J2000"]
        R = rotation_eci_to_eci(Frame.GCRF, Frame.J2000, vallado_jd_utc, vallado_eop_fk5)
        assert jnp.allclose(R.apply(r_gcrf), r_exp, rtol=0, atol=1e-4), (
            f"Max error: {_max_err(R.apply(r_gcrf), r_exp)}"
        )
        assert jnp.allclose(R.apply(v_gcrf), v_exp, rtol=0, atol=1e-7), (
            f"Max error: {_max_err(R.apply(v_gcrf), v_exp)}"
        )

    def test_j2000_to_corrected_tod(self, vallado_jd_utc, vallado_eop_fk5, vallado_states):
        r_j2000, _ = vallado_states["J2000"]
        r_exp, _ = vallado_states["TOD"]
        R = rotation_eci_to_eci(Frame.J2000, Frame.TOD, vallado_jd_utc, vallado_eop_fk5)
        assert jnp.allclose(R.apply(r_j2000), r_exp, rtol=0, atol=1e-4), (
            f"Max error: {_max_err(R.apply(r_j2000), r_exp)}"
        )

    def test_j2000_to_tod_without_eop(self, vallado_jd_utc, vallado_states):
        # Without corrections J2000 coincides with the GCRF and TOD with its uncorrected variant
        r_j2000, _ = vallado_states["J2000"]
        r_exp, _ = vallado_states["TOD_UNCORRECTED"]
        R = rotation_eci_to_eci(Frame.J2000, Frame.TOD, vallado_jd_utc, theory=Theory.FK5)
        assert jnp.allclose(R.apply(r_j2000), r_exp, rtol=0, atol=1e-4), (
            f"Max error: {_max_err(R.apply(r_j2000), r_exp)}"
        )


class TestTwoEpochs:
    def test_tod_of_two_dates(self, vallado_jd_utc, vallado_eop_fk5):
        jd2 = vallado_jd_utc + 365.25
        R = rotation_eci_to_eci(
            Frame.TOD, Frame.TOD, vallado_jd_utc, vallado_eop_fk5, jd_utc_dst=jd2
        ).to_matrix()
        expected = compose_rotations(
            rotation_eci_to_eci(Frame.TOD, Frame.GCRF, vallado_jd_utc, vallado_eop_fk5),
            rotation_eci_to_eci(Frame.GCRF, Frame.TOD, jd2, vallado_eop_fk5),
        ).to_matrix()
        assert jnp.allclose(R, expected, rtol=0, atol=1e-15)
        # One year of precession is about 50 arcseconds
        assert float(jnp.max(jnp.abs(R - jnp.eye(3)))) > 1e-4

    def test_shortcut_not_used_across_epochs(self, vallado_jd_utc):
        jd2 = vallado_jd_utc + 30.0
        R = rotation_eci_to_eci(Frame.MOD, Frame.TOD, vallado_jd_utc, jd_utc_dst=jd2).to_matrix()
        expected = compose_rotations(
            rotation_eci_to_eci(Frame.MOD, Frame.GCRF, vallado_jd_utc),
            rotation_eci_to_eci(Frame.GCRF, Frame.TOD, jd2),
        ).to_matrix()
        assert jnp.allclose(R, expected, rtol=0, atol=1e-15)

    def test_inertial_frames_are_epoch_independent(self, vallado_jd_utc):
        R = rotation_eci_to_eci(
            Frame.GCRF, Frame.MJ2000, vallado_jd_utc, jd_utc_dst=vallado_jd_utc + 1000.0
        ).to_matrix()
        B = rotation_eci_to_eci(Frame.GCRF, Frame.MJ2000, vallado_jd_utc).to_matrix()
        assert jnp.allclose(R, B, rtol=0, atol=1e-15)


# ---------------------------------------------------------------------------
# No-EOP mode
# ---------------------------------------------------------------------------


class TestNoEOP:
    def test_no_eop_matches_zero_eop(self, vallado_jd_utc):
        a = frame_rotation(Frame.ITRF, Frame.GCRF, vallado_jd_utc, NO_EOP).to_matrix()
        b = frame_rotation(
            Frame.ITRF, Frame.GCRF, vallado_jd_utc, zero_eop(EOPModel.IAU2000A)
        ).to_matrix()
        assert jnp.allclose(a, b, rtol=0, atol=1e-15)

    def test_deterministic(self, vallado_jd_utc):
        a = frame_rotation(Frame.ITRF, Frame.TEME, vallado_jd_utc).to_matrix()
        b = frame_rotation(Frame.ITRF, Frame.TEME, vallado_jd_utc).to_matrix()
        assert jnp.array_equal(a, b)

    def test_logs_debug(self, vallado_jd_utc, caplog):
        with caplog.at_level(logging.DEBUG, logger="framejax.frames._orientation"):
            frame_rotation(Frame.ITRF, Frame.GCRF, vallado_jd_utc)
        assert "No EOP data" in caplog.text

    def test_eop_changes_result(self, vallado_jd_utc, vallado_eop_iau2006):
        a = frame_rotation(Frame.ITRF, Frame.GCRF, vallado_jd_utc).to_matrix()
        b = frame_rotation(Frame.ITRF, Frame.GCRF, vallado_jd_utc, vallado_eop_iau2006).to_matrix()
        assert float(jnp.max(jnp.abs(a - b))) > 1e-7


# ---------------------------------------------------------------------------
# JAX transformations
# ---------------------------------------------------------------------------


class TestJIT:
    def test_jit_ecef_to_eci(self, vallado_jd_utc, vallado_eop_iau2006):
        f = jax.jit(
            lambda jd, eop: rotation_ecef_to_eci(Frame.ITRF, Frame.GCRF, jd, eop).to_matrix()
        )
        expected = rotation_ecef_to_eci(
            Frame.ITRF, Frame.GCRF, vallado_jd_utc, vallado_eop_iau2006
        ).to_matrix()
        assert jnp.allclose(f(vallado_jd_utc, vallado_eop_iau2006), expected, rtol=0, atol=1e-12)

    def test_jit_two_epochs(self, vallado_jd_utc):
        f = jax.jit(
            lambda jd1, jd2: rotation_eci_to_eci(
                Frame.TOD, Frame.TOD, jd1, jd_utc_dst=jd2
            ).to_matrix()
        )
        expected = rotation_eci_to_eci(
            Frame.TOD, Frame.TOD, vallado_jd_utc, jd_utc_dst=vallado_jd_utc + 10.0
        ).to_matrix()
        assert jnp.allclose(f(vallado_jd_utc, vallado_jd_utc + 10.0), expected, rtol=0, atol=1e-12)

    def test_vmap_over_epochs(self, vallado_jd_utc):
        jds = vallado_jd_utc + jnp.linspace(0.0, 1.0, 5)
        mats = jax.vmap(
            lambda jd: frame_rotation(Frame.ITRF, Frame.GCRF, jd, theory=Theory.FK5).to_matrix()
        )(jds)
        assert mats.shape == (5, 3, 3)
        single = frame_rotation(Frame.ITRF, Frame.GCRF, jds[3], theory=Theory.FK5).to_matrix()
        assert jnp.allclose(mats[3], single, rtol=0, atol=1e-12)
