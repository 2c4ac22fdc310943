"""Tests for the framejax.config module."""

import jax
import jax.numpy as jnp
import pytest

from framejax.config import get_dtype, set_dtype
from framejax.frames import Frame, rotation_eci_to_eci
from framejax.rotations import RotationMatrix, get_rotation_epsilon
from framejax.time import caldate_to_jd, jd_utc_to_tt

pytestmark = pytest.mark.order("first")


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float32 before and after each test."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float32)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float32")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestRotationEpsilon:
    def test_float32_tolerance(self):
        set_dtype(jnp.float32)
        assert get_rotation_epsilon() == 1e-6

    def test_float64_tolerance(self):
        set_dtype(jnp.float64)
        assert get_rotation_epsilon() == 1e-12

    def test_float16_tolerance(self):
        set_dtype(jnp.float16)
        assert get_rotation_epsilon() == 1e-3

    def test_bfloat16_tolerance(self):
        set_dtype(jnp.bfloat16)
        assert get_rotation_epsilon() == 1e-3


class TestDtypeSwitchingOutputs:
    """Verify that output dtypes match the configured dtype."""

    def test_rotation_matrix_dtype_float64(self):
        set_dtype(jnp.float64)
        assert RotationMatrix.rotation_z(0.5).to_matrix().dtype == jnp.float64

    def test_jd_tt_dtype_float64(self):
        set_dtype(jnp.float64)
        assert jd_utc_to_tt(2451545.0).dtype == jnp.float64

    def test_composer_dtype_float64(self):
        set_dtype(jnp.float64)
        D = rotation_eci_to_eci(Frame.GCRF, Frame.TOD, 2451545.0)
        assert D.to_matrix().dtype == jnp.float64


class TestFloat64Precision:
    def test_jd_precision_float64(self):
        """Float64 JD should resolve the sub-day fraction to well below a millisecond."""
        set_dtype(jnp.float64)
        jd = float(caldate_to_jd(2024, 6, 15, 6, 30, 0.0))
        fractional = jd - int(jd)
        expected_frac = (6.0 * 3600 + 30.0 * 60 + 43200.0) / 86400.0
        assert abs(fractional - expected_frac) < 1e-8
