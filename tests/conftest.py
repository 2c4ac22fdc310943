import jax.numpy as jnp
import pytest

from framejax.config import set_dtype
from framejax.constants import AS2RAD
from framejax.eop import EOPModel, static_eop


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    With pytest-xdist, each worker process starts with the default float32.
    This fixture ensures all tests get float64 unless they explicitly override
    it (e.g. test_config.py has its own autouse fixture that sets float32).
    """
    set_dtype(jnp.float64)


# ---------------------------------------------------------------------------
# Vallado, Fundamentals of Astrodynamics (4th Ed.), Example 3-15
# 2004 April 6, 07:51:28.386009 UTC
# ---------------------------------------------------------------------------


@pytest.fixture
def vallado_jd_utc():
    return 2453101.827411875


@pytest.fixture
def vallado_jd_tt():
    return 2453101.828154745


@pytest.fixture
def vallado_jd_ut1(vallado_jd_utc):
    return vallado_jd_utc - 0.4399619 / 86400.0


@pytest.fixture
def vallado_eop_fk5():
    """IAU 1980 EOP values of the example (nutation corrections dPsi, dEps)."""
    return static_eop(
        pm_x=-0.140682 * AS2RAD,
        pm_y=0.333309 * AS2RAD,
        ut1_utc=-0.4399619,
        lod=0.0015563,
        dpsi=-0.052195 * AS2RAD,
        deps=-0.003875 * AS2RAD,
        model=EOPModel.IAU1980,
    )


@pytest.fixture
def vallado_eop_iau2006():
    """IAU 2000A EOP values of the example (CIP offsets dX, dY)."""
    return static_eop(
        pm_x=-0.140682 * AS2RAD,
        pm_y=0.333309 * AS2RAD,
        ut1_utc=-0.4399619,
        lod=0.0015563,
        dX=-0.000205 * AS2RAD,
        dY=-0.000136 * AS2RAD,
    )


@pytest.fixture
def vallado_states():
    """Position [km] and velocity [km/s] of the example in every frame.

    ``TOD_UNCORRECTED`` is reached from the PEF with a sidereal time that
    ignores the nutation correction.
    """
    return {
        "ITRF": (
            jnp.array([-1033.4793830, 7901.2952754, 6380.3565958]),
            jnp.array([-3.225636520, -2.872451450, 5.531924446]),
        ),
        "PEF": (
            jnp.array([-1033.47503130, 7901.30558560, 6380.34453270]),
            jnp.array([-3.2256327470, -2.8724425110, 5.5319312880]),
        ),
        "TIRS": (
            jnp.array([-1033.47503120, 7901.30558560, 6380.34453270]),
            jnp.array([-3.2256327470, -2.8724425110, 5.5319312880]),
        ),
        "TOD": (
            jnp.array([5094.51620300, 6127.36527840, 6380.34453270]),
            jnp.array([-4.7460883850, 0.7860783240, 5.5319312880]),
        ),
        "TOD_UNCORRECTED": (
            jnp.array([5094.51478040, 6127.36646120, 6380.34453270]),
            jnp.array([-4.7460885670, 0.7860772220, 5.5319312880]),
        ),
        "MOD": (
            jnp.array([5094.02837450, 6127.87081640, 6380.24851640]),
            jnp.array([-4.7462630520, 0.7860140450, 5.5317905620]),
        ),
        "TEME": (
            jnp.array([5094.18016210, 6127.64465950, 6380.34453270]),
            jnp.array([-4.7461314870, 0.7858180410, 5.5319312880]),
        ),
        "GCRF_FK5": (
            jnp.array([5102.50895790, 6123.01140070, 6378.13692820]),
            jnp.array([-4.7432201570, 0.7905364970, 5.5337557270]),
        ),
        "J2000": (
            jnp.array([5102.50960000, 6123.01152000, 6378.13630000]),
            jnp.array([-4.7432196000, 0.7905366000, 5.5337561900]),
        ),
        "CIRS": (
            jnp.array([5100.01840470, 6122.78636480, 6380.34453270]),
            jnp.array([-4.7453803300, 0.7903414530, 5.5319312880]),
        ),
        "GCRF_IAU2006": (
            jnp.array([5102.50895290, 6123.01139910, 6378.13693380]),
            jnp.array([-4.7432201610, 0.7905364950, 5.5337557240]),
        ),
    }
