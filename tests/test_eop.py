"""Tests for the Earth Orientation Parameters (EOP) module."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from unittest.mock import patch

import httpx
import jax
import jax.numpy as jnp
import pytest

from framejax.config import get_dtype
from framejax.constants import AS2RAD, MAS2RAD
from framejax.eop import (
    EOPExtrapolation,
    EOPIau1980,
    EOPIau2000A,
    EOPModel,
    download_standard_eop_file,
    eop_model,
    get_dxdy,
    get_eop,
    get_lod,
    get_nutation_corrections,
    get_pm,
    get_uncertainty,
    get_ut1_utc,
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)
from framejax.eop._download import IERS_STANDARD_URLS
from framejax.eop._parsers import parse_standard_line
from framejax.errors import EOPModelMismatchError, InvalidTimeRangeError

_FULL_LINE = "2311 1 60249.00 I  0.274620 0.000020  0.268283 0.000018  I 0.0113205 0.0000039 -0.3630 0.0029  I     0.293    0.290    -0.045    0.041  0.274569  0.268315  0.0113342     0.238    -0.039  "
_NO_BULLETIN_B_LINE = "231220 60298.00 I  0.167496 0.000091  0.200643 0.000091  I 0.0109716 0.0000102  0.7706 0.0069  P     0.103    0.128    -0.193    0.160                                                     "
_PREDICTION_LINE = "24 3 4 60373.00 P  0.026108 0.007892  0.289637 0.008989  P 0.0110535 0.0072179                 P     0.006    0.128    -0.118    0.160                                                     "
_PREDICTION_NO_CPO_LINE = "241228 60672.00 P  0.173369 0.019841  0.266914 0.028808  P 0.0420038 0.0254096                                                                                                             "
_ONLY_MJD_LINE = "241229 60673.00                                                                                                                                                                            "


def _make_test_eop(
    mjds: list[float],
    ut1_utcs: list[float],
    pm_xs: list[float] | None = None,
    pm_ys: list[float] | None = None,
    dXs: list[float] | None = None,
    dYs: list[float] | None = None,
    lods: list[float] | None = None,
) -> EOPIau2000A:
    """Helper to construct an IAU 2000A dataset using the configured dtype."""
    dtype = get_dtype()
    n = len(mjds)
    return EOPIau2000A(
        mjd=jnp.array(mjds, dtype=dtype),
        pm_x=jnp.array(pm_xs or [0.0] * n, dtype=dtype),
        pm_y=jnp.array(pm_ys or [0.0] * n, dtype=dtype),
        ut1_utc=jnp.array(ut1_utcs, dtype=dtype),
        lod=jnp.array(lods or [0.0] * n, dtype=dtype),
        dX=jnp.array(dXs or [0.0] * n, dtype=dtype),
        dY=jnp.array(dYs or [0.0] * n, dtype=dtype),
        mjd_min=jnp.array(mjds[0], dtype=dtype),
        mjd_max=jnp.array(mjds[-1], dtype=dtype),
    )


@pytest.fixture()
def finals_path(tmp_path: Path) -> Path:
    """A small IERS standard file written to disk."""
    path = tmp_path / "finals.all.iau2000.txt"
    path.write_text(
        "\n".join([_FULL_LINE, _NO_BULLETIN_B_LINE, _PREDICTION_LINE, _PREDICTION_NO_CPO_LINE, _ONLY_MJD_LINE])
        + "\n",
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Static / Zero provider tests
# ---------------------------------------------------------------------------


class TestZeroEOP:
    def test_zero_eop_default_model(self):
        eop = zero_eop()
        assert isinstance(eop, EOPIau2000A)
        assert eop_model(eop) == EOPModel.IAU2000A

    def test_zero_eop_iau1980(self):
        eop = zero_eop(EOPModel.IAU1980)
        assert isinstance(eop, EOPIau1980)
        assert eop_model(eop) == EOPModel.IAU1980

    def test_zero_eop_get_eop(self):
        values = get_eop(zero_eop(), 59569.0)
        assert len(values) == 6
        for v in values:
            assert v == pytest.approx(0.0, abs=1e-15)


class TestStaticEOP:
    def test_static_eop_constant_values(self):
        eop = static_eop(pm_x=1e-6, pm_y=2e-6, ut1_utc=0.5, lod=0.001, dX=3e-9, dY=4e-9)
        pm_x, pm_y = get_pm(eop, 59569.0)
        assert pm_x == pytest.approx(1e-6, abs=1e-15)
        assert pm_y == pytest.approx(2e-6, abs=1e-15)
        assert get_ut1_utc(eop, 59569.0) == pytest.approx(0.5, abs=1e-12)
        assert get_lod(eop, 59569.0) == pytest.approx(0.001, abs=1e-12)
        dx, dy = get_dxdy(eop, 59569.0)
        assert dx == pytest.approx(3e-9, abs=1e-18)
        assert dy == pytest.approx(4e-9, abs=1e-18)

    def test_static_eop_iau1980_corrections(self):
        eop = static_eop(dpsi=-0.052195 * AS2RAD, deps=-0.003875 * AS2RAD, model=EOPModel.IAU1980)
        dpsi, deps = get_nutation_corrections(eop, 53101.0)
        assert dpsi == pytest.approx(-0.052195 * AS2RAD, rel=1e-12)
        assert deps == pytest.approx(-0.003875 * AS2RAD, rel=1e-12)

    def test_static_eop_get_eop_order_iau1980(self):
        eop = static_eop(ut1_utc=-0.44, dpsi=1e-7, deps=2e-7, model=EOPModel.IAU1980)
        pm_x, pm_y, ut1_utc, lod, c1, c2 = get_eop(eop, 53101.0)
        assert ut1_utc == pytest.approx(-0.44, abs=1e-12)
        assert c1 == pytest.approx(1e-7, abs=1e-18)
        assert c2 == pytest.approx(2e-7, abs=1e-18)

    def test_static_eop_wrong_offsets_raise(self):
        with pytest.raises(ValueError):
            static_eop(dX=1e-9, model=EOPModel.IAU1980)
        with pytest.raises(ValueError):
            static_eop(dpsi=1e-9, model=EOPModel.IAU2000A)

    def test_model_specific_queries_raise_on_mismatch(self):
        with pytest.raises(EOPModelMismatchError):
            get_dxdy(zero_eop(EOPModel.IAU1980), 59569.0)
        with pytest.raises(EOPModelMismatchError):
            get_nutation_corrections(zero_eop(EOPModel.IAU2000A), 59569.0)

    def test_eop_model_rejects_other_types(self):
        with pytest.raises(TypeError):
            eop_model("not an eop dataset")


# ---------------------------------------------------------------------------
# Interpolation tests
# ---------------------------------------------------------------------------


class TestInterpolation:
    """Tests for linear interpolation in EOP lookups."""

    @pytest.fixture()
    def three_point_eop(self) -> EOPIau2000A:
        return _make_test_eop(
            mjds=[59000.0, 59001.0, 59002.0],
            ut1_utcs=[0.1, 0.2, 0.3],
            pm_xs=[1.0e-6, 2.0e-6, 3.0e-6],
            pm_ys=[0.5e-6, 1.0e-6, 1.5e-6],
            dXs=[1.0e-9, 2.0e-9, 3.0e-9],
            dYs=[4.0e-9, 5.0e-9, 6.0e-9],
            lods=[0.001, 0.002, 0.003],
        )

    def test_interpolate_at_data_point(self, three_point_eop):
        assert get_ut1_utc(three_point_eop, 59001.0) == pytest.approx(0.2, abs=1e-12)

    def test_interpolate_midpoint(self, three_point_eop):
        assert get_ut1_utc(three_point_eop, 59000.5) == pytest.approx(0.15, abs=1e-12)

    def test_interpolate_quarter(self, three_point_eop):
        assert get_ut1_utc(three_point_eop, 59000.25) == pytest.approx(0.125, abs=1e-12)

    def test_interpolate_pm(self, three_point_eop):
        pm_x, pm_y = get_pm(three_point_eop, 59000.5)
        assert pm_x == pytest.approx(1.5e-6, abs=1e-15)
        assert pm_y == pytest.approx(0.75e-6, abs=1e-15)

    def test_interpolate_dxdy(self, three_point_eop):
        dx, dy = get_dxdy(three_point_eop, 59001.5)
        assert dx == pytest.approx(2.5e-9, abs=1e-18)
        assert dy == pytest.approx(5.5e-9, abs=1e-18)

    def test_interpolate_lod(self, three_point_eop):
        assert get_lod(three_point_eop, 59000.5) == pytest.approx(0.0015, abs=1e-12)

    def test_interpolate_at_boundaries(self, three_point_eop):
        assert get_ut1_utc(three_point_eop, 59000.0) == pytest.approx(0.1, abs=1e-12)
        assert get_ut1_utc(three_point_eop, 59002.0) == pytest.approx(0.3, abs=1e-12)


# ---------------------------------------------------------------------------
# Extrapolation tests
# ---------------------------------------------------------------------------


class TestExtrapolation:
    @pytest.fixture()
    def bounded_eop(self) -> EOPIau2000A:
        return _make_test_eop(
            mjds=[59000.0, 59001.0, 59002.0],
            ut1_utcs=[0.1, 0.2, 0.3],
        )

    def test_default_raises_before(self, bounded_eop):
        with pytest.raises(InvalidTimeRangeError) as excinfo:
            get_ut1_utc(bounded_eop, 58999.0)
        assert excinfo.value.mjd == pytest.approx(58999.0)
        assert excinfo.value.mjd_min == pytest.approx(59000.0)
        assert excinfo.value.mjd_max == pytest.approx(59002.0)

    def test_default_raises_after(self, bounded_eop):
        with pytest.raises(InvalidTimeRangeError):
            get_ut1_utc(bounded_eop, 59003.0)

    def test_range_error_is_value_error(self, bounded_eop):
        with pytest.raises(ValueError):
            get_eop(bounded_eop, 59003.0)

    def test_hold_extrapolation_before(self, bounded_eop):
        val = get_ut1_utc(bounded_eop, 58999.0, EOPExtrapolation.HOLD)
        assert val == pytest.approx(0.1, abs=1e-12)

    def test_hold_extrapolation_after(self, bounded_eop):
        val = get_ut1_utc(bounded_eop, 59003.0, EOPExtrapolation.HOLD)
        assert val == pytest.approx(0.3, abs=1e-12)

    def test_zero_extrapolation_before(self, bounded_eop):
        val = get_ut1_utc(bounded_eop, 58999.0, EOPExtrapolation.ZERO)
        assert val == pytest.approx(0.0, abs=1e-12)

    def test_zero_extrapolation_after(self, bounded_eop):
        val = get_ut1_utc(bounded_eop, 59003.0, EOPExtrapolation.ZERO)
        assert val == pytest.approx(0.0, abs=1e-12)

    def test_zero_extrapolation_in_range(self, bounded_eop):
        val = get_ut1_utc(bounded_eop, 59001.0, EOPExtrapolation.ZERO)
        assert val == pytest.approx(0.2, abs=1e-12)

    def test_traced_query_holds_boundary(self, bounded_eop):
        """Under jit the epoch is abstract, so the range check is skipped."""
        val = jax.jit(lambda m: get_ut1_utc(bounded_eop, m))(59003.0)
        assert val == pytest.approx(0.3, abs=1e-12)


# ---------------------------------------------------------------------------
# JIT / vmap compatibility tests
# ---------------------------------------------------------------------------


class TestJITCompatibility:
    def test_jit_get_eop(self):
        eop = static_eop(ut1_utc=0.1, pm_x=1e-6, lod=0.001)
        pm_x, pm_y, ut1_utc, lod, dx, dy = jax.jit(get_eop, static_argnums=(2,))(eop, 59569.0)
        assert ut1_utc == pytest.approx(0.1, abs=1e-12)
        assert pm_x == pytest.approx(1e-6, abs=1e-15)
        assert lod == pytest.approx(0.001, abs=1e-12)

    def test_vmap_get_ut1_utc(self):
        eop = _make_test_eop(mjds=[59000.0, 59001.0, 59002.0], ut1_utcs=[0.1, 0.2, 0.3])
        dtype = get_dtype()
        mjd_batch = jnp.array([59000.0, 59000.5, 59001.0, 59001.5, 59002.0], dtype=dtype)
        results = jax.vmap(lambda m: get_ut1_utc(eop, m))(mjd_batch)
        expected = jnp.array([0.1, 0.15, 0.2, 0.25, 0.3], dtype=dtype)
        assert jnp.allclose(results, expected, rtol=0, atol=1e-12)

    def test_jit_matches_eager(self):
        eop = static_eop(ut1_utc=0.42, pm_x=1.5e-6)
        eager = get_ut1_utc(eop, 55000.0)
        jitted = jax.jit(get_ut1_utc, static_argnums=(2,))(eop, 55000.0)
        assert float(jitted) == pytest.approx(float(eager), abs=1e-15)


class TestEOPDataPytree:
    def test_eop_is_namedtuple(self):
        eop = zero_eop()
        assert isinstance(eop, tuple)
        assert hasattr(eop, "_fields")

    def test_tree_flatten_unflatten(self):
        eop = static_eop(ut1_utc=0.5, pm_x=1e-6, model=EOPModel.IAU1980)
        leaves, treedef = jax.tree.flatten(eop)
        eop2 = jax.tree.unflatten(treedef, leaves)
        assert isinstance(eop2, EOPIau1980)
        assert jnp.array_equal(eop.ut1_utc, eop2.ut1_utc)


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------


class TestParseStandardLine:
    def test_parse_full_line(self):
        """Full line with Bulletin A and Bulletin B values uses Bulletin A."""
        rec = parse_standard_line(_FULL_LINE)
        assert rec is not None
        assert rec.mjd == pytest.approx(60249.0)
        assert rec.pm_x == pytest.approx(0.274620 * AS2RAD, rel=1e-10)
        assert rec.pm_y == pytest.approx(0.268283 * AS2RAD, rel=1e-10)
        assert rec.ut1_utc == pytest.approx(0.0113205, rel=1e-10)
        assert rec.lod == pytest.approx(-0.3630e-3, rel=1e-10)
        assert rec.cpo_1 == pytest.approx(0.293 * MAS2RAD, rel=1e-10)
        assert rec.cpo_2 == pytest.approx(-0.045 * MAS2RAD, rel=1e-10)

    def test_parse_uncertainties(self):
        rec = parse_standard_line(_FULL_LINE)
        assert rec.pm_x_err == pytest.approx(0.000020 * AS2RAD, rel=1e-10)
        assert rec.ut1_utc_err == pytest.approx(0.0000039, rel=1e-10)
        assert rec.lod_err == pytest.approx(0.0029e-3, rel=1e-10)
        assert rec.cpo_1_err == pytest.approx(0.290 * MAS2RAD, rel=1e-10)

    def test_parse_no_bulletin_b(self):
        rec = parse_standard_line(_NO_BULLETIN_B_LINE)
        assert rec is not None
        assert rec.mjd == pytest.approx(60298.0)
        assert rec.lod == pytest.approx(0.7706e-3, rel=1e-10)
        assert rec.cpo_2 == pytest.approx(-0.193 * MAS2RAD, rel=1e-10)

    def test_parse_prediction_no_lod(self):
        rec = parse_standard_line(_PREDICTION_LINE)
        assert rec is not None
        assert math.isnan(rec.lod)
        assert rec.cpo_1 == pytest.approx(0.006 * MAS2RAD, rel=1e-10)

    def test_parse_prediction_no_lod_no_offsets(self):
        rec = parse_standard_line(_PREDICTION_NO_CPO_LINE)
        assert rec is not None
        assert rec.ut1_utc == pytest.approx(0.0420038, rel=1e-10)
        assert math.isnan(rec.lod)
        assert math.isnan(rec.cpo_1)
        assert math.isnan(rec.cpo_2)

    def test_parse_only_mjd_returns_none(self):
        assert parse_standard_line(_ONLY_MJD_LINE) is None

    def test_parse_too_long_returns_none(self):
        assert parse_standard_line(_FULL_LINE + "EXTRA") is None

    def test_parse_empty_string_returns_none(self):
        assert parse_standard_line("") is None

    def test_parse_short_line_pads_successfully(self):
        line = _PREDICTION_NO_CPO_LINE.rstrip()
        assert len(line) < 187
        rec = parse_standard_line(line)
        assert rec is not None
        assert rec.mjd == pytest.approx(60672.0)


# ---------------------------------------------------------------------------
# File loading tests
# ---------------------------------------------------------------------------


class TestLoadEOPFromFile:
    def test_load_iau2000a(self, finals_path):
        eop = load_eop_from_file(finals_path)
        assert isinstance(eop, EOPIau2000A)
        assert eop.mjd.shape[0] == 4
        assert float(eop.mjd_min) == pytest.approx(60249.0)
        assert float(eop.mjd_max) == pytest.approx(60672.0)

    def test_load_iau1980_uses_same_columns(self, finals_path):
        eop = load_eop_from_file(finals_path, model=EOPModel.IAU1980)
        assert isinstance(eop, EOPIau1980)
        assert float(eop.dpsi[0]) == pytest.approx(0.293 * MAS2RAD, rel=1e-10)

    def test_load_known_values(self, finals_path):
        eop = load_eop_from_file(finals_path)
        assert get_ut1_utc(eop, 60249.0) == pytest.approx(0.0113205, abs=1e-12)
        pm_x, _ = get_pm(eop, 60249.0)
        assert pm_x == pytest.approx(0.274620 * AS2RAD, rel=1e-10)

    def test_missing_lod_holds_last_value(self, finals_path):
        eop = load_eop_from_file(finals_path)
        last = get_lod(eop, 60298.0)
        assert not jnp.isnan(last)
        assert get_lod(eop, 60373.0) == last
        assert get_lod(eop, 60672.0) == last
        # Between the last sample and the held region the value is constant too
        assert get_lod(eop, 60500.0) == last

    def test_missing_pole_offsets_hold_last_value(self, finals_path):
        eop = load_eop_from_file(finals_path)
        dX_last, dY_last = get_dxdy(eop, 60373.0)
        assert dX_last == pytest.approx(0.006 * MAS2RAD, rel=1e-10)
        dX, dY = get_dxdy(eop, 60672.0)
        assert dX == dX_last
        assert dY == dY_last

    def test_observed_values_are_untouched(self, finals_path):
        eop = load_eop_from_file(finals_path)
        dX, _ = get_dxdy(eop, 60298.0)
        assert dX == pytest.approx(0.103 * MAS2RAD, rel=1e-10)
        assert not bool(jnp.any(jnp.isnan(eop.ut1_utc)))

    def test_held_dataset_feeds_rotations(self, finals_path):
        from framejax.frames import Frame, frame_rotation

        eop = load_eop_from_file(finals_path)
        R = frame_rotation(Frame.ITRF, Frame.GCRF, 60600.0 + 2400000.5, eop)
        assert jnp.all(jnp.isfinite(R.to_matrix()))

    def test_uncertainties_are_not_held(self, finals_path):
        eop = load_eop_from_file(finals_path)
        assert jnp.isnan(eop.lod_err[-1])

    def test_load_logs_summary(self, finals_path, caplog):
        with caplog.at_level(logging.INFO, logger="framejax.eop._providers"):
            load_eop_from_file(finals_path)
        assert "Loaded 4" in caplog.text

    def test_load_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_eop_from_file(tmp_path / "missing.txt")

    def test_load_file_without_records(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("nothing to see here\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_eop_from_file(path)


class TestUncertainty:
    def test_interpolated_uncertainty(self, finals_path):
        eop = load_eop_from_file(finals_path)
        err = get_uncertainty(eop, "pm_x", 60249.0)
        assert err == pytest.approx(0.000020 * AS2RAD, rel=1e-10)

    def test_model_specific_uncertainty(self, finals_path):
        eop = load_eop_from_file(finals_path)
        err = get_uncertainty(eop, "dY", 60249.0)
        assert err == pytest.approx(0.041 * MAS2RAD, rel=1e-10)

    def test_static_dataset_has_no_uncertainty(self):
        assert get_uncertainty(zero_eop(), "ut1_utc", 59569.0) is None

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="no field"):
            get_uncertainty(zero_eop(EOPModel.IAU1980), "dX", 59569.0)


# ---------------------------------------------------------------------------
# Download and cache tests
# ---------------------------------------------------------------------------


class TestDownloadStandardEOPFile:
    @pytest.mark.ci
    def test_download_success(self, tmp_path: Path) -> None:
        """Actual download from IERS produces a non-empty file."""
        dest = tmp_path / "finals.all.iau1980.txt"
        result = download_standard_eop_file(dest, model=EOPModel.IAU1980)
        assert result.exists()
        assert result.stat().st_size > 0

    def test_download_creates_parent_dirs(self, tmp_path: Path) -> None:
        dest = tmp_path / "deep" / "nested" / "finals.txt"

        with patch("framejax.eop._download.httpx.Client") as mock_client_cls:
            mock_response = mock_client_cls.return_value.__enter__.return_value.get.return_value
            mock_response.text = _FULL_LINE + "\n"
            mock_response.raise_for_status.return_value = None

            result = download_standard_eop_file(dest)

        assert dest.exists()
        assert result == dest.resolve()
        assert dest.read_text(encoding="utf-8").startswith("2311 1 60249.00")

    def test_download_uses_model_url(self, tmp_path: Path) -> None:
        with patch("framejax.eop._download.httpx.Client") as mock_client_cls:
            client = mock_client_cls.return_value.__enter__.return_value
            client.get.return_value.text = ""
            download_standard_eop_file(tmp_path / "f.txt", model=EOPModel.IAU1980)
            client.get.assert_called_once_with(IERS_STANDARD_URLS[EOPModel.IAU1980])

    def test_download_http_error_propagates(self, tmp_path: Path) -> None:
        request = httpx.Request("GET", "https://example.invalid/finals")
        response = httpx.Response(404, request=request)
        with patch("framejax.eop._download.httpx.Client") as mock_client_cls:
            client = mock_client_cls.return_value.__enter__.return_value
            client.get.return_value.raise_for_status.side_effect = httpx.HTTPStatusError(
                "not found", request=request, response=response
            )
            with pytest.raises(httpx.HTTPStatusError):
                download_standard_eop_file(tmp_path / "f.txt")

    def test_default_urls(self) -> None:
        assert "iers.org" in IERS_STANDARD_URLS[EOPModel.IAU2000A]
        assert IERS_STANDARD_URLS[EOPModel.IAU1980].endswith("finals.all.iau1980.txt")
        assert IERS_STANDARD_URLS[EOPModel.IAU2000A].endswith("finals.all.iau2000.txt")


class TestLoadCachedEOP:
    def test_fresh_file_reused(self, finals_path: Path) -> None:
        with patch("framejax.eop._providers.download_standard_eop_file") as mock_dl:
            eop = load_cached_eop(finals_path, max_age_days=7.0)
            mock_dl.assert_not_called()
        assert isinstance(eop, EOPIau2000A)

    def test_stale_file_triggers_download(self, finals_path: Path) -> None:
        old_time = finals_path.stat().st_mtime - 30 * 86400
        os.utime(finals_path, (old_time, old_time))

        with patch("framejax.eop._providers.download_standard_eop_file") as mock_dl:
            mock_dl.return_value = finals_path
            load_cached_eop(finals_path, max_age_days=7.0)
            mock_dl.assert_called_once_with(finals_path, model=EOPModel.IAU2000A)

    def test_download_failure_uses_stale_file(self, finals_path: Path, caplog) -> None:
        old_time = finals_path.stat().st_mtime - 30 * 86400
        os.utime(finals_path, (old_time, old_time))

        with patch(
            "framejax.eop._providers.download_standard_eop_file",
            side_effect=httpx.ConnectError("network error"),
        ):
            with caplog.at_level(logging.WARNING, logger="framejax.eop._providers"):
                eop = load_cached_eop(finals_path, max_age_days=7.0)

        assert eop.mjd.shape[0] == 4
        assert "stale" in caplog.text

    def test_download_failure_without_cache_raises(self, tmp_path: Path) -> None:
        with patch(
            "framejax.eop._providers.download_standard_eop_file",
            side_effect=httpx.ConnectError("network error"),
        ):
            with pytest.raises(httpx.ConnectError):
                load_cached_eop(tmp_path / "missing.txt")

    def test_default_filepath(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("FRAMEJAX_CACHE", str(tmp_path))
        with (
            patch("framejax.eop._providers.is_file_stale", return_value=False),
            patch("framejax.eop._providers.load_eop_from_file") as mock_load,
        ):
            load_cached_eop(model=EOPModel.IAU1980)
            mock_load.assert_called_once_with(
                tmp_path / "eop" / "finals.all.iau1980.txt", EOPModel.IAU1980
            )
