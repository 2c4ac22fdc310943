"""Factory functions for creating EOP datasets.

Provides convenience constructors for common EOP configurations:

- :func:`static_eop`: Constant EOP values (useful for testing or when
  specific values are known).
- :func:`zero_eop`: All-zero EOP.  Transforms given this dataset match the
  ``eop=None`` no-EOP mode, except that the theory is pinned by its type.
- :func:`load_eop_from_file`: Load from an IERS standard format file.
- :func:`load_cached_eop`: Load from a local cache, downloading fresh data
  from IERS when stale.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import jax.numpy as jnp

from framejax.config import get_dtype
from framejax.eop._download import STANDARD_FILENAMES, download_standard_eop_file
from framejax.eop._parsers import parse_standard_file
from framejax.eop._types import EOPData, EOPIau1980, EOPIau2000A, EOPModel
from framejax.utils.caching import get_eop_cache_dir, is_file_stale

logger = logging.getLogger(__name__)

_DEFAULT_MAX_AGE_DAYS: float = 7.0
"""Default maximum age for cached EOP data in days."""


def _hold_last_valid(values: list[float]) -> list[float]:
    """Replace missing (NaN) samples by the last valid sample before them.

    IERS files leave a column blank where the prediction does not cover
    it (the pole offsets and LOD end well before the polar motion), so each
    column is cut at its last valid sample and held constant past it.
    Samples before the first valid one take the first valid value; a
    column without any valid sample becomes zero.
    """
    first = next((v for v in values if not math.isnan(v)), 0.0)
    held = []
    last = first
    for v in values:
        if not math.isnan(v):
            last = v
        held.append(last)
    return held


def static_eop(
    pm_x: float = 0.0,
    pm_y: float = 0.0,
    ut1_utc: float = 0.0,
    lod: float = 0.0,
    dX: float = 0.0,
    dY: float = 0.0,
    dpsi: float = 0.0,
    deps: float = 0.0,
    *,
    model: EOPModel = EOPModel.IAU2000A,
    mjd_min: float = 0.0,
    mjd_max: float = 99999.0,
) -> EOPData:
    """Create an EOP dataset with constant values across an MJD range.

    The resulting dataset contains two points (at mjd_min and mjd_max)
    with identical values, so interpolation returns the constant everywhere
    inside the range.

    Args:
        pm_x: Polar motion x-component [rad]. Default: 0.0.
        pm_y: Polar motion y-component [rad]. Default: 0.0.
        ut1_utc: UT1-UTC offset [seconds]. Default: 0.0.
        lod: Length of day excess [seconds]. Default: 0.0.
        dX: Celestial pole offset X [rad], IAU 2000A only. Default: 0.0.
        dY: Celestial pole offset Y [rad], IAU 2000A only. Default: 0.0.
        dpsi: Nutation correction in longitude [rad], IAU 1980 only. Default: 0.0.
        deps: Nutation correction in obliquity [rad], IAU 1980 only. Default: 0.0.
        model: Layout of the returned dataset. Default: IAU 2000A.
        mjd_min: Start of the valid MJD range. Default: 0.0.
        mjd_max: End of the valid MJD range. Default: 99999.0.

    Returns:
        :class:`EOPIau1980` or :class:`EOPIau2000A` with constant values.

    Raises:
        ValueError: If pole offsets of the other theory are given.

    Examples:
        ```python
        from framejax.constants import AS2RAD
        from framejax.eop import EOPModel, static_eop
        eop = static_eop(pm_x=-0.140682 * AS2RAD, dpsi=-0.052195 * AS2RAD,
                         model=EOPModel.IAU1980)
        ```
    """
    dtype = get_dtype()

    def _const(value: float):
        return jnp.array([value, value], dtype=dtype)

    common = dict(
        mjd=jnp.array([mjd_min, mjd_max], dtype=dtype),
        pm_x=_const(pm_x),
        pm_y=_const(pm_y),
        ut1_utc=_const(ut1_utc),
        lod=_const(lod),
    )
    bounds = dict(
        mjd_min=jnp.array(mjd_min, dtype=dtype),
        mjd_max=jnp.array(mjd_max, dtype=dtype),
    )

    if model == EOPModel.IAU1980:
        if dX != 0.0 or dY != 0.0:
            raise ValueError("dX/dY offsets are not part of an IAU 1980 dataset; use dpsi/deps")
        return EOPIau1980(**common, dpsi=_const(dpsi), deps=_const(deps), **bounds)

    if dpsi != 0.0 or deps != 0.0:
        raise ValueError("dpsi/deps corrections are not part of an IAU 2000A dataset; use dX/dY")
    return EOPIau2000A(**common, dX=_const(dX), dY=_const(dY), **bounds)


def zero_eop(model: EOPModel = EOPModel.IAU2000A) -> EOPData:
    """Create an EOP dataset with all-zero values.

    Args:
        model: Layout of the returned dataset. Default: IAU 2000A.

    Returns:
        EOP dataset with all values set to zero.

    Examples:
        ```python
        from framejax.eop import zero_eop, get_ut1_utc
        eop = zero_eop()
        val = get_ut1_utc(eop, 59569.0)  # returns 0.0
        ```
    """
    return static_eop(model=model)


def load_eop_from_file(
    filepath: str | Path,
    model: EOPModel = EOPModel.IAU2000A,
) -> EOPData:
    """Load EOP data from an IERS standard format file.

    Args:
        filepath: Path to an IERS standard format file
            (e.g. ``finals.all.iau2000.txt``).
        model: Theory of the celestial pole offset columns.  Must match the
            file: ``IAU1980`` for ``finals.all.iau1980.txt``, ``IAU2000A``
            for ``finals.all.iau2000.txt``.

    Blank (missing) values are held at the last valid value of their
    column, so the prediction region past the end of the pole offsets or
    LOD keeps the final observed value.  The uncertainty columns are
    loaded as they are.

    Returns:
        EOP dataset ready for JIT-compatible lookups.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no valid EOP data is found.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"EOP file not found: {filepath}")

    records = parse_standard_file(str(filepath))
    dtype = get_dtype()

    def _column(name: str):
        return jnp.array([getattr(r, name) for r in records], dtype=dtype)

    def _held(name: str):
        raw = [getattr(r, name) for r in records]
        n_missing = sum(math.isnan(v) for v in raw)
        if n_missing:
            logger.debug("Holding %s over %d missing samples", name, n_missing)
        return jnp.array(_hold_last_valid(raw), dtype=dtype)

    mjd = _column("mjd")
    fields = dict(
        mjd=mjd,
        pm_x=_held("pm_x"),
        pm_y=_held("pm_y"),
        ut1_utc=_held("ut1_utc"),
        lod=_held("lod"),
        mjd_min=mjd[0],
        mjd_max=mjd[-1],
        pm_x_err=_column("pm_x_err"),
        pm_y_err=_column("pm_y_err"),
        ut1_utc_err=_column("ut1_utc_err"),
        lod_err=_column("lod_err"),
    )

    logger.info(
        "Loaded %d %s EOP records from %s (MJD %.1f to %.1f)",
        len(records),
        model.value,
        filepath,
        records[0].mjd,
        records[-1].mjd,
    )

    if model == EOPModel.IAU1980:
        return EOPIau1980(
            **fields,
            dpsi=_held("cpo_1"),
            deps=_held("cpo_2"),
            dpsi_err=_column("cpo_1_err"),
            deps_err=_column("cpo_2_err"),
        )
    return EOPIau2000A(
        **fields,
        dX=_held("cpo_1"),
        dY=_held("cpo_2"),
        dX_err=_column("cpo_1_err"),
        dY_err=_column("cpo_2_err"),
    )


def load_cached_eop(
    filepath: str | Path | None = None,
    *,
    model: EOPModel = EOPModel.IAU2000A,
    max_age_days: float = _DEFAULT_MAX_AGE_DAYS,
) -> EOPData:
    """Load EOP data from a local cache, downloading fresh data when stale.

    If the cached file is missing or older than *max_age_days*, a fresh copy
    is downloaded from IERS.  When the download fails but a stale copy
    exists, the stale copy is used and a warning is logged.  When there is
    no local copy at all, the download error propagates.

    Args:
        filepath: Path to the cached EOP file.  When ``None`` (the default),
            uses ``<cache_dir>/eop/<finals file for model>``.
        model: Theory of the dataset to load.
        max_age_days: Maximum acceptable age of the cached file in days.
            Defaults to 7.

    Returns:
        EOP dataset loaded from the cached (or freshly downloaded) file.

    Raises:
        httpx.HTTPError: If the download fails and no cached copy exists.

    Examples:
        ```python
        from framejax.eop import EOPModel, load_cached_eop
        eop = load_cached_eop(model=EOPModel.IAU1980, max_age_days=1.0)
        ```
    """
    if filepath is None:
        filepath = get_eop_cache_dir() / STANDARD_FILENAMES[model]
    else:
        filepath = Path(filepath)

    if is_file_stale(filepath, max_age_days):
        try:
            download_standard_eop_file(filepath, model=model)
        except Exception:
            if not filepath.exists():
                raise
            logger.warning(
                "Failed to refresh EOP data; using stale cached file %s.",
                filepath,
                exc_info=True,
            )

    return load_eop_from_file(filepath, model)
