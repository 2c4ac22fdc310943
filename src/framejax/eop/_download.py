"""Download IERS Earth Orientation Parameter files.

Fetches the latest IERS "finals" files for either theory.  Network errors
are propagated to the caller so that :func:`load_cached_eop` can decide
whether a stale cached copy is acceptable.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from framejax.eop._types import EOPModel

logger = logging.getLogger(__name__)

IERS_STANDARD_URLS: dict[EOPModel, str] = {
    EOPModel.IAU1980: "https://datacenter.iers.org/data/latestVersion/finals.all.iau1980.txt",
    EOPModel.IAU2000A: "https://datacenter.iers.org/data/latestVersion/finals.all.iau2000.txt",
}
"""Default URLs for the IERS standard Bulletin A finals files."""

STANDARD_FILENAMES: dict[EOPModel, str] = {
    EOPModel.IAU1980: "finals.all.iau1980.txt",
    EOPModel.IAU2000A: "finals.all.iau2000.txt",
}
"""Canonical filenames used for cached EOP data."""

_DEFAULT_TIMEOUT: float = 120.0
"""Default HTTP timeout in seconds."""


def download_standard_eop_file(
    filepath: str | Path,
    *,
    model: EOPModel = EOPModel.IAU2000A,
    url: str | None = None,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Path:
    """Download an IERS standard EOP file to *filepath*.

    Creates parent directories if they do not exist.

    Args:
        filepath: Destination path for the downloaded file.
        model: Which finals file to fetch when *url* is not given.
        url: Explicit URL to fetch.  Defaults to the IERS URL for *model*.
        timeout: HTTP timeout in seconds.  Defaults to 120.

    Returns:
        Resolved :class:`~pathlib.Path` to the written file.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    url = url or IERS_STANDARD_URLS[model]

    logger.info("Downloading %s EOP data from %s", model.value, url)
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url)
        response.raise_for_status()

    filepath.write_text(response.text, encoding="utf-8")
    logger.info("EOP data written to %s", filepath)
    return filepath.resolve()
