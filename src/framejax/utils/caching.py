"""Local cache for downloaded Earth Orientation Parameter files.

The cache root is ``$FRAMEJAX_CACHE`` when that variable is set and
``~/.cache/framejax`` otherwise; the IERS finals files live under
``<root>/eop``.  Freshness is judged from the file modification time, in
days, which is how :func:`framejax.eop.load_cached_eop` expresses its
maximum age.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

from framejax.constants import SECONDS_PER_DAY

CACHE_ENV_VAR = "FRAMEJAX_CACHE"
_EOP_SUBDIR = "eop"


def get_cache_dir(subdirectory: str | None = None) -> Path:
    """Return the cache root (or a directory below it), creating it on demand.

    Args:
        subdirectory: Relative path below the cache root, e.g. ``"eop"``.

    Returns:
        The directory.
    """
    override = os.environ.get(CACHE_ENV_VAR)
    root = Path(override) if override is not None else Path.home() / ".cache" / "framejax"
    if subdirectory is not None:
        root = root / subdirectory
    root.mkdir(parents=True, exist_ok=True)
    return root


def get_eop_cache_dir() -> Path:
    """Directory holding the cached IERS finals files."""
    return get_cache_dir(_EOP_SUBDIR)


def file_age_days(filepath: str | Path) -> float:
    """Days since *filepath* was last written.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"No such file: '{filepath}'")
    return max(0.0, time.time() - filepath.stat().st_mtime) / SECONDS_PER_DAY


def is_file_stale(filepath: str | Path, max_age_days: float) -> bool:
    """Whether *filepath* must be downloaded again.

    Args:
        filepath: Cached file.
        max_age_days: Oldest acceptable age.

    Returns:
        ``True`` when the file is missing or older than *max_age_days*.
    """
    filepath = Path(filepath)
    return not filepath.exists() or file_age_days(filepath) > max_age_days
