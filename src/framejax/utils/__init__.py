"""Filesystem helpers shared by the EOP loaders."""

from framejax.utils.caching import (
    CACHE_ENV_VAR,
    file_age_days,
    get_cache_dir,
    get_eop_cache_dir,
    is_file_stale,
)

__all__ = [
    "CACHE_ENV_VAR",
    "file_age_days",
    "get_cache_dir",
    "get_eop_cache_dir",
    "is_file_stale",
]
