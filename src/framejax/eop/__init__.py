"""Earth Orientation Parameters (EOP) for JAX-compatible lookups.

Provides JIT-compatible EOP data storage and interpolation using sorted
JAX arrays and ``jnp.searchsorted``.  Two dataset layouts exist, one per
nutation theory (:class:`EOPIau1980` for the FK5 chain,
:class:`EOPIau2000A` for the IAU 2006 chains); the frame transformations
select the theory from the dataset type.

Typical usage::

    from framejax.eop import EOPModel, load_cached_eop, get_ut1_utc
    eop = load_cached_eop(model=EOPModel.IAU2000A)
    ut1_utc = get_ut1_utc(eop, 59569.5)
"""

from framejax.eop._download import download_standard_eop_file
from framejax.eop._lookup import (
    get_dxdy,
    get_eop,
    get_lod,
    get_nutation_corrections,
    get_pm,
    get_uncertainty,
    get_ut1_utc,
)
from framejax.eop._providers import (
    load_cached_eop,
    load_eop_from_file,
    static_eop,
    zero_eop,
)
from framejax.eop._types import (
    EOPData,
    EOPExtrapolation,
    EOPIau1980,
    EOPIau2000A,
    EOPModel,
    eop_model,
)

__all__ = [
    "EOPData",
    "EOPExtrapolation",
    "EOPIau1980",
    "EOPIau2000A",
    "EOPModel",
    "download_standard_eop_file",
    "eop_model",
    "get_dxdy",
    "get_eop",
    "get_lod",
    "get_nutation_corrections",
    "get_pm",
    "get_uncertainty",
    "get_ut1_utc",
    "load_cached_eop",
    "load_eop_from_file",
    "static_eop",
    "zero_eop",
]
