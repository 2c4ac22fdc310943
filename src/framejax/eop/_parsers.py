"""Parsers for IERS Earth Orientation Parameter data files.

Supports the IERS standard "finals" format (Bulletin A/B fixed-width
records).  The same layout is used by ``finals.all.iau1980.txt`` and
``finals.all.iau2000.txt``; only the meaning of the celestial pole offset
columns differs (dPsi/dEps against IAU 1980 nutation, or dX/dY against
IAU 2000A).  Values are converted to SI units (radians, seconds) on
parsing.

Column layout (1-based, from the IERS ``readme.finals``)::

     8-15  MJD (UTC)
    19-27  PM-x [as]            28-36  error [as]
    38-46  PM-y [as]            47-55  error [as]
    59-68  UT1-UTC [s]          69-78  error [s]
    80-86  LOD [ms]             87-93  error [ms]
    98-106 dX or dPsi [mas]    107-115 error [mas]
   117-125 dY or dEps [mas]    126-134 error [mas]
"""

from __future__ import annotations

import math
from typing import NamedTuple

from framejax.constants import AS2RAD, MAS2RAD

# Column ranges for IERS standard format (0-indexed Python slices)
_MJD_RANGE = slice(6, 15)
_PM_X_RANGE = slice(17, 27)
_PM_X_ERR_RANGE = slice(27, 36)
_PM_Y_RANGE = slice(36, 46)
_PM_Y_ERR_RANGE = slice(46, 55)
_UT1_UTC_RANGE = slice(58, 68)
_UT1_UTC_ERR_RANGE = slice(68, 78)
_LOD_RANGE = slice(78, 86)
_LOD_ERR_RANGE = slice(86, 93)
_CPO_1_RANGE = slice(96, 106)
_CPO_1_ERR_RANGE = slice(106, 115)
_CPO_2_RANGE = slice(115, 125)
_CPO_2_ERR_RANGE = slice(125, 134)
_STANDARD_LINE_LENGTH = 187


class StandardRecord(NamedTuple):
    """One parsed line of an IERS standard format file.

    ``cpo_1``/``cpo_2`` are the celestial pole offsets: dPsi/dEps in an
    IAU 1980 file, dX/dY in an IAU 2000A file.  Optional fields that are
    blank in the file are NaN.

    Attributes:
        mjd: Modified Julian Date (UTC).
        pm_x: Polar motion x [rad].
        pm_y: Polar motion y [rad].
        ut1_utc: UT1-UTC [s].
        lod: Length of day excess [s].
        cpo_1: First celestial pole offset [rad].
        cpo_2: Second celestial pole offset [rad].
        pm_x_err: Uncertainty of ``pm_x`` [rad].
        pm_y_err: Uncertainty of ``pm_y`` [rad].
        ut1_utc_err: Uncertainty of ``ut1_utc`` [s].
        lod_err: Uncertainty of ``lod`` [s].
        cpo_1_err: Uncertainty of ``cpo_1`` [rad].
        cpo_2_err: Uncertainty of ``cpo_2`` [rad].
    """

    mjd: float
    pm_x: float
    pm_y: float
    ut1_utc: float
    lod: float
    cpo_1: float
    cpo_2: float
    pm_x_err: float
    pm_y_err: float
    ut1_utc_err: float
    lod_err: float
    cpo_1_err: float
    cpo_2_err: float


def _optional_field(line: str, columns: slice, scale: float) -> float:
    try:
        return float(line[columns].strip()) * scale
    except ValueError:
        return math.nan


def parse_standard_line(line: str) -> StandardRecord | None:
    """Parse a single line from an IERS standard format EOP file.

    Lines shorter than 187 characters are padded with spaces (prediction
    lines may have trailing whitespace trimmed). Lines longer than 187
    characters or lines where required fields (MJD, PM_X, PM_Y, UT1-UTC)
    cannot be parsed are skipped (returns None).

    Args:
        line: A single line from the IERS standard format file.

    Returns:
        The parsed :class:`StandardRecord`, or None if the line cannot be
        parsed.
    """
    if len(line) > _STANDARD_LINE_LENGTH:
        return None

    line = line.ljust(_STANDARD_LINE_LENGTH)

    try:
        mjd = float(line[_MJD_RANGE].strip())
        pm_x = float(line[_PM_X_RANGE].strip()) * AS2RAD
        pm_y = float(line[_PM_Y_RANGE].strip()) * AS2RAD
        ut1_utc = float(line[_UT1_UTC_RANGE].strip())
    except ValueError:
        return None

    return StandardRecord(
        mjd=mjd,
        pm_x=pm_x,
        pm_y=pm_y,
        ut1_utc=ut1_utc,
        lod=_optional_field(line, _LOD_RANGE, 1.0e-3),  # ms -> s
        cpo_1=_optional_field(line, _CPO_1_RANGE, MAS2RAD),
        cpo_2=_optional_field(line, _CPO_2_RANGE, MAS2RAD),
        pm_x_err=_optional_field(line, _PM_X_ERR_RANGE, AS2RAD),
        pm_y_err=_optional_field(line, _PM_Y_ERR_RANGE, AS2RAD),
        ut1_utc_err=_optional_field(line, _UT1_UTC_ERR_RANGE, 1.0),
        lod_err=_optional_field(line, _LOD_ERR_RANGE, 1.0e-3),
        cpo_1_err=_optional_field(line, _CPO_1_ERR_RANGE, MAS2RAD),
        cpo_2_err=_optional_field(line, _CPO_2_ERR_RANGE, MAS2RAD),
    )


def parse_standard_file(filepath: str) -> list[StandardRecord]:
    """Parse an entire IERS standard format EOP file.

    Lines that cannot be parsed (e.g. empty prediction lines at the
    end of the file) are skipped.

    Args:
        filepath: Path to the IERS standard format file.

    Returns:
        Records in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no valid lines were parsed.
    """
    records: list[StandardRecord] = []
    with open(filepath) as f:
        for line in f:
            record = parse_standard_line(line.rstrip("\n"))
            if record is not None:
                records.append(record)

    if not records:
        raise ValueError(f"No valid EOP data found in {filepath}")

    return records
