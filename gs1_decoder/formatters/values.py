"""
Value transforms applied to raw AI data before it reaches the record.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional


def format_gs1_date(value: str) -> str:
    """
    Format a GS1 YYMMDD date as an ISO date string.

    The century is always 20; no pivot year is applied. Values that are
    not exactly 6 characters are returned unchanged.

    Examples:
        >>> format_gs1_date("190125")
        '2019-01-25'
        >>> format_gs1_date("1901")
        '1901'
    """
    if len(value) != 6:
        return value
    yy, mm, dd = value[0:2], value[2:4], value[4:6]
    return f"20{yy}-{mm}-{dd}"


def copy_value(value: str) -> str:
    return value


TRANSFORMS: Dict[Optional[str], Callable[[str], str]] = {
    None: copy_value,
    "date": format_gs1_date,
}


def get_transform(name: Optional[str]) -> Callable[[str], str]:
    """Return the transform registered under 'name'."""
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise ValueError(f"Unknown value transform: {name!r}") from None
