"""
Application Identifier table for the GS1 decoder.

Defines, for every supported AI, how its value is framed (fixed length or
terminated by a separator) and which record field it populates.

AI code length is decided by classification, not by longest match:
- an enumerated set of 2-digit codes
- the single 3-digit code 240
- the 4-digit weight/measure family: prefix 310, 320 or 330 plus one digit
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class AIEntry:
    """
    A single Application Identifier entry.

    Attributes:
        ai: The Application Identifier code (2-4 digits)
        title: Human-readable title
        fixed_length: Data length for fixed-length AIs, None if variable
        max_length: Maximum expected data length
        target: Record field the value is written to, None if not modeled
        transform: Name of the value transform ('date') or None for a copy
    """
    ai: str
    title: str
    fixed_length: Optional[int] = None
    max_length: int = 0
    target: Optional[str] = None
    transform: Optional[str] = None

    @property
    def is_fixed(self) -> bool:
        return self.fixed_length is not None


def _fixed(ai: str, title: str, length: int, target: Optional[str], transform: Optional[str] = None) -> AIEntry:
    return AIEntry(ai, title, fixed_length=length, max_length=length, target=target, transform=transform)


def _variable(ai: str, title: str, max_length: int, target: Optional[str]) -> AIEntry:
    return AIEntry(ai, title, fixed_length=None, max_length=max_length, target=target)


AI_TABLE: Mapping[str, AIEntry] = MappingProxyType({
    entry.ai: entry
    for entry in (
        _fixed("00", "SSCC", 18, "sscc"),
        _fixed("01", "GTIN", 14, "gtin"),
        _fixed("02", "CONTENT", 14, "gtin"),
        _variable("10", "BATCH/LOT", 20, "lot"),
        _fixed("11", "PROD DATE", 6, "production_date", "date"),
        _fixed("13", "PACK DATE", 6, None, "date"),
        _fixed("15", "BEST BEFORE or BEST BY", 6, "best_before_date", "date"),
        _fixed("17", "USE BY or EXPIRY", 6, "expiry_date", "date"),
        _variable("21", "SERIAL", 20, "serial"),
        _variable("30", "VAR. COUNT", 8, "quantity"),
        _variable("37", "COUNT", 8, "quantity"),
        _variable("240", "ADDITIONAL ID", 30, None),
    )
})

# 4-digit AIs keyed by their 3-digit prefix; the 4th digit is the
# implied decimal position and does not change framing.
AI_FAMILIES: Mapping[str, AIEntry] = MappingProxyType({
    "310": _fixed("310n", "NET WEIGHT (kg)", 6, "weight"),
    "320": _fixed("320n", "NET WEIGHT (lb)", 6, "weight"),
    "330": _fixed("330n", "GROSS WEIGHT (kg)", 6, "weight"),
})

TWO_DIGIT_AIS = frozenset(ai for ai in AI_TABLE if len(ai) == 2)
THREE_DIGIT_AIS = frozenset(ai for ai in AI_TABLE if len(ai) == 3)

# ASCII only; str.isdigit() also accepts characters such as '²'
DIGITS = frozenset('0123456789')


def _family_entry(code: str) -> Optional[AIEntry]:
    """Resolve a concrete 4-digit code (e.g. '3103') against the families."""
    if len(code) != 4 or code[3] not in DIGITS:
        return None
    template = AI_FAMILIES.get(code[:3])
    if template is None:
        return None
    return replace(template, ai=code)


def match_ai(buffer: str, pos: int = 0) -> Tuple[Optional[AIEntry], str]:
    """
    Classify the AI starting at position 'pos'.

    Checks 2-digit codes, then 3-digit codes, then the 4-digit family.

    Returns:
        (AIEntry, code) or (None, '') if nothing matches
    """
    ai2 = buffer[pos:pos + 2]
    if ai2 in TWO_DIGIT_AIS:
        return AI_TABLE[ai2], ai2

    ai3 = buffer[pos:pos + 3]
    if ai3 in THREE_DIGIT_AIS:
        return AI_TABLE[ai3], ai3

    ai4 = buffer[pos:pos + 4]
    entry = _family_entry(ai4)
    if entry is not None:
        return entry, ai4

    return None, ""


def get_entry(code: str) -> Optional[AIEntry]:
    """Get an AI entry by exact code, including concrete family codes."""
    entry = AI_TABLE.get(code)
    if entry is not None:
        return entry
    return _family_entry(code)
