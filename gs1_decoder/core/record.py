"""
Result types produced by the GS1 decoder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Record attributes that hold decoded values, in output order
RECORD_FIELDS = (
    "gtin",
    "sscc",
    "lot",
    "production_date",
    "best_before_date",
    "expiry_date",
    "serial",
    "quantity",
    "weight",
)


class IssueCode(str, Enum):
    """Diagnostic codes. None of these abort decoding."""
    UNKNOWN_AI = "UNKNOWN_AI"
    TRUNCATED_DATA = "TRUNCATED_DATA"
    INVALID_DATE = "INVALID_DATE"
    INVALID_LENGTH = "INVALID_LENGTH"


@dataclass
class DecodeIssue:
    """A problem found and recovered from while decoding."""
    code: str
    message: str
    at_index: Optional[int] = None
    ai: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code.value if isinstance(self.code, IssueCode) else self.code,
            'message': self.message,
            'at_index': self.at_index,
            'ai': self.ai,
        }


@dataclass
class DecodedElement:
    """
    One matched AI and its extracted value.

    Attributes:
        ai: Concrete AI code (e.g. '01', '3103')
        title: Human-readable title from the AI table
        raw_value: Value exactly as extracted
        value: Value after the AI's transform
        start_index: Position of the AI code in the normalized buffer
        end_index: Position just past the value (and its delimiter)
    """
    ai: str
    title: str
    raw_value: str
    value: str
    start_index: int = 0
    end_index: int = 0


@dataclass
class DecodedRecord:
    """
    Structured result of decoding one barcode payload.

    Every field except 'raw' is optional. 'raw' is always the untouched
    input; the prefix-stripped buffer is internal to the decoder.
    """
    raw: str
    gtin: Optional[str] = None
    sscc: Optional[str] = None
    lot: Optional[str] = None
    production_date: Optional[str] = None
    best_before_date: Optional[str] = None
    expiry_date: Optional[str] = None
    serial: Optional[str] = None
    quantity: Optional[str] = None
    weight: Optional[str] = None
    symbology_identifier: Optional[str] = None
    elements: List[DecodedElement] = field(default_factory=list)
    issues: List[DecodeIssue] = field(default_factory=list)
    skipped: int = 0

    def fields(self) -> Dict[str, str]:
        """Return only the decoded fields that are present."""
        return {
            name: getattr(self, name)
            for name in RECORD_FIELDS
            if getattr(self, name) is not None
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'raw': self.raw,
            **{name: getattr(self, name) for name in RECORD_FIELDS},
            'symbology_identifier': self.symbology_identifier,
            'elements': [
                {
                    'ai': e.ai,
                    'title': e.title,
                    'raw_value': e.raw_value,
                    'value': e.value,
                    'start_index': e.start_index,
                    'end_index': e.end_index,
                }
                for e in self.elements
            ],
            'issues': [i.to_dict() for i in self.issues],
            'skipped': self.skipped,
        }
