"""
Core decoding modules for the GS1 decoder.
"""

from .ai_table import AIEntry, AI_TABLE, AI_FAMILIES, match_ai, get_entry
from .record import DecodedRecord, DecodedElement, DecodeIssue, IssueCode
from .field_mapper import apply_value
from .decoder import decode_gs1, DecodeOptions, GS1Decoder

__all__ = [
    "AIEntry",
    "AI_TABLE",
    "AI_FAMILIES",
    "match_ai",
    "get_entry",
    "DecodedRecord",
    "DecodedElement",
    "DecodeIssue",
    "IssueCode",
    "apply_value",
    "decode_gs1",
    "DecodeOptions",
    "GS1Decoder",
]
