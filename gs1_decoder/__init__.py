"""
GS1 Application Identifier Decoder

Turns raw GS1-128 and GS1 DataMatrix payloads into structured records:
GTIN, SSCC, batch/lot, dates, serial number, quantity and weight.

Based on GS1 General Specifications framing (fixed-length and
FNC1-terminated variable-length element strings).
"""

from .core.decoder import decode_gs1, DecodeOptions, GS1Decoder
from .core.ai_table import AIEntry, AI_TABLE, AI_FAMILIES, match_ai, get_entry
from .core.record import DecodedRecord, DecodedElement, DecodeIssue, IssueCode
from .formatters.values import format_gs1_date
from .formatters.json_formatter import (
    record_to_dict,
    decode_gs1_to_dict,
    decode_gs1_to_json,
)
from .inventory import InventoryItem, build_inventory_item, adjust_quantity, set_quantity

__version__ = "1.0.0"
__all__ = [
    "decode_gs1",
    "DecodeOptions",
    "GS1Decoder",
    "AIEntry",
    "AI_TABLE",
    "AI_FAMILIES",
    "match_ai",
    "get_entry",
    "DecodedRecord",
    "DecodedElement",
    "DecodeIssue",
    "IssueCode",
    "format_gs1_date",
    "record_to_dict",
    "decode_gs1_to_dict",
    "decode_gs1_to_json",
    "InventoryItem",
    "build_inventory_item",
    "adjust_quantity",
    "set_quantity",
]
