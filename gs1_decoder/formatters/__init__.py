"""
Value transforms and output formatters for decoded GS1 records.
"""

from .values import format_gs1_date
from .json_formatter import (
    record_to_dict,
    decode_gs1_to_dict,
    decode_gs1_to_json,
)

__all__ = [
    "format_gs1_date",
    "record_to_dict",
    "decode_gs1_to_dict",
    "decode_gs1_to_json",
]
