"""
JSON Formatter for decoded GS1 records

Provides clean JSON output with:
- Only the fields present in the payload, plus the raw input
- Optional human-readable field names
- Optional diagnostics (skipped characters, issues)
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..core.record import DecodedRecord


# Record attribute to human-readable name mapping
FIELD_NAMES = {
    "gtin": "GTIN Code",
    "sscc": "SSCC",
    "lot": "Batch/Lot Number",
    "production_date": "Production Date",
    "best_before_date": "Best Before Date",
    "expiry_date": "Expiry Date",
    "serial": "Serial Number",
    "quantity": "Quantity",
    "weight": "Weight",
    "raw": "Raw Barcode",
}


def record_to_dict(
    record: DecodedRecord,
    *,
    human_readable: bool = False,
    include_diagnostics: bool = False
) -> Dict[str, Any]:
    """
    Convert a decoded record to a flat dictionary.

    Args:
        record: Result from decode_gs1()
        human_readable: Use display names instead of attribute names
        include_diagnostics: Add '_skipped' and '_issues' keys

    Returns:
        Dictionary with present fields and 'raw'
    """
    output: Dict[str, Any] = dict(record.fields())
    output["raw"] = record.raw

    if human_readable:
        output = {FIELD_NAMES[key]: value for key, value in output.items()}

    if include_diagnostics:
        output["_skipped"] = record.skipped
        output["_issues"] = [issue.to_dict() for issue in record.issues]

    return output


def decode_gs1_to_dict(barcode_data: str, **format_options) -> Dict[str, Any]:
    """
    Decode a barcode and return a dictionary.

    Example:
        >>> decode_gs1_to_dict("00123456789012345678")
        {'sscc': '123456789012345678', 'raw': '00123456789012345678'}
    """
    from ..core.decoder import decode_gs1

    return record_to_dict(decode_gs1(barcode_data), **format_options)


def decode_gs1_to_json(barcode_data: str, **format_options) -> str:
    """
    Decode a barcode and return JSON output.

    Example:
        >>> print(decode_gs1_to_json("10LOT42\\x1d21SN99", human_readable=True))
        {
          "Batch/Lot Number": "LOT42",
          "Serial Number": "SN99",
          "Raw Barcode": "10LOT42\\u001d21SN99"
        }
    """
    return json.dumps(
        decode_gs1_to_dict(barcode_data, **format_options),
        ensure_ascii=False,
        indent=2,
    )
