"""
Field mapper: routes an (AI, value) pair into the decoded record.
"""

from __future__ import annotations

from .ai_table import AIEntry
from .record import DecodedRecord, RECORD_FIELDS
from ..formatters.values import get_transform


def map_value(entry: AIEntry, value: str) -> str:
    """Apply the entry's transform to a raw value."""
    return get_transform(entry.transform)(value)


def write_value(record: DecodedRecord, entry: AIEntry, mapped: str) -> DecodedRecord:
    """
    Write an already transformed value into the field targeted by 'entry'.

    AIs without a target (13, 240) are recognized but discarded. A later
    occurrence of the same field overwrites an earlier one.
    """
    if entry.target is None:
        return record
    if entry.target not in RECORD_FIELDS:
        raise ValueError(f"AI({entry.ai}) targets unknown field {entry.target!r}")
    setattr(record, entry.target, mapped)
    return record


def apply_value(record: DecodedRecord, entry: AIEntry, value: str) -> DecodedRecord:
    """Transform a raw value and write it into the record."""
    return write_value(record, entry, map_value(entry, value))
