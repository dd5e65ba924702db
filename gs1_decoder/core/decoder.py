"""
GS1 Application Identifier Decoder

Best-effort decoder for GS1 element strings from GS1-128 and
GS1 DataMatrix symbols.

Features:
- Single left-to-right pass with a cursor, O(n)
- Fixed-length and separator-terminated variable-length fields
- Never raises for malformed payloads; problems are reported as issues

Key rules:
- A leading symbology identifier (]d2) is stripped before parsing
- FNC1 is transmitted as <GS> (ASCII 29, 0x1D) and terminates variable fields
- Unrecognized characters are skipped one at a time
- Duplicate AIs: the last occurrence wins
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

import structlog

from .ai_table import AIEntry, match_ai
from .field_mapper import map_value, write_value
from .record import DecodedElement, DecodedRecord, DecodeIssue, IssueCode


logger = structlog.get_logger(__name__)

# Separator used inside the normalized buffer. A literal '|' in the
# payload therefore also terminates a variable-length field.
DELIMITER = '|'

# Symbology identifier prefixes (ISO/IEC 15424)
SYMBOLOGY_NAMES = {
    ']d2': 'GS1 DataMatrix',
    ']C1': 'GS1-128',
    ']e0': 'GS1 DataBar',
    ']Q3': 'GS1 QR Code',
}


@dataclass
class DecodeOptions:
    """
    Configuration options for decoding.

    Attributes:
        strip_symbology: Remove a leading symbology identifier
        symbology_prefixes: Prefixes recognized as symbology identifiers
        gs_characters: Strings treated as field separators
    """
    strip_symbology: bool = True
    symbology_prefixes: Tuple[str, ...] = (']d2',)
    gs_characters: FrozenSet[str] = field(default_factory=lambda: frozenset({
        '\x1d',      # ASCII 29 (GS)
    }))


class GS1Decoder:
    """
    Cursor-based GS1 decoder.

    Instances hold only precompiled normalization state and may be shared
    between threads.
    """

    def __init__(self, options: Optional[DecodeOptions] = None):
        self.options = options or DecodeOptions()
        self._gs_pattern = self._build_gs_pattern()

    def _build_gs_pattern(self) -> Optional[re.Pattern]:
        """Build regex pattern for separator normalization."""
        if not self.options.gs_characters:
            return None
        # Longest first so '<GS>' wins over any single character it contains
        escaped = [
            re.escape(gs)
            for gs in sorted(self.options.gs_characters, key=len, reverse=True)
            if gs
        ]
        return re.compile('|'.join(escaped)) if escaped else None

    def _strip_symbology(self, text: str) -> Tuple[str, Optional[str]]:
        """
        Strip symbology identifier prefix if present.

        Returns:
            (stripped_text, identifier_name)
        """
        if not self.options.strip_symbology:
            return text, None
        for prefix in self.options.symbology_prefixes:
            if prefix and text.startswith(prefix):
                return text[len(prefix):], SYMBOLOGY_NAMES.get(prefix, prefix)
        return text, None

    def _normalize(self, text: str) -> str:
        """Replace every separator representation with the internal delimiter."""
        if self._gs_pattern is None:
            return text
        return self._gs_pattern.sub(DELIMITER, text)

    def _extract(self, buffer: str, pos: int, entry: AIEntry, record: DecodedRecord) -> Tuple[str, int]:
        """
        Extract the value of 'entry' starting at 'pos'.

        Returns:
            (value, next_position)
        """
        if entry.is_fixed:
            value = buffer[pos:pos + entry.fixed_length]
            if len(value) < entry.fixed_length:
                record.issues.append(DecodeIssue(
                    code=IssueCode.TRUNCATED_DATA,
                    message=f"Truncated data for AI({entry.ai}): "
                            f"expected {entry.fixed_length}, got {len(value)}",
                    at_index=pos,
                    ai=entry.ai,
                ))
            return value, pos + len(value)

        next_sep = buffer.find(DELIMITER, pos)
        if next_sep == -1:
            value = buffer[pos:]
            end = len(buffer)
        else:
            value = buffer[pos:next_sep]
            end = next_sep + 1
        if entry.max_length and len(value) > entry.max_length:
            record.issues.append(DecodeIssue(
                code=IssueCode.INVALID_LENGTH,
                message=f"Length {len(value)} exceeds maximum {entry.max_length} for AI({entry.ai})",
                at_index=pos,
                ai=entry.ai,
            ))
        return value, end

    def _check_date(self, entry: AIEntry, value: str, pos: int, record: DecodedRecord) -> None:
        if entry.transform != 'date':
            return
        if len(value) != 6:
            message = f"Date for AI({entry.ai}) must be YYMMDD, kept as {value!r}"
        elif not value.isdigit():
            message = f"Date for AI({entry.ai}) is not numeric: {value!r}"
        else:
            return
        record.issues.append(DecodeIssue(
            code=IssueCode.INVALID_DATE,
            message=message,
            at_index=pos,
            ai=entry.ai,
        ))

    @staticmethod
    def _report_skip(record: DecodedRecord, buffer: str, start: int, end: int) -> None:
        record.issues.append(DecodeIssue(
            code=IssueCode.UNKNOWN_AI,
            message=f"Unknown AI at position {start}: skipped {buffer[start:end]!r}",
            at_index=start,
        ))

    def decode(self, raw: str) -> DecodedRecord:
        """
        Decode a raw barcode payload.

        Args:
            raw: Scanned payload, optionally prefixed with ]d2

        Returns:
            DecodedRecord; fields not found in the payload are None
        """
        if not isinstance(raw, str):
            raise TypeError(f"raw must be str, not {type(raw).__name__}")

        record = DecodedRecord(raw=raw)
        stripped, record.symbology_identifier = self._strip_symbology(raw)
        buffer = self._normalize(stripped)

        pos = 0
        skip_start: Optional[int] = None
        while pos < len(buffer):
            # Separator after a fixed-length field (or between skipped
            # characters): step over it, it is not counted as skipped data
            if buffer[pos] == DELIMITER:
                if skip_start is not None:
                    self._report_skip(record, buffer, skip_start, pos)
                    skip_start = None
                pos += 1
                continue

            entry, code = match_ai(buffer, pos)

            if entry is None:
                if skip_start is None:
                    skip_start = pos
                record.skipped += 1
                pos += 1
                continue

            if skip_start is not None:
                self._report_skip(record, buffer, skip_start, pos)
                skip_start = None

            ai_start = pos
            pos += len(code)
            value, pos = self._extract(buffer, pos, entry, record)
            self._check_date(entry, value, ai_start, record)

            element = DecodedElement(
                ai=entry.ai,
                title=entry.title,
                raw_value=value,
                value=map_value(entry, value),
                start_index=ai_start,
                end_index=pos,
            )
            record.elements.append(element)
            write_value(record, entry, element.value)

        if skip_start is not None:
            self._report_skip(record, buffer, skip_start, len(buffer))

        if record.issues:
            logger.debug(
                "decode_issues",
                raw=raw,
                elements=len(record.elements),
                issues=[issue.code.value for issue in record.issues],
                skipped=record.skipped,
            )
        return record


_DEFAULT_DECODER = GS1Decoder()


def decode_gs1(
    raw: str,
    *,
    options: Optional[DecodeOptions] = None
) -> DecodedRecord:
    """
    Decode a GS1 element string from a barcode.

    Main entry point for the decoder.

    Args:
        raw: Raw barcode data string
        options: Optional decoding configuration

    Returns:
        DecodedRecord with the recognized fields populated

    Examples:
        >>> record = decode_gs1("01123456789012311719012510ABC123")
        >>> record.gtin
        '12345678901231'
        >>> record.expiry_date
        '2019-01-25'
    """
    decoder = GS1Decoder(options) if options is not None else _DEFAULT_DECODER
    return decoder.decode(raw)
