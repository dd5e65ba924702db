"""
CLI interface for the GS1 decoder.

Usage:
    python -m gs1_decoder "<barcode text>" [options]

Options:
    --json                 Output as JSON
    --names                Use human-readable field names (JSON only)
    --diagnostics          Include skipped characters and issues
    --inventory            Output an inventory line item as JSON
    --gs TEXT              Extra text to treat as a separator (repeatable)
    --no-strip-symbology   Keep a leading ]d2 prefix
    -v, --verbose          Enable debug logging
"""

import argparse
import json
import logging
import sys
from typing import Optional

import structlog

from .core.decoder import decode_gs1, DecodeOptions
from .core.record import DecodedRecord, RECORD_FIELDS
from .formatters.json_formatter import record_to_dict, FIELD_NAMES
from .inventory import build_inventory_item


def format_record(record: DecodedRecord, show_diagnostics: bool = False) -> str:
    """Format a decoded record for display."""
    lines = [
        "=" * 60,
        "GS1 Decode Result",
        "=" * 60,
        f"Raw Input: {record.raw!r}",
    ]

    if record.symbology_identifier:
        lines.append(f"Symbology: {record.symbology_identifier}")

    lines.extend([
        "",
        "Fields:",
        "-" * 40,
    ])

    present = record.fields()
    if not present:
        lines.append("  (none)")
    for name in RECORD_FIELDS:
        if name in present:
            lines.append(f"  {FIELD_NAMES[name]}: {present[name]}")
    lines.append("")

    if show_diagnostics:
        lines.extend([
            "Elements:",
            "-" * 40,
        ])
        for element in record.elements:
            lines.append(f"  AI({element.ai}): {element.title}")
            lines.append(f"    Value: {element.raw_value!r}")
        lines.append("")

        if record.issues:
            lines.extend([
                "Issues:",
                "-" * 40,
            ])
            for issue in record.issues:
                lines.append(f"  [{issue.code.value}] {issue.message}")
            lines.append("")

        lines.append(f"Skipped Characters: {record.skipped}")

    return '\n'.join(lines)


def configure_logging(verbose: bool = False) -> None:
    """Send log events to stderr so they never mix with decoded output."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_decoder',
        description='Decode GS1 Application Identifiers from barcode payloads'
    )

    parser.add_argument(
        'barcode',
        help='Barcode data to decode'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--names',
        action='store_true',
        help='Use human-readable field names in JSON output'
    )

    parser.add_argument(
        '--diagnostics',
        action='store_true',
        help='Include skipped characters and decode issues'
    )

    parser.add_argument(
        '--inventory',
        action='store_true',
        help='Output an inventory line item built from the record (JSON)'
    )

    parser.add_argument(
        '--gs',
        action='append',
        default=[],
        metavar='TEXT',
        help='Additional text to treat as a GS separator, e.g. "<GS>" or "~"'
    )

    parser.add_argument(
        '--no-strip-symbology',
        action='store_true',
        help='Do not strip a leading ]d2 symbology identifier'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    options = DecodeOptions(
        strip_symbology=not args.no_strip_symbology,
        gs_characters=frozenset({'\x1d', *args.gs}),
    )

    record = decode_gs1(args.barcode, options=options)

    if args.inventory:
        print(json.dumps(build_inventory_item(record).to_dict(), indent=2, ensure_ascii=False))
    elif args.json:
        output = record_to_dict(
            record,
            human_readable=args.names,
            include_diagnostics=args.diagnostics,
        )
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_record(record, show_diagnostics=args.diagnostics))

    return 0


if __name__ == '__main__':
    sys.exit(main())
