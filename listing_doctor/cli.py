from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from listing_doctor import __version__ as TOOL_VERSION
from listing_doctor.compliance import validate_compliance
from listing_doctor.contracts import (
    build_compliance_document,
    build_parse_document,
    build_sheets_document,
    build_suggest_document,
)
from listing_doctor.engine import column_suggestions, list_sheet_names, parse
from listing_doctor.errors import CliError, StructuralError
from listing_doctor.loader import is_spreadsheet, load_table
from listing_doctor.log import setup_logging
from listing_doctor.models import ComplianceReport, ParseResult
from listing_doctor.settings import max_file_bytes

EXIT_SUCCESS = 0
EXIT_COMMAND_ERROR = 1
EXIT_PARSE_FAILED = 2
EXIT_COMPLIANCE_INVALID = 3

MAX_DIAGNOSTICS_SHOWN = 10


class ListingDoctorArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise CliError(message, EXIT_COMMAND_ERROR)


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def emit_human(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        eprint(message)


def json_dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, payload: Any) -> None:
    ensure_parent(path)
    path.write_text(json_dumps(payload), encoding="utf-8")


def configure_logging(args: argparse.Namespace) -> None:
    if getattr(args, "verbose", False):
        setup_logging(logging.DEBUG)
    elif getattr(args, "quiet", False):
        setup_logging(logging.ERROR)
    elif getattr(args, "json", False):
        setup_logging(logging.WARNING)
    else:
        setup_logging()


def read_input(path: Path) -> bytes:
    """Read the upload, refusing anything over the configured size cap."""
    if not path.exists():
        raise CliError(f"File not found: {path}", EXIT_COMMAND_ERROR)
    if not path.is_file():
        raise CliError(f"Not a file: {path}", EXIT_COMMAND_ERROR)
    limit = max_file_bytes()
    size = path.stat().st_size
    if size > limit:
        raise CliError(
            f"File too large: {size} bytes (limit {limit} bytes, set LISTING_DOCTOR_MAX_FILE_MB to change)",
            EXIT_COMMAND_ERROR,
        )
    return path.read_bytes()


# ══════════════════════════════════════════════════════════════════════════════
# TEXT RENDERING
# ══════════════════════════════════════════════════════════════════════════════

def render_parse_text(result: ParseResult, input_path: Path) -> str:
    stats = result.validation_stats
    lines = [
        "listing-doctor parse",
        f"File: {input_path}",
        f"Status: {'ok' if result.success else 'failed'}",
    ]
    if result.detected_format:
        lines.append(
            f"Format: {result.detected_format} ({result.format_confidence:.0f}%) - {result.format_details}"
        )
    if result.sheet_name:
        lines.append(f"Sheet: {result.sheet_name}")
    lines.extend(
        [
            f"Mapped fields: {result.mapping.mapped_count} (confidence {result.confidence:.2f})",
            f"Rows: {result.total_rows} total, {stats.successfully_parsed} parsed, "
            f"{result.valid_rows} with data",
            f"Skipped: empty {stats.empty_rows}, too few columns {stats.too_few_columns}, "
            f"sold {stats.sold_properties}, missing critical data {stats.invalid_critical_data}",
        ]
    )
    for detail in stats.details[:MAX_DIAGNOSTICS_SHOWN]:
        lines.append(f"  row {detail.row_number}: {detail.reason}")
    if len(stats.details) > MAX_DIAGNOSTICS_SHOWN:
        lines.append(f"  ... {len(stats.details) - MAX_DIAGNOSTICS_SHOWN} more")
    for error in result.errors:
        lines.append(f"Error: {error}")
    for warning in result.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines) + "\n"


def render_compliance_text(report: ComplianceReport) -> str:
    lines = [
        "listing-doctor compliance",
        f"Valid: {'yes' if report.valid else 'no'}",
        f"Score: {report.compliance_score}%",
    ]
    if report.missing_critical_fields:
        lines.append(f"Missing critical fields: {', '.join(report.missing_critical_fields)}")
    for error in report.errors:
        lines.append(f"Error: {error}")
    for warning in report.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines) + "\n"


def render_suggest_text(suggestions: dict[str, dict[str, Any]]) -> str:
    lines = ["listing-doctor suggest"]
    for field_name, entry in suggestions.items():
        current = entry["current"] or "-"
        alternatives = ", ".join(entry["suggestions"]) or "-"
        lines.append(f"{field_name}: {current} (suggestions: {alternatives})")
    return "\n".join(lines) + "\n"


# ══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ══════════════════════════════════════════════════════════════════════════════

def run_parse(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    content = read_input(input_path)
    result = parse(content, input_path.name, args.sheet_name)

    output_path = Path(args.out) if args.out else None
    document = build_parse_document(
        result,
        input_path=input_path,
        output_path=output_path,
        include_records=args.include_records or bool(output_path),
    )
    if output_path:
        write_json(output_path, document)

    if args.json:
        print(json_dumps(document))
    else:
        emit_human(render_parse_text(result, input_path).rstrip(), quiet=args.quiet)
        if output_path:
            emit_human(f"Result written: {output_path}", quiet=args.quiet)

    if not result.success:
        return EXIT_PARSE_FAILED
    if args.strict and not validate_compliance(result.data).valid:
        return EXIT_COMPLIANCE_INVALID
    return EXIT_SUCCESS


def run_compliance(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    content = read_input(input_path)
    result = parse(content, input_path.name, args.sheet_name)
    if not result.success:
        if args.json:
            document = build_parse_document(result, input_path=input_path, include_records=False)
            print(json_dumps(document))
        else:
            for error in result.errors:
                eprint(error)
        return EXIT_PARSE_FAILED

    report = validate_compliance(result.data)
    if args.json:
        print(json_dumps(build_compliance_document(result, report, input_path=input_path)))
    else:
        emit_human(render_compliance_text(report).rstrip(), quiet=args.quiet)
    return EXIT_SUCCESS if report.valid else EXIT_COMPLIANCE_INVALID


def run_sheets(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    if not is_spreadsheet(input_path.name):
        raise CliError(f"Not a workbook: {input_path}", EXIT_COMMAND_ERROR)
    content = read_input(input_path)
    sheet_names = list_sheet_names(content, input_path.name)
    if not sheet_names:
        eprint(f"Could not read sheets from {input_path}")
        return EXIT_PARSE_FAILED
    if args.json:
        print(json_dumps(build_sheets_document(sheet_names, input_path=input_path)))
    else:
        emit_human("\n".join(sheet_names), quiet=args.quiet)
    return EXIT_SUCCESS


def run_suggest(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    content = read_input(input_path)
    try:
        table = load_table(content, input_path.name, args.sheet_name)
    except StructuralError as exc:
        eprint(str(exc))
        return EXIT_PARSE_FAILED

    headers = list(table.headers)
    suggestions = column_suggestions(headers)
    if args.json:
        print(json_dumps(build_suggest_document(suggestions, input_path=input_path, headers=headers)))
    else:
        emit_human(render_suggest_text(suggestions).rstrip(), quiet=args.quiet)
    return EXIT_SUCCESS


def run_version() -> int:
    print(TOOL_VERSION)
    return EXIT_SUCCESS


def _add_common_flags(command: argparse.ArgumentParser, *, sheet: bool = True) -> None:
    command.add_argument("input", help="Input file path")
    if sheet:
        command.add_argument("--sheet", dest="sheet_name", help="Workbook sheet name")
    command.add_argument("--json", action="store_true", help="Write machine JSON to stdout")
    command.add_argument("-q", "--quiet", action="store_true", help="Minimal human logs")
    command.add_argument("-v", "--verbose", action="store_true", help="Debug logs on stderr")


def build_parser() -> argparse.ArgumentParser:
    parser = ListingDoctorArgumentParser(
        prog="listing-doctor",
        description="Parse and check developer price-list exports for ministry reporting.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse a listings file into property records.")
    _add_common_flags(parse_cmd)
    parse_cmd.add_argument("--out", help="Write the JSON result (with records) to this path")
    parse_cmd.add_argument("--strict", action="store_true", help="Exit 3 when the parsed data is not ministry compliant")
    parse_cmd.add_argument("--include-records", dest="include_records", action="store_true", help="Include records in --json output")

    compliance_cmd = subparsers.add_parser("compliance", help="Parse a file and score ministry compliance.")
    _add_common_flags(compliance_cmd)

    sheets_cmd = subparsers.add_parser("sheets", help="List workbook sheets.")
    _add_common_flags(sheets_cmd, sheet=False)

    suggest_cmd = subparsers.add_parser("suggest", help="Show column mapping suggestions.")
    _add_common_flags(suggest_cmd)

    subparsers.add_parser("version", help="Print version")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        configure_logging(args)
        if args.command == "parse":
            return run_parse(args)
        if args.command == "compliance":
            return run_compliance(args)
        if args.command == "sheets":
            return run_sheets(args)
        if args.command == "suggest":
            return run_suggest(args)
        if args.command == "version":
            return run_version()
        raise CliError(f"Unknown command: {args.command}", EXIT_COMMAND_ERROR)
    except CliError as exc:
        eprint(str(exc))
        return exc.code
    except OSError as exc:
        eprint(str(exc))
        return EXIT_COMMAND_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
