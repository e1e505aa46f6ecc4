"""
Public entry points of the parsing engine.

    result = parse(content, "cennik.csv")
    report = validate_compliance(result.data)

``parse`` is a pure function of its arguments: every call builds its own
table, mapping and ``ValidationStats`` and keeps nothing afterwards.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import PurePath
from typing import Any, Optional, Sequence

from listing_doctor.column_mapper import map_columns, suggest_columns
from listing_doctor.derived import derive_fields
from listing_doctor.errors import StructuralError
from listing_doctor.extractor import extract_developer_info as _developer_info_from_table
from listing_doctor.extractor import extract_records
from listing_doctor.format_detector import detect_format
from listing_doctor.loader import Content, is_spreadsheet, list_sheets, load_table
from listing_doctor.models import ParseResult
from listing_doctor.settings import MIN_MAPPED_FIELDS

logger = logging.getLogger(__name__)


def parse(content: Content, filename: str, sheet_name: Optional[str] = None) -> ParseResult:
    """
    Parse a listings file into validated property records.

    Structural failures (empty file, unreadable workbook) come back as
    ``success=False`` with a single error; everything else is reported as
    data on the result.
    """
    try:
        table = load_table(content, filename, sheet_name)
    except StructuralError as exc:
        logger.warning("Could not read %s: %s", filename, exc)
        return ParseResult.failed(str(exc))

    detection = detect_format(table.headers)
    mapping = map_columns(table.headers)
    records, stats = extract_records(table, mapping)
    for record in records:
        derive_fields(record)

    success = mapping.mapped_count >= MIN_MAPPED_FIELDS
    errors: list[str] = []
    if not success:
        errors.append(
            f"Rozpoznano tylko {mapping.mapped_count} kolumn(y); "
            f"wymagane co najmniej {MIN_MAPPED_FIELDS}"
        )
        errors.extend(mapping.errors)

    result = ParseResult(
        success=success,
        data=records,
        mapping=mapping,
        errors=errors,
        warnings=list(table.warnings),
        confidence=mapping.confidence,
        detected_format=detection.format,
        format_confidence=detection.confidence,
        format_details=detection.details,
        total_rows=len(table.rows),
        valid_rows=sum(1 for record in records if record.has_any_data()),
        validation_stats=stats,
        sheet_name=table.sheet_name,
        delimiter=table.delimiter,
    )
    logger.info(
        "Parsed %s: success=%s, %d/%d rows kept, %d fields mapped",
        filename,
        result.success,
        stats.successfully_parsed,
        result.total_rows,
        mapping.mapped_count,
    )
    return result


def list_sheet_names(content: Content, filename: str) -> list[str]:
    """Sheet names of a workbook; empty for text files and unreadable input."""
    if not is_spreadsheet(filename) or isinstance(content, str):
        return []
    try:
        return list_sheets(bytes(content), filename)
    except StructuralError as exc:
        logger.debug("No sheets listed for %s: %s", filename, exc)
        return []


def extract_developer_info(
    content: Content,
    filename: str,
    sheet_name: Optional[str] = None,
) -> dict[str, str]:
    """Developer and investment details found in the first data rows."""
    try:
        table = load_table(content, filename, sheet_name)
    except StructuralError as exc:
        logger.debug("No developer info for %s: %s", filename, exc)
        return {}
    return _developer_info_from_table(table, map_columns(table.headers))


def column_suggestions(headers: Sequence[str]) -> dict[str, dict[str, Any]]:
    return suggest_columns(headers)


# ══════════════════════════════════════════════════════════════════════════════
# PROJECT NAMING
# ══════════════════════════════════════════════════════════════════════════════

_EXTENSION_RE = re.compile(r"\.(csv|xlsx|xls)$", re.IGNORECASE)
_PREFIX_RULES = (
    (re.compile(r"^Ceny-ofertowe-mieszkan-dewelopera-", re.IGNORECASE), ""),
    (re.compile(r"^Wzorcowy_zakres_danych_dotyczących_cen_mieszkań", re.IGNORECASE), "Ministerstwo"),
    (re.compile(r"^dane-", re.IGNORECASE), ""),
    (re.compile(r"^data-", re.IGNORECASE), ""),
    (re.compile(r"^export-", re.IGNORECASE), ""),
    (re.compile(r"^raport-", re.IGNORECASE), ""),
)
_DATE_ONLY_RE = re.compile(r"^\d{4}[-\s]\d{2}[-\s]\d{2}$")


def extract_project_name(filename: str, today: Optional[date] = None) -> str:
    """
    Human project name from an upload filename.

    ``Ceny-ofertowe-mieszkan-dewelopera-osiedle_zielone.csv`` -> ``Osiedle Zielone``.
    Names that end up empty, shorter than 3 characters or just a date become
    ``Import z YYYY-MM-DD``.
    """
    name = _EXTENSION_RE.sub("", PurePath(filename).name)
    for pattern, replacement in _PREFIX_RULES:
        name = pattern.sub(replacement, name)
    name = re.sub(r"[-_]", " ", name).strip()

    if not name or len(name) < 3 or _DATE_ONLY_RE.match(name):
        today = today or date.today()
        return f"Import z {today.isoformat()}"
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))
