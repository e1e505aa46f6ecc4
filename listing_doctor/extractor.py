"""
Row extraction and validation.

Each data row goes through the gates below; the first gate that rejects it
decides its counter in ``ValidationStats`` and its diagnostic line:

    1. empty row
    2. fewer than half of the header columns
    3. sold marker (``X`` / ``#VALUE!``) in a mapped price column
    4. no property number, no positive area and no positive price

Rows that pass become ``PropertyRecord`` objects. Sold units never reach the
output: the marker gate runs before any field is read.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from listing_doctor.catalog import (
    DEVELOPER_INFO_FIELDS,
    FLOAT_FIELDS,
    INTEGER_FIELDS,
    PRICE_MARKER_FIELDS,
)
from listing_doctor.models import (
    FieldMapping,
    PropertyRecord,
    RawTable,
    RowDiagnostic,
    ValidationStats,
)
from listing_doctor.normalization import (
    clean_cell,
    is_sold_marker,
    parse_floor,
    parse_integer,
    parse_number,
    status_from_text,
)
from listing_doctor.settings import DEVELOPER_INFO_SCAN_ROWS, MIN_COLUMN_RATIO

logger = logging.getLogger(__name__)

REASON_EMPTY = "Empty row (all cells are empty or whitespace)"
REASON_TOO_FEW_COLUMNS = "Insufficient columns"
REASON_SOLD = 'Sold property (detected "X" or "#VALUE!" marker in price fields)'
REASON_NO_CRITICAL_DATA = "Missing all critical data (no property number, area, or price)"

# Vendor exports mark sold units in these columns even when another header
# won the price mapping.
VENDOR_PRICE_HEADERS = (
    "Cena za m2 nieruchomości",
    "Cena za m2 nieruchomosci",
    "Cena nieruchomości",
    "Cena nieruchomosci",
)


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(row):
        return ""
    return clean_cell(row[index])


def coerce_value(field_name: str, value: str) -> Any:
    """Typed value for a canonical field, or ``None`` when it does not parse."""
    if field_name in FLOAT_FIELDS:
        return parse_number(value)
    if field_name == "kondygnacja":
        return parse_floor(value)
    if field_name in INTEGER_FIELDS:
        return parse_integer(value)
    return value


def has_sold_marker(row: Sequence[str], mapping: FieldMapping) -> bool:
    return any(
        is_sold_marker(_cell(row, mapping.index_for(field_name)))
        for field_name in PRICE_MARKER_FIELDS
    )


def build_raw_data(headers: Sequence[str], row: Sequence[str]) -> dict[str, str]:
    raw: dict[str, str] = {}
    for index, header in enumerate(headers):
        if index >= len(row):
            break
        if header:
            raw[header] = row[index]
    return raw


def infer_status(record: PropertyRecord) -> Optional[str]:
    """
    Status for rows without an explicit one.

    Textual availability columns win, then an ``X`` left in a vendor price
    column, then a parsed price per m2 (listed with a price means available).
    """
    textual = status_from_text(record.extras.get("status_dostepnosci"))
    if textual:
        return textual
    for header in VENDOR_PRICE_HEADERS:
        if clean_cell(record.raw_data.get(header)).upper() == "X":
            return "sold"
    if record.price_per_m2 is not None:
        return "available"
    return None


def has_critical_data(record: PropertyRecord) -> bool:
    if record.property_number and record.property_number.strip():
        return True
    if record.area is not None and record.area > 0:
        return True
    return any(
        price is not None and price > 0
        for price in (record.price_per_m2, record.total_price, record.final_price)
    )


def extract_record(
    headers: Sequence[str],
    row: Sequence[str],
    mapping: FieldMapping,
    row_number: int,
) -> PropertyRecord:
    record = PropertyRecord(row_number=row_number, raw_data=build_raw_data(headers, row))
    for field_name in mapping.columns:
        value = _cell(row, mapping.index_for(field_name))
        if not value:
            continue
        coerced = coerce_value(field_name, value)
        if coerced is not None:
            record.set_value(field_name, coerced)

    if record.status is None:
        inferred = infer_status(record)
        if inferred:
            record.status = inferred
            logger.debug("Row %d: inferred status %r", row_number, inferred)
    return record


def _reject(stats: ValidationStats, diagnostic: RowDiagnostic) -> None:
    stats.details.append(diagnostic)
    if diagnostic.column_count is not None:
        logger.debug(
            "Skipping row %d: %s (%d columns)",
            diagnostic.row_number,
            diagnostic.reason,
            diagnostic.column_count,
        )
    else:
        logger.debug("Skipping row %d: %s", diagnostic.row_number, diagnostic.reason)


def extract_records(
    table: RawTable,
    mapping: FieldMapping,
) -> tuple[list[PropertyRecord], ValidationStats]:
    """Walk every data row of ``table``; stats are fresh for each call."""
    stats = ValidationStats()
    records: list[PropertyRecord] = []
    min_columns = table.column_count * MIN_COLUMN_RATIO

    for offset, row in enumerate(table.rows):
        # +1 for the header row, +1 for 1-based numbering.
        row_number = offset + 2

        if not any(clean_cell(cell) for cell in row):
            stats.empty_rows += 1
            _reject(stats, RowDiagnostic(row_number, REASON_EMPTY))
            continue

        if len(row) < min_columns:
            stats.too_few_columns += 1
            _reject(stats, RowDiagnostic(row_number, REASON_TOO_FEW_COLUMNS, len(row)))
            continue

        if has_sold_marker(row, mapping):
            stats.sold_properties += 1
            _reject(stats, RowDiagnostic(row_number, REASON_SOLD))
            continue

        record = extract_record(table.headers, row, mapping, row_number)

        if not has_critical_data(record):
            stats.invalid_critical_data += 1
            _reject(stats, RowDiagnostic(row_number, REASON_NO_CRITICAL_DATA))
            continue

        stats.successfully_parsed += 1
        records.append(record)

    logger.info(
        "Rows: %d total, %d parsed, %d skipped "
        "(empty %d, too few columns %d, sold %d, missing critical data %d)",
        stats.total,
        stats.successfully_parsed,
        stats.skipped,
        stats.empty_rows,
        stats.too_few_columns,
        stats.sold_properties,
        stats.invalid_critical_data,
    )
    return records, stats


def extract_developer_info(table: RawTable, mapping: FieldMapping) -> dict[str, str]:
    """First non-empty developer/investment value per field in the leading rows."""
    info: dict[str, str] = {}
    for row in table.rows[:DEVELOPER_INFO_SCAN_ROWS]:
        for field_name in DEVELOPER_INFO_FIELDS:
            if info.get(field_name):
                continue
            value = _cell(row, mapping.index_for(field_name))
            if value:
                info[field_name] = value
    return info
