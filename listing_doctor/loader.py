"""
loader.py: reader and tokenizer for listing-doctor

Supports: .csv .tsv .txt (and any other extension) as delimited text,
          .xlsx .xlsm .xls as spreadsheets

Public API:
    table = load_table(content, "cennik.csv")
    table.headers, table.rows

Every path produces a ``RawTable``: the first non-blank row is the header,
all cells are stripped strings. An input with no header cells raises
``StructuralError``.
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, Iterable, Iterator, Optional, Union

import chardet
import pandas as pd

from listing_doctor.errors import StructuralError, UnsupportedInputError
from listing_doctor.models import RawTable
from listing_doctor.settings import (
    DEFAULT_DELIMITER,
    DELIMITER_CANDIDATES,
    DELIMITER_SAMPLE_LINES,
    FALLBACK_ENCODINGS,
    SPREADSHEET_FORMATS,
    TAB_FORMATS,
)

logger = logging.getLogger(__name__)

BOM = "\ufeff"

Content = Union[bytes, bytearray, str]


def file_suffix(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def is_spreadsheet(filename: str) -> bool:
    return file_suffix(filename) in SPREADSHEET_FORMATS


# ══════════════════════════════════════════════════════════════════════════════
# DECODING
# ══════════════════════════════════════════════════════════════════════════════

def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(BOM) else text


def decode_bytes(raw: bytes) -> tuple[str, str, list[str]]:
    """
    Decode delimited-text bytes.

    Strategy:
      1. UTF-8 (BOM-aware)
      2. chardet's guess, when it is confident enough to name one
      3. cp1250 (Polish Windows exports), then latin-1 (never fails)

    Returns (text, encoding, warnings). Any fallback past UTF-8 adds a warning.
    """
    try:
        return raw.decode("utf-8-sig"), "utf-8", []
    except UnicodeDecodeError:
        pass

    guess = chardet.detect(raw)
    detected = guess.get("encoding")
    candidates = [detected] if detected else []
    candidates.extend(enc for enc in FALLBACK_ENCODINGS if enc != detected)

    for encoding in candidates:
        try:
            text = raw.decode(encoding)
        except (LookupError, UnicodeDecodeError):
            continue
        confidence = round(guess.get("confidence") or 0.0, 2)
        message = (
            f"File is not valid UTF-8; decoded as {encoding} "
            f"(detector guess: {detected or 'unknown'}, confidence {confidence})"
        )
        logger.warning(message)
        return strip_bom(text), encoding, [message]

    # latin-1 maps every byte, so the loop above always returns.
    raise StructuralError("Nie udało się odczytać kodowania pliku")


# ══════════════════════════════════════════════════════════════════════════════
# DELIMITER DETECTION
# ══════════════════════════════════════════════════════════════════════════════

def _scan_quotes(text: str, delimiters: str) -> Iterator[tuple[int, str, bool]]:
    """
    Walk ``text`` the way ``csv.reader`` splits it, yielding
    (index, char, quoted) for every character.

    A field is quoted only when ``"`` is its first character. Inside quotes
    ``""`` is a literal quote and line breaks belong to the cell. The closing
    quote is reported as unquoted.
    """
    in_quotes = False
    escaped = False
    field_start = True
    for index, char in enumerate(text):
        if in_quotes:
            if escaped:
                escaped = False
            elif char == '"':
                if text[index + 1:index + 2] == '"':
                    escaped = True
                else:
                    in_quotes = False
                    yield index, char, False
                    continue
            yield index, char, True
        elif char == '"' and field_start:
            in_quotes = True
            field_start = False
            yield index, char, True
        else:
            field_start = char in delimiters or char in "\r\n"
            yield index, char, False


def find_unclosed_quote(text: str, delimiter: str) -> Optional[int]:
    """Line number (1-based) of a quoted field that never closes, or None."""
    opened_at: Optional[int] = None
    for index, _char, quoted in _scan_quotes(text, delimiter):
        if not quoted:
            opened_at = None
        elif opened_at is None:
            opened_at = index
    if opened_at is None:
        return None
    return text.count("\n", 0, opened_at) + 1


def detect_delimiter(text: str) -> str:
    """
    Pick ``,`` or ``;`` for a delimited file.

    Counts both characters outside quoted fields over the first non-blank
    records. Quoted cells may span lines, so quote state carries across line
    breaks. Ties go to ``;``, the usual separator of Polish spreadsheet
    exports.
    """
    counts = {candidate: 0 for candidate in DELIMITER_CANDIDATES}
    records = 0
    has_content = False
    for _index, char, quoted in _scan_quotes(text, "".join(DELIMITER_CANDIDATES)):
        if not quoted and char in "\r\n":
            if has_content:
                records += 1
                has_content = False
            if records >= DELIMITER_SAMPLE_LINES:
                break
            continue
        if not char.isspace():
            has_content = True
        if not quoted and char in counts:
            counts[char] += 1
    if counts[","] > counts[";"]:
        return ","
    return DEFAULT_DELIMITER


# ══════════════════════════════════════════════════════════════════════════════
# TABLE ASSEMBLY
# ══════════════════════════════════════════════════════════════════════════════

def _is_blank_row(row: Iterable[str]) -> bool:
    return not any(cell for cell in row)


def _build_table(matrix: list[list[str]], **metadata: Any) -> RawTable:
    if not matrix:
        raise StructuralError("Plik jest pusty")
    header, *rows = matrix
    if _is_blank_row(header):
        raise StructuralError("Brak nagłówków kolumn w pliku")
    return RawTable(
        headers=tuple(header),
        rows=tuple(tuple(row) for row in rows),
        **metadata,
    )


def tokenize_delimited(
    text: str,
    delimiter: Optional[str] = None,
    encoding: Optional[str] = None,
    warnings: Iterable[str] = (),
) -> RawTable:
    """
    Split delimited text into a RawTable.

    Quoted fields may contain the delimiter and line breaks; ``""`` inside
    quotes is a literal quote. Blank lines are skipped, every cell is stripped,
    quoted or not. A quoted field still open at end of input is read as one
    cell and reported in the table warnings. A reader failure, such as a
    runaway quoted field past the csv field size limit, is a
    ``StructuralError``.
    """
    text = strip_bom(text)
    if not text.strip():
        raise StructuralError("Plik CSV jest pusty")
    if delimiter is None:
        delimiter = detect_delimiter(text)
    warnings = list(warnings)
    unclosed_line = find_unclosed_quote(text, delimiter) if '"' in text else None

    matrix: list[list[str]] = []
    try:
        for row in csv.reader(io.StringIO(text), delimiter=delimiter, strict=False):
            if not row or (len(row) == 1 and not row[0].strip()):
                continue
            matrix.append([cell.strip() for cell in row])
    except csv.Error as exc:
        if unclosed_line is not None:
            raise StructuralError(
                f"Niezamknięty cudzysłów w wierszu {unclosed_line} pliku CSV"
            ) from exc
        raise StructuralError(f"Nie można odczytać pliku CSV: {exc}") from exc

    if unclosed_line is not None:
        message = (
            f"Unclosed quote on line {unclosed_line}; everything after it was read "
            "as a single cell"
        )
        logger.warning(message)
        warnings.append(message)

    table = _build_table(
        matrix,
        source_format="delimited",
        delimiter=delimiter,
        encoding=encoding,
        warnings=tuple(warnings),
    )
    logger.debug(
        "Tokenized delimited input: delimiter=%r, %d header cells, %d data rows",
        delimiter,
        table.column_count,
        len(table.rows),
    )
    return table


# ══════════════════════════════════════════════════════════════════════════════
# SPREADSHEETS
# ══════════════════════════════════════════════════════════════════════════════

def stringify_cell(value: Any) -> str:
    """Render a workbook cell the way it would read in a CSV export."""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.replace(tzinfo=None)
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).replace("\x00", "").strip()


def _trim_empty_trailing_columns(matrix: list[list[str]]) -> list[list[str]]:
    width = max((len(row) for row in matrix), default=0)
    while width > 0 and all(len(row) < width or not row[width - 1] for row in matrix):
        width -= 1
    return [row[:width] for row in matrix]


def _open_workbook(content: bytes, suffix: str) -> pd.ExcelFile:
    try:
        return pd.ExcelFile(io.BytesIO(content))
    except ImportError as exc:
        hint = " (.xls files require xlrd: pip install 'listing-doctor[excel-legacy]')" if suffix == ".xls" else ""
        raise StructuralError(f"Nie można otworzyć pliku Excel{hint}: {exc}") from exc
    except Exception as exc:
        raise StructuralError(f"Nie można otworzyć pliku Excel: {exc}") from exc


def list_sheets(content: bytes, filename: str) -> list[str]:
    with _open_workbook(bytes(content), file_suffix(filename)) as workbook:
        return [str(name) for name in workbook.sheet_names]


def read_spreadsheet(content: bytes, filename: str, sheet_name: Optional[str] = None) -> RawTable:
    """
    Read one sheet of a workbook into a RawTable.

    The named sheet is used when present; otherwise the first sheet, with a
    warning. Fully blank rows are dropped here so the first remaining row is
    the header.
    """
    suffix = file_suffix(filename)
    warnings: list[str] = []

    with _open_workbook(bytes(content), suffix) as workbook:
        all_sheets = [str(name) for name in workbook.sheet_names]
        if not all_sheets:
            raise StructuralError("Nie znaleziono arkusza w pliku Excel")

        if sheet_name is not None and sheet_name in all_sheets:
            chosen = sheet_name
        else:
            chosen = all_sheets[0]
            if sheet_name is not None:
                warnings.append(
                    f"Sheet '{sheet_name}' not found; used '{chosen}'. Available: {all_sheets}"
                )
        if len(all_sheets) > 1:
            others = [name for name in all_sheets if name != chosen]
            warnings.append(
                f"Multiple sheets found ({len(all_sheets)} total); used '{chosen}'. Ignored: {others}"
            )

        try:
            df = workbook.parse(sheet_name=chosen, header=None, dtype=object)
        except Exception as exc:
            raise StructuralError(f"Nie można odczytać arkusza '{chosen}': {exc}") from exc

    matrix = [[stringify_cell(value) for value in row] for row in df.itertuples(index=False, name=None)]
    matrix = [row for row in matrix if not _is_blank_row(row)]
    matrix = _trim_empty_trailing_columns(matrix)

    for message in warnings:
        logger.warning(message)

    table = _build_table(
        matrix,
        source_format=suffix.lstrip("."),
        sheet_name=chosen,
        sheet_names=tuple(all_sheets),
        warnings=tuple(warnings),
    )
    logger.debug(
        "Read sheet %r: %d header cells, %d data rows",
        chosen,
        table.column_count,
        len(table.rows),
    )
    return table


# ══════════════════════════════════════════════════════════════════════════════
# DISPATCH
# ══════════════════════════════════════════════════════════════════════════════

def load_table(content: Content, filename: str, sheet_name: Optional[str] = None) -> RawTable:
    """Dispatch on the filename extension and tokenize ``content``."""
    suffix = file_suffix(filename)

    if suffix in SPREADSHEET_FORMATS:
        if isinstance(content, str):
            raise UnsupportedInputError("Nieobsługiwany typ pliku lub błędne dane wejściowe")
        return read_spreadsheet(bytes(content), filename, sheet_name)

    if isinstance(content, (bytes, bytearray)):
        text, encoding, warnings = decode_bytes(bytes(content))
    elif isinstance(content, str):
        text, encoding, warnings = content, None, []
    else:
        raise UnsupportedInputError("Nieobsługiwany typ pliku lub błędne dane wejściowe")

    delimiter = "\t" if suffix in TAB_FORMATS else None
    return tokenize_delimited(text, delimiter=delimiter, encoding=encoding, warnings=warnings)
