"""
Cell-level normalization: locale-aware numbers, sold markers and status words.

Every helper takes the raw cell string and returns ``None`` when the value
cannot be used, so callers can leave a field unset without special cases.
"""

from __future__ import annotations

import re
from typing import Optional

from listing_doctor.settings import SOLD_MARKERS

_NON_NUMERIC_RE = re.compile(r"[^\d,.\-]")
_LEADING_NUMBER_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")

GROUND_FLOOR_WORDS = {"parter", "p", "ground", "ground floor", "0"}

# Checked in this order; the first vocabulary hit wins.
STATUS_VOCABULARY: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("sold", ("sprzeda", "sold")),
    ("reserved", ("rezerwa", "reserved")),
    ("available", ("dostępn", "dostepn", "available")),
)


def clean_cell(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).replace("\x00", "").strip()


def parse_number(value: Optional[str]) -> Optional[float]:
    """
    Parse a price or area written the Polish way.

    ``"1 234 567,89 zł"`` -> ``1234567.89``. Everything except digits, comma,
    dot and minus is dropped (spaces used as thousands separators included),
    the first comma becomes the decimal point and the leading numeric part is
    read. ``"12.000.50"`` therefore reads as ``12.0``.
    """
    text = clean_cell(value)
    if not text:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", text).replace(",", ".", 1)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def parse_integer(value: Optional[str]) -> Optional[int]:
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_floor(value: Optional[str]) -> Optional[int]:
    text = clean_cell(value).lower()
    if text in GROUND_FLOOR_WORDS:
        return 0
    return parse_integer(text)


def is_sold_marker(value: Optional[str]) -> bool:
    return clean_cell(value).upper() in SOLD_MARKERS


def status_from_text(value: Optional[str]) -> Optional[str]:
    """Map free-text availability wording to ``sold|reserved|available``."""
    text = clean_cell(value).lower()
    if not text:
        return None
    for status, needles in STATUS_VOCABULARY:
        if any(needle in text for needle in needles):
            return status
    return None
