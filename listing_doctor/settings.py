"""
Tunables for the listing-doctor engine.

Regulatory rules (sold markers, compliance weights, the 77% threshold) are
plain constants. Only operational knobs read the environment.
"""

from __future__ import annotations

import os

# ── File dispatch ──────────────────────────────────────────────────────────────
SPREADSHEET_FORMATS = {".xlsx", ".xls", ".xlsm"}
TAB_FORMATS = {".tsv"}

# ── Reader / tokenizer ─────────────────────────────────────────────────────────
DELIMITER_SAMPLE_LINES = 10
DELIMITER_CANDIDATES = (",", ";")
DEFAULT_DELIMITER = ";"
FALLBACK_ENCODINGS = ("cp1250", "latin-1")

# ── Format detector ────────────────────────────────────────────────────────────
STRONG_SIGNATURE_COUNT = 4
WEAK_SIGNATURE_COUNT = 2
STRONG_FORMAT_CONFIDENCE_CAP = 95.0
WEAK_FORMAT_CONFIDENCE_CAP = 75.0
CUSTOM_FORMAT_CONFIDENCE_FLOOR = 50.0

# ── Column mapper ──────────────────────────────────────────────────────────────
MATCH_THRESHOLD = 0.6
SUGGESTION_THRESHOLD = 0.3
MAX_ALTERNATES = 3
MIN_MAPPED_FIELDS = 3

# ── Row validation ─────────────────────────────────────────────────────────────
MIN_COLUMN_RATIO = 0.5
SOLD_MARKERS = {"X", "#VALUE!"}
DEVELOPER_INFO_SCAN_ROWS = 5

# ── Compliance ─────────────────────────────────────────────────────────────────
CRITICAL_FIELD_WEIGHT = 3
RECOMMENDED_FIELD_WEIGHT = 2
COMPLIANCE_THRESHOLD = 77
MISSING_IDENTIFIER_WARNING_RATIO = 0.10
TOTAL_REQUIRED_FIELDS = 58

# ── Operational (environment) ──────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("LISTING_DOCTOR_LOG_LEVEL", "INFO").upper()


def max_file_bytes() -> int:
    """Upload cap enforced by the CLI before a file reaches the engine."""
    raw = os.environ.get("LISTING_DOCTOR_MAX_FILE_MB", "50")
    try:
        megabytes = float(raw)
    except ValueError:
        megabytes = 50.0
    return int(megabytes * 1024 * 1024)


def output_stamp_override() -> str | None:
    return os.environ.get("LISTING_DOCTOR_OUTPUT_STAMP") or None
