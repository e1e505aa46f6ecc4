"""
Classify a header row as a ministerial template, a vendor export or a
custom developer sheet.

The result is advisory: it is reported to the caller but never changes how
mapping or extraction behave.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from listing_doctor.catalog import CUSTOM_SIGNATURES, MINISTERIAL_SIGNATURES, VENDOR_SIGNATURES
from listing_doctor.models import (
    FORMAT_CUSTOM,
    FORMAT_MINISTERIAL,
    FORMAT_VENDOR_EXPORT,
    FormatDetection,
)
from listing_doctor.settings import (
    CUSTOM_FORMAT_CONFIDENCE_FLOOR,
    STRONG_FORMAT_CONFIDENCE_CAP,
    STRONG_SIGNATURE_COUNT,
    WEAK_FORMAT_CONFIDENCE_CAP,
    WEAK_SIGNATURE_COUNT,
)

logger = logging.getLogger(__name__)


def _normalized_headers(headers: Iterable[str]) -> list[str]:
    return [h for h in (str(header).strip().lower() for header in headers) if h]


def count_signatures(headers: Sequence[str], signatures: Sequence[str]) -> int:
    """Number of signatures found in at least one header, in either direction."""
    normalized = _normalized_headers(headers)
    return sum(
        1
        for signature in signatures
        if any(signature in header or header in signature for header in normalized)
    )


def detect_format(headers: Sequence[str]) -> FormatDetection:
    ministerial = count_signatures(headers, MINISTERIAL_SIGNATURES)
    vendor = count_signatures(headers, VENDOR_SIGNATURES)
    custom = count_signatures(headers, CUSTOM_SIGNATURES)

    ministerial_ratio = ministerial / len(MINISTERIAL_SIGNATURES) * 100
    vendor_ratio = vendor / len(VENDOR_SIGNATURES) * 100
    custom_ratio = custom / len(CUSTOM_SIGNATURES) * 100
    scores = {
        FORMAT_MINISTERIAL: ministerial,
        FORMAT_VENDOR_EXPORT: vendor,
        FORMAT_CUSTOM: custom,
    }

    if ministerial >= STRONG_SIGNATURE_COUNT:
        detection = FormatDetection(
            format=FORMAT_MINISTERIAL,
            confidence=min(ministerial_ratio, STRONG_FORMAT_CONFIDENCE_CAP),
            details=(
                "Ministry Schema 1.13 compliant format "
                f"({ministerial}/{len(MINISTERIAL_SIGNATURES)} official columns found)"
            ),
            scores=scores,
        )
    elif vendor >= STRONG_SIGNATURE_COUNT:
        detection = FormatDetection(
            format=FORMAT_VENDOR_EXPORT,
            confidence=min(vendor_ratio, STRONG_FORMAT_CONFIDENCE_CAP),
            details=(
                "Vendor export format detected "
                f"({vendor}/{len(VENDOR_SIGNATURES)} signature columns found)"
            ),
            scores=scores,
        )
    elif ministerial >= WEAK_SIGNATURE_COUNT and vendor < WEAK_SIGNATURE_COUNT:
        detection = FormatDetection(
            format=FORMAT_MINISTERIAL,
            confidence=min(ministerial_ratio, WEAK_FORMAT_CONFIDENCE_CAP),
            details=(
                "Likely ministerial format "
                f"({ministerial}/{len(MINISTERIAL_SIGNATURES)} official columns found)"
            ),
            scores=scores,
        )
    elif vendor >= WEAK_SIGNATURE_COUNT:
        detection = FormatDetection(
            format=FORMAT_VENDOR_EXPORT,
            confidence=min(vendor_ratio, WEAK_FORMAT_CONFIDENCE_CAP),
            details=(
                "Likely vendor export format "
                f"({vendor}/{len(VENDOR_SIGNATURES)} signature columns found)"
            ),
            scores=scores,
        )
    else:
        detection = FormatDetection(
            format=FORMAT_CUSTOM,
            confidence=max(custom_ratio, CUSTOM_FORMAT_CONFIDENCE_FLOOR),
            details=(
                "Custom developer export "
                f"({custom}/{len(CUSTOM_SIGNATURES)} common field patterns found)"
            ),
            scores=scores,
        )

    logger.info(
        "Detected format: %s (%.0f%% confidence) - %s",
        detection.format,
        detection.confidence,
        detection.details,
    )
    return detection
