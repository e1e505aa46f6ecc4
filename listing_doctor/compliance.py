"""
Ministry field-coverage scoring for a parsed record set.

Critical fields are worth 3 points and recommended fields 2 points; a field
counts once if any record carries it. The dataset is compliant when no hard
error was found and the score reaches the 77% regulatory minimum.
"""

from __future__ import annotations

import logging
from typing import Sequence

from listing_doctor.catalog import CRITICAL_FIELDS, RECOMMENDED_FIELDS
from listing_doctor.models import ComplianceReport, PropertyRecord
from listing_doctor.settings import (
    COMPLIANCE_THRESHOLD,
    CRITICAL_FIELD_WEIGHT,
    MISSING_IDENTIFIER_WARNING_RATIO,
    RECOMMENDED_FIELD_WEIGHT,
    TOTAL_REQUIRED_FIELDS,
)

logger = logging.getLogger(__name__)


def max_points() -> int:
    return len(CRITICAL_FIELDS) * CRITICAL_FIELD_WEIGHT + len(RECOMMENDED_FIELDS) * RECOMMENDED_FIELD_WEIGHT


def _field_present(records: Sequence[PropertyRecord], field_name: str) -> bool:
    return any(record.has(field_name) for record in records)


def _has_invalid_price(record: PropertyRecord) -> bool:
    return any(
        price is not None and price <= 0
        for price in (record.price_per_m2, record.total_price, record.final_price)
    )


def validate_compliance(records: Sequence[PropertyRecord]) -> ComplianceReport:
    if not records:
        return ComplianceReport(
            valid=False,
            compliance_score=0,
            errors=["Brak danych nieruchomości do przetworzenia"],
            missing_critical_fields=["property_data"],
            total_required_fields=TOTAL_REQUIRED_FIELDS,
        )

    errors: list[str] = []
    warnings: list[str] = []
    missing_critical: list[str] = []
    earned = 0

    for field_name in CRITICAL_FIELDS:
        if _field_present(records, field_name):
            earned += CRITICAL_FIELD_WEIGHT
        else:
            errors.append(f"KRYTYCZNE: Brak wymaganego pola '{field_name}'")
            missing_critical.append(field_name)

    for field_name in RECOMMENDED_FIELDS:
        if _field_present(records, field_name):
            earned += RECOMMENDED_FIELD_WEIGHT
        else:
            warnings.append(f"Zalecane: Brak pola '{field_name}'")

    total = len(records)
    without_number = sum(1 for record in records if not record.has("property_number"))
    if without_number > total * MISSING_IDENTIFIER_WARNING_RATIO:
        warnings.append(
            f"{without_number} mieszkań bez numeru lokalu ({round(without_number / total * 100)}%)"
        )

    invalid_prices = sum(1 for record in records if _has_invalid_price(record))
    if invalid_prices:
        errors.append(f"{invalid_prices} mieszkań z nieprawidłowymi cenami (≤ 0)")

    invalid_areas = sum(1 for record in records if record.area is not None and record.area <= 0)
    if invalid_areas:
        errors.append(f"{invalid_areas} mieszkań z nieprawidłową powierzchnią (≤ 0)")

    score = round(earned / max_points() * 100)
    valid = not errors and score >= COMPLIANCE_THRESHOLD
    if not valid and not errors:
        warnings.append(f"Zgodność Ministerstwa: {score}% (wymagane: {COMPLIANCE_THRESHOLD}%)")

    logger.info(
        "Compliance: %d%% (%s), %d errors, %d warnings",
        score,
        "valid" if valid else "invalid",
        len(errors),
        len(warnings),
    )
    return ComplianceReport(
        valid=valid,
        compliance_score=score,
        errors=errors,
        warnings=warnings,
        missing_critical_fields=missing_critical,
        total_required_fields=TOTAL_REQUIRED_FIELDS,
    )
