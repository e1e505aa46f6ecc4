"""Fill area, price per m2 or total price from the other two."""

from __future__ import annotations

import logging

from listing_doctor.models import PropertyRecord

logger = logging.getLogger(__name__)


def round2(value: float) -> float:
    return round(value, 2)


def derive_fields(record: PropertyRecord) -> list[str]:
    """
    Compute whichever of the three numbers is missing.

    Values already present are never overwritten, and a zero or negative
    divisor leaves the field unset. Returns the names of the filled fields.
    """
    filled: list[str] = []

    if (
        record.area is None
        and record.total_price is not None
        and record.price_per_m2 is not None
        and record.price_per_m2 > 0
    ):
        record.area = round2(record.total_price / record.price_per_m2)
        filled.append("area")

    if (
        record.price_per_m2 is None
        and record.total_price is not None
        and record.area is not None
        and record.area > 0
    ):
        record.price_per_m2 = round2(record.total_price / record.area)
        filled.append("price_per_m2")

    if (
        record.total_price is None
        and record.price_per_m2 is not None
        and record.area is not None
        and record.area > 0
    ):
        record.total_price = round2(record.price_per_m2 * record.area)
        filled.append("total_price")

    if filled:
        logger.debug("Row %d: derived %s", record.row_number, ", ".join(filled))
    return filled
