from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from leave_ledger.exceptions import ValidationError
from leave_ledger.models.enums import LeaveUnit

# Matches the Numeric(12, 4) columns amounts are persisted in.
AMOUNT_QUANTUM = Decimal("0.0001")

_MICROSECONDS_PER_HOUR = Decimal(3_600_000_000)


def normalize_to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount to the precision stored in the database."""
    return amount.quantize(AMOUNT_QUANTUM)


def compute_duration(start_at: datetime, end_at: datetime, unit: LeaveUnit) -> Decimal:
    """Price a leave window in the given unit.

    DAY counts calendar dates inclusively, using the dates as submitted, so a
    request that starts and ends on the same date costs 1. HOUR is the elapsed
    time in fractional hours with no rounding up; a zero-length window costs 0.
    """
    utc_start = normalize_to_utc(start_at)
    utc_end = normalize_to_utc(end_at)
    if utc_end < utc_start:
        raise ValidationError("End time must not be before start time")

    if unit == LeaveUnit.DAY:
        days = (end_at.date() - start_at.date()).days + 1
        return Decimal(days)

    microseconds = Decimal((utc_end - utc_start) // timedelta(microseconds=1))
    return quantize_amount(microseconds / _MICROSECONDS_PER_HOUR)
