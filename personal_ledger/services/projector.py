"""
Recurring payment occurrence projector.

Turns a recurring payment definition (anchor date + frequency)
into the calendar dates it falls on inside a window. The n-th
occurrence is always computed from the anchor, never from the
previous occurrence, so month-end anchors do not drift:
Jan 31 -> Feb 28 -> Mar 31 -> Apr 30.

Projection is pure. Nothing here mutates the payment or the
ledger, and projected dates are never persisted.
"""

import calendar
from collections.abc import Iterator
from datetime import date, timedelta

import structlog

from personal_ledger.config import get_settings
from personal_ledger.models.enums import Frequency
from personal_ledger.models.recurring_payment import RecurringPayment

logger = structlog.get_logger(__name__)

DAY_STEPS: dict[Frequency, int] = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
    Frequency.BIWEEKLY: 14,
}

MONTH_STEPS: dict[Frequency, int] = {
    Frequency.MONTHLY: 1,
    Frequency.YEARLY: 12,
}


def add_months(anchor: date, months: int) -> date:
    """
    Shift a date by whole calendar months.

    The day of month is clamped to the last day of the target
    month when the anchor day does not exist there.
    """
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))


def occurrence_at(anchor: date, frequency: Frequency, step: int) -> date:
    """Date of the step-th occurrence after the anchor (step 0 is the anchor)."""
    if frequency in DAY_STEPS:
        return anchor + timedelta(days=DAY_STEPS[frequency] * step)
    if frequency in MONTH_STEPS:
        return add_months(anchor, MONTH_STEPS[frequency] * step)
    # Unknown cadence never advances; the caller's progress check stops it.
    return anchor


def _first_candidate_step(anchor: date, frequency: Frequency, start: date) -> int:
    """
    Lowest step index that can land on or after start.

    Every step below the returned index is strictly before start,
    so jumping there skips nothing inside the window.
    """
    if anchor >= start:
        return 0
    if frequency in DAY_STEPS:
        step_days = DAY_STEPS[frequency]
        return -(-(start - anchor).days // step_days)
    if frequency in MONTH_STEPS:
        months_between = (
            (start.year - anchor.year) * 12 + start.month - anchor.month
        )
        return max(0, months_between // MONTH_STEPS[frequency] - 1)
    return 0


def iter_occurrences(
    anchor: date,
    frequency: Frequency,
    start: date,
    max_iterations: int | None = None,
) -> Iterator[date]:
    """
    Yield occurrence dates on or after start, in order.

    Iteration is bounded by max_iterations. A step that fails to
    move the cursor forward, or runs past the calendar, stops the
    sequence.
    """
    if max_iterations is None:
        max_iterations = get_settings().PROJECTION_MAX_ITERATIONS

    try:
        frequency = Frequency(frequency)
    except ValueError:
        logger.warning("unknown_frequency", frequency=str(frequency))

    first = _first_candidate_step(anchor, frequency, start)
    previous = None
    for step in range(first, first + max_iterations):
        try:
            cursor = occurrence_at(anchor, frequency, step)
        except (OverflowError, ValueError):
            return
        if previous is not None and cursor <= previous:
            return
        previous = cursor
        if cursor >= start:
            yield cursor

    logger.warning(
        "projection_ceiling_hit",
        anchor=anchor.isoformat(),
        frequency=getattr(frequency, "value", str(frequency)),
        max_iterations=max_iterations,
    )


def project_dates(
    anchor: date,
    frequency: Frequency,
    start: date,
    end: date,
    max_iterations: int | None = None,
) -> list[date]:
    """
    Occurrence dates inside the closed window [start, end].

    When the cadence produces nothing but the anchor itself falls
    inside the window, the anchor is returned as the single
    occurrence.
    """
    if end < start:
        return []

    occurrences = []
    for occurrence in iter_occurrences(anchor, frequency, start, max_iterations):
        if occurrence > end:
            break
        occurrences.append(occurrence)

    if not occurrences and start <= anchor <= end:
        occurrences.append(anchor)

    return occurrences


def project_occurrences(
    payment: RecurringPayment,
    start: date,
    end: date,
    max_iterations: int | None = None,
) -> list[date]:
    """Occurrences of a recurring payment inside [start, end]."""
    return project_dates(
        payment.next_date, payment.frequency, start, end, max_iterations
    )


def next_occurrence(
    payment: RecurringPayment,
    on_or_after: date,
    max_iterations: int | None = None,
) -> date | None:
    """First occurrence on or after the given date, if any."""
    return next(
        iter_occurrences(
            payment.next_date, payment.frequency, on_or_after, max_iterations
        ),
        None,
    )
