"""
Utilization calculation.

A person's utilization is the number of assigned days falling inside a
forward-looking window (90 days from today by default), as a percentage of
the window length:

    overlap(a) = min(a.end, as_of + window) - max(a.start, as_of) + 1, floored at 0
    utilization = round(min(sum(overlap) / window * 100, 100))

Concurrent assignments each contribute their full overlap (no per-day dedup)
and capacity_percentage is not weighted in, so two parallel full-window
assignments already saturate at 100.

Two bandings are derived from the percentage and must not be mixed up:

- status (persisted on Person):  >= 80 Critical, >= 50 Busy, else Available
- level (matching display only): >= 90 critical, >= 75 high, >= 50 medium, else low
"""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError

from skillmatch.exceptions import NotFoundError, StatusRecomputeError
from skillmatch.models.enums import PersonnelStatus, UtilizationLevel
from skillmatch.models.person import Person
from skillmatch.repositories.assignments import AssignmentLedger, DateRange
from skillmatch.repositories.personnel import PersonnelStore

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 90

CRITICAL_STATUS_THRESHOLD = 80
BUSY_STATUS_THRESHOLD = 50

CRITICAL_LEVEL_THRESHOLD = 90
HIGH_LEVEL_THRESHOLD = 75
MEDIUM_LEVEL_THRESHOLD = 50


@dataclass(frozen=True)
class UtilizationStatus:
    utilization: int
    status: str


def round_half_up(value: float) -> int:
    """Round like SQL ROUND / JS Math.round for non-negative values (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def overlap_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """Inclusive day count of [start, end] within [window_start, window_end]."""
    days = (min(end, window_end) - max(start, window_start)).days + 1
    return max(days, 0)


def calculate_utilization(
    ranges: Iterable[DateRange], as_of: date, window_days: int = DEFAULT_WINDOW_DAYS
) -> int:
    """Utilization percentage (0-100) of the given assignment ranges from as_of."""
    window_end = as_of + timedelta(days=window_days)
    assigned = sum(overlap_days(start, end, as_of, window_end) for start, end in ranges)
    return round_half_up(min(assigned / window_days * 100, 100))


def status_for_utilization(utilization: int) -> str:
    if utilization >= CRITICAL_STATUS_THRESHOLD:
        return PersonnelStatus.CRITICAL.value
    if utilization >= BUSY_STATUS_THRESHOLD:
        return PersonnelStatus.BUSY.value
    return PersonnelStatus.AVAILABLE.value


def utilization_level(utilization: float) -> str:
    if utilization >= CRITICAL_LEVEL_THRESHOLD:
        return UtilizationLevel.CRITICAL.value
    if utilization >= HIGH_LEVEL_THRESHOLD:
        return UtilizationLevel.HIGH.value
    if utilization >= MEDIUM_LEVEL_THRESHOLD:
        return UtilizationLevel.MEDIUM.value
    return UtilizationLevel.LOW.value


def is_utilization_warning(level: str) -> bool:
    return level in (UtilizationLevel.HIGH.value, UtilizationLevel.CRITICAL.value)


class UtilizationCalculator:
    """Derives utilization and status from the assignment ledger."""

    def __init__(
        self,
        ledger: AssignmentLedger,
        personnel: PersonnelStore,
        window_days: int = DEFAULT_WINDOW_DAYS,
        today: Callable[[], date] = date.today,
    ):
        self.ledger = ledger
        self.personnel = personnel
        self.window_days = window_days
        self.today = today

    def window(self, as_of: date | None = None) -> tuple[date, date]:
        start = as_of or self.today()
        return start, start + timedelta(days=self.window_days)

    def from_ranges(self, ranges: Iterable[DateRange], as_of: date | None = None) -> int:
        window_start, _ = self.window(as_of)
        return calculate_utilization(ranges, window_start, self.window_days)

    async def compute(self, person_id: int, as_of: date | None = None) -> UtilizationStatus:
        """Utilization and derived status for one person; nothing is written."""
        window_start, window_end = self.window(as_of)
        ranges = await self.ledger.ranges_in_window(person_id, window_start, window_end)
        utilization = calculate_utilization(ranges, window_start, self.window_days)
        return UtilizationStatus(utilization, status_for_utilization(utilization))

    async def person_utilization(self, person_id: int) -> UtilizationStatus:
        if await self.personnel.get(person_id) is None:
            raise NotFoundError("Personnel", person_id)
        return await self.compute(person_id)

    async def recompute_and_persist(self, person: Person) -> UtilizationStatus:
        """
        Recompute utilization and overwrite Person.status with the derived value.

        Runs in the caller's transaction, after the assignment change has been
        flushed. A manually set status such as On Leave is overwritten too.
        """
        try:
            result = await self.compute(person.id)
            if person.status != result.status:
                logger.info(
                    "Personnel %s status %s -> %s (utilization %s%%)",
                    person.id,
                    person.status,
                    result.status,
                    result.utilization,
                )
            await self.personnel.set_status(person, result.status)
        except SQLAlchemyError as exc:
            logger.error("Status recompute failed for personnel %s: %s", person.id, exc)
            raise StatusRecomputeError(person.id, str(exc)) from exc
        return result
