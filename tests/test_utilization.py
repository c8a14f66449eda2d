"""Tests for utilization and status derivation."""

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from skillmatch.exceptions import NotFoundError, StatusRecomputeError
from skillmatch.services.utilization import (
    calculate_utilization,
    is_utilization_warning,
    overlap_days,
    round_half_up,
    status_for_utilization,
    utilization_level,
)

from tests.conftest import TODAY


def days(n: int) -> date:
    return TODAY + timedelta(days=n)


def test_no_assignments_is_zero():
    assert calculate_utilization([], TODAY) == 0
    assert status_for_utilization(0) == "Available"


def test_eleven_days_from_today_is_twelve_percent():
    utilization = calculate_utilization([(days(0), days(10))], TODAY)
    assert utilization == 12
    assert status_for_utilization(utilization) == "Available"


def test_overlap_is_clamped_to_window():
    window_end = days(90)
    assert overlap_days(days(-30), days(4), TODAY, window_end) == 5
    assert overlap_days(days(85), days(200), TODAY, window_end) == 6
    assert overlap_days(days(-30), days(-1), TODAY, window_end) == 0
    assert overlap_days(days(91), days(95), TODAY, window_end) == 0


def test_concurrent_assignments_add_up():
    """Parallel assignments are counted per assignment, not per day."""
    single = calculate_utilization([(days(0), days(29))], TODAY)
    double = calculate_utilization([(days(0), days(29)), (days(0), days(29))], TODAY)
    assert single == 33
    assert double == 67


def test_saturates_at_one_hundred():
    ranges = [(days(0), days(89)), (days(0), days(89))]
    assert calculate_utilization(ranges, TODAY) == 100


def test_monotonic_as_assignments_are_added():
    ranges = []
    previous = calculate_utilization(ranges, TODAY)
    for offset in range(0, 120, 15):
        ranges.append((days(offset), days(offset + 20)))
        current = calculate_utilization(ranges, TODAY)
        assert current >= previous
        assert current <= 100
        previous = current


def test_custom_window():
    assert calculate_utilization([(days(0), days(14))], TODAY, window_days=30) == 50


@pytest.mark.parametrize(
    "utilization, expected",
    [(0, "Available"), (49, "Available"), (50, "Busy"), (79, "Busy"), (80, "Critical"), (100, "Critical")],
)
def test_status_boundaries(utilization, expected):
    assert status_for_utilization(utilization) == expected


@pytest.mark.parametrize(
    "utilization, level, warning",
    [(49, "low", False), (50, "medium", False), (74, "medium", False), (75, "high", True), (89, "high", True), (90, "critical", True)],
)
def test_matching_levels_are_separate_from_status(utilization, level, warning):
    assert utilization_level(utilization) == level
    assert is_utilization_warning(level) is warning


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12
    assert round_half_up(0.5) == 1


@pytest.mark.asyncio
async def test_compute_reads_only_window(world):
    world.personnel.add(1, "Alice")
    world.ledger.add(10, 1, days(0), days(10))
    world.ledger.add(11, 1, days(200), days(210))

    result = await world.calculator.compute(1)
    assert result.utilization == 12
    assert result.status == "Available"


@pytest.mark.asyncio
async def test_person_utilization_unknown_person(world):
    with pytest.raises(NotFoundError):
        await world.calculator.person_utilization(99)


@pytest.mark.asyncio
async def test_recompute_overwrites_manual_status(world):
    person = world.personnel.add(1, "Alice", status="On Leave")
    world.ledger.add(10, 1, days(0), days(89))

    result = await world.calculator.recompute_and_persist(person)
    assert result.status == "Critical"
    assert person.status == "Critical"


@pytest.mark.asyncio
async def test_recompute_failure_is_surfaced(world):
    person = world.personnel.add(1, "Alice")

    async def broken(person, status):
        raise OperationalError("UPDATE personnel", {}, Exception("connection lost"))

    world.personnel.set_status = broken
    with pytest.raises(StatusRecomputeError) as excinfo:
        await world.calculator.recompute_and_persist(person)
    assert excinfo.value.status_code == 503
    assert excinfo.value.person_id == 1
