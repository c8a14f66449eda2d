"""Tests for the assignment date-overlap guard."""

from datetime import date

import pytest

from skillmatch.services.overlap import ranges_overlap


def test_disjoint_ranges_do_not_overlap():
    assert not ranges_overlap(date(2025, 1, 1), date(2025, 1, 10), date(2025, 1, 11), date(2025, 1, 20))
    assert not ranges_overlap(date(2025, 1, 11), date(2025, 1, 20), date(2025, 1, 1), date(2025, 1, 10))


def test_shared_boundary_day_overlaps():
    assert ranges_overlap(date(2025, 1, 1), date(2025, 1, 10), date(2025, 1, 10), date(2025, 1, 20))


def test_containment_overlaps():
    assert ranges_overlap(date(2025, 1, 1), date(2025, 1, 31), date(2025, 1, 10), date(2025, 1, 12))


@pytest.mark.asyncio
async def test_guard_ignores_candidate_project(world):
    world.ledger.add(1, 7, date(2025, 3, 1), date(2025, 3, 10))

    assert not await world.guard.has_conflict(7, 1, date(2025, 3, 5), date(2025, 3, 6))
    assert await world.guard.has_conflict(7, 2, date(2025, 3, 5), date(2025, 3, 6))
    assert not await world.guard.has_conflict(8, 2, date(2025, 3, 5), date(2025, 3, 6))


@pytest.mark.asyncio
async def test_conflicting_person_ids(world):
    world.ledger.add(1, 7, date(2025, 3, 1), date(2025, 3, 10))
    world.ledger.add(1, 8, date(2025, 4, 1), date(2025, 4, 10))
    world.ledger.add(2, 9, date(2025, 3, 1), date(2025, 3, 10))

    assert await world.guard.conflicting_person_ids(2, date(2025, 3, 10), date(2025, 3, 20)) == {7}
