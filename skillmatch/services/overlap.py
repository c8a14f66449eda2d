"""
Assignment date-overlap guard.

A person may not hold two assignments on different projects whose date
ranges intersect. Intervals are inclusive on both ends, so an assignment
ending on the day another starts is a conflict.
"""

from datetime import date

from skillmatch.repositories.assignments import AssignmentLedger

OVERLAP_MESSAGE = "Personnel already assigned to overlapping project dates"


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Inclusive-bounds interval intersection."""
    return end_a >= start_b and start_a <= end_b


class OverlapGuard:
    def __init__(self, ledger: AssignmentLedger):
        self.ledger = ledger

    async def has_conflict(
        self, person_id: int, candidate_project_id: int, start: date, end: date
    ) -> bool:
        """
        True if the person has any assignment on another project intersecting
        [start, end]. Rows for candidate_project_id itself are ignored; the
        (project, person) unique key already rules out duplicates there.
        """
        return await self.ledger.has_other_overlapping(person_id, candidate_project_id, start, end)

    async def conflicting_person_ids(self, project_id: int, start: date, end: date) -> set[int]:
        """Everyone who would conflict if assigned to project_id over [start, end]."""
        return await self.ledger.person_ids_overlapping(project_id, start, end)
