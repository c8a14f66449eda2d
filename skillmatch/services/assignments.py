"""
Assignment coordination.

Each (project, person) pair is either unassigned or assigned; "assign" on an
assigned pair releases it. Every mutation is followed by a status recompute
for the person, and both run in the caller's transaction with the person
row locked, so a concurrent mutation for the same person waits instead of
reading a half-written ledger.

    toggle_assignment:  lock person -> existing? release : (resolve dates ->
                        overlap check -> insert) -> recompute status
    release:            lock person -> delete if present -> recompute status
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta

from skillmatch.exceptions import NotFoundError, ValidationError
from skillmatch.models.enums import AssignmentAction
from skillmatch.models.person import Person
from skillmatch.models.project import Project
from skillmatch.repositories.assignments import AssignmentLedger
from skillmatch.repositories.personnel import PersonnelStore
from skillmatch.repositories.projects import ProjectStore
from skillmatch.services.overlap import OVERLAP_MESSAGE, OverlapGuard
from skillmatch.services.utilization import UtilizationCalculator

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
DEFAULT_ASSIGNMENT_DAYS = 7


@dataclass(frozen=True)
class AssignmentOutcome:
    action: AssignmentAction
    utilization: int
    status: str


class AssignmentCoordinator:
    def __init__(
        self,
        projects: ProjectStore,
        personnel: PersonnelStore,
        ledger: AssignmentLedger,
        guard: OverlapGuard,
        calculator: UtilizationCalculator,
        default_assignment_days: int = DEFAULT_ASSIGNMENT_DAYS,
        today: Callable[[], date] = date.today,
    ):
        self.projects = projects
        self.personnel = personnel
        self.ledger = ledger
        self.guard = guard
        self.calculator = calculator
        self.default_assignment_days = default_assignment_days
        self.today = today

    async def _lock_person(self, person_id: int) -> Person:
        person = await self.personnel.get_for_update(person_id)
        if person is None:
            raise NotFoundError("Personnel", person_id)
        return person

    def resolve_dates(
        self, project: Project, start: date | None, end: date | None
    ) -> tuple[date, date]:
        """Request dates first, then the project's, then today / today + 7 days."""
        today = self.today()
        effective_start = start or project.start_date or today
        effective_end = (
            end or project.end_date or today + timedelta(days=self.default_assignment_days)
        )
        if effective_start > effective_end:
            raise ValidationError(
                "Assignment start date must not be after its end date",
                f"{effective_start.isoformat()} > {effective_end.isoformat()}",
            )
        return effective_start, effective_end

    @staticmethod
    def validate_capacity(capacity: int | None) -> int:
        if capacity is None:
            return DEFAULT_CAPACITY
        if not 0 <= capacity <= 100:
            raise ValidationError("Capacity percentage must be between 0 and 100", f"got {capacity}")
        return capacity

    async def toggle_assignment(
        self,
        project_id: int,
        person_id: int,
        capacity_percentage: int | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> AssignmentOutcome:
        """Assign the person to the project, or release them if already assigned."""
        person = await self._lock_person(person_id)

        if await self.ledger.get_pair(project_id, person_id) is not None:
            await self.ledger.delete_pair(project_id, person_id)
            logger.info("Released personnel %s from project %s (toggle)", person_id, project_id)
            return await self._finish(person, AssignmentAction.RELEASED)

        project = await self.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)

        capacity = self.validate_capacity(capacity_percentage)
        effective_start, effective_end = self.resolve_dates(project, start, end)

        if await self.guard.has_conflict(person_id, project_id, effective_start, effective_end):
            logger.info(
                "Rejected assignment of personnel %s to project %s: overlap in %s..%s",
                person_id,
                project_id,
                effective_start,
                effective_end,
            )
            raise ValidationError(OVERLAP_MESSAGE)

        inserted = await self.ledger.insert(
            project_id, person_id, capacity, effective_start, effective_end
        )
        if inserted is not None:
            logger.info(
                "Assigned personnel %s to project %s (%s..%s, %s%%)",
                person_id,
                project_id,
                effective_start,
                effective_end,
                capacity,
            )
        return await self._finish(person, AssignmentAction.ASSIGNED)

    async def release(self, project_id: int, person_id: int) -> AssignmentOutcome:
        """Delete the pair if present. Releasing an unassigned pair is not an error."""
        person = await self._lock_person(person_id)
        if await self.ledger.delete_pair(project_id, person_id):
            logger.info("Released personnel %s from project %s", person_id, project_id)
        return await self._finish(person, AssignmentAction.RELEASED)

    async def reschedule_project(self, project: Project) -> set[int]:
        """
        Force every assignment of the project onto its current dates and
        recompute the status of each affected person. Overlap is not
        re-checked here. Returns the affected person ids.
        """
        if not project.has_dates:
            return set()

        # Person rows are locked before any assignment row, same order as
        # toggle_assignment and release.
        person_ids = await self.ledger.person_ids_for_project(project.id)
        people = [await self._lock_person(person_id) for person_id in sorted(person_ids)]

        await self.ledger.overwrite_project_dates(project.id, project.start_date, project.end_date)
        for person in people:
            await self.calculator.recompute_and_persist(person)
        if person_ids:
            logger.info(
                "Moved %d assignment(s) of project %s to %s..%s",
                len(person_ids),
                project.id,
                project.start_date,
                project.end_date,
            )
        return person_ids

    async def person_utilization(self, person_id: int):
        return await self.calculator.person_utilization(person_id)

    async def _finish(self, person: Person, action: AssignmentAction) -> AssignmentOutcome:
        result = await self.calculator.recompute_and_persist(person)
        return AssignmentOutcome(action=action, utilization=result.utilization, status=result.status)
