"""
AssignmentLedger - storage access for project_assignments.

The ledger is the source of truth for utilization. All range filters use
inclusive bounds on both ends.
"""

import logging
from collections import defaultdict
from datetime import date

from sqlalchemy import and_, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.exceptions import StorageError
from skillmatch.models.assignment import ProjectAssignment
from skillmatch.models.project import Project

logger = logging.getLogger(__name__)

DateRange = tuple[date, date]


class AssignmentLedger:
    """(person, project, date range, capacity%) records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_pair(self, project_id: int, person_id: int) -> ProjectAssignment | None:
        result = await self.session.execute(
            select(ProjectAssignment).where(
                ProjectAssignment.project_id == project_id,
                ProjectAssignment.person_id == person_id,
            )
        )
        return result.scalar_one_or_none()

    async def for_project(self, project_id: int) -> list[ProjectAssignment]:
        result = await self.session.execute(
            select(ProjectAssignment)
            .where(ProjectAssignment.project_id == project_id)
            .order_by(ProjectAssignment.id)
        )
        return list(result.scalars().all())

    async def person_ids_for_project(self, project_id: int) -> set[int]:
        result = await self.session.execute(
            select(ProjectAssignment.person_id).where(ProjectAssignment.project_id == project_id)
        )
        return set(result.scalars().all())

    async def for_person(self, person_id: int) -> list[tuple[ProjectAssignment, str]]:
        """A person's assignments with the project name, earliest first."""
        result = await self.session.execute(
            select(ProjectAssignment, Project.name)
            .join(Project, ProjectAssignment.project_id == Project.id)
            .where(ProjectAssignment.person_id == person_id)
            .order_by(ProjectAssignment.assigned_start_date, ProjectAssignment.id)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def ranges_in_window(
        self, person_id: int, window_start: date, window_end: date
    ) -> list[DateRange]:
        """Date ranges of a person's assignments intersecting [window_start, window_end]."""
        result = await self.session.execute(
            select(ProjectAssignment.assigned_start_date, ProjectAssignment.assigned_end_date).where(
                and_(
                    ProjectAssignment.person_id == person_id,
                    ProjectAssignment.assigned_end_date >= window_start,
                    ProjectAssignment.assigned_start_date <= window_end,
                )
            )
        )
        return [(start, end) for start, end in result.all()]

    async def ranges_in_window_by_person(
        self, window_start: date, window_end: date
    ) -> dict[int, list[DateRange]]:
        """Same as ranges_in_window for every person at once."""
        result = await self.session.execute(
            select(
                ProjectAssignment.person_id,
                ProjectAssignment.assigned_start_date,
                ProjectAssignment.assigned_end_date,
            ).where(
                and_(
                    ProjectAssignment.assigned_end_date >= window_start,
                    ProjectAssignment.assigned_start_date <= window_end,
                )
            )
        )
        ranges: dict[int, list[DateRange]] = defaultdict(list)
        for person_id, start, end in result.all():
            ranges[person_id].append((start, end))
        return dict(ranges)

    async def has_other_overlapping(
        self, person_id: int, project_id: int, start: date, end: date
    ) -> bool:
        """Any assignment on a different project whose range intersects [start, end]."""
        result = await self.session.execute(
            select(ProjectAssignment.id)
            .where(
                and_(
                    ProjectAssignment.person_id == person_id,
                    ProjectAssignment.project_id != project_id,
                    ProjectAssignment.assigned_end_date >= start,
                    ProjectAssignment.assigned_start_date <= end,
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def person_ids_overlapping(self, project_id: int, start: date, end: date) -> set[int]:
        """People holding an assignment on another project that intersects [start, end]."""
        result = await self.session.execute(
            select(ProjectAssignment.person_id)
            .where(
                and_(
                    ProjectAssignment.project_id != project_id,
                    ProjectAssignment.assigned_end_date >= start,
                    ProjectAssignment.assigned_start_date <= end,
                )
            )
            .distinct()
        )
        return set(result.scalars().all())

    async def insert(
        self,
        project_id: int,
        person_id: int,
        capacity_percentage: int,
        start: date,
        end: date,
    ) -> ProjectAssignment | None:
        """
        Insert an assignment inside a savepoint.

        Returns None when the (project, person) unique key is already taken,
        which happens when a concurrent request inserted the same pair first.
        """
        assignment = ProjectAssignment(
            project_id=project_id,
            person_id=person_id,
            capacity_percentage=capacity_percentage,
            assigned_start_date=start,
            assigned_end_date=end,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(assignment)
        except IntegrityError as exc:
            if await self.get_pair(project_id, person_id) is None:
                raise StorageError("Assignment insert rejected by the store", str(exc.orig)) from exc
            logger.warning(
                "Assignment for project %s / personnel %s already inserted by a concurrent request",
                project_id,
                person_id,
            )
            return None
        return assignment

    async def delete_pair(self, project_id: int, person_id: int) -> bool:
        result = await self.session.execute(
            delete(ProjectAssignment).where(
                ProjectAssignment.project_id == project_id,
                ProjectAssignment.person_id == person_id,
            )
        )
        return result.rowcount > 0

    async def overwrite_project_dates(self, project_id: int, start: date, end: date) -> set[int]:
        """Force every assignment of a project onto [start, end]; returns affected person ids."""
        person_ids = await self.person_ids_for_project(project_id)
        if person_ids:
            await self.session.execute(
                update(ProjectAssignment)
                .where(ProjectAssignment.project_id == project_id)
                .values(assigned_start_date=start, assigned_end_date=end)
            )
        return person_ids
