"""
ProjectStore - record access for the projects table.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.models.project import Project


class ProjectStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[Project]:
        result = await self.session.execute(select(Project).order_by(Project.id))
        return list(result.scalars().all())

    async def get(self, project_id: int) -> Project | None:
        result = await self.session.execute(select(Project).where(Project.id == project_id))
        return result.scalar_one_or_none()

    async def create(self, data: dict[str, Any]) -> Project:
        project = Project(**data)
        self.session.add(project)
        await self.session.flush()
        return project

    async def update(self, project: Project, data: dict[str, Any]) -> bool:
        """Apply field changes. Returns True if start_date or end_date changed."""
        old_dates = (project.start_date, project.end_date)
        for key, value in data.items():
            setattr(project, key, value)
        await self.session.flush()
        return (project.start_date, project.end_date) != old_dates

    async def delete(self, project: Project) -> None:
        # Requirements and assignments are removed by ON DELETE CASCADE
        await self.session.delete(project)
        await self.session.flush()
