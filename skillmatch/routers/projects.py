"""
Project API routes.
Handles project CRUD and project requirement sets.

Changing a project's dates moves every one of its assignments onto the
new dates and recomputes the status of the people involved.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.database import get_db
from skillmatch.exceptions import NotFoundError, ValidationError
from skillmatch.models.assignment import ProjectAssignment
from skillmatch.models.person import Person
from skillmatch.models.project import Project
from skillmatch.repositories import ProjectRequirementSet, ProjectStore
from skillmatch.schemas.base import MessageResponse
from skillmatch.schemas.project import (
    AssignedPersonnelResponse,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdate,
)
from skillmatch.schemas.skill import RequirementResponse, RequirementsUpdate
from skillmatch.services import AssignmentCoordinator, get_coordinator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


# ---------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------


async def get_project_or_404(store: ProjectStore, project_id: int) -> Project:
    project = await store.get(project_id)
    if not project:
        raise NotFoundError("Project", project_id)
    return project


def build_requirements(requirements) -> list[RequirementResponse]:
    return [
        RequirementResponse(
            skill_id=req.skill_id,
            skill_name=req.skill_name,
            min_proficiency_level=req.level,
        )
        for req in requirements
    ]


# ---------------------------------------------------------
# Project Routes
# ---------------------------------------------------------


@router.get("", response_model=list[ProjectResponse])
async def get_projects(db: AsyncSession = Depends(get_db)):
    """Get all projects."""
    return await ProjectStore(db).list_all()


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(project_id: int, db: AsyncSession = Depends(get_db)):
    """Get a project with its requirements and assigned personnel."""
    project = await get_project_or_404(ProjectStore(db), project_id)
    requirements = await ProjectRequirementSet(db).get_requirements(project_id)

    result = await db.execute(
        select(ProjectAssignment, Person.name, Person.role_title)
        .join(Person, ProjectAssignment.person_id == Person.id)
        .where(ProjectAssignment.project_id == project_id)
        .order_by(ProjectAssignment.id)
    )
    assigned = [
        AssignedPersonnelResponse(
            personnel_id=assignment.person_id,
            name=name,
            role_title=role_title,
            assigned_start_date=assignment.assigned_start_date,
            assigned_end_date=assignment.assigned_end_date,
            capacity_percentage=assignment.capacity_percentage,
        )
        for assignment, name, role_title in result.all()
    ]

    return ProjectDetailResponse(
        id=project.id,
        name=project.name,
        description=project.description,
        start_date=project.start_date,
        end_date=project.end_date,
        status=project.status,
        requirements=build_requirements(requirements),
        assigned_personnel=assigned,
    )


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(data: ProjectCreate, db: AsyncSession = Depends(get_db)):
    """Create a project."""
    return await ProjectStore(db).create(data.model_dump())


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    """
    Update a project.

    If start_date or end_date change, every assignment on the project is
    overwritten to the new dates. Overlap with other projects is not re-checked.
    """
    store = ProjectStore(db)
    project = await get_project_or_404(store, project_id)

    update_data = data.model_dump(exclude_unset=True)
    new_start = update_data.get("start_date", project.start_date)
    new_end = update_data.get("end_date", project.end_date)
    if new_start and new_end and new_start > new_end:
        raise ValidationError("start_date must not be after end_date")

    dates_changed = await store.update(project, update_data)
    if dates_changed:
        # No-op when a date was cleared: assignments keep their last concrete range
        moved = await coordinator.reschedule_project(project)
        logger.debug("Project %s dates changed; %d person(s) rescheduled", project_id, len(moved))

    return project


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a project with its requirements and assignments."""
    store = ProjectStore(db)
    project = await get_project_or_404(store, project_id)
    await store.delete(project)
    return {"message": "Deleted"}


# ---------------------------------------------------------
# Requirement Routes
# ---------------------------------------------------------


@router.get("/{project_id}/requirements", response_model=list[RequirementResponse])
async def get_project_requirements(project_id: int, db: AsyncSession = Depends(get_db)):
    """Get a project's skill requirements."""
    await get_project_or_404(ProjectStore(db), project_id)
    return build_requirements(await ProjectRequirementSet(db).get_requirements(project_id))


@router.put("/{project_id}/requirements", response_model=MessageResponse)
async def update_project_requirements(
    project_id: int,
    data: RequirementsUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Replace a project's whole requirement set."""
    await get_project_or_404(ProjectStore(db), project_id)
    await ProjectRequirementSet(db).set_requirements(
        project_id, [(req.skill_id, req.min_proficiency_level) for req in data.requirements]
    )
    return {"message": "Requirements updated"}


@router.post("/{project_id}/requirements", response_model=MessageResponse)
async def add_project_requirements(
    project_id: int,
    data: RequirementsUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Add requirements to a project (used right after creating it)."""
    await get_project_or_404(ProjectStore(db), project_id)
    await ProjectRequirementSet(db).add_requirements(
        project_id, [(req.skill_id, req.min_proficiency_level) for req in data.requirements]
    )
    return {"message": "Requirements added"}
