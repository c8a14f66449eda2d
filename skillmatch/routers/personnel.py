"""
Personnel API router.
Handles personnel records, their skill profiles, their assignments and
their current utilization.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.database import get_db
from skillmatch.exceptions import ConflictError, NotFoundError
from skillmatch.models.person import Person
from skillmatch.repositories import AssignmentLedger, PersonnelStore, PersonSkillProfile
from skillmatch.schemas.base import MessageResponse
from skillmatch.schemas.person import (
    PersonAssignmentResponse,
    PersonCreate,
    PersonResponse,
    PersonUpdate,
    UtilizationResponse,
)
from skillmatch.schemas.skill import PersonSkillResponse, PersonSkillsUpdate
from skillmatch.services import AssignmentCoordinator, get_coordinator

router = APIRouter(prefix="/personnel", tags=["personnel"])


async def get_person_or_404(store: PersonnelStore, person_id: int) -> Person:
    person = await store.get(person_id)
    if not person:
        raise NotFoundError("Personnel", person_id)
    return person


# ---------------------------------------------------------
# Personnel CRUD
# ---------------------------------------------------------


@router.get("", response_model=List[PersonResponse])
async def get_personnel(db: AsyncSession = Depends(get_db)):
    """Get all personnel."""
    return await PersonnelStore(db).list_all()


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(person_id: int, db: AsyncSession = Depends(get_db)):
    """Get a single person by ID."""
    return await get_person_or_404(PersonnelStore(db), person_id)


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def create_person(data: PersonCreate, db: AsyncSession = Depends(get_db)):
    """Create a person."""
    store = PersonnelStore(db)
    if await store.get_by_email(data.email):
        raise ConflictError("A person with this email already exists")

    return await store.create(data.model_dump(mode="json"))


@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(person_id: int, data: PersonUpdate, db: AsyncSession = Depends(get_db)):
    """
    Update a person.

    Status may be set by hand (e.g. On Leave), but the next assignment
    change for this person will overwrite it with the utilization-derived value.
    """
    store = PersonnelStore(db)
    person = await get_person_or_404(store, person_id)

    if data.email and data.email != person.email:
        if await store.get_by_email(data.email):
            raise ConflictError("A person with this email already exists")

    return await store.update(person, data.model_dump(mode="json", exclude_unset=True))


@router.delete("/{person_id}", response_model=MessageResponse)
async def delete_person(person_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a person together with their skills and assignments."""
    store = PersonnelStore(db)
    person = await get_person_or_404(store, person_id)
    await store.delete(person)
    return {"message": "Deleted"}


# ---------------------------------------------------------
# Skill profile
# ---------------------------------------------------------


@router.get("/{person_id}/skills", response_model=List[PersonSkillResponse])
async def get_person_skills(person_id: int, db: AsyncSession = Depends(get_db)):
    """Get a person's skills with proficiency levels."""
    await get_person_or_404(PersonnelStore(db), person_id)

    rows = await PersonSkillProfile(db).get_skills(person_id)
    return [
        PersonSkillResponse(
            skill_id=row.skill_id,
            skill_name=row.skill.name,
            category=row.skill.category,
            description=row.skill.description,
            proficiency_level=row.proficiency_level,
        )
        for row in rows
    ]


@router.put("/{person_id}/skills", response_model=MessageResponse)
async def update_person_skills(
    person_id: int,
    data: PersonSkillsUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a person's skill profile.
    The submitted list is authoritative: skills not in it are removed.
    """
    await get_person_or_404(PersonnelStore(db), person_id)

    await PersonSkillProfile(db).set_skills(
        person_id, [(item.skill_id, item.proficiency_level) for item in data.skills]
    )
    return {"message": "Skills updated"}


# ---------------------------------------------------------
# Assignments & utilization
# ---------------------------------------------------------


@router.get("/{person_id}/projects", response_model=List[PersonAssignmentResponse])
async def get_person_projects(person_id: int, db: AsyncSession = Depends(get_db)):
    """Get every project assignment held by a person."""
    await get_person_or_404(PersonnelStore(db), person_id)

    rows = await AssignmentLedger(db).for_person(person_id)
    return [
        PersonAssignmentResponse(
            id=assignment.id,
            project_id=assignment.project_id,
            project_name=project_name,
            capacity_percentage=assignment.capacity_percentage,
            assigned_start_date=assignment.assigned_start_date,
            assigned_end_date=assignment.assigned_end_date,
            assigned_at=assignment.assigned_at,
        )
        for assignment, project_name in rows
    ]


@router.get("/{person_id}/utilization", response_model=UtilizationResponse)
async def get_person_utilization(
    person_id: int,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    """Current utilization and derived status. Read-only: the stored status is not touched."""
    result = await coordinator.person_utilization(person_id)
    return UtilizationResponse(utilization=result.utilization, status=result.status)
