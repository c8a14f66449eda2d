"""
Skills API endpoints.
Skills are global reference data shared by personnel profiles and
project requirement sets.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.database import get_db
from skillmatch.exceptions import ConflictError, NotFoundError
from skillmatch.repositories import SkillCatalog
from skillmatch.schemas.skill import SkillCreate, SkillResponse, SkillUpdate

router = APIRouter(prefix="/skills", tags=["skills"])


async def get_catalog(db: AsyncSession = Depends(get_db)) -> SkillCatalog:
    return SkillCatalog(db)


# =============================================================================
# SKILL CRUD
# =============================================================================


@router.get("", response_model=list[SkillResponse])
async def get_skills(catalog: SkillCatalog = Depends(get_catalog)):
    """Get all skills ordered by name."""
    return await catalog.list_all()


@router.get("/{skill_id}", response_model=SkillResponse)
async def get_skill(skill_id: int, catalog: SkillCatalog = Depends(get_catalog)):
    """Get a single skill by ID."""
    skill = await catalog.get(skill_id)
    if not skill:
        raise NotFoundError("Skill", skill_id)
    return skill


@router.post("", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(skill_data: SkillCreate, catalog: SkillCatalog = Depends(get_catalog)):
    """Create a new skill."""
    # Check for duplicate name
    if await catalog.get_by_name(skill_data.name):
        raise ConflictError("A skill with this name already exists")

    return await catalog.create(skill_data.name, skill_data.category, skill_data.description)


@router.put("/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: int,
    skill_data: SkillUpdate,
    catalog: SkillCatalog = Depends(get_catalog),
):
    """Update a skill."""
    skill = await catalog.get(skill_id)
    if not skill:
        raise NotFoundError("Skill", skill_id)

    # Check for duplicate name if name is being changed
    if skill_data.name and skill_data.name != skill.name:
        if await catalog.get_by_name(skill_data.name):
            raise ConflictError("A skill with this name already exists")

    return await catalog.update(skill, skill_data.model_dump(exclude_unset=True))


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_skill(skill_id: int, catalog: SkillCatalog = Depends(get_catalog)):
    """
    Delete a skill.
    The skill is also removed from every personnel profile and project requirement set.
    """
    skill = await catalog.get(skill_id)
    if not skill:
        raise NotFoundError("Skill", skill_id)

    await catalog.delete(skill)
    return None
