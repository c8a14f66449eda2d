"""
Pydantic schemas for Skills, person skill profiles and project requirements.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from skillmatch.schemas.base import BaseSchema


class SkillBase(BaseModel):
    """Base skill fields."""
    name: str = Field(..., min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None


class SkillCreate(SkillBase):
    """Request model for creating a skill."""
    pass


class SkillUpdate(BaseModel):
    """Request model for updating a skill."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class SkillResponse(BaseSchema):
    """Response model for a skill."""
    id: int
    name: str
    category: Optional[str] = None
    description: Optional[str] = None


class PersonSkillItem(BaseModel):
    """One (skill, proficiency) pair in a profile update."""
    skill_id: int
    proficiency_level: int


class PersonSkillsUpdate(BaseModel):
    """Request model replacing a person's whole skill profile."""
    skills: List[PersonSkillItem] = []


class PersonSkillResponse(BaseModel):
    """A skill held by a person, with catalog details."""
    skill_id: int
    skill_name: str
    category: Optional[str] = None
    description: Optional[str] = None
    proficiency_level: int


class RequirementItem(BaseModel):
    """One (skill, minimum proficiency) pair in a requirement update."""
    skill_id: int
    min_proficiency_level: int


class RequirementsUpdate(BaseModel):
    """Request model for replacing or extending a project's requirement set."""
    requirements: List[RequirementItem] = []


class RequirementResponse(BaseModel):
    """A skill required by a project."""
    skill_id: int
    skill_name: str
    min_proficiency_level: int
