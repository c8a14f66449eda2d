"""
Pydantic schemas for Projects, assignments and matching results.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skillmatch.models.enums import AssignmentAction, ProjectStatus
from skillmatch.schemas.base import BaseSchema, DateSimple
from skillmatch.schemas.skill import RequirementResponse


# ---------------------------------------------------------
# Project Schemas
# ---------------------------------------------------------

class ProjectCreate(BaseModel):
    """Request model for creating a project."""
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.PLANNING.value

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ProjectUpdate(BaseModel):
    """Request model for updating a project. Only supplied fields change."""
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[ProjectStatus] = None

    @field_validator("name", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class ProjectResponse(BaseSchema):
    """Response model for a project."""
    id: int
    name: str
    description: Optional[str] = None
    start_date: Optional[DateSimple] = None
    end_date: Optional[DateSimple] = None
    status: str


class AssignedPersonnelResponse(BaseModel):
    """A person assigned to a project, as shown on the project detail."""
    personnel_id: int
    name: str
    role_title: Optional[str] = None
    assigned_start_date: DateSimple
    assigned_end_date: DateSimple
    capacity_percentage: int


class ProjectDetailResponse(ProjectResponse):
    """Project with its requirement set and assigned personnel."""
    requirements: List[RequirementResponse] = []
    assigned_personnel: List[AssignedPersonnelResponse] = []


# ---------------------------------------------------------
# Assignment Schemas
# ---------------------------------------------------------

class AssignmentRequest(BaseModel):
    """Optional overrides when assigning a person to a project."""
    capacity_percentage: Optional[int] = None
    assigned_start_date: Optional[date] = None
    assigned_end_date: Optional[date] = None


class AssignmentResponse(BaseModel):
    """Outcome of an assign/toggle/release call."""
    message: str
    action: AssignmentAction
    utilization: int
    status: str


# ---------------------------------------------------------
# Matching Schemas
# ---------------------------------------------------------

class CandidateSkill(BaseModel):
    skill_id: int
    skill_name: str
    proficiency_level: int


class CandidateResponse(BaseModel):
    """A person scored against a project's requirements."""
    id: int
    name: str
    email: str
    role_title: Optional[str] = None
    experience_level: str
    status: str
    skills: List[CandidateSkill] = []
    match_score: int
    matched_skills: int
    total_required_skills: int
    utilization_percentage: int
    utilization_level: str
    utilization_warning: bool
    is_assigned_to_project: bool
    has_date_overlap: bool


class MatchingResponse(BaseModel):
    """Full requirement list and candidates ranked by match_score."""
    requirements: List[RequirementResponse]
    personnel: List[CandidateResponse]
