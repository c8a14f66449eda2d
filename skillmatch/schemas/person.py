"""
Pydantic schemas for Personnel.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from skillmatch.models.enums import ExperienceLevel, PersonnelStatus
from skillmatch.schemas.base import BaseSchema, DateSimple, DateTimeUTC


class PersonCreate(BaseModel):
    """Request model for creating a person."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role_title: Optional[str] = Field(None, max_length=255)
    experience_level: ExperienceLevel = ExperienceLevel.JUNIOR
    status: PersonnelStatus = PersonnelStatus.AVAILABLE


class PersonUpdate(BaseModel):
    """Request model for updating a person. Only supplied fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role_title: Optional[str] = Field(None, max_length=255)
    experience_level: Optional[ExperienceLevel] = None
    status: Optional[PersonnelStatus] = None

    @field_validator("name", "email", "experience_level", "status")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to keep it; these columns are NOT NULL
        if value is None:
            raise ValueError("must not be null")
        return value


class PersonResponse(BaseSchema):
    """Response model for a person."""
    id: int
    name: str
    email: str
    role_title: Optional[str] = None
    experience_level: str
    status: str
    created_at: DateTimeUTC


class PersonAssignmentResponse(BaseModel):
    """One of a person's project assignments."""
    id: int
    project_id: int
    project_name: str
    capacity_percentage: int
    assigned_start_date: DateSimple
    assigned_end_date: DateSimple
    assigned_at: DateTimeUTC


class UtilizationResponse(BaseModel):
    """Current utilization and the status derived from it."""
    utilization: int
    status: str
