"""
Pydantic schemas for request/response validation.
"""

from skillmatch.schemas.base import (
    BaseSchema,
    DateSimple,
    DateTimeUTC,
    MessageResponse,
    serialize_date_simple,
    serialize_datetime_utc,
)
from skillmatch.schemas.person import (
    PersonAssignmentResponse,
    PersonCreate,
    PersonResponse,
    PersonUpdate,
    UtilizationResponse,
)
from skillmatch.schemas.project import (
    AssignedPersonnelResponse,
    AssignmentRequest,
    AssignmentResponse,
    CandidateResponse,
    CandidateSkill,
    MatchingResponse,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdate,
)
from skillmatch.schemas.skill import (
    PersonSkillItem,
    PersonSkillResponse,
    PersonSkillsUpdate,
    RequirementItem,
    RequirementResponse,
    RequirementsUpdate,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
)

__all__ = [
    # Base
    "BaseSchema",
    "DateSimple",
    "DateTimeUTC",
    "MessageResponse",
    "serialize_date_simple",
    "serialize_datetime_utc",
    # Personnel
    "PersonAssignmentResponse",
    "PersonCreate",
    "PersonResponse",
    "PersonUpdate",
    "UtilizationResponse",
    # Projects, assignments, matching
    "AssignedPersonnelResponse",
    "AssignmentRequest",
    "AssignmentResponse",
    "CandidateResponse",
    "CandidateSkill",
    "MatchingResponse",
    "ProjectCreate",
    "ProjectDetailResponse",
    "ProjectResponse",
    "ProjectUpdate",
    # Skills
    "PersonSkillItem",
    "PersonSkillResponse",
    "PersonSkillsUpdate",
    "RequirementItem",
    "RequirementResponse",
    "RequirementsUpdate",
    "SkillCreate",
    "SkillResponse",
    "SkillUpdate",
]
