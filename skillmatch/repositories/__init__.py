"""
Repositories package - storage access for the matching engine.

Each repository wraps an injected AsyncSession; none of them commit.
Transaction boundaries belong to the caller (the request-scoped session).
"""

from skillmatch.repositories.assignments import AssignmentLedger
from skillmatch.repositories.personnel import PersonnelStore
from skillmatch.repositories.projects import ProjectStore
from skillmatch.repositories.skills import (
    PersonSkillProfile,
    ProjectRequirementSet,
    SkillCatalog,
    SkillLevel,
)

__all__ = [
    "AssignmentLedger",
    "PersonnelStore",
    "ProjectStore",
    "SkillCatalog",
    "PersonSkillProfile",
    "ProjectRequirementSet",
    "SkillLevel",
]
