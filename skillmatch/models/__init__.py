"""
SQLAlchemy models package.
All models inherit from the Base class defined in database.py.
"""

from skillmatch.models.person import Person
from skillmatch.models.skill import Skill, PersonSkill, ProjectRequirement
from skillmatch.models.project import Project
from skillmatch.models.assignment import ProjectAssignment

__all__ = [
    "Person",
    "Skill",
    "PersonSkill",
    "ProjectRequirement",
    "Project",
    "ProjectAssignment",
]
