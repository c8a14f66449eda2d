"""
API routers package.
"""

from skillmatch.routers import (
    health,
    personnel,
    skills,
    projects,
    assignments,
)

__all__ = [
    "health",
    "personnel",
    "skills",
    "projects",
    "assignments",
]
