"""
Project model.
Maps to the projects table in PostgreSQL.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillmatch.database import Base
from skillmatch.models.enums import ProjectStatus, check_values

if TYPE_CHECKING:
    from skillmatch.models.assignment import ProjectAssignment
    from skillmatch.models.skill import ProjectRequirement


class Project(Base):
    """Project model - a body of work with a skill requirement set and staff."""

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(
            f"status IN ({check_values(ProjectStatus)})",
            name="projects_status_check",
        ),
        CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="projects_date_order_check",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        default=ProjectStatus.PLANNING.value,
        server_default=ProjectStatus.PLANNING.value,
        nullable=False,
    )

    # Relationships
    requirements: Mapped[list["ProjectRequirement"]] = relationship(
        "ProjectRequirement",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    assignments: Mapped[list["ProjectAssignment"]] = relationship(
        "ProjectAssignment",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def has_dates(self) -> bool:
        """Both start and end date are set."""
        return self.start_date is not None and self.end_date is not None

    def __repr__(self) -> str:
        return f"<Project {self.name} ({self.status})>"
