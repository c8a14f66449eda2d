"""
Project staff assignment model.
Maps to the project_assignments table - the ledger utilization is computed from.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillmatch.database import Base, utc_now

if TYPE_CHECKING:
    from skillmatch.models.person import Person
    from skillmatch.models.project import Project


class ProjectAssignment(Base):
    """Project-level staff assignment - at most one row per (project, person)."""

    __tablename__ = "project_assignments"
    __table_args__ = (
        UniqueConstraint("project_id", "person_id", name="project_assignments_project_person_key"),
        CheckConstraint(
            "capacity_percentage >= 0 AND capacity_percentage <= 100",
            name="project_assignments_capacity_check",
        ),
        CheckConstraint(
            "assigned_start_date <= assigned_end_date",
            name="project_assignments_date_order_check",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    person_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("personnel.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    capacity_percentage: Mapped[int] = mapped_column(
        Integer, default=100, server_default="100", nullable=False
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, server_default=func.now(), nullable=False
    )
    assigned_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    assigned_end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="assignments")
    person: Mapped["Person"] = relationship("Person", back_populates="assignments")

    def __repr__(self) -> str:
        return (
            f"<ProjectAssignment Person {self.person_id} -> Project {self.project_id} "
            f"({self.assigned_start_date}..{self.assigned_end_date}, {self.capacity_percentage}%)>"
        )
