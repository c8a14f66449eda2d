"""
Person model.
Maps to the personnel table in PostgreSQL.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillmatch.database import Base, utc_now
from skillmatch.models.enums import ExperienceLevel, PersonnelStatus, check_values

if TYPE_CHECKING:
    from skillmatch.models.assignment import ProjectAssignment
    from skillmatch.models.skill import PersonSkill


class Person(Base):
    """Person model - a staff member who can be matched and assigned to projects."""

    __tablename__ = "personnel"
    __table_args__ = (
        CheckConstraint(
            f"experience_level IN ({check_values(ExperienceLevel)})",
            name="personnel_experience_level_check",
        ),
        CheckConstraint(
            f"status IN ({check_values(PersonnelStatus)})",
            name="personnel_status_check",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    experience_level: Mapped[str] = mapped_column(
        String(20),
        default=ExperienceLevel.JUNIOR.value,
        server_default=ExperienceLevel.JUNIOR.value,
        nullable=False,
    )
    # Available/Busy/Critical are overwritten on every assignment change;
    # On Leave is only ever set by hand.
    status: Mapped[str] = mapped_column(
        String(20),
        default=PersonnelStatus.AVAILABLE.value,
        server_default=PersonnelStatus.AVAILABLE.value,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, server_default=func.now(), nullable=False
    )

    # Relationships
    skills: Mapped[List["PersonSkill"]] = relationship(
        "PersonSkill",
        back_populates="person",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    assignments: Mapped[List["ProjectAssignment"]] = relationship(
        "ProjectAssignment",
        back_populates="person",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Person {self.email} ({self.status})>"
