"""
Skill model plus the PersonSkill and ProjectRequirement associations.
Skills are global reference data; deleting one removes it from every
person profile and project requirement set.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillmatch.database import Base

if TYPE_CHECKING:
    from skillmatch.models.person import Person
    from skillmatch.models.project import Project


class Skill(Base):
    """Skill model - an entry in the skill catalog."""

    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Skill {self.name}>"


class PersonSkill(Base):
    """Association table for Person-Skill with a proficiency level (1-4)."""

    __tablename__ = "personnel_skills"
    __table_args__ = (
        CheckConstraint(
            "proficiency_level >= 1 AND proficiency_level <= 4",
            name="personnel_skills_proficiency_check",
        ),
    )

    person_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("personnel.id", ondelete="CASCADE"),
        primary_key=True,
    )
    skill_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("skills.id", ondelete="CASCADE"),
        primary_key=True,
    )
    proficiency_level: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    person: Mapped["Person"] = relationship("Person", back_populates="skills")
    skill: Mapped["Skill"] = relationship("Skill", lazy="joined")

    def __repr__(self) -> str:
        return f"<PersonSkill Person {self.person_id} Skill {self.skill_id} L{self.proficiency_level}>"


class ProjectRequirement(Base):
    """Association table for Project-Skill with a minimum proficiency level (1-4)."""

    __tablename__ = "project_requirements"
    __table_args__ = (
        CheckConstraint(
            "min_proficiency_level >= 1 AND min_proficiency_level <= 4",
            name="project_requirements_proficiency_check",
        ),
    )

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    )
    skill_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("skills.id", ondelete="CASCADE"),
        primary_key=True,
    )
    min_proficiency_level: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="requirements")
    skill: Mapped["Skill"] = relationship("Skill", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<ProjectRequirement Project {self.project_id} Skill {self.skill_id} "
            f">= L{self.min_proficiency_level}>"
        )
