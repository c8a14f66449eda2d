"""Tests for data model imports and basic structure."""

from sqlalchemy import UniqueConstraint


def test_models_import():
    """All tables register on the shared declarative base."""
    from skillmatch.database import Base
    from skillmatch.models import (
        Person,
        PersonSkill,
        Project,
        ProjectAssignment,
        ProjectRequirement,
        Skill,
    )

    assert Person.__tablename__ == "personnel"
    assert Skill.__tablename__ == "skills"
    assert PersonSkill.__tablename__ == "personnel_skills"
    assert Project.__tablename__ == "projects"
    assert ProjectRequirement.__tablename__ == "project_requirements"
    assert ProjectAssignment.__tablename__ == "project_assignments"
    assert set(Base.metadata.tables) >= {
        "personnel",
        "skills",
        "personnel_skills",
        "projects",
        "project_requirements",
        "project_assignments",
    }


def test_assignment_pair_is_unique():
    """At most one assignment per (project, person)."""
    from skillmatch.models import ProjectAssignment

    uniques = [
        constraint
        for constraint in ProjectAssignment.__table__.constraints
        if isinstance(constraint, UniqueConstraint)
    ]
    assert any(
        {column.name for column in constraint.columns} == {"project_id", "person_id"}
        for constraint in uniques
    )


def test_skill_link_tables_use_composite_keys():
    from skillmatch.models import PersonSkill, ProjectRequirement

    assert {c.name for c in PersonSkill.__table__.primary_key} == {"person_id", "skill_id"}
    assert {c.name for c in ProjectRequirement.__table__.primary_key} == {"project_id", "skill_id"}


def test_project_has_dates():
    from datetime import date

    from skillmatch.models import Project

    assert Project(name="P", start_date=date(2025, 1, 1), end_date=date(2025, 2, 1)).has_dates
    assert not Project(name="P", start_date=date(2025, 1, 1)).has_dates


def test_model_server_defaults_match_migration():
    """Tables built from the models carry the same server defaults as 0001_initial."""
    from skillmatch.models import Person, Project, ProjectAssignment

    assert Person.__table__.c.status.server_default.arg == "Available"
    assert Person.__table__.c.experience_level.server_default.arg == "Junior"
    assert Project.__table__.c.status.server_default.arg == "Planning"
    assert ProjectAssignment.__table__.c.capacity_percentage.server_default.arg == "100"
    assert Person.__table__.c.created_at.server_default is not None
    assert ProjectAssignment.__table__.c.assigned_at.server_default is not None


def test_utc_now_is_naive_utc():
    from datetime import datetime, timedelta, timezone

    from skillmatch.database import utc_now

    now = utc_now()
    assert now.tzinfo is None
    assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)
