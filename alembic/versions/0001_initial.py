"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "personnel",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role_title", sa.String(255), nullable=True),
        sa.Column("experience_level", sa.String(20), nullable=False, server_default="Junior"),
        sa.Column("status", sa.String(20), nullable=False, server_default="Available"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "experience_level IN ('Junior', 'Mid-Level', 'Senior')",
            name="personnel_experience_level_check",
        ),
        sa.CheckConstraint(
            "status IN ('Available', 'Busy', 'Critical', 'On Leave')",
            name="personnel_status_check",
        ),
    )
    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("category", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="Planning"),
        sa.CheckConstraint(
            "status IN ('Planning', 'Active', 'Completed')", name="projects_status_check"
        ),
        sa.CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="projects_date_order_check",
        ),
    )
    op.create_table(
        "personnel_skills",
        sa.Column(
            "person_id",
            sa.Integer(),
            sa.ForeignKey("personnel.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "skill_id", sa.Integer(), sa.ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("proficiency_level", sa.Integer(), nullable=False),
        sa.CheckConstraint(
            "proficiency_level >= 1 AND proficiency_level <= 4",
            name="personnel_skills_proficiency_check",
        ),
    )
    op.create_table(
        "project_requirements",
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "skill_id", sa.Integer(), sa.ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("min_proficiency_level", sa.Integer(), nullable=False),
        sa.CheckConstraint(
            "min_proficiency_level >= 1 AND min_proficiency_level <= 4",
            name="project_requirements_proficiency_check",
        ),
    )
    op.create_table(
        "project_assignments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "person_id",
            sa.Integer(),
            sa.ForeignKey("personnel.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("capacity_percentage", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("assigned_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("assigned_start_date", sa.Date(), nullable=False),
        sa.Column("assigned_end_date", sa.Date(), nullable=False),
        sa.UniqueConstraint(
            "project_id", "person_id", name="project_assignments_project_person_key"
        ),
        sa.CheckConstraint(
            "capacity_percentage >= 0 AND capacity_percentage <= 100",
            name="project_assignments_capacity_check",
        ),
        sa.CheckConstraint(
            "assigned_start_date <= assigned_end_date",
            name="project_assignments_date_order_check",
        ),
    )
    op.create_index(
        "ix_project_assignments_person_id", "project_assignments", ["person_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_project_assignments_person_id", table_name="project_assignments")
    op.drop_table("project_assignments")
    op.drop_table("project_requirements")
    op.drop_table("personnel_skills")
    op.drop_table("projects")
    op.drop_table("skills")
    op.drop_table("personnel")
