"""
Skill data access: the catalog, per-person profiles and per-project
requirement sets.

Profiles and requirement sets are replaced wholesale - the incoming list is
authoritative, existing rows are deleted and the new ones inserted in the
same transaction.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.exceptions import ValidationError
from skillmatch.models.enums import ProficiencyLevel
from skillmatch.models.skill import PersonSkill, ProjectRequirement, Skill

MIN_PROFICIENCY = ProficiencyLevel.BEGINNER.value
MAX_PROFICIENCY = ProficiencyLevel.EXPERT.value


@dataclass(frozen=True)
class SkillLevel:
    """A skill paired with a proficiency level (held or required)."""

    skill_id: int
    skill_name: str
    level: int


def validate_proficiency(level: int) -> int:
    if not MIN_PROFICIENCY <= level <= MAX_PROFICIENCY:
        raise ValidationError(
            f"Proficiency level must be between {MIN_PROFICIENCY} and {MAX_PROFICIENCY}",
            f"got {level}",
        )
    return level


def _dedupe(items: Iterable[tuple[int, int]]) -> dict[int, int]:
    """Collapse (skill_id, level) pairs so each skill appears once; last one wins."""
    levels: dict[int, int] = {}
    for skill_id, level in items:
        levels[skill_id] = validate_proficiency(level)
    return levels


class SkillCatalog:
    """Skill id -> name/category/description."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[Skill]:
        result = await self.session.execute(select(Skill).order_by(Skill.name))
        return list(result.scalars().all())

    async def get(self, skill_id: int) -> Skill | None:
        result = await self.session.execute(select(Skill).where(Skill.id == skill_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Skill | None:
        result = await self.session.execute(select(Skill).where(Skill.name == name))
        return result.scalar_one_or_none()

    async def missing_ids(self, skill_ids: Iterable[int]) -> set[int]:
        wanted = set(skill_ids)
        if not wanted:
            return set()
        result = await self.session.execute(select(Skill.id).where(Skill.id.in_(wanted)))
        return wanted - set(result.scalars().all())

    async def ensure_exist(self, skill_ids: Iterable[int]) -> None:
        missing = await self.missing_ids(skill_ids)
        if missing:
            raise ValidationError(f"Skills not found: {sorted(missing)}")

    async def create(self, name: str, category: str | None, description: str | None) -> Skill:
        skill = Skill(name=name, category=category, description=description)
        self.session.add(skill)
        await self.session.flush()
        return skill

    async def update(self, skill: Skill, data: dict[str, Any]) -> Skill:
        for key, value in data.items():
            setattr(skill, key, value)
        await self.session.flush()
        return skill

    async def delete(self, skill: Skill) -> None:
        # Profiles and requirements referencing the skill go with it (ON DELETE CASCADE)
        await self.session.delete(skill)
        await self.session.flush()


class PersonSkillProfile:
    """Per-person set of (skill, proficiency level) pairs."""

    def __init__(self, session: AsyncSession, catalog: SkillCatalog | None = None):
        self.session = session
        self.catalog = catalog or SkillCatalog(session)

    async def get_skills(self, person_id: int) -> list[PersonSkill]:
        result = await self.session.execute(
            select(PersonSkill)
            .join(Skill, PersonSkill.skill_id == Skill.id)
            .where(PersonSkill.person_id == person_id)
            .order_by(Skill.name)
        )
        return list(result.scalars().all())

    async def skills_by_person(self) -> dict[int, list[SkillLevel]]:
        """Every profile in one query, keyed by person id."""
        result = await self.session.execute(
            select(PersonSkill.person_id, Skill.id, Skill.name, PersonSkill.proficiency_level)
            .join(Skill, PersonSkill.skill_id == Skill.id)
            .order_by(PersonSkill.person_id, Skill.name)
        )
        profiles: dict[int, list[SkillLevel]] = defaultdict(list)
        for person_id, skill_id, skill_name, level in result.all():
            profiles[person_id].append(SkillLevel(skill_id, skill_name, level))
        return dict(profiles)

    async def set_skills(self, person_id: int, items: Iterable[tuple[int, int]]) -> None:
        """Replace a person's whole profile with (skill_id, proficiency_level) pairs."""
        levels = _dedupe(items)
        await self.catalog.ensure_exist(levels)

        await self.session.execute(delete(PersonSkill).where(PersonSkill.person_id == person_id))
        for skill_id, level in levels.items():
            self.session.add(
                PersonSkill(person_id=person_id, skill_id=skill_id, proficiency_level=level)
            )
        await self.session.flush()


class ProjectRequirementSet:
    """Per-project set of (skill, minimum proficiency level) pairs."""

    def __init__(self, session: AsyncSession, catalog: SkillCatalog | None = None):
        self.session = session
        self.catalog = catalog or SkillCatalog(session)

    async def get_requirements(self, project_id: int) -> list[SkillLevel]:
        result = await self.session.execute(
            select(Skill.id, Skill.name, ProjectRequirement.min_proficiency_level)
            .join(Skill, ProjectRequirement.skill_id == Skill.id)
            .where(ProjectRequirement.project_id == project_id)
            .order_by(Skill.name)
        )
        return [SkillLevel(skill_id, name, level) for skill_id, name, level in result.all()]

    async def set_requirements(self, project_id: int, items: Iterable[tuple[int, int]]) -> None:
        """Replace a project's whole requirement set."""
        levels = _dedupe(items)
        await self.catalog.ensure_exist(levels)

        await self.session.execute(
            delete(ProjectRequirement).where(ProjectRequirement.project_id == project_id)
        )
        self._add(project_id, levels)
        await self.session.flush()

    async def add_requirements(self, project_id: int, items: Iterable[tuple[int, int]]) -> None:
        """Append requirements; a skill already required raises ValidationError."""
        levels = _dedupe(items)
        await self.catalog.ensure_exist(levels)

        if levels:
            result = await self.session.execute(
                select(ProjectRequirement.skill_id).where(
                    ProjectRequirement.project_id == project_id,
                    ProjectRequirement.skill_id.in_(set(levels)),
                )
            )
            existing = set(result.scalars().all())
            if existing:
                raise ValidationError(f"Skills already required by project: {sorted(existing)}")

        self._add(project_id, levels)
        await self.session.flush()

    def _add(self, project_id: int, levels: dict[int, int]) -> None:
        for skill_id, level in levels.items():
            self.session.add(
                ProjectRequirement(
                    project_id=project_id, skill_id=skill_id, min_proficiency_level=level
                )
            )
