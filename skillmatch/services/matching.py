"""
Candidate matching for a project.

Every person is scored against the project's requirement set:

    matched_skills = #requirements where held level >= required minimum
    match_score    = round(matched_skills / total_required_skills * 100)

A missing skill counts as level 0 and never matches. A project without
requirements scores 0 for everybody - an empty requirement set is not
treated as satisfied.

Candidates are returned sorted by match_score, highest first. The sort is
stable, so people with equal scores keep their id order.
"""

from dataclasses import dataclass, field

from skillmatch.exceptions import NotFoundError
from skillmatch.models.person import Person
from skillmatch.repositories.assignments import AssignmentLedger
from skillmatch.repositories.personnel import PersonnelStore
from skillmatch.repositories.projects import ProjectStore
from skillmatch.repositories.skills import PersonSkillProfile, ProjectRequirementSet, SkillLevel
from skillmatch.services.overlap import OverlapGuard
from skillmatch.services.utilization import (
    UtilizationCalculator,
    is_utilization_warning,
    round_half_up,
    utilization_level,
)


@dataclass
class Candidate:
    person: Person
    skills: list[SkillLevel]
    match_score: int
    matched_skills: int
    total_required_skills: int
    utilization_percentage: int
    utilization_level: str
    utilization_warning: bool
    is_assigned_to_project: bool
    has_date_overlap: bool


@dataclass
class MatchResult:
    requirements: list[SkillLevel] = field(default_factory=list)
    personnel: list[Candidate] = field(default_factory=list)


def score_skills(held: list[SkillLevel], requirements: list[SkillLevel]) -> tuple[int, int]:
    """Return (matched_skills, match_score) for one person's skills."""
    if not requirements:
        return 0, 0
    levels = {skill.skill_id: skill.level for skill in held}
    matched = sum(1 for req in requirements if levels.get(req.skill_id, 0) >= req.level)
    return matched, round_half_up(matched / len(requirements) * 100)


class MatchingEngine:
    def __init__(
        self,
        projects: ProjectStore,
        personnel: PersonnelStore,
        requirements: ProjectRequirementSet,
        profiles: PersonSkillProfile,
        ledger: AssignmentLedger,
        calculator: UtilizationCalculator,
        guard: OverlapGuard,
    ):
        self.projects = projects
        self.personnel = personnel
        self.requirements = requirements
        self.profiles = profiles
        self.ledger = ledger
        self.calculator = calculator
        self.guard = guard

    async def match_candidates(self, project_id: int) -> MatchResult:
        project = await self.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)

        requirements = await self.requirements.get_requirements(project_id)
        people = await self.personnel.list_all()
        profiles = await self.profiles.skills_by_person()

        window_start, window_end = self.calculator.window()
        ranges = await self.ledger.ranges_in_window_by_person(window_start, window_end)

        assigned_ids = await self.ledger.person_ids_for_project(project_id)
        if project.has_dates:
            overlapping_ids = await self.guard.conflicting_person_ids(
                project_id, project.start_date, project.end_date
            )
        else:
            overlapping_ids = set()

        candidates = []
        for person in people:
            held = profiles.get(person.id, [])
            matched, score = score_skills(held, requirements)
            utilization = self.calculator.from_ranges(ranges.get(person.id, []), window_start)
            level = utilization_level(utilization)
            candidates.append(
                Candidate(
                    person=person,
                    skills=held,
                    match_score=score,
                    matched_skills=matched,
                    total_required_skills=len(requirements),
                    utilization_percentage=utilization,
                    utilization_level=level,
                    utilization_warning=is_utilization_warning(level),
                    is_assigned_to_project=person.id in assigned_ids,
                    has_date_overlap=person.id in overlapping_ids,
                )
            )

        candidates.sort(key=lambda c: c.match_score, reverse=True)
        return MatchResult(requirements=requirements, personnel=candidates)
