"""
Shared test fixtures for the SkillMatch API test suite.

Service tests run against the in-memory fakes below, which mirror the
repository method names. Route tests use a mocked AsyncSession or override
the service dependencies.
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from skillmatch.config import Settings
from skillmatch.models.assignment import ProjectAssignment
from skillmatch.models.person import Person
from skillmatch.models.project import Project
from skillmatch.repositories.skills import SkillLevel
from skillmatch.services.assignments import AssignmentCoordinator
from skillmatch.services.matching import MatchingEngine
from skillmatch.services.overlap import OverlapGuard, ranges_overlap
from skillmatch.services.utilization import UtilizationCalculator

TODAY = date(2025, 3, 1)


class FakePersonnel:
    def __init__(self):
        self.people: dict[int, Person] = {}
        self.locked: list[int] = []

    def add(self, person_id: int, name: str, status: str = "Available") -> Person:
        person = Person(
            id=person_id,
            name=name,
            email=f"{name.lower()}@example.com",
            role_title="Engineer",
            experience_level="Mid-Level",
            status=status,
        )
        self.people[person_id] = person
        return person

    async def list_all(self):
        return [self.people[key] for key in sorted(self.people)]

    async def get(self, person_id):
        return self.people.get(person_id)

    async def get_for_update(self, person_id):
        self.locked.append(person_id)
        return self.people.get(person_id)

    async def set_status(self, person, status):
        person.status = status


class FakeProjects:
    def __init__(self):
        self.projects: dict[int, Project] = {}

    def add(self, project_id: int, name: str, start=None, end=None) -> Project:
        project = Project(
            id=project_id, name=name, start_date=start, end_date=end, status="Planning"
        )
        self.projects[project_id] = project
        return project

    async def list_all(self):
        return [self.projects[key] for key in sorted(self.projects)]

    async def get(self, project_id):
        return self.projects.get(project_id)


class FakeLedger:
    def __init__(self):
        self.rows: list[ProjectAssignment] = []

    def add(self, project_id, person_id, start, end, capacity=100) -> ProjectAssignment:
        row = ProjectAssignment(
            id=len(self.rows) + 1,
            project_id=project_id,
            person_id=person_id,
            capacity_percentage=capacity,
            assigned_start_date=start,
            assigned_end_date=end,
        )
        self.rows.append(row)
        return row

    async def get_pair(self, project_id, person_id):
        for row in self.rows:
            if row.project_id == project_id and row.person_id == person_id:
                return row
        return None

    async def person_ids_for_project(self, project_id):
        return {row.person_id for row in self.rows if row.project_id == project_id}

    async def ranges_in_window(self, person_id, window_start, window_end):
        return [
            (row.assigned_start_date, row.assigned_end_date)
            for row in self.rows
            if row.person_id == person_id
            and ranges_overlap(
                row.assigned_start_date, row.assigned_end_date, window_start, window_end
            )
        ]

    async def ranges_in_window_by_person(self, window_start, window_end):
        ranges = {}
        for row in self.rows:
            if ranges_overlap(
                row.assigned_start_date, row.assigned_end_date, window_start, window_end
            ):
                ranges.setdefault(row.person_id, []).append(
                    (row.assigned_start_date, row.assigned_end_date)
                )
        return ranges

    async def has_other_overlapping(self, person_id, project_id, start, end):
        return any(
            row.person_id == person_id
            and row.project_id != project_id
            and ranges_overlap(row.assigned_start_date, row.assigned_end_date, start, end)
            for row in self.rows
        )

    async def person_ids_overlapping(self, project_id, start, end):
        return {
            row.person_id
            for row in self.rows
            if row.project_id != project_id
            and ranges_overlap(row.assigned_start_date, row.assigned_end_date, start, end)
        }

    async def insert(self, project_id, person_id, capacity_percentage, start, end):
        return self.add(project_id, person_id, start, end, capacity_percentage)

    async def delete_pair(self, project_id, person_id):
        before = len(self.rows)
        self.rows = [
            row
            for row in self.rows
            if not (row.project_id == project_id and row.person_id == person_id)
        ]
        return len(self.rows) < before

    async def overwrite_project_dates(self, project_id, start, end):
        affected = set()
        for row in self.rows:
            if row.project_id == project_id:
                row.assigned_start_date = start
                row.assigned_end_date = end
                affected.add(row.person_id)
        return affected


class FakeRequirements:
    def __init__(self):
        self.by_project: dict[int, list[SkillLevel]] = {}

    async def get_requirements(self, project_id):
        return list(self.by_project.get(project_id, []))


class FakeProfiles:
    def __init__(self):
        self.by_person: dict[int, list[SkillLevel]] = {}

    async def skills_by_person(self):
        return {key: list(value) for key, value in self.by_person.items()}


class World:
    """A small in-memory store wired into the real services."""

    def __init__(self, today: date = TODAY):
        self.today = today
        self.personnel = FakePersonnel()
        self.projects = FakeProjects()
        self.ledger = FakeLedger()
        self.requirements = FakeRequirements()
        self.profiles = FakeProfiles()
        self.guard = OverlapGuard(self.ledger)
        self.calculator = UtilizationCalculator(
            self.ledger, self.personnel, window_days=90, today=lambda: self.today
        )
        self.coordinator = AssignmentCoordinator(
            self.projects,
            self.personnel,
            self.ledger,
            self.guard,
            self.calculator,
            default_assignment_days=7,
            today=lambda: self.today,
        )
        self.engine = MatchingEngine(
            self.projects,
            self.personnel,
            self.requirements,
            self.profiles,
            self.ledger,
            self.calculator,
            self.guard,
        )


@pytest.fixture
def world():
    return World()


@pytest.fixture
def test_settings():
    """Settings configured for testing (no real DB connection needed)."""
    return Settings(
        db_host="localhost",
        db_port=5432,
        db_name="skillmatch_test",
        db_user="test",
        db_password="test",
        debug=True,
    )


@pytest.fixture
def mock_db_session():
    """Create a mock async database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.close = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def app(test_settings, mock_db_session):
    from skillmatch.database import get_db
    from skillmatch.main import create_app

    app = create_app(test_settings)
    app.dependency_overrides[get_db] = lambda: mock_db_session
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def app_client(app):
    """Create a test client with mocked database dependencies."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
