"""Tests for project updates, skill profiles and requirement routes."""

from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from skillmatch.models.person import Person
from skillmatch.models.project import Project
from skillmatch.services import get_coordinator


def _result(scalar=None, scalars=(), rows=()):
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.scalars.return_value.all.return_value = list(scalars)
    result.all.return_value = list(rows)
    return result


@pytest.fixture
def project():
    return Project(
        id=1,
        name="Migration",
        description=None,
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 31),
        status="Planning",
    )


@pytest.fixture
def person():
    return Person(
        id=1,
        name="Alice",
        email="alice@example.com",
        experience_level="Senior",
        status="Available",
        created_at=datetime(2025, 1, 15, 9, 30),
    )


@pytest.fixture
def coordinator(app):
    coordinator = MagicMock()
    coordinator.reschedule_project = AsyncMock(return_value={1})
    app.dependency_overrides[get_coordinator] = lambda: coordinator
    return coordinator


@pytest.fixture
def writable_session(mock_db_session):
    mock_db_session.add = MagicMock()
    return mock_db_session


# ---------------------------------------------------------
# PUT /api/projects/{id}
# ---------------------------------------------------------


@pytest.mark.asyncio
async def test_date_change_reschedules_assignments(app_client, mock_db_session, project, coordinator):
    mock_db_session.execute.return_value = _result(scalar=project)

    response = await app_client.put(
        "/api/projects/1", json={"start_date": "2025-04-01", "end_date": "2025-04-30"}
    )

    assert response.status_code == 200
    assert response.json()["start_date"] == "2025-04-01"
    assert response.json()["end_date"] == "2025-04-30"
    coordinator.reschedule_project.assert_awaited_once_with(project)


@pytest.mark.asyncio
async def test_name_only_update_leaves_assignments(app_client, mock_db_session, project, coordinator):
    mock_db_session.execute.return_value = _result(scalar=project)

    response = await app_client.put("/api/projects/1", json={"name": "Renamed"})

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    coordinator.reschedule_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_same_dates_do_not_reschedule(app_client, mock_db_session, project, coordinator):
    mock_db_session.execute.return_value = _result(scalar=project)

    response = await app_client.put(
        "/api/projects/1", json={"start_date": "2025-03-01", "end_date": "2025-03-31"}
    )

    assert response.status_code == 200
    coordinator.reschedule_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_start_after_existing_end_returns_400(app_client, mock_db_session, project, coordinator):
    mock_db_session.execute.return_value = _result(scalar=project)

    response = await app_client.put("/api/projects/1", json={"start_date": "2025-04-10"})

    assert response.status_code == 400
    assert response.json()["error"] == "start_date must not be after end_date"
    assert project.start_date == date(2025, 3, 1)
    coordinator.reschedule_project.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_unknown_project_returns_404(app_client, mock_db_session, coordinator):
    mock_db_session.execute.return_value = _result(scalar=None)

    response = await app_client.put("/api/projects/9", json={"name": "X"})
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"status": None}, {"name": None}])
async def test_project_null_for_required_field_is_rejected(app_client, coordinator, body):
    response = await app_client.put("/api/projects/1", json=body)
    assert response.status_code == 422
    coordinator.reschedule_project.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"name": None}, {"email": None}, {"status": None}])
async def test_person_null_for_required_field_is_rejected(app_client, mock_db_session, body):
    response = await app_client.put("/api/personnel/1", json=body)
    assert response.status_code == 422
    mock_db_session.flush.assert_not_awaited()


@pytest.mark.asyncio
async def test_person_role_title_can_be_cleared(app_client, mock_db_session, person):
    person.role_title = "Engineer"
    mock_db_session.execute.return_value = _result(scalar=person)

    response = await app_client.put("/api/personnel/1", json={"role_title": None})

    assert response.status_code == 200
    assert response.json()["role_title"] is None


# ---------------------------------------------------------
# PUT /api/personnel/{id}/skills
# ---------------------------------------------------------


@pytest.mark.asyncio
async def test_replace_person_skills(app_client, writable_session, person):
    writable_session.execute.return_value = _result(scalar=person, scalars=[1, 2])

    response = await app_client.put(
        "/api/personnel/1/skills",
        json={"skills": [{"skill_id": 1, "proficiency_level": 4}, {"skill_id": 2, "proficiency_level": 1}]},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Skills updated"}
    added = [call.args[0] for call in writable_session.add.call_args_list]
    assert {(row.skill_id, row.proficiency_level) for row in added} == {(1, 4), (2, 1)}


@pytest.mark.asyncio
async def test_person_skill_level_out_of_range_returns_400(app_client, writable_session, person):
    writable_session.execute.return_value = _result(scalar=person)

    response = await app_client.put(
        "/api/personnel/1/skills", json={"skills": [{"skill_id": 1, "proficiency_level": 5}]}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Proficiency level must be between 1 and 4"
    writable_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_person_unknown_skill_returns_400(app_client, writable_session, person):
    writable_session.execute.return_value = _result(scalar=person, scalars=[1])

    response = await app_client.put(
        "/api/personnel/1/skills",
        json={"skills": [{"skill_id": 1, "proficiency_level": 2}, {"skill_id": 9, "proficiency_level": 2}]},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Skills not found: [9]"


@pytest.mark.asyncio
async def test_skills_of_unknown_person_returns_404(app_client, writable_session):
    writable_session.execute.return_value = _result(scalar=None)

    response = await app_client.put("/api/personnel/5/skills", json={"skills": []})
    assert response.status_code == 404


# ---------------------------------------------------------
# /api/projects/{id}/requirements
# ---------------------------------------------------------


@pytest.mark.asyncio
async def test_get_requirements(app_client, mock_db_session, project):
    mock_db_session.execute.return_value = _result(scalar=project, rows=[(7, "Python", 3)])

    response = await app_client.get("/api/projects/1/requirements")

    assert response.status_code == 200
    assert response.json() == [{"skill_id": 7, "skill_name": "Python", "min_proficiency_level": 3}]


@pytest.mark.asyncio
async def test_replace_requirements(app_client, writable_session, project):
    writable_session.execute.return_value = _result(scalar=project, scalars=[7])

    response = await app_client.put(
        "/api/projects/1/requirements",
        json={"requirements": [{"skill_id": 7, "min_proficiency_level": 3}]},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Requirements updated"}
    added = [call.args[0] for call in writable_session.add.call_args_list]
    assert [(row.skill_id, row.min_proficiency_level) for row in added] == [(7, 3)]


@pytest.mark.asyncio
async def test_add_requirements(app_client, writable_session, project):
    writable_session.execute.side_effect = [
        _result(scalar=project),
        _result(scalars=[7, 8]),
        _result(scalars=[]),
    ]

    response = await app_client.post(
        "/api/projects/1/requirements",
        json={"requirements": [{"skill_id": 7, "min_proficiency_level": 3}, {"skill_id": 8, "min_proficiency_level": 1}]},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Requirements added"}
    assert writable_session.add.call_count == 2


@pytest.mark.asyncio
async def test_add_already_required_skill_returns_400(app_client, writable_session, project):
    writable_session.execute.side_effect = [
        _result(scalar=project),
        _result(scalars=[7]),
        _result(scalars=[7]),
    ]

    response = await app_client.post(
        "/api/projects/1/requirements",
        json={"requirements": [{"skill_id": 7, "min_proficiency_level": 2}]},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Skills already required by project: [7]"
    writable_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_requirement_level_out_of_range_returns_400(app_client, writable_session, project):
    writable_session.execute.return_value = _result(scalar=project)

    response = await app_client.put(
        "/api/projects/1/requirements",
        json={"requirements": [{"skill_id": 7, "min_proficiency_level": 0}]},
    )
    assert response.status_code == 400
