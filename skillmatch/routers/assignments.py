"""
Matching and assignment routes.

Handles:
- GET    /api/projects/{project_id}/matching                 rank personnel for a project
- POST   /api/projects/{project_id}/assign/{personnel_id}    assign, or release if already assigned
- DELETE /api/projects/{project_id}/assign/{personnel_id}    release (idempotent)
"""

from typing import Optional

from fastapi import APIRouter, Depends

from skillmatch.models.enums import AssignmentAction
from skillmatch.schemas.project import (
    AssignmentRequest,
    AssignmentResponse,
    CandidateResponse,
    CandidateSkill,
    MatchingResponse,
)
from skillmatch.routers.projects import build_requirements
from skillmatch.services import (
    AssignmentCoordinator,
    MatchingEngine,
    get_coordinator,
    get_matching_engine,
)
from skillmatch.services.matching import Candidate

router = APIRouter(tags=["assignments"])

ASSIGNED_MESSAGE = "Personnel assigned successfully"
TOGGLE_RELEASED_MESSAGE = "Personnel released from project successfully"
UNASSIGNED_MESSAGE = "Personnel unassigned successfully"


def build_candidate(candidate: Candidate) -> CandidateResponse:
    person = candidate.person
    return CandidateResponse(
        id=person.id,
        name=person.name,
        email=person.email,
        role_title=person.role_title,
        experience_level=person.experience_level,
        status=person.status,
        skills=[
            CandidateSkill(
                skill_id=skill.skill_id,
                skill_name=skill.skill_name,
                proficiency_level=skill.level,
            )
            for skill in candidate.skills
        ],
        match_score=candidate.match_score,
        matched_skills=candidate.matched_skills,
        total_required_skills=candidate.total_required_skills,
        utilization_percentage=candidate.utilization_percentage,
        utilization_level=candidate.utilization_level,
        utilization_warning=candidate.utilization_warning,
        is_assigned_to_project=candidate.is_assigned_to_project,
        has_date_overlap=candidate.has_date_overlap,
    )


@router.get("/projects/{project_id}/matching", response_model=MatchingResponse)
async def get_project_matching(
    project_id: int,
    engine: MatchingEngine = Depends(get_matching_engine),
):
    """
    Rank every person against the project's skill requirements.

    Personnel are sorted by match_score (highest first); ties keep id order.
    Pagination and filtering are left to the client.
    """
    result = await engine.match_candidates(project_id)
    return MatchingResponse(
        requirements=build_requirements(result.requirements),
        personnel=[build_candidate(candidate) for candidate in result.personnel],
    )


@router.post("/projects/{project_id}/assign/{personnel_id}", response_model=AssignmentResponse)
async def assign_personnel(
    project_id: int,
    personnel_id: int,
    data: Optional[AssignmentRequest] = None,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    """
    Assign a person to a project, or release them if they already are.

    Dates default to the project's dates, then to today .. today + 7 days.
    Rejected with 400 if the person holds an overlapping assignment on
    another project.
    """
    data = data or AssignmentRequest()
    outcome = await coordinator.toggle_assignment(
        project_id,
        personnel_id,
        capacity_percentage=data.capacity_percentage,
        start=data.assigned_start_date,
        end=data.assigned_end_date,
    )
    message = (
        ASSIGNED_MESSAGE
        if outcome.action == AssignmentAction.ASSIGNED
        else TOGGLE_RELEASED_MESSAGE
    )
    return AssignmentResponse(
        message=message,
        action=outcome.action,
        utilization=outcome.utilization,
        status=outcome.status,
    )


@router.delete("/projects/{project_id}/assign/{personnel_id}", response_model=AssignmentResponse)
async def unassign_personnel(
    project_id: int,
    personnel_id: int,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    """Release a person from a project. Releasing an absent assignment is not an error."""
    outcome = await coordinator.release(project_id, personnel_id)
    return AssignmentResponse(
        message=UNASSIGNED_MESSAGE,
        action=outcome.action,
        utilization=outcome.utilization,
        status=outcome.status,
    )
