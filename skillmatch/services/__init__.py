"""
Services package for the matching and utilization engine.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.config import get_settings
from skillmatch.database import get_db
from skillmatch.repositories import (
    AssignmentLedger,
    PersonnelStore,
    PersonSkillProfile,
    ProjectRequirementSet,
    ProjectStore,
    SkillCatalog,
)
from skillmatch.services.assignments import AssignmentCoordinator, AssignmentOutcome
from skillmatch.services.matching import MatchingEngine, MatchResult
from skillmatch.services.overlap import OverlapGuard
from skillmatch.services.utilization import UtilizationCalculator, UtilizationStatus

__all__ = [
    "AssignmentCoordinator",
    "AssignmentOutcome",
    "MatchingEngine",
    "MatchResult",
    "OverlapGuard",
    "UtilizationCalculator",
    "UtilizationStatus",
    "build_coordinator",
    "build_matching_engine",
    "get_coordinator",
    "get_matching_engine",
]


def _calculator(session: AsyncSession) -> UtilizationCalculator:
    settings = get_settings()
    return UtilizationCalculator(
        AssignmentLedger(session),
        PersonnelStore(session),
        window_days=settings.utilization_window_days,
    )


def build_coordinator(session: AsyncSession) -> AssignmentCoordinator:
    """Wire an AssignmentCoordinator onto one session."""
    settings = get_settings()
    ledger = AssignmentLedger(session)
    return AssignmentCoordinator(
        ProjectStore(session),
        PersonnelStore(session),
        ledger,
        OverlapGuard(ledger),
        _calculator(session),
        default_assignment_days=settings.default_assignment_days,
    )


def build_matching_engine(session: AsyncSession) -> MatchingEngine:
    """Wire a MatchingEngine onto one session."""
    catalog = SkillCatalog(session)
    ledger = AssignmentLedger(session)
    return MatchingEngine(
        ProjectStore(session),
        PersonnelStore(session),
        ProjectRequirementSet(session, catalog),
        PersonSkillProfile(session, catalog),
        ledger,
        _calculator(session),
        OverlapGuard(ledger),
    )


async def get_coordinator(db: AsyncSession = Depends(get_db)) -> AssignmentCoordinator:
    """FastAPI dependency: coordinator bound to the request session."""
    return build_coordinator(db)


async def get_matching_engine(db: AsyncSession = Depends(get_db)) -> MatchingEngine:
    """FastAPI dependency: matching engine bound to the request session."""
    return build_matching_engine(db)
