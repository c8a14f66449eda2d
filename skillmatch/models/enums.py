from enum import Enum


class ExperienceLevel(str, Enum):
    JUNIOR = "Junior"
    MID_LEVEL = "Mid-Level"
    SENIOR = "Senior"


class PersonnelStatus(str, Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"
    CRITICAL = "Critical"
    ON_LEAVE = "On Leave"


class ProjectStatus(str, Enum):
    PLANNING = "Planning"
    ACTIVE = "Active"
    COMPLETED = "Completed"


class ProficiencyLevel(int, Enum):
    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3
    EXPERT = 4


class UtilizationLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AssignmentAction(str, Enum):
    ASSIGNED = "assigned"
    RELEASED = "released"


def check_values(enum_cls) -> str:
    """Render an enum's values as a SQL IN list for CHECK constraints."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
