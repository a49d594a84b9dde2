import enum


class DeploymentEnvironment(enum.Enum):
    Production = "production"
    Development = "development"
    Staging = "staging"
    Test = "test"
    Local = "local"


class ArchivalState(enum.Enum):
    Active = "active"
    Archived = "archived"


class ProgressStatus(enum.Enum):
    """Stored status of a progress record. Overdue is never stored."""

    Assigned = "assigned"
    InProgress = "in_progress"
    Submitted = "submitted"
    Blocked = "blocked"
    Graded = "graded"
    Excused = "excused"


class EffectiveStatus(enum.Enum):
    Assigned = "assigned"
    InProgress = "in_progress"
    Submitted = "submitted"
    Blocked = "blocked"
    Graded = "graded"
    Excused = "excused"
    Overdue = "overdue"


class UserRole(enum.Enum):
    Teacher = "teacher"
    Student = "student"
    System = "system"


class DenialReason(enum.Enum):
    """Why a progress transition was refused."""

    Archived = "archived"
    TerminalState = "terminal_state"
    Overdue = "overdue"
    AttemptsExhausted = "attempts_exhausted"
    NotSubmittable = "not_submittable"
