__all__ = [
    # Base
    "BaseModel",
    "WithCtime",
    "WithMtime",
    "WithTimestamps",
    # Enums
    "ArchivalState",
    "DenialReason",
    "DeploymentEnvironment",
    "EffectiveStatus",
    "ProgressStatus",
    "UserRole",
    # ID Types
    "AssignmentID",
    "ClassID",
    "GameResultID",
    "NotificationID",
    "StandardResultID",
    "TestID",
    "UserID",
    # Actor
    "Actor",
    "SYSTEM_ACTOR",
    # Classes
    "Classroom",
    "ClassRoster",
    # Assignments
    "Assignment",
    "DEFAULT_MAX_SCORE",
    # Progress
    "ProgressRecord",
    "ProgressView",
    "HandledStatuses",
    "ResolvedStatuses",
    "TerminalStatuses",
    # Overrides
    "Override",
    "OverrideAdapter",
    "GradedOverride",
    "ExcusedOverride",
    "BlockedOverride",
    "ReopenedOverride",
    # Results
    "AttemptHistory",
    "StandardResult",
    "GameResult",
    # Notifications
    "Notification",
    # Statistics
    "AssignmentStats",
    "ClassSummary",
    "NextAssignment",
    "StudentSummary",
]

from .actor import Actor, SYSTEM_ACTOR
from .assignment import Assignment, DEFAULT_MAX_SCORE
from .base import BaseModel, WithCtime, WithMtime, WithTimestamps
from .classroom import Classroom, ClassRoster
from .enum import ArchivalState, DenialReason, DeploymentEnvironment, EffectiveStatus, ProgressStatus, UserRole
from .id import AssignmentID, ClassID, GameResultID, NotificationID, StandardResultID, TestID, UserID
from .notification import Notification
from .override import BlockedOverride, ExcusedOverride, GradedOverride, Override, OverrideAdapter, ReopenedOverride
from .progress import HandledStatuses, ProgressRecord, ProgressView, ResolvedStatuses, TerminalStatuses
from .result import AttemptHistory, GameResult, StandardResult
from .stats import AssignmentStats, ClassSummary, NextAssignment, StudentSummary
