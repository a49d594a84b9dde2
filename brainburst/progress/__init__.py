__all__ = [
    # Errors
    "ProgressError",
    "NotFound",
    "Forbidden",
    "InvalidTransition",
    "InvalidAssignment",
    "ConcurrencyConflict",
    "PartialCascadeFailure",
    # Resolution
    "is_terminal",
    "is_past_due",
    "resolve",
    "resolve_view",
    # Gate
    "GateDecision",
    "can_start_attempt",
    # Transitions
    "start_attempt",
    "record_submission",
    "override",
    "reset",
    "scale_score",
    # Lifecycle
    "create_assignment",
    "archive_assignment",
    "unarchive_assignment",
    "list_progress",
    "get_progress",
    "attempt_history",
    "delete_assignment",
    "DeletedCounts",
    # Aggregation
    "aggregate",
    "summarize",
    "class_summary",
    "student_summary",
    # Collaborators
    "KeyedLock",
    "AssignmentNotifier",
    "StoredNotifier",
]

from .aggregate import aggregate, class_summary, student_summary, summarize
from .cleanup import delete_assignment, DeletedCounts
from .errors import ConcurrencyConflict, Forbidden, InvalidAssignment, InvalidTransition, NotFound, \
    PartialCascadeFailure, ProgressError
from .gate import can_start_attempt, GateDecision
from .lifecycle import archive_assignment, attempt_history, create_assignment, get_progress, list_progress, \
    unarchive_assignment
from .lock import KeyedLock
from .notifier import AssignmentNotifier, StoredNotifier
from .resolver import is_past_due, is_terminal, resolve, resolve_view
from .transition import override, record_submission, reset, scale_score, start_attempt
