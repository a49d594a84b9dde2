"""Exceptions raised by progress operations.

Each carries a stable ``code`` that the web layer reports to clients.
"""

from __future__ import annotations

import typing as t

from brainburst.model import DenialReason


class ProgressError(Exception):
    """Error during a progress operation."""

    code: t.ClassVar[str] = "progress_error"
    retryable: t.ClassVar[bool] = False

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(ProgressError):
    """The assignment, class or progress record does not exist."""

    code = "not_found"


class Forbidden(ProgressError):
    """The actor may not perform the operation."""

    code = "forbidden"


class InvalidTransition(ProgressError):
    """The state machine refused the transition."""

    code = "invalid_transition"

    def __init__(self, reason: DenialReason, detail: str | None = None):
        super().__init__(detail or f"transition refused: {reason.value}")
        self.reason = reason


class InvalidAssignment(ProgressError):
    """Assignment parameters are unacceptable."""

    code = "invalid_assignment"


class ConcurrencyConflict(ProgressError):
    """A concurrent writer changed the record; the operation may be retried."""

    code = "concurrency_conflict"
    retryable = True


class PartialCascadeFailure(ProgressError):
    """Deleting an assignment and its dependents failed; nothing was deleted."""

    code = "cascade_failed"
