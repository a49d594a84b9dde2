"""View models for the BrainBurst web application."""

__all__ = [
    # Assignment views
    "AssignmentCreateRequest",
    "AssignmentDeleteResponse",
    "AssignmentResponse",
    # Progress views
    "OverrideRequest",
    "ProgressListResponse",
    "ProgressResponse",
    "SubmissionRequest",
]

from .assignment import AssignmentCreateRequest, AssignmentDeleteResponse, AssignmentResponse, OverrideRequest, \
    ProgressListResponse, ProgressResponse, SubmissionRequest
