import typing as t

import pydantic as p

from .base import BaseModel
from .enum import ProgressStatus


class GradedOverride(BaseModel):
    status: t.Literal["graded"] = "graded"
    score: float | None = None
    comment: str | None = None


class ExcusedOverride(BaseModel):
    status: t.Literal["excused"] = "excused"
    comment: str | None = None


class BlockedOverride(BaseModel):
    status: t.Literal["blocked"] = "blocked"
    comment: str | None = None


class ReopenedOverride(BaseModel):
    """Puts a record back into a non-resolved state."""

    status: t.Literal["assigned", "in_progress", "submitted"]


Override = t.Annotated[
    GradedOverride | ExcusedOverride | BlockedOverride | ReopenedOverride,
    p.Field(discriminator="status"),
]

OverrideAdapter: p.TypeAdapter[Override] = p.TypeAdapter(Override)


def target_status(override: Override) -> ProgressStatus:
    return ProgressStatus(override.status)
