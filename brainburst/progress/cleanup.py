"""Deleting an assignment together with everything that references it."""

from __future__ import annotations

import logging
import typing as t

from brainburst import storage
from brainburst.core import di
from brainburst.model import Actor, AssignmentID
from brainburst.storage import Session

from .access import load_assignment, require_owner
from .errors import NotFound, PartialCascadeFailure, ProgressError

logger = logging.getLogger(__name__)


class DeletedCounts(t.NamedTuple):
    progress: int
    standard_results: int
    game_results: int


@di.inject
def delete_assignment(
    actor: Actor,
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> DeletedCounts:
    """Delete progress records, standard results and game results, then the assignment, atomically.

    The system actor may delete any assignment; teachers only their own.

    Raises:
        NotFound: If the assignment does not exist (including already deleted)
        Forbidden: If the actor does not own the assignment
        PartialCascadeFailure: If any step fails; nothing is deleted
    """
    try:
        with session.begin():
            assignment = load_assignment(assignment_id, session)
            if not actor.is_system:
                require_owner(actor, assignment)

            counts = DeletedCounts(
                progress=storage.progress.delete_for_assignment(assignment_id, session=session),
                standard_results=storage.result.delete_for_assignment(assignment_id, session=session),
                game_results=storage.game_result.delete_for_assignment(assignment_id, session=session),
            )
            if not storage.assignment.delete(assignment_id, session=session):
                raise NotFound(f"assignment {assignment_id} not found")
    except ProgressError:
        raise
    except Exception as e:
        logger.error(
            "assignment delete rolled back",
            extra={"assignment_id": assignment_id, "error": repr(e)},
        )
        raise PartialCascadeFailure(f"deleting assignment {assignment_id} failed; nothing was deleted") from e

    logger.info(
        "assignment deleted",
        extra={"assignment_id": assignment_id, "actor_id": actor.user_id, **counts._asdict()},
    )
    return counts
