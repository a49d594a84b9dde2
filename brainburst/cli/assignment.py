"""CLI commands for operating on assignments."""

from __future__ import annotations

from sqlalchemy.orm import Session

import brainburst.lib.cli as click
import brainburst.lib.json as json
from brainburst import progress
from brainburst.core import di
from brainburst.model import AssignmentID, SYSTEM_ACTOR


@click.group("assignment")
def assignment():
    """Inspect and clean up assignments."""
    ...


@assignment.command("stats")
@click.argument("assignment_id", type=click.KeyParamType(AssignmentID))
@di.inject
def assignment_stats(
    assignment_id: AssignmentID,
    session: Session = di.Provide["storage.persistent.session"],
) -> None:
    """Print submission, overdue and grading counters for ASSIGNMENT_ID."""
    try:
        stats = progress.aggregate(assignment_id, session=session)
    except progress.NotFound as e:
        raise click.ClickException(e.detail) from e
    finally:
        session.close()
    click.echo(json.dumps(stats, indent=2))


@assignment.command("delete")
@click.argument("assignment_id", type=click.KeyParamType(AssignmentID))
@click.option("--yes", "-y", is_flag=True, default=False, help="do not ask for confirmation")
@di.inject
def assignment_delete(
    assignment_id: AssignmentID,
    yes: bool,
    session: Session = di.Provide["storage.persistent.session"],
) -> None:
    """Delete ASSIGNMENT_ID together with its progress records and results."""
    if not yes:
        click.confirm(f"Delete {assignment_id} and everything recorded against it?", abort=True)

    try:
        counts = progress.delete_assignment(SYSTEM_ACTOR, assignment_id, session=session)
    except progress.NotFound as e:
        raise click.ClickException(e.detail) from e
    finally:
        session.close()

    click.echo(f"Deleted assignment {assignment_id}")
    click.echo(f"  progress records: {counts.progress}")
    click.echo(f"  standard results: {counts.standard_results}")
    click.echo(f"  game results:     {counts.game_results}")
