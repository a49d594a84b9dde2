"""Database migrations, driven through alembic."""

from __future__ import annotations

import alembic.command
import alembic.config

import brainburst.lib.cli as click
from brainburst.core import di

AlembicConfig = di.Provide["storage.persistent.alembic_config"]


@click.group("schema")
def schema():
    """Inspect and migrate the database schema."""


@schema.command("upgrade")
@click.argument("revision", default="head")
@click.option("--sql", is_flag=True, default=False, help="print the SQL instead of running it")
@di.inject
def upgrade(revision: str, sql: bool, alembic_conf: alembic.config.Config = AlembicConfig):
    """Migrate forward to REVISION (default: the latest)."""
    alembic.command.upgrade(alembic_conf, revision, sql=sql)


@schema.command("downgrade")
@click.argument("revision")
@di.inject
def downgrade(revision: str, alembic_conf: alembic.config.Config = AlembicConfig):
    alembic.command.downgrade(alembic_conf, revision)


@schema.command("status")
@click.option("-v", "--verbose", is_flag=True, default=False)
@di.inject
def status(verbose: bool, alembic_conf: alembic.config.Config = AlembicConfig):
    """Show the revision the database is at, then the revision history."""
    alembic.command.current(alembic_conf, verbose=verbose)
    alembic.command.history(alembic_conf, verbose=verbose, indicate_current=True)


@schema.command("revision")
@click.argument("message")
@click.option("--autogenerate/--empty", default=True, help="diff the table metadata against the database")
@di.inject
def revision(message: str, autogenerate: bool, alembic_conf: alembic.config.Config = AlembicConfig):
    alembic.command.revision(alembic_conf, message, autogenerate=autogenerate)
