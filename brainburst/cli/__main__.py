"""The ``brainburst`` command.

Subcommands live in sibling modules and are imported only when invoked, so
that ``brainburst --help`` does not load the web stack.
"""

from __future__ import annotations

import importlib
import sys
import threading
import traceback
import types
import typing as t
from pathlib import Path

import pydantic as p
from click.exceptions import Exit

import brainburst
import brainburst.lib.cli as click
from brainburst.core import BrainBurstContainer
from brainburst.model import DeploymentEnvironment

SUBCOMMANDS: t.Final = ("assignment", "schema", "web")
DEFAULT_CONFIG_ROOT = Path(brainburst.__file__).resolve().parent.parent / "config"


class LazyGroup(click.Group):
    def __init__(self, *args: t.Any, **kwargs: t.Any):
        super().__init__(*args, **kwargs)
        self.loaded: list[types.ModuleType] = []

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(SUBCOMMANDS)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in SUBCOMMANDS:
            return None
        module = importlib.import_module(f"{__package__}.{cmd_name}")
        self.loaded.append(module)
        return getattr(module, cmd_name)


@click.group(cls=LazyGroup)
@click.option("-E", "--env", default=DeploymentEnvironment.Local.value, type=click.EnumType(DeploymentEnvironment))
@click.option("-c", "--config-root", default=str(DEFAULT_CONFIG_ROOT), type=click.DirectoryURLType())
@click.option(
    "-o",
    "--override",
    multiple=True,
    metavar="KEY=VALUE",
    help="override one configuration value, e.g. -o storage.persistent.database.port=5433",
)
@click.option("-D", "--debug", is_flag=True, default=False, help="print tracebacks and capture warnings")
@click.pass_context
def main(ctx: click.Context, env: DeploymentEnvironment, config_root: p.FileUrl, override: tuple[str, ...], debug: bool):
    group = t.cast(LazyGroup, ctx.command)
    BrainBurstContainer.boot(
        ctx.obj, debug=debug, env=env, config_root=config_root, override=override, wiring=tuple(group.loaded)
    )


def _report(ex: Exception, debug: bool) -> int:
    click.echo(click.style("ERROR ", fg="red") + str(ex), file=sys.stderr)
    if debug:
        traceback.print_exc()
    return ex.exit_code if isinstance(ex, click.ClickException) else 1


def execute_command(*argv: str) -> t.NoReturn:
    threading.current_thread().name = "brainburst-main"
    prog, *args = argv or sys.argv
    container = BrainBurstContainer()

    try:
        with main.make_context(Path(prog).name, args=args, obj=container) as ctx:
            status = main.invoke(ctx)
    except (EOFError, KeyboardInterrupt, click.Abort):
        click.echo("Aborted!", file=sys.stderr)
        status = 1
    except Exit as ex:
        status = ex.exit_code
    except Exception as ex:
        status = _report(ex, debug="-D" in args or "--debug" in args)
    finally:
        container.shutdown_resources()
    sys.exit(status if isinstance(status, int) else 0)


if __name__ == "__main__":
    execute_command(*sys.argv)
