"""Repository functions, one module per table.

Repository modules load on first attribute access (``storage.progress``),
so importing ``brainburst.storage`` does not import every table.
"""

import importlib
import types
import typing as t

from sqlalchemy.orm import Session, SessionTransaction

REPOSITORIES: t.Final = frozenset({"assignment", "classroom", "game_result", "notification", "progress", "result"})

__all__ = ["Session", "SessionTransaction", *sorted(REPOSITORIES)]

if t.TYPE_CHECKING:
    from . import assignment, classroom, game_result, notification, progress, result


def __getattr__(name: str) -> types.ModuleType:
    if name not in REPOSITORIES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    # import_module binds the submodule on this package, so this runs once per name
    return importlib.import_module(f"{__name__}.{name}")
