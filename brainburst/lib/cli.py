"""Click, plus the parameter types BrainBurst commands need.

Commands import this module in place of click (``import brainburst.lib.cli as
click``), so everything click exports is re-exported here.
"""

from __future__ import annotations

import enum
import typing as t
from pathlib import Path

import click
import pydantic as p
from click import *  # noqa: F401, F403 # pyright: ignore [reportWildcardImportFromLibrary]

from brainburst.model.id import ShortUUIDKey

E = t.TypeVar("E", bound=enum.Enum)
K = t.TypeVar("K", bound=ShortUUIDKey)


class EnumType(click.ParamType, t.Generic[E]):
    """A member of ``enum_type``, given by value."""

    def __init__(self, enum_type: type[E]):
        self.enum_type = enum_type
        self.name = enum_type.__name__

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        return "[{}]".format("|".join(str(m.value) for m in self.enum_type))

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> E:
        if isinstance(value, self.enum_type):
            return value
        try:
            return self.enum_type(value)
        except ValueError:
            choices = ", ".join(repr(m.value) for m in self.enum_type)
            self.fail(f"{value!r} is not a {self.name}; choose from {choices}", param, ctx)


class KeyParamType(click.ParamType, t.Generic[K]):
    """A prefixed key such as ``asgn$...``, checked against its key type."""

    def __init__(self, key_type: type[K]):
        self.key_type = key_type
        self.name = key_type.__name__

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> K:
        if isinstance(value, self.key_type):
            return value
        try:
            return self.key_type(str(value).strip())
        except ValueError as e:
            self.fail(f"{value!r} is not a valid {self.name}: {e}", param, ctx)


class DirectoryURLType(click.ParamType):
    """An existing local directory, given as a path or a ``file://`` URL."""

    name = "directory"

    def convert(self, value: t.Any, param: click.Parameter | None, ctx: click.Context | None) -> p.FileUrl:
        if isinstance(value, p.FileUrl):
            return value
        text = str(value)
        if "://" in text:
            url = p.AnyUrl(text)
            if url.scheme != "file" or url.path is None:
                self.fail(f"{text}: only file:// URLs are accepted", param, ctx)
            path = Path(url.path)
        else:
            path = Path(text)

        if not path.is_dir():
            self.fail(f"{text}: no such directory", param, ctx)
        return p.FileUrl(f"file://{path.absolute()}")
