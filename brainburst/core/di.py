"""Thin layer over ``dependency_injector.wiring``.

Application code imports injection markers from here rather than from the
library, so that ``di.Provide["storage.persistent.session"]`` reads the same
in services, routes and commands.
"""

__all__ = [
    "Closing",
    "Manage",
    "NotReady",
    "Provide",
    "as_",
    "inject",
]

import typing as t

from dependency_injector.wiring import Closing, inject, Provide, TypeModifier

T = t.TypeVar("T")


class _Manage(object):
    """``Manage["name"]`` injects the named resource and closes it when the call ends.

    Route handlers use it with ``Depends`` so each request gets its own
    session, closed after the response.
    """

    def __getitem__(self, name: str) -> t.Any:
        return Closing[Provide[name]]


Manage = _Manage()


def as_(type_: type[T]) -> TypeModifier:
    """Convert an injected configuration value to ``type_``."""
    return TypeModifier(type_)


@t.final
class NotReady(object):
    """Stands in for container values that only exist once the container is booted."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NotReady"
