import typing as t

T = t.TypeVar("T")


@t.final
class NotSet(object):
    """Default of a keyword argument that was not passed, where passing None means "clear it"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NotSet"

    def __bool__(self) -> bool:
        return False


def is_set(value: T | NotSet) -> t.TypeGuard[T]:
    return not isinstance(value, NotSet)
