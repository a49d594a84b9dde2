import typing as t

import pydantic as p
import pydantic_core.core_schema as core_schema
import shortuuid

_ALPHABET = frozenset(shortuuid.get_alphabet())


class ShortUUIDKey(str):
    """A typed identifier: a four-letter prefix, ``$``, and a 22-character shortuuid.

    ``AssignmentID()`` mints a new id, ``AssignmentID("asgn$...")`` parses
    and validates one, and ``AssignmentID(key=...)`` wraps a bare shortuuid
    as read back from storage.
    """

    prefix: t.ClassVar[str]
    separator: t.ClassVar[str] = "$"
    key_length: t.ClassVar[int] = 22

    def __init_subclass__(cls, prefix: str, **kwargs: t.Any):
        super().__init_subclass__(**kwargs)
        if len(prefix) != 4:
            raise TypeError(f"{cls.__name__}: prefix must be four characters, got {prefix!r}")
        cls.prefix = prefix

    def __new__(cls, value: str | None = None, /, key: str | None = None) -> t.Self:
        if key is None:
            key = shortuuid.uuid() if value is None else cls._parse(value)
        return super().__new__(cls, f"{cls.prefix}{cls.separator}{key}")

    @classmethod
    def _parse(cls, value: str) -> str:
        prefix, separator, key = value.partition(cls.separator)
        if prefix != cls.prefix or not separator:
            raise ValueError(f"invalid {cls.__name__}: must begin with {cls.prefix}{cls.separator}")
        if len(key) != cls.key_length or not _ALPHABET.issuperset(key):
            raise ValueError(f"invalid {cls.__name__}: {value!r} is not a shortuuid key")
        return key

    @property
    def key(self) -> str:
        return self[len(self.prefix) + len(self.separator) :]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key}>"

    @classmethod
    def __get_pydantic_core_schema__(cls, source: t.Any, handler: p.GetCoreSchemaHandler) -> core_schema.CoreSchema:
        from_str = core_schema.no_info_after_validator_function(cls, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.to_string_ser_schema(),
        )


# fmt: off
class UserID(ShortUUIDKey, prefix="user"): ...
class ClassID(ShortUUIDKey, prefix="clss"): ...
class TestID(ShortUUIDKey, prefix="test"): ...
class AssignmentID(ShortUUIDKey, prefix="asgn"): ...
class StandardResultID(ShortUUIDKey, prefix="rslt"): ...
class GameResultID(ShortUUIDKey, prefix="game"): ...
class NotificationID(ShortUUIDKey, prefix="ntfy"): ...
# fmt: on
