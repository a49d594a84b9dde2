"""JSON for the values that show up in log lines, command output and JSON columns."""

import datetime
import decimal
import enum
import functools
import json as pyjson
import pathlib
import typing as t

import pydantic as p

JSONPrimitive = str | int | float | bool | None
JSONValue = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]


@functools.singledispatch
def to_json(obj: t.Any) -> JSONValue:
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


@to_json.register
def _(obj: p.BaseModel) -> JSONValue:
    return obj.model_dump(mode="json")


@to_json.register
def _(obj: datetime.date) -> JSONValue:
    # also covers datetime
    return obj.isoformat()


@to_json.register
def _(obj: datetime.timedelta) -> JSONValue:
    return obj.total_seconds()


@to_json.register
def _(obj: enum.Enum) -> JSONValue:
    return obj.value


@to_json.register(decimal.Decimal)
@to_json.register(pathlib.PurePath)
def _(obj: t.Any) -> JSONValue:
    return str(obj)


@to_json.register(set)
@to_json.register(frozenset)
def _(obj: t.AbstractSet[t.Any]) -> JSONValue:
    # sorted so that sets of ids read the same run to run
    return sorted(obj)


class JSONEncoder(pyjson.JSONEncoder):
    def default(self, o: t.Any) -> JSONValue:
        return to_json(o)


def dumps(obj: t.Any, *, indent: int | str | None = None, sort_keys: bool = False, **kw: t.Any) -> str:
    return pyjson.dumps(obj, cls=JSONEncoder, indent=indent, sort_keys=sort_keys, **kw)


def loads(s: str | bytes | bytearray, **kw: t.Any) -> t.Any:
    return pyjson.loads(s, **kw)
