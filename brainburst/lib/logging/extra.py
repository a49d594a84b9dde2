import importlib
import logging
import typing as t

import pygments
from pygments.formatters import Terminal256Formatter
from pygments.lexers.data import JsonLexer  # pyright: ignore [reportMissingTypeStubs]
from pygments.style import Style

from brainburst.lib import json

from .style import LogStyle

# attributes every LogRecord carries; anything else was passed through ``extra``
_RECORD_ATTRS = frozenset(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__) | {
    "asctime",
    "message",
    # added by colorlog and uvicorn
    "log_color",
    "color_message",
}


def _loggable(o: t.Any) -> json.JSONValue:
    try:
        return json.to_json(o)
    except TypeError:
        return repr(o)


class ExtraFormatter(logging.Formatter):
    """Formats with a wrapped base formatter, then appends the record's ``extra`` fields as JSON.

    ``base`` is a formatter class or its dotted path; options this class does
    not know about are passed through to it. Unless ``no_color`` is set the
    JSON is highlighted for the terminal.
    """

    def __init__(
        self,
        base: type[logging.Formatter] | str,
        format: str | None = None,
        datefmt: str | None = None,
        indent: bool | None = False,
        no_color: bool = False,
        pyg_style: type[Style] = LogStyle,
        style: t.Literal["%", "{", "$"] = "%",
        **kwargs: t.Any,
    ):
        if isinstance(base, str):
            module, _, name = base.rpartition(".")
            base = t.cast(type[logging.Formatter], getattr(importlib.import_module(module), name))
        # options left unset in the settings arrive as None
        options = {k: v for k, v in kwargs.items() if v is not None}
        self.base = base(format, datefmt=datefmt, style=style, **options)
        self.indent = 4 if indent else None
        self.highlighter = None if no_color else Terminal256Formatter(style=pyg_style)

    def format(self, record: logging.LogRecord) -> str:
        message = self.base.format(record)
        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if not extra:
            return message

        js = json.dumps(extra, sort_keys=True, indent=self.indent, default=_loggable)
        if self.highlighter is not None:
            hl = pygments.highlight  # pyright: ignore [reportUnknownMemberType, reportUnknownVariableType]
            js = hl(js, JsonLexer(), self.highlighter).rstrip()
        return f"{message} {js}"
