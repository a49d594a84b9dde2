import typing as t

import pydantic as p

from .base import BaseSettings

LogLevel = t.Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class FormatterSettings(BaseSettings):
    factory: t.Literal["brainburst.lib.logging.ExtraFormatter"] = p.Field(alias="()")
    # dotted path of the formatter that renders the message itself
    base: str
    format: str | None = None
    datefmt: str | None = None
    log_colors: dict[str, str] | None = None
    no_color: bool = False
    indent: bool | None = None


class StreamHandlerSettings(BaseSettings):
    class_: t.Literal["colorlog.StreamHandler", "logging.StreamHandler"] = p.Field(alias="class")
    formatter: str
    level: LogLevel
    stream: str = "ext://sys.stderr"


class FileHandlerSettings(BaseSettings):
    class_: t.Literal["logging.FileHandler"] = p.Field(alias="class")
    formatter: str
    level: LogLevel
    filename: str


HandlerSettings = t.Annotated[StreamHandlerSettings | FileHandlerSettings, p.Field(discriminator="class_")]


class LoggerSettings(BaseSettings):
    level: LogLevel = "NOTSET"
    propagate: bool = True
    handlers: list[str] | None = None


class RootLoggerSettings(BaseSettings):
    handlers: list[str]
    level: LogLevel = "NOTSET"


class LoggingSettings(BaseSettings):
    """A ``logging.config.dictConfig`` schema, validated before it is applied."""

    version: t.Literal[1]
    disable_existing_loggers: bool = True
    formatters: dict[str, FormatterSettings]
    handlers: dict[str, HandlerSettings]
    root: RootLoggerSettings
    loggers: dict[str, LoggerSettings] = {}
