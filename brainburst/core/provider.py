import datetime
import inspect
import logging
import logging.config
import typing as t

TimestampProvider = t.Callable[[], datetime.datetime]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class LoggingProvider(object):
    """Applies the ``logging`` configuration section once, at boot.

    Modules that log at import time or outside the container use
    ``logging.getLogger(__name__)`` directly; this is for code that only
    has the container at hand.
    """

    def __init__(self, config: dict[str, t.Any], debug: bool):
        logging.config.dictConfig(config)
        self.capture_warnings(debug)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """The named logger, or else the logger of the calling module."""
        if name is None:
            caller = inspect.stack()[1]
            name = caller.frame.f_globals["__name__"]
        return logging.getLogger(name)

    @staticmethod
    def capture_warnings(capture: bool) -> None:
        logging.captureWarnings(capture)
