__all__ = [
    "BootConfiguration",
    "di",
    "BrainBurstContainer",
    "LoggingProvider",
    "Settings",
    "Secrets",
    "TimestampProvider",
]


from . import di
from .config import Secrets, Settings
from .container import BootConfiguration, BrainBurstContainer
from .provider import LoggingProvider, TimestampProvider
