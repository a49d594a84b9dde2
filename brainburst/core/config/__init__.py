__all__ = [
    "AuthSettings",
    "BrainBurstWebSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "Secrets",
    "Settings",
    "StorageSettings",
    "WebSettings",
]


from .logging import LoggingSettings
from .secrets import Secrets
from .settings import Settings
from .storage import DatabaseSettings, StorageSettings
from .web import AuthSettings, BrainBurstWebSettings, WebSettings
