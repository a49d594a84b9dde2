from __future__ import annotations

import pydantic as p
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from brainburst.model import DeploymentEnvironment

from .base import BaseSecrets
from .source import YAMLSecretsSource


class DatabaseSecrets(BaseSecrets):
    username: p.Secret[str] | None = None
    password: p.Secret[str] | None = None


class AuthSecrets(BaseSecrets):
    # key shared with the account service that mints bearer tokens
    jwt: p.Secret[str]


class Secrets(BaseSecrets):
    """Credentials, read from ``secrets.yaml`` in the environment's config directory."""

    root: p.AnyUrl
    env: DeploymentEnvironment

    auth: AuthSecrets | None = None
    database: DatabaseSecrets = DatabaseSecrets()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, YAMLSecretsSource(settings_cls)
