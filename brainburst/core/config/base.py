import typing as t

from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import PydanticBaseSettingsSource, SettingsConfigDict


class _Section(PydanticBaseSettings):
    """One section of the configuration tree.

    Dumps by alias, so keys such as ``()`` and ``class`` reach
    ``logging.config.dictConfig`` intact. Accepts the section as a positional
    dict, which is how injected configuration is converted with ``di.as_``.
    A section is built only from what it is given; environment variables
    are never consulted.
    """

    model_config = SettingsConfigDict(serialize_by_alias=True)

    def __init__(self, cf: t.Mapping[str, t.Any] | None = None, /, **kwargs: t.Any):
        super().__init__(**{**(cf or {}), **kwargs})

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


class BaseSettings(_Section): ...


class BaseSecrets(_Section): ...
