"""pydantic-settings sources over the ``config/`` directory.

Every top-level settings field is a YAML file named after it.
``config/<field>.yaml`` applies to local runs; an environment may replace
the file wholesale with ``config/env.d/<env>/<field>.yaml``.
"""

import functools
import typing as t
from pathlib import Path

import pydantic as p
import yaml
from pydantic_settings import PydanticBaseSettingsSource, SettingsError

from brainburst.lib.util import parse_override
from brainburst.model import DeploymentEnvironment

# provided by the caller, never read from files
SKIP_KEYS: t.Final[frozenset[str]] = frozenset({"env", "root", "override"})


def env_path(root: p.AnyUrl, env: DeploymentEnvironment) -> Path:
    if root.scheme != "file" or root.path is None:
        raise SettingsError(f"config root {root} is not a local directory")
    if env is DeploymentEnvironment.Local:
        return Path(root.path)
    return Path(root.path) / "env.d" / env.value


def load_yaml(path: Path) -> t.Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf8"))
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"could not load {path}") from e


class FieldSource(PydanticBaseSettingsSource):
    """A source that looks each top-level field up by name.

    ``current_state`` holds what earlier sources produced, which always
    includes the constructor's ``root`` and ``env``.
    """

    def lookup(self, field_name: str) -> t.Any | None:
        raise NotImplementedError

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        return self.lookup(field_name), field_name, False

    def __call__(self) -> dict[str, t.Any]:
        data: dict[str, t.Any] = {}
        for field_name in self.settings_cls.model_fields:
            if field_name in SKIP_KEYS:
                continue
            value = self.lookup(field_name)
            if value is not None:
                data[field_name] = value
        return data

    @property
    def root(self) -> p.AnyUrl:
        return self.current_state["root"]

    @property
    def env(self) -> DeploymentEnvironment:
        return self.current_state["env"]


class OverrideSettingsSource(FieldSource):
    """``-o storage.persistent.database.database=x.db`` options from the command line.

    Placed ahead of the YAML source, so its partial sections are deep-merged
    over the file contents.
    """

    @functools.cached_property
    def options(self) -> dict[str, t.Any]:
        return parse_override(self.current_state.get("override", ()))

    def lookup(self, field_name: str) -> t.Any | None:
        return self.options.get(field_name)


class YAMLCascadingSettingsSource(FieldSource):
    def lookup(self, field_name: str) -> t.Any | None:
        for directory in (env_path(self.root, self.env), env_path(self.root, DeploymentEnvironment.Local)):
            path = directory / f"{field_name}.yaml"
            if path.exists():
                return load_yaml(path)
        return None


class YAMLSecretsSource(FieldSource):
    """Reads ``secrets.yaml`` from the environment directory, if there is one."""

    @functools.cached_property
    def secrets(self) -> dict[str, t.Any]:
        path = env_path(self.root, self.env) / "secrets.yaml"
        if not path.exists():
            return {}
        return load_yaml(path) or {}

    def lookup(self, field_name: str) -> t.Any | None:
        return self.secrets.get(field_name)
