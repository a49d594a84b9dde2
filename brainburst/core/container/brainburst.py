from __future__ import annotations

import types
from pathlib import Path

import pydantic as p
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Object, Provider, Resource, Singleton

import brainburst
from brainburst.model import BaseModel, DeploymentEnvironment

from ..config import Secrets, Settings
from ..di import NotReady
from ..provider import LoggingProvider, TimestampProvider, utcnow
from .auth import AuthContainer
from .progress import ProgressContainer
from .storage import StorageContainer

PROJECT_ROOT = Path(brainburst.__file__).resolve().parent.parent


class BootConfiguration(BaseModel):
    """Everything ``boot`` was called with; enough to boot an identical container in another process."""

    debug: bool
    env: DeploymentEnvironment
    config_root: p.FileUrl
    override: tuple[str, ...] = ()


class BrainBurstContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()

    debug: Provider[bool] = Singleton(bool)
    env: Provider[DeploymentEnvironment] = Singleton(DeploymentEnvironment)
    root: Provider[Path | NotReady] = Object(NotReady())
    utcnow: Provider[TimestampProvider] = Object(utcnow)

    logging: Provider[LoggingProvider] = Resource(LoggingProvider, config=config.logging, debug=debug)
    storage: Provider[StorageContainer] = Container(
        StorageContainer, config=config.storage, secrets=secrets, logging=logging, root=root
    )
    auth: Provider[AuthContainer] = Container(AuthContainer, config=config.web.brainburst.auth, secrets=secrets.auth)
    progress: Provider[ProgressContainer] = Container(ProgressContainer)

    _boot_config: Provider[BootConfiguration | NotReady] = Object(NotReady())

    @staticmethod
    def boot(
        ct: BrainBurstContainer,
        /,
        debug: bool,
        env: DeploymentEnvironment,
        config_root: p.FileUrl,
        override: tuple[str, ...] = (),
        wiring: tuple[str | types.ModuleType, ...] = (),
    ) -> None:
        """Load settings and secrets for ``env`` into ``ct``, then wire the package.

        Logging is configured here, on the first use of the ``logging`` resource.
        """
        boot_cf = BootConfiguration(debug=debug, env=env, config_root=config_root, override=override or ())
        ct.debug.override(debug)
        ct.env.override(env)
        ct.root.override(PROJECT_ROOT)

        ct.config.from_pydantic(Settings(env=env, root=config_root, override=boot_cf.override))
        ct.secrets.from_pydantic(Secrets(env=env, root=config_root))
        ct.wire(packages=["brainburst"], modules=list(wiring))

        logger = ct.logging().get_logger()
        for option in boot_cf.override:
            logger.info("configuration overridden", extra={"option": option})
        logger.debug("container booted", extra={"env": env.value, "config_root": str(config_root)})
        ct._boot_config.override(boot_cf)
