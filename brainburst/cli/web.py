from __future__ import annotations

import os

import uvicorn

import brainburst.lib.cli as click
from brainburst.core import BootConfiguration, di
from brainburst.core.config import LoggingSettings, WebSettings

BOOT_ENV_VAR = "BRAINBURST_BOOT"


@click.group("web")
def web():
    """Run the HTTP API."""


@web.command("serve")
@click.option("--reload", is_flag=True, default=False, help="restart when source files change")
@di.inject
def serve(
    reload: bool,
    boot_cf: BootConfiguration = di.Provide["_boot_config"],
    logging_cf: LoggingSettings = di.Provide["config.logging", di.as_(LoggingSettings)],  # noqa: B008
    web_cf: WebSettings = di.Provide["config.web", di.as_(WebSettings)],  # noqa: B008
):
    """Serve the assignment progress API.

    Runs a single worker process: per-student write serialization is held in
    process memory, and the version check on each record is what guards
    writes across processes.
    """
    backend = web_cf.brainburst.backend
    # uvicorn builds the app in a fresh interpreter when reloading; it boots from this
    os.environ[BOOT_ENV_VAR] = boot_cf.model_dump_json()
    uvicorn.run(
        "brainburst.web.brainburst.main:create_app",
        factory=True,
        reload=reload,
        host=str(backend.host),
        port=backend.port,
        log_config=logging_cf.model_dump(),
    )
