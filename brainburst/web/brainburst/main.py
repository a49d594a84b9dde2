"""Main entry point for the BrainBurst web application."""

import os

from fastapi import FastAPI

from brainburst.core import BootConfiguration, BrainBurstContainer

from . import errors
from .route import router


def _create_app() -> FastAPI:
    app = FastAPI(
        title="BrainBurst",
        description="Assignment progress tracking for classes",
        version="0.1.0",
    )
    errors.install(app)
    app.include_router(router)
    return app


def create_app() -> FastAPI:
    """Factory function for uvicorn.

    When started by ``brainburst web serve`` the boot configuration is passed
    through the environment and the container is booted in the worker.
    """
    boot_vars = os.getenv("BRAINBURST_BOOT")
    if boot_vars:
        boot_cf = BootConfiguration.model_validate_json(boot_vars)
        ct = BrainBurstContainer()
        BrainBurstContainer.boot(ct, **dict(boot_cf))
        ct.wire(modules=["brainburst.web.brainburst.main", "brainburst.auth.middleware"])
    return _create_app()
