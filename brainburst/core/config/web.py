from __future__ import annotations

import typing as t

import annotated_types as ant
import pydantic as p

from .base import BaseSettings


class WebSettings(BaseSettings):
    brainburst: BrainBurstWebSettings


class ServeSettings(BaseSettings):
    host: p.IPvAnyAddress
    port: t.Annotated[int, ant.Gt(0), ant.Le(65535)]


class AuthSettings(BaseSettings):
    """Bearer token verification settings."""

    jwt_algorithm: str = "HS256"
    leeway_seconds: t.Annotated[int, ant.Ge(0)] = 0


class BrainBurstWebSettings(BaseSettings):
    """Settings for the assignment progress API."""

    backend: ServeSettings
    auth: AuthSettings = AuthSettings()
