# Backend/app/deps/feeds.py
"""
FastAPI dependencies that hand adapters their collaborators.

The application creates the shared HTTP client and resolves the credential
config at startup and parks both on ``app.state``. When the app runs
without its startup hook (bare ASGI transport in tests) they are created
lazily on first use.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
from fastapi import Depends
from starlette.requests import Request

from app.config import FeedsConfig, Settings, load_feeds_config, settings as app_settings


def get_settings() -> Settings:
    return app_settings


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.UPSTREAM_TIMEOUT_S),
        headers={"User-Agent": settings.UPSTREAM_USER_AGENT},
        follow_redirects=True,
    )


def get_feeds_config(request: Request) -> FeedsConfig:
    config = getattr(request.app.state, "feeds_config", None)
    if config is None:
        config = load_feeds_config(app_settings)
        request.app.state.feeds_config = config
    return config


def get_http_client(request: Request) -> httpx.AsyncClient:
    client = getattr(request.app.state, "http_client", None)
    if client is None or client.is_closed:
        client = build_http_client(app_settings)
        request.app.state.http_client = client
    return client


def require_credentials(source: str) -> Callable[..., Any]:
    """Dependency factory: the credential block for ``source`` or a CredentialsError."""

    def _dependency(config: FeedsConfig = Depends(get_feeds_config)) -> Any:
        return config.require(source)

    _dependency.__name__ = f"require_{source}_credentials"
    return _dependency
