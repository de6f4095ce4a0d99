# app/config.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.logging import get_logger
from services.source_errors import CredentialsError

logger = get_logger().bind(module="config")

# Dit bestand staat in Backend/app/config.py → parent = Backend
BACKEND_ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = BACKEND_ROOT / ".env"
DEFAULT_CONFIG_FILE = BACKEND_ROOT / "config.json"
load_dotenv(ENV_FILE, override=False)


class ConfigError(RuntimeError):
    pass


class Settings(BaseSettings):
    # ---- App ----
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # ---- Credentials ----
    # Platform-managed JSON blob; wins over the local file when it has any source block.
    FEEDS_RUNTIME_CONFIG: Optional[str] = None
    FEEDS_CONFIG_FILE: str = str(DEFAULT_CONFIG_FILE)

    # ---- Upstream HTTP ----
    # None == no timeout; a stalled upstream only stalls its own request.
    UPSTREAM_TIMEOUT_S: Optional[float] = None
    UPSTREAM_USER_AGENT: str = "feeds-gateway/0.1"

    # ---- Responses ----
    CACHE_CONTROL: str = "public, max-age=300, s-maxage=600"
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # ---- Source specifics ----
    STRAVA_THUMBNAIL_URL_TEMPLATE: str = "https://d3nn82uaxijpm6.cloudfront.net/activities/{activity_id}/map-thumbnail.png"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# -------- Credential blocks --------------------------------------------------

class _CredentialBlock(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class GithubCredentials(_CredentialBlock):
    token: str


class TwitterCredentials(_CredentialBlock):
    key: str
    secret: str


class LastfmCredentials(_CredentialBlock):
    apikey: str


class GoodreadsCredentials(_CredentialBlock):
    key: str


class SetlistfmCredentials(_CredentialBlock):
    apikey: str


class StravaCredentials(_CredentialBlock):
    access_token: str
    athlete_id: Optional[int] = None


class RescuetimeCredentials(_CredentialBlock):
    key: str


class InstagramCredentials(_CredentialBlock):
    access_token: str


class FeedsConfig(BaseModel):
    """Per-source credentials, passed explicitly into every adapter."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    github: Optional[GithubCredentials] = None
    twitter: Optional[TwitterCredentials] = None
    lastfm: Optional[LastfmCredentials] = None
    goodreads: Optional[GoodreadsCredentials] = None
    setlistfm: Optional[SetlistfmCredentials] = None
    strava: Optional[StravaCredentials] = None
    rescuetime: Optional[RescuetimeCredentials] = None
    instagram: Optional[InstagramCredentials] = None

    @classmethod
    def source_names(cls) -> List[str]:
        return list(cls.model_fields.keys())

    def configured_sources(self) -> List[str]:
        return [name for name in self.source_names() if getattr(self, name) is not None]

    def missing_sources(self) -> List[str]:
        return [name for name in self.source_names() if getattr(self, name) is None]

    def require(self, source: str) -> Any:
        block = getattr(self, source, None)
        if block is None:
            raise CredentialsError(source, f"no '{source}' credentials configured")
        return block


# -------- Resolution ---------------------------------------------------------

def _parse_config_document(raw: Any, origin: str) -> FeedsConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"feeds config from {origin} must be a JSON object")
    try:
        return FeedsConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid feeds config from {origin}: {exc}") from exc


def _load_runtime_config(blob: Optional[str]) -> Optional[FeedsConfig]:
    if not blob or not blob.strip():
        return None
    try:
        raw = json.loads(blob)
    except ValueError as exc:
        raise ConfigError(f"FEEDS_RUNTIME_CONFIG is not valid JSON: {exc}") from exc
    return _parse_config_document(raw, "FEEDS_RUNTIME_CONFIG")


def _load_file_config(path: Path) -> Optional[FeedsConfig]:
    if not path.is_file():
        return None
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
    return _parse_config_document(raw, str(path))


def load_feeds_config(settings: Settings) -> FeedsConfig:
    """
    Resolve credentials: platform-managed config first, local file second.

    The runtime config only wins when it actually carries a source block,
    an empty platform config must not shadow a populated local file.
    """
    runtime = _load_runtime_config(settings.FEEDS_RUNTIME_CONFIG)
    if runtime is not None and runtime.configured_sources():
        logger.info("feeds_config_loaded", origin="runtime", sources=runtime.configured_sources())
        return runtime

    config_path = Path(settings.FEEDS_CONFIG_FILE)
    local = _load_file_config(config_path)
    if local is not None:
        logger.info("feeds_config_loaded", origin="file", path=str(config_path), sources=local.configured_sources())
        return local

    logger.warning("feeds_config_empty", path=str(config_path))
    return FeedsConfig()


def get_settings() -> Settings:
    return Settings()


settings = get_settings()
