from __future__ import annotations

import json

import pytest

from app.config import (
    ConfigError,
    FeedsConfig,
    GithubCredentials,
    Settings,
    load_feeds_config,
)
from services.source_errors import CredentialsError


def _settings(tmp_path, runtime=None, file_doc=None) -> Settings:
    config_file = tmp_path / "config.json"
    if file_doc is not None:
        config_file.write_text(json.dumps(file_doc), encoding="utf-8")
    return Settings(
        FEEDS_RUNTIME_CONFIG=json.dumps(runtime) if isinstance(runtime, dict) else runtime,
        FEEDS_CONFIG_FILE=str(config_file),
    )


def test_runtime_config_wins_over_local_file(tmp_path):
    settings = _settings(
        tmp_path,
        runtime={"github": {"token": "remote"}},
        file_doc={"github": {"token": "local"}, "lastfm": {"apikey": "k"}},
    )
    config = load_feeds_config(settings)
    assert config.github == GithubCredentials(token="remote")
    assert config.lastfm is None


def test_empty_runtime_config_falls_back_to_file(tmp_path):
    settings = _settings(tmp_path, runtime={}, file_doc={"github": {"token": "local"}})
    assert load_feeds_config(settings).github.token == "local"


def test_runtime_config_with_only_unknown_keys_falls_back(tmp_path):
    settings = _settings(tmp_path, runtime={"firebase": {"projectId": "x"}}, file_doc={"lastfm": {"apikey": "k"}})
    assert load_feeds_config(settings).lastfm.apikey == "k"


def test_no_config_anywhere_is_empty(tmp_path):
    config = load_feeds_config(_settings(tmp_path))
    assert config.configured_sources() == []
    assert "github" in config.missing_sources()


def test_invalid_runtime_json_is_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_feeds_config(_settings(tmp_path, runtime="{not json"))


def test_invalid_block_shape_is_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_feeds_config(_settings(tmp_path, file_doc={"twitter": {"key": "only-key"}}))


def test_require_returns_block_or_raises_credentials_error():
    config = FeedsConfig.model_validate({"strava": {"access_token": "t", "athlete_id": 12}})
    assert config.require("strava").athlete_id == 12

    with pytest.raises(CredentialsError) as excinfo:
        config.require("rescuetime")
    assert excinfo.value.kind == "credentials_missing"
    assert excinfo.value.status_code == 500
    assert excinfo.value.source == "rescuetime"


def test_source_names_cover_every_credential_block():
    assert set(FeedsConfig.source_names()) == {
        "github", "twitter", "lastfm", "goodreads", "setlistfm", "strava", "rescuetime", "instagram",
    }
