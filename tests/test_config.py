"""Tests for configuration."""

import os
from pathlib import Path

import pytest

from calfeed.config import FeedConfig
from calfeed.exceptions import ConfigurationError

ENV_VARS = [
    "CALFEED_DATA_DIR",
    "CALFEED_FETCH_WORKERS",
    "CALFEED_ORG_NAME",
    "CALFEED_ORG_SHORT_NAME",
    "CALFEED_ORG_DOMAIN",
    "CALFEED_CALENDAR_COLOR",
    "LOG_DIR",
    "LOG_FILENAME",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory so no stray .env is picked up."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_feed_config_defaults():
    """Test FeedConfig default values."""
    config = FeedConfig()
    assert config.data_dir == Path("data")
    assert config.fetch_workers == 2
    assert config.org_short_name == "BWCC"
    assert config.org_domain == "bwcc.org"
    assert config.calendar_color == "#FFA500"
    assert config.log_filename == "calfeed.log"


def test_feed_config_from_env_all_vars(monkeypatch):
    """Test loading all config values from environment."""
    monkeypatch.setenv("CALFEED_DATA_DIR", "/srv/calfeed")
    monkeypatch.setenv("CALFEED_FETCH_WORKERS", "4")
    monkeypatch.setenv("CALFEED_ORG_NAME", "Example Org")
    monkeypatch.setenv("CALFEED_ORG_SHORT_NAME", "EX")
    monkeypatch.setenv("CALFEED_ORG_DOMAIN", "example.org")
    monkeypatch.setenv("CALFEED_CALENDAR_COLOR", "#336699")
    monkeypatch.setenv("LOG_DIR", "/var/log/calfeed")
    monkeypatch.setenv("LOG_FILENAME", "feed.log")

    config = FeedConfig.from_env()
    assert config.data_dir == Path("/srv/calfeed")
    assert config.fetch_workers == 4
    assert config.org_name == "Example Org"
    assert config.org_short_name == "EX"
    assert config.org_domain == "example.org"
    assert config.calendar_color == "#336699"
    assert config.log_dir == Path("/var/log/calfeed")
    assert config.log_filename == "feed.log"


def test_feed_config_from_env_file(tmp_path):
    """Test that from_env tolerates a .env file in the working directory."""
    (tmp_path / ".env").write_text("CALFEED_CALENDAR_COLOR=#000000\n")

    config = FeedConfig.from_env()
    # Whether the file is found depends on python-dotenv's search path
    assert config.calendar_color in ("#000000", "#FFA500")
    os.environ.pop("CALFEED_CALENDAR_COLOR", None)


def test_invalid_worker_count_keeps_default(monkeypatch):
    monkeypatch.setenv("CALFEED_FETCH_WORKERS", "many")
    assert FeedConfig.from_env().fetch_workers == 2


def test_zero_workers_rejected(monkeypatch):
    monkeypatch.setenv("CALFEED_FETCH_WORKERS", "0")
    with pytest.raises(ConfigurationError):
        FeedConfig.from_env()


def test_blank_domain_rejected(monkeypatch):
    monkeypatch.setenv("CALFEED_ORG_DOMAIN", "   ")
    with pytest.raises(ConfigurationError):
        FeedConfig.from_env()


def test_identity_fields_are_stripped():
    assert FeedConfig(org_domain=" example.org ").org_domain == "example.org"
