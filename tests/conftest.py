from datetime import datetime, timezone

import pytest

from calfeed import create_app
from calfeed.config import FeedConfig
from calfeed.feed_service import FeedService
from calfeed.sources.memory_store import InMemoryRecordStore

FROZEN_NOW = datetime(2025, 3, 1, 12, 30, 0, tzinfo=timezone.utc)


def make_event(id="evt1", **overrides):
    """Upstream event document with sensible defaults."""
    doc = {
        "id": id,
        "title": "Community Forum",
        "status": "Approved",
        "isPublic": True,
        "startTime": "2025-01-15T14:00:00-05:00",
    }
    doc.update(overrides)
    return doc


def make_meeting(id="mtg1", **overrides):
    """Upstream meeting document with sensible defaults."""
    doc = {
        "id": id,
        "title": "Board Sync",
        "date": "2025-02-10",
        "startTime": "2025-02-10T18:00:00-05:00",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def config(tmp_path):
    return FeedConfig(data_dir=tmp_path / "data", log_dir=tmp_path / "logs")


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def service(store, config):
    return FeedService(store, config=config, clock=lambda: FROZEN_NOW)


@pytest.fixture
def app(store, config):
    """Create and configure a Flask app for testing."""
    app = create_app(config=config, store=store, clock=lambda: FROZEN_NOW)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
