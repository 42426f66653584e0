"""
Shared fixtures: a controllable clock, stub adapters, fake HTTP responses
and an app wired to an in-memory notes database.
"""
import json
from datetime import datetime, timedelta, timezone

import pytest
import requests
from fastapi.testclient import TestClient

from config.settings import Settings
from devfeed.cache import ResourceKind
from devfeed.context import build_feed_context
from devfeed.db import create_db_engine, init_db, make_session_factory
from devfeed.main import create_app


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 11, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class StubAdapter:
    """Adapter returning queued outcomes; an exception instance is raised."""

    def __init__(self, name, *outcomes):
        self.name = name
        self.outcomes = list(outcomes)
        self.calls = 0

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def fetch(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def make_response(status_code=200, body=b"", url="https://upstream.test/"):
    """Build a real requests.Response without the network."""
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.url = url
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Stands in for requests.Session, replaying queued responses or errors."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def get(self, url, headers=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite://",
        daily_note_limit=3,
        coalesce_refreshes=False,
        _env_file=None,
    )


@pytest.fixture
def stub_adapters():
    return {
        ResourceKind.HACKATHONS: StubAdapter("hackathons"),
        ResourceKind.NEWS: StubAdapter("news"),
        ResourceKind.CONTESTS: StubAdapter("contests"),
    }


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return make_session_factory(engine)


@pytest.fixture
def client(test_settings, stub_adapters, clock, session_factory):
    feeds = build_feed_context(test_settings, adapters=stub_adapters, clock=clock)
    app = create_app(test_settings, feeds=feeds, session_factory=session_factory)
    return TestClient(app)
