from datetime import datetime, timedelta, timezone

import pytest

from job_radar.core.models import Job
from job_radar.core.store import JobStore
from job_radar.utils.config import Config


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_job():
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"test-{counter['n']}",
            "title": "Support Specialist",
            "company": "Acme",
            "source": "RemoteOK",
            "url": f"https://example.com/jobs/{counter['n']}",
            "description": "",
            "posted": NOW,
            "remote": False,
        }
        data.update(overrides)
        return Job(**data)

    return _make


@pytest.fixture
def days_ago():
    def _days_ago(days: float) -> datetime:
        return NOW - timedelta(days=days)

    return _days_ago


@pytest.fixture
def store(tmp_path):
    return JobStore(tmp_path / "db.json")


@pytest.fixture
def config(tmp_path, monkeypatch):
    for env_var in Config.ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)

    cfg = Config(str(tmp_path / "config.json"))
    cfg.set("storage.db_path", str(tmp_path / "db.json"))
    return cfg


class FakeResponse:
    """Stand-in for requests.Response with just what the sources read."""

    def __init__(self, status_code=200, text="", json_data=None, content=None):
        self.status_code = status_code
        self.text = text
        self._json = json_data
        self.content = content if content is not None else text.encode("utf-8")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get to return a fixed response and record URLs."""
    import requests

    def _install(response=None, exc=None):
        calls = []

        def _get(url, **kwargs):
            calls.append(url)
            if exc is not None:
                raise exc
            return response

        monkeypatch.setattr(requests, "get", _get)
        return calls

    return _install
