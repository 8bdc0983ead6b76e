"""Shared pytest fixtures for the timelinize-cli test suite."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from timelinize_cli.client import TimelinizeClient


@pytest.fixture
def session() -> MagicMock:
    """A stand-in for ``requests.Session`` whose calls return a 200 JSON response."""
    fake = MagicMock()
    response = MagicMock(status_code=200)
    response.json.return_value = {"ok": True}
    fake.get.return_value = response
    fake.post.return_value = response
    return fake


@pytest.fixture
def client(session: MagicMock) -> TimelinizeClient:
    with patch("timelinize_cli.client.requests.Session", return_value=session):
        return TimelinizeClient("http://127.0.0.1:12002", "repo-123")


@pytest.fixture
def fake_client() -> MagicMock:
    """Patch the CLI's client factory; yields the mock client it hands out."""
    fake = MagicMock()
    response = MagicMock(status_code=200)
    response.json.return_value = {"results": []}
    for name in ("search_items", "search_entities", "import_files", "open_repositories",
                 "file_selector_roots", "open_repository", "data_sources", "charts"):
        getattr(fake, name).return_value = response
    with patch("timelinize_cli.cli.new_client", return_value=fake) as factory:
        fake.factory = factory
        yield fake


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMELINIZE_REPO_ID", raising=False)
    monkeypatch.delenv("TIMELINIZE_URL", raising=False)
