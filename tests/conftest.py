"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import datetime as dt

import pytest

from tests.helpers.github_payloads import FakeGitHubClient
from worklog.github.models import Identity, RepositoryIdentifier
from worklog.window import TimeWindow

TARGET_DATE = dt.date(2024, 3, 1)


@pytest.fixture
def utc_window() -> TimeWindow:
    """Provide the window for 2024-03-01 at UTC+0."""
    return TimeWindow.for_date(TARGET_DATE, 0)


@pytest.fixture
def identity() -> Identity:
    """Provide an identity with one login and one commit email."""
    return Identity.build(logins=("octocat",), emails=("octocat@example.com",))


@pytest.fixture
def reef() -> RepositoryIdentifier:
    """Provide the default repository used across tests."""
    return RepositoryIdentifier(owner="octo", name="reef")


@pytest.fixture
def fake_github() -> FakeGitHubClient:
    """Provide an empty in-memory GitHub client."""
    return FakeGitHubClient()


@pytest.fixture(autouse=True)
def _quiet_logging_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests from reconfiguring the global femtologging handlers."""
    monkeypatch.setattr("worklog.logging.basicConfig", lambda **_: None)
