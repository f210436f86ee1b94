"""Shared fixtures for summarizer tests."""

from __future__ import annotations

import pytest

from worklog.github.models import ActivityKind, ActivityRecord


@pytest.fixture
def mixed_records() -> list[ActivityRecord]:
    """Provide one record of each kind across two repositories."""
    return [
        ActivityRecord(
            repository="octo/reef",
            kind=ActivityKind.COMMIT,
            message="Commit: Add reef index",
        ),
        ActivityRecord(
            repository="octo/reef",
            kind=ActivityKind.PULL_REQUEST_OPENED,
            message="Opened PR #42: Fix bug",
            number=42,
        ),
        ActivityRecord(
            repository="octo/kelp",
            kind=ActivityKind.PULL_REQUEST_REVIEWED,
            message="Reviewed PR #7: Add caching",
            number=7,
        ),
    ]
