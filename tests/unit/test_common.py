"""Unit tests for slug and timestamp helpers."""

from __future__ import annotations

import datetime as dt

import pytest

from worklog.common.slug import parse_repo_slug, repo_slug, split_csv
from worklog.common.time import (
    format_github_datetime,
    local_utc_offset_hours,
    parse_github_datetime,
)


def test_repo_slug_formats_owner_and_name() -> None:
    """repo_slug joins owner and name with a slash."""
    assert repo_slug("octo", "reef") == "octo/reef"


@pytest.mark.parametrize(
    ("slug", "expected"),
    [
        ("octo/reef", ("octo", "reef")),
        ("  octo/reef\t", ("octo", "reef")),
        ("octo / reef", ("octo", "reef")),
    ],
)
def test_parse_repo_slug_accepts_owner_name(
    slug: str, expected: tuple[str, str]
) -> None:
    """parse_repo_slug tolerates surrounding whitespace."""
    assert parse_repo_slug(slug) == expected


@pytest.mark.parametrize("slug", ["octo", "octo/", "/reef", "a/b/c", ""])
def test_parse_repo_slug_rejects_malformed(slug: str) -> None:
    """parse_repo_slug rejects anything but exactly one owner/name pair."""
    with pytest.raises(ValueError, match="owner/name"):
        parse_repo_slug(slug)


def test_split_csv_drops_blank_entries() -> None:
    """Empty and whitespace-only entries disappear."""
    assert split_csv(" a , ,b,,") == ("a", "b")
    assert split_csv("") == ()


class TestGitHubDatetimes:
    """Tests for GitHub timestamp parsing and formatting."""

    def test_parse_zulu_suffix(self) -> None:
        """Trailing Z is read as UTC."""
        assert parse_github_datetime("2024-03-01T12:30:00Z") == dt.datetime(
            2024, 3, 1, 12, 30, tzinfo=dt.UTC
        )

    def test_parse_offset_normalises_to_utc(self) -> None:
        """Explicit offsets are converted to UTC."""
        parsed = parse_github_datetime("2024-03-01T02:00:00+02:00")
        assert parsed == dt.datetime(2024, 3, 1, 0, 0, tzinfo=dt.UTC)
        assert parsed.tzinfo is dt.UTC

    def test_parse_naive_timestamp_is_rejected(self) -> None:
        """Timestamps without a zone are refused."""
        with pytest.raises(ValueError, match="missing timezone"):
            parse_github_datetime("2024-03-01T12:30:00")

    def test_format_uses_zulu_seconds_precision(self) -> None:
        """Query parameters use second precision with a Z suffix."""
        tz = dt.timezone(dt.timedelta(hours=10))
        value = dt.datetime(2024, 3, 1, 0, 0, 0, 500, tzinfo=tz)
        assert format_github_datetime(value) == "2024-02-29T14:00:00Z"

    def test_format_naive_is_rejected(self) -> None:
        """Naive datetimes cannot be rendered for GitHub."""
        with pytest.raises(ValueError, match="timezone-aware"):
            format_github_datetime(dt.datetime(2024, 3, 1))  # noqa: DTZ001


def test_local_utc_offset_hours_is_whole_hours() -> None:
    """The system offset is reported as an integer number of hours."""
    offset = local_utc_offset_hours(dt.datetime(2024, 1, 1, tzinfo=dt.UTC))
    assert isinstance(offset, int)
    assert -12 <= offset <= 14
