"""Behavioural tests for the daily activity summary pipeline."""

from __future__ import annotations

import asyncio
import typing as typ

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from tests.helpers import github_payloads as gp
from worklog.aggregation import ActivityAggregator
from worklog.github.errors import GitHubAPIError
from worklog.github.models import Identity, RepositoryIdentifier
from worklog.summary import MockActivitySummarizer, summarize_activity
from worklog.window import resolve_window

if typ.TYPE_CHECKING:
    from worklog.aggregation import ActivityReport

scenarios("../daily_summary.feature")


T = typ.TypeVar("T")


def run_async(coro: typ.Coroutine[typ.Any, typ.Any, T]) -> T:
    """Run async coroutines in sync BDD step functions."""
    return asyncio.run(coro)


class SummaryContext(typ.TypedDict, total=False):
    """Shared state used by daily summary steps."""

    client: gp.FakeGitHubClient
    identity: Identity
    repositories: list[RepositoryIdentifier]
    summarizer: MockActivitySummarizer
    report: ActivityReport
    summary: str


@pytest.fixture
def summary_context() -> SummaryContext:
    """Provide fresh scenario state."""
    return {
        "client": gp.FakeGitHubClient(),
        "summarizer": MockActivitySummarizer(),
    }


@given(parsers.parse('the user "{login}" tracks repositories "{slugs}"'))
def user_tracks_repositories(
    summary_context: SummaryContext, login: str, slugs: str
) -> None:
    """Configure the identity and repository list."""
    summary_context["identity"] = Identity.build(logins=(login,))
    summary_context["repositories"] = [
        RepositoryIdentifier.from_slug(slug) for slug in slugs.split(",")
    ]


@given(parsers.parse('"{slug}" has a commit "{message}" at "{timestamp}"'))
def repository_has_commit(
    summary_context: SummaryContext, slug: str, message: str, timestamp: str
) -> None:
    """Add a commit authored by the user."""
    commits = summary_context["client"].commits.setdefault(slug, [])
    commits.append(gp.commit(f"sha{len(commits)}", message, date=timestamp))


@given(
    parsers.parse(
        '"{slug}" has a pull request #{number:d} "{title}" opened at "{timestamp}"'
    )
)
def repository_has_pull_request(
    summary_context: SummaryContext,
    slug: str,
    number: int,
    title: str,
    timestamp: str,
) -> None:
    """Add a pull request opened by the user."""
    summary_context["client"].pulls.setdefault(slug, []).append(
        gp.pull(number, title, created_at=timestamp)
    )


@given(
    parsers.parse(
        '"{slug}" has an open pull request #{number:d} "{title}" by "{login}"'
    )
)
def repository_has_foreign_pull_request(
    summary_context: SummaryContext,
    slug: str,
    number: int,
    title: str,
    login: str,
) -> None:
    """Add an older open pull request by someone else."""
    summary_context["client"].pulls.setdefault(slug, []).append(
        gp.pull(number, title, created_at="2024-01-01T00:00:00Z", login=login)
    )


@given(
    parsers.parse(
        'reviews for "{slug}" pull request #{number:d} fail with HTTP {status:d}'
    )
)
def reviews_fail(
    summary_context: SummaryContext, slug: str, number: int, status: int
) -> None:
    """Make one review listing fail."""
    summary_context["client"].errors[(slug, f"reviews:{number}")] = (
        GitHubAPIError.http_error(status, f"/repos/{slug}/pulls/{number}/reviews")
    )


@when(
    parsers.parse('activity for "{date}" at offset {offset:d} is summarized')
)
def summarize_day(summary_context: SummaryContext, date: str, offset: int) -> None:
    """Collect and summarize the configured repositories."""
    window = resolve_window(date, offset)
    aggregator = ActivityAggregator(
        summary_context["client"], summary_context["identity"], window
    )

    async def _run() -> None:
        report = await aggregator.collect(summary_context["repositories"])
        summary_context["report"] = report
        summary_context["summary"] = await summarize_activity(
            report.records,
            target_date=window.target_date,
            summarizer=summary_context["summarizer"],
        )

    run_async(_run())


@then("the activity messages are:")
def activity_messages_are(
    summary_context: SummaryContext, datatable: list[list[str]]
) -> None:
    """Compare collected messages with the table, in order."""
    expected = [row[0].strip() for row in datatable[1:]]
    actual = [record.message for record in summary_context["report"].records]
    assert actual == expected


@then(parsers.parse('the summary is "{text}"'))
def summary_is(summary_context: SummaryContext, text: str) -> None:
    """Check the final summary text."""
    assert summary_context["summary"] == text


@then(parsers.parse('{count:d} fetch failure is reported for "{slug}"'))
def fetch_failures_reported(
    summary_context: SummaryContext, count: int, slug: str
) -> None:
    """Check the failures recorded for one repository."""
    failures = [
        f for f in summary_context["report"].failures if f.repository == slug
    ]
    assert len(failures) == count


@then("no activity is collected")
def no_activity_collected(summary_context: SummaryContext) -> None:
    """The report holds no records."""
    assert summary_context["report"].is_empty


@then("the summarizer was not called")
def summarizer_not_called(summary_context: SummaryContext) -> None:
    """Empty days never reach the backend."""
    assert summary_context["summarizer"].calls == []
