"""Activity fetchers turning GitHub REST listings into activity records.

Each fetcher is an async generator making one pass over a single page of
upstream results. Upstream author and date filters are treated as best-effort:
every record is re-checked against the configured identity and against
:meth:`worklog.window.TimeWindow.contains` before it is yielded.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from worklog.common.time import parse_github_datetime

from .errors import GitHubFetchError, GitHubResponseShapeError
from .models import ActivityKind, ActivityRecord, FetchFailure
from .observability import FetchEventLogger, categorize_error

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from worklog.window import TimeWindow

    from .client import GitHubActivityClient
    from .models import (
        CommitPayload,
        Identity,
        PullRequestPayload,
        RepositoryIdentifier,
        ReviewPayload,
    )

    SkipCallback: typ.TypeAlias = cabc.Callable[[FetchFailure], None]


@dataclasses.dataclass(frozen=True, slots=True)
class FetchContext:
    """Collaborators shared by every fetcher during one run."""

    client: GitHubActivityClient
    identity: Identity
    window: TimeWindow
    event_logger: FetchEventLogger = dataclasses.field(
        default_factory=FetchEventLogger
    )


def _parse_timestamp(raw: str | None, *, field: str) -> dt.datetime | None:
    if raw is None:
        return None
    try:
        return parse_github_datetime(raw)
    except ValueError as exc:
        raise GitHubResponseShapeError.undecodable(field, str(exc)) from exc


def _subject_line(message: str) -> str:
    lines = message.strip().splitlines()
    return lines[0].strip() if lines else ""


def _commit_timestamp(commit: CommitPayload) -> dt.datetime | None:
    actor = commit.commit.author or commit.commit.committer
    raw = actor.date if actor else None
    return _parse_timestamp(raw, field="commit.author.date")


def _commit_author(commit: CommitPayload) -> tuple[str | None, str | None]:
    login = commit.author.login if commit.author else None
    email = commit.commit.author.email if commit.commit.author else None
    return login, email


async def _list_identity_commits(
    context: FetchContext, repo: RepositoryIdentifier
) -> list[CommitPayload]:
    seen: set[str] = set()
    commits: list[CommitPayload] = []
    for author in context.identity.commit_author_filters:
        page = await context.client.list_commits(
            repo,
            author=author,
            since=context.window.start,
            until=context.window.end,
        )
        for commit in page:
            if commit.sha not in seen:
                seen.add(commit.sha)
                commits.append(commit)
    return commits


async def iter_commit_records(
    context: FetchContext, repo: RepositoryIdentifier
) -> typ.AsyncIterator[ActivityRecord]:
    """Yield one record per commit authored by the identity on the target day.

    Commits are listed once per configured login and email, then merged by
    SHA in first-seen order.
    """
    for commit in await _list_identity_commits(context, repo):
        login, email = _commit_author(commit)
        if not context.identity.matches_commit(login, email):
            continue
        occurred_at = _commit_timestamp(commit)
        if occurred_at is None or not context.window.contains(occurred_at):
            continue
        yield ActivityRecord(
            repository=repo.slug,
            kind=ActivityKind.COMMIT,
            message=f"Commit: {_subject_line(commit.commit.message)}",
            reference_url=commit.html_url,
            occurred_at=occurred_at,
        )


def _opened_by_identity(
    context: FetchContext, pull: PullRequestPayload
) -> dt.datetime | None:
    login = pull.user.login if pull.user else None
    if not context.identity.matches_login(login):
        return None
    created_at = _parse_timestamp(pull.created_at, field="pull.created_at")
    if created_at is None or not context.window.contains(created_at):
        return None
    return created_at


async def iter_pull_request_records(
    context: FetchContext, repo: RepositoryIdentifier
) -> typ.AsyncIterator[ActivityRecord]:
    """Yield one record per pull request the identity opened on the target day."""
    pulls = await context.client.list_pull_requests(repo, state="all")
    for pull in pulls:
        created_at = _opened_by_identity(context, pull)
        if created_at is None:
            continue
        yield ActivityRecord(
            repository=repo.slug,
            kind=ActivityKind.PULL_REQUEST_OPENED,
            message=f"Opened PR #{pull.number}: {pull.title}",
            reference_url=pull.html_url,
            number=pull.number,
            occurred_at=created_at,
        )


def _matching_reviews(
    context: FetchContext, reviews: list[ReviewPayload]
) -> typ.Iterator[tuple[ReviewPayload, dt.datetime]]:
    for review in reviews:
        login = review.user.login if review.user else None
        if not context.identity.matches_login(login):
            continue
        submitted_at = _parse_timestamp(
            review.submitted_at, field="review.submitted_at"
        )
        if submitted_at is not None and context.window.contains(submitted_at):
            yield review, submitted_at


async def iter_review_records(
    context: FetchContext,
    repo: RepositoryIdentifier,
    *,
    on_skip: SkipCallback | None = None,
) -> typ.AsyncIterator[ActivityRecord]:
    """Yield one record per pull request the identity reviewed on the target day.

    Reviews are read per open pull request. A pull request whose reviews
    cannot be fetched is logged, reported through ``on_skip``, and skipped;
    failure to list the open pull requests themselves propagates.
    """
    pulls = await context.client.list_pull_requests(repo, state="open")
    for pull in pulls:
        try:
            reviews = await context.client.list_reviews(repo, pull.number)
            matches = list(_matching_reviews(context, reviews))
        except GitHubFetchError as exc:
            context.event_logger.log_review_skipped(repo.slug, pull.number, exc)
            if on_skip is not None:
                on_skip(
                    FetchFailure(
                        repository=repo.slug,
                        kind=ActivityKind.PULL_REQUEST_REVIEWED,
                        category=categorize_error(exc),
                        message=str(exc),
                        pull_request=pull.number,
                    )
                )
            continue

        if not matches:
            continue
        # Several reviews on one pull request collapse into a single record.
        review, submitted_at = matches[0]
        yield ActivityRecord(
            repository=repo.slug,
            kind=ActivityKind.PULL_REQUEST_REVIEWED,
            message=f"Reviewed PR #{pull.number}: {pull.title}",
            reference_url=review.html_url or pull.html_url,
            number=pull.number,
            occurred_at=submitted_at,
        )
