"""Aggregate activity records across the configured repositories.

The aggregator runs the commit, pull request, and review fetchers for each
repository and concatenates their output into one ordered sequence:
repositories in configured order, then commits, pull requests, and reviews
within each repository. Fetch failures never abort the run; each failing
fetcher contributes no records and one :class:`FetchFailure` to the report.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import typing as typ

from worklog.common.time import utcnow
from worklog.github.errors import GitHubFetchError
from worklog.github.fetchers import (
    FetchContext,
    iter_commit_records,
    iter_pull_request_records,
    iter_review_records,
)
from worklog.github.models import ActivityKind, ActivityRecord, FetchFailure
from worklog.github.observability import FetchEventLogger, categorize_error

if typ.TYPE_CHECKING:
    from worklog.github.client import GitHubActivityClient
    from worklog.github.models import Identity, RepositoryIdentifier
    from worklog.window import TimeWindow

ProgressCallback: typ.TypeAlias = cabc.Callable[[str], None]

_KIND_LABELS: dict[ActivityKind, str] = {
    ActivityKind.COMMIT: "commits",
    ActivityKind.PULL_REQUEST_OPENED: "pull requests",
    ActivityKind.PULL_REQUEST_REVIEWED: "reviews",
}


@dc.dataclass(frozen=True, slots=True)
class ActivityReport:
    """Ordered records and failures from one collection run."""

    records: tuple[ActivityRecord, ...] = ()
    failures: tuple[FetchFailure, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return whether no records were collected."""
        return not self.records

    @property
    def has_failures(self) -> bool:
        """Return whether any fetch call failed."""
        return bool(self.failures)

    def grouped(self) -> list[tuple[str, tuple[ActivityRecord, ...]]]:
        """Group records by repository, omitting repositories without records."""
        groups: dict[str, list[ActivityRecord]] = {}
        for record in self.records:
            groups.setdefault(record.repository, []).append(record)
        return [(repo, tuple(records)) for repo, records in groups.items()]


@dc.dataclass(frozen=True, slots=True)
class _StreamOutcome:
    kind: ActivityKind
    records: list[ActivityRecord]
    failure: FetchFailure | None = None


class ActivityAggregator:
    """Collect activity for many repositories with bounded concurrency.

    Parameters
    ----------
    client
        GitHub client shared by every fetcher.
    identity
        Logins and emails attributed to the user.
    window
        Target day window.
    include_reviews
        Whether to run the review fetcher.
    max_concurrency
        Maximum repositories fetched at once.
    event_logger
        Structured fetch event logger.
    on_progress
        Optional callback receiving human-readable progress lines.

    """

    def __init__(  # noqa: PLR0913
        self,
        client: GitHubActivityClient,
        identity: Identity,
        window: TimeWindow,
        *,
        include_reviews: bool = True,
        max_concurrency: int = 4,
        event_logger: FetchEventLogger | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """Store collaborators for later collection runs."""
        if max_concurrency < 1:
            msg = f"max_concurrency must be positive, got {max_concurrency}"
            raise ValueError(msg)
        self._event_logger = event_logger or FetchEventLogger()
        self._context = FetchContext(
            client=client,
            identity=identity,
            window=window,
            event_logger=self._event_logger,
        )
        self._include_reviews = include_reviews
        self._max_concurrency = max_concurrency
        self._on_progress = on_progress

    async def collect(
        self, repositories: cabc.Sequence[RepositoryIdentifier]
    ) -> ActivityReport:
        """Fetch every repository and return records in configured order."""
        semaphore = asyncio.Semaphore(self._max_concurrency)
        per_repository = await asyncio.gather(
            *(self._collect_repository(repo, semaphore) for repo in repositories)
        )

        records: list[ActivityRecord] = []
        failures: list[FetchFailure] = []
        for outcomes, skipped in per_repository:
            for outcome in outcomes:
                records.extend(outcome.records)
                if outcome.failure is not None:
                    failures.append(outcome.failure)
            failures.extend(skipped)
        return ActivityReport(records=tuple(records), failures=tuple(failures))

    def _progress(self, message: str) -> None:
        if self._on_progress is not None:
            self._on_progress(message)

    def _streams(
        self,
        repo: RepositoryIdentifier,
        skipped: list[FetchFailure],
    ) -> list[tuple[ActivityKind, cabc.AsyncIterator[ActivityRecord]]]:
        streams: list[tuple[ActivityKind, cabc.AsyncIterator[ActivityRecord]]] = [
            (ActivityKind.COMMIT, iter_commit_records(self._context, repo)),
            (
                ActivityKind.PULL_REQUEST_OPENED,
                iter_pull_request_records(self._context, repo),
            ),
        ]
        if self._include_reviews:
            streams.append(
                (
                    ActivityKind.PULL_REQUEST_REVIEWED,
                    iter_review_records(
                        self._context, repo, on_skip=skipped.append
                    ),
                )
            )
        return streams

    async def _collect_repository(
        self,
        repo: RepositoryIdentifier,
        semaphore: asyncio.Semaphore,
    ) -> tuple[list[_StreamOutcome], list[FetchFailure]]:
        async with semaphore:
            started_at = utcnow()
            self._event_logger.log_repository_started(
                repo.slug, self._context.window.start
            )
            self._progress(f"Fetching activity for {repo.slug}...")

            skipped: list[FetchFailure] = []
            outcomes = list(
                await asyncio.gather(
                    *(
                        self._drain(repo, kind, stream)
                        for kind, stream in self._streams(repo, skipped)
                    )
                )
            )

            counts = {outcome.kind: len(outcome.records) for outcome in outcomes}
            self._event_logger.log_repository_completed(
                repo.slug, counts, utcnow() - started_at
            )
            summary = ", ".join(
                f"{count} {_KIND_LABELS[kind]}" for kind, count in counts.items()
            )
            self._progress(f"  {repo.slug}: {summary}")
            return outcomes, skipped

    async def _drain(
        self,
        repo: RepositoryIdentifier,
        kind: ActivityKind,
        stream: cabc.AsyncIterator[ActivityRecord],
    ) -> _StreamOutcome:
        try:
            records = [record async for record in stream]
        except GitHubFetchError as exc:
            self._event_logger.log_stream_failed(repo.slug, kind, exc)
            self._progress(
                f"  Error fetching {_KIND_LABELS[kind]} for {repo.slug}: {exc}"
            )
            return _StreamOutcome(
                kind=kind,
                records=[],
                failure=FetchFailure(
                    repository=repo.slug,
                    kind=kind,
                    category=categorize_error(exc),
                    message=str(exc),
                ),
            )
        return _StreamOutcome(kind=kind, records=records)
