"""Observability primitives for GitHub activity fetching.

Provides structured logging and error categorization for per-repository fetch
runs. Events are emitted as ``[event] key=value`` lines suitable for parsing
by log aggregators.
"""

from __future__ import annotations

import enum
import typing as typ

from worklog.logging import get_logger, log_info, log_warning

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError

if typ.TYPE_CHECKING:
    import datetime as dt

    from .models import ActivityKind

logger = get_logger(__name__)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500
_HTTP_RATE_LIMITED = 429


class FetchEventType(enum.StrEnum):
    """Structured log event types for fetch observability."""

    REPOSITORY_STARTED = "fetch.repository.started"
    REPOSITORY_COMPLETED = "fetch.repository.completed"
    STREAM_FAILED = "fetch.stream.failed"
    REVIEW_SKIPPED = "fetch.review.skipped"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in logs and run reports."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for logging and failure reports.

    Returns:
        ErrorCategory indicating the type of failure.

    """
    # Status-less API errors are timeouts or network failures.
    if isinstance(exc, GitHubAPIError):
        if exc.status_code is None or exc.status_code == _HTTP_RATE_LIMITED:
            return ErrorCategory.TRANSIENT
        if exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD:
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class FetchEventLogger:
    """Emit structured fetch events via femtologging.

    Events are emitted at INFO level for lifecycle progress and WARNING for
    failures, which never abort a run.
    """

    def log_repository_started(
        self, repo_slug: str, window_start: dt.datetime
    ) -> None:
        """Log the start of fetching for one repository."""
        log_info(
            logger,
            "[%s] repo_slug=%s window_start=%s",
            FetchEventType.REPOSITORY_STARTED,
            repo_slug,
            window_start.isoformat(),
        )

    def log_repository_completed(
        self,
        repo_slug: str,
        counts: typ.Mapping[ActivityKind, int],
        duration: dt.timedelta,
    ) -> None:
        """Log fetch completion with per-kind record counts."""
        rendered = " ".join(f"{kind}={count}" for kind, count in counts.items())
        log_info(
            logger,
            "[%s] repo_slug=%s duration_seconds=%.3f %s total_records=%d",
            FetchEventType.REPOSITORY_COMPLETED,
            repo_slug,
            duration.total_seconds(),
            rendered,
            sum(counts.values()),
        )

    def log_stream_failed(
        self,
        repo_slug: str,
        kind: ActivityKind,
        error: BaseException,
    ) -> None:
        """Log a fetcher that failed and contributed no records."""
        log_warning(
            logger,
            "[%s] repo_slug=%s stream_kind=%s error_type=%s error_category=%s "
            "error_message=%s",
            FetchEventType.STREAM_FAILED,
            repo_slug,
            kind,
            type(error).__name__,
            categorize_error(error),
            str(error),
        )

    def log_review_skipped(
        self,
        repo_slug: str,
        number: int,
        error: BaseException,
    ) -> None:
        """Log a pull request whose reviews could not be read."""
        log_warning(
            logger,
            "[%s] repo_slug=%s pull_request=%d error_category=%s error_message=%s",
            FetchEventType.REVIEW_SKIPPED,
            repo_slug,
            number,
            categorize_error(error),
            str(error),
        )
