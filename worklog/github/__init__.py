"""GitHub REST client, activity fetchers, and fetch observability."""

from __future__ import annotations

from .client import GitHubActivityClient, GitHubRESTClient, GitHubRESTConfig
from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubFetchError,
    GitHubResponseShapeError,
)
from .fetchers import (
    FetchContext,
    iter_commit_records,
    iter_pull_request_records,
    iter_review_records,
)
from .models import (
    ActivityKind,
    ActivityRecord,
    FetchFailure,
    Identity,
    RepositoryIdentifier,
)
from .observability import ErrorCategory, FetchEventLogger, categorize_error

__all__ = [
    "ActivityKind",
    "ActivityRecord",
    "ErrorCategory",
    "FetchContext",
    "FetchEventLogger",
    "FetchFailure",
    "GitHubAPIError",
    "GitHubActivityClient",
    "GitHubConfigError",
    "GitHubFetchError",
    "GitHubRESTClient",
    "GitHubRESTConfig",
    "GitHubResponseShapeError",
    "Identity",
    "RepositoryIdentifier",
    "categorize_error",
    "iter_commit_records",
    "iter_pull_request_records",
    "iter_review_records",
]
