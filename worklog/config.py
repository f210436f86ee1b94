"""Run configuration for activity collection.

Configuration is read once at startup and passed explicitly to the
aggregator; nothing reads the environment after :meth:`WorklogConfig.from_env`
returns.

Usage
-----
>>> import os
>>> os.environ.update(
...     {
...         "WORKLOG_GITHUB_TOKEN": "ghp_example",
...         "WORKLOG_GITHUB_USERNAME": "octocat",
...         "WORKLOG_REPOSITORIES": "octo/reef, octo/kelp",
...     }
... )
>>> config = WorklogConfig.from_env()
>>> [repo.slug for repo in config.repositories]
['octo/reef', 'octo/kelp']

"""

from __future__ import annotations

import dataclasses as dc
import os

from worklog.common.slug import split_csv
from worklog.errors import WorklogConfigError
from worklog.github.client import GitHubRESTConfig
from worklog.github.models import Identity, RepositoryIdentifier

_DEFAULT_MAX_CONCURRENCY = 4
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(env_var: str, *, default: bool) -> bool:
    raw = os.environ.get(env_var, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise WorklogConfigError.invalid_value(
        env_var, raw, "Must be one of true/false, yes/no, on/off, 1/0"
    )


def _parse_positive_int(env_var: str, default: int) -> int:
    raw = os.environ.get(env_var, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise WorklogConfigError.invalid_value(
            env_var, raw, "Must be a positive integer"
        ) from exc
    if value < 1:
        raise WorklogConfigError.invalid_value(
            env_var, raw, "Must be a positive integer"
        )
    return value


def _parse_repositories(raw: str) -> tuple[RepositoryIdentifier, ...]:
    repositories: list[RepositoryIdentifier] = []
    for slug in split_csv(raw):
        try:
            repositories.append(RepositoryIdentifier.from_slug(slug))
        except ValueError as exc:
            raise WorklogConfigError.invalid_value(
                "WORKLOG_REPOSITORIES", slug, "Entries must be 'owner/name'"
            ) from exc
    return tuple(repositories)


@dc.dataclass(frozen=True, slots=True)
class WorklogConfig:
    """Immutable settings for one activity collection run.

    Attributes
    ----------
    github
        REST client settings, including the access token.
    identity
        Logins and commit emails attributed to the user.
    repositories
        Repositories to scan, in output order.
    include_reviews
        Whether to fetch pull request reviews. Default is ``True``.
    max_concurrency
        Maximum repositories fetched at once. Default is 4.

    """

    github: GitHubRESTConfig
    identity: Identity
    repositories: tuple[RepositoryIdentifier, ...]
    include_reviews: bool = True
    max_concurrency: int = _DEFAULT_MAX_CONCURRENCY

    @classmethod
    def from_env(cls) -> WorklogConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``WORKLOG_GITHUB_TOKEN``: Required GitHub access token.
        - ``WORKLOG_GITHUB_USERNAME``: Comma-separated GitHub logins.
        - ``WORKLOG_AUTHOR_EMAILS``: Comma-separated commit author emails.
          At least one login or email is required.
        - ``WORKLOG_REPOSITORIES``: Required comma-separated ``owner/name``
          list.
        - ``WORKLOG_INCLUDE_REVIEWS``: Optional boolean, default ``true``.
        - ``WORKLOG_MAX_CONCURRENCY``: Optional positive integer, default 4.

        Raises
        ------
        GitHubConfigError
            If the GitHub token is missing.
        WorklogConfigError
            If identity or repositories are missing, or a value is invalid.

        """
        github = GitHubRESTConfig.from_env()

        identity = Identity.build(
            logins=split_csv(os.environ.get("WORKLOG_GITHUB_USERNAME", "")),
            emails=split_csv(os.environ.get("WORKLOG_AUTHOR_EMAILS", "")),
        )
        if not identity.logins and not identity.emails:
            raise WorklogConfigError.missing_identity()

        repositories = _parse_repositories(
            os.environ.get("WORKLOG_REPOSITORIES", "")
        )
        if not repositories:
            raise WorklogConfigError.missing("WORKLOG_REPOSITORIES")

        return cls(
            github=github,
            identity=identity,
            repositories=repositories,
            include_reviews=_parse_bool("WORKLOG_INCLUDE_REVIEWS", default=True),
            max_concurrency=_parse_positive_int(
                "WORKLOG_MAX_CONCURRENCY", _DEFAULT_MAX_CONCURRENCY
            ),
        )
