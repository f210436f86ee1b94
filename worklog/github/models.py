"""Typed domain models and REST payload shapes for GitHub activity."""

from __future__ import annotations

import dataclasses
import datetime as dt  # noqa: TC003
import enum

import msgspec

from worklog.common.slug import parse_repo_slug, repo_slug


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryIdentifier:
    """A GitHub repository named by owner and name."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        """Reject empty owner or name parts."""
        if not self.owner or not self.name:
            msg = (
                "Repository owner and name must be non-empty: "
                f"{self.owner!r}/{self.name!r}"
            )
            raise ValueError(msg)

    @classmethod
    def from_slug(cls, slug: str) -> RepositoryIdentifier:
        """Parse an ``owner/name`` configuration string."""
        owner, name = parse_repo_slug(slug)
        return cls(owner=owner, name=name)

    @property
    def slug(self) -> str:
        """Return owner/name notation."""
        return repo_slug(self.owner, self.name)


@dataclasses.dataclass(frozen=True, slots=True)
class Identity:
    """Author-identifying values used to attribute activity to one user.

    Logins gate pull requests and reviews. Commits match on either the linked
    GitHub login or the commit author email, since commits pushed from an
    unlinked email carry no login.
    """

    logins: frozenset[str] = frozenset()
    emails: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls, logins: tuple[str, ...] = (), emails: tuple[str, ...] = ()
    ) -> Identity:
        """Build an identity, normalising emails to lower case."""
        return cls(
            logins=frozenset(logins),
            emails=frozenset(email.lower() for email in emails),
        )

    @property
    def commit_author_filters(self) -> tuple[str | None, ...]:
        """Return the upstream ``author`` values that cover every commit.

        GitHub filters a commit listing by one login or email per request, so
        each configured value needs its own query. ``None`` means unfiltered.
        """
        filters = (*sorted(self.logins), *sorted(self.emails))
        return filters or (None,)

    def matches_login(self, login: str | None) -> bool:
        """Return whether ``login`` belongs to this identity."""
        return login is not None and login in self.logins

    def matches_commit(self, login: str | None, email: str | None) -> bool:
        """Return whether a commit author login or email is this identity."""
        if self.matches_login(login):
            return True
        return email is not None and email.lower() in self.emails


class ActivityKind(enum.StrEnum):
    """Discriminant for activity records."""

    COMMIT = "commit"
    PULL_REQUEST_OPENED = "pull_request_opened"
    PULL_REQUEST_REVIEWED = "pull_request_reviewed"


class ActivityRecord(msgspec.Struct, kw_only=True, frozen=True):
    """One unit of attributed work in a repository.

    Attributes
    ----------
    repository
        Repository slug in ``owner/name`` format.
    kind
        Which fetcher produced the record.
    message
        Human-readable description, e.g. ``Opened PR #42: Fix bug``.
    reference_url
        Browser link to the commit, pull request, or review.
    number
        Pull request number for pull request and review records.
    occurred_at
        UTC timestamp that placed the record inside the window.

    """

    repository: str
    kind: ActivityKind
    message: str
    reference_url: str | None = None
    number: int | None = None
    occurred_at: dt.datetime | None = None


# REST payload shapes. Unknown fields are ignored by msgspec, so these list
# only what the fetchers read.


class UserPayload(msgspec.Struct):
    """Account reference embedded in GitHub payloads."""

    login: str | None = None


class GitActorPayload(msgspec.Struct):
    """Git author or committer signature inside a commit."""

    name: str | None = None
    email: str | None = None
    date: str | None = None


class GitCommitPayload(msgspec.Struct):
    """The ``commit`` object of a REST commit listing entry."""

    message: str
    author: GitActorPayload | None = None
    committer: GitActorPayload | None = None


class CommitPayload(msgspec.Struct):
    """Entry from ``GET /repos/{owner}/{repo}/commits``."""

    sha: str
    commit: GitCommitPayload
    html_url: str | None = None
    author: UserPayload | None = None
    committer: UserPayload | None = None


class PullRequestPayload(msgspec.Struct):
    """Entry from ``GET /repos/{owner}/{repo}/pulls``."""

    number: int
    title: str
    created_at: str
    html_url: str | None = None
    state: str | None = None
    user: UserPayload | None = None


class ReviewPayload(msgspec.Struct):
    """Entry from ``GET /repos/{owner}/{repo}/pulls/{number}/reviews``."""

    id: int
    state: str | None = None
    submitted_at: str | None = None
    html_url: str | None = None
    user: UserPayload | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class FetchFailure:
    """A fetch call that ended in an error instead of records.

    Attributes
    ----------
    repository
        Repository slug the failing call targeted.
    kind
        Activity kind the failing fetcher produces.
    category
        Error category from :func:`worklog.github.observability.categorize_error`.
    message
        Error text suitable for logs and the run report.
    pull_request
        Pull request number when only one pull request's reviews were skipped.

    """

    repository: str
    kind: ActivityKind
    category: str
    message: str
    pull_request: int | None = None
