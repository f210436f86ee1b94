"""GitHub REST API client used by the activity fetchers."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

import httpx
import msgspec

from worklog.common.time import format_github_datetime

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .models import CommitPayload, PullRequestPayload, ReviewPayload

if typ.TYPE_CHECKING:
    import datetime as dt

    from .models import RepositoryIdentifier

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 20.0
# Largest page GitHub's REST list endpoints accept.
MAX_PAGE_SIZE = 100

T = typ.TypeVar("T")

PullRequestState: typ.TypeAlias = typ.Literal["open", "closed", "all"]


class GitHubActivityClient(typ.Protocol):
    """Interface for reading one page of repository activity."""

    async def list_commits(
        self,
        repo: RepositoryIdentifier,
        *,
        author: str | None,
        since: dt.datetime,
        until: dt.datetime,
    ) -> list[CommitPayload]:
        """Return commits by ``author`` between ``since`` and ``until``."""
        ...

    async def list_pull_requests(
        self, repo: RepositoryIdentifier, *, state: PullRequestState
    ) -> list[PullRequestPayload]:
        """Return pull requests in the given state."""
        ...

    async def list_reviews(
        self, repo: RepositoryIdentifier, number: int
    ) -> list[ReviewPayload]:
        """Return reviews submitted on one pull request."""
        ...

    async def aclose(self) -> None:
        """Release any transport resources held by the client."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubRESTConfig:
    """Configuration for the GitHub REST API client."""

    token: str
    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = "worklog/0.1"

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw_timeout = os.environ.get("WORKLOG_GITHUB_TIMEOUT_S", "").strip()
        if not raw_timeout:
            return _DEFAULT_TIMEOUT_S
        try:
            timeout_s = float(raw_timeout)
        except ValueError as exc:
            raise GitHubConfigError.invalid_timeout(raw_timeout) from exc
        if timeout_s <= 0:
            raise GitHubConfigError.invalid_timeout(raw_timeout)
        return timeout_s

    @classmethod
    def from_env(cls) -> GitHubRESTConfig:
        """Build configuration from ``WORKLOG_GITHUB_*`` environment variables.

        Reads ``WORKLOG_GITHUB_TOKEN`` (required), ``WORKLOG_GITHUB_API_URL``
        and ``WORKLOG_GITHUB_TIMEOUT_S``.
        """
        token = os.environ.get("WORKLOG_GITHUB_TOKEN", "").strip()
        if not token:
            raise GitHubConfigError.missing_token()
        api_url = os.environ.get("WORKLOG_GITHUB_API_URL", "").strip()
        return cls(
            token=token,
            api_url=api_url or _DEFAULT_API_URL,
            timeout_s=cls._parse_timeout_from_env(),
        )


class GitHubRESTClient:
    """GitHub REST implementation of :class:`GitHubActivityClient`.

    Every list call requests a single page of :data:`MAX_PAGE_SIZE` items.
    Transport failures, timeouts, and error statuses surface as
    :class:`GitHubAPIError`; bodies that do not decode into the expected
    payload structs surface as :class:`GitHubResponseShapeError`.
    """

    def __init__(
        self,
        config: GitHubRESTConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.token}",
                "User-Agent": config.user_agent,
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def list_commits(
        self,
        repo: RepositoryIdentifier,
        *,
        author: str | None,
        since: dt.datetime,
        until: dt.datetime,
    ) -> list[CommitPayload]:
        """Return one page of commits, optionally filtered by author upstream."""
        params: dict[str, str | int] = {
            "since": format_github_datetime(since),
            "until": format_github_datetime(until),
            "per_page": MAX_PAGE_SIZE,
        }
        if author:
            params["author"] = author
        return await self._get(
            f"/repos/{repo.owner}/{repo.name}/commits",
            params,
            list[CommitPayload],
        )

    async def list_pull_requests(
        self, repo: RepositoryIdentifier, *, state: PullRequestState
    ) -> list[PullRequestPayload]:
        """Return one page of pull requests in ``state``."""
        return await self._get(
            f"/repos/{repo.owner}/{repo.name}/pulls",
            {"state": state, "per_page": MAX_PAGE_SIZE},
            list[PullRequestPayload],
        )

    async def list_reviews(
        self, repo: RepositoryIdentifier, number: int
    ) -> list[ReviewPayload]:
        """Return one page of reviews for pull request ``number``."""
        return await self._get(
            f"/repos/{repo.owner}/{repo.name}/pulls/{number}/reviews",
            {"per_page": MAX_PAGE_SIZE},
            list[ReviewPayload],
        )

    async def _get(
        self,
        path: str,
        params: dict[str, str | int],
        payload_type: type[T],
    ) -> T:
        """Issue a GET request and decode the body into ``payload_type``."""
        try:
            response = await self._client.get(
                self._url(path),
                params=params,
            )
        except httpx.TimeoutException as exc:
            raise GitHubAPIError.timeout(path) from exc
        except httpx.RequestError as exc:
            raise GitHubAPIError.network_error(path, str(exc)) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(response.status_code, path)

        try:
            return msgspec.json.decode(response.content, type=payload_type)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.undecodable(path, str(exc)) from exc

    def _url(self, path: str) -> str:
        return f"{self._config.api_url.rstrip('/')}{path}"
