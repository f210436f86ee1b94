"""Unit tests for the GitHub REST client."""

from __future__ import annotations

import datetime as dt
import secrets
import typing as typ

import httpx
import pytest

from tests.helpers.github_payloads import commit_json, pull_json, review_json
from worklog.github import GitHubRESTClient, GitHubRESTConfig
from worklog.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)
from worklog.github.models import RepositoryIdentifier

_TOKEN = secrets.token_hex(8)
_REPO = RepositoryIdentifier(owner="octo", name="reef")
_SINCE = dt.datetime(2024, 2, 29, 14, 0, tzinfo=dt.UTC)
_UNTIL = dt.datetime(2024, 3, 1, 13, 59, 59, tzinfo=dt.UTC)

Handler: typ.TypeAlias = typ.Callable[[httpx.Request], httpx.Response]


def _make_client(
    handler: Handler,
) -> tuple[GitHubRESTClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    client = GitHubRESTClient(
        GitHubRESTConfig(token=_TOKEN, api_url="https://api.example.test/"),
        http_client=http_client,
    )
    return client, requests


def _respond(status: int, payload: object) -> Handler:
    def _handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=status, json=payload)

    return _handler


def request_params(request: httpx.Request) -> dict[str, str]:
    """Return query parameters of a recorded request."""
    return dict(request.url.params)

class TestListCommits:
    """Tests for GitHubRESTClient.list_commits."""

    @pytest.mark.asyncio
    async def test_requests_window_and_author(self) -> None:
        """Commit listings carry since, until, author, and page size."""
        payload = [commit_json("abc123", "Fix bug", date="2024-03-01T01:00:00Z")]
        client, requests = _make_client(_respond(200, payload))

        commits = await client.list_commits(
            _REPO, author="octocat", since=_SINCE, until=_UNTIL
        )

        assert [c.sha for c in commits] == ["abc123"]
        assert commits[0].commit.author is not None
        assert commits[0].commit.author.email == "octocat@example.com"
        request = requests[0]
        assert request.method == "GET"
        assert request.url.path == "/repos/octo/reef/commits"
        assert request.url.host == "api.example.test"
        assert dict(request.url.params) == {
            "since": "2024-02-29T14:00:00Z",
            "until": "2024-03-01T13:59:59Z",
            "per_page": "100",
            "author": "octocat",
        }

    @pytest.mark.asyncio
    async def test_author_is_omitted_when_unknown(self) -> None:
        """Email-only identities do not filter upstream by author."""
        client, requests = _make_client(_respond(200, []))

        await client.list_commits(_REPO, author=None, since=_SINCE, until=_UNTIL)

        assert "author" not in request_params(requests[0])

    @pytest.mark.asyncio
    async def test_unlinked_commit_author_decodes(self) -> None:
        """Commits without a linked account decode with ``author`` unset."""
        payload = [
            commit_json("abc123", "Fix", date="2024-03-01T01:00:00Z", login=None)
        ]
        client, _ = _make_client(_respond(200, payload))

        commits = await client.list_commits(
            _REPO, author=None, since=_SINCE, until=_UNTIL
        )

        assert commits[0].author is None


class TestListPullRequestsAndReviews:
    """Tests for pull request and review listings."""

    @pytest.mark.asyncio
    async def test_pull_requests_pass_state(self) -> None:
        """Pull request listings forward the requested state."""
        payload = [pull_json(42, "Fix bug", created_at="2024-03-01T10:00:00Z")]
        client, requests = _make_client(_respond(200, payload))

        pulls = await client.list_pull_requests(_REPO, state="all")

        assert [(p.number, p.title) for p in pulls] == [(42, "Fix bug")]
        assert requests[0].url.path == "/repos/octo/reef/pulls"
        assert request_params(requests[0]) == {"state": "all", "per_page": "100"}

    @pytest.mark.asyncio
    async def test_reviews_target_one_pull_request(self) -> None:
        """Review listings address a single pull request."""
        payload = [review_json(7, submitted_at="2024-03-01T10:00:00Z")]
        client, requests = _make_client(_respond(200, payload))

        reviews = await client.list_reviews(_REPO, 42)

        assert reviews[0].id == 7
        assert reviews[0].user is not None
        assert reviews[0].user.login == "octocat"
        assert requests[0].url.path == "/repos/octo/reef/pulls/42/reviews"

    @pytest.mark.asyncio
    async def test_pending_review_has_no_submission_time(self) -> None:
        """Pending reviews decode with ``submitted_at`` unset."""
        payload = [review_json(7, submitted_at=None, state="PENDING")]
        client, _ = _make_client(_respond(200, payload))

        reviews = await client.list_reviews(_REPO, 42)

        assert reviews[0].submitted_at is None


class TestErrorMapping:
    """Tests for transport and payload error mapping."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 404, 500, 502])
    async def test_error_status_raises_api_error(self, status: int) -> None:
        """HTTP errors surface with their status code."""
        client, _ = _make_client(_respond(status, {"message": "nope"}))

        with pytest.raises(GitHubAPIError) as excinfo:
            await client.list_pull_requests(_REPO, state="open")

        assert excinfo.value.status_code == status
        assert "/repos/octo/reef/pulls" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_timeout_raises_api_error_without_status(self) -> None:
        """Timeouts become status-less API errors."""

        def _timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = _make_client(_timeout)

        with pytest.raises(GitHubAPIError) as excinfo:
            await client.list_reviews(_REPO, 1)

        assert excinfo.value.status_code is None

    @pytest.mark.asyncio
    async def test_network_failure_raises_api_error(self) -> None:
        """Connection failures become API errors."""

        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = _make_client(_refuse)

        with pytest.raises(GitHubAPIError, match="connection refused"):
            await client.list_commits(_REPO, author=None, since=_SINCE, until=_UNTIL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"message": "not a list"},
            [{"number": "forty-two", "title": "x", "created_at": "now"}],
        ],
    )
    async def test_unexpected_body_raises_shape_error(self, payload: object) -> None:
        """Bodies that do not match the payload structs are schema drift."""
        client, _ = _make_client(_respond(200, payload))

        with pytest.raises(GitHubResponseShapeError):
            await client.list_pull_requests(_REPO, state="all")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_shape_error(self) -> None:
        """Non-JSON bodies are schema drift."""
        client, _ = _make_client(
            lambda _request: httpx.Response(200, content=b"<html>")
        )

        with pytest.raises(GitHubResponseShapeError):
            await client.list_reviews(_REPO, 3)


class TestClientLifecycle:
    """Tests for construction and cleanup."""

    def test_blank_token_is_rejected(self) -> None:
        """A client cannot be built without credentials."""
        with pytest.raises(GitHubConfigError):
            GitHubRESTClient(GitHubRESTConfig(token="   "))

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self) -> None:
        """Callers keep ownership of injected HTTP clients."""
        transport = httpx.MockTransport(_respond(200, []))
        http_client = httpx.AsyncClient(transport=transport)
        client = GitHubRESTClient(
            GitHubRESTConfig(token=_TOKEN), http_client=http_client
        )

        await client.aclose()

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_sends_auth_headers(self) -> None:
        """Owned clients authenticate and request the v3 JSON media type."""
        client = GitHubRESTClient(GitHubRESTConfig(token=_TOKEN))
        try:
            headers = client._client.headers  # noqa: SLF001
            assert headers["Authorization"] == f"Bearer {_TOKEN}"
            assert headers["Accept"] == "application/vnd.github+json"
            assert headers["X-GitHub-Api-Version"] == "2022-11-28"
        finally:
            await client.aclose()
