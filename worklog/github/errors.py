"""GitHub fetch errors."""

from __future__ import annotations

from worklog.errors import ConfigurationError, WorklogError


class GitHubFetchError(WorklogError):
    """Base class for recoverable failures while reading GitHub activity."""


class GitHubAPIError(GitHubFetchError):
    """Raised when GitHub returns an error response or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, path: str) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        msg = f"GitHub REST HTTP {status_code} for {path}"
        return cls(msg, status_code=status_code)

    @classmethod
    def timeout(cls, path: str) -> GitHubAPIError:
        """Return an error for requests that exceeded the configured timeout."""
        return cls(f"GitHub REST request timed out for {path}")

    @classmethod
    def network_error(cls, path: str, detail: str) -> GitHubAPIError:
        """Return an error for DNS, connection, or TLS failures."""
        return cls(f"GitHub REST network error for {path}: {detail}")


class GitHubResponseShapeError(GitHubFetchError):
    """Raised when GitHub responses do not match the expected payload shape."""

    @classmethod
    def undecodable(cls, path: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a body that failed typed decoding."""
        return cls(f"GitHub REST response for {path} has unexpected shape: {detail}")


class GitHubConfigError(ConfigurationError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls("WORKLOG_GITHUB_TOKEN is required for GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_timeout(cls, value: str) -> GitHubConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(
            f"Invalid WORKLOG_GITHUB_TIMEOUT_S {value!r}. Must be a positive number"
        )
