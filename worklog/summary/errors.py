"""Custom exceptions for activity summarization."""

from __future__ import annotations

import typing as typ

from worklog.errors import ConfigurationError, WorklogError
from worklog.summary.constants import MAX_TEMPERATURE, MIN_TEMPERATURE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Content preview length for error messages
_CONTENT_PREVIEW_LIMIT = 100


class SummarizationError(WorklogError):
    """Base exception for recoverable text-generation failures.

    Callers catch this to substitute placeholder text instead of failing the
    run.
    """


class OpenAIAPIError(SummarizationError):
    """Raised when the OpenAI API returns an error response.

    Attributes
    ----------
    status_code
        HTTP status code from the API response, if available.

    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise the error with message and optional status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int) -> OpenAIAPIError:
        """Create error for HTTP error responses."""
        msg = f"OpenAI API HTTP error {status_code}"
        return cls(msg, status_code=status_code)

    @classmethod
    def rate_limited(cls, retry_after: int | None = None) -> OpenAIAPIError:
        """Create error for rate limit (429) responses.

        Parameters
        ----------
        retry_after
            Seconds to wait before retrying, from Retry-After header.

        Returns
        -------
        OpenAIAPIError
            Error indicating rate limiting.

        """
        msg = "OpenAI API rate limited"
        if retry_after is not None:
            msg = f"{msg}, retry after {retry_after}s"
        return cls(msg, status_code=429)

    @classmethod
    def timeout(cls) -> OpenAIAPIError:
        """Create error for request timeouts."""
        return cls("OpenAI API request timed out")

    @classmethod
    def network_error(cls, detail: str) -> OpenAIAPIError:
        """Create error for network failures (DNS, connection, TLS, etc.)."""
        return cls(f"OpenAI API network error: {detail}")


class OpenAIResponseShapeError(SummarizationError):
    """Raised when an OpenAI response is missing expected fields or malformed."""

    @classmethod
    def missing(cls, field: str) -> OpenAIResponseShapeError:
        """Create error for missing response field."""
        return cls(f"OpenAI response missing expected field: {field}")

    @classmethod
    def invalid_json(cls, content: str) -> OpenAIResponseShapeError:
        """Create error for a response body that is not valid JSON.

        Parameters
        ----------
        content
            The content that failed to parse as JSON.

        Returns
        -------
        OpenAIResponseShapeError
            Error with truncated content preview.

        """
        if len(content) > _CONTENT_PREVIEW_LIMIT:
            preview = content[:_CONTENT_PREVIEW_LIMIT] + "..."
        else:
            preview = content
        return cls(f"Failed to parse JSON from response: {preview}")

    @classmethod
    def empty_completion(cls) -> OpenAIResponseShapeError:
        """Create error for a completion whose content is blank."""
        return cls("OpenAI response contained an empty completion")


class OpenAIConfigError(ConfigurationError):
    """Raised when OpenAI client configuration is invalid."""

    @classmethod
    def missing_api_key(cls) -> OpenAIConfigError:
        """Create error for missing API key environment variable."""
        return cls("WORKLOG_OPENAI_API_KEY environment variable is required")

    @classmethod
    def empty_api_key(cls) -> OpenAIConfigError:
        """Create error for empty API key."""
        return cls("OpenAI API key must be non-empty")


class SummaryBackendConfigError(ConfigurationError):
    """Raised when summarizer backend configuration is invalid.

    This exception indicates issues with the environment configuration
    for selecting and configuring summarizer backends.

    """

    @classmethod
    def invalid_backend(
        cls, name: str, valid_backends: cabc.Iterable[str]
    ) -> SummaryBackendConfigError:
        """Create error for unrecognized backend name.

        Parameters
        ----------
        name
            The invalid backend name that was provided.
        valid_backends
            Iterable of valid backend names.

        Returns
        -------
        SummaryBackendConfigError
            Error listing valid backend options.

        """
        valid_backends_str = ", ".join(f"'{b}'" for b in sorted(valid_backends))
        message = (
            f"Invalid summary backend '{name}'. "
            f"Valid options are: {valid_backends_str}"
        )
        return cls(message)

    @classmethod
    def invalid_parameter(
        cls, parameter_name: str, value: str, constraint: str
    ) -> SummaryBackendConfigError:
        """Create error for an invalid configuration parameter value."""
        message = f"Invalid {parameter_name} '{value}'. {constraint}"
        return cls(message)

    @classmethod
    def invalid_temperature(cls, value: str) -> SummaryBackendConfigError:
        """Create error for invalid temperature value."""
        return cls.invalid_parameter(
            "temperature",
            value,
            f"Must be a float between {MIN_TEMPERATURE} and {MAX_TEMPERATURE}",
        )

    @classmethod
    def invalid_max_tokens(cls, value: str) -> SummaryBackendConfigError:
        """Create error for invalid max_tokens value."""
        return cls.invalid_parameter("max_tokens", value, "Must be a positive integer")
