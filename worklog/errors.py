"""Base exception hierarchy shared across worklog components.

Only :class:`ConfigurationError` and :class:`InvalidDateError` abort a run.
Fetch and summarization failures have their own subclasses in
``worklog.github.errors`` and ``worklog.summary.errors`` and are degraded to
empty results or placeholder text by the components that call them.
"""

from __future__ import annotations


class WorklogError(Exception):
    """Base exception for all worklog errors."""


class ConfigurationError(WorklogError):
    """Raised when required startup configuration is absent or invalid."""


class InvalidDateError(WorklogError, ValueError):
    """Raised when a target date argument is malformed."""

    @classmethod
    def malformed(cls, value: str) -> InvalidDateError:
        """Return an error for text that is not in ``YYYY-MM-DD`` format."""
        return cls(
            f'Invalid date format "{value}". Please use YYYY-MM-DD format.'
        )

    @classmethod
    def not_a_date(cls, value: str) -> InvalidDateError:
        """Return an error for well-formed text naming no calendar day."""
        return cls(f'Invalid date "{value}": no such calendar day.')


class WorklogConfigError(ConfigurationError):
    """Raised when the activity collection settings are invalid."""

    @classmethod
    def missing(cls, env_var: str) -> WorklogConfigError:
        """Return an error for a required environment variable."""
        return cls(f"{env_var} environment variable is required")

    @classmethod
    def missing_identity(cls) -> WorklogConfigError:
        """Return an error when neither usernames nor emails are configured."""
        return cls(
            "WORKLOG_GITHUB_USERNAME or WORKLOG_AUTHOR_EMAILS must name "
            "at least one identity"
        )

    @classmethod
    def invalid_value(
        cls, env_var: str, value: str, constraint: str
    ) -> WorklogConfigError:
        """Return an error for a value that fails validation."""
        return cls(f"Invalid {env_var} {value!r}. {constraint}")
