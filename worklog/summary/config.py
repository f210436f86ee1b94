"""Configuration for the OpenAI activity summarizer."""

from __future__ import annotations

import dataclasses
import os

from worklog.summary.constants import MAX_TEMPERATURE, MIN_TEMPERATURE
from worklog.summary.errors import OpenAIConfigError, SummaryBackendConfigError

# Default configuration values - single source of truth
_DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
_DEFAULT_MODEL = "gpt-4"
_DEFAULT_TIMEOUT_S = 60.0
_DEFAULT_TEMPERATURE = 0.3
# A timesheet entry is 2-3 sentences.
_DEFAULT_MAX_TOKENS = 150


@dataclasses.dataclass(frozen=True, slots=True)
class OpenAISummaryConfig:
    """Configuration for the OpenAI-compatible summarizer client.

    Attributes
    ----------
    api_key
        API key for authentication with the OpenAI API.
    endpoint
        Chat completions endpoint URL.
    model
        Model identifier to use for completions.
    timeout_s
        Request timeout in seconds.
    temperature
        Sampling temperature (0.0 to 2.0).
    max_tokens
        Maximum tokens in the completion response.

    """

    api_key: str
    endpoint: str = _DEFAULT_ENDPOINT
    model: str = _DEFAULT_MODEL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    temperature: float = _DEFAULT_TEMPERATURE
    max_tokens: int = _DEFAULT_MAX_TOKENS

    @staticmethod
    def _parse_temperature_from_env() -> float:
        """Parse and validate temperature from environment.

        Raises
        ------
        SummaryBackendConfigError
            If temperature value is invalid.

        """
        raw_temperature = os.environ.get("WORKLOG_OPENAI_TEMPERATURE")
        if raw_temperature is None:
            return _DEFAULT_TEMPERATURE

        try:
            temperature = float(raw_temperature)
        except ValueError as exc:
            raise SummaryBackendConfigError.invalid_temperature(
                raw_temperature
            ) from exc

        if not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
            raise SummaryBackendConfigError.invalid_temperature(raw_temperature)

        return temperature

    @staticmethod
    def _parse_max_tokens_from_env() -> int:
        """Parse and validate max_tokens from environment.

        Raises
        ------
        SummaryBackendConfigError
            If max_tokens value is invalid.

        """
        raw_max_tokens = os.environ.get("WORKLOG_OPENAI_MAX_TOKENS")
        if raw_max_tokens is None:
            return _DEFAULT_MAX_TOKENS

        try:
            max_tokens = int(raw_max_tokens)
        except ValueError as exc:
            raise SummaryBackendConfigError.invalid_max_tokens(raw_max_tokens) from exc

        if max_tokens <= 0:
            raise SummaryBackendConfigError.invalid_max_tokens(raw_max_tokens)

        return max_tokens

    @classmethod
    def from_env(cls) -> OpenAISummaryConfig:
        """Build configuration from environment variables.

        Reads the following environment variables:

        - ``WORKLOG_OPENAI_API_KEY``: Required API key
        - ``WORKLOG_OPENAI_ENDPOINT``: Optional endpoint override
        - ``WORKLOG_OPENAI_MODEL``: Optional model override
        - ``WORKLOG_OPENAI_TEMPERATURE``: Optional temperature (0.0 to 2.0)
        - ``WORKLOG_OPENAI_MAX_TOKENS``: Optional max tokens (positive integer)

        Raises
        ------
        OpenAIConfigError
            If the API key is missing or empty.
        SummaryBackendConfigError
            If temperature or max_tokens values are invalid.

        """
        raw_api_key = os.environ.get("WORKLOG_OPENAI_API_KEY")
        if raw_api_key is None:
            raise OpenAIConfigError.missing_api_key()
        api_key = raw_api_key.strip()
        if not api_key:
            raise OpenAIConfigError.empty_api_key()

        endpoint = os.environ.get("WORKLOG_OPENAI_ENDPOINT", _DEFAULT_ENDPOINT)
        model = os.environ.get("WORKLOG_OPENAI_MODEL", _DEFAULT_MODEL)

        return cls(
            api_key=api_key,
            endpoint=endpoint,
            model=model,
            temperature=cls._parse_temperature_from_env(),
            max_tokens=cls._parse_max_tokens_from_env(),
        )
