"""OpenAI-compatible implementation of the ActivitySummarizer protocol."""

from __future__ import annotations

import time
import typing as typ

import httpx

from worklog.logging import get_logger, log_info
from worklog.summary.errors import (
    OpenAIAPIError,
    OpenAIConfigError,
    OpenAIResponseShapeError,
)
from worklog.summary.metrics import ModelInvocationMetrics
from worklog.summary.prompts import build_user_prompt

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from worklog.github.models import ActivityRecord
    from worklog.summary.config import OpenAISummaryConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_HTTP_RATE_LIMITED = 429


def _to_int_or_none(value: object) -> int | None:
    """Return ``int`` for integer values, else ``None``."""
    if isinstance(value, int):
        return value
    return None


def _get_retry_after(response: httpx.Response) -> int | None:
    """Extract Retry-After header value if present and numeric."""
    retry_after = response.headers.get("Retry-After")
    if retry_after and retry_after.isdigit():
        return int(retry_after)
    return None


def _get_nested(data: dict[str, object], *keys: str) -> object:
    """Traverse nested dict path, returning None for missing keys."""
    current: object = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current_dict = typ.cast("dict[str, object]", current)
        current = current_dict.get(key)
    return current


class OpenAIActivitySummarizer:
    """OpenAI-compatible implementation of the ActivitySummarizer protocol.

    This implementation sends one user message to an OpenAI-compatible chat
    completions endpoint and returns the trimmed completion text.

    Parameters
    ----------
    config
        Configuration for the OpenAI API client.
    http_client
        Optional httpx.AsyncClient for testing. If not provided,
        the instance creates and owns its own client.

    Examples
    --------
    >>> import asyncio
    >>> from worklog.summary import OpenAIActivitySummarizer, OpenAISummaryConfig
    >>> summarizer = OpenAIActivitySummarizer(OpenAISummaryConfig(api_key="sk-..."))
    >>> # text = asyncio.run(summarizer.summarize(records))
    >>> asyncio.run(summarizer.aclose())

    """

    def __init__(
        self,
        config: OpenAISummaryConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with configuration."""
        if not config.api_key.strip():
            raise OpenAIConfigError.empty_api_key()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            },
        )
        self._last_invocation_metrics: ModelInvocationMetrics | None = None

    @property
    def config(self) -> OpenAISummaryConfig:
        """Read-only access to the client configuration."""
        return self._config

    @property
    def last_invocation_metrics(self) -> ModelInvocationMetrics | None:
        """Return metrics captured from the most recent invocation."""
        return self._last_invocation_metrics

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def summarize(self, records: cabc.Sequence[ActivityRecord]) -> str:
        """Generate a timesheet summary from activity records.

        Parameters
        ----------
        records
            Non-empty aggregated activity in output order.

        Returns
        -------
        str
            Trimmed completion text.

        Raises
        ------
        OpenAIAPIError
            If the API returns an error response or times out.
        OpenAIResponseShapeError
            If the response is missing expected fields or contains invalid JSON.

        """
        user_prompt = build_user_prompt(records)
        started = time.perf_counter()
        content = await self._call_chat_completion(user_prompt)
        latency_ms = (time.perf_counter() - started) * 1000
        metrics = self._last_invocation_metrics or ModelInvocationMetrics()
        self._last_invocation_metrics = ModelInvocationMetrics(
            prompt_tokens=metrics.prompt_tokens,
            completion_tokens=metrics.completion_tokens,
            total_tokens=metrics.total_tokens,
            latency_ms=latency_ms,
        )
        log_info(
            logger,
            "Summary generated model=%s records=%d total_tokens=%s latency_ms=%.1f",
            self._config.model,
            len(records),
            metrics.total_tokens,
            latency_ms,
        )

        summary = content.strip()
        if not summary:
            raise OpenAIResponseShapeError.empty_completion()
        return summary

    async def _call_chat_completion(self, user_prompt: str) -> str:
        """Call the chat completions endpoint and return assistant content."""
        payload = self._build_payload(user_prompt)
        response = await self._send_request(payload)
        self._check_response_errors(response)
        return self._parse_json_response(response)

    def _build_payload(self, user_prompt: str) -> dict[str, object]:
        """Construct the single-turn request payload for chat completion."""
        return {
            "model": self._config.model,
            "messages": [{"role": "user", "content": user_prompt}],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def _send_request(
        self,
        payload: dict[str, object],
    ) -> httpx.Response:
        """Perform HTTP POST request to the chat completions endpoint.

        Raises
        ------
        OpenAIAPIError
            If a timeout or network error occurs.

        """
        try:
            return await self._client.post(
                self._config.endpoint,
                json=payload,
            )
        except httpx.TimeoutException as exc:
            raise OpenAIAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise OpenAIAPIError.network_error(str(exc)) from exc

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Validate HTTP response status code."""
        if response.status_code == _HTTP_RATE_LIMITED:
            raise OpenAIAPIError.rate_limited(_get_retry_after(response))

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise OpenAIAPIError.http_error(response.status_code)

    def _parse_json_response(self, response: httpx.Response) -> str:
        """Parse JSON response and extract assistant message content.

        Raises
        ------
        OpenAIResponseShapeError
            If the response is not valid JSON or missing expected fields.

        """
        try:
            data = response.json()
        except ValueError as exc:
            # Covers JSONDecodeError and UnicodeDecodeError from undecodable bytes.
            raise OpenAIResponseShapeError.invalid_json(response.text) from exc
        if not isinstance(data, dict):
            raise OpenAIResponseShapeError.missing("response")
        data_dict = typ.cast("dict[str, object]", data)
        self._last_invocation_metrics = self._extract_usage_metrics(data_dict)
        return self._extract_content(data_dict)

    def _extract_usage_metrics(
        self,
        data: dict[str, object],
    ) -> ModelInvocationMetrics:
        """Extract token usage metrics from the API response payload."""
        usage = data.get("usage")
        if not isinstance(usage, dict):
            return ModelInvocationMetrics()

        usage_dict = typ.cast("dict[str, object]", usage)
        return ModelInvocationMetrics(
            prompt_tokens=_to_int_or_none(usage_dict.get("prompt_tokens")),
            completion_tokens=_to_int_or_none(usage_dict.get("completion_tokens")),
            total_tokens=_to_int_or_none(usage_dict.get("total_tokens")),
        )

    def _extract_content(self, data: dict[str, object]) -> str:
        """Extract assistant message content from API response.

        Raises
        ------
        OpenAIResponseShapeError
            If the response is missing expected fields.

        """
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise OpenAIResponseShapeError.missing("choices")

        first_choice = choices[0]
        if not isinstance(first_choice, dict):
            raise OpenAIResponseShapeError.missing("choices[0]")

        first_choice_dict = typ.cast("dict[str, object]", first_choice)
        content = _get_nested(first_choice_dict, "message", "content")
        if not isinstance(content, str):
            raise OpenAIResponseShapeError.missing("choices[0].message.content")

        return content
