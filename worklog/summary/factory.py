"""Factory for creating ActivitySummarizer implementations from the environment."""

from __future__ import annotations

import os
import typing as typ

from worklog.summary.errors import SummaryBackendConfigError
from worklog.summary.mock import MockActivitySummarizer

if typ.TYPE_CHECKING:
    from worklog.summary.protocol import ActivitySummarizer

_VALID_BACKENDS = frozenset({"mock", "openai"})
_DEFAULT_BACKEND = "openai"


def create_summarizer() -> ActivitySummarizer:
    """Create an ActivitySummarizer based on environment configuration.

    Reads the following environment variables:

    - ``WORKLOG_SUMMARY_BACKEND``: Optional. Either 'openai' (default) or
      'mock'.

    For 'openai' backend, also reads the ``WORKLOG_OPENAI_*`` variables
    documented on :meth:`OpenAISummaryConfig.from_env`.

    Returns
    -------
    ActivitySummarizer
        Configured summarizer implementation.

    Raises
    ------
    SummaryBackendConfigError
        If the backend name is not recognised.
    OpenAIConfigError
        If the OpenAI backend is selected but its API key is missing.

    Examples
    --------
    >>> import os
    >>> os.environ["WORKLOG_SUMMARY_BACKEND"] = "mock"
    >>> summarizer = create_summarizer()
    >>> isinstance(summarizer, MockActivitySummarizer)
    True

    """
    raw_backend = os.environ.get("WORKLOG_SUMMARY_BACKEND", "")
    backend = raw_backend.strip().lower() or _DEFAULT_BACKEND
    if backend not in _VALID_BACKENDS:
        raise SummaryBackendConfigError.invalid_backend(raw_backend, _VALID_BACKENDS)

    if backend == "mock":
        return MockActivitySummarizer()

    # backend == "openai"
    from worklog.summary.config import OpenAISummaryConfig
    from worklog.summary.openai_client import OpenAIActivitySummarizer

    config = OpenAISummaryConfig.from_env()
    return OpenAIActivitySummarizer(config)
