"""Summarizer interface for LLM-backed timesheet summaries.

This package turns aggregated activity records into a short prose summary.
The `ActivitySummarizer` protocol defines the interface, while
`OpenAIActivitySummarizer` and `MockActivitySummarizer` provide concrete
behaviour.

Public API
----------
ActivitySummarizer
    Protocol for summarizing activity records.
OpenAIActivitySummarizer
    OpenAI-compatible LLM implementation.
OpenAISummaryConfig
    Configuration dataclass for the OpenAI client.
MockActivitySummarizer
    Deterministic implementation for offline runs and tests.
create_summarizer
    Factory selecting a backend from environment configuration.
summarize_activity
    Entry point applying the no-activity and failure-placeholder rules.
SummarizationError
    Base exception for recoverable summarizer failures.

Examples
--------
>>> from worklog.summary import MockActivitySummarizer, summarize_activity
>>> text = await summarize_activity(
...     records, target_date=day, summarizer=MockActivitySummarizer()
... )

"""

from __future__ import annotations

from worklog.summary.config import OpenAISummaryConfig
from worklog.summary.constants import NO_ACTIVITY_TEMPLATE, SUMMARY_FAILED_MESSAGE
from worklog.summary.errors import (
    OpenAIAPIError,
    OpenAIConfigError,
    OpenAIResponseShapeError,
    SummarizationError,
    SummaryBackendConfigError,
)
from worklog.summary.factory import create_summarizer
from worklog.summary.metrics import ModelInvocationMetrics
from worklog.summary.mock import MockActivitySummarizer
from worklog.summary.openai_client import OpenAIActivitySummarizer
from worklog.summary.protocol import ActivitySummarizer
from worklog.summary.service import no_activity_message, summarize_activity

__all__ = [
    "NO_ACTIVITY_TEMPLATE",
    "SUMMARY_FAILED_MESSAGE",
    "ActivitySummarizer",
    "MockActivitySummarizer",
    "ModelInvocationMetrics",
    "OpenAIAPIError",
    "OpenAIActivitySummarizer",
    "OpenAIConfigError",
    "OpenAIResponseShapeError",
    "OpenAISummaryConfig",
    "SummarizationError",
    "SummaryBackendConfigError",
    "create_summarizer",
    "no_activity_message",
    "summarize_activity",
]
