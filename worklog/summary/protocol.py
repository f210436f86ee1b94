"""ActivitySummarizer protocol for LLM-backed summarization."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from worklog.github.models import ActivityRecord


@typ.runtime_checkable
class ActivitySummarizer(typ.Protocol):
    """Protocol for turning activity records into timesheet prose.

    The protocol is runtime_checkable to support isinstance checks for
    dependency injection and testing scenarios.

    Examples
    --------
    >>> from worklog.summary import ActivitySummarizer, MockActivitySummarizer
    >>> summarizer: ActivitySummarizer = MockActivitySummarizer()
    >>> isinstance(summarizer, ActivitySummarizer)
    True

    """

    async def summarize(self, records: cabc.Sequence[ActivityRecord]) -> str:
        """Return a short summary of a non-empty record sequence.

        Raises
        ------
        SummarizationError
            If the backend cannot produce a summary.

        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the backend."""
        ...
