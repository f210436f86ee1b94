"""Deterministic summarizer for offline runs and tests."""

from __future__ import annotations

import typing as typ

from worklog.github.models import ActivityKind

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from worklog.github.models import ActivityRecord

_KIND_NOUNS: tuple[tuple[ActivityKind, str, str], ...] = (
    (ActivityKind.COMMIT, "commit", "commits"),
    (ActivityKind.PULL_REQUEST_OPENED, "pull request opened", "pull requests opened"),
    (
        ActivityKind.PULL_REQUEST_REVIEWED,
        "pull request reviewed",
        "pull requests reviewed",
    ),
)


class MockActivitySummarizer:
    """Summarize records by counting them per kind, without network access.

    Attributes
    ----------
    calls
        Record sequences received, in call order.

    Examples
    --------
    >>> import asyncio
    >>> from worklog.github.models import ActivityRecord
    >>> record = ActivityRecord(
    ...     repository="octo/reef",
    ...     kind=ActivityKind.PULL_REQUEST_OPENED,
    ...     message="Opened PR #42: Fix bug",
    ...     number=42,
    ... )
    >>> asyncio.run(MockActivitySummarizer().summarize([record]))
    'Work included 1 pull request opened (#42).'

    """

    def __init__(self) -> None:
        """Initialise an empty call log."""
        self.calls: list[tuple[ActivityRecord, ...]] = []

    async def summarize(self, records: cabc.Sequence[ActivityRecord]) -> str:
        """Return a deterministic one-sentence summary."""
        self.calls.append(tuple(records))
        parts: list[str] = []
        for kind, singular, plural in _KIND_NOUNS:
            matching = [record for record in records if record.kind is kind]
            if not matching:
                continue
            label = singular if len(matching) == 1 else plural
            numbers = sorted({r.number for r in matching if r.number is not None})
            suffix = (
                " (" + ", ".join(f"#{n}" for n in numbers) + ")" if numbers else ""
            )
            parts.append(f"{len(matching)} {label}{suffix}")
        return f"Work included {'; '.join(parts)}."

    async def aclose(self) -> None:
        """Nothing to release."""
