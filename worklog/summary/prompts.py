"""Prompt templates for timesheet summaries."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from worklog.github.models import ActivityRecord

INSTRUCTION = (
    "Summarize the following GitHub activity into 2-3 concise, objective "
    "sentences suitable for a client-facing timesheet entry. Use a "
    "professional tone, avoid first-person language, and omit repository "
    "names. Retain pull request numbers."
)


def format_bullets(records: cabc.Iterable[ActivityRecord]) -> list[str]:
    """Render each record as one ``- <message>`` bullet line."""
    return [f"- {record.message}" for record in records]


def build_user_prompt(records: cabc.Sequence[ActivityRecord]) -> str:
    """Build the single-turn prompt for a non-empty record sequence.

    Parameters
    ----------
    records
        Aggregated activity in output order.

    Returns
    -------
    str
        Instruction followed by one bullet per record.

    """
    sections = [INSTRUCTION, "", "GitHub activity:", *format_bullets(records)]
    return "\n".join(sections)
