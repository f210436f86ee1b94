"""Unit tests for summary prompt construction."""

from __future__ import annotations

import typing as typ

from worklog.summary.prompts import INSTRUCTION, build_user_prompt, format_bullets

if typ.TYPE_CHECKING:
    from worklog.github.models import ActivityRecord


def test_bullets_keep_record_order(mixed_records: list[ActivityRecord]) -> None:
    """Each record renders as one bullet, in order."""
    assert format_bullets(mixed_records) == [
        "- Commit: Add reef index",
        "- Opened PR #42: Fix bug",
        "- Reviewed PR #7: Add caching",
    ]


def test_prompt_starts_with_instruction(mixed_records: list[ActivityRecord]) -> None:
    """The instruction precedes the activity list."""
    prompt = build_user_prompt(mixed_records)

    lines = prompt.split("\n")
    assert lines[0] == INSTRUCTION
    assert lines[1:3] == ["", "GitHub activity:"]
    assert lines[3:] == format_bullets(mixed_records)


def test_instruction_sets_timesheet_constraints() -> None:
    """The instruction asks for a short, impersonal, numbered summary."""
    assert "2-3" in INSTRUCTION
    assert "first-person" in INSTRUCTION
    assert "omit repository names" in INSTRUCTION
    assert "pull request numbers" in INSTRUCTION
