"""Produce the printable summary for a collection run.

:func:`summarize_activity` always returns a string: the backend's summary,
the no-activity message, or the failure placeholder.
"""

from __future__ import annotations

import typing as typ

from worklog.logging import get_logger, log_warning
from worklog.summary.constants import NO_ACTIVITY_TEMPLATE, SUMMARY_FAILED_MESSAGE
from worklog.summary.errors import SummarizationError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from worklog.github.models import ActivityRecord
    from worklog.summary.protocol import ActivitySummarizer

logger = get_logger(__name__)


def no_activity_message(target_date: dt.date) -> str:
    """Return the message printed when nothing was collected."""
    return NO_ACTIVITY_TEMPLATE.format(date=target_date.isoformat())


async def summarize_activity(
    records: cabc.Sequence[ActivityRecord],
    *,
    target_date: dt.date,
    summarizer: ActivitySummarizer,
) -> str:
    """Summarize records, degrading failures to placeholder text.

    Parameters
    ----------
    records
        Aggregated activity in output order.
    target_date
        Day the records belong to, used in the no-activity message.
    summarizer
        Backend invoked only when ``records`` is non-empty.

    Returns
    -------
    str
        Summary text, the no-activity message, or
        :data:`~worklog.summary.constants.SUMMARY_FAILED_MESSAGE`.

    """
    if not records:
        return no_activity_message(target_date)

    try:
        return await summarizer.summarize(records)
    except SummarizationError as exc:
        log_warning(
            logger,
            "Summary generation failed error_type=%s error_message=%s",
            type(exc).__name__,
            str(exc),
            exc_info=exc,
        )
        return SUMMARY_FAILED_MESSAGE
