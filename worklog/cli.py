"""Summarize one day of GitHub activity into a timesheet entry.

Usage: ``worklog [YYYY-MM-DD] [OFFSET_HOURS]``. Without a date the current
local date is used; without an offset the system timezone offset is used.
Settings come from ``WORKLOG_*`` environment variables, optionally loaded
from a ``.env`` file in the working directory.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
import typing as typ

from dotenv import load_dotenv

from worklog.aggregation import ActivityAggregator, ActivityReport
from worklog.common.time import local_utc_offset_hours
from worklog.config import WorklogConfig
from worklog.errors import ConfigurationError, InvalidDateError
from worklog.github.client import GitHubRESTClient
from worklog.logging import (
    configure_logging,
    get_logger,
    log_debug,
    log_error,
    log_exception,
    log_info,
    log_warning,
)
from worklog.summary.factory import create_summarizer
from worklog.summary.service import summarize_activity
from worklog.window import parse_offset_hours, resolve_window

if typ.TYPE_CHECKING:
    from worklog.github.client import GitHubActivityClient
    from worklog.summary.protocol import ActivitySummarizer
    from worklog.window import TimeWindow

logger = get_logger(__name__)

SUMMARY_HEADER = "GitHub Summary:"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="worklog", description=__doc__)
    parser.add_argument(
        "date",
        nargs="?",
        default=None,
        help="Target day as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "offset",
        nargs="?",
        default=None,
        help="Timezone offset in whole hours from UTC (default: system offset)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="femtologging level (default: WORKLOG_LOG_LEVEL or INFO)",
    )
    return parser


def _configure_logging(cli_level: str | None) -> None:
    raw_level = cli_level or os.environ.get("WORKLOG_LOG_LEVEL", "INFO")
    normalized_level, invalid_level = configure_logging(raw_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            raw_level,
            normalized_level,
        )


def render_report(report: ActivityReport) -> list[str]:
    """Render collected records grouped under per-repository headers."""
    lines: list[str] = []
    for repository, records in report.grouped():
        lines.append(f"From {repository}:")
        lines.extend(f"- {record.message}" for record in records)
        lines.append("")
    if report.has_failures:
        lines.append(
            f"Warning: {len(report.failures)} fetch(es) failed; "
            "activity may be incomplete."
        )
        lines.extend(
            f"  {failure.repository} {failure.kind}: {failure.message}"
            for failure in report.failures
        )
    return lines


async def run(
    config: WorklogConfig,
    window: TimeWindow,
    summarizer: ActivitySummarizer,
    *,
    client: GitHubActivityClient | None = None,
) -> tuple[ActivityReport, str]:
    """Collect activity for the window and return it with its summary.

    An injected ``client`` is left open; one created here is closed.
    """
    github: GitHubActivityClient = client or GitHubRESTClient(config.github)
    log_debug(
        logger,
        "Collecting window start=%s end=%s repositories=%d",
        window.start.isoformat(),
        window.end.isoformat(),
        len(config.repositories),
    )
    try:
        aggregator = ActivityAggregator(
            github,
            config.identity,
            window,
            include_reviews=config.include_reviews,
            max_concurrency=config.max_concurrency,
            on_progress=print,
        )
        report = await aggregator.collect(config.repositories)
    finally:
        if client is None:
            await github.aclose()

    log_info(
        logger,
        "Collected records=%d failures=%d for %s",
        len(report.records),
        len(report.failures),
        window.label,
    )
    summary = await summarize_activity(
        report.records, target_date=window.target_date, summarizer=summarizer
    )
    return report, summary


async def _run_and_close(
    config: WorklogConfig, window: TimeWindow, summarizer: ActivitySummarizer
) -> tuple[ActivityReport, str]:
    try:
        return await run(config, window, summarizer)
    except Exception as exc:
        log_exception(logger, f"Run aborted for {window.label}", exc)
        raise
    finally:
        await summarizer.aclose()


def main(argv: list[str] | None = None) -> int:
    """Run the daily summary pipeline.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success (including fetch or summary failures), 1 on
        configuration or argument errors.

    """
    args = _build_parser().parse_args(argv)
    load_dotenv()
    _configure_logging(args.log_level)

    offset_hours = parse_offset_hours(args.offset, default=local_utc_offset_hours())
    try:
        window = resolve_window(args.date, offset_hours)
    except InvalidDateError as exc:
        log_error(logger, "Rejected target date: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        config = WorklogConfig.from_env()
        summarizer = create_summarizer()
    except ConfigurationError as exc:
        log_error(logger, "Rejected configuration: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Using timezone offset: {window.offset_hours} hours from UTC")
    print(f"\nGenerating summary for: {window.label}")

    report, summary = asyncio.run(_run_and_close(config, window, summarizer))

    print(f"\nFound {len(report.records)} activity items")
    for line in render_report(report):
        print(line)
    print(f"\n{SUMMARY_HEADER}\n")
    print(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
