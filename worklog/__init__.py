"""Summarize a day of GitHub activity into a timesheet entry.

The pipeline resolves a target day (:mod:`worklog.window`), fetches the
configured user's commits, pull requests, and reviews per repository
(:mod:`worklog.github`), aggregates them in order
(:mod:`worklog.aggregation`), and asks a language model for a short summary
(:mod:`worklog.summary`). :mod:`worklog.cli` wires the stages together.
"""

from __future__ import annotations

__version__ = "0.1.0"
