"""Shared constants for summarizer configuration.

Constants
---------
MIN_TEMPERATURE : float
    Minimum allowed temperature value for OpenAI API requests (0.0).
MAX_TEMPERATURE : float
    Maximum allowed temperature value for OpenAI API requests (2.0).
NO_ACTIVITY_TEMPLATE : str
    Message returned without calling a backend when nothing was collected.
SUMMARY_FAILED_MESSAGE : str
    Placeholder returned when the backend fails.

"""

from __future__ import annotations

# Validation bounds for temperature (OpenAI API range)
MIN_TEMPERATURE: float = 0.0
MAX_TEMPERATURE: float = 2.0

NO_ACTIVITY_TEMPLATE = "No GitHub activity found for {date}."
SUMMARY_FAILED_MESSAGE = "Failed to generate summary due to API error."
