"""Shared helpers for slugs and timestamps."""
