"""Allow ``python -m worklog``."""

from __future__ import annotations

from worklog.cli import main

raise SystemExit(main())
