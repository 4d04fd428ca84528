"""Datetime helpers."""

from __future__ import annotations

import os

import pendulum

DEFAULT_TZ = "America/Los_Angeles"


def timezone_name() -> str:
    return os.environ.get("TIMEZONE") or DEFAULT_TZ


def iso_timestamp(tz_name: str | None = None) -> str:
    """Current time as ISO 8601 with the offset of the job timezone."""
    return pendulum.now(pendulum.timezone(tz_name or timezone_name())).to_iso8601_string()
