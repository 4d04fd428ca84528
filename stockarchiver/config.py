"""Environment-backed settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from stockarchiver.errors import PreconditionError

DEFAULT_API_VERSION = "2024-10"
DEFAULT_EXCLUDED_TITLE_PATTERNS = ("custom denim cut",)
DEFAULT_ARCHIVE_DELAY = 0.25


@dataclass(frozen=True, slots=True)
class Settings:
    shop_domain: str | None
    access_token: str | None
    api_version: str = DEFAULT_API_VERSION
    slack_webhook_url: str | None = None
    excluded_title_patterns: tuple[str, ...] = field(default=DEFAULT_EXCLUDED_TITLE_PATTERNS)
    archive_delay: float = DEFAULT_ARCHIVE_DELAY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            shop_domain=env.get("SHOP_DOMAIN") or None,
            access_token=env.get("SHOPIFY_ACCESS_TOKEN") or None,
            api_version=env.get("SHOPIFY_API_VERSION") or DEFAULT_API_VERSION,
            slack_webhook_url=env.get("SLACK_WEBHOOK_URL") or None,
            excluded_title_patterns=_parse_patterns(env.get("EXCLUDED_TITLE_PATTERNS")),
            archive_delay=_parse_delay(env.get("ARCHIVE_DELAY_SECONDS")),
        )

    def require_credentials(self) -> None:
        missing = [
            name
            for name, value in (("SHOP_DOMAIN", self.shop_domain), ("SHOPIFY_ACCESS_TOKEN", self.access_token))
            if not value
        ]
        if missing:
            raise PreconditionError(f"Missing {' or '.join(missing)}")


def _parse_patterns(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_EXCLUDED_TITLE_PATTERNS
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


def _parse_delay(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_ARCHIVE_DELAY
    try:
        delay = float(raw)
    except ValueError:
        raise PreconditionError(f"ARCHIVE_DELAY_SECONDS must be a number, got {raw!r}") from None
    if delay < 0:
        raise PreconditionError(f"ARCHIVE_DELAY_SECONDS must be non-negative, got {raw!r}")
    return delay
