"""Zero-stock archive job orchestration."""

from __future__ import annotations

import asyncio
import enum
import logging
import os
import sys
from typing import Sequence

import httpx
from dotenv import load_dotenv

from stockarchiver.config import Settings
from stockarchiver.errors import PreconditionError
from stockarchiver.ingest.shopify import ShopifyAdminClient
from stockarchiver.logic.archive import archive_products
from stockarchiver.logic.eligibility import ExclusionRule, default_rules, select_for_archive
from stockarchiver.logic.summary import RunSummary, build_summary
from stockarchiver.notify.slack import SlackNotifier
from stockarchiver.utils.dates import iso_timestamp
from stockarchiver.utils.rate_limit import FixedIntervalPacer

logger = logging.getLogger(__name__)


class RunState(str, enum.Enum):
    NOT_STARTED = "not_started"
    FETCHING_PRODUCTS = "fetching_products"
    FILTERING = "filtering"
    ARCHIVING = "archiving"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


class ArchiveRun:
    def __init__(
        self,
        client: ShopifyAdminClient,
        notifier: SlackNotifier,
        *,
        pacer: FixedIntervalPacer | None = None,
        rules: Sequence[ExclusionRule] | None = None,
    ) -> None:
        self.client = client
        self.notifier = notifier
        self.pacer = pacer or FixedIntervalPacer()
        self.rules = list(rules) if rules is not None else default_rules()
        self.state = RunState.NOT_STARTED
        self.history: list[RunState] = [self.state]
        self.summary: RunSummary | None = None

    def _enter(self, state: RunState) -> None:
        logger.debug("Run state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    async def execute(self) -> RunSummary:
        try:
            return await self._execute()
        except Exception:
            self._enter(RunState.FAILED)
            raise

    async def _execute(self) -> RunSummary:
        self._enter(RunState.FETCHING_PRODUCTS)
        logger.info("[ARCHIVE] Fetching active products...")
        products = await self.client.fetch_all_active_products()
        logger.info("[ARCHIVE] Found %s active products", len(products))

        self._enter(RunState.FILTERING)
        eligibility = select_for_archive(products, self.rules)
        logger.info("[ARCHIVE] Skipped %s gift cards", eligibility.skipped_gift_cards)
        logger.info("[ARCHIVE] Skipped %s Custom Denim Cut products", eligibility.skipped_excluded)
        logger.info("[ARCHIVE] Found %s products with zero stock", len(eligibility.to_archive))

        self._enter(RunState.ARCHIVING)
        outcomes = await archive_products(self.client, eligibility.to_archive, self.notifier, self.pacer)

        self._enter(RunState.REPORTING)
        summary = build_summary(eligibility, outcomes)
        self.summary = summary
        logger.info(
            "[ARCHIVE] Complete: %s archived, %s failed, %s gift cards skipped, %s Custom Denim Cut skipped",
            summary.archived,
            summary.failed,
            summary.skipped_gift_cards,
            summary.skipped_excluded,
        )
        await self.notifier.dispatch("notify_summary", summary)

        self._enter(RunState.DONE)
        return summary


async def run_archive(
    settings: Settings | None = None,
    *,
    session: httpx.AsyncClient | None = None,
    slack_session: httpx.AsyncClient | None = None,
    pacer: FixedIntervalPacer | None = None,
    configure_logging: bool = False,
) -> int:
    """Run one archive pass and return the process exit code."""
    load_dotenv()
    if configure_logging:
        setup_logging(os.environ.get("LOG_LEVEL", "INFO").upper())
    logger.info("[ARCHIVE] Started at %s", iso_timestamp())

    try:
        settings = settings or Settings.from_env()
        settings.require_credentials()
    except PreconditionError as exc:
        logger.error("[ARCHIVE] %s", exc)
        return 1

    client = ShopifyAdminClient(
        settings.shop_domain,
        settings.access_token,
        api_version=settings.api_version,
        session=session,
    )
    notifier = SlackNotifier(settings.slack_webhook_url, session=slack_session)
    run = ArchiveRun(
        client,
        notifier,
        pacer=pacer or FixedIntervalPacer(interval=settings.archive_delay),
        rules=default_rules(settings.excluded_title_patterns),
    )
    try:
        await run.execute()
    except Exception as exc:
        logger.error("[ARCHIVE] Fatal error: %s", exc)
        await notifier.dispatch("notify_exception", "N/A", "Archive Run Failed", str(exc))
        return 1
    finally:
        await client.close()

    logger.info("[ARCHIVE] Finished at %s", iso_timestamp())
    return 0


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> int:
    return asyncio.run(run_archive(configure_logging=True))


if __name__ == "__main__":
    sys.exit(main())
