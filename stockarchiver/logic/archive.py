"""Sequential archiving of zero-stock products."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from stockarchiver.ingest.models import Product
from stockarchiver.logic.summary import ArchiveOutcome
from stockarchiver.notify.slack import SlackNotifier
from stockarchiver.utils.rate_limit import FixedIntervalPacer

logger = logging.getLogger(__name__)


class ProductArchiver(Protocol):
    async def archive_product(self, product_id: int | str) -> Product: ...


async def archive_products(
    client: ProductArchiver,
    products: Sequence[Product],
    notifier: SlackNotifier,
    pacer: FixedIntervalPacer,
) -> list[ArchiveOutcome]:
    outcomes: list[ArchiveOutcome] = []
    for product in products:
        try:
            await client.archive_product(product.id)
        except Exception as exc:
            logger.error("[ARCHIVE] Failed to archive %s: %s", product.title, exc)
            outcomes.append(ArchiveOutcome(product.id, product.title, archived=False, error=str(exc)))
            await notifier.dispatch("notify_exception", product.id, product.title, str(exc))
        else:
            logger.info("[ARCHIVE] Archived: %s (ID: %s)", product.title, product.id)
            outcomes.append(ArchiveOutcome(product.id, product.title, archived=True))
        await pacer.pause()
    return outcomes
