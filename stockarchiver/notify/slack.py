"""Slack webhook notifications."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from stockarchiver.errors import NotificationError
from stockarchiver.logic.summary import RunSummary
from stockarchiver.utils.dates import iso_timestamp

logger = logging.getLogger(__name__)
failure_logger = logging.getLogger("stockarchiver.notify.failures")

ARCHIVED_LIST_LIMIT = 20


def summary_blocks(summary: RunSummary, completed_at: str) -> list[dict[str, Any]]:
    blocks: list[dict[str, Any]] = [
        {"type": "header", "text": {"type": "plain_text", "text": "📦 Shopify Archive Run"}},
        {
            "type": "section",
            "fields": [
                {"type": "mrkdwn", "text": f"*Active Products Scanned:*\n{summary.total_active}"},
                {"type": "mrkdwn", "text": f"*Gift Cards Skipped:*\n{summary.skipped_gift_cards}"},
                {"type": "mrkdwn", "text": f"*Custom Denim Cut Skipped:*\n{summary.skipped_excluded}"},
                {"type": "mrkdwn", "text": f"*Archived (0 stock):*\n{summary.archived}"},
                {"type": "mrkdwn", "text": f"*Failed:*\n{summary.failed}"},
            ],
        },
    ]
    titles = summary.archived_titles
    if titles:
        listing = "\n".join(f"• {title}" for title in titles[:ARCHIVED_LIST_LIMIT])
        if len(titles) > ARCHIVED_LIST_LIMIT:
            listing += f"\n_...and {len(titles) - ARCHIVED_LIST_LIMIT} more_"
        blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": f"*Archived Products:*\n{listing}"}})
    blocks.append({"type": "context", "elements": [{"type": "mrkdwn", "text": f"Run completed at {completed_at}"}]})
    return blocks


def exception_blocks(product_id: int | str, title: str, error: str) -> list[dict[str, Any]]:
    text = f"⚠️ *Archive Failed*\nProduct: *{title}* (ID: {product_id})\nError: {error}"
    return [{"type": "section", "text": {"type": "mrkdwn", "text": text}}]


class SlackNotifier:
    def __init__(self, webhook_url: str | None, *, session: httpx.AsyncClient | None = None) -> None:
        self.webhook_url = webhook_url
        self._session = session
        self.failures: list[NotificationError] = []

    async def send(self, payload: dict[str, Any]) -> None:
        if not self.webhook_url:
            logger.warning("SLACK_WEBHOOK_URL not set, skipping notification")
            return
        try:
            if self._session is not None:
                response = await self._session.post(self.webhook_url, json=payload)
            else:
                async with httpx.AsyncClient(timeout=15.0) as client:
                    response = await client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Slack request failed: {exc}") from exc
        if response.status_code != 200:
            raise NotificationError(f"Slack returned {response.status_code}: {response.text}")

    async def notify_summary(self, summary: RunSummary) -> None:
        await self.send({"blocks": summary_blocks(summary, iso_timestamp())})

    async def notify_exception(self, product_id: int | str, title: str, error: str) -> None:
        await self.send({"blocks": exception_blocks(product_id, title, error)})

    async def dispatch(self, method: str, *args: Any) -> bool:
        """Run a notify_* method, recording instead of raising on failure."""
        try:
            await getattr(self, method)(*args)
        except Exception as exc:
            failure = exc if isinstance(exc, NotificationError) else NotificationError(f"Slack notification error: {exc}")
            self.failures.append(failure)
            failure_logger.error("Slack notification failed: %s", failure)
            return False
        return True
