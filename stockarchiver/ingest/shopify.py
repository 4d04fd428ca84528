"""Shopify Admin REST client: active catalog paging and archive mutation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from stockarchiver.config import DEFAULT_API_VERSION
from stockarchiver.errors import ArchiveError, TransportError
from stockarchiver.ingest.models import Product

logger = logging.getLogger(__name__)

PAGE_LIMIT = 250


class ShopifyAdminClient:
    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        session: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = f"https://{shop_domain.rstrip('/')}/admin/api/{api_version}"
        self._owns_session = session is None
        self._session = session or httpx.AsyncClient(timeout=30.0)
        self._headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        }

    async def close(self) -> None:
        if self._owns_session:
            await self._session.aclose()

    def first_page_url(self) -> str:
        return f"{self.base_url}/products.json?status=active&limit={PAGE_LIMIT}"

    async def fetch_all_active_products(self) -> list[Product]:
        products: list[Product] = []
        url: str | None = self.first_page_url()
        page = 0
        while url:
            page += 1
            try:
                response = await self._session.get(url, headers=self._headers)
            except httpx.HTTPError as exc:
                raise TransportError(f"Shopify API request failed: {exc}") from exc
            if not response.is_success:
                raise TransportError(f"Shopify API error ({response.status_code}): {response.text}")
            batch = response.json().get("products") or []
            products.extend(Product.from_api(item) for item in batch)
            logger.debug("Fetched page %s with %s products", page, len(batch))
            url = next_page_url(response)
        logger.info("Fetched %s active products across %s pages", len(products), page)
        return products

    async def archive_product(self, product_id: int | str) -> Product:
        url = f"{self.base_url}/products/{product_id}.json"
        payload: dict[str, Any] = {"product": {"id": product_id, "status": "archived"}}
        try:
            response = await self._session.put(url, json=payload, headers=self._headers)
        except httpx.HTTPError as exc:
            raise ArchiveError(product_id, None, str(exc)) from exc
        if not response.is_success:
            raise ArchiveError(product_id, response.status_code, response.text)
        try:
            return Product.from_api(response.json()["product"])
        except (ValueError, KeyError, TypeError) as exc:
            raise ArchiveError(product_id, response.status_code, f"unexpected response body: {response.text}") from exc


def next_page_url(response: httpx.Response) -> str | None:
    """Return the rel="next" target of the Link header, if any."""
    return response.links.get("next", {}).get("url")
