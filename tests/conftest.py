import json
import re
from typing import Any

import httpx
import pytest

from stockarchiver.config import Settings
from stockarchiver.ingest.models import Product

SHOP_DOMAIN = "hexco.myshopify.com"
API_BASE = f"https://{SHOP_DOMAIN}/admin/api/2024-10"
PRODUCTS_URL = f"{API_BASE}/products.json"
WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


def product_json(product_id, title, *, quantities=(5,), product_type="", gift_card=False, status="active") -> dict[str, Any]:
    return {
        "id": product_id,
        "title": title,
        "product_type": product_type,
        "gift_card": gift_card,
        "status": status,
        "variants": [{"id": product_id * 100 + idx, "inventory_quantity": qty} for idx, qty in enumerate(quantities)],
    }


def make_product(product_id=1, title="Linen Shirt", **kwargs) -> Product:
    return Product.from_api(product_json(product_id, title, **kwargs))


class FakeShop:
    """In-memory Admin API: lists active products and archives on PUT."""

    ARCHIVE_RE = re.compile(rf"{re.escape(API_BASE)}/products/(?P<product_id>\d+)\.json")

    def __init__(self, products: list[dict[str, Any]], *, page_size: int = 250, failing_ids=(), garbled_ids=()) -> None:
        self.products = {p["id"]: dict(p) for p in products}
        self.page_size = page_size
        self.failing_ids = set(failing_ids)
        self.garbled_ids = set(garbled_ids)
        self.archive_calls: list[int] = []

    def install(self, router) -> None:
        router.get(PRODUCTS_URL).mock(side_effect=self._list)
        router.put(url__regex=self.ARCHIVE_RE.pattern).mock(side_effect=self._archive)

    def _list(self, request: httpx.Request) -> httpx.Response:
        active = [p for p in self.products.values() if p["status"] == "active"]
        offset = int(request.url.params.get("page_info", 0))
        page = active[offset : offset + self.page_size]
        headers = {}
        if offset + self.page_size < len(active):
            next_url = f"{PRODUCTS_URL}?limit={self.page_size}&page_info={offset + self.page_size}"
            headers["Link"] = f'<{next_url}>; rel="next"'
        return httpx.Response(200, json={"products": page}, headers=headers)

    def _archive(self, request: httpx.Request, product_id: str) -> httpx.Response:
        pid = int(product_id)
        self.archive_calls.append(pid)
        if pid in self.failing_ids:
            return httpx.Response(422, text='{"errors":"locked"}')
        if pid in self.garbled_ids:
            return httpx.Response(200, text="<html>proxy</html>")
        body = json.loads(request.content)
        self.products[pid]["status"] = body["product"]["status"]
        return httpx.Response(200, json={"product": self.products[pid]})


@pytest.fixture()
def settings():
    return Settings(
        shop_domain=SHOP_DOMAIN,
        access_token="shpat_test",
        slack_webhook_url=WEBHOOK_URL,
        archive_delay=0.0,
    )


@pytest.fixture()
def catalog():
    return [
        product_json(1, "Gift Card", quantities=(), gift_card=True),
        product_json(2, "Custom Denim Cut Jacket", quantities=(0,)),
        product_json(3, "Oversold Tee", quantities=(-5, 2)),
        product_json(4, "Placeholder Hoodie", quantities=()),
        product_json(5, "Linen Shirt", quantities=(3, 4)),
    ]
