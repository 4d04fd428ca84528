"""Catalog snapshots as returned by the Admin API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Variant:
    id: int | str | None
    inventory_quantity: int = 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Variant":
        return cls(id=data.get("id"), inventory_quantity=int(data.get("inventory_quantity") or 0))


@dataclass(frozen=True, slots=True)
class Product:
    id: int | str
    title: str = ""
    product_type: str = ""
    gift_card: bool = False
    variants: tuple[Variant, ...] = field(default_factory=tuple)
    status: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Product":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            product_type=data.get("product_type") or "",
            gift_card=data.get("gift_card") is True,
            variants=tuple(Variant.from_api(v) for v in data.get("variants") or ()),
            status=data.get("status"),
        )
