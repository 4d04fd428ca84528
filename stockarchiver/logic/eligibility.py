"""Classification of active products into skip buckets and archive candidates.

Rules are applied in a fixed order; each product lands in the bucket of the
first rule that excludes it. Products surviving every rule are candidates
when their summed inventory is zero or negative. Input order is preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from stockarchiver.config import DEFAULT_EXCLUDED_TITLE_PATTERNS
from stockarchiver.ingest.models import Product

GIFT_CARD_PRODUCT_TYPES = frozenset({"gift card", "gift_card", "gift cards"})
GIFT_CARD_TITLE_MARKER = "gift card"


def normalize(value: str | None) -> str:
    return (value or "").strip().lower()


@dataclass(frozen=True, slots=True)
class ProductView:
    """Product with its normalized text fields computed once."""

    product: Product
    title: str
    product_type: str

    @classmethod
    def of(cls, product: Product) -> "ProductView":
        return cls(product=product, title=normalize(product.title), product_type=normalize(product.product_type))


@dataclass(frozen=True, slots=True)
class ExclusionRule:
    name: str
    reason: str
    predicate: Callable[[ProductView], bool]

    def excludes(self, view: ProductView) -> bool:
        return self.predicate(view)


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    total: int
    skipped: dict[str, int]
    not_zero_stock: int
    to_archive: list[Product]

    @property
    def skipped_gift_cards(self) -> int:
        return self.skipped.get("gift_card", 0)

    @property
    def skipped_excluded(self) -> int:
        return self.skipped.get("excluded_title", 0)


def is_gift_card(view: ProductView) -> bool:
    return (
        view.product.gift_card
        or view.product_type in GIFT_CARD_PRODUCT_TYPES
        or GIFT_CARD_TITLE_MARKER in view.title
    )


def title_contains_any(patterns: Iterable[str]) -> Callable[[ProductView], bool]:
    needles = tuple(normalize(p) for p in patterns if normalize(p))

    def predicate(view: ProductView) -> bool:
        return any(needle in view.title for needle in needles)

    return predicate


def default_rules(excluded_title_patterns: Sequence[str] = DEFAULT_EXCLUDED_TITLE_PATTERNS) -> list[ExclusionRule]:
    return [
        ExclusionRule("gift_card", "gift cards never carry stock", is_gift_card),
        ExclusionRule(
            "excluded_title",
            "made-to-order categories are kept active",
            title_contains_any(excluded_title_patterns),
        ),
    ]


def total_inventory(product: Product) -> int:
    return sum(variant.inventory_quantity or 0 for variant in product.variants)


def is_zero_stock(product: Product) -> bool:
    return total_inventory(product) <= 0


def select_for_archive(
    products: Sequence[Product],
    rules: Sequence[ExclusionRule] | None = None,
) -> EligibilityResult:
    rules = default_rules() if rules is None else rules
    skipped = {rule.name: 0 for rule in rules}
    remaining = [ProductView.of(p) for p in products]
    for rule in rules:
        kept = [view for view in remaining if not rule.excludes(view)]
        skipped[rule.name] += len(remaining) - len(kept)
        remaining = kept
    to_archive = [view.product for view in remaining if is_zero_stock(view.product)]
    return EligibilityResult(
        total=len(products),
        skipped=skipped,
        not_zero_stock=len(remaining) - len(to_archive),
        to_archive=to_archive,
    )
