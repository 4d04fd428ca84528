"""Per-product outcomes and the run summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from stockarchiver.logic.eligibility import EligibilityResult


@dataclass(frozen=True, slots=True)
class ArchiveOutcome:
    product_id: int | str
    title: str
    archived: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class RunSummary:
    total_active: int
    archived: int
    failed: int
    skipped_gift_cards: int
    skipped_excluded: int
    not_zero_stock: int
    results: tuple[ArchiveOutcome, ...]

    @property
    def archived_titles(self) -> list[str]:
        return [r.title for r in self.results if r.archived]

    def is_balanced(self) -> bool:
        accounted = self.archived + self.failed + self.skipped_gift_cards + self.skipped_excluded + self.not_zero_stock
        return accounted == self.total_active


def build_summary(eligibility: EligibilityResult, outcomes: Sequence[ArchiveOutcome]) -> RunSummary:
    archived = sum(1 for o in outcomes if o.archived)
    return RunSummary(
        total_active=eligibility.total,
        archived=archived,
        failed=len(outcomes) - archived,
        skipped_gift_cards=eligibility.skipped_gift_cards,
        skipped_excluded=eligibility.skipped_excluded,
        not_zero_stock=eligibility.not_zero_stock,
        results=tuple(outcomes),
    )
