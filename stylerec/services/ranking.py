# stylerec/services/ranking.py
from __future__ import annotations
from typing import Iterable, List

from stylerec.models import Product, ScoredProduct

MAX_RESULTS = 6


def select_top(scored: Iterable[ScoredProduct], limit: int = MAX_RESULTS) -> List[Product]:
    """
    Keep non-favorite products with a positive score, best first.
    sorted() is stable, so equal scores keep catalog order.
    """
    eligible = [s for s in scored if not s.is_favorite and s.score > 0]
    ranked = sorted(eligible, key=lambda s: s.score, reverse=True)
    return [s.product for s in ranked[: max(0, limit)]]
