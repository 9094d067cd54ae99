# =============================================
# File: stylerec/services/scoring.py
# Purpose: Score every catalog product against the inferred tags (fuzzy match)
# =============================================
from __future__ import annotations
from typing import Iterable, List, Sequence

from stylerec.models import Product, ScoredProduct


def fuzzy_match(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction ("boho" ~ "boho-chic")."""
    x = (a or "").strip().lower()
    y = (b or "").strip().lower()
    if not x or not y:
        return False
    return x in y or y in x


def match_count(product_tags: Sequence[str], suggested: Sequence[str]) -> int:
    # Counts product tags, not suggestions: a tag matching two suggestions still counts once
    return sum(1 for tag in product_tags if any(fuzzy_match(tag, s) for s in suggested))


def score_products(
    products: Iterable[Product],
    suggested_tags: Sequence[str],
    favorite_ids: Iterable[str] = (),
) -> List[ScoredProduct]:
    favs = set(favorite_ids)
    suggested = [s for s in suggested_tags if s and s.strip()]
    return [
        ScoredProduct(
            product=p,
            score=match_count(p.tags, suggested),
            is_favorite=p.id in favs,
        )
        for p in products
    ]
