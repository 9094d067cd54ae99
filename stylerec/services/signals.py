# =============================================
# File: stylerec/services/signals.py
# Purpose: Gather a user's favorites and recent searches; read failures degrade to empty
# =============================================
from __future__ import annotations
from typing import List

from loguru import logger

from stylerec.models import Product, UserSignal
from stylerec.services.store import RecordStore


class SignalCollector:
    def __init__(self, store: RecordStore, favorites_limit: int = 10, search_limit: int = 5) -> None:
        self.store = store
        self.favorites_limit = favorites_limit
        self.search_limit = search_limit

    def _favorites(self, user_id: str) -> List[Product]:
        try:
            items = self.store.favorite_products(user_id, self.favorites_limit) or []
        except Exception as e:
            logger.warning(f"[signals] favorites read failed user={user_id}: {e}")
            return []
        # dedupe by id, keep first (newest) occurrence
        seen = set()
        out: List[Product] = []
        for p in items:
            if p.id not in seen:
                seen.add(p.id)
                out.append(p)
        return out[: self.favorites_limit]

    def _queries(self, user_id: str) -> List[str]:
        try:
            rows = self.store.recent_queries(user_id, self.search_limit) or []
        except Exception as e:
            logger.warning(f"[signals] search history read failed user={user_id}: {e}")
            return []
        queries = [str(q).strip() for q in rows if q and str(q).strip()]
        return queries[: self.search_limit]

    def collect(self, user_id: str) -> UserSignal:
        signal = UserSignal(
            favorite_items=self._favorites(user_id),
            recent_queries=self._queries(user_id),
        )
        logger.debug(
            f"[signals] user={user_id} favorites={len(signal.favorite_items)} queries={len(signal.recent_queries)}"
        )
        return signal
