# =============================================
# File: stylerec/services/pipeline.py
# Purpose: Collect -> Infer -> Score -> Rank, once per request, no shared state
# =============================================
from __future__ import annotations
from typing import Any, Dict

from loguru import logger

from stylerec.errors import RecommendationError, UpstreamError
from stylerec.models import RecommendationResult
from stylerec.services.inference import TagInferencer
from stylerec.services.ranking import MAX_RESULTS, select_top
from stylerec.services.scoring import score_products
from stylerec.services.signals import SignalCollector
from stylerec.services.store import RecordStore, build_store
from stylerec.utils import slog
from stylerec.utils.timing import timer


class RecommendationPipeline:
    def __init__(
        self,
        store: RecordStore,
        collector: SignalCollector,
        inferencer: TagInferencer,
        result_limit: int = MAX_RESULTS,
    ) -> None:
        self.store = store
        self.collector = collector
        self.inferencer = inferencer
        self.result_limit = result_limit

    def _run(self, user_id: str, stages: Dict[str, int]) -> tuple[RecommendationResult, Dict[str, Any]]:
        with timer() as elapsed:
            signal = self.collector.collect(user_id)
        stages["collect_ms"] = elapsed()

        # RateLimitError / UpstreamError propagate untouched; nothing is scored
        with timer() as elapsed:
            tags, model = self.inferencer.infer_with_model(signal)
        stages["infer_ms"] = elapsed()

        with timer() as elapsed:
            try:
                catalog = self.store.catalog()
            except Exception as e:
                raise UpstreamError(f"catalog read failed: {e}") from e
        stages["catalog_ms"] = elapsed()

        with timer() as elapsed:
            scored = score_products(catalog, tags, signal.favorite_ids)
            picks = select_top(scored, limit=self.result_limit)
        stages["rank_ms"] = elapsed()

        counts = {
            "favorites": len(signal.favorite_items),
            "queries": len(signal.recent_queries),
            "tags": len(tags),
            "catalog_size": len(catalog),
            "results": len(picks),
            "model": model,
        }
        return RecommendationResult(recommendations=picks, suggested_tags=tags, model=model), counts

    def run(self, user_id: str) -> RecommendationResult:
        stages: Dict[str, int] = {}
        try:
            result, counts = self._run(user_id, stages)
        except RecommendationError as e:
            slog.log_event("pipeline.failed", user_id=user_id, error_kind=e.kind, error=e.detail, **stages)
            raise
        except Exception as e:
            logger.exception(f"[pipeline] unexpected failure user={user_id}")
            slog.log_event("pipeline.failed", user_id=user_id, error_kind="unexpected", error=str(e), **stages)
            raise UpstreamError(f"unexpected: {type(e).__name__}") from e

        slog.log_event("pipeline.completed", user_id=user_id, **counts, **stages)
        return result


def build_pipeline(settings) -> RecommendationPipeline:
    store = build_store(settings)
    return RecommendationPipeline(
        store=store,
        collector=SignalCollector(store, settings.favorites_limit, settings.search_limit),
        inferencer=TagInferencer.from_settings(settings),
        result_limit=settings.result_limit,
    )
