# stylerec/routers/recommend.py
from __future__ import annotations

import time
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from stylerec.deps import get_identity, get_pipeline
from stylerec.errors import RecommendationError, UpstreamError
from stylerec.models import RecommendationResult
from stylerec.services.identity import IdentityVerifier, bearer_token
from stylerec.services.pipeline import RecommendationPipeline
from stylerec.utils.metrics import record_request

router = APIRouter(tags=["recommend"])


@router.post("/recommendations", response_model=RecommendationResult)
@router.get("/recommendations", response_model=RecommendationResult)
def get_recommendations(
    request: Request,
    authorization: Optional[str] = Header(None),
    identity: IdentityVerifier = Depends(get_identity),
    pipeline: RecommendationPipeline = Depends(get_pipeline),
) -> RecommendationResult:
    """
    Personalized style recommendations for the signed-in user.

    Input: bearer credential only (no body).
    Output: up to 6 products plus the style tags inferred for the user.
    Errors: {"error": ...} with 401 / 429 / 500 (see main.py handler).
    """
    t0 = time.perf_counter()

    # Fail fast: nothing is read before the caller is identified
    user_id = identity.verify(bearer_token(authorization))
    request.state.log_context = {"user_id": user_id}

    try:
        result = pipeline.run(user_id)
    except RecommendationError:
        raise
    except Exception as e:
        raise UpstreamError(f"unexpected: {type(e).__name__}") from e

    latency_ms = int((time.perf_counter() - t0) * 1000)
    record_request(latency_ms=latency_ms, outcome="ok", empty=not result.recommendations, model=result.model)
    request.state.log_context.update({
        "tags": len(result.suggested_tags),
        "results": len(result.recommendations),
        "model": result.model,
    })
    return result
