# =============================================
# File: stylerec/deps.py
# Purpose: FastAPI dependencies: settings, pipeline and identity verifier (built once)
# =============================================
from __future__ import annotations
from functools import lru_cache

from stylerec.config import Settings
from stylerec.errors import UpstreamError
from stylerec.services.identity import IdentityVerifier, build_identity
from stylerec.services.pipeline import RecommendationPipeline, build_pipeline


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def _pipeline() -> RecommendationPipeline:
    return build_pipeline(get_settings())


def get_pipeline() -> RecommendationPipeline:
    try:
        return _pipeline()
    except Exception as e:
        raise UpstreamError(f"pipeline setup failed: {e}") from e


@lru_cache(maxsize=1)
def _identity() -> IdentityVerifier:
    return build_identity(get_settings(), store=_pipeline().store)


def get_identity() -> IdentityVerifier:
    try:
        return _identity()
    except Exception as e:
        raise UpstreamError(f"identity setup failed: {e}") from e
