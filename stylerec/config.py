# =============================================
# File: stylerec/config.py
# Purpose: Explicit settings object built once from env (.env supported)
# =============================================
from __future__ import annotations
import os
from typing import Dict, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def parse_static_tokens(raw: str | None) -> Dict[str, str]:
    """Parse "tokenA:user-1,tokenB:user-2" into {token: user_id}."""
    out: Dict[str, str] = {}
    for pair in (raw or "").split(","):
        token, sep, user_id = pair.strip().partition(":")
        if sep and token.strip() and user_id.strip():
            out[token.strip()] = user_id.strip()
    return out


class Settings(BaseModel):
    """
    Everything the pipeline needs to run. Built by the app at startup and
    handed down explicitly, so tests construct one directly instead of
    mutating the process environment.
    """
    # LLM gateway (OpenAI-compatible chat completions)
    llm_gateway_url: str = DEFAULT_GATEWAY_URL
    llm_api_key: Optional[str] = None
    llm_model: str = DEFAULT_MODEL
    llm_timeout_seconds: float = Field(10.0, gt=0)
    llm_max_retries: int = Field(0, ge=0, le=3)
    llm_malformed_policy: Literal["degrade", "fail"] = "degrade"

    # Record store
    store_backend: Literal["supabase", "sql"] = "sql"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    store_timeout_seconds: float = Field(10.0, gt=0)
    db_url: str = "sqlite:///./app.db"
    static_tokens: Dict[str, str] = Field(default_factory=dict)

    # Pipeline limits
    favorites_limit: int = Field(10, ge=0)
    search_limit: int = Field(5, ge=0)
    result_limit: int = Field(6, ge=0)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        supabase_url = os.getenv("SUPABASE_URL") or None
        backend = (os.getenv("STORE_BACKEND") or ("supabase" if supabase_url else "sql")).strip().lower()
        policy = (os.getenv("LLM_MALFORMED_POLICY") or "degrade").strip().lower()

        return cls(
            llm_gateway_url=os.getenv("LLM_GATEWAY_URL", DEFAULT_GATEWAY_URL),
            llm_api_key=(
                os.getenv("LLM_API_KEY")
                or os.getenv("LOVABLE_API_KEY")
                or os.getenv("OPENAI_API_KEY")
                or None
            ),
            llm_model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            llm_timeout_seconds=_float_env("LLM_TIMEOUT_SECONDS", 10.0),
            llm_max_retries=max(0, min(3, _int_env("LLM_MAX_RETRIES", 0))),
            llm_malformed_policy="fail" if policy == "fail" else "degrade",
            store_backend="supabase" if backend == "supabase" else "sql",
            supabase_url=supabase_url,
            supabase_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY") or None,
            store_timeout_seconds=_float_env("STORE_TIMEOUT_SECONDS", 10.0),
            db_url=os.getenv("DB_URL", "sqlite:///./app.db"),
            static_tokens=parse_static_tokens(os.getenv("STATIC_TOKENS")),
            favorites_limit=max(0, _int_env("REC_FAVORITES_LIMIT", 10)),
            search_limit=max(0, _int_env("REC_SEARCH_LIMIT", 5)),
            result_limit=max(0, _int_env("REC_RESULT_LIMIT", 6)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE") or None,
        )
