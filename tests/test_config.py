# =============================================
# File: tests/test_config.py
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from stylerec.config import DEFAULT_MODEL, Settings, parse_static_tokens

_VARS = [
    "LLM_GATEWAY_URL", "LLM_API_KEY", "LOVABLE_API_KEY", "OPENAI_API_KEY", "LLM_MODEL",
    "LLM_TIMEOUT_SECONDS", "LLM_MAX_RETRIES", "LLM_MALFORMED_POLICY", "STORE_BACKEND",
    "SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "DB_URL", "REC_RESULT_LIMIT", "STATIC_TOKENS",
]

def _clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)

def test_defaults_without_env(monkeypatch):
    _clean_env(monkeypatch)
    s = Settings.from_env(dotenv=False)
    assert s.llm_model == DEFAULT_MODEL
    assert s.llm_api_key is None
    assert s.llm_max_retries == 0
    assert s.llm_malformed_policy == "degrade"
    assert s.store_backend == "sql"
    assert (s.favorites_limit, s.search_limit, s.result_limit) == (10, 5, 6)

def test_supabase_url_selects_supabase_backend(monkeypatch):
    _clean_env(monkeypatch)
    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setenv("LOVABLE_API_KEY", "lovable-key")
    s = Settings.from_env(dotenv=False)
    assert s.store_backend == "supabase"
    assert s.supabase_key == "service-key"
    assert s.llm_api_key == "lovable-key"

def test_explicit_values_and_bad_numbers(monkeypatch):
    _clean_env(monkeypatch)
    monkeypatch.setenv("LLM_API_KEY", "k1")
    monkeypatch.setenv("OPENAI_API_KEY", "k2")
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "not-a-number")
    monkeypatch.setenv("LLM_MAX_RETRIES", "9")
    monkeypatch.setenv("LLM_MALFORMED_POLICY", "FAIL")
    monkeypatch.setenv("REC_RESULT_LIMIT", "3")
    s = Settings.from_env(dotenv=False)
    assert s.llm_api_key == "k1"
    assert s.llm_timeout_seconds == 10.0
    assert s.llm_max_retries == 3
    assert s.llm_malformed_policy == "fail"
    assert s.result_limit == 3

def test_parse_static_tokens():
    assert parse_static_tokens("a:u1, b:u2,broken,:x,c:") == {"a": "u1", "b": "u2"}
    assert parse_static_tokens(None) == {}
