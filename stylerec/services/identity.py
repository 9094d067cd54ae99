# =============================================
# File: stylerec/services/identity.py
# Purpose: Bearer credential -> user id (Supabase auth or static dev tokens)
# =============================================
from __future__ import annotations
from typing import Dict, Optional, Protocol

from loguru import logger

from stylerec.errors import AuthError


class IdentityVerifier(Protocol):
    def verify(self, token: str) -> str: ...


def bearer_token(authorization: Optional[str]) -> str:
    """Extract the credential from an `Authorization: Bearer <token>` header."""
    parts = (authorization or "").split(None, 1)
    if parts and parts[0].lower() == "bearer":
        parts = parts[1:]
    raw = parts[0].strip() if parts else ""
    if not raw:
        raise AuthError("missing bearer credential")
    return raw


class SupabaseIdentity:
    def __init__(self, client) -> None:
        self.client = client

    def verify(self, token: str) -> str:
        try:
            resp = self.client.auth.get_user(token)
        except Exception as e:
            logger.info(f"[identity] token rejected: {type(e).__name__}")
            raise AuthError("token rejected by auth service") from e
        user = getattr(resp, "user", None)
        user_id = getattr(user, "id", None)
        if not user_id:
            raise AuthError("no user for token")
        return str(user_id)


class StaticTokenIdentity:
    """Fixed token -> user map for the SQL backend and local runs."""

    def __init__(self, tokens: Dict[str, str]) -> None:
        self.tokens = dict(tokens or {})

    def verify(self, token: str) -> str:
        user_id = self.tokens.get(token)
        if not user_id:
            raise AuthError("unknown token")
        return user_id


def build_identity(settings, store=None) -> IdentityVerifier:
    if settings.store_backend == "supabase":
        # Reuse the store's client when it has one
        client = getattr(store, "client", None)
        if client is None:
            from supabase import create_client
            client = create_client(settings.supabase_url, settings.supabase_key)
        return SupabaseIdentity(client)
    return StaticTokenIdentity(settings.static_tokens)
