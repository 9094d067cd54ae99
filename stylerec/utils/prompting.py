# =============================================
# File: stylerec/utils/prompting.py
# Purpose: Build the stylist chat messages from a user's signals
# =============================================
from __future__ import annotations
from typing import Dict, List

from stylerec.models import Product, UserSignal
from .sanitize import collapse_ws, sanitize_signal_text

SYS_PROMPT = (
    "You are a fashion stylist. Based on user preferences, suggest product tags/keywords they would like. "
    "Return ONLY a JSON array of 5-8 style tags, nothing else."
)

CONTEXT_TEMPLATE = (
    "User's favorite items: {favorites}. \n"
    "Recent searches: {searches}."
)

def _describe_item(p: Product) -> str:
    name = sanitize_signal_text(p.name) or "Item"
    tags = [collapse_ws(t) for t in p.tags if collapse_ws(t)]
    return f"{name} ({', '.join(tags)})"

def build_context(signal: UserSignal) -> str:
    """
    Summarize favorites (name + tags) and recent searches in one string.
    Empty sections are kept so the model always sees the same shape.
    """
    favorites = "; ".join(_describe_item(p) for p in signal.favorite_items)
    queries = [sanitize_signal_text(q) for q in signal.recent_queries]
    searches = ", ".join(q for q in queries if q)
    return CONTEXT_TEMPLATE.format(favorites=favorites, searches=searches)

def build_messages(context: str) -> List[Dict]:
    """Messages for the OpenAI-compatible Chat Completions API."""
    return [
        {"role": "system", "content": SYS_PROMPT},
        {"role": "user", "content": context},
    ]
