# stylerec/utils/sanitize.py
from __future__ import annotations
import re
from typing import Iterable

# Search queries and product names are user/merchant supplied and end up in the prompt
_INJECTION_CUES = [
    "ignore previous instruction",
    "ignore the previous instruction",
    "ignore all previous instruction",
    "disregard previous instruction",
    "system prompt",
    "developer message",
    "you are chatgpt",
    "do not follow the above",
    "reset the system",
    "jailbreak",
]

_WHITESPACE_RE = re.compile(r"\s+")
_SENT_SPLIT_RE = re.compile(r'(?<=[.!?])\s+')

def collapse_ws(text: str) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()

def _strip_injection_sentences(text: str, cues: Iterable[str] = _INJECTION_CUES) -> str:
    if not text:
        return ""
    parts = _SENT_SPLIT_RE.split(text)
    cues_l = [c.lower() for c in cues]
    kept = [p.strip() for p in parts if p.strip() and not any(c in p.lower() for c in cues_l)]
    if kept:
        return " ".join(kept)
    return text

def sanitize_signal_text(text: str, max_chars: int = 120) -> str:
    """
    Collapse whitespace, drop sentences carrying injection cues (and the cue
    phrases themselves if any survive), then truncate.
    """
    t = _strip_injection_sentences(text or "")
    for c in _INJECTION_CUES:
        t = re.sub(re.escape(c), "", t, flags=re.IGNORECASE)
    t = collapse_ws(t)
    if max_chars and len(t) > max_chars:
        t = t[:max_chars].rstrip() + "…"
    return t
