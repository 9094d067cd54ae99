# =============================================
# File: stylerec/services/inference.py
# Purpose: Infer style tags from user signals with one LLM gateway call
# =============================================
from __future__ import annotations
import json
from typing import Any, List, Tuple

import openai
from loguru import logger

from stylerec.errors import MalformedInferenceError, RateLimitError, UpstreamError
from stylerec.models import UserSignal
from stylerec.utils.prompting import build_context, build_messages


def _openai_client(settings):
    if not settings.llm_api_key:
        return None
    # SDK retries stay off; the only retry policy is ours (transient, opt-in)
    return openai.OpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_gateway_url,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )


def _is_transient(err: Exception) -> bool:
    if isinstance(err, openai.APIConnectionError):  # includes APITimeoutError
        return True
    if isinstance(err, openai.APIStatusError):
        return err.status_code >= 500
    return False


def parse_tag_list(text: str) -> List[str]:
    """
    Parse the completion text into a list of tags.
    Tolerates code fences / prose around the array; raises
    MalformedInferenceError when there is no JSON array of strings.
    """
    raw = (text or "").strip()
    if not raw:
        raise MalformedInferenceError("empty completion")

    data: Any
    try:
        data = json.loads(raw)
    except ValueError:
        start = raw.find("[")
        end = raw.rfind("]")
        if start == -1 or end <= start:
            raise MalformedInferenceError("completion is not JSON")
        try:
            data = json.loads(raw[start:end + 1])
        except ValueError as e:
            raise MalformedInferenceError("completion is not JSON") from e

    if not isinstance(data, list):
        raise MalformedInferenceError(f"expected a JSON array, got {type(data).__name__}")
    if not all(isinstance(t, str) for t in data):
        raise MalformedInferenceError("array contains non-string entries")
    return [t.strip() for t in data if t.strip()]


class TagInferencer:
    def __init__(
        self,
        client,
        model: str,
        timeout_s: float = 10.0,
        max_retries: int = 0,
        malformed_policy: str = "degrade",
    ) -> None:
        self.client = client
        self.model = model
        self.timeout_s = timeout_s
        self.max_retries = max(0, max_retries)
        self.malformed_policy = malformed_policy

    @classmethod
    def from_settings(cls, settings) -> "TagInferencer":
        return cls(
            client=_openai_client(settings),
            model=settings.llm_model,
            timeout_s=settings.llm_timeout_seconds,
            max_retries=settings.llm_max_retries,
            malformed_policy=settings.llm_malformed_policy,
        )

    def _chat_completion(self, messages) -> Tuple[str, str]:
        """
        One gateway call (plus up to max_retries retries on transient failures).
        Returns (text, model). Status mapping happens here, from the typed SDK error.
        """
        if self.client is None:
            raise UpstreamError("LLM gateway API key is not configured")

        attempts = 1 + self.max_retries
        for attempt in range(1, attempts + 1):
            try:
                resp = self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    timeout=self.timeout_s,
                )
            except openai.APIStatusError as e:
                if e.status_code == 429:
                    raise RateLimitError("gateway returned 429") from e
                if _is_transient(e) and attempt < attempts:
                    logger.warning(f"[inference] gateway {e.status_code}, retrying ({attempt}/{attempts - 1})")
                    continue
                raise UpstreamError(f"gateway returned {e.status_code}") from e
            except openai.APIConnectionError as e:
                if attempt < attempts:
                    logger.warning(f"[inference] {type(e).__name__}, retrying ({attempt}/{attempts - 1})")
                    continue
                raise UpstreamError(f"gateway unreachable: {type(e).__name__}") from e

            choices = getattr(resp, "choices", None) or []
            text = (choices[0].message.content or "") if choices else ""
            return text.strip(), getattr(resp, "model", None) or self.model

        raise UpstreamError("gateway call failed")  # unreachable, loop always returns or raises

    def infer_with_model(self, signal: UserSignal) -> Tuple[List[str], str]:
        """Tags plus the model the gateway says answered."""
        context = build_context(signal)
        text, model = self._chat_completion(build_messages(context))
        try:
            tags = parse_tag_list(text)
        except MalformedInferenceError as e:
            if self.malformed_policy == "fail":
                raise
            logger.warning(f"[inference] malformed completion from {model}, degrading to no tags: {e.detail}")
            return [], model
        logger.info(f"[inference] model={model} tags={len(tags)}")
        return tags, model

    def infer(self, signal: UserSignal) -> List[str]:
        return self.infer_with_model(signal)[0]
