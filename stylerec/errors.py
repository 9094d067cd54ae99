# =============================================
# File: stylerec/errors.py
# Purpose: Typed pipeline errors; each carries its HTTP status and public message
# =============================================
from __future__ import annotations


class RecommendationError(Exception):
    """Base exception for the recommendation pipeline."""

    status_code = 500
    kind = "error"
    public_message = "Failed to generate recommendations"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message

    @property
    def message(self) -> str:
        """Text safe to return to the caller."""
        return self.public_message


class AuthError(RecommendationError):
    """Missing or invalid bearer credential."""

    status_code = 401
    kind = "unauthenticated"
    public_message = "Unauthorized"


class RateLimitError(RecommendationError):
    """The LLM gateway answered 429. Not retried."""

    status_code = 429
    kind = "rate_limited"
    public_message = "Rate limit exceeded"


class UpstreamError(RecommendationError):
    """Gateway failure, catalog read failure or anything unexpected."""

    status_code = 500
    kind = "upstream"


class MalformedInferenceError(UpstreamError):
    """Gateway answered but the content is not a JSON array of strings."""

    kind = "malformed_inference"
