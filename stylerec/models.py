# =============================================
# File: stylerec/models.py
# Purpose: Request-scoped data model (products, signals, scores, result)
# =============================================
from __future__ import annotations
from typing import Any, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """Catalog snapshot read for one request. Extra store columns are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""
    description: str = ""
    price: float = 0.0
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> str:
        return str(v)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("price", mode="before")
    @classmethod
    def _none_as_zero(cls, v: Any) -> float:
        return 0.0 if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_list(cls, v: Any) -> List[str]:
        if v is None:
            return []
        return [str(t) for t in v if t is not None]


class UserSignal(BaseModel):
    favorite_items: List[Product] = Field(default_factory=list)
    recent_queries: List[str] = Field(default_factory=list)  # newest first

    @property
    def favorite_ids(self) -> Set[str]:
        return {p.id for p in self.favorite_items}

    @property
    def is_empty(self) -> bool:
        return not self.favorite_items and not self.recent_queries


class ScoredProduct(BaseModel):
    product: Product
    score: int = Field(0, ge=0)
    is_favorite: bool = False


class RecommendationResult(BaseModel):
    recommendations: List[Product] = Field(default_factory=list)
    suggested_tags: List[str] = Field(default_factory=list, serialization_alias="suggestedTags")
    model: Optional[str] = Field(None, exclude=True)  # answering model, for metrics only
