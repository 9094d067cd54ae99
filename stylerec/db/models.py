# =============================================
# File: stylerec/db/models.py
# Purpose: SQLModel tables mirroring the storefront schema: products, favorites, search history.
# =============================================

from sqlmodel import SQLModel, Field, Column, JSON
from typing import List, Optional
from datetime import datetime, timezone

def utc_now() -> datetime:
    # sqlmodel rejects naive datetimes on write
    return datetime.now(timezone.utc)

class ProductRow(SQLModel, table=True):
    __tablename__ = "products"

    id: str = Field(primary_key=True)
    name: str
    description: str = ""
    price: float = 0.0
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now)

class UserFavorite(SQLModel, table=True):
    __tablename__ = "user_favorites"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    product_id: str = Field(foreign_key="products.id")
    created_at: datetime = Field(default_factory=utc_now)

class SearchHistory(SQLModel, table=True):
    __tablename__ = "search_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    query: str
    created_at: datetime = Field(default_factory=utc_now)
