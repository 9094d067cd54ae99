# =============================================
# File: stylerec/services/store.py
# Purpose: Read-only access to favorites, search history and the product catalog
# =============================================
from __future__ import annotations
from typing import Any, Dict, List, Protocol

from sqlmodel import Session, select

from stylerec.db.models import ProductRow, SearchHistory, UserFavorite
from stylerec.db.repo import init_db, make_engine
from stylerec.models import Product


class RecordStore(Protocol):
    def favorite_products(self, user_id: str, limit: int) -> List[Product]: ...
    def recent_queries(self, user_id: str, limit: int) -> List[str]: ...
    def catalog(self) -> List[Product]: ...


def _to_product(row: Dict[str, Any] | None) -> Product | None:
    if not row or row.get("id") is None:
        return None
    return Product.model_validate(row)


class SupabaseStore:
    """
    Reads the storefront tables through supabase-py:
    - user_favorites joined to products (newest favorite first)
    - search_history (newest first)
    - products (newest first)
    """
    def __init__(self, client) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "SupabaseStore":
        from supabase import ClientOptions, create_client

        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set for the supabase backend")
        options = ClientOptions(postgrest_client_timeout=settings.store_timeout_seconds)
        return cls(create_client(settings.supabase_url, settings.supabase_key, options=options))

    def favorite_products(self, user_id: str, limit: int) -> List[Product]:
        if limit <= 0:
            return []
        response = (
            self.client.table("user_favorites")
            .select("products(*)")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        out: List[Product] = []
        for link in response.data or []:
            product = _to_product((link or {}).get("products"))
            if product is not None:
                out.append(product)
        return out

    def recent_queries(self, user_id: str, limit: int) -> List[str]:
        if limit <= 0:
            return []
        response = (
            self.client.table("search_history")
            .select("query")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [str(r.get("query") or "") for r in (response.data or [])]

    def catalog(self) -> List[Product]:
        response = self.client.table("products").select("*").order("created_at", desc=True).execute()
        return [p for p in (_to_product(r) for r in (response.data or [])) if p is not None]


class SQLStore:
    """Same reads against SQLModel tables (local dev, tests)."""

    def __init__(self, engine) -> None:
        self.engine = engine

    @classmethod
    def from_settings(cls, settings) -> "SQLStore":
        engine = make_engine(settings.db_url)
        init_db(engine)
        return cls(engine)

    @staticmethod
    def _product(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            price=row.price,
            image_url=row.image_url,
            tags=row.tags,
        )

    def favorite_products(self, user_id: str, limit: int) -> List[Product]:
        if limit <= 0:
            return []
        stmt = (
            select(ProductRow)
            .join(UserFavorite, UserFavorite.product_id == ProductRow.id)
            .where(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at.desc(), UserFavorite.id.desc())
            .limit(limit)
        )
        with Session(self.engine) as session:
            return [self._product(r) for r in session.exec(stmt).all()]

    def recent_queries(self, user_id: str, limit: int) -> List[str]:
        if limit <= 0:
            return []
        stmt = (
            select(SearchHistory.query)
            .where(SearchHistory.user_id == user_id)
            .order_by(SearchHistory.created_at.desc(), SearchHistory.id.desc())
            .limit(limit)
        )
        with Session(self.engine) as session:
            return list(session.exec(stmt).all())

    def catalog(self) -> List[Product]:
        stmt = select(ProductRow).order_by(ProductRow.created_at.desc(), ProductRow.id)
        with Session(self.engine) as session:
            return [self._product(r) for r in session.exec(stmt).all()]


def build_store(settings) -> RecordStore:
    if settings.store_backend == "supabase":
        return SupabaseStore.from_settings(settings)
    return SQLStore.from_settings(settings)
