# =============================================
# File: stylerec/cli/seed_catalog.py
# Purpose: CLI entrypoint to load products (and optional favorites / searches) into the SQL store.
# Usage:
#   python -m stylerec.cli.seed_catalog --file data/catalog.json --db sqlite:///./app.db --clear
# =============================================
from __future__ import annotations
import argparse
import json
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Tuple

from sqlalchemy import delete
from sqlmodel import Session

from stylerec.db.models import ProductRow, SearchHistory, UserFavorite
from stylerec.db.repo import init_db, make_engine


def _load(path: str) -> Dict[str, List[Dict[str, Any]]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        data = {"products": data}
    return {
        "products": list(data.get("products") or []),
        "favorites": list(data.get("favorites") or []),
        "search_history": list(data.get("search_history") or []),
    }


def seed(engine, data: Dict[str, List[Dict[str, Any]]], clear: bool = False) -> Tuple[int, int, int]:
    """
    Insert rows in file order. created_at is spaced one second apart so that
    "newest first" reads return the LAST rows of each list first.
    """
    init_db(engine)
    base = datetime.now(timezone.utc)
    with Session(engine) as session:
        if clear:
            session.execute(delete(UserFavorite))
            session.execute(delete(SearchHistory))
            session.execute(delete(ProductRow))

        for i, p in enumerate(data["products"]):
            session.merge(ProductRow(
                id=str(p["id"]),
                name=p.get("name") or "",
                description=p.get("description") or "",
                price=float(p.get("price") or 0),
                image_url=p.get("image_url"),
                tags=list(p.get("tags") or []),
                created_at=base + timedelta(seconds=i),
            ))
        for i, fav in enumerate(data["favorites"]):
            session.add(UserFavorite(
                user_id=str(fav["user_id"]),
                product_id=str(fav["product_id"]),
                created_at=base + timedelta(seconds=i),
            ))
        for i, s in enumerate(data["search_history"]):
            session.add(SearchHistory(
                user_id=str(s["user_id"]),
                query=str(s["query"]),
                created_at=base + timedelta(seconds=i),
            ))
        session.commit()
    return len(data["products"]), len(data["favorites"]), len(data["search_history"])


def main(argv=None):
    ap = argparse.ArgumentParser(description="Seed the SQL store used by the recommendations API.")
    ap.add_argument("--file", required=True, help="JSON file: a product list, or {products, favorites, search_history}")
    ap.add_argument("--db", default="sqlite:///./app.db", help="SQLAlchemy URL (default: sqlite:///./app.db)")
    ap.add_argument("--clear", action="store_true", help="Delete existing rows before loading")
    args = ap.parse_args(argv)

    try:
        data = _load(args.file)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Cannot read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    if not data["products"]:
        print("[WARN] No products found in file.", file=sys.stderr)
        sys.exit(1)

    products, favorites, searches = seed(make_engine(args.db), data, clear=args.clear)
    print(f"[OK] Loaded {products} products, {favorites} favorites, {searches} searches into {args.db}")

if __name__ == "__main__":
    main()
