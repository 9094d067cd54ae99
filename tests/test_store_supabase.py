# =============================================
# File: tests/test_store_supabase.py
# Purpose: SupabaseStore query shapes and row mapping, against a recording fake client
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from types import SimpleNamespace

import pytest

from stylerec.config import Settings
from stylerec.services.store import SupabaseStore


class _Query:
    def __init__(self, client, table):
        self.client = client
        self.calls = [("table", table)]
        client.queries.append(self)

    def select(self, cols):
        self.calls.append(("select", cols))
        return self

    def eq(self, col, value):
        self.calls.append(("eq", col, value))
        return self

    def order(self, col, desc=False):
        self.calls.append(("order", col, desc))
        return self

    def limit(self, n):
        self.calls.append(("limit", n))
        return self

    def execute(self):
        self.calls.append(("execute",))
        return SimpleNamespace(data=self.client.data.get(self.calls[0][1]))


class _Client:
    def __init__(self, data):
        self.data = data
        self.queries = []

    def table(self, name):
        return _Query(self, name)


def test_favorites_join_maps_products_and_skips_missing_links():
    client = _Client({"user_favorites": [
        {"products": {"id": "p2", "name": "Fringe Top", "price": 25.5, "image_url": "https://img/p2.jpg",
                      "tags": ["boho", "festival"], "created_at": "2024-05-01T10:00:00Z"}},
        {"products": None},
        {},
        {"products": {"id": 7, "name": None, "tags": None, "price": None}},
    ]})
    favs = SupabaseStore(client).favorite_products("u1", limit=10)

    assert [p.id for p in favs] == ["p2", "7"]
    assert favs[0].tags == ["boho", "festival"]
    assert favs[0].image_url == "https://img/p2.jpg"
    assert (favs[1].name, favs[1].tags, favs[1].price) == ("", [], 0.0)
    assert client.queries[0].calls == [
        ("table", "user_favorites"),
        ("select", "products(*)"),
        ("eq", "user_id", "u1"),
        ("order", "created_at", True),
        ("limit", 10),
        ("execute",),
    ]


def test_recent_queries_newest_first():
    client = _Client({"search_history": [{"query": "elegant evening wear"}, {"query": "linen"}]})
    assert SupabaseStore(client).recent_queries("u1", limit=5) == ["elegant evening wear", "linen"]
    assert client.queries[0].calls == [
        ("table", "search_history"),
        ("select", "query"),
        ("eq", "user_id", "u1"),
        ("order", "created_at", True),
        ("limit", 5),
        ("execute",),
    ]


def test_catalog_reads_all_products_newest_first():
    client = _Client({"products": [{"id": "a", "name": "A", "tags": ["boho"]}, {"name": "no id"}]})
    catalog = SupabaseStore(client).catalog()
    assert [p.id for p in catalog] == ["a"]
    assert client.queries[0].calls == [
        ("table", "products"),
        ("select", "*"),
        ("order", "created_at", True),
        ("execute",),
    ]


def test_none_data_means_no_rows():
    store = SupabaseStore(_Client({}))
    assert store.favorite_products("u1", limit=10) == []
    assert store.recent_queries("u1", limit=5) == []
    assert store.catalog() == []


def test_zero_limit_skips_the_query():
    client = _Client({})
    store = SupabaseStore(client)
    assert store.favorite_products("u1", limit=0) == []
    assert store.recent_queries("u1", limit=0) == []
    assert client.queries == []


def test_from_settings_requires_credentials():
    with pytest.raises(ValueError):
        SupabaseStore.from_settings(Settings(store_backend="supabase", supabase_url=None, supabase_key=None))
    with pytest.raises(ValueError):
        SupabaseStore.from_settings(Settings(store_backend="supabase", supabase_url="https://proj.supabase.co"))
