# =============================================
# File: tests/test_signals.py
# Purpose: SignalCollector reads, limits and graceful degradation
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from stylerec.models import Product
from stylerec.services.signals import SignalCollector


class _Store:
    def __init__(self, favorites=None, queries=None, fail_favorites=False, fail_queries=False):
        self.favorites = favorites or []
        self.queries = queries or []
        self.fail_favorites = fail_favorites
        self.fail_queries = fail_queries
        self.calls = []

    def favorite_products(self, user_id, limit):
        self.calls.append(("favorites", user_id, limit))
        if self.fail_favorites:
            raise ConnectionError("store down")
        return self.favorites[:limit]

    def recent_queries(self, user_id, limit):
        self.calls.append(("queries", user_id, limit))
        if self.fail_queries:
            raise ConnectionError("store down")
        return self.queries[:limit]

    def catalog(self):
        raise AssertionError("collector must not read the catalog")


def test_collects_favorites_and_queries_with_limits():
    store = _Store(
        favorites=[Product(id=str(i), name=f"P{i}", tags=["boho"]) for i in range(15)],
        queries=[f"q{i}" for i in range(8)],
    )
    signal = SignalCollector(store).collect("u1")

    assert len(signal.favorite_items) == 10
    assert signal.recent_queries == ["q0", "q1", "q2", "q3", "q4"]  # newest first, as stored
    assert ("favorites", "u1", 10) in store.calls
    assert ("queries", "u1", 5) in store.calls


def test_new_user_gets_empty_signal():
    signal = SignalCollector(_Store()).collect("new-user")
    assert signal.favorite_items == []
    assert signal.recent_queries == []
    assert signal.is_empty


def test_read_failures_degrade_to_empty_sections():
    store = _Store(
        favorites=[Product(id="1", name="Dress")],
        queries=["linen"],
        fail_favorites=True,
    )
    signal = SignalCollector(store).collect("u1")
    assert signal.favorite_items == []
    assert signal.recent_queries == ["linen"]

    store = _Store(favorites=[Product(id="1", name="Dress")], fail_queries=True)
    signal = SignalCollector(store).collect("u1")
    assert [p.id for p in signal.favorite_items] == ["1"]
    assert signal.recent_queries == []


def test_duplicate_favorites_and_blank_queries_are_dropped():
    store = _Store(
        favorites=[Product(id="1", name="A"), Product(id="1", name="A"), Product(id="2", name="B")],
        queries=["  boho  ", "", "   ", "denim"],
    )
    signal = SignalCollector(store).collect("u1")
    assert [p.id for p in signal.favorite_items] == ["1", "2"]
    assert signal.favorite_ids == {"1", "2"}
    assert signal.recent_queries == ["boho", "denim"]
