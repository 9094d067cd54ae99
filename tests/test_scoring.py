# =============================================
# File: tests/test_scoring.py
# Purpose: Fuzzy tag matching and per-product scores
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from stylerec.models import Product
from stylerec.services.scoring import fuzzy_match, match_count, score_products


def _p(pid, tags):
    return Product(id=pid, name=pid.upper(), tags=tags)


def test_fuzzy_match_is_bidirectional():
    # product tag contains suggestion
    assert fuzzy_match("boho-chic", "boho")
    # suggestion contains product tag
    assert fuzzy_match("vintage", "vintage-denim")
    assert fuzzy_match("boho", "boho-chic") == fuzzy_match("boho-chic", "boho")


def test_fuzzy_match_ignores_case_and_rejects_unrelated():
    assert fuzzy_match("Elegant", "ELEGANT evening")
    assert not fuzzy_match("sporty", "elegant")


# Plain substring containment would let "" match every tag; blanks are excluded here on purpose
def test_fuzzy_match_empty_never_matches():
    assert not fuzzy_match("", "boho")
    assert not fuzzy_match("boho", "   ")


def test_match_count_counts_product_tags_once():
    # "boho" matches two suggestions but still counts as one tag
    assert match_count(["boho", "festival", "sporty"], ["boho", "boho-chic", "festival"]) == 2


def test_scores_and_favorite_flags():
    catalog = [_p("a", ["boho", "festival"]), _p("b", ["sporty"]), _p("c", ["Elegant-Evening"])]
    scored = score_products(catalog, ["boho", "elegant", "festival"], favorite_ids={"c"})

    assert [s.product.id for s in scored] == ["a", "b", "c"]  # catalog order kept
    assert [s.score for s in scored] == [2, 0, 1]
    assert [s.is_favorite for s in scored] == [False, False, True]


def test_scoring_is_deterministic():
    catalog = [_p(str(i), ["boho", "denim", f"tag{i}"]) for i in range(20)]
    tags = ["boho", "vintage-denim", "tag1"]
    first = score_products(catalog, tags)
    second = score_products(catalog, tags)
    assert [(s.product.id, s.score) for s in first] == [(s.product.id, s.score) for s in second]


def test_no_suggestions_scores_zero():
    scored = score_products([_p("a", ["boho"])], [])
    assert scored[0].score == 0


def test_product_without_tags_scores_zero():
    scored = score_products([Product(id="x", name="Plain", tags=None)], ["boho"])
    assert scored[0].score == 0
