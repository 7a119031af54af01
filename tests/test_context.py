import pytest

from storefront.context import (
    asks_for_similar,
    find_similar_products,
    refers_to_last_viewed,
    resolve_reference,
)
from storefront.models import QueryContext


@pytest.mark.parametrize("text, expected", [
    ("add this to my cart", True),
    ("is that one waterproof?", True),
    ("does it come in blue", True),
    ("red shoes", False),
    ("fitted shirt", False),
])
def test_refers_to_last_viewed(text, expected):
    assert refers_to_last_viewed(text) is expected


@pytest.mark.parametrize("text, expected", [
    ("show me something similar", True),
    ("anything like this?", True),
    ("cheaper alternatives", True),
    ("coffee maker", False),
])
def test_asks_for_similar(text, expected):
    assert asks_for_similar(text) is expected


def test_resolve_reference_needs_context_and_pronoun(samsung_tv):
    context = QueryContext(last_viewed_product=samsung_tv)
    assert resolve_reference("how big is this", context) == samsung_tv
    assert resolve_reference("red shoes", context) is None
    assert resolve_reference("how big is this", None) is None
    assert resolve_reference("how big is this", QueryContext()) is None


def test_similar_products_share_category_and_color(catalog):
    coffee_maker = next(p for p in catalog if p.id == "cm-1")
    assert [p.id for p in find_similar_products(coffee_maker, catalog)] == ["cm-2"]


def test_similar_products_without_colors_match_category_only(catalog):
    budget = next(p for p in catalog if p.id == "cm-3")
    assert [p.id for p in find_similar_products(budget, catalog)] == ["cm-1", "cm-2"]


def test_similar_products_limit(catalog, yellow_tshirt):
    similar = find_similar_products(yellow_tshirt.model_copy(update={"colors": ()}), catalog, limit=2)
    assert [p.id for p in similar] == ["jeans-1", "shoe-1"]
