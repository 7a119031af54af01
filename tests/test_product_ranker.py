import pytest

from storefront.models import FilterSet, SortOption
from storefront.product_ranker import RelevanceRanker
from tests.conftest import make_product


@pytest.fixture
def ranker():
    return RelevanceRanker()


def ids(products):
    return [p.id for p in products]


def test_default_ranking_rating_then_price(ranker):
    products = [
        make_product("a", "A", 30.0, rating=4.0),
        make_product("b", "B", 20.0, rating=4.5),
        make_product("c", "C", 10.0, rating=4.5),
        make_product("d", "D", 5.0, rating=3.0),
    ]
    assert ids(ranker.rank_products(products)) == ["c", "b", "a", "d"]


def test_products_within_price_max_come_first(ranker):
    products = [
        make_product("pricey", "Pricey", 80.0, rating=5.0),
        make_product("cheap", "Cheap", 10.0, rating=3.5),
    ]
    assert ids(ranker.rank_products(products, FilterSet(price_max=50))) == ["cheap", "pricey"]
    assert ids(ranker.rank_products(products, FilterSet())) == ["pricey", "cheap"]


def test_full_ties_keep_input_order(ranker):
    products = [make_product(str(i), f"Item {i}", 10.0, rating=4.0) for i in range(5)]
    assert ids(ranker.rank_products(products)) == ["0", "1", "2", "3", "4"]


def test_ranking_a_ranked_list_is_a_no_op(ranker, catalog):
    ranked = ranker.rank_products(catalog)
    assert ranker.rank_products(ranked) == ranked


def test_ranking_does_not_mutate_input(ranker, catalog):
    original = list(catalog)
    ranker.rank_products(original)
    assert original == list(catalog)


@pytest.mark.parametrize("sort, expected", [
    (SortOption.PRICE_ASC, ["tee-1", "cm-3", "shoe-1", "shoe-2", "jeans-1"]),
    ("price-desc", ["jeans-1", "shoe-1", "shoe-2", "cm-3", "tee-1"]),
    ("rating", ["jeans-1", "tee-1", "shoe-1", "shoe-2", "cm-3"]),
    ("name", ["jeans-1", "cm-3", "shoe-1", "shoe-2", "tee-1"]),
    ("featured", ["shoe-2", "tee-1", "jeans-1", "cm-3", "shoe-1"]),
])
def test_caller_selected_sort(ranker, catalog, sort, expected):
    subset = [p for p in catalog if p.id in {"tee-1", "jeans-1", "cm-3", "shoe-1", "shoe-2"}]
    assert ids(ranker.sort_products(subset, sort)) == expected


def test_unknown_sort_raises(ranker, catalog):
    with pytest.raises(ValueError):
        ranker.sort_products(catalog, "popularity")
