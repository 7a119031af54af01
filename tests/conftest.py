import pytest

from storefront.models import Product


def make_product(id, name, price, **kwargs):
    return Product(id=id, name=name, price=price, **kwargs)


@pytest.fixture
def yellow_tshirt():
    return make_product(
        "tee-1", "Yellow Cotton T-Shirt", 12.99, brand="Hanes", category="clothing",
        rating=4.3, review_count=120, colors=["yellow"], sizes=["S", "M", "L"], tags=["women"],
    )


@pytest.fixture
def blue_jeans():
    return make_product(
        "jeans-1", "Blue Denim Jeans", 29.99, brand="Wrangler", category="clothing",
        rating=4.5, review_count=300, colors=["blue"], sizes=["32", "34"], tags=["men"],
    )


@pytest.fixture
def samsung_tv():
    return make_product(
        "tv-1", "Samsung 55\" 4K Smart TV", 449.99, brand="Samsung", category="electronics",
        rating=4.6, review_count=1800, is_featured=True, colors=["black"],
    )


@pytest.fixture
def hp_laptop():
    return make_product(
        "laptop-1", "HP 15\" Laptop", 549.0, brand="HP", category="electronics",
        rating=4.2, review_count=400, colors=["silver"],
    )


@pytest.fixture
def catalog(yellow_tshirt, blue_jeans, samsung_tv, hp_laptop):
    return (
        yellow_tshirt,
        blue_jeans,
        samsung_tv,
        hp_laptop,
        make_product(
            "cm-1", "Drip Coffee Maker", 34.99, brand="Mr. Coffee", category="home",
            categories=["kitchen"], rating=4.8, review_count=3000, colors=["black"],
        ),
        make_product(
            "cm-2", "Single Serve Coffee Maker", 79.0, brand="Keurig", category="home",
            categories=["kitchen"], rating=4.7, review_count=900, colors=["black", "red"],
        ),
        make_product(
            "cm-3", "Budget Coffee Maker", 19.99, brand="Generic", category="home",
            rating=3.9, review_count=40, in_stock=False,
        ),
        make_product(
            "shoe-1", "Red Canvas Shoes", 24.99, brand="Athletic Works", category="clothing",
            categories=["shoes"], rating=4.1, review_count=80, colors=["red"], sizes=["8", "9"],
            tags=["women"],
        ),
        make_product(
            "shoe-2", "Red Running Shoes", 24.99, brand="Athletic Works", category="clothing",
            categories=["shoes"], rating=4.1, review_count=60, colors=["red"], sizes=["10"],
            tags=["men"], is_featured=True,
        ),
    )
