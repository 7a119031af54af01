import logging
from typing import Iterable, List, Optional

from .constants import GENDER_PHRASES, GENERAL_CATEGORY
from .models import FilterSet, Product

# Tags that mark a product as made for an audience
AUDIENCE_TAGS = {gender: {gender, *phrases} for gender, phrases in GENDER_PHRASES}


class ProductFilter:
    """Selects the catalog items that satisfy a category and every active predicate."""

    def __init__(self, match_search_text: bool = False):
        self.match_search_text = match_search_text
        self.logger = logging.getLogger(__name__)

    def filter_products(
        self,
        products: Iterable[Product],
        category: str,
        filters: FilterSet,
        search_text: str = "",
    ) -> List[Product]:
        """Return matching products in catalog order. Never raises on an empty catalog."""
        terms = self._search_terms(search_text) if self.match_search_text else []
        matched = [
            product for product in products
            if self._matches_category(product, category)
            and self._matches_filters(product, filters)
            and self._matches_terms(product, terms)
        ]
        if filters.price_min is not None and filters.price_max is not None and filters.price_min > filters.price_max:
            self.logger.warning(f"Conflicting price bounds: min ${filters.price_min} > max ${filters.price_max}")
        self.logger.debug(f"Category '{category}' with filters {filters.as_dict()} kept {len(matched)} products")
        return matched

    def _matches_category(self, product: Product, category: Optional[str]) -> bool:
        if not category or category.lower() == GENERAL_CATEGORY:
            return True
        wanted = category.lower()
        if product.category.lower() == wanted:
            return True
        return any(tag.lower() == wanted for tag in product.categories)

    def _matches_filters(self, product: Product, filters: FilterSet) -> bool:
        if filters.price_min is not None and product.price < filters.price_min:
            return False
        if filters.price_max is not None and product.price > filters.price_max:
            return False
        if filters.rating_min is not None and product.rating < filters.rating_min:
            return False
        if filters.color and not _contains_any(product.colors, filters.color):
            return False
        if filters.brand and filters.brand.lower() not in product.brand.lower():
            return False
        if filters.size and not _contains_any(product.sizes, filters.size):
            return False
        if filters.in_stock and not product.in_stock:
            return False
        if filters.is_featured and not product.is_featured:
            return False
        if filters.gender and not self._matches_audience(product, filters.gender):
            return False
        return True

    def _matches_audience(self, product: Product, gender: str) -> bool:
        accepted = AUDIENCE_TAGS.get(gender, {gender})
        tags = {tag.lower() for tag in product.tags + product.categories}
        return bool(tags & accepted)

    def _search_terms(self, search_text: str) -> List[str]:
        return [term for term in search_text.lower().split() if len(term) > 1]

    def _matches_terms(self, product: Product, terms: List[str]) -> bool:
        if not terms:
            return True
        haystack = " ".join(
            [product.name, product.description, product.brand, product.category,
             *product.categories, *product.tags]
        ).lower()
        return any(term in haystack for term in terms)


def _contains_any(values: Iterable[str], wanted: str) -> bool:
    wanted = wanted.lower()
    return any(wanted in value.lower() for value in values)
