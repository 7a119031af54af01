import logging
from typing import List, Optional, Sequence, Union

from .models import FilterSet, Product, SortOption


class RelevanceRanker:
    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.INFO)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.INFO)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def rank_products(self, products: Sequence[Product], filters: Optional[FilterSet] = None) -> List[Product]:
        """Default ranking: within price_max first, then rating descending, then price ascending.

        sorted() is stable, so products that tie on every key keep catalog order
        and ranking an already ranked list leaves it unchanged.
        """
        price_max = filters.price_max if filters else None

        def sort_key(product: Product):
            over_budget = price_max is not None and product.price > price_max
            return (over_budget, -product.rating, product.price)

        return sorted(products, key=sort_key)

    def sort_products(self, products: Sequence[Product], sort: Union[SortOption, str]) -> List[Product]:
        """Single-key stable sort on a caller-selected field."""
        option = SortOption(sort)
        self.logger.info(f"Sorting {len(products)} products by {option.value}")
        if option == SortOption.PRICE_ASC:
            return sorted(products, key=lambda p: p.price)
        if option == SortOption.PRICE_DESC:
            return sorted(products, key=lambda p: p.price, reverse=True)
        if option == SortOption.RATING:
            return sorted(products, key=lambda p: p.rating, reverse=True)
        if option == SortOption.NAME:
            return sorted(products, key=lambda p: p.name.lower())
        # Featured items first, no secondary key
        return sorted(products, key=lambda p: not p.is_featured)
