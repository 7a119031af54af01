import re
from typing import Iterable, List, Optional

from .models import Product, QueryContext
from .query_parser import normalize_text

_REFERENCE_PATTERN = re.compile(r"\b(?:this|that|it|this one|that one)\b")
_SIMILAR_PATTERN = re.compile(r"\b(?:similar|like this|like that|alternatives?)\b")


def refers_to_last_viewed(text: str) -> bool:
    """True when the text points back at something already on screen ("add this")."""
    return bool(_REFERENCE_PATTERN.search(normalize_text(text)))


def asks_for_similar(text: str) -> bool:
    return bool(_SIMILAR_PATTERN.search(normalize_text(text)))


def resolve_reference(text: str, context: Optional[QueryContext]) -> Optional[Product]:
    """The product a pronoun in ``text`` refers to, if the caller threaded one in."""
    if context is None or context.last_viewed_product is None:
        return None
    if not refers_to_last_viewed(text):
        return None
    return context.last_viewed_product


def find_similar_products(product: Product, catalog: Iterable[Product], limit: int = 4) -> List[Product]:
    """Same category, sharing a color when the product has one, excluding the product itself."""
    colors = {c.lower() for c in product.colors}
    similar = [
        candidate for candidate in catalog
        if candidate.id != product.id
        and candidate.category.lower() == product.category.lower()
        and (not colors or colors & {c.lower() for c in candidate.colors})
    ]
    return similar[:limit]
