"""Catalog snapshots: loading, normalizing retailer export records, publishing."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from .constants import GENERAL_CATEGORY
from .models import Product

logger = logging.getLogger(__name__)

Catalog = Tuple[Product, ...]


def _safe_json_list(value: Any) -> List[str]:
    """Retailer exports encode lists as JSON strings; anything unparseable becomes []."""
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    if not value or not isinstance(value, str) or value in ('null', 'undefined'):
        return []
    try:
        parsed = json.loads(value)
    except ValueError:
        return []
    if isinstance(parsed, list):
        return [str(v) for v in parsed if v is not None]
    return []


def _safe_float(value: Any, fallback: Optional[float] = None) -> Optional[float]:
    if value is None or value == '':
        return fallback
    try:
        return float(str(value).replace('$', '').replace(',', '').strip())
    except ValueError:
        return fallback


def _safe_int(value: Any, fallback: int = 0) -> int:
    number = _safe_float(value)
    return int(number) if number is not None else fallback


def is_raw_record(record: Dict[str, Any]) -> bool:
    return 'product_name' in record or 'final_price' in record


def normalize_raw_product(raw: Dict[str, Any], index: int = 0) -> Product:
    """Convert one retailer export record (string-typed fields) into a Product."""
    price = _safe_float(raw.get('final_price')) or _safe_float(raw.get('unit_price')) or 0.0
    rating = min(max(_safe_float(raw.get('rating'), 0.0), 0.0), 5.0)
    return Product(
        id=str(raw.get('product_id') or raw.get('sku') or f'item-{index}'),
        name=raw.get('product_name') or 'Unknown Product',
        brand=raw.get('brand') or '',
        price=price,
        original_price=_safe_float(raw.get('initial_price')),
        category=raw.get('category_name') or raw.get('root_category_name') or GENERAL_CATEGORY,
        categories=_safe_json_list(raw.get('categories')),
        rating=rating,
        review_count=_safe_int(raw.get('review_count')),
        in_stock=str(raw.get('available_for_delivery', '')).lower() == 'true',
        colors=_safe_json_list(raw.get('colors')),
        sizes=_safe_json_list(raw.get('sizes')),
        tags=_safe_json_list(raw.get('tags')),
        description=raw.get('description') or '',
    )


def to_product(record: Dict[str, Any], index: int = 0) -> Product:
    if is_raw_record(record):
        return normalize_raw_product(record, index)
    return Product.model_validate(record)


def build_catalog(records: Iterable[Dict[str, Any]]) -> Catalog:
    """Validate records into an immutable catalog, skipping the ones that do not validate."""
    products = []
    for index, record in enumerate(records):
        try:
            products.append(to_product(record, index))
        except ValidationError as e:
            logger.warning(f"Skipping catalog record {index}: {e.error_count()} validation error(s)")
    return tuple(products)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Read a JSON catalog: either a list of records or {"products": [...]}."""
    data = json.loads(Path(path).read_text(encoding='utf-8'))
    if isinstance(data, dict):
        data = data.get('products', [])
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {path} must contain a list of products")
    catalog = build_catalog(data)
    logger.info(f"Loaded {len(catalog)} products from {path}")
    return catalog


class CatalogStore:
    """Holds the current catalog snapshot.

    Readers call snapshot() once per request and keep that tuple for the whole
    call; publish() swaps in a new tuple so in-flight requests never see a
    partially refreshed catalog.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._lock = threading.Lock()
        self._snapshot: Catalog = tuple(products)

    def snapshot(self) -> Catalog:
        return self._snapshot

    def publish(self, products: Iterable[Product]) -> Catalog:
        snapshot = tuple(products)
        with self._lock:
            self._snapshot = snapshot
        logger.info(f"Published catalog snapshot with {len(snapshot)} products")
        return snapshot

    def reload(self, path: Union[str, Path]) -> Catalog:
        return self.publish(load_catalog(path))


def find_product(catalog: Iterable[Product], product_id: str) -> Optional[Product]:
    return next((p for p in catalog if p.id == product_id), None)
