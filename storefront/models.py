from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

class SortOption(str, Enum):
    """Caller-selectable orderings for a result list."""
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"
    NAME = "name"
    FEATURED = "featured"

class Intent(str, Enum):
    """What the shopper is trying to do. Annotation only, never used for filtering."""
    FIND = "find"
    COMPARE = "compare"
    BUY = "buy"
    SEARCH = "search"

class Product(BaseModel):
    """A read-only catalog entry."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    brand: str = ""
    price: float
    original_price: Optional[float] = None
    category: str = "general"
    categories: Tuple[str, ...] = ()
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = 0
    in_stock: bool = True
    is_featured: bool = False
    colors: Tuple[str, ...] = ()
    sizes: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    description: str = ""

class FilterSet(BaseModel):
    """Sparse structured constraints. A field left as None imposes no constraint."""
    model_config = ConfigDict(frozen=True)

    price_min: Optional[float] = Field(default=None, ge=0)
    price_max: Optional[float] = Field(default=None, ge=0)
    color: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    rating_min: Optional[float] = Field(default=None, ge=0, le=5)
    gender: Optional[Literal["men", "women", "kids"]] = None
    is_featured: Optional[bool] = None
    in_stock: Optional[bool] = None

    def as_dict(self) -> Dict[str, Any]:
        """Only the active predicates."""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.as_dict()

class ParsedQuery(BaseModel):
    """Structured interpretation of one free-text query."""
    model_config = ConfigDict(frozen=True)

    category: str = "general"
    intent: Intent = Intent.SEARCH
    filters: FilterSet = Field(default_factory=FilterSet)
    location: Optional[str] = None

class ExtractionResult(BaseModel):
    """Output of the lexical pass: filters plus the residual search text."""
    model_config = ConfigDict(frozen=True)

    filters: FilterSet = Field(default_factory=FilterSet)
    search_text: str = ""
    location: Optional[str] = None

class QueryContext(BaseModel):
    """Conversational side input threaded in by the caller."""
    model_config = ConfigDict(frozen=True)

    last_viewed_product: Optional[Product] = None

class RankedResult(BaseModel):
    """Everything one query hands back to the presentation layer."""
    results: List[Product] = Field(default_factory=list)
    parsed_query: ParsedQuery
    summary: str
    total_before_truncation: int = 0
    search_text: str = ""
