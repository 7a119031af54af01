import logging
import threading
from typing import Any, List, Optional, Sequence, Tuple, TypedDict, Union
from langgraph.graph import StateGraph, END
from .catalog import CatalogStore, load_catalog
from .langgraph_nodes import parse_user_query, filter_catalog, rank_products, compose_summary
from .models import ParsedQuery, Product, QueryContext, RankedResult, SortOption
from .product_filter import ProductFilter
from .product_ranker import RelevanceRanker
from .query_parser import QueryParser
from .response_composer import ResponseComposer, format_amount
from .utils.config import Config

class SearchState(TypedDict, total=False):
    user_input: str
    engine: Any
    catalog: Sequence[Product]
    context: Optional[QueryContext]
    sort: Optional[SortOption]
    limit: Optional[int]
    parsed_query: ParsedQuery
    search_text: str
    filtered_products: List[Product]
    ranked_products: List[Product]
    results: List[Product]
    total_before_truncation: int
    summary: str

def build_pipeline():
    """Compile the parse -> filter -> rank -> summarize graph."""
    graph = StateGraph(state_schema=SearchState)
    graph.add_node("parse_query", parse_user_query)
    graph.add_node("filter_catalog", filter_catalog)
    graph.add_node("rank_products", rank_products)
    graph.add_node("compose_summary", compose_summary)

    graph.add_edge("parse_query", "filter_catalog")
    graph.add_edge("filter_catalog", "rank_products")
    graph.add_edge("rank_products", "compose_summary")
    graph.add_edge("compose_summary", END)

    graph.set_entry_point("parse_query")
    return graph.compile()

class SearchEngine:
    """Query understanding and retrieval over a read-only catalog snapshot.

    The engine holds only immutable rule tables and a compiled graph, so one
    instance can serve concurrent callers.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(self.config.LOG_LEVEL)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(self.config.LOG_LEVEL)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.query_parser = QueryParser(
            strict_word_match=self.config.STRICT_WORD_MATCH,
            price_shortcuts=self.config.PRICE_SHORTCUTS,
        )
        self.product_filter = ProductFilter(match_search_text=self.config.MATCH_SEARCH_TEXT)
        self.ranker = RelevanceRanker()
        self.composer = ResponseComposer()
        self.app = build_pipeline()

    def query(
        self,
        text: str,
        catalog: Sequence[Product],
        context: Optional[QueryContext] = None,
        sort: Optional[Union[SortOption, str]] = None,
        limit: Optional[int] = None,
    ) -> RankedResult:
        """
        Interpret ``text`` and retrieve matching products from ``catalog``.
        Args:
            text: The shopper's free-text request.
            catalog: The catalog snapshot to search. Never modified.
            context: Optional conversational context. Not used for filtering.
            sort: Optional caller-selected ordering for the returned list.
            limit: Optional page size; the total count is reported separately.
        Returns:
            RankedResult with results, parsed query, summary and total count.
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must be non-negative")
        sort_option = SortOption(sort) if sort else None

        initial_state = {
            "user_input": text or "",
            "engine": self,
            "catalog": catalog,
            "context": context,
            "sort": sort_option,
            "limit": limit,
        }

        try:
            result = self.app.invoke(initial_state)
        except Exception as e:
            self.logger.error(f"Error while processing query '{text}': {e}", exc_info=True)
            raise

        return RankedResult(
            results=result.get("results", []),
            parsed_query=result["parsed_query"],
            summary=result.get("summary", ""),
            total_before_truncation=result.get("total_before_truncation", 0),
            search_text=result.get("search_text", ""),
        )

def initialize_engine(config: Optional[Config] = None) -> Tuple[SearchEngine, CatalogStore]:
    """
    Builds the SearchEngine and a CatalogStore loaded from CATALOG_PATH.
    Returns:
        Tuple: engine, catalog_store
    """
    config = config or Config()
    engine = SearchEngine(config)
    catalog_store = CatalogStore(load_catalog(config.CATALOG_PATH))
    return engine, catalog_store

_default_engine: Optional[SearchEngine] = None
_default_engine_lock = threading.Lock()

def get_default_engine() -> SearchEngine:
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = SearchEngine()
    return _default_engine

def query(text: str, catalog: Sequence[Product], context: Optional[QueryContext] = None) -> RankedResult:
    """Run one query with a shared engine built from the environment configuration."""
    return get_default_engine().query(text, catalog, context=context)

def format_display_results(result: RankedResult) -> str:
    """Formats the ranked products for display."""
    if not result.results:
        return "No products to display."

    output_lines = ["\nTop Results:"]
    for i, product in enumerate(result.results, 1):
        stock = "in stock" if product.in_stock else "out of stock"
        output_lines.append(
            f"{i}. {product.name} ({product.brand}) - ${format_amount(product.price)} "
            f"| {product.rating}/5 from {product.review_count} reviews | {stock}"
        )
    output_lines.append("-" * 80)
    return "\n".join(output_lines)

def format_summary(result: RankedResult) -> str:
    """Formats the summary text for display."""
    if not result.summary:
        return "No summary to display."
    return f"\nSummary of Results:\n{result.summary}"
