def parse_user_query(state: dict) -> dict:
    engine = state["engine"]
    parsed, extraction = engine.query_parser.analyze(state["user_input"])
    engine.logger.info(
        f"Parsed query: category={parsed.category}, intent={parsed.intent.value}, "
        f"filters={parsed.filters.as_dict()}"
    )
    return {
        **state,
        "parsed_query": parsed,
        "search_text": extraction.search_text,
    }


def filter_catalog(state: dict) -> dict:
    engine = state["engine"]
    parsed = state["parsed_query"]
    catalog = state.get("catalog") or ()
    filtered = engine.product_filter.filter_products(
        products=catalog,
        category=parsed.category,
        filters=parsed.filters,
        search_text=state.get("search_text", ""),
    )
    engine.logger.info(f"{len(filtered)} of {len(catalog)} catalog products passed the filters")
    return {
        **state,
        "filtered_products": filtered
    }


def rank_products(state: dict) -> dict:
    """Default-rank the matches, then apply the caller's sort and page size for display."""
    engine = state["engine"]
    ranked = engine.ranker.rank_products(state["filtered_products"], state["parsed_query"].filters)

    results = ranked
    if state.get("sort"):
        results = engine.ranker.sort_products(ranked, state["sort"])
    if state.get("limit") is not None:
        results = results[:state["limit"]]

    return {
        **state,
        "ranked_products": ranked,
        "results": results,
        "total_before_truncation": len(ranked),
    }


def compose_summary(state: dict) -> dict:
    """Summarize from the default ranking, independent of the display sort."""
    engine = state["engine"]
    shown = state["ranked_products"][:len(state["results"])]
    summary = engine.composer.compose(
        query=state["user_input"],
        products=shown,
        parsed_query=state["parsed_query"],
        total=state["total_before_truncation"],
    )
    return {
        **state,
        "summary": summary
    }
