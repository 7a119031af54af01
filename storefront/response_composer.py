from typing import Optional, Sequence

from .constants import SUMMARY_EXAMPLE_COUNT
from .models import ParsedQuery, Product


def format_amount(value: float) -> str:
    """15.0 -> "15", 12.5 -> "12.50"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


class ResponseComposer:
    """Builds the short natural-language explanation shown above the results."""

    def compose(
        self,
        query: str,
        products: Sequence[Product],
        parsed_query: ParsedQuery,
        total: Optional[int] = None,
    ) -> str:
        """Summarize a ranked result list.

        ``products`` is the (possibly truncated) list being displayed and
        ``total`` the number of matches before truncation. The output depends on
        the inputs only.
        """
        total = len(products) if total is None else total
        if total == 0:
            return (
                f"I couldn't find any products matching \"{query}\". "
                "Try searching for different terms!"
            )

        parts = [f"I found {total} product{'s' if total != 1 else ''} for you!"]

        price_max = parsed_query.filters.price_max
        if price_max is not None:
            lead = "All items are" if total > 1 else "The item is"
            parts.append(f"{lead} under ${format_amount(price_max)}.")

        # A zero page size still reports the count
        if products:
            examples = ", ".join(p.name for p in products[:SUMMARY_EXAMPLE_COUNT])
            parts.append(f"Here are some great options: {examples}.")

        if total > len(products):
            parts.append(f"Showing {len(products)} of {total} results.")

        return " ".join(parts)
