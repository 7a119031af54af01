"""Rule-based query understanding.

Turns free text such as "show me Samsung TVs under $500" into a ParsedQuery.
Every rule lives in an ordered table so the priority between rules can be
read and tested one rule at a time:

- the lexical extractor fills the FilterSet (first hit per field wins)
- the category classifier picks the first category with a keyword hit
- the intent classifier labels the query for display purposes
"""

import re
from functools import lru_cache
from typing import Any, Callable, Dict, NamedTuple, Tuple

from .constants import (
    BRAND_VOCABULARY,
    CATEGORY_KEYWORDS,
    CHEAP_PHRASES,
    CHEAP_PRICE_MAX,
    COLOR_VOCABULARY,
    EXPENSIVE_PHRASES,
    EXPENSIVE_PRICE_MIN,
    FEATURED_PHRASES,
    GENDER_PHRASES,
    GENERAL_CATEGORY,
    IN_STOCK_PHRASES,
    INTENT_TRIGGERS,
    LOCATION_PHRASES,
    PRICE_MAX_PHRASES,
    PRICE_MIN_PHRASES,
    RATING_PHRASES,
    STOP_PHRASES,
    USER_LOCATION,
)
from .models import ExtractionResult, FilterSet, Intent, ParsedQuery

_AMOUNT = r"\$?\s*(\d[\d,]*(?:\.\d+)?)"


class ExtractionRule(NamedTuple):
    """One (predicate, extractor) pair of the lexical rule table."""
    field: str
    pattern: re.Pattern
    extract: Callable[[re.Match], Any]


def normalize_text(text: str) -> str:
    """Lowercase copy used for matching; curly apostrophes fold to straight ones."""
    return (text or "").replace("’", "'").lower()


def _phrase_regex(phrase: str, strict: bool = False) -> str:
    body = r"\s+".join(re.escape(word) for word in phrase.split())
    if strict:
        return r"\b" + body + r"(?:s|es)?\b"
    return body


def _exact_regex(phrase: str) -> str:
    return r"\b" + r"\s+".join(re.escape(word) for word in phrase.split()) + r"\b"


def _any_of(phrases, strict: bool = False) -> re.Pattern:
    return re.compile("|".join(_phrase_regex(p, strict) for p in phrases))


def _parse_amount(raw: str) -> float:
    return float(raw.replace(",", ""))


def _constant(value):
    return lambda match: value


def _price_rules(field: str, phrases):
    # Anchored at a word start in every mode so "vitamin 30" is not a minimum price
    for phrase in phrases:
        body = r"\s+".join(re.escape(word) for word in phrase.split())
        pattern = re.compile(r"\b" + body + r"\s*" + _AMOUNT)
        yield ExtractionRule(field, pattern, lambda match: _parse_amount(match.group(1)))


def _vocabulary_rules(field: str, vocabulary, strict: bool):
    for word in vocabulary:
        yield ExtractionRule(field, re.compile(_phrase_regex(word, strict)), _constant(word))


@lru_cache(maxsize=None)
def build_lexical_rules(strict: bool = False, price_shortcuts: bool = False) -> Tuple[ExtractionRule, ...]:
    """Build the ordered rule table for one matching mode.

    Within a field the earlier rule wins. The table is built once per mode and
    shared; rules hold compiled patterns only.
    """
    rules = []
    rules.extend(_price_rules("price_max", PRICE_MAX_PHRASES))
    rules.extend(_price_rules("price_min", PRICE_MIN_PHRASES))
    if price_shortcuts:
        rules.append(ExtractionRule("price_max", _any_of(CHEAP_PHRASES, strict), _constant(CHEAP_PRICE_MAX)))
        rules.append(ExtractionRule("price_min", _any_of(EXPENSIVE_PHRASES, strict), _constant(EXPENSIVE_PRICE_MIN)))
    rules.extend(_vocabulary_rules("color", COLOR_VOCABULARY, strict))
    rules.extend(_vocabulary_rules("brand", BRAND_VOCABULARY, strict))
    size_prefix = r"\b" if strict else ""
    rules.append(ExtractionRule(
        "size",
        re.compile(size_prefix + r"size\s+([smlx]+|\d+(?:\.\d+)?)\b"),
        lambda match: match.group(1).upper(),
    ))
    # Audience phrases always match whole words; "men's" must not fire inside "women's"
    for gender, phrases in GENDER_PHRASES:
        pattern = re.compile("|".join(_exact_regex(p) for p in phrases))
        rules.append(ExtractionRule("gender", pattern, _constant(gender)))
    for threshold, phrases in RATING_PHRASES:
        rules.append(ExtractionRule("rating_min", _any_of(phrases, strict), _constant(threshold)))
    rules.append(ExtractionRule("in_stock", _any_of(IN_STOCK_PHRASES, strict), _constant(True)))
    rules.append(ExtractionRule("is_featured", _any_of(FEATURED_PHRASES, strict), _constant(True)))
    rules.append(ExtractionRule("location", _any_of(LOCATION_PHRASES, strict), _constant(USER_LOCATION)))
    return tuple(rules)


# Stripped from the original text, case-insensitively, to build the residual search text
_RESIDUAL_PATTERNS = (
    re.compile(
        r"\b(?:" + "|".join(_phrase_regex(p) for p in PRICE_MAX_PHRASES + PRICE_MIN_PHRASES) + r")\s*" + _AMOUNT,
        re.IGNORECASE,
    ),
    re.compile("|".join(_exact_regex(p) for p in STOP_PHRASES), re.IGNORECASE),
    re.compile("|".join(_exact_regex(c) for c in CATEGORY_KEYWORDS), re.IGNORECASE),
)


def residual_search_text(text: str) -> str:
    """The original text minus price, stop and category phrases, whitespace collapsed."""
    residual = text or ""
    for pattern in _RESIDUAL_PATTERNS:
        residual = pattern.sub(" ", residual)
    return " ".join(residual.split())


class LexicalExtractor:
    def __init__(self, strict_word_match: bool = False, price_shortcuts: bool = False):
        self.rules = build_lexical_rules(strict_word_match, price_shortcuts)

    def extract(self, text: str) -> ExtractionResult:
        """Apply the rule table to one query. Unmatched fields stay unset."""
        lowered = normalize_text(text)
        values: Dict[str, Any] = {}
        for rule in self.rules:
            if rule.field in values:
                continue
            match = rule.pattern.search(lowered)
            if match:
                values[rule.field] = rule.extract(match)
        location = values.pop("location", None)
        return ExtractionResult(
            filters=FilterSet(**values),
            search_text=residual_search_text(text),
            location=location,
        )


class CategoryClassifier:
    """First-match classifier over CATEGORY_KEYWORDS in declaration order."""

    def __init__(self, strict_word_match: bool = False):
        self.rules = tuple(
            (category, _any_of(keywords, strict_word_match))
            for category, keywords in CATEGORY_KEYWORDS.items()
        )

    def classify(self, lowered: str) -> str:
        for category, pattern in self.rules:
            if pattern.search(lowered):
                return category
        return GENERAL_CATEGORY


class IntentClassifier:
    def __init__(self, strict_word_match: bool = False):
        self.rules = tuple(
            (Intent(intent), _any_of(phrases, strict_word_match))
            for intent, phrases in INTENT_TRIGGERS
        )

    def classify(self, lowered: str) -> Intent:
        for intent, pattern in self.rules:
            if pattern.search(lowered):
                return intent
        return Intent.SEARCH


class QueryParser:
    """Runs the three classifiers over the same text and merges their output."""

    def __init__(self, strict_word_match: bool = False, price_shortcuts: bool = False):
        self.extractor = LexicalExtractor(strict_word_match, price_shortcuts)
        self.category_classifier = CategoryClassifier(strict_word_match)
        self.intent_classifier = IntentClassifier(strict_word_match)

    def analyze(self, text: str) -> Tuple[ParsedQuery, ExtractionResult]:
        lowered = normalize_text(text)
        extraction = self.extractor.extract(text)
        parsed = ParsedQuery(
            category=self.category_classifier.classify(lowered),
            intent=self.intent_classifier.classify(lowered),
            filters=extraction.filters,
            location=extraction.location,
        )
        return parsed, extraction

    def parse(self, text: str) -> ParsedQuery:
        """Parse a shopping query into category, intent and filters."""
        return self.analyze(text)[0]


def parse_query(text: str) -> ParsedQuery:
    """Parse a query with the default (compatibility) rule set."""
    return QueryParser().parse(text)
