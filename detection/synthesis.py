"""
Category & name synthesis.

Match selection is an ordered chain of rules; each rule either returns a
ProductMatch or None, and the first non-None wins. The last rule always
answers, so selection never comes back empty.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from detection.models import (
    SOURCE_BRAND,
    SOURCE_LABEL,
    SOURCE_OBJECT,
    SOURCE_TEXT,
    UNKNOWN_PRODUCT,
    ProcessedText,
    ProductMatch,
    WebEntity,
)

logger = logging.getLogger(__name__)

# ── Lookup tables ─────────────────────────────────────────────────────────────

# Declaration order is the match order
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("electronics", ("phone", "smartphone", "laptop", "computer", "tablet", "camera")),
    ("clothing",    ("shirt", "pants", "dress", "shoe", "jacket")),
    ("furniture",   ("chair", "table", "desk", "sofa", "bed")),
    ("appliances",  ("refrigerator", "washer", "dryer", "dishwasher")),
)
GENERAL_CATEGORY = "general"

IRRELEVANT_OBJECTS: frozenset[str] = frozenset({"Person", "Human", "Wall", "Floor", "Table"})

PRODUCT_INDICATORS: tuple[str, ...] = (
    "model", "series", "edition", "version", "pack", "set", "kit",
    "collection", "brand", "type", "style", "size", "color",
)

TECH_LABELS: frozenset[str] = frozenset({"phone", "smartphone", "laptop", "tablet"})

CURRENCY_SYMBOLS = "$€£¥₪"
DESCRIPTION_TERMS = 5
MAX_CATEGORIES = 5
WEB_MATCH_MIN_SCORE = 0.5


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


# ── Objects & categories ──────────────────────────────────────────────────────

def filter_relevant_objects(objects: Sequence[str]) -> tuple[str, ...]:
    return tuple(o for o in objects if o not in IRRELEVANT_OBJECTS)


def determine_category(objects: Sequence[str], labels: Sequence[str]) -> str:
    """First category (in table order) with a keyword inside any object or label."""
    candidates = [c.lower() for c in (*objects, *labels)]
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in c for c in candidates for k in keywords):
            return category
    return GENERAL_CATEGORY


def determine_categories(
    labels: Sequence[str],
    objects: Sequence[str],
    web_entities: Sequence[WebEntity],
) -> tuple[str, ...]:
    terms = _unique(t for t in (*labels, *objects, *(e.description for e in web_entities)) if t)
    return tuple(terms[:MAX_CATEGORIES])


def construct_description(labels: Sequence[str], objects: Sequence[str]) -> str:
    terms = [t for t in _unique((*labels, *objects)) if t]
    return ", ".join(terms[:DESCRIPTION_TERMS])


# ── Match selection ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MatchContext:
    """Everything the match rules are allowed to look at."""
    text: ProcessedText
    brands: tuple[str, ...]
    model_number: Optional[str]
    relevant_objects: tuple[str, ...]
    labels: tuple[str, ...]
    web_entities: tuple[WebEntity, ...]


def is_product_name_line(line: str) -> bool:
    words = line.split(" ")
    lowered = line.lower()
    return (
        2 <= len(words) <= 6
        and not any(sym in line for sym in CURRENCY_SYMBOLS)
        and 3 < len(line) < 50
        and any(ind in lowered for ind in PRODUCT_INDICATORS)
    )


def _brand_and_model(ctx: MatchContext) -> Optional[ProductMatch]:
    if not (ctx.brands and ctx.model_number):
        return None
    return ProductMatch(
        name=f"{ctx.brands[0]} {ctx.model_number}",
        description=construct_description(ctx.labels, ctx.relevant_objects),
        source=SOURCE_BRAND,
    )


def _product_text_line(ctx: MatchContext) -> Optional[ProductMatch]:
    line = next((l for l in ctx.text.lines if is_product_name_line(l)), None)
    if line is None:
        return None
    return ProductMatch(
        name=line,
        description=construct_description(ctx.labels, ctx.relevant_objects),
        source=SOURCE_TEXT,
    )


def _web_entity(ctx: MatchContext) -> Optional[ProductMatch]:
    entity = next((e for e in ctx.web_entities if e.score > WEB_MATCH_MIN_SCORE), None)
    if entity is None:
        return None
    return ProductMatch(
        name=entity.description,
        description=construct_description(ctx.labels, ctx.relevant_objects),
        source=SOURCE_LABEL,
    )


def _first_object(ctx: MatchContext) -> Optional[ProductMatch]:
    if not ctx.relevant_objects:
        return None
    return ProductMatch(
        name=ctx.relevant_objects[0],
        description=construct_description(ctx.labels, ctx.relevant_objects[1:]),
        source=SOURCE_OBJECT,
    )


def _label_fallback(ctx: MatchContext) -> ProductMatch:
    if ctx.labels:
        return ProductMatch(
            name=ctx.labels[0],
            description=construct_description(ctx.labels[1:], ctx.relevant_objects),
            source=SOURCE_LABEL,
        )
    return ProductMatch(
        name=UNKNOWN_PRODUCT,
        description=construct_description((), ctx.relevant_objects),
        source=SOURCE_LABEL,
    )


MatchRule = Callable[[MatchContext], Optional[ProductMatch]]

# Priority order, first rule that returns a match wins
MATCH_RULES: tuple[tuple[str, MatchRule], ...] = (
    ("brand_and_model", _brand_and_model),
    ("product_text_line", _product_text_line),
    ("web_entity", _web_entity),
    ("first_object", _first_object),
    ("label_fallback", _label_fallback),
)


def select_match(ctx: MatchContext) -> ProductMatch:
    for rule_name, rule in MATCH_RULES:
        match = rule(ctx)
        if match is not None:
            logger.debug("Match rule %s fired: %r", rule_name, match.name)
            return match
    # _label_fallback always answers
    raise AssertionError("no match rule produced a result")


# ── Names & queries ───────────────────────────────────────────────────────────

def capitalized_runs(lines: Sequence[str]) -> list[str]:
    """Join each run of consecutive lines that start with an uppercase letter."""
    runs: list[str] = []
    current: list[str] = []
    for line in lines:
        if line[:1].isupper():
            current.append(line)
        elif current:
            runs.append(" ".join(current))
            current = []
    if current:
        runs.append(" ".join(current))
    return runs


def generate_possible_names(
    match: ProductMatch,
    brand: Optional[str],
    model_number: Optional[str],
    category: str,
    lines: Sequence[str],
    labels: Sequence[str],
) -> tuple[str, ...]:
    names: list[str] = []
    if match.name != UNKNOWN_PRODUCT:
        names.append(match.name)
    if brand and model_number:
        names.append(f"{brand} {model_number}")
    names.extend(capitalized_runs(lines))
    if category == "electronics" and brand:
        names.extend(f"{brand} {label}" for label in labels if label.lower() in TECH_LABELS)
    return tuple(_unique(names))


def generate_search_queries(
    possible_names: Sequence[str],
    brand: Optional[str],
    model_number: Optional[str],
    category: Optional[str],
    colors: Sequence[str],
) -> tuple[str, ...]:
    queries = list(possible_names)
    if brand and model_number:
        queries.append(f"{brand} {model_number}")
    if brand and category and colors:
        queries.append(f"{brand} {category} {colors[0]}")
    if brand and category:
        queries.append(f"{brand} {category}")
    return tuple(_unique(queries))
