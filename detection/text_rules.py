"""
Text classifier — cleans OCR lines and tags brand- and model-shaped ones.

A line may land in both subsets; ranking downstream decides which role
it plays.
"""
from __future__ import annotations

import re
from typing import Iterable

from detection.models import ProcessedText

# Articles, conjunctions and short prepositions that are never a product name
STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to",
    "for", "of", "with", "by",
})

BRAND_PATTERN = re.compile(r"^[A-Z0-9][A-Za-z0-9\s\-.]*$")
BRAND_MIN_LEN = 3
BRAND_MAX_LEN = 19

MODEL_PATTERNS = (
    re.compile(r"^[A-Z0-9\-]{4,}$"),            # XR-4000, 2024, ABCD
    re.compile(r"^[A-Z]{1,4}-?\d{3,}[A-Z]?$"),  # SM-900X, A1234B
)


def is_stop_word(text: str) -> bool:
    return text.lower() in STOP_WORDS


def clean_lines(lines: Iterable[str]) -> tuple[str, ...]:
    stripped = (line.strip() for line in lines)
    return tuple(line for line in stripped if line and not is_stop_word(line))


def looks_like_brand(line: str) -> bool:
    return (
        BRAND_MIN_LEN <= len(line) <= BRAND_MAX_LEN
        and BRAND_PATTERN.match(line) is not None
    )


def looks_like_model_number(line: str) -> bool:
    return any(p.match(line) for p in MODEL_PATTERNS)


def classify_text(lines: Iterable[str]) -> ProcessedText:
    cleaned = clean_lines(lines)
    return ProcessedText(
        lines=cleaned,
        brand_indicators=tuple(l for l in cleaned if looks_like_brand(l)),
        model_numbers=tuple(l for l in cleaned if looks_like_model_number(l)),
    )
