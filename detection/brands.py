"""
Brand / model resolver.

Candidate brands: logos first (the provider ranks them), then text lines
that look like brands; within each group longer strings are taken to be
more specific. Nothing beyond source and length is used to break ties.
"""
from __future__ import annotations

from typing import Optional, Sequence

from detection.models import ProcessedText
from detection.text_rules import is_stop_word


def resolve_brands(logos: Sequence[str], brand_indicators: Sequence[str]) -> tuple[str, ...]:
    logo_set = set(logos)
    candidates = [
        b for b in dict.fromkeys((*logos, *brand_indicators))
        if len(b) > 1 and not is_stop_word(b)
    ]
    # Stable sort: equal-length candidates keep first-seen order
    candidates.sort(key=lambda b: (b not in logo_set, -len(b)))
    return tuple(candidates)


def resolve_model_number(text: ProcessedText) -> Optional[str]:
    """First model-shaped line wins."""
    return text.model_numbers[0] if text.model_numbers else None
