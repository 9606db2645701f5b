"""
Shared types for the product identification pipeline.

Every stage takes and returns these plain records; nothing here holds a
reference to the provider response, so a DetectionResult can be handed
straight to json.dumps via to_dict().
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# Provenance tags for the rule that produced the final name
SOURCE_BRAND  = "brand"
SOURCE_TEXT   = "text"
SOURCE_LABEL  = "label"
SOURCE_OBJECT = "object"

UNKNOWN_PRODUCT = "Unknown Product"


# ── Normalised signals ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DominantColor:
    red: int
    green: int
    blue: int
    score: float        # provider relevance, 0–1


@dataclass(frozen=True)
class WebEntity:
    description: str
    score: float


@dataclass(frozen=True)
class Signals:
    """Typed candidate lists pulled out of one annotation payload."""
    text_lines: tuple[str, ...] = ()
    logos: tuple[str, ...] = ()
    labels: tuple[str, ...] = ()
    objects: tuple[str, ...] = ()
    colors: tuple[DominantColor, ...] = ()
    web_entities: tuple[WebEntity, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not any((
            self.text_lines, self.logos, self.labels,
            self.objects, self.colors, self.web_entities,
        ))


@dataclass(frozen=True)
class ProcessedText:
    """Cleaned text lines plus the brand- and model-shaped subsets of them."""
    lines: tuple[str, ...] = ()
    brand_indicators: tuple[str, ...] = ()
    model_numbers: tuple[str, ...] = ()


# ── Stage outputs ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProductMatch:
    name: str
    description: str
    source: str         # brand | text | label | object


@dataclass(frozen=True)
class ConfidenceFactor:
    name: str
    score: float        # 0–1
    weight: float       # (0, 1]

    def to_dict(self) -> dict:
        return {
            "factor": self.name,
            "score": round(self.score, 4),
            "weight": self.weight,
        }


@dataclass(frozen=True)
class DetectionResult:
    """
    The engine's only output, built once per image.

    `confidence` is a rule-confidence heuristic (a weighted average of fixed
    factor scores), not a probability calibrated against ground truth.
    """
    name: str
    description: str
    labels: tuple[str, ...]
    confidence: float
    brand_name: Optional[str]
    detected_text: tuple[str, ...]
    categories: tuple[str, ...]
    match_source: str
    category: str = "general"
    model_number: Optional[str] = None
    colors: tuple[str, ...] = ()
    possible_names: tuple[str, ...] = ()
    search_queries: tuple[str, ...] = ()

    # Debug bundle
    raw_text: tuple[str, ...] = ()
    candidate_brands: tuple[str, ...] = ()
    relevant_objects: tuple[str, ...] = ()
    confidence_factors: tuple[ConfidenceFactor, ...] = field(default_factory=tuple)

    @property
    def confidence_level(self) -> str:
        """Coarse bucket for display: high | medium | low."""
        if self.confidence >= 0.7:
            return "high"
        if self.confidence >= 0.5:
            return "medium"
        return "low"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "labels": list(self.labels),
            "confidence": round(self.confidence, 4),
            "brand_name": self.brand_name,
            "detected_text": list(self.detected_text),
            "categories": list(self.categories),
            "match_source": self.match_source,
            "category": self.category,
            "model_number": self.model_number,
            "colors": list(self.colors),
            "possible_names": list(self.possible_names),
            "search_queries": list(self.search_queries),
            "debug_info": {
                "all_detected_text": list(self.raw_text),
                "potential_brands": list(self.candidate_brands),
                "relevant_objects": list(self.relevant_objects),
                "confidence_factors": [f.to_dict() for f in self.confidence_factors],
            },
        }
