"""
Confidence scorer.

Five fixed factors, always all present, each with a "found" and a
"baseline" score. The overall value is the weighted average of the
factor scores. It is a rule-confidence heuristic, not a calibrated
probability.
"""
from __future__ import annotations

from typing import Sequence

from detection.models import ConfidenceFactor, ProcessedText, WebEntity

BRAND_DETECTION  = "Brand Detection"
TEXT_QUALITY     = "Text Quality"
MODEL_NUMBER     = "Model Number"
OBJECT_DETECTION = "Object Detection"
WEB_MATCH        = "Web Match"

# name → (score when found, baseline score, weight)
FACTOR_RULES: dict[str, tuple[float, float, float]] = {
    BRAND_DETECTION:  (0.9, 0.3, 0.30),
    TEXT_QUALITY:     (0.8, 0.4, 0.20),
    MODEL_NUMBER:     (0.9, 0.3, 0.15),
    OBJECT_DETECTION: (0.7, 0.3, 0.20),
    WEB_MATCH:        (0.8, 0.4, 0.15),
}

TEXT_QUALITY_MIN_LINES = 3      # strictly more than this many lines
STRONG_WEB_MATCH_SCORE = 0.7


def _factor(name: str, found: bool) -> ConfidenceFactor:
    hit, baseline, weight = FACTOR_RULES[name]
    return ConfidenceFactor(name=name, score=hit if found else baseline, weight=weight)


def calculate_factors(
    text: ProcessedText,
    brands: Sequence[str],
    relevant_objects: Sequence[str],
    web_entities: Sequence[WebEntity],
) -> tuple[ConfidenceFactor, ...]:
    return (
        _factor(BRAND_DETECTION, len(brands) > 0),
        _factor(TEXT_QUALITY, len(text.lines) > TEXT_QUALITY_MIN_LINES),
        _factor(MODEL_NUMBER, len(text.model_numbers) > 0),
        _factor(OBJECT_DETECTION, len(relevant_objects) > 0),
        _factor(WEB_MATCH, any(e.score > STRONG_WEB_MATCH_SCORE for e in web_entities)),
    )


def overall_confidence(factors: Sequence[ConfidenceFactor]) -> float:
    total_weight = sum(f.weight for f in factors)
    if total_weight <= 0:
        return 0.0
    weighted = sum(f.score * f.weight for f in factors)
    return min(1.0, max(0.0, weighted / total_weight))
