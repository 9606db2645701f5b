"""
image_analyzer.py — the product identification engine's public interface.

  from image_analyzer import identify, analyse_image, DetectionResult

identify() is a pure, synchronous function of one annotation payload: it
never raises for missing or malformed signal categories and shares no
state between calls. analyse_image() adds the one network hop (fetching
annotations) in front of it; failures of that hop propagate to the caller.
"""
from __future__ import annotations

import logging
from typing import Any

from detection.brands import resolve_brands, resolve_model_number
from detection.confidence import calculate_factors, overall_confidence
from detection.models import DetectionResult
from detection.signals import extract_signals, first_response, top_color_names
from detection.synthesis import (
    MatchContext,
    determine_categories,
    determine_category,
    filter_relevant_objects,
    generate_possible_names,
    generate_search_queries,
    select_match,
)
from detection.text_rules import classify_text

logger = logging.getLogger(__name__)

__all__ = ["DetectionResult", "identify", "analyse_image"]


def identify(annotations: Any) -> DetectionResult:
    """
    Identify the photographed product from one images:annotate response.

    Accepts a single image response or a whole batch ({"responses": [...]}),
    in which case the first image is used.
    """
    signals = extract_signals(first_response(annotations))
    if signals.is_empty:
        logger.debug("Annotation payload carried no usable signals")

    text = classify_text(signals.text_lines)
    brands = resolve_brands(signals.logos, text.brand_indicators)
    brand = brands[0] if brands else None
    model_number = resolve_model_number(text)
    relevant_objects = filter_relevant_objects(signals.objects)

    match = select_match(MatchContext(
        text=text,
        brands=brands,
        model_number=model_number,
        relevant_objects=relevant_objects,
        labels=signals.labels,
        web_entities=signals.web_entities,
    ))

    category = determine_category(signals.objects, signals.labels)
    colors = top_color_names(signals.colors)
    possible_names = generate_possible_names(
        match, brand, model_number, category, text.lines, signals.labels,
    )
    queries = generate_search_queries(possible_names, brand, model_number, category, colors)

    factors = calculate_factors(text, brands, relevant_objects, signals.web_entities)
    confidence = overall_confidence(factors)

    logger.info(
        "Identified %r (source=%s, confidence=%.2f, %d queries)",
        match.name, match.source, confidence, len(queries),
    )
    return DetectionResult(
        name=match.name,
        description=match.description,
        labels=signals.labels,
        confidence=confidence,
        brand_name=brand,
        detected_text=text.lines,
        categories=determine_categories(signals.labels, signals.objects, signals.web_entities),
        match_source=match.source,
        category=category,
        model_number=model_number,
        colors=colors,
        possible_names=possible_names,
        search_queries=queries,
        raw_text=signals.text_lines,
        candidate_brands=brands,
        relevant_objects=relevant_objects,
        confidence_factors=factors,
    )


async def analyse_image(image_bytes: bytes) -> DetectionResult:
    """Fetch annotations for image_bytes and identify the product in them."""
    from providers.google_vision import annotate_image
    annotations = await annotate_image(image_bytes)
    return identify(annotations)
