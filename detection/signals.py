"""
Signal extractor — turns a raw images:annotate response into typed lists.

Every category is optional in the provider response. Anything missing,
of the wrong type, or without a usable name is dropped, so later stages
only ever see tuples of plain strings and records.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

from detection.models import DominantColor, Signals, WebEntity

logger = logging.getLogger(__name__)


def _entries(container: Any, key: str) -> list[dict]:
    """Return the dict entries of container[key], or [] for anything else."""
    if not isinstance(container, dict):
        return []
    value = container.get(key)
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _names(entries: list[dict], key: str) -> tuple[str, ...]:
    return tuple(
        e[key] for e in entries
        if isinstance(e.get(key), str) and e[key]
    )


def _as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _channel(value: Any) -> int:
    return int(min(255.0, max(0.0, _as_float(value))))


def extract_text_lines(response: dict) -> tuple[str, ...]:
    """
    Split the aggregate (first) text annotation on newlines.

    The remaining annotations are single words already contained in the
    first one, so they are ignored rather than used as a fallback.
    """
    annotations = response.get("textAnnotations")
    if not isinstance(annotations, list) or not annotations:
        return ()
    first = annotations[0]
    if not isinstance(first, dict):
        return ()
    description = first.get("description")
    if not isinstance(description, str):
        return ()
    return tuple(description.split("\n"))


def extract_colors(response: dict) -> tuple[DominantColor, ...]:
    props = response.get("imagePropertiesAnnotation")
    dominant = props.get("dominantColors") if isinstance(props, dict) else None
    colors: list[DominantColor] = []
    for entry in _entries(dominant, "colors"):
        rgb = entry.get("color")
        if not isinstance(rgb, dict):
            continue
        # Zero channels are omitted by the provider
        colors.append(DominantColor(
            red=_channel(rgb.get("red")),
            green=_channel(rgb.get("green")),
            blue=_channel(rgb.get("blue")),
            score=_as_float(entry.get("score")),
        ))
    return tuple(colors)


def extract_web_entities(response: dict) -> tuple[WebEntity, ...]:
    web = response.get("webDetection")
    return tuple(
        WebEntity(description=e["description"], score=_as_float(e.get("score")))
        for e in _entries(web, "webEntities")
        if isinstance(e.get("description"), str) and e["description"]
    )


def extract_signals(response: Optional[dict]) -> Signals:
    """Normalise one image response into Signals. Never raises."""
    if not isinstance(response, dict):
        if response is not None:
            logger.warning("Annotation payload is %s, not a mapping, using empty signals",
                           type(response).__name__)
        return Signals()

    error = response.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else error
        logger.warning("Provider reported an image error: %s", message)

    signals = Signals(
        text_lines=extract_text_lines(response),
        logos=_names(_entries(response, "logoAnnotations"), "description"),
        labels=_names(_entries(response, "labelAnnotations"), "description"),
        objects=_names(_entries(response, "localizedObjectAnnotations"), "name"),
        colors=extract_colors(response),
        web_entities=extract_web_entities(response),
    )
    logger.debug(
        "Extracted %d text lines, %d logos, %d labels, %d objects, %d colours, %d web entities",
        len(signals.text_lines), len(signals.logos), len(signals.labels),
        len(signals.objects), len(signals.colors), len(signals.web_entities),
    )
    return signals


def first_response(payload: Any) -> Optional[dict]:
    """
    Accept either a single image response or a whole batch
    ({"responses": [...]}) and return the first image response.
    """
    if isinstance(payload, dict) and "responses" in payload:
        responses = payload.get("responses")
        if isinstance(responses, list) and responses and isinstance(responses[0], dict):
            return responses[0]
        return None
    return payload if isinstance(payload, dict) else None


def rgb_to_color_name(color: DominantColor) -> str:
    """Very coarse colour naming, good enough for a search keyword."""
    total = color.red + color.green + color.blue
    if total < 150:
        return "black"
    if total > 650:
        return "white"
    brightest = max(color.red, color.green, color.blue)
    if brightest == color.red:
        return "red"
    if brightest == color.green:
        return "green"
    return "blue"


def top_color_names(colors: tuple[DominantColor, ...], limit: int = 3) -> tuple[str, ...]:
    ranked = sorted(colors, key=lambda c: c.score, reverse=True)
    return tuple(rgb_to_color_name(c) for c in ranked[:limit])
