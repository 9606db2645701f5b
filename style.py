"""
style.py — terminal rendering for identification results.

Design language:
  • One card per image: header → identity → confidence → queries → debug
  • Unicode box-drawing dividers
  • Confidence shown as a coloured dot plus the numeric score

All human-readable CLI output goes through this module; machine-readable
output is DetectionResult.to_dict().
"""
from __future__ import annotations

from typing import Optional

from detection.models import DetectionResult

# ── Visual constants ──────────────────────────────────────────────────────────

DIV   = "━━━━━━━━━━━━━━━━━━━━━━━━━━"    # thick divider
SDIV  = "┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄"    # subtle divider

CONF = {"high": "🟢", "medium": "🟡", "low": "🔴"}

SOURCE_LABELS = {
    "brand":  "brand + model number",
    "text":   "product text on the item",
    "label":  "image labels / web match",
    "object": "detected object",
}

MAX_QUERIES_SHOWN = 6


def score_bar(score: float, width: int = 10) -> str:
    """Render a 0–1 score as a fixed-width bar, e.g. ███████░░░."""
    filled = round(max(0.0, min(1.0, score)) * width)
    return "█" * filled + "░" * (width - filled)


def _bullets(items, empty: str = "none detected") -> str:
    return "\n".join(f"  ▸ {i}" for i in items) or f"  ▸ {empty}"


# ══════════════════════════════════════════════════════════════════════════════
# IDENTIFICATION RESULT
# ══════════════════════════════════════════════════════════════════════════════

def identification_card(result: DetectionResult, show_debug: bool = False) -> str:
    conf_icon = CONF.get(result.confidence_level, "⚪")
    source    = SOURCE_LABELS.get(result.match_source, result.match_source)
    queries   = _bullets(result.search_queries[:MAX_QUERIES_SHOWN], empty="no search queries")

    lines = [
        "✨ PRODUCT IDENTIFIED",
        DIV,
        "",
        f"🏷️  {result.name}",
        f"🏢 {result.brand_name or 'Unknown brand'}"
        + (f"   #️⃣ {result.model_number}" if result.model_number else ""),
        f"📦 {result.category}",
    ]
    if result.description:
        lines.append(f"📝 {result.description}")
    lines += [
        "",
        f"{conf_icon} Confidence: {result.confidence:.2f} ({result.confidence_level})",
        f"🔎 Matched on: {source}",
        "",
        SDIV,
        "Search queries",
        queries,
    ]
    if show_debug:
        lines += ["", debug_section(result)]
    lines.append(DIV)
    return "\n".join(lines)


def debug_section(result: DetectionResult) -> str:
    factors = "\n".join(
        f"  {f.name:<17} {score_bar(f.score)} {f.score:.2f} × {f.weight:.2f}"
        for f in result.confidence_factors
    )
    return "\n".join([
        SDIV,
        "Confidence factors",
        factors,
        "",
        "Candidate brands",
        _bullets(result.candidate_brands),
        "Relevant objects",
        _bullets(result.relevant_objects),
        "Detected text",
        _bullets(result.detected_text),
    ])


# ══════════════════════════════════════════════════════════════════════════════
# ERRORS
# ══════════════════════════════════════════════════════════════════════════════

def error_analysis_failed(detail: Optional[str] = None) -> str:
    extra = f"\n   {detail}" if detail else ""
    return f"⚠️  Could not analyse the image, please retry.{extra}"


def error_bad_annotations(path: str, detail: str) -> str:
    return f"⚠️  Could not read annotations from {path}: {detail}"
