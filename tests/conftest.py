"""
Shared pytest fixtures.

`make_annotations` builds images:annotate responses shaped like the real
provider output, so tests describe signals rather than JSON plumbing.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def build_annotations(
    text: list[str] | None = None,
    logos: list[str] = (),
    labels: list[str] = (),
    objects: list[str] = (),
    web: list[tuple[str, float]] = (),
    colors: list[tuple[int, int, int, float]] = (),
) -> dict:
    response: dict = {}
    if text is not None:
        # First annotation is the whole text block; the rest are single words
        words = [w for line in text for w in line.split()]
        response["textAnnotations"] = (
            [{"locale": "en", "description": "\n".join(text) + "\n"}]
            + [{"description": w} for w in words]
        )
    if logos:
        response["logoAnnotations"] = [{"description": l, "score": 0.9} for l in logos]
    if labels:
        response["labelAnnotations"] = [{"description": l, "score": 0.9} for l in labels]
    if objects:
        response["localizedObjectAnnotations"] = [{"name": o, "score": 0.8} for o in objects]
    if web:
        response["webDetection"] = {
            "webEntities": [{"entityId": f"/m/{i}", "description": d, "score": s}
                            for i, (d, s) in enumerate(web)]
        }
    if colors:
        response["imagePropertiesAnnotation"] = {
            "dominantColors": {
                "colors": [
                    {"color": {"red": r, "green": g, "blue": b}, "score": s, "pixelFraction": 0.1}
                    for r, g, b, s in colors
                ]
            }
        }
    return response


@pytest.fixture
def make_annotations():
    return build_annotations
