"""
Google Cloud Vision images:annotate client.

One POST per image, asking for every feature the identification engine
reads. This is the only network call in the project; every failure here
(no key, transport error, timeout, non-2xx, non-JSON body) surfaces as a
VisionAPIError for the caller to report; the engine is never run on a
failed fetch.
"""
from __future__ import annotations

import asyncio
import base64
import logging
import time
from typing import Optional

import aiohttp

import config

logger = logging.getLogger(__name__)

FEATURES = [
    {"type": "LABEL_DETECTION", "maxResults": 10},
    {"type": "LOGO_DETECTION", "maxResults": 5},
    {"type": "TEXT_DETECTION"},
    {"type": "OBJECT_LOCALIZATION", "maxResults": 5},
    {"type": "WEB_DETECTION", "maxResults": 5},
    {"type": "IMAGE_PROPERTIES"},
]


class VisionAPIError(RuntimeError):
    """The annotation fetch failed; the image could not be analysed."""


def build_request(image_bytes: bytes) -> dict:
    return {
        "requests": [{
            "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
            "features": FEATURES,
        }]
    }


async def annotate_image(image_bytes: bytes, api_key: Optional[str] = None) -> dict:
    """
    Return the annotation response for a single image.

    A per-image error inside a 200 response is not raised here. The
    response is returned as is and the extractor degrades it to empty
    signal lists.
    """
    key = api_key or config.GOOGLE_CLOUD_API_KEY
    if not key:
        raise VisionAPIError("GOOGLE_CLOUD_API_KEY is not set, cannot fetch annotations.")

    t0 = time.monotonic()
    try:
        async with aiohttp.ClientSession() as session:
            async with session.post(
                config.VISION_API_ENDPOINT,
                params={"key": key},
                json=build_request(image_bytes),
                timeout=aiohttp.ClientTimeout(total=config.VISION_TIMEOUT_SECS),
            ) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    raise VisionAPIError(f"Vision API error {resp.status}: {text[:200]}")
                try:
                    data = await resp.json(content_type=None)
                except ValueError as exc:
                    raise VisionAPIError(f"Vision API returned a non-JSON body: {exc}") from exc
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise VisionAPIError(f"Vision API request failed: {exc!r}") from exc

    latency_ms = int((time.monotonic() - t0) * 1000)
    if not isinstance(data, dict):
        raise VisionAPIError("Vision API returned an unexpected payload")

    responses = data.get("responses")
    if not isinstance(responses, list) or not responses:
        logger.warning("Vision API returned no image responses (%dms)", latency_ms)
        return {}

    logger.info("Vision API OK: %dms, %d bytes sent", latency_ms, len(image_bytes))
    first = responses[0]
    return first if isinstance(first, dict) else {}
