"""
Central configuration — reads from the environment / .env file.

Only the upstream annotation fetch and the CLI read these values; the
identification rules themselves are constant tables in detection/.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# ── Google Cloud Vision ───────────────────────────────────────────────────────
# Only required when fetching annotations for an image; running the engine on
# a saved annotation file works without it.
GOOGLE_CLOUD_API_KEY: str | None = os.getenv("GOOGLE_CLOUD_API_KEY", "").strip() or None

VISION_API_ENDPOINT: str = os.getenv(
    "VISION_API_ENDPOINT", "https://vision.googleapis.com/v1/images:annotate"
)

# Total time allowed for one annotate call, in seconds
VISION_TIMEOUT_SECS: float = float(os.getenv("VISION_TIMEOUT_SECS", "30"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
