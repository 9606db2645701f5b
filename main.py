"""
main.py — command-line entry point.

  python main.py photo.jpg                 fetch annotations, identify, print a card
  python main.py --annotations resp.json   identify from a saved annotate response
  python main.py photo.jpg --json          print the result as JSON instead

Exit status: 0 on success, 1 when the image could not be analysed,
2 when an annotation file cannot be read.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

import config
import style
from image_analyzer import analyse_image, identify
from providers.google_vision import VisionAPIError

logger = logging.getLogger(__name__)


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=getattr(logging, level, logging.INFO),
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Identify a photographed product and suggest search queries."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("image", nargs="?", type=Path, help="Photo to analyse")
    source.add_argument(
        "--annotations",
        type=Path,
        help="Saved images:annotate JSON response to run the engine on offline",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--debug", action="store_true", help="Include the confidence breakdown in the card"
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _load_annotations(path: Path):
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


async def run(args: argparse.Namespace) -> int:
    if args.annotations:
        try:
            annotations = _load_annotations(args.annotations)
        except (OSError, ValueError) as exc:
            print(style.error_bad_annotations(str(args.annotations), str(exc)), file=sys.stderr)
            return 2
        result = identify(annotations)
    else:
        try:
            image_bytes = args.image.read_bytes()
            result = await analyse_image(image_bytes)
        except (OSError, VisionAPIError) as exc:
            logger.error("Analysis of %s failed: %s", args.image, exc)
            print(style.error_analysis_failed(str(exc)), file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(style.identification_card(result, show_debug=args.debug))
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
