"""Command-line entry point for the page cloner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from .config import (
    DEFAULT_MLX_MODEL_ID,
    DEFAULT_MODEL_ID,
    DEFAULT_PROVIDER,
    PROVIDERS,
    WAIT_EVENTS,
    CaptureOptions,
    CloneConfig,
)
from .cloner import run_clone

logger = logging.getLogger("pageclone.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pageclone",
        description="Screenshot a website and scaffold a static clone",
    )
    parser.add_argument("url", help="Website URL to capture")
    parser.add_argument(
        "-o",
        "--out",
        default="output",
        type=Path,
        help="Output directory",
    )
    parser.add_argument("-W", "--width", type=int, default=1280, help="Viewport width")
    parser.add_argument("-H", "--height", type=int, default=720, help="Viewport height")
    parser.add_argument(
        "--full-page",
        action="store_true",
        help="Capture the full scrollable page",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=30_000,
        help="Navigation timeout in milliseconds",
    )
    parser.add_argument(
        "--wait",
        choices=WAIT_EVENTS,
        default="networkidle",
        help="Navigation wait event",
    )
    parser.add_argument(
        "--model",
        default=None,
        help=f"Model identifier (default: {DEFAULT_MODEL_ID}, or {DEFAULT_MLX_MODEL_ID} for mlx)",
    )
    parser.add_argument(
        "--refine",
        type=int,
        default=1,
        help="Number of refinement passes",
    )
    parser.add_argument(
        "--no-ai",
        dest="ai",
        action="store_false",
        help="Skip model generation",
    )
    parser.add_argument(
        "--provider",
        choices=PROVIDERS,
        default=DEFAULT_PROVIDER,
        help="Completion provider used for generation",
    )
    parser.add_argument(
        "--max-image-side",
        type=int,
        default=2048,
        help="Resize the screenshot so the longest edge is at most this many pixels before sending it",
    )
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=8192,
        help="Maximum number of tokens to generate (mlx provider)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CloneConfig:
    return CloneConfig(
        output_root=Path(args.out).resolve(),
        capture=CaptureOptions(
            width=args.width,
            height=args.height,
            wait_until=args.wait,
            timeout_ms=max(0, args.timeout),
            full_page=args.full_page,
        ),
        model_id=args.model,
        refine_passes=max(0, args.refine),
        use_ai=args.ai,
        provider=args.provider,
        api_key=os.getenv("OPENAI_API_KEY") or None,
        max_image_side=args.max_image_side,
        max_tokens=args.max_tokens,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    load_dotenv()

    config = build_config(args)
    try:
        result = asyncio.run(run_clone(args.url, config))
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("%s", exc)
        return 1

    logger.debug(
        "Finished %s in %.2fs (mode=%s, provider calls=%d)",
        result.url,
        result.total_seconds,
        result.mode,
        result.provider_calls,
    )
    print("Done.")
    print(f"Screenshot: {result.snapshot_path}")
    print(f"Clone scaffold: {result.clone_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
