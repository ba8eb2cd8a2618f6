"""Playwright rendering that produces the reference snapshot."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import WAIT_EVENTS, CaptureOptions
from .errors import NavigationError

logger = logging.getLogger("pageclone")


async def capture_snapshot(url: str, snapshot_path: Path, options: CaptureOptions) -> Path:
    """Navigate to a URL and write a PNG screenshot to ``snapshot_path``."""
    if options.wait_until not in WAIT_EVENTS:
        raise ValueError(f"Wait must be one of: {', '.join(WAIT_EVENTS)}.")

    try:
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            try:
                page = await browser.new_page(
                    viewport={"width": options.width, "height": options.height}
                )
                logger.info("Loading %s", url)
                await page.goto(
                    url,
                    wait_until=options.wait_until,
                    timeout=options.timeout_ms,
                )
                await page.screenshot(path=str(snapshot_path), full_page=options.full_page)
            finally:
                await browser.close()
    except PlaywrightTimeoutError as exc:
        raise NavigationError(url, f"timed out after {options.timeout_ms}ms") from exc
    except PlaywrightError as exc:
        raise NavigationError(url, str(exc)) from exc

    logger.info("Saved screenshot to %s", snapshot_path)
    return snapshot_path
