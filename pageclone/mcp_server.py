"""MCP server exposing the page cloner as a tool."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from .config import CaptureOptions, CloneConfig
from .cloner import run_clone
from .models import CloneResult

logger = logging.getLogger("pageclone.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="pageclone")


def format_result(result: CloneResult) -> str:
    lines = [
        f"# Clone of {result.url}",
        "",
        f"- mode: {result.mode}",
        f"- screenshot: {result.snapshot_path}",
        f"- clone directory: {result.clone_dir}",
        f"- provider calls: {result.provider_calls}",
        f"- elapsed: {result.total_seconds:.2f}s",
    ]
    if result.failure:
        lines.append(f"- generation failure: {result.failure}")
    return "\n".join(lines) + "\n"


@mcp.tool()
async def clone(
    url: str,
    output: str = "output",
    refine: int = 1,
    use_ai: bool = True,
) -> str:
    """Screenshot a web page with Playwright and write an HTML/CSS/JS clone of it."""

    load_dotenv()
    config = CloneConfig(
        output_root=Path(output).expanduser().resolve(),
        capture=CaptureOptions(),
        refine_passes=max(0, refine),
        use_ai=use_ai,
        api_key=os.getenv("OPENAI_API_KEY") or None,
    )
    result = await run_clone(url, config)
    return format_result(result)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
