"""MCP server exposing the article extraction tool."""

from __future__ import annotations

import logging
from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from .config import PipelineConfig
from .fetcher import PlaywrightFetcher
from .pipeline import fetch_and_extract

logger = logging.getLogger("pagepress.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="pagepress")


@mcp.tool()
async def extract_article(url: str) -> Dict[str, Any]:
    """Render a web page with Playwright and return its article record."""

    config = PipelineConfig()
    async with PlaywrightFetcher(config.fetch) as fetcher:
        article = await fetch_and_extract(url, fetcher, config=config)
    return article.to_dict()


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
