"""Page fetching through a headless Playwright browser."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import FetchConfig
from .errors import ConnectionRefused, DNSFailure, FetchError, FetchTimeout, HTTPStatus

logger = logging.getLogger("pagepress")


@dataclass
class FetchResult:
    """Rendered HTML and the URL the browser ended up on."""

    html: str
    url: str


class Fetcher(Protocol):
    async def fetch(self, url: str, timeout_ms: float) -> FetchResult:
        ...


def classify_error(url: str, message: str, timeout_ms: float) -> FetchError:
    """Map a browser error message onto the fetch error taxonomy."""
    if "net::ERR_NAME_NOT_RESOLVED" in message:
        return DNSFailure(url, "could not resolve the domain name")
    if "net::ERR_CONNECTION_REFUSED" in message:
        return ConnectionRefused(url, "connection refused")
    if "Timeout" in message and "exceeded" in message:
        return FetchTimeout(url, timeout_ms / 1000)
    first_line = message.strip().splitlines()[0] if message.strip() else "unknown error"
    return FetchError(url, first_line)


class PlaywrightFetcher:
    """Fetch collaborator backed by one Chromium instance.

    The browser lives for the duration of an ``async with`` block and is
    shared by every ``fetch`` call made inside it; each call gets its own
    browser context.
    """

    def __init__(self, config: Optional[FetchConfig] = None) -> None:
        self.config = config or FetchConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> "PlaywrightFetcher":
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=list(self.config.launch_args),
            )
        except PlaywrightError:
            await self._playwright.stop()
            self._playwright = None
            raise
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def fetch(self, url: str, timeout_ms: float) -> FetchResult:
        if self._browser is None:
            raise RuntimeError("PlaywrightFetcher must be used inside 'async with'")

        width, height = self.config.viewport
        context = await self._browser.new_context(
            user_agent=self.config.user_agent,
            viewport={"width": width, "height": height},
        )
        page = await context.new_page()
        page.set_default_navigation_timeout(timeout_ms)
        try:
            logger.info("Loading %s", url)
            response = await page.goto(url, wait_until="networkidle")
            if response is not None and response.status >= 400:
                raise HTTPStatus(url, response.status)
            if self.config.wait_after_load:
                await page.wait_for_timeout(int(self.config.wait_after_load * 1000))
            html = await page.content()
            final_url = page.url
        except PlaywrightTimeoutError as exc:
            raise FetchTimeout(url, timeout_ms / 1000) from exc
        except PlaywrightError as exc:
            raise classify_error(url, str(exc), timeout_ms) from exc
        finally:
            await context.close()
        logger.debug("Fetched %s (%d characters, final URL %s)", url, len(html), final_url)
        return FetchResult(html=html, url=final_url)
