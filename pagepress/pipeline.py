"""High-level orchestration from raw HTML to an article record."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from bs4 import BeautifulSoup

from .config import PipelineConfig
from .content import ContentBoundaryExtractor, ReadabilityContentExtractor
from .errors import ExtractionError, ExtractionFailed, Timeout
from .fetcher import Fetcher
from .heuristics import MetadataHeuristics, QueryableDocument
from .models import ArticleContent
from .reconcile import reconcile
from .resources import ResourceResolver
from .sanitizer import sanitize_html
from .urls import normalize_url

logger = logging.getLogger("pagepress")


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Report anything that is not already typed as ``ExtractionFailed``."""
    try:
        yield
    except ExtractionError:
        raise
    except Exception as exc:  # noqa: BLE001 - never leak raw library errors
        logger.exception("Stage %s failed", name)
        raise ExtractionFailed(str(exc) or exc.__class__.__name__, stage=name) from exc


def extract(
    raw_html: str,
    url: str,
    *,
    base_url: Optional[str] = None,
    config: Optional[PipelineConfig] = None,
    extractor: Optional[ContentBoundaryExtractor] = None,
    heuristics: Optional[MetadataHeuristics] = None,
) -> ArticleContent:
    """Turn one page into an :class:`ArticleContent`.

    ``url`` is the address the caller asked for; ``base_url`` is the page's
    effective URL after redirects and is used to resolve relative references.
    """
    config = config or PipelineConfig()
    original_url = normalize_url(url)
    effective_url = normalize_url(base_url) if base_url else original_url
    extractor = extractor or ReadabilityContentExtractor(config.extraction)
    heuristics = heuristics or MetadataHeuristics()

    start = time.perf_counter()
    with _stage("parse"):
        soup = BeautifulSoup(raw_html or "", "html.parser")
    with _stage("metadata"):
        raw_metadata = heuristics.extract(QueryableDocument(soup), original_url)
    with _stage("extract"):
        extracted = extractor.extract(raw_html, effective_url)
    with _stage("resolve"):
        resolved = ResourceResolver(config.extraction).resolve(
            extracted.content_html, effective_url, reference=soup
        )
    with _stage("sanitize"):
        content_html = sanitize_html(resolved.content_html)
    with _stage("reconcile"):
        metadata = reconcile(
            raw_metadata, extracted, content_html, original_url, config.extraction
        )

    logger.info(
        "Extracted %r from %s in %.2fs (%d words, %d images, %d links)",
        metadata.title,
        original_url,
        time.perf_counter() - start,
        metadata.word_count,
        len(resolved.images),
        len(resolved.links),
    )
    return ArticleContent(
        metadata=metadata,
        content=content_html,
        images=resolved.images,
        links=resolved.links,
    )


async def fetch_and_extract(
    url: str,
    fetcher: Fetcher,
    *,
    config: Optional[PipelineConfig] = None,
    extractor: Optional[ContentBoundaryExtractor] = None,
) -> ArticleContent:
    """Fetch ``url`` with ``fetcher`` and extract it within the time budget.

    On timeout the in-flight work is abandoned and :class:`Timeout` is raised.
    Fetch errors are terminal; nothing is retried. Untyped fetcher failures
    surface as :class:`ExtractionFailed` with stage ``"fetch"``.
    """
    config = config or PipelineConfig()
    normalized = normalize_url(url)

    async def _run() -> ArticleContent:
        with _stage("fetch"):
            page = await fetcher.fetch(normalized, config.fetch.navigation_timeout * 1000)
        return await asyncio.to_thread(
            extract,
            page.html,
            normalized,
            base_url=page.url or normalized,
            config=config,
            extractor=extractor,
        )

    try:
        return await asyncio.wait_for(_run(), timeout=config.timeout)
    except asyncio.TimeoutError as exc:
        logger.error("Timed out after %.1fs while processing %s", config.timeout, normalized)
        raise Timeout(config.timeout) from exc
