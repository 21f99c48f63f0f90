"""Merge page-level and content-level metadata into the final record."""

from __future__ import annotations

from typing import Optional

from .config import ExtractionConfig
from .heuristics import DEFAULT_TITLE, strip_title_suffix
from .models import ArticleMetadata, ExtractedArticle, PageMetadata
from .urls import get_domain
from .utils import count_words, html_to_text


def _prefer(extracted: Optional[str], raw: Optional[str]) -> Optional[str]:
    """Extracted value when it is non-blank, otherwise the raw one."""
    if extracted and extracted.strip():
        return extracted.strip()
    if raw and raw.strip():
        return raw.strip()
    return None


def reconcile(
    raw: PageMetadata,
    extracted: ExtractedArticle,
    content_html: str,
    original_url: str,
    config: Optional[ExtractionConfig] = None,
) -> ArticleMetadata:
    """Build the final metadata record.

    Extracted fields win whenever they are non-empty, and the winning title
    loses any trailing site-name suffix. ``site_name`` only ever
    comes from the raw page, ``original_url`` is always the normalized entry
    URL and the word count is taken from ``content_html`` alone.
    """
    config = config or ExtractionConfig()
    title = _prefer(extracted.title, raw.title) or DEFAULT_TITLE
    return ArticleMetadata(
        title=strip_title_suffix(title, (raw.site_name, get_domain(original_url))),
        author=_prefer(extracted.byline, raw.author),
        publish_date=_prefer(extracted.publish_time, raw.publish_date),
        description=_prefer(extracted.excerpt, raw.description),
        site_name=raw.site_name,
        original_url=original_url,
        word_count=count_words(html_to_text(content_html)),
        words_per_minute=config.words_per_minute,
    )
