"""Main-content isolation and content-derived metadata."""

from __future__ import annotations

import abc
import json
import logging
import re
import textwrap
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag
from readability import Document
from readability.readability import Unparseable

from .config import ExtractionConfig
from .errors import ExtractionError, ExtractionFailed, InsufficientContent
from .heuristics import normalize_date
from .models import ExtractedArticle
from .utils import collapse_whitespace

logger = logging.getLogger("pagepress")

DISCARD_TAGS = (
    "script",
    "style",
    "iframe",
    "object",
    "embed",
    "noscript",
    "template",
    "nav",
    "header",
    "footer",
    "aside",
)
BOILERPLATE_PATTERN = re.compile(
    r"^(?:ads?|adv|advert(?:isement)?s?|adsbygoogle|ad-(?:slot|wrapper|container|banner)"
    r"|sponsor(?:ed)?|promo|comments?|comment-(?:list|section|form)|disqus(?:_thread)?"
    r"|nav|navbar|navigation|menu|breadcrumbs?|share|sharing|social-share"
    r"|cookie-(?:banner|notice|consent)|newsletter-signup|related-(?:posts|articles))$",
    re.IGNORECASE,
)
BOILERPLATE_ROLES = {"navigation", "banner", "contentinfo", "complementary"}
PROTECTED_TAGS = {"html", "body", "main", "article"}
BYLINE_PATTERN = re.compile(r"byline|author|dateline|writtenby|p-author", re.IGNORECASE)
MAX_BYLINE_CHARS = 100
CANDIDATE_SELECTORS = ("main", "article", '[role="main"]')
NO_TITLE = "[no-title]"


class ContentBoundaryExtractor(abc.ABC):
    """Isolates the article body from a full page.

    Implementations must drop executable and boilerplate elements before
    scoring, reject regions below the configured text threshold with
    :class:`InsufficientContent` and report any other failure as
    :class:`ExtractionFailed`. They never fall back to the whole page.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()

    @abc.abstractmethod
    def extract(self, html: str, url: str) -> ExtractedArticle:
        """Return the main-content region of ``html`` and its derived fields."""


def _class_tokens(tag: Tag) -> List[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def _id_and_classes(tag: Tag) -> str:
    return " ".join(_class_tokens(tag) + [tag.get("id") or ""])


def _text_length(node: Any) -> int:
    return len(collapse_whitespace(node.get_text(" ")))


def _iter_json_ld(soup: BeautifulSoup) -> Iterator[dict]:
    """Yield every JSON-LD object on the page, flattening lists and graphs."""
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.string or "")
        except json.JSONDecodeError:
            continue
        stack = [data]
        while stack:
            item = stack.pop(0)
            if isinstance(item, list):
                stack.extend(item)
            elif isinstance(item, dict):
                yield item
                if isinstance(item.get("@graph"), list):
                    stack.extend(item["@graph"])


def _json_ld_author(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return collapse_whitespace(value) or None
    if isinstance(value, dict):
        return _json_ld_author(value.get("name"))
    if isinstance(value, list):
        names = [name for name in (_json_ld_author(item) for item in value) if name]
        return ", ".join(names) or None
    return None


class ReadabilityContentExtractor(ContentBoundaryExtractor):
    """Density-scoring extractor built on readability-lxml.

    The page is cleaned of executable and boilerplate markup, scored by
    readability, and the winning region is checked against the text
    threshold. When readability's region is too short, landmark regions
    (``main``, ``article``, ``[role=main]``) are tried before giving up.
    """

    def extract(self, html: str, url: str) -> ExtractedArticle:
        threshold = self.config.char_threshold
        try:
            soup = BeautifulSoup(html or "", "html.parser")
            json_ld = list(_iter_json_ld(soup))
            byline = self._find_byline(soup, json_ld)
            publish_time = self._find_publish_time(soup, json_ld)
            self._strip_boilerplate(soup)

            page_length = _text_length(soup)
            if page_length < threshold:
                raise InsufficientContent(page_length, threshold)

            document = Document(str(soup), retry_length=threshold)
            summary_html = document.summary(html_partial=True)
            title = document.short_title() or document.title()
        except ExtractionError:
            raise
        except Unparseable as exc:
            raise ExtractionFailed(f"readability could not parse the page: {exc}") from exc
        except Exception as exc:  # noqa: BLE001 - surface as a typed failure
            logger.exception("Unexpected error while scoring %s", url)
            raise ExtractionFailed(str(exc) or exc.__class__.__name__) from exc

        content_html, length = self._select_region(summary_html, soup)
        logger.debug("Selected content region for %s (%d characters)", url, length)

        if title == NO_TITLE:
            title = None
        return ExtractedArticle(
            content_html=content_html,
            title=collapse_whitespace(title) if title else None,
            byline=byline,
            publish_time=publish_time,
            excerpt=self._excerpt(content_html),
        )

    def _select_region(self, summary_html: str, soup: BeautifulSoup) -> Tuple[str, int]:
        threshold = self.config.char_threshold
        summary = BeautifulSoup(summary_html, "html.parser")
        # readability wraps a winning <body> as <body id="readabilityBody">
        for wrapper in summary.find_all(["html", "body"]):
            wrapper.unwrap()
        best = _text_length(summary)
        if best >= threshold:
            return summary.decode(), best

        logger.debug(
            "Readability region has %d characters (< %d); trying landmark regions",
            best,
            threshold,
        )
        for candidate in self._iter_candidates(soup):
            length = _text_length(candidate)
            if length >= threshold:
                return candidate.decode(), length
            best = max(best, length)
        raise InsufficientContent(best, threshold)

    def _iter_candidates(self, soup: BeautifulSoup) -> Iterable[Tag]:
        for selector in CANDIDATE_SELECTORS:
            candidate = soup.select_one(selector)
            if candidate is not None:
                yield candidate

    def _is_boilerplate(self, tag: Tag) -> bool:
        if tag.name in PROTECTED_TAGS:
            return False
        tokens = _class_tokens(tag)
        if any(token in self.config.preserve_classes for token in tokens):
            return False
        if (tag.get("role") or "").lower() in BOILERPLATE_ROLES:
            return True
        return any(BOILERPLATE_PATTERN.match(token) for token in tokens + [tag.get("id") or ""])

    def _strip_boilerplate(self, soup: BeautifulSoup) -> None:
        for tag in soup.find_all(list(DISCARD_TAGS)):
            if not tag.decomposed:
                tag.decompose()
        for tag in soup.find_all(True):
            if not tag.decomposed and self._is_boilerplate(tag):
                tag.decompose()

    def _find_byline(self, soup: BeautifulSoup, json_ld: List[dict]) -> Optional[str]:
        for item in json_ld:
            author = _json_ld_author(item.get("author"))
            if author:
                return author
        for tag in soup.find_all(True):
            if tag.name in ("meta", "link", "script", "style", "head", "title"):
                continue
            rel = tag.get("rel") or []
            itemprop = tag.get("itemprop") or ""
            if not (
                "author" in rel
                or "author" in itemprop
                or BYLINE_PATTERN.search(_id_and_classes(tag))
            ):
                continue
            text = collapse_whitespace(tag.get_text(" "))
            if 0 < len(text) < MAX_BYLINE_CHARS:
                return text
        return None

    def _find_publish_time(self, soup: BeautifulSoup, json_ld: List[dict]) -> Optional[str]:
        for item in json_ld:
            published = item.get("datePublished")
            if isinstance(published, str):
                normalized = normalize_date(published)
                if normalized:
                    return normalized
        meta = soup.find("meta", attrs={"property": "article:published_time"})
        if meta is not None:
            return normalize_date(meta.get("content"))
        return None

    def _excerpt(self, content_html: str) -> Optional[str]:
        fragment = BeautifulSoup(content_html, "html.parser")
        for paragraph in fragment.find_all("p"):
            text = collapse_whitespace(paragraph.get_text(" "))
            if text:
                return textwrap.shorten(
                    text, width=self.config.excerpt_max_chars, placeholder="..."
                )
        return None
