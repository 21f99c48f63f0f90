"""Image and link resolution for extracted article content."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import ExtractionConfig
from .models import ArticleImage, ArticleLink
from .urls import absolutize
from .utils import collapse_whitespace

logger = logging.getLogger("pagepress")

DIMENSION_PATTERN = re.compile(r"^\s*(\d+)")
UNLISTED_IMAGE_SCHEMES = ("data:", "javascript:", "blob:")

Dimensions = Tuple[Optional[int], Optional[int]]


@dataclass
class ResolvedContent:
    """Content with absolute references plus the enumerated resources."""

    content_html: str
    images: List[ArticleImage] = field(default_factory=list)
    links: List[ArticleLink] = field(default_factory=list)


def parse_dimension(value: Optional[str]) -> Optional[int]:
    """Read a leading integer from an attribute; zero counts as absent."""
    if not value:
        return None
    match = DIMENSION_PATTERN.match(str(value))
    if not match:
        return None
    number = int(match.group(1))
    return number or None


def is_skipped_href(href: str) -> bool:
    """Empty, fragment-only and script hrefs are never resolved."""
    lowered = href.strip().lower()
    return not lowered or lowered.startswith("#") or lowered.startswith("javascript:")


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return collapse_whitespace(value) or None


def find_caption(img: Tag) -> Optional[str]:
    """Caption from ``title``, the enclosing figure, or an adjacent caption."""
    title = _optional_text(img.get("title"))
    if title:
        return title
    figure = img.find_parent("figure")
    if figure is not None:
        figcaption = figure.find("figcaption")
        if figcaption is not None:
            text = _optional_text(figcaption.get_text(" "))
            if text:
                return text
    anchor = img.parent if img.parent is not None and img.parent.name == "a" else img
    sibling = anchor.find_next_sibling()
    if sibling is not None:
        classes = sibling.get("class") or []
        if sibling.name == "figcaption" or any("caption" in cls for cls in classes):
            return _optional_text(sibling.get_text(" "))
    return None


class ResourceResolver:
    """Rewrite content references to absolute URLs and enumerate them."""

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or ExtractionConfig()

    def resolve(
        self,
        content_html: str,
        base_url: str,
        reference: Optional[BeautifulSoup] = None,
    ) -> ResolvedContent:
        fragment = BeautifulSoup(content_html or "", "html.parser")
        known_sizes = self._reference_sizes(reference, base_url)
        images = self._resolve_images(fragment, base_url, known_sizes)
        links = self._resolve_links(fragment, base_url)

        if len(images) > self.config.max_images:
            logger.debug("Keeping %d of %d images", self.config.max_images, len(images))
        if len(links) > self.config.max_links:
            logger.debug("Keeping %d of %d links", self.config.max_links, len(links))
        return ResolvedContent(
            content_html=fragment.decode(),
            images=images[: self.config.max_images],
            links=links[: self.config.max_links],
        )

    def _reference_sizes(
        self, reference: Optional[BeautifulSoup], base_url: str
    ) -> Dict[str, Dimensions]:
        """Map absolute image URLs on the raw page to their declared size."""
        sizes: Dict[str, Dimensions] = {}
        if reference is None:
            return sizes
        for img in reference.find_all("img"):
            src = (img.get("src") or "").strip()
            if not src:
                continue
            key = absolutize(src, base_url)
            if key not in sizes:
                sizes[key] = (parse_dimension(img.get("width")), parse_dimension(img.get("height")))
        return sizes

    def _resolve_images(
        self,
        fragment: BeautifulSoup,
        base_url: str,
        known_sizes: Dict[str, Dimensions],
    ) -> List[ArticleImage]:
        images: List[ArticleImage] = []
        seen = set()
        for img in fragment.find_all("img"):
            src = (img.get("src") or "").strip()
            if not src:
                logger.debug("Dropping image without src")
                continue
            absolute = absolutize(src, base_url)
            img["src"] = absolute
            if absolute.lower().startswith(UNLISTED_IMAGE_SCHEMES) or absolute in seen:
                continue
            seen.add(absolute)

            width = parse_dimension(img.get("width"))
            height = parse_dimension(img.get("height"))
            if width is None and height is None:
                width, height = known_sizes.get(absolute, (None, None))
            images.append(
                ArticleImage(
                    src=absolute,
                    alt=_optional_text(img.get("alt")),
                    width=width,
                    height=height,
                    caption=find_caption(img),
                )
            )
        return images

    def _resolve_links(self, fragment: BeautifulSoup, base_url: str) -> List[ArticleLink]:
        links: List[ArticleLink] = []
        seen = set()
        for anchor in fragment.find_all("a", href=True):
            href = anchor["href"].strip()
            if is_skipped_href(href):
                continue
            if href.lower().startswith("mailto:"):
                continue
            absolute = absolutize(href, base_url)
            anchor["href"] = absolute
            if absolute in seen:
                continue
            seen.add(absolute)
            links.append(
                ArticleLink(
                    href=absolute,
                    text=collapse_whitespace(anchor.get_text(" ")),
                    title=_optional_text(anchor.get("title")),
                )
            )
        return links
