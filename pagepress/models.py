"""Data models used throughout the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dateutil import parser as dtparse

from .errors import InvalidOptions
from .urls import is_valid_url
from .utils import reading_time


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass
class PageMetadata:
    """Candidate metadata read from the raw, unextracted page."""

    source_url: str
    title: str
    author: Optional[str] = None
    publish_date: Optional[str] = None
    description: Optional[str] = None
    site_name: Optional[str] = None


@dataclass
class ExtractedArticle:
    """Main-content region and the fields derived from it."""

    content_html: str
    title: Optional[str] = None
    byline: Optional[str] = None
    publish_time: Optional[str] = None
    excerpt: Optional[str] = None


@dataclass
class ArticleMetadata:
    """Final metadata record handed to the renderer.

    ``reading_time`` is derived from ``word_count`` on every access so the two
    can never disagree.
    """

    title: str
    original_url: str
    word_count: int = 0
    author: Optional[str] = None
    publish_date: Optional[str] = None
    description: Optional[str] = None
    site_name: Optional[str] = None
    words_per_minute: int = field(default=200, repr=False)

    @property
    def reading_time(self) -> int:
        return reading_time(self.word_count, self.words_per_minute)

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the record is valid."""
        errors: List[str] = []
        if not isinstance(self.title, str) or not self.title.strip():
            errors.append("Title is required and must be a non-empty string")
        if not is_valid_url(self.original_url):
            errors.append("Original URL must be a valid http(s) URL")
        if self.publish_date:
            try:
                dtparse.isoparse(self.publish_date)
            except (ValueError, OverflowError):
                errors.append("Publish date must be a valid date")
        if self.word_count < 0:
            errors.append("Word count must be a non-negative number")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "title": self.title,
                "author": self.author,
                "publishDate": self.publish_date,
                "description": self.description,
                "siteName": self.site_name,
                "originalUrl": self.original_url,
                "wordCount": self.word_count,
                "readingTime": self.reading_time,
            }
        )


@dataclass
class ArticleImage:
    """Image embedded in the article body."""

    src: str
    alt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    caption: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "src": self.src,
                "alt": self.alt,
                "width": self.width,
                "height": self.height,
                "caption": self.caption,
            }
        )


@dataclass
class ArticleLink:
    """Outbound link found in the article body."""

    href: str
    text: str = ""
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"href": self.href, "text": self.text, "title": self.title})


@dataclass
class ArticleContent:
    """The article record: the pipeline's only output."""

    metadata: ArticleMetadata
    content: str
    images: List[ArticleImage] = field(default_factory=list)
    links: List[ArticleLink] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "content": self.content,
            "images": [image.to_dict() for image in self.images],
            "links": [link.to_dict() for link in self.links],
        }


@dataclass
class Margins:
    top: float = 20
    right: float = 20
    bottom: float = 20
    left: float = 20


@dataclass
class PDFGenerationOptions:
    """Rendering options consumed by the downstream document renderer."""

    font_size: float = 12
    font_family: str = "Inter"
    line_height: float = 1.6
    margins: Margins = field(default_factory=Margins)
    include_source_url: bool = True
    include_author: bool = True
    watermark: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.margins, dict):
            self.margins = Margins(**self.margins)
        errors = self.validate()
        if errors:
            raise InvalidOptions(errors)

    def validate(self) -> List[str]:
        errors: List[str] = []
        if not 6 <= self.font_size <= 72:
            errors.append("Font size must be between 6 and 72 points")
        if not isinstance(self.font_family, str) or not self.font_family:
            errors.append("Font family must be a non-empty string")
        if not 1 <= self.line_height <= 3:
            errors.append("Line height must be between 1 and 3")
        for side in ("top", "right", "bottom", "left"):
            if getattr(self.margins, side) < 0:
                errors.append(f"{side.capitalize()} margin must be a non-negative number")
        return errors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PDFGenerationOptions":
        """Build options from the renderer's camelCase payload."""
        defaults = cls()
        margins = data.get("margins") or {}
        return cls(
            font_size=data.get("fontSize", defaults.font_size),
            font_family=data.get("fontFamily", defaults.font_family),
            line_height=data.get("lineHeight", defaults.line_height),
            margins=Margins(
                top=margins.get("top", defaults.margins.top),
                right=margins.get("right", defaults.margins.right),
                bottom=margins.get("bottom", defaults.margins.bottom),
                left=margins.get("left", defaults.margins.left),
            ),
            include_source_url=data.get("includeSourceUrl", defaults.include_source_url),
            include_author=data.get("includeAuthor", defaults.include_author),
            watermark=data.get("watermark"),
        )
