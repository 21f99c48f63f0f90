"""Turn public web pages into portable article records."""

from .config import ExtractionConfig, FetchConfig, PipelineConfig
from .content import ContentBoundaryExtractor, ReadabilityContentExtractor
from .errors import (
    ConnectionRefused,
    DNSFailure,
    ExtractionError,
    ExtractionFailed,
    FetchError,
    FetchTimeout,
    HTTPStatus,
    InsufficientContent,
    InvalidOptions,
    InvalidURL,
    Timeout,
)
from .models import (
    ArticleContent,
    ArticleImage,
    ArticleLink,
    ArticleMetadata,
    PDFGenerationOptions,
)
from .pipeline import extract, fetch_and_extract
from .sanitizer import sanitize_html
from .urls import normalize_url

__all__ = [
    "ArticleContent",
    "ArticleImage",
    "ArticleLink",
    "ArticleMetadata",
    "ConnectionRefused",
    "ContentBoundaryExtractor",
    "DNSFailure",
    "ExtractionConfig",
    "ExtractionError",
    "ExtractionFailed",
    "FetchConfig",
    "FetchError",
    "FetchTimeout",
    "HTTPStatus",
    "InsufficientContent",
    "InvalidOptions",
    "InvalidURL",
    "PDFGenerationOptions",
    "PipelineConfig",
    "ReadabilityContentExtractor",
    "Timeout",
    "extract",
    "fetch_and_extract",
    "normalize_url",
    "sanitize_html",
]
