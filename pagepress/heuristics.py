"""Metadata heuristics evaluated as ordered fallback chains over a page."""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence, Union

from bs4 import BeautifulSoup
from bs4.element import Tag
from dateutil import parser as dtparse
from dateutil import tz

from .models import PageMetadata
from .urls import get_domain
from .utils import collapse_whitespace

logger = logging.getLogger("pagepress")

DEFAULT_TITLE = "Untitled"


class QueryableDocument:
    """Read-only query surface over a parsed page.

    Meta tags are indexed once by lowercased ``name`` and ``property``; the
    first tag seen for a key wins.
    """

    def __init__(self, source: Union[str, BeautifulSoup]) -> None:
        if isinstance(source, BeautifulSoup):
            self.soup = source
        else:
            self.soup = BeautifulSoup(source or "", "html.parser")
        self._meta: Dict[str, str] = {}
        for tag in self.soup.find_all("meta"):
            content = tag.get("content")
            if content is None:
                continue
            for attr in ("name", "property"):
                key = tag.get(attr)
                if key:
                    self._meta.setdefault(key.strip().lower(), content)

    def meta(self, key: str) -> Optional[str]:
        return self._meta.get(key.lower())

    def title(self) -> Optional[str]:
        if self.soup.title and self.soup.title.string:
            return self.soup.title.string
        return None

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def text(self, selector: str) -> Optional[str]:
        element = self.select_one(selector)
        if element is None:
            return None
        return element.get_text(" ")


@dataclass(frozen=True)
class Rule:
    """One step of a fallback chain: where to look and how to read it."""

    source: str
    read: Callable[[QueryableDocument], Optional[str]]


def meta_rule(key: str) -> Rule:
    return Rule(f"meta[{key}]", lambda doc: doc.meta(key))


def text_rule(selector: str) -> Rule:
    return Rule(selector, lambda doc: doc.text(selector))


def document_title_rule() -> Rule:
    return Rule("title", lambda doc: doc.title())


def date_rule(selector: str) -> Rule:
    """Read ``content``, then ``datetime``, then text of the first match."""

    def read(doc: QueryableDocument) -> Optional[str]:
        element = doc.select_one(selector)
        if element is None:
            return None
        return element.get("content") or element.get("datetime") or element.get_text(" ")

    return Rule(selector, read)


TITLE_RULES = (
    meta_rule("title"),
    meta_rule("og:title"),
    document_title_rule(),
    text_rule("h1"),
    text_rule('[data-testid="headline"]'),
)

AUTHOR_RULES = (
    meta_rule("author"),
    meta_rule("article:author"),
    meta_rule("og:article:author"),
    text_rule('[rel="author"]'),
    text_rule(".author"),
    text_rule(".byline"),
    text_rule(".post-author"),
)

PUBLISH_DATE_RULES = (
    date_rule('meta[property="article:published_time"]'),
    date_rule('meta[property="article:published"]'),
    date_rule('meta[name="date"]'),
    date_rule('meta[name="publication_date"]'),
    date_rule('meta[name="DC.date"]'),
    date_rule("time[datetime]"),
    date_rule(".publish-date"),
    date_rule(".date"),
    date_rule(".post-date"),
    date_rule(".entry-date"),
    date_rule("time"),
)

DESCRIPTION_RULES = (
    meta_rule("description"),
    meta_rule("og:description"),
)

SITE_NAME_RULES = (
    meta_rule("site_name"),
    meta_rule("og:site_name"),
)


def normalize_date(value: Optional[str]) -> Optional[str]:
    """Parse a date string and return it as UTC ISO-8601, or ``None``.

    Naive values are taken to be UTC.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = dtparse.parse(value.strip())
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return (
        parsed.astimezone(dt.timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def strip_title_suffix(title: str, site_names: Iterable[Optional[str]]) -> str:
    """Remove a trailing `` - Site`` or `` | Site`` from ``title``."""
    names = [re.escape(name.strip()) for name in site_names if name and name.strip()]
    if not names:
        return title
    pattern = re.compile(r"\s+[-|]\s+(?:%s)\s*$" % "|".join(names), re.IGNORECASE)
    stripped = pattern.sub("", title, count=1).strip()
    return stripped or title


def first_match(
    rules: Sequence[Rule],
    document: QueryableDocument,
    accept: Callable[[str], Optional[str]] = collapse_whitespace,
) -> Optional[str]:
    """Evaluate ``rules`` in order and return the first accepted value.

    ``accept`` turns a raw candidate into the final value or ``None`` to move
    on to the next rule.
    """
    for rule in rules:
        try:
            raw = rule.read(document)
        except Exception as exc:  # noqa: BLE001 - a broken rule must not abort the chain
            logger.debug("Metadata rule %s failed: %s", rule.source, exc)
            continue
        if not raw:
            continue
        value = accept(raw)
        if value:
            logger.debug("Metadata rule %s matched", rule.source)
            return value
    return None


class MetadataHeuristics:
    """Extract candidate metadata from a page using ordered fallback chains."""

    def __init__(
        self,
        title_rules: Sequence[Rule] = TITLE_RULES,
        author_rules: Sequence[Rule] = AUTHOR_RULES,
        publish_date_rules: Sequence[Rule] = PUBLISH_DATE_RULES,
        description_rules: Sequence[Rule] = DESCRIPTION_RULES,
        site_name_rules: Sequence[Rule] = SITE_NAME_RULES,
    ) -> None:
        self.title_rules = title_rules
        self.author_rules = author_rules
        self.publish_date_rules = publish_date_rules
        self.description_rules = description_rules
        self.site_name_rules = site_name_rules

    def extract(
        self, document: Union[QueryableDocument, str, BeautifulSoup], url: str
    ) -> PageMetadata:
        if not isinstance(document, QueryableDocument):
            document = QueryableDocument(document)
        hostname = get_domain(url)

        site_name = first_match(self.site_name_rules, document) or hostname or None
        title = first_match(self.title_rules, document) or DEFAULT_TITLE
        title = strip_title_suffix(title, (site_name, hostname))

        return PageMetadata(
            source_url=url,
            title=title,
            author=first_match(self.author_rules, document),
            publish_date=first_match(
                self.publish_date_rules, document, accept=normalize_date
            ),
            description=first_match(self.description_rules, document),
            site_name=site_name,
        )
