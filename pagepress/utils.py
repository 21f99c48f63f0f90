"""Utility helpers for text normalization and reading statistics."""

from __future__ import annotations

import math
import re

from bs4 import BeautifulSoup

WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    return WHITESPACE_PATTERN.sub(" ", value).strip()


def html_to_text(html: str) -> str:
    """Return the text content of an HTML fragment."""
    if not html:
        return ""
    return BeautifulSoup(html, "html.parser").get_text(" ")


def count_words(text: str) -> int:
    return len([word for word in WHITESPACE_PATTERN.split(text) if word])


def reading_time(word_count: int, words_per_minute: int = 200) -> int:
    """Minutes needed to read ``word_count`` words, rounded up."""
    if word_count <= 0:
        return 0
    return math.ceil(word_count / words_per_minute)
