# tests/test_reconcile.py
"""
Tests for the fixed per-field precedence in ``reconcile``.
"""

import math

import pytest

from pagepress.config import ExtractionConfig
from pagepress.models import ExtractedArticle, PageMetadata
from pagepress.reconcile import reconcile

URL = "https://site.com/articles/x"


@pytest.fixture
def raw():
    return PageMetadata(
        source_url=URL,
        title="Raw Title",
        author="Raw Author",
        publish_date="2020-01-01T00:00:00.000Z",
        description="Raw description",
        site_name="Site",
    )


def test_raw_values_fill_empty_extracted_fields(raw):
    extracted = ExtractedArticle(content_html="<p>a b</p>", title="", byline="", excerpt="   ")
    meta = reconcile(raw, extracted, "<p>a b</p>", URL)
    assert meta.title == "Raw Title"
    assert meta.author == "Raw Author"
    assert meta.publish_date == "2020-01-01T00:00:00.000Z"
    assert meta.description == "Raw description"


def test_extracted_values_win_when_present(raw):
    extracted = ExtractedArticle(
        content_html="",
        title="Extracted Title: With Subtitle",
        byline="Extracted Author",
        publish_time="2021-06-01T09:00:00.000Z",
        excerpt="First paragraph.",
    )
    meta = reconcile(raw, extracted, "<p>x</p>", URL)
    assert meta.title == "Extracted Title: With Subtitle"
    assert meta.author == "Extracted Author"
    assert meta.publish_date == "2021-06-01T09:00:00.000Z"
    assert meta.description == "First paragraph."


def test_site_name_and_url_always_come_from_raw_and_entry(raw):
    extracted = ExtractedArticle(content_html="", title="T")
    meta = reconcile(raw, extracted, "", "https://site.com/entry")
    assert meta.site_name == "Site"
    assert meta.original_url == "https://site.com/entry"


def test_extracted_title_loses_site_suffix(raw):
    extracted = ExtractedArticle(content_html="", title="Tide Tables | Site")
    assert reconcile(raw, extracted, "", URL).title == "Tide Tables"


def test_extracted_title_loses_hostname_suffix(raw):
    extracted = ExtractedArticle(content_html="", title="Tide Tables - site.com")
    assert reconcile(raw, extracted, "", URL).title == "Tide Tables"


def test_title_never_empty():
    raw = PageMetadata(source_url=URL, title="")
    meta = reconcile(raw, ExtractedArticle(content_html=""), "", URL)
    assert meta.title == "Untitled"
    assert meta.author is None


@pytest.mark.parametrize("words", [0, 1, 199, 200, 201, 1000, 1234])
def test_word_count_and_reading_time_come_from_final_content(raw, words):
    content = "<p>" + " ".join(["word"] * words) + "</p>"
    extracted = ExtractedArticle(content_html="<p>ignored ignored ignored</p>")
    meta = reconcile(raw, extracted, content, URL)
    assert meta.word_count == words
    assert meta.reading_time == math.ceil(words / 200)


def test_words_per_minute_is_configurable(raw):
    content = "<p>" + " ".join(["w"] * 300) + "</p>"
    meta = reconcile(raw, ExtractedArticle(content_html=""), content, URL, ExtractionConfig(words_per_minute=100))
    assert meta.reading_time == 3
