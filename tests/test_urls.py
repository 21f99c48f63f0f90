# tests/test_urls.py
"""
Tests for URL validation (``normalize_url``) and reference resolution
(``absolutize``).
"""

import pytest

from pagepress.errors import InvalidURL
from pagepress.urls import absolutize, get_domain, is_valid_url, normalize_url


# ----------------------------------------------------------------------
# normalize_url
# ----------------------------------------------------------------------
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://example.com/a/b?x=1", "https://example.com/a/b?x=1"),
        ("  http://Example.COM  ", "http://example.com/"),
        ("HTTPS://news.example.org/story#top", "https://news.example.org/story#top"),
        ("http://user@Host.example:8080/p", "http://user@host.example:8080/p"),
    ],
)
def test_normalize_accepts_http_and_https(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "example.com/path",
        "ftp://example.com/file",
        "javascript:alert(1)",
        "mailto:someone@example.com",
        "http://",
        "http://[broken",
        "https://example.com:notaport/",
    ],
)
def test_normalize_rejects_everything_else(raw):
    with pytest.raises(InvalidURL) as exc_info:
        normalize_url(raw)
    assert exc_info.value.stage == "url"


def test_invalid_url_is_also_a_value_error():
    with pytest.raises(ValueError):
        normalize_url("gopher://old.example")


def test_is_valid_url_and_get_domain():
    assert is_valid_url("https://site.com/x")
    assert not is_valid_url("file:///etc/passwd")
    assert get_domain("https://sub.site.com/x") == "sub.site.com"
    assert get_domain("not a url") == ""


# ----------------------------------------------------------------------
# absolutize
# ----------------------------------------------------------------------
def test_root_relative_uses_origin():
    assert absolutize("/img/a.png", "https://site.com/articles/x") == "https://site.com/img/a.png"


def test_protocol_relative_uses_current_scheme():
    assert absolutize("//cdn.example.com/b.jpg", "https://site.com/x") == "https://cdn.example.com/b.jpg"
    assert absolutize("//cdn.example.com/b.jpg", "http://site.com/x") == "http://cdn.example.com/b.jpg"


def test_plain_relative_resolves_against_origin():
    assert absolutize("img/c.png", "https://site.com/articles/x") == "https://site.com/img/c.png"


def test_absolute_reference_is_unchanged():
    assert absolutize("https://other.org/d.gif", "https://site.com/") == "https://other.org/d.gif"


def test_unparsable_reference_is_kept_as_is():
    assert absolutize("http://[bad", "https://site.com/") == "http://[bad"
