# tests/test_resources.py
"""
Tests for ``ResourceResolver``: absolutization rules, filtering,
de-duplication, caps and image attribute handling.
"""

import pytest
from bs4 import BeautifulSoup

from pagepress.config import ExtractionConfig
from pagepress.resources import ResourceResolver, find_caption, parse_dimension

BASE = "https://site.com/articles/x"


def _resolve(html: str, **kwargs):
    return ResourceResolver().resolve(html, BASE, **kwargs)


# ----------------------------------------------------------------------
# Images
# ----------------------------------------------------------------------
def test_image_sources_are_absolutized_in_list_and_markup():
    resolved = _resolve(
        '<p><img src="/img/a.png" alt="A">'
        '<img src="//cdn.example.com/b.jpg">'
        '<img src="img/c.png">'
        '<img src="https://other.org/d.gif"></p>'
    )
    assert [img.src for img in resolved.images] == [
        "https://site.com/img/a.png",
        "https://cdn.example.com/b.jpg",
        "https://site.com/img/c.png",
        "https://other.org/d.gif",
    ]
    assert 'src="https://site.com/img/a.png"' in resolved.content_html
    assert resolved.images[0].alt == "A"
    assert resolved.images[1].alt is None


def test_images_without_src_and_duplicates_are_dropped():
    resolved = _resolve(
        '<img alt="no src"><img src="  "><img src="/a.png"><img src="https://site.com/a.png">'
        '<img src="data:image/png;base64,AAAA">'
    )
    assert [img.src for img in resolved.images] == ["https://site.com/a.png"]


def test_image_caps_keep_first_twenty_in_order():
    html = "".join(f'<img src="/img/{i}.png">' for i in range(30))
    resolved = _resolve(html)
    assert len(resolved.images) == 20
    assert resolved.images[0].src.endswith("/img/0.png")
    assert resolved.images[-1].src.endswith("/img/19.png")


def test_dimensions_are_parsed_and_looked_up_from_reference():
    reference = BeautifulSoup(
        '<img src="/img/b.png" width="800" height="600">', "html.parser"
    )
    resolved = _resolve(
        '<img src="/img/a.png" width="640px" height="0"><img src="/img/b.png">',
        reference=reference,
    )
    first, second = resolved.images
    assert (first.width, first.height) == (640, None)
    assert (second.width, second.height) == (800, 600)


@pytest.mark.parametrize(
    "value,expected",
    [("640", 640), ("640px", 640), (" 12 ", 12), ("0", None), ("auto", None), (None, None)],
)
def test_parse_dimension(value, expected):
    assert parse_dimension(value) == expected


def test_captions_from_title_figcaption_and_sibling():
    resolved = _resolve(
        '<img src="/t.png" title="Title caption">'
        '<figure><a href="/big"><img src="/f.png"></a><figcaption>Figure caption</figcaption></figure>'
        '<div><img src="/s.png"><span class="wp-caption-text">Sibling caption</span></div>'
        '<img src="/none.png">'
    )
    assert [img.caption for img in resolved.images] == [
        "Title caption",
        "Figure caption",
        "Sibling caption",
        None,
    ]


def test_find_caption_on_bare_image():
    img = BeautifulSoup('<img src="/x.png">', "html.parser").img
    assert find_caption(img) is None


# ----------------------------------------------------------------------
# Links
# ----------------------------------------------------------------------
def test_links_are_filtered_and_absolutized():
    resolved = _resolve(
        '<a href="/about" title="About us"> About  us </a>'
        '<a href="#top">Top</a>'
        '<a href="">Empty</a>'
        '<a href="JavaScript:void(0)">Script</a>'
        '<a href="mailto:desk@site.com">Mail</a>'
        '<a href="//cdn.site.com/file.pdf">PDF</a>'
        '<a href="next">Next</a>'
        '<a href="/about">Duplicate</a>'
        "<a>No href</a>"
    )
    assert [(link.href, link.text, link.title) for link in resolved.links] == [
        ("https://site.com/about", "About us", "About us"),
        ("https://cdn.site.com/file.pdf", "PDF", None),
        ("https://site.com/next", "Next", None),
    ]
    assert 'href="mailto:desk@site.com"' in resolved.content_html
    assert 'href="#top"' in resolved.content_html


def test_link_text_may_be_empty():
    resolved = _resolve('<a href="/icon"><img src="/i.png"></a>')
    assert resolved.links[0].text == ""


def test_link_caps_keep_first_fifty_in_order():
    html = "".join(f'<a href="/p/{i}">{i}</a>' for i in range(60))
    resolved = _resolve(html)
    assert len(resolved.links) == 50
    assert [link.text for link in resolved.links] == [str(i) for i in range(50)]


def test_caps_follow_configuration():
    resolver = ResourceResolver(ExtractionConfig(max_images=1, max_links=2))
    resolved = resolver.resolve(
        '<img src="/1.png"><img src="/2.png"><a href="/a">a</a><a href="/b">b</a><a href="/c">c</a>',
        BASE,
    )
    assert len(resolved.images) == 1
    assert [link.text for link in resolved.links] == ["a", "b"]


def test_unparsable_href_is_kept():
    resolved = _resolve('<a href="http://[broken">Broken</a>')
    assert resolved.links[0].href == "http://[broken"
