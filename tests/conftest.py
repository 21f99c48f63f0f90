# tests/conftest.py
"""
Shared HTML fixtures for the extraction tests.

The article page is long enough to clear the default 500-character
threshold and carries the usual boilerplate (navigation, ads, comments,
scripts) that must never reach the extracted content.
"""

import pytest

PARAGRAPHS = [
    (
        "The research vessel spent six weeks charting the trench, lowering cameras, "
        "sediment corers and baited traps to depths of more than eight thousand metres, "
        "where pressure, darkness and cold have shaped some of the strangest animals on Earth."
    ),
    (
        "Among the finds were translucent sea cucumbers, a previously unknown amphipod, "
        "and a snailfish filmed at a depth that, according to the expedition team, "
        "extends the known range of vertebrate life by several hundred metres."
    ),
    (
        "Scientists say the survey, funded by a coalition of universities, foundations "
        "and a national science agency, will help map how trenches store carbon, "
        "recycle nutrients and respond to warming surface waters over the coming decades."
    ),
    (
        "Samples collected on the voyage are now being analysed in laboratories in "
        "Europe, Asia and the Americas, with the first genetic results, species "
        "descriptions and sediment chemistry expected to be published early next year."
    ),
    (
        "The chief scientist said the trench remains, in her words, one of the least "
        "explored places on the planet, and that every dive revealed something new, "
        "surprising or simply beautiful, reminding the crew how little we really know."
    ),
]

ARTICLE_BODY = "\n".join(f"<p>{text}</p>" for text in PARAGRAPHS)


def build_page(body: str, head: str = "") -> str:
    return (
        "<!DOCTYPE html><html><head>"
        f"{head}"
        "</head><body>"
        f"{body}"
        "</body></html>"
    )


@pytest.fixture
def article_page() -> str:
    head = (
        "<title>Deep Sea Survey Finds New Species | Ocean Weekly</title>"
        '<meta property="og:site_name" content="Ocean Weekly">'
        '<meta name="description" content="A six-week expedition to the trench.">'
        '<meta name="author" content="Raw Author">'
        '<script>window.tracker = "x";</script>'
    )
    body = (
        '<nav class="site-nav"><a href="/">Home</a><a href="/world">World</a>'
        "<a href=\"/science\">Science navigation link text</a></nav>"
        '<div class="ad">Buy our sponsored product today</div>'
        "<article>"
        "<h1>Deep Sea Survey Finds New Species</h1>"
        f"{ARTICLE_BODY}"
        '<figure><img src="/img/snailfish.jpg" alt="Snailfish" width="640" height="480">'
        "<figcaption>A snailfish at 8,000 metres.</figcaption></figure>"
        '<p>Read the <a href="/reports/trench">full report</a>, see the '
        '<a href="#notes">notes</a> or <a href="mailto:desk@example.com">email us</a>.</p>'
        "</article>"
        '<section id="comments"><p>First comment that should never appear</p></section>'
        '<script>alert("boom")</script>'
    )
    return build_page(body, head)


@pytest.fixture
def short_page() -> str:
    text = "Too short to be an article. " * 3
    return build_page(f"<article><p>{text.strip()}</p></article>", "<title>Stub</title>")
