"""Unit tests for pages.py: navigation and card markup"""

import dataclasses

from mdblog.pages import (
    build_pagination,
    build_post_cards,
    build_post_nav,
    meta_context,
    page_path,
    post_href,
)
from mdblog.pagination import paginate


def test_page_path():
    """Page one is the index; later pages live under page/."""
    assert page_path(1) == "index.html"
    assert page_path(3) == "page/3.html"


def test_pagination_hidden_for_single_page():
    """A single page gets no navigation."""
    [page] = paginate([], 10)
    assert build_pagination(page) == ""


def test_pagination_links_are_relative_to_page(post_factory):
    """Links from page/2 point back up to the index and across to page/3."""
    pages = paginate([post_factory(f"p{i}") for i in range(3)], 1)
    nav = build_pagination(pages[1])
    assert 'href="../index.html">Previous' in nav
    assert 'href="../page/3.html">Next' in nav
    assert '<span class="page-number is-active">2</span>' in nav

    first_nav = build_pagination(pages[0])
    assert '<span class="page-link is-disabled">Previous</span>' in first_nav
    assert 'href="./page/2.html">Next' in first_nav


def test_post_cards_escape_and_link(post_factory):
    """Titles are escaped and linked to the post file."""
    cards = build_post_cards([post_factory("a-b", title="Fish & <Chips>")], ".")
    assert "Fish &amp; &lt;Chips&gt;" in cards
    assert 'href="./posts/a-b.html"' in cards


def test_post_cards_empty():
    """An empty page says so."""
    assert "No posts yet." in build_post_cards([], ".")


def test_post_nav_resolves_slugs(post_factory):
    """prev/next slugs are looked up to render neighbour titles."""
    older = post_factory("older", title="Older post")
    newer = post_factory("newer", title="Newer post")
    middle = post_factory("middle")
    middle = dataclasses.replace(middle, prev="older", next="newer")
    nav = build_post_nav(middle, {p.slug: p for p in (older, newer, middle)})
    assert 'href="./older.html">&larr; Older post' in nav
    assert 'href="./newer.html">Newer post &rarr;' in nav
    assert build_post_nav(older, {}) == ""


def test_post_href_quotes_and_escapes():
    """Slugs are percent-encoded and safe inside an attribute."""
    assert post_href("C# tips", "./posts") == "./posts/C%23%20tips.html"
    assert post_href('say "hi"') == "./say%20%22hi%22.html"
    assert post_href("你好") == "./%E4%BD%A0%E5%A5%BD.html"


def test_post_cards_and_nav_use_quoted_hrefs(post_factory):
    """Cards and neighbour links both link to the encoded file name."""
    post = post_factory("C# tips")
    cards = build_post_cards([post], ".")
    assert cards.count('href="./posts/C%23%20tips.html"') == 2
    linked = dataclasses.replace(post_factory("other"), prev="C# tips")
    nav = build_post_nav(linked, {"C# tips": post})
    assert 'href="./C%23%20tips.html"' in nav


def test_meta_context_escapes_and_normalizes_keys():
    """Front matter becomes escaped meta_<key> template values."""
    context = meta_context({"author": "Tom & Jerry", "Cover-Image": "a.png", "---": "x"})
    assert context == {"meta_author": "Tom &amp; Jerry", "meta_cover_image": "a.png"}
