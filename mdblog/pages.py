from __future__ import annotations

import html
import logging
import re
from urllib.parse import quote
from pathlib import Path
from typing import Sequence

from .pagination import Page
from .posts import Post
from .render import TemplateRenderer, write_text

logger = logging.getLogger(__name__)

META_KEY_RE = re.compile(r"\W+")


def page_path(number: int) -> str:
    if number == 1:
        return "index.html"
    return f"page/{number}.html"


def page_root(number: int) -> str:
    return "." if number == 1 else ".."


def post_href(slug: str, base: str = ".") -> str:
    return html.escape(f"{base}/{quote(slug)}.html")


def meta_context(meta: dict[str, str]) -> dict[str, str]:
    """Expose front matter to templates as escaped ``{{meta_<key>}}`` values."""
    context = {}
    for key, value in meta.items():
        name = META_KEY_RE.sub("_", key).strip("_").lower()
        if name:
            context[f"meta_{name}"] = html.escape(value)
    return context


def build_pagination(page: Page) -> str:
    if page.total_pages <= 1:
        return ""
    root = page_root(page.number)
    items = []
    if page.has_prev:
        items.append(f'<a class="page-link" href="{root}/{page_path(page.number - 1)}">Previous</a>')
    else:
        items.append('<span class="page-link is-disabled">Previous</span>')
    numbers = []
    for num in range(1, page.total_pages + 1):
        if num == page.number:
            numbers.append(f'<span class="page-number is-active">{num}</span>')
        else:
            numbers.append(f'<a class="page-number" href="{root}/{page_path(num)}">{num}</a>')
    items.append(f'<div class="page-numbers">{"".join(numbers)}</div>')
    if page.has_next:
        items.append(f'<a class="page-link" href="{root}/{page_path(page.number + 1)}">Next</a>')
    else:
        items.append('<span class="page-link is-disabled">Next</span>')
    return f'<nav class="pagination">{"".join(items)}</nav>'


def build_post_cards(posts: Sequence[Post], root: str) -> str:
    if not posts:
        return '<p class="post-empty">No posts yet.</p>'
    cards = []
    for post in posts:
        url = post_href(post.slug, f"{root}/posts")
        cards.append(
            '<article class="post-card">'
            f'<div class="post-meta"><span class="post-date">{html.escape(post.date_display)}</span></div>'
            f'<h2 class="post-title"><a href="{url}">{html.escape(post.title)}</a></h2>'
            f'<p class="post-summary">{html.escape(post.summary)}</p>'
            f'<a class="post-more" href="{url}">Read more</a>'
            "</article>"
        )
    return "\n".join(cards)


def build_post_nav(post: Post, by_slug: dict[str, Post]) -> str:
    """Links to the older (prev) and newer (next) posts, looked up by slug."""
    links = []
    older = by_slug.get(post.prev) if post.prev else None
    newer = by_slug.get(post.next) if post.next else None
    if older is not None:
        links.append(
            f'<a class="post-nav-prev" href="{post_href(older.slug)}">&larr; {html.escape(older.title)}</a>'
        )
    if newer is not None:
        links.append(
            f'<a class="post-nav-next" href="{post_href(newer.slug)}">{html.escape(newer.title)} &rarr;</a>'
        )
    if not links:
        return ""
    return f'<nav class="post-nav">{"".join(links)}</nav>'


def build_posts(renderer: TemplateRenderer, output_dir: Path, posts: Sequence[Post], site_name: str) -> int:
    by_slug = {post.slug: post for post in posts}
    for post in posts:
        updated_html = (
            f'<span class="post-updated">Updated {html.escape(post.updated_display)}</span>'
            if post.updated_display
            else ""
        )
        html_doc = renderer.render(
            "post",
            **meta_context(post.meta),
            title=html.escape(post.title),
            page_title=html.escape(f"{post.title} | {site_name}"),
            site_name=html.escape(site_name),
            root="..",
            date=html.escape(post.date_display),
            updated=updated_html,
            content=post.content,
            post_nav=build_post_nav(post, by_slug),
        )
        write_text(output_dir / "posts" / f"{post.slug}.html", html_doc)
    logger.info("Generated %d post pages.", len(posts))
    return len(posts)


def build_index(renderer: TemplateRenderer, output_dir: Path, pages: Sequence[Page], site_name: str) -> int:
    for page in pages:
        root = page_root(page.number)
        page_title = site_name if page.number == 1 else f"{site_name} | Page {page.number}"
        html_doc = renderer.render(
            "index",
            title=html.escape(site_name),
            page_title=html.escape(page_title),
            site_name=html.escape(site_name),
            root=root,
            current_page=str(page.number),
            total_pages=str(page.total_pages),
            posts=build_post_cards(page.posts, root),
            pagination=build_pagination(page),
        )
        write_text(output_dir / page_path(page.number), html_doc)
    logger.info("Generated %d index pages.", len(pages))
    return len(pages)
