from __future__ import annotations

import dataclasses
import datetime as dt
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .content import make_summary, parse_front_matter
from .dates import DateResolver
from .render import MarkdownRenderer

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


@dataclass(frozen=True)
class Post:
    slug: str
    title: str
    date: Optional[dt.datetime]
    date_display: str
    content: str
    summary: str = ""
    updated_display: str = ""
    meta: dict[str, str] = field(default_factory=dict)
    # Slugs of the older/newer neighbours, filled in by sequence_posts.
    prev: Optional[str] = None
    next: Optional[str] = None


def list_post_files(docs_dir: Path) -> list[Path]:
    return sorted(
        (path for path in docs_dir.iterdir() if path.is_file() and path.name.endswith(MARKDOWN_SUFFIX)),
        key=lambda p: p.name,
    )


def load_post(md_file: Path, resolver: DateResolver, renderer: MarkdownRenderer) -> Post:
    raw_text = md_file.read_text(encoding="utf-8")
    mtime = dt.datetime.fromtimestamp(md_file.stat().st_mtime)
    meta, body = parse_front_matter(raw_text)
    date_dt, date_display = resolver.display(meta, mtime)
    slug = md_file.name[: -len(MARKDOWN_SUFFIX)]
    html_content = renderer.convert(body)
    return Post(
        slug=slug,
        title=meta.get("title") or slug,
        date=date_dt,
        date_display=date_display,
        content=html_content,
        summary=make_summary(meta, html_content),
        updated_display=resolver.display_updated(meta),
        meta=meta,
    )


def load_posts(docs_dir: Path, resolver: DateResolver, renderer: MarkdownRenderer) -> list[Post]:
    """Read every markdown file directly inside ``docs_dir`` into a Post.

    A missing directory is created and yields no posts. Read errors are not
    caught: a partial post set must not produce a site.
    """
    docs_dir = Path(docs_dir)
    if not docs_dir.exists():
        logger.info("No docs directory found. Creating empty one at %s", docs_dir)
        docs_dir.mkdir(parents=True, exist_ok=True)
        return []

    files = list_post_files(docs_dir)
    if not files:
        logger.info("No markdown files found in %s", docs_dir)
        return []

    posts = [load_post(md_file, resolver, renderer) for md_file in files]
    logger.debug("Loaded %d posts from %s", len(posts), docs_dir)
    return posts


def sequence_posts(posts: list[Post]) -> list[Post]:
    """Order posts newest first and link each one to its neighbours.

    Undated posts go last. Equal timestamps keep their input order.
    """
    dated = [post for post in posts if post.date is not None]
    undated = [post for post in posts if post.date is None]
    ordered = sorted(dated, key=lambda p: p.date, reverse=True) + undated

    linked = []
    for i, post in enumerate(ordered):
        linked.append(
            dataclasses.replace(
                post,
                next=ordered[i - 1].slug if i > 0 else None,
                prev=ordered[i + 1].slug if i + 1 < len(ordered) else None,
            )
        )
    return linked
