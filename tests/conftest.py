"""Shared fixtures: a throwaway site layout with minimal templates."""

import datetime as dt

import pytest

from mdblog.config import SiteConfig
from mdblog.posts import Post

INDEX_TEMPLATE = (
    "<html><head><title>{{page_title}}</title></head>"
    '<body data-page="{{current_page}}/{{total_pages}}">{{posts}}{{pagination}}</body></html>'
)
POST_TEMPLATE = (
    "<html><head><title>{{page_title}}</title></head>"
    "<body><h1>{{title}}</h1><p class=\"date\">{{date}}</p>{{updated}}"
    "<div class=\"body\">{{content}}</div>{{post_nav}}</body></html>"
)


@pytest.fixture
def site_config(tmp_path):
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.html").write_text(INDEX_TEMPLATE, encoding="utf-8")
    (templates / "post.html").write_text(POST_TEMPLATE, encoding="utf-8")
    return SiteConfig(
        docs_dir=tmp_path / "docs",
        dist_dir=tmp_path / "dist",
        templates_dir=templates,
        styles_dir=tmp_path / "styles",
        site_name="Test Blog",
    )


def make_post(slug, date=None, title=None):
    return Post(
        slug=slug,
        title=title or slug,
        date=date,
        date_display="",
        content=f"<p>{slug}</p>",
    )


@pytest.fixture
def post_factory():
    return make_post


@pytest.fixture
def dated_posts():
    """Posts from property 3: 2023-01-01, 2024-06-01 and an undated one."""
    return [
        make_post("t1", dt.datetime(2023, 1, 1)),
        make_post("t2", dt.datetime(2024, 6, 1)),
        make_post("t3", None),
    ]
