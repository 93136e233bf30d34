from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .posts import Post


@dataclass(frozen=True)
class Page:
    number: int
    posts: tuple[Post, ...]
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def page_count(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(posts: Sequence[Post], page_size: int) -> list[Page]:
    """Split posts into pages of ``page_size``; there is always at least one page."""
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    total_pages = page_count(len(posts), page_size)
    pages = []
    for number in range(1, total_pages + 1):
        start = (number - 1) * page_size
        pages.append(Page(number=number, posts=tuple(posts[start : start + page_size]), total_pages=total_pages))
    return pages
