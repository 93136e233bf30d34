from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

import markdown

from .highlight import HighlightConfig, HighlightExtension

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


class MarkdownRenderer:
    """Markdown to HTML conversion with fenced code highlighting.

    A fresh ``markdown.Markdown`` instance is built per call, so renderers
    with different highlight settings never share state.
    """

    def __init__(self, highlight: HighlightConfig | None = None) -> None:
        self.highlight = highlight or HighlightConfig()

    def convert(self, text: str) -> str:
        md = markdown.Markdown(
            extensions=[HighlightExtension(self.highlight), "tables", "sane_lists"],
        )
        return md.convert(text)


def render_template(template: str, **context: str) -> str:
    """Fill ``{{key}}`` placeholders in one pass; inserted values are never rescanned."""

    def repl(match: re.Match) -> str:
        return context.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(repl, template)


class TemplateRenderer:
    def __init__(self, templates_dir: Path) -> None:
        self.templates_dir = Path(templates_dir)
        self._cache: dict[str, str] = {}

    def read(self, name: str) -> str:
        if name not in self._cache:
            self._cache[name] = read_template(self.templates_dir / f"{name}.html")
        return self._cache[name]

    def render(self, name: str, **context: str) -> str:
        return render_template(self.read(name), **context)


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_styles(styles_dir: Path, dest_dir: Path) -> int:
    if not styles_dir.is_dir():
        logger.info("No styles directory found at %s; skipping.", styles_dir)
        return 0
    dest_dir.mkdir(parents=True, exist_ok=True)
    copied = 0
    for item in sorted(styles_dir.iterdir()):
        if item.is_file() and item.name.endswith(".css"):
            shutil.copy2(item, dest_dir / item.name)
            copied += 1
    logger.info("Copied %d CSS files.", copied)
    return copied
