from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Optional

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

FENCED_BLOCK_RE = re.compile(
    r"(?P<fence>^(?:~{3,}|`{3,}))[ ]*\{?[ ]*\.?(?P<lang>[\w#.+-]*)[^\n]*\n"
    r"(?P<code>.*?)(?<=\n)(?P=fence)[ ]*$",
    re.MULTILINE | re.DOTALL,
)


@dataclass(frozen=True)
class HighlightConfig:
    css_class: str = "codehilite"
    guess_lang: bool = True
    style: str = "default"
    line_numbers: bool = False

    def formatter(self) -> HtmlFormatter:
        return HtmlFormatter(cssclass=self.css_class, style=self.style, linenos=self.line_numbers)

    def stylesheet(self) -> str:
        return self.formatter().get_style_defs(f".{self.css_class}")


def plain_block(code: str, config: HighlightConfig) -> str:
    return f'<pre class="{config.css_class}"><code>{html.escape(code)}</code></pre>'


def highlight_code(code: str, lang: Optional[str], config: HighlightConfig) -> str:
    """Highlight one code block, falling back to detection and then plain text."""
    formatter = config.formatter()
    lexer = None
    if lang:
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            logger.debug("No lexer for language %r", lang)
    if lexer is not None:
        try:
            return highlight(code, lexer, formatter)
        except Exception as exc:
            logger.warning("Highlight error for %s block: %s", lang, exc)
    if config.guess_lang:
        try:
            return highlight(code, guess_lexer(code), formatter)
        except Exception as exc:
            logger.warning("Automatic highlight failed: %s", exc)
    return plain_block(code, config)


class HighlightBlockPreprocessor(Preprocessor):
    def __init__(self, md, config: HighlightConfig):
        super().__init__(md)
        self.config = config

    def run(self, lines):
        text = "\n".join(lines)
        while True:
            m = FENCED_BLOCK_RE.search(text)
            if not m:
                break
            code_html = highlight_code(m.group("code"), m.group("lang"), self.config)
            placeholder = self.md.htmlStash.store(code_html)
            text = f"{text[: m.start()]}\n{placeholder}\n{text[m.end() :]}"
        return text.split("\n")


class HighlightExtension(Extension):
    def __init__(self, config: HighlightConfig, **kwargs):
        super().__init__(**kwargs)
        self.highlight_config = config

    def extendMarkdown(self, md):
        md.registerExtension(self)
        md.preprocessors.register(
            HighlightBlockPreprocessor(md, self.highlight_config),
            "highlight_block",
            25,
        )
