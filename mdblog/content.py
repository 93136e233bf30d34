from __future__ import annotations

import html
import re

FRONT_MATTER_MARKER = "---"
SUMMARY_LENGTH = 200
TAG_RE = re.compile(r"<[^>]+>")
SPACE_RE = re.compile(r"\s+")


def _is_marker(line: str) -> bool:
    return line.rstrip("\r\n") == FRONT_MATTER_MARKER


def parse_front_matter(text: str) -> tuple[dict[str, str], str]:
    """Split a leading ``---`` block of ``key: value`` lines from the body.

    Values are kept as strings. Without a complete block the text is returned
    untouched with empty metadata.
    """
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines(keepends=True)
    if not lines or not _is_marker(lines[0]):
        return {}, text

    end = None
    for i in range(1, len(lines)):
        if _is_marker(lines[i]):
            end = i
            break
    if end is None:
        return {}, text

    meta: dict[str, str] = {}
    for line in lines[1:end]:
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        meta[key.strip()] = value.strip()
    body = "".join(lines[end + 1 :])
    return meta, body


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def make_summary(meta: dict[str, str], html_content: str) -> str:
    summary = meta.get("summary") or meta.get("description")
    if summary:
        return summary
    text = SPACE_RE.sub(" ", html.unescape(strip_tags(html_content))).strip()
    return text[:SUMMARY_LENGTH] + ("..." if len(text) > SUMMARY_LENGTH else "")
