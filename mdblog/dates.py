from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

MODE_NUMERIC_CHINESE = "numeric-chinese"
MODE_VERBATIM_METADATA = "verbatim-metadata"
DATE_MODES = (MODE_NUMERIC_CHINESE, MODE_VERBATIM_METADATA)

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%Y年%m月%d日",
)


def parse_datetime(value: str) -> Optional[dt.datetime]:
    """Parse an ISO-like or common written date, or return None.

    Aware values are converted to naive local time so every timestamp in a
    build compares against every other.
    """
    value = value.strip()
    if not value:
        return None
    iso_value = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    parsed = None
    try:
        parsed = dt.datetime.fromisoformat(iso_value)
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                parsed = dt.datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_numeric_chinese(value: dt.datetime) -> str:
    return f"{value.year} 年 {value.month} 月 {value.day} 日"


class DateResolver:
    """Pick a post's canonical timestamp and render it for templates.

    ``fields`` lists metadata keys in precedence order; an empty tuple means
    only the filesystem timestamp is used. In ``verbatim-metadata`` mode a
    date taken from metadata is displayed exactly as written.
    """

    def __init__(
        self,
        mode: str = MODE_NUMERIC_CHINESE,
        fields: Iterable[str] = ("date",),
        updated_field: str = "updated",
    ) -> None:
        if mode not in DATE_MODES:
            raise ValueError(f"Unknown date mode: {mode!r} (expected one of {', '.join(DATE_MODES)})")
        self.mode = mode
        self.fields = tuple(fields)
        self.updated_field = updated_field

    def _from_meta(self, meta: dict[str, str]) -> tuple[Optional[dt.datetime], str]:
        for key in self.fields:
            raw = (meta.get(key) or "").strip()
            if not raw:
                continue
            parsed = parse_datetime(raw)
            if parsed is not None:
                return parsed, raw
            logger.debug("Ignoring unparseable %s value: %r", key, raw)
        return None, ""

    def resolve(self, meta: dict[str, str], fallback: Optional[dt.datetime]) -> Optional[dt.datetime]:
        parsed, _ = self._from_meta(meta)
        if parsed is not None:
            return parsed
        return fallback

    def display(self, meta: dict[str, str], fallback: Optional[dt.datetime]) -> tuple[Optional[dt.datetime], str]:
        """Return the canonical timestamp together with its display string."""
        parsed, raw = self._from_meta(meta)
        if parsed is not None:
            if self.mode == MODE_VERBATIM_METADATA:
                return parsed, raw
            return parsed, format_numeric_chinese(parsed)
        if fallback is None:
            return None, ""
        return fallback, format_numeric_chinese(fallback)

    def display_updated(self, meta: dict[str, str]) -> str:
        raw = (meta.get(self.updated_field) or "").strip()
        if not raw:
            return ""
        if self.mode == MODE_VERBATIM_METADATA:
            return raw
        parsed = parse_datetime(raw)
        if parsed is None:
            logger.debug("Ignoring unparseable %s value: %r", self.updated_field, raw)
            return ""
        return format_numeric_chinese(parsed)
