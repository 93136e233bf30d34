from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

if sys.version_info >= (3, 11):
    import tomllib as toml
else:
    import tomli as toml

from .dates import DATE_MODES, MODE_NUMERIC_CHINESE, DateResolver
from .highlight import HighlightConfig
from .utils import parse_bool, parse_int, parse_list

logger = logging.getLogger(__name__)

PATH_KEYS = ("docs_dir", "dist_dir", "templates_dir", "styles_dir")


class ConfigError(ValueError):
    pass


@dataclass
class SiteConfig:
    page_size: int = 10
    docs_dir: Path = Path("docs")
    dist_dir: Path = Path("dist")
    templates_dir: Path = Path("templates")
    styles_dir: Path = Path("styles")
    date_mode: str = MODE_NUMERIC_CHINESE
    date_fields: list[str] = field(default_factory=lambda: ["date"])
    clean: bool = True
    guess_lang: bool = True
    highlight_style: str = "default"
    site_name: str = "My Blog"

    def date_resolver(self) -> DateResolver:
        return DateResolver(mode=self.date_mode, fields=self.date_fields)

    def highlight_config(self) -> HighlightConfig:
        return HighlightConfig(guess_lang=self.guess_lang, style=self.highlight_style)


def read_config_data(path: Path) -> dict:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data


def build_config(data: dict, base_dir: Path) -> SiteConfig:
    defaults = SiteConfig()
    known = {f.name for f in fields(SiteConfig)}
    for key in sorted(set(data) - known):
        logger.warning("Ignoring unknown config key: %s", key)

    values: dict = {}
    for key in PATH_KEYS:
        path = Path(str(data.get(key, getattr(defaults, key))))
        values[key] = path if path.is_absolute() else base_dir / path

    values["page_size"] = parse_int(data.get("page_size"), defaults.page_size)
    if values["page_size"] < 1:
        raise ConfigError(f"page_size must be at least 1, got {values['page_size']}")

    date_mode = str(data.get("date_mode", defaults.date_mode)).strip()
    if date_mode not in DATE_MODES:
        raise ConfigError(f"date_mode must be one of {', '.join(DATE_MODES)}, got {date_mode!r}")
    values["date_mode"] = date_mode

    date_fields = data.get("date_fields", defaults.date_fields)
    if isinstance(date_fields, str):
        date_fields = parse_list(date_fields)
    if not isinstance(date_fields, (list, tuple)):
        raise ConfigError(f"date_fields must be a list of metadata keys, got {date_fields!r}")
    values["date_fields"] = [str(item).strip() for item in date_fields if str(item).strip()]

    values["clean"] = parse_bool(data["clean"]) if "clean" in data else defaults.clean
    values["guess_lang"] = parse_bool(data["guess_lang"]) if "guess_lang" in data else defaults.guess_lang
    highlight_style = str(data.get("highlight_style", defaults.highlight_style))
    try:
        get_style_by_name(highlight_style)
    except ClassNotFound as exc:
        raise ConfigError(f"Unknown highlight_style: {highlight_style!r}") from exc
    values["highlight_style"] = highlight_style
    values["site_name"] = str(data.get("site_name", defaults.site_name))
    return SiteConfig(**values)


def load_config(path: Path) -> SiteConfig:
    """Load site settings from a TOML, YAML or JSON file.

    A missing file yields the defaults, resolved against the file's directory.
    """
    path = Path(path)
    base_dir = path.resolve().parent
    if not path.exists():
        logger.debug("Config file %s not found; using defaults.", path)
        return build_config({}, base_dir)
    return build_config(read_config_data(path), base_dir)
