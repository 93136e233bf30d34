from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import NamedTuple, Optional

from .config import ConfigError, SiteConfig, load_config
from .pages import build_index, build_posts
from .pagination import paginate
from .posts import load_posts, sequence_posts
from .render import MarkdownRenderer, TemplateRenderer, copy_styles, write_text
from .utils import clean_output_dir

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "mdblog"
TEMPLATE_NAMES = ("post", "index")


class BuildReport(NamedTuple):
    posts: int
    pages: int


def configure_logging(verbose: bool = False) -> None:
    root = logging.getLogger(PACKAGE_LOGGER)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)


def prepare_output(config: SiteConfig, project_root: Path) -> None:
    if config.clean:
        clean_output_dir(config.dist_dir, project_root)
    for sub in ("", "posts", "page", "assets/css"):
        (config.dist_dir / sub).mkdir(parents=True, exist_ok=True)


def build_site(config: SiteConfig, project_root: Optional[Path] = None) -> BuildReport:
    """Run one full build: load, sequence, paginate, emit.

    Templates and posts are read before the output directory is touched.
    Unreadable documents, missing templates and write failures propagate.
    """
    project_root = project_root or Path.cwd()
    logger.info("Building blog...")
    templates = TemplateRenderer(config.templates_dir)
    for name in TEMPLATE_NAMES:
        templates.read(name)
    highlight = config.highlight_config()
    posts = load_posts(config.docs_dir, config.date_resolver(), MarkdownRenderer(highlight))
    posts = sequence_posts(posts)
    pages = paginate(posts, config.page_size)

    prepare_output(config, project_root)
    css_dir = config.dist_dir / "assets" / "css"
    copy_styles(config.styles_dir, css_dir)
    write_text(css_dir / "highlight.css", highlight.stylesheet())

    build_posts(templates, config.dist_dir, posts, config.site_name)
    build_index(templates, config.dist_dir, pages, config.site_name)

    if not posts:
        logger.info("Build complete! (No posts yet)")
    else:
        logger.info("Build complete!")
    return BuildReport(posts=len(posts), pages=len(pages))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Static markdown blog generator.")
    parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    config_path = Path(args.config)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    start = time.perf_counter()
    try:
        build_site(config, project_root=config_path.resolve().parent)
    except (OSError, ValueError) as exc:
        logger.error("Build failed: %s", exc)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    logger.info("Build completed in %.2fs.", elapsed)
    logger.info("Site generated in: %s", config.dist_dir)
