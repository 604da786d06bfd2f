#!/usr/bin/env python
"""CLI for story discovery."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from story_discovery.config import create_from_config, get_default_config_path, load_config
from story_discovery.data import NavigationType

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    filters: str = ""
    config: Path
    page: int = Field(default=1, ge=1)
    locale: str | None = None
    viewport_width: int | None = Field(default=None, gt=0)
    search: str | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> None:
    """Load one page of stories for the given filters.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    engine, run_logger = create_from_config(
        config,
        active_locale=args.locale,
        viewport_width=args.viewport_width,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    engine.on_page_load(args.filters, NavigationType.NAVIGATE)

    logger.info(f"Filters: {engine.session.query_string or '(none)'}")
    logger.info(f"Locale: {engine.active_locale}")

    result = await engine.load(engine.request(page=args.page, search_text=args.search))
    if result is None:
        return

    if result.error:
        logger.error(f"Could not load stories: {result.error}")

    logger.info(f"\nFound {len(result.stories)} stories:\n")
    for i, story in enumerate(result.stories, 1):
        logger.info(f"{i}. {story.title}")
        logger.info(f"   By: {', '.join(story.authors)}")
        if story.categories:
            logger.info(f"   Categories: {', '.join(c.title for c in story.categories)}")
        logger.info(f"   Location: {story.location}")
        if story.date:
            logger.info(f"   Published: {story.date}")
        languages = ", ".join(v.display_name for v in story.available_languages)
        logger.info(f"   Languages: {languages}")

    pagination = result.pagination
    logger.info("\n--- Pagination ---")
    logger.info(f"Page {pagination.current_page} of {pagination.total_pages}")
    logger.info(f"Items: {pagination.total_items} ({pagination.page_size} per page)")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Browse stories by facet.")
    parser.add_argument(
        "filters",
        nargs="?",
        default="",
        help='Filter query string, e.g. "types=climate&languages=hi,bn"',
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument("--page", "-p", type=int, default=1, help="Page number (default: 1)")
    parser.add_argument("--locale", "-l", default=None, help="Active locale (default: from config)")
    parser.add_argument(
        "--viewport-width",
        type=int,
        default=None,
        help="Viewport width in pixels; narrow viewports get smaller pages",
    )
    parser.add_argument("--search", "-s", default=None, help="Free-text search query")
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable intermediate discovery logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            filters=ns.filters,
            config=config_path,
            page=ns.page,
            locale=ns.locale,
            viewport_width=ns.viewport_width,
            search=ns.search,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
