"""Command-line entry point for article extraction."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, List, Sequence

from .config import (
    DEFAULT_CHAR_THRESHOLD,
    DEFAULT_TIMEOUT,
    ExtractionConfig,
    FetchConfig,
    PipelineConfig,
)
from .errors import ExtractionError, FetchError
from .fetcher import PlaywrightFetcher
from .models import ArticleContent
from .pipeline import extract, fetch_and_extract

logger = logging.getLogger("pagepress.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("fetch", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--char-threshold",
        type=int,
        default=DEFAULT_CHAR_THRESHOLD,
        help="Minimum characters of main-content text required to accept a page",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON record to this file instead of STDOUT",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_fetch_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("urls", nargs="+", help="One or more URLs to extract")
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="End-to-end budget per URL in seconds",
    )
    parser.add_argument(
        "--navigation-timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=2.0,
        help="Seconds to wait after network idle before reading HTML",
    )
    _add_common_arguments(parser)


def _add_extract_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", type=Path, help="Saved HTML file to extract")
    parser.add_argument("--url", required=True, help="URL the HTML was fetched from")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Effective page URL after redirects (defaults to --url)",
    )
    _add_common_arguments(parser)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert web pages into structured article records (JSON).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch_parser = subparsers.add_parser(
        "fetch", help="Render pages with Playwright and extract articles"
    )
    _add_fetch_arguments(fetch_parser)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract an article from a saved HTML file"
    )
    _add_extract_arguments(extract_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _emit(articles: List[ArticleContent], output: Path | None) -> None:
    payload = [article.to_dict() for article in articles]
    text = json.dumps(payload[0] if len(payload) == 1 else payload, ensure_ascii=False, indent=2)
    if output is None:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
        return
    output.write_text(text + "\n", encoding="utf-8")
    logger.info("Saved article record to %s", output)


def _run_extract(args: argparse.Namespace) -> int:
    config = PipelineConfig(extraction=ExtractionConfig(char_threshold=args.char_threshold))
    try:
        html = args.path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.error("Could not read %s: %s", args.path, exc)
        return 1
    try:
        article = extract(html, args.url, base_url=args.base_url, config=config)
    except ExtractionError as exc:
        logger.error("%s", exc)
        return 1
    _emit([article], args.output)
    return 0


async def _fetch_all(urls: Sequence[str], config: PipelineConfig) -> List[ArticleContent]:
    articles: List[ArticleContent] = []
    async with PlaywrightFetcher(config.fetch) as fetcher:
        for url in urls:
            try:
                articles.append(await fetch_and_extract(url, fetcher, config=config))
            except FetchError as exc:
                logger.error("%s (%s)", exc.user_message, exc)
            except ExtractionError as exc:
                logger.error("%s", exc)
    return articles


def _run_fetch(args: argparse.Namespace) -> int:
    config = PipelineConfig(
        timeout=args.timeout,
        extraction=ExtractionConfig(char_threshold=args.char_threshold),
        fetch=FetchConfig(
            navigation_timeout=args.navigation_timeout,
            wait_after_load=args.wait,
        ),
    )
    overall_start = time.perf_counter()
    articles = asyncio.run(_fetch_all(args.urls, config))
    total_elapsed = time.perf_counter() - overall_start

    successes = len(articles)
    total_urls = len(args.urls)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        successes,
        total_urls,
        total_urls - successes,
    )
    if articles:
        _emit(articles, args.output)
    return 0 if successes == total_urls else 1


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if args.command == "extract":
        code = _run_extract(args)
    else:
        code = _run_fetch(args)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
