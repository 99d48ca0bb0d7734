#!/usr/bin/env python3
"""
dccseeder

Reads Dungeon Crawler Carl EPUBs and builds a CSV of all the known crawler
numbers, one `"id","name"` line per crawler, ordered by number.

Usage:
    dccseeder [--output crawlers.csv] [--force] [--debug] book1.epub book2.epub ...
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from dccseeder import __version__
from dccseeder.config import ConfigError, load_settings
from dccseeder.crawlers import InvalidCrawlerKey
from dccseeder.epub_reader import BookReadError
from dccseeder.seeder import gather_crawlers, render_csv

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"
logger = logging.getLogger("dccseeder")


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Send dccseeder logs to stderr (stdout carries the CSV) and optionally a file."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dccseeder",
        description="Reads DCC epubs and builds a list of known crawler numbers",
    )
    parser.add_argument("books", nargs="+", metavar="epub-file", help="EPUB files to scan")
    parser.add_argument("-o", "--output", default=None,
                        help="Output file for results (default is stdout)")
    parser.add_argument("-d", "--debug", action="store_true", default=None, help="Enable debug mode")
    parser.add_argument("-f", "--force", action="store_true", default=None,
                        help="Force overwrite of duplicates")
    parser.add_argument("--config", default=None, help="dotenv-style config file")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def write_output(payload: bytes, output: Optional[str]) -> None:
    if output:
        with open(output, "wb") as fh:
            fh.write(payload)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            output=args.output,
            debug=args.debug,
            force=args.force,
            log_file=args.log_file,
            config_file=args.config,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        setup_logging(settings.debug, settings.log_file)
    except OSError as e:
        print(f"Error opening log file: {e}", file=sys.stderr)
        return 1

    if settings.config_file:
        logger.info("Using config file: %s", settings.config_file)
    if settings.debug:
        logger.info("Debug mode enabled.")
    if settings.output:
        logger.info('Writing to "%s"', settings.output)
    else:
        logger.info("No output flag set, printing to STDOUT.")

    try:
        crawlers, summary = gather_crawlers(args.books, force=settings.force)
    except BookReadError as e:
        logger.error("%s", e)
        return 1

    try:
        payload = render_csv(crawlers)
    except InvalidCrawlerKey as e:
        logger.error("Error sorting crawlers: %s", e)
        return 1

    try:
        write_output(payload, settings.output)
    except OSError as e:
        logger.error("Error writing output file: %s", e)
        return 1

    logger.info(
        "Cataloged %d crawlers (inserted=%d, duplicate=%d, skipped=%d, overwritten=%d)",
        len(crawlers), summary["inserted"], summary["duplicate"],
        summary["skipped"], summary["overwritten"],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
