"""
Gather crawlers from a set of EPUBs and render them as CSV.

Books are scanned one after another, sections in spine order, lines in
document order. Every extracted crawler goes through resolve() against a
single catalog seeded with Carl.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from tqdm import tqdm

from dccseeder.crawlers import Crawlers
from dccseeder.epub_reader import Section, read_sections
from dccseeder.matcher import extract_crawlers
from dccseeder.resolver import OUTCOMES, resolve

logger = logging.getLogger("dccseeder.seeder")

SectionReader = Callable[[str], Iterable[Section]]


def gather_crawlers(
    paths: Sequence[str],
    force: bool = False,
    reader: SectionReader = read_sections,
) -> Tuple[Crawlers, Dict[str, int]]:
    """Scan every book and return the catalog plus per-outcome counts."""
    crawlers = Crawlers()
    summary: Dict[str, int] = {outcome: 0 for outcome in OUTCOMES}

    for path in tqdm(paths, desc="Scanning books", unit="book", disable=None):
        logger.debug("Reading EPUB file: %s", path)
        for section in reader(path):
            for crawler in extract_crawlers(section.lines):
                summary[resolve(crawlers, crawler, force=force)] += 1

    return crawlers, summary


def render_csv(crawlers: Crawlers) -> bytes:
    """
    Render the whole catalog, ordered by numeric id.

    Raises InvalidCrawlerKey before producing anything if a key is not numeric.
    """
    chunks: List[bytes] = []
    for crawler in crawlers.sorted_crawlers():
        logger.debug("Found crawler: ID=%s, Name=%s", crawler.id, crawler.name)
        chunks.append(crawler.marshal_csv())
    return b"".join(chunks)
