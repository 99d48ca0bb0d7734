"""
Duplicate handling for crawler mentions.

Each extracted crawler is checked against the catalog exactly once:
  - unseen key                      -> INSERTED
  - same key, identical record      -> DUPLICATE (left alone)
  - same key, different id or name  -> OVERWRITTEN with force, else SKIPPED
"""

from __future__ import annotations

import logging

from dccseeder.crawlers import Crawler, Crawlers

logger = logging.getLogger("dccseeder.resolver")

INSERTED = "inserted"
DUPLICATE = "duplicate"
SKIPPED = "skipped"
OVERWRITTEN = "overwritten"

OUTCOMES = (INSERTED, DUPLICATE, SKIPPED, OVERWRITTEN)


def resolve(catalog: Crawlers, crawler: Crawler, force: bool = False) -> str:
    """Apply one crawler to the catalog and return what happened to it."""
    existing, found = catalog.lookup(crawler.key())

    if not found:
        catalog.add(crawler)
        return INSERTED

    if existing == crawler:
        logger.debug("Duplicate crawler mention found: %s, skipping", crawler)
        return DUPLICATE

    if not force:
        logger.warning("Duplicate crawler # found: %s will NOT overwrite \"%s\"", crawler, existing.name)
        logger.warning("Use --force if you wish to overwrite existing crawlers")
        return SKIPPED

    logger.warning("Duplicate crawler # found: %s force overwrites \"%s\"", crawler, existing.name)
    catalog.add(crawler)
    return OVERWRITTEN
