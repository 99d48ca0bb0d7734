"""
Crawler mention matcher
Finds `Crawler #4,122. “Carl.”` style references in lines of book text.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from dccseeder.crawlers import Crawler

logger = logging.getLogger("dccseeder.matcher")

# Only typographic quotes (U+201C / U+201D) and ASCII names are recognised
CRAWLER_REGEX = re.compile(r'crawler\s+#?([0-9,]+)\.?\s+“([\w\s]+)\.?”', flags=re.IGNORECASE | re.ASCII)


def match_line(line: str) -> Optional[Tuple[str, str]]:
    """Return (raw_id, name) for the first mention in line, or None."""
    match = CRAWLER_REGEX.search(line)
    if match is None:
        return None

    if match.lastindex is None or match.lastindex < 2:
        logger.debug("Invalid crawler format in line: %s", line)
        return None

    return match.group(1).strip(), match.group(2).strip()


def extract_crawlers(lines: Iterable[str]) -> List[Crawler]:
    """Extract at most one crawler per line, in line order."""
    found: List[Crawler] = []
    for line in lines:
        pair = match_line(line)
        if pair is None:
            continue

        raw_id, name = pair
        logger.debug("Found crawler reference: %s", line)
        logger.debug("Crawler ID: %s, Name: %s", raw_id, name)
        found.append(Crawler(raw_id, name))

    return found
