"""
Crawler catalog for dccseeder
Crawler records, id normalisation, numeric key ordering and CSV lines
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

# ParseInt-style: ASCII digits with an optional sign
INTEGER_KEY_REGEX = re.compile(r'^[+-]?[0-9]+$')


class InvalidCrawlerKey(ValueError):
    """Raised when catalog keys cannot be ordered numerically."""

    def __init__(self, keys: List[str]):
        self.keys = keys
        super().__init__(
            "cannot sort crawler ids numerically, invalid keys: "
            + ", ".join(repr(k) for k in keys)
        )


def normalize_id(raw_id: str) -> str:
    """Trim whitespace and drop grouping commas: ' 4,122 ' -> '4122'."""
    return raw_id.strip().replace(",", "")


@dataclass(frozen=True)
class Crawler:
    id: str
    name: str

    def key(self) -> str:
        return normalize_id(self.id)

    def __str__(self) -> str:
        return f'Crawler #{self.id} "{self.name}"'

    def csv_line(self) -> str:
        # Fields are wrapped verbatim, no escaping
        return f'"{self.id}","{self.name}"\n'

    def marshal_csv(self) -> bytes:
        return self.csv_line().encode("utf-8")


SEED_CRAWLER = Crawler(id="4,122", name="Carl")


class Crawlers:
    """
    Mapping of canonical key -> Crawler.

    A new catalog always starts with SEED_CRAWLER unless seed=False.
    """

    def __init__(self, seed: bool = True):
        self._items: Dict[str, Crawler] = {}
        if seed:
            self.add(SEED_CRAWLER)

    def add(self, crawler: Crawler) -> None:
        """Store crawler under its canonical key, replacing whatever was there."""
        self._items[crawler.key()] = crawler

    def lookup(self, key: str) -> Tuple[Optional[Crawler], bool]:
        crawler = self._items.get(key)
        return crawler, crawler is not None

    def get(self, key: str) -> Optional[Crawler]:
        return self._items.get(key)

    def sorted_keys(self) -> List[str]:
        """
        Return every key ordered by its integer value.

        All keys are parsed before ordering; if any is not a base-10 integer
        InvalidCrawlerKey is raised and nothing is returned.
        Keys with the same value ("012", "12") keep their insertion order.
        """
        parsed: List[Tuple[int, str]] = []
        invalid: List[str] = []
        for key in self._items:
            if INTEGER_KEY_REGEX.match(key):
                parsed.append((int(key), key))
            else:
                invalid.append(key)

        if invalid:
            raise InvalidCrawlerKey(sorted(invalid))

        parsed.sort(key=lambda pair: pair[0])
        return [key for _, key in parsed]

    def sorted_crawlers(self) -> List[Crawler]:
        return [self._items[k] for k in self.sorted_keys()]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)
