import logging

from dccseeder.crawlers import Crawler, Crawlers
from dccseeder.resolver import DUPLICATE, INSERTED, OVERWRITTEN, SKIPPED, resolve


def test_first_sighting_is_inserted():
    crawlers = Crawlers()
    assert resolve(crawlers, Crawler("7", "Alice")) == INSERTED
    assert crawlers.get("7") == Crawler("7", "Alice")


def test_identical_mention_is_a_duplicate(caplog):
    caplog.set_level(logging.DEBUG, logger="dccseeder")
    crawlers = Crawlers()
    resolve(crawlers, Crawler("7", "Alice"))
    assert resolve(crawlers, Crawler("7", "Alice")) == DUPLICATE
    assert len(crawlers) == 2
    assert "Duplicate crawler mention found" in caplog.text


def test_conflict_without_force_keeps_original(caplog):
    crawlers = Crawlers()
    resolve(crawlers, Crawler("7", "Alice"))
    with caplog.at_level(logging.WARNING, logger="dccseeder"):
        assert resolve(crawlers, Crawler("7", "Bob")) == SKIPPED
    assert crawlers.get("7").name == "Alice"
    assert 'will NOT overwrite "Alice"' in caplog.text
    assert "--force" in caplog.text


def test_conflict_with_force_overwrites(caplog):
    crawlers = Crawlers()
    resolve(crawlers, Crawler("7", "Alice"))
    with caplog.at_level(logging.WARNING, logger="dccseeder"):
        assert resolve(crawlers, Crawler("7", "Bob"), force=True) == OVERWRITTEN
    assert crawlers.get("7").name == "Bob"
    assert 'force overwrites "Alice"' in caplog.text


def test_reformatted_id_counts_as_conflict():
    crawlers = Crawlers()
    assert resolve(crawlers, Crawler("4122", "Carl")) == SKIPPED
    assert crawlers.get("4122").id == "4,122"

    assert resolve(crawlers, Crawler("4122", "Carl"), force=True) == OVERWRITTEN
    assert crawlers.get("4122").id == "4122"
    assert len(crawlers) == 1


def test_seed_mention_is_a_duplicate():
    crawlers = Crawlers()
    assert resolve(crawlers, Crawler("4,122", "Carl")) == DUPLICATE
