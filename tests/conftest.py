import logging

import pytest
from ebooklib import epub

from dccseeder.config import CONFIG_ENV, ENV_PREFIX


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """No stray DCCSEEDER_* variables or .dccseeder.env from the developer's machine."""
    for name in ("OUTPUT", "DEBUG", "FORCE", "LOG_FILE"):
        monkeypatch.delenv(ENV_PREFIX + name, raising=False)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


def write_book(path, chapters, title="Dungeon Crawler Carl"):
    """Write a small EPUB; chapters is a list of lists of paragraph strings."""
    book = epub.EpubBook()
    book.set_identifier("dcc-test-" + path.stem)
    book.set_title(title)
    book.set_language("en")
    book.add_author("Matt Dinniman")

    items = []
    for i, paragraphs in enumerate(chapters, 1):
        chapter = epub.EpubHtml(title=f"Chapter {i}", file_name=f"chap_{i}.xhtml", lang="en")
        body = "".join(f"<p>{p}</p>" for p in paragraphs)
        chapter.content = f"<h1>Chapter {i}</h1>{body}".encode("utf-8")
        book.add_item(chapter)
        items.append(chapter)

    book.toc = tuple(items)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav"] + items
    epub.write_epub(str(path), book)
    return path


@pytest.fixture
def make_book(tmp_path):
    def _make(name, chapters, title="Dungeon Crawler Carl"):
        return write_book(tmp_path / name, chapters, title=title)
    return _make


@pytest.fixture(autouse=True)
def reset_dccseeder_logger():
    yield
    logger = logging.getLogger("dccseeder")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
