"""
EPUB Reading Module for dccseeder
Opens an EPUB and turns each spine document into lines of plain text
"""

from __future__ import annotations

import logging
import re
import warnings
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional

import ebooklib
from ebooklib import epub
from bs4 import BeautifulSoup, NavigableString, Tag, XMLParsedAsHTMLWarning
from bs4.element import PreformattedString

logger = logging.getLogger("dccseeder.epub")

warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=UserWarning, module="ebooklib")
warnings.filterwarnings("ignore", category=FutureWarning, module="ebooklib")

# Text runs inside a block element become one line each
BLOCK_TAGS = ['p', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'li', 'blockquote', 'div', 'td', 'pre', 'dt', 'dd']
SKIP_TAGS = {"script", "style", "head", "title"}


class Section(NamedTuple):
    href: str
    lines: List[str]


class BookReadError(Exception):
    """An EPUB (or one of its sections) could not be read."""

    def __init__(self, path: str, section: Optional[str], cause: BaseException):
        self.path = path
        self.section = section
        self.cause = cause
        where = f"{path} [{section}]" if section else str(path)
        super().__init__(f"Error reading {where}: {cause}")


def book_title(book, fallback: str = "Unknown Title") -> str:
    """Title from DC metadata."""
    try:
        title_meta = book.get_metadata('DC', 'title')
    except (KeyError, AttributeError):
        return fallback
    if title_meta and title_meta[0][0]:
        return title_meta[0][0]
    return fallback


def decode_content(raw: bytes) -> str:
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        return raw.decode('latin-1')


def _clean(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


def _is_block(tag: Tag) -> bool:
    return tag.name in BLOCK_TAGS or tag.find(BLOCK_TAGS) is not None


def _flush(run: List[str], in_block: bool, lines: List[str]) -> None:
    text = "".join(run)
    run.clear()
    # Loose text outside any block keeps the source line breaks
    parts = [text] if in_block else text.splitlines()
    for part in parts:
        txt = _clean(part)
        if txt:
            lines.append(txt)


def _walk(node: Tag, lines: List[str]) -> None:
    in_block = node.name in BLOCK_TAGS
    run: List[str] = []
    for child in node.children:
        if isinstance(child, Tag):
            if child.name in SKIP_TAGS:
                continue
            if _is_block(child):
                _flush(run, in_block, lines)
                _walk(child, lines)
            else:
                run.append(child.get_text())
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            run.append(str(child))
    _flush(run, in_block, lines)


def html_to_lines(html: str) -> List[str]:
    """
    Convert an XHTML document to text lines in document order.

    Text between nested blocks, e.g. `<div>intro<p>para</p>tail</div>`, yields
    its own lines ("intro", "para", "tail"). `<br>` counts as a space.
    """
    soup = BeautifulSoup(html, "lxml")
    for br in soup.find_all("br"):
        br.replace_with(" ")

    lines: List[str] = []
    _walk(soup.body if soup.body else soup, lines)
    return lines


def _spine_documents(book) -> List:
    items = []
    for entry in book.spine:
        idref = entry[0] if isinstance(entry, tuple) else entry
        if not isinstance(idref, str):
            idref = getattr(idref, "id", None)
        item = book.get_item_with_id(idref) if idref else None
        if item is not None and item.get_type() == ebooklib.ITEM_DOCUMENT:
            items.append(item)

    if not items:
        items = list(book.get_items_of_type(ebooklib.ITEM_DOCUMENT))
    return items


def open_book(path: str):
    try:
        return epub.read_epub(str(path))
    except Exception as exc:
        raise BookReadError(str(path), None, exc) from exc


def read_sections(path: str) -> Iterator[Section]:
    """Yield every spine document of the EPUB at path as a Section, in reading order."""
    book = open_book(path)
    logger.info("Reading %s", book_title(book, fallback=Path(path).name))

    for item in _spine_documents(book):
        href = item.get_name()
        try:
            lines = html_to_lines(decode_content(item.get_content()))
        except Exception as exc:
            raise BookReadError(str(path), href, exc) from exc

        logger.debug("Scanning section %s (%d lines)", href, len(lines))
        yield Section(href, lines)
