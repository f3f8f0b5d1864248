from __future__ import annotations

import re
from collections.abc import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


class ListingDocument:
    """A fetched listing page: parsed markup plus the URL it was served from."""

    def __init__(self, url: str, soup: BeautifulSoup) -> None:
        self.url = url
        self.soup = soup

    @classmethod
    def from_html(cls, url: str, html: str) -> ListingDocument:
        return cls(url=url, soup=BeautifulSoup(html, "html.parser"))

    def select(self, selector: str, node: Tag | None = None) -> list[Tag]:
        return self._root(node).select(selector)

    def select_one(self, selector: str, node: Tag | None = None) -> Tag | None:
        return self._root(node).select_one(selector)

    def text(self, node: Tag, selector: str, default: str = "") -> str:
        found = node.select_one(selector)
        if found is None:
            return default
        return found.get_text(" ", strip=True)

    def attr(self, node: Tag, name: str, default: str | None = None) -> str | None:
        value = node.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def strings(self, node: Tag | None = None) -> Iterator[str]:
        for text in self._root(node).stripped_strings:
            yield text

    def find_string(self, node: Tag, pattern: re.Pattern[str]) -> str | None:
        for text in self.strings(node):
            if pattern.search(text):
                return text
        return None

    def find_string_containing(self, node: Tag, needle: str) -> str | None:
        for text in self.strings(node):
            if needle in text:
                return text
        return None

    def resolve_url(self, relative: str) -> str:
        return urljoin(self.url, relative)

    def _root(self, node: Tag | None) -> Tag:
        return self.soup if node is None else node
