"""HTML document access used by the extractor."""

from __future__ import annotations

from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag


class Document(Protocol):
    """The few queries the extractor needs from a parsed page."""

    url: str

    def select_all(self, selector: str) -> list[Any]: ...

    def text_of(self, element: Any) -> str: ...

    def attribute_of(self, element: Any, name: str) -> str | None: ...

    def html_of(self, element: Any) -> str: ...


class SoupDocument:
    """Document backed by BeautifulSoup and its CSS selector support."""

    def __init__(self, markup: str, url: str = "") -> None:
        self.url = url
        self._soup = BeautifulSoup(markup, "html.parser")

    def select_all(self, selector: str) -> list[Tag]:
        return self._soup.select(selector)

    def text_of(self, element: Tag) -> str:
        return element.get_text()

    def attribute_of(self, element: Tag, name: str) -> str | None:
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def html_of(self, element: Tag) -> str:
        return element.decode_contents()
