"""Turn a submission page into a Submission record."""

from __future__ import annotations

import logging
import posixpath
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Sequence
from urllib.parse import urljoin, urlparse

import markdownify

from .document import Document
from .errors import MissingFieldError
from .models import ListingType, Submission

logger = logging.getLogger("fa_archiver.extractor")

# Field name → selector on the modern theme
SELECTORS: dict[str, str] = {
    "title": ".submission-title",
    "image": ".download a",
    "tags": ".submission-sidebar .tags",
    "folders": ".folder-list-container div",
    "posted": ".submission-id-sub-container .popup_date",
    "description": ".submission-description",
    "rating": ".submission-sidebar .rating .font-large",
    "info": ".info.text > div",
    "views": ".submission-sidebar .views .font-large",
    "favorites": ".submission-sidebar .favorites .font-large",
}
MAX_INFO_LINES = 4

# Formats seen in the popup_date title attribute
DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%b %d, %Y %I:%M %p",
    "%b %d, %Y %I:%M:%S %p",
    "%B %d, %Y %I:%M %p",
    "%b %dst, %Y %I:%M %p",
    "%b %dnd, %Y %I:%M %p",
    "%b %drd, %Y %I:%M %p",
    "%b %dth, %Y %I:%M %p",
)

_FIRST_WORD_END = re.compile(r"(\w)\b")
_WHITESPACE = re.compile(r"\s+")


def html_to_markdown(html: str) -> str:
    return markdownify.markdownify(html, heading_style="ATX").strip()


def _trim_lines(text: str) -> str:
    return "\n".join(line.strip() for line in text.splitlines() if line.strip())


def _label_info(text: str) -> str:
    """``Category Artwork`` → ``Category: Artwork``."""
    return _FIRST_WORD_END.sub(r"\1:", text, count=1)


def parse_posted(raw: str) -> datetime:
    value = raw.strip()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {raw!r}")


def image_basename(url: str) -> str:
    return posixpath.basename(urlparse(url).path)


def submission_folder(username: str, listing: ListingType, posted: datetime) -> Path:
    return Path(username, listing.value, f"{posted.year}", f"{posted.month:02d}")


def compose_description(
    *,
    title: str,
    posted: str,
    body: str,
    rating: str,
    info: Sequence[str],
    views: str,
    favorites: str,
    tags: Sequence[str] = (),
    folders: Sequence[str] = (),
) -> str:
    lines = [
        title,
        "Posted: " + posted,
        "",
        body,
        "",
        "Rating: " + rating,
        *info,
        "Views: " + views,
        "Favorites: " + favorites,
    ]
    if tags:
        lines += ["", "Tags: " + ", ".join(tags)]
    if folders:
        lines += ["", "Folders:", "\n".join(folders)]
    return "\n".join(lines)


class SubmissionExtractor:
    """Read a submission page with fixed modern-theme selectors."""

    def __init__(self, username: str, convert: Callable[[str], str] = html_to_markdown) -> None:
        self.username = username
        self.convert = convert

    def _first(self, doc: Document, field: str) -> Any:
        found = doc.select_all(SELECTORS[field])
        if not found:
            raise MissingFieldError(field, doc.url or None)
        return found[0]

    def _text(self, doc: Document, field: str) -> str:
        return _trim_lines(doc.text_of(self._first(doc, field)))

    def _attr(self, doc: Document, field: str, name: str) -> str:
        value = doc.attribute_of(self._first(doc, field), name)
        if not value:
            raise MissingFieldError(field, doc.url or None)
        return value

    def extract(self, doc: Document, listing: ListingType) -> Submission:
        title = self._text(doc, "title")

        href = self._attr(doc, "image", "href")
        image_url = urljoin("https:", href) if href.startswith("//") else urljoin(doc.url, href)

        tags = [doc.text_of(el).strip() for el in doc.select_all(SELECTORS["tags"])]
        folders = [
            _WHITESPACE.sub(" ", doc.text_of(el)).strip()
            for el in doc.select_all(SELECTORS["folders"])
        ]

        posted_raw = self._attr(doc, "posted", "title")
        try:
            posted = parse_posted(posted_raw)
        except ValueError as exc:
            raise MissingFieldError("posted", doc.url or None) from exc

        body = self.convert(doc.html_of(self._first(doc, "description")))
        info = [
            _label_info(doc.text_of(el))
            for el in doc.select_all(SELECTORS["info"])[:MAX_INFO_LINES]
        ]

        filename = image_basename(image_url)
        if not filename:
            raise MissingFieldError("image", doc.url or None)
        folder = submission_folder(self.username, listing, posted)
        description = compose_description(
            title=title,
            posted=posted_raw,
            body=body,
            rating=self._text(doc, "rating"),
            info=info,
            views=self._text(doc, "views"),
            favorites=self._text(doc, "favorites"),
            tags=[t for t in tags if t],
            folders=[f for f in folders if f],
        )
        logger.debug("Extracted %r posted %s from %s", title, posted_raw, doc.url)
        return Submission(
            title=title,
            image_url=image_url,
            folder=folder,
            path=folder / filename,
            description=description,
        )
