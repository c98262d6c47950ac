"""Fur Affinity client – authenticated, paced HTML and image fetcher."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable
from urllib.parse import urljoin

import httpx

from .config import Session, SiteConfig
from .document import SoupDocument
from .errors import RetryExhausted, TransferIntegrityError
from .models import ListingType
from .retry import RetryPolicy

logger = logging.getLogger("fa_archiver.api")

GALLERY_LINKS = "#gallery-gallery figure b a"


def _length_matches(resp: httpx.Response) -> bool:
    declared = resp.headers.get("content-length")
    if declared is None:
        # Chunked transfer: nothing to compare against.
        logger.debug("No content-length for %s", resp.url)
        return True
    return declared.strip() == str(len(resp.content))


class FurAffinityAPI:
    """Thin wrapper around furaffinity.net pages with session cookies and pacing."""

    def __init__(
        self,
        session: Session,
        cfg: SiteConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self.cfg = cfg or SiteConfig()
        self.session = session
        self._sleep = sleep
        self._rng = rng or random.Random()
        self._client = httpx.Client(
            timeout=self.cfg.timeout,
            headers={"User-Agent": self.cfg.user_agent},
            follow_redirects=True,
            transport=transport,
            event_hooks={"request": [self._attach_session]},
        )
        self._integrity = RetryPolicy(
            max_attempts=self.cfg.max_attempts,
            retry_on=(httpx.RemoteProtocolError,),
            sleep=sleep,
        )

    def _attach_session(self, request: httpx.Request) -> None:
        # Every hop, redirects included: httpx strips Cookie when it follows one.
        request.headers["Cookie"] = self.session.cookie_header

    # ── pacing ───────────────────────────────────────────────────

    def _pace(self) -> None:
        self._sleep(self.cfg.request_delay + self._rng.random() * self.cfg.request_jitter)

    def request(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        """GET ``url`` with the session cookie, then pause before returning."""
        try:
            resp = self._client.get(url, headers=headers)
            resp.raise_for_status()
            return resp
        finally:
            self._pace()

    # ── fetchers ─────────────────────────────────────────────────

    def fetch_bytes(self, url: str) -> bytes:
        """Download binary content, retrying until it matches content-length."""
        try:
            resp = self._integrity.run(
                lambda: self.request(url, {"Accept-Encoding": "identity"}),
                _length_matches,
                label=url,
            )
        except RetryExhausted as exc:
            raise TransferIntegrityError(url, exc.attempts) from exc
        return resp.content

    def fetch_document(self, url: str) -> SoupDocument:
        resp = self.request(url)
        return SoupDocument(resp.text, str(resp.url))

    # ── public API ───────────────────────────────────────────────

    def is_modern_theme(self) -> bool:
        """Check that the account renders pages with the modern theme."""
        doc = self.fetch_document(self.cfg.base_url + "/")
        bodies = doc.select_all("body")
        if not bodies:
            logger.warning("Landing page has no <body>")
            return False
        marker = doc.attribute_of(bodies[0], "data-static-path")
        logger.debug("Theme marker: %r", marker)
        return marker == self.cfg.theme_marker

    def listing_url(self, username: str, listing: ListingType, page: int) -> str:
        return f"{self.cfg.base_url}/{listing.value}/{username}/{page}"

    def gallery_page(self, username: str, listing: ListingType, page: int) -> list[str]:
        """Submission URLs on one listing page, in page order. Empty means done."""
        doc = self.fetch_document(self.listing_url(username, listing, page))
        urls = []
        for anchor in doc.select_all(GALLERY_LINKS):
            href = doc.attribute_of(anchor, "href")
            if href:
                urls.append(urljoin(self.cfg.base_url, href))
        return urls

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> FurAffinityAPI:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
