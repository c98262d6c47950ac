"""Core archiving logic – orchestrates listing → extractor → storage."""

from __future__ import annotations

import logging
from typing import Iterator

from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .api import FurAffinityAPI
from .config import THEME_HINT, ArchiverConfig
from .errors import ConfigurationError
from .extractor import SubmissionExtractor
from .models import ListingType
from .storage import DiskStorage

logger = logging.getLogger("fa_archiver.core")


class Archiver:
    """Walks a user's listings and saves every submission to disk.

    Everything runs sequentially: one request in flight, one submission
    written completely before the next starts. Errors are not caught here,
    so the first failure ends the run.
    """

    def __init__(
        self,
        cfg: ArchiverConfig,
        *,
        api: FurAffinityAPI | None = None,
        storage: DiskStorage | None = None,
    ) -> None:
        self.cfg = cfg
        self.api = api or FurAffinityAPI(cfg.session, cfg.site)
        self.storage = storage or DiskStorage(cfg.output_dir)
        self.extractor = SubmissionExtractor(cfg.username)
        # Stats
        self.stats = {"pages": 0, "submissions": 0, "bytes": 0}

    # ── preconditions ────────────────────────────────────────────

    def ensure_modern_theme(self) -> None:
        if not self.api.is_modern_theme():
            raise ConfigurationError(
                "Modern theme not detected. This tool requires the modern theme to function.",
                THEME_HINT,
            )

    # ── listing traversal ────────────────────────────────────────

    def iter_listing(self, listing: ListingType) -> Iterator[str]:
        """Yield submission URLs page by page until a page comes back empty.

        The next page is only requested once every URL of the current page
        has been consumed.
        """
        page = 1
        while True:
            urls = self.api.gallery_page(self.cfg.username, listing, page)
            if not urls:
                logger.debug("%s page %d is empty, stopping", listing.value, page)
                return
            self.stats["pages"] += 1
            logger.debug("%s page %d: %d submissions", listing.value, page, len(urls))
            yield from urls
            page += 1

    # ── single submission ────────────────────────────────────────

    def download_submission(self, url: str, listing: ListingType) -> None:
        """Save one submission: description file first, then the image."""
        doc = self.api.fetch_document(url)
        sub = self.extractor.extract(doc, listing)
        logger.info("Downloading %s %s %s", self.cfg.username, listing.value, sub.title)

        self.storage.ensure_folder(sub.folder)
        self.storage.write_text(sub.description_path, sub.description)
        data = self.api.fetch_bytes(sub.image_url)
        self.storage.write_bytes(sub.path, data)

        self.stats["submissions"] += 1
        self.stats["bytes"] += len(data)

    # ── whole listings ───────────────────────────────────────────

    def archive(self, listing: ListingType) -> int:
        """Download every submission of one listing. Returns the count."""
        count = 0
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TextColumn("{task.completed:.0f} saved"),
            TimeElapsedColumn(),
            disable=not self.cfg.progress,
        ) as progress:
            task = progress.add_task(f"{self.cfg.username} {listing.value}", total=None)
            for url in self.iter_listing(listing):
                self.download_submission(url, listing)
                count += 1
                progress.advance(task)

        logger.info("%s %s archive complete: %d submissions", self.cfg.username, listing.value, count)
        return count

    def archive_all(self) -> dict[str, int]:
        """Check the theme, then archive each configured listing in order."""
        self.ensure_modern_theme()
        results = {}
        for listing in self.cfg.listings:
            logger.info("Starting %s %s", self.cfg.username, listing.value)
            results[listing.value] = self.archive(listing)
        return results

    # ── lifecycle ────────────────────────────────────────────────

    def close(self) -> None:
        self.api.close()

    def __enter__(self) -> Archiver:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
