"""Disk storage layer – write submission images and descriptions."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("fa_archiver.storage")


class DiskStorage:
    """Write files below ``root``; paths passed in are relative to it."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def resolve(self, rel: Path) -> Path:
        return self.root / rel

    def ensure_folder(self, rel: Path) -> Path:
        path = self.resolve(rel)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_text(self, rel: Path, text: str) -> Path:
        path = self.resolve(rel)
        path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %s (%d chars)", path, len(text))
        return path

    def write_bytes(self, rel: Path, data: bytes) -> Path:
        path = self.resolve(rel)
        path.write_bytes(data)
        logger.debug("Wrote %s (%d bytes)", path, len(data))
        return path
