"""Value types shared across the archiver."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class ListingType(str, enum.Enum):
    GALLERY = "gallery"
    SCRAPS = "scraps"


@dataclass(frozen=True)
class Submission:
    """Everything needed to write one submission to disk.

    ``folder`` and ``path`` are relative to the output directory.
    """
    title: str
    image_url: str
    folder: Path
    path: Path
    description: str

    @property
    def description_path(self) -> Path:
        return self.path.with_name(self.path.name + ".txt")
