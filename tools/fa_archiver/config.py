"""Configuration and session settings for the archiver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import ConfigurationError
from .models import ListingType

logger = logging.getLogger("fa_archiver.config")

DEFAULT_USER = "rokah"
REQUIRED_COOKIES = ("a", "b", "n")
COOKIE_DOMAIN = ".furaffinity.net"
HTTPONLY_PREFIX = "#HttpOnly_"

COOKIE_HINT = (
    "Cookies saved from a logged in Fur Affinity session are required to fetch galleries.",
    "Use the cookies.txt extension to save them and place the file next to this tool:",
    "\thttps://addons.mozilla.org/en-US/firefox/addon/cookies-txt/",
)
THEME_HINT = (
    "Visit your account settings to set the theme to modern, then rerun:",
    "\thttps://www.furaffinity.net/controls/settings/",
)


@dataclass(frozen=True)
class SiteConfig:
    """Fur Affinity endpoints and politeness settings."""
    base_url: str = "https://www.furaffinity.net"
    theme_marker: str = "/themes/beta"
    request_delay: float = 0.25  # minimum pause after each request
    request_jitter: float = 1.0  # extra random pause, uniform in [0, jitter]
    max_attempts: int = 10
    timeout: float = 30.0
    user_agent: str = "fa-archiver/1.0"


@dataclass(frozen=True)
class Session:
    """Cookie values of a logged in browser session."""
    cookies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [name for name in REQUIRED_COOKIES if name not in self.cookies]
        if missing:
            raise ConfigurationError(
                f"Failed to read Fur Affinity credentials (missing cookies: {', '.join(missing)})",
                COOKIE_HINT,
            )
        object.__setattr__(self, "cookies", MappingProxyType(dict(self.cookies)))

    @property
    def cookie_header(self) -> str:
        return "; ".join(f"{key}={value}" for key, value in self.cookies.items())

    @classmethod
    def from_cookies_txt(cls, path: str | Path) -> Session:
        """Read a Netscape cookies.txt export, keeping Fur Affinity rows only."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Failed to read {path}: {exc.strerror}", COOKIE_HINT) from exc

        cookies: dict[str, str] = {}
        for row in text.splitlines():
            row = row.removeprefix(HTTPONLY_PREFIX)
            if not row.startswith(COOKIE_DOMAIN):
                continue
            fields = row.split()
            if len(fields) < 7:
                logger.debug("Skipping short cookie row: %r", row)
                continue
            cookies[fields[5]] = fields[6]
        logger.debug("Loaded %d cookies from %s", len(cookies), path)
        return cls(cookies)


@dataclass(frozen=True)
class ArchiverConfig:
    session: Session
    username: str = DEFAULT_USER
    output_dir: Path = Path(".")
    site: SiteConfig = field(default_factory=SiteConfig)
    listings: tuple[ListingType, ...] = (ListingType.GALLERY, ListingType.SCRAPS)
    progress: bool = True
