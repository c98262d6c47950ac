from __future__ import annotations

from typing import Callable, Iterator

import httpx
import pytest

from fa_archiver.api import FurAffinityAPI
from fa_archiver.config import ArchiverConfig, Session, SiteConfig


@pytest.fixture
def session() -> Session:
    return Session({"a": "aaa", "b": "bbb", "n": "nnn"})


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def make_api(session: Session, sleeps: list[float]) -> Iterator[Callable[..., FurAffinityAPI]]:
    """Build an API client whose HTTP goes to ``handler`` and whose pauses are recorded."""
    clients: list[FurAffinityAPI] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **site: object) -> FurAffinityAPI:
        api = FurAffinityAPI(
            session,
            SiteConfig(**site),  # type: ignore[arg-type]
            transport=httpx.MockTransport(handler),
            sleep=sleeps.append,
        )
        clients.append(api)
        return api

    yield factory
    for api in clients:
        api.close()


@pytest.fixture
def archiver_config(session: Session, tmp_path) -> ArchiverConfig:
    return ArchiverConfig(session=session, username="rokah", output_dir=tmp_path, progress=False)
