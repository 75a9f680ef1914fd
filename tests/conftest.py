"""Pytest configuration providing shared bulletin, clock and config fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterable, Sequence

import pytest

from wxproduct.config import ConfigLocator, ConfigRepository, GlobalConfig
from wxproduct.engine import BulletinParser, GarbageCollector, ProductStore

REFERENCE_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)

DEFAULT_BODY = (
    "ZONE FORECAST PRODUCT",
    "NATIONAL WEATHER SERVICE NEW YORK NY",
    "1000 AM EDT FRI MAR 15 2024   ",
    "",
    ".TODAY...SUNNY. HIGHS IN THE LOWER 50S.",
    "$$",
)


class FakeClock:
    """Mutable clock returning a fixed UTC instant."""

    def __init__(self, now: datetime = REFERENCE_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


def make_bulletin(
    product: str = "FPUS51",
    station: str = "KOKX",
    time_field: str = "150900",
    body: Sequence[str] = DEFAULT_BODY,
    preamble: Sequence[str] = ("001", "ZCZC OKXZFPOKX"),
    newline: str = "\n",
) -> str:
    lines = [*preamble, f"{product} {station} {time_field}", *body]
    return newline.join(lines) + newline


def expected_body(body: Sequence[str] = DEFAULT_BODY) -> str:
    return "".join(line.rstrip() + "\n" for line in body)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def bulletin() -> Callable[..., str]:
    return make_bulletin


@pytest.fixture
def body_of() -> Callable[..., str]:
    return expected_body


@pytest.fixture
def store() -> ProductStore:
    return ProductStore()


@pytest.fixture
def parser(store: ProductStore, clock: FakeClock) -> BulletinParser:
    return BulletinParser(store, collector=GarbageCollector(store, clock=clock))


@pytest.fixture
def write_bulletin(tmp_path: Path) -> Callable[..., Path]:
    def _writer(name: str, **kwargs) -> Path:
        path = tmp_path / name
        path.write_text(make_bulletin(**kwargs), encoding="latin-1")
        return path

    return _writer


@pytest.fixture
def sample_global_config(tmp_path: Path) -> GlobalConfig:
    return GlobalConfig(
        age_ceiling=0,
        fetch_timeout=5,
        fetch_retries=1,
        user_agent="wxproduct-tests",
        logs_dir=tmp_path / "logs",
    )


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterable[ConfigRepository]:
    monkeypatch.setenv("WXPRODUCT_HOME", str(tmp_path))
    locator = ConfigLocator(project_root=tmp_path)
    repository = ConfigRepository(locator)
    yield repository
