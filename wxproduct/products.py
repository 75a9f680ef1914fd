"""Weather product facade wiring store, parser, purge and fetcher together."""

from __future__ import annotations

from datetime import datetime
from threading import RLock
from typing import Iterable

import structlog

from .config import GlobalConfig
from .engine import (
    BulletinParser,
    GarbageCollector,
    HeaderRecognizer,
    ProductHeader,
    ProductStore,
    SourceFetcher,
)
from .engine.purge import Clock, utc_now
from .engine.timeutil import age_hours, resolve_time
from .errors import ClassMismatch, SourceUnreadable


class WeatherProduct:
    """Parsed WMO bulletins of one product class, addressable by name.

    Every product is reachable by its WMO product code (``FPUS51``) and by the
    issuing station (``KOKX``)::

        forecast = WeatherProduct(["data/text/FPUS61/KOKX.TXT"])
        print(forecast.text("FPUS61"))

    A single instance accepts one product class only; create one instance per
    product. All public methods are serialised on an instance lock.
    """

    def __init__(
        self,
        sources: Iterable[str] = (),
        *,
        age_ceiling: int | None = None,
        recognizer: HeaderRecognizer | None = None,
        fetcher: SourceFetcher | None = None,
        clock: Clock | None = None,
        global_config: GlobalConfig | None = None,
    ) -> None:
        self.global_config = global_config or GlobalConfig(age_ceiling=age_ceiling or 0)
        if age_ceiling is None:
            age_ceiling = self.global_config.age_ceiling
        self.clock = clock or utc_now
        self.store = ProductStore(age_ceiling=age_ceiling)
        self.collector = GarbageCollector(self.store, clock=self.clock)
        self.parser = BulletinParser(self.store, recognizer=recognizer, collector=self.collector)
        self.logger = structlog.get_logger("wxproduct.products")
        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None
        self._lock = RLock()
        sources = list(sources)
        if sources:
            self.import_sources(sources)

    @classmethod
    def from_config(cls, config: GlobalConfig, **kwargs) -> "WeatherProduct":
        return cls(config.sources, global_config=config, **kwargs)

    def close(self) -> None:
        if self._fetcher is not None and self._owns_fetcher:
            self._fetcher.close()
            self._fetcher = None

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def import_sources(self, sources: Iterable[str]) -> dict[str, int]:
        """Fetch and parse each source in order.

        Unreadable sources are logged and skipped. A bulletin of a different
        product class stops the batch with ``ClassMismatch``.
        """

        summary = {"imported": 0, "failed": 0, "skipped": 0}
        for source in sources:
            if not source:
                continue
            try:
                result = self._get_fetcher().fetch(source)
            except SourceUnreadable as exc:
                self.logger.warning("source_unreadable", source=source, error=exc.message)
                summary["failed"] += 1
                continue
            try:
                entry_id = self.parse(result.text)
            except ClassMismatch as exc:
                self.logger.error("import_rejected", source=source, error=exc.message)
                raise
            if entry_id is None:
                summary["skipped"] += 1
            else:
                summary["imported"] += 1
        self.logger.info("import_finished", **summary)
        return summary

    def parse(self, buffer: str | bytes) -> int | None:
        with self._lock:
            return self.parser.parse(buffer)

    def purge(self, *names: str) -> set[int]:
        with self._lock:
            return self.collector.purge(names)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def header(self, name: str) -> ProductHeader | None:
        with self._lock:
            return self.store.get_field(name, "header")

    def text(self, name: str) -> str | None:
        with self._lock:
            return self.store.get_field(name, "body")

    def time(self, name: str) -> datetime | None:
        header = self.header(name)
        if header is None:
            return None
        return resolve_time(header.time, self.clock())

    def age(self, name: str) -> float | None:
        header = self.header(name)
        if header is None:
            return None
        return age_hours(header.time, self.clock())

    def list_products(self) -> set[str]:
        with self._lock:
            return self.store.list_names()

    @property
    def age_ceiling(self) -> int:
        return self.store.age_ceiling

    @age_ceiling.setter
    def age_ceiling(self, hours: int) -> None:
        with self._lock:
            self.store.age_ceiling = hours

    # ------------------------------------------------------------------
    def _get_fetcher(self) -> SourceFetcher:
        if self._fetcher is None:
            self._fetcher = SourceFetcher(self.global_config)
        return self._fetcher

    def __enter__(self) -> "WeatherProduct":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()


__all__ = ["WeatherProduct"]
