"""Fetch bulletin text from local files or HTTP(S) URLs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
import structlog

from ..config import GlobalConfig
from ..errors import SourceUnreadable
from .parser import BULLETIN_ENCODING

URL_SCHEMES = ("http", "https")


@dataclass(slots=True)
class FetchResult:
    """Text read from one source."""

    source: str
    text: str
    status_code: int | None = None


class SourceFetcher:
    """Read bulletins from files or URLs, retrying transient HTTP failures."""

    def __init__(
        self,
        global_config: GlobalConfig | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.global_config = global_config or GlobalConfig()
        self.logger = logger or structlog.get_logger("wxproduct.fetcher")
        headers = {"User-Agent": self.global_config.user_agent} if self.global_config.user_agent else None
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=self.global_config.fetch_timeout,
            headers=headers,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SourceFetcher":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()

    def fetch(self, source: str) -> FetchResult:
        path = Path(source)
        if path.is_file():
            return self._read_file(source, path)
        if urlparse(source).scheme in URL_SCHEMES:
            return self._fetch_url(source)
        raise SourceUnreadable(source, "not a readable file or http(s) URL")

    # ------------------------------------------------------------------
    def _read_file(self, source: str, path: Path) -> FetchResult:
        try:
            text = path.read_text(encoding=BULLETIN_ENCODING)
        except OSError as exc:
            raise SourceUnreadable(source, str(exc)) from exc
        return FetchResult(source=source, text=text)

    def _fetch_url(self, source: str) -> FetchResult:
        max_attempts = self.global_config.fetch_retries + 1
        last_error: Exception | None = None
        for attempt in range(1, max_attempts + 1):
            try:
                response = self._client.request(method="GET", url=source)
            except httpx.HTTPError as exc:
                self.logger.warning("fetch_error", url=source, attempt=attempt, error=str(exc))
                last_error = exc
                continue
            if self._is_retryable(response):
                self.logger.warning(
                    "fetch_error", url=source, attempt=attempt, status=response.status_code
                )
                last_error = RuntimeError(f"Unexpected status {response.status_code}")
                continue
            if response.is_error:
                raise SourceUnreadable(source, f"status {response.status_code}")
            return FetchResult(source=source, text=response.text, status_code=response.status_code)

        raise SourceUnreadable(
            source, f"failed after {max_attempts} attempts: {last_error}"
        ) from last_error

    @staticmethod
    def _is_retryable(response: httpx.Response) -> bool:
        return response.status_code >= 500 or response.status_code == 429


__all__ = ["FetchResult", "SourceFetcher", "URL_SCHEMES"]
