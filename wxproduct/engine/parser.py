"""Bulletin parsing: locate the header line and capture the body text."""

from __future__ import annotations

import structlog

from ..errors import ClassMismatch
from .header import HeaderRecognizer, ProductHeader, WMOHeaderRecognizer
from .purge import GarbageCollector
from .store import ProductStore

BULLETIN_ENCODING = "latin-1"
# ASCII whitespace only; latin-1 control bytes such as 0x85 are content
TRAILING_WHITESPACE = " \t\r\f\v"


class BulletinParser:
    """Split bulletins into header and body and register them in a store."""

    def __init__(
        self,
        store: ProductStore,
        recognizer: HeaderRecognizer | None = None,
        collector: GarbageCollector | None = None,
    ) -> None:
        self.store = store
        self.recognizer = recognizer or WMOHeaderRecognizer()
        self.collector = collector or GarbageCollector(store)
        self.logger = structlog.get_logger("wxproduct.parser")

    def parse(self, buffer: str | bytes) -> int | None:
        """Parse one bulletin and return the new entry id.

        Returns ``None`` when no header line is found; that bulletin is dropped.
        Raises ``ClassMismatch`` before touching the store when the header
        belongs to another product class.
        """

        if isinstance(buffer, bytes):
            buffer = buffer.decode(BULLETIN_ENCODING)

        entry_id = self.store.reserve_id()
        header: ProductHeader | None = None
        body: list[str] = []

        lines = buffer.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        for raw_line in lines:
            line = raw_line.rstrip(TRAILING_WHITESPACE)
            if header is not None:
                body.append(line + "\n")
                continue
            if self.recognizer.is_valid(line):
                candidate = self.recognizer.parse(line)
                try:
                    self.store.check_class(candidate)
                except ClassMismatch:
                    self.logger.warning("class_mismatch", entry_id=entry_id, product=candidate.product)
                    raise
                header = candidate

        if header is None:
            self.logger.info("header_not_found", entry_id=entry_id)
        else:
            self.store.create_entry(header, "".join(body), entry_id=entry_id)
            self.store.add_alias(header.product, entry_id)
            self.store.add_alias(header.station, entry_id)
            self.logger.info(
                "bulletin_parsed",
                entry_id=entry_id,
                product=header.product,
                station=header.station,
                lines=len(body),
            )

        self.collector.purge()
        return entry_id if header is not None else None


__all__ = ["BULLETIN_ENCODING", "BulletinParser", "TRAILING_WHITESPACE"]
