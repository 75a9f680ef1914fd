"""WMO abbreviated heading recognition (``TTAAii CCCC YYGGgg [BBB]``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

_WMO_RE = re.compile(
    r"^(?P<product>[A-Z]{4}\d{2})\s+(?P<station>[A-Z0-9]{4})\s+(?P<time>\d{6})"
    r"(?:\s+(?P<indicator>[A-Z]{3}))?$"
)


@runtime_checkable
class ProductHeader(Protocol):
    """Decoded header as seen by the store and parser."""

    product: str
    station: str
    time: str

    def equals_product_class(self, other: "ProductHeader") -> bool: ...


@runtime_checkable
class HeaderRecognizer(Protocol):
    """Validate and decode a single header line."""

    def is_valid(self, line: str) -> bool: ...

    def parse(self, line: str) -> ProductHeader: ...


@dataclass(frozen=True, slots=True)
class WMOHeader:
    """Structured WMO heading, e.g. ``FPUS51 KOKX 150900 RRA``."""

    product: str
    station: str
    time: str
    indicator: str | None = None

    @property
    def data_type(self) -> str:
        """``TT`` designator, e.g. ``FP`` for public forecasts."""
        return self.product[:2]

    @property
    def area(self) -> str:
        return self.product[2:4]

    def equals_product_class(self, other: ProductHeader) -> bool:
        return self.product == other.product

    def __str__(self) -> str:
        parts = [self.product, self.station, self.time]
        if self.indicator:
            parts.append(self.indicator)
        return " ".join(parts)


class WMOHeaderRecognizer:
    """Default recognizer for WMO abbreviated headings."""

    def is_valid(self, line: str) -> bool:
        return _WMO_RE.match(line.strip()) is not None

    def parse(self, line: str) -> WMOHeader:
        match = _WMO_RE.match(line.strip())
        if match is None:
            raise ValueError(f"Not a WMO header line: {line!r}")
        return WMOHeader(
            product=match.group("product"),
            station=match.group("station"),
            time=match.group("time"),
            indicator=match.group("indicator"),
        )


__all__ = ["HeaderRecognizer", "ProductHeader", "WMOHeader", "WMOHeaderRecognizer"]
