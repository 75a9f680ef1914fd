"""Engine components: header recognition, store, parse, purge and fetch."""

from .fetcher import FetchResult, SourceFetcher
from .header import HeaderRecognizer, ProductHeader, WMOHeader, WMOHeaderRecognizer
from .parser import BulletinParser
from .purge import GarbageCollector
from .store import Entry, ProductStore
from .timeutil import reconstruct, resolve_time

__all__ = [
    "BulletinParser",
    "Entry",
    "FetchResult",
    "GarbageCollector",
    "HeaderRecognizer",
    "ProductHeader",
    "ProductStore",
    "SourceFetcher",
    "WMOHeader",
    "WMOHeaderRecognizer",
    "reconstruct",
    "resolve_time",
]
