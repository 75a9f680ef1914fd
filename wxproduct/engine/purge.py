"""Garbage collection over the product store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable

import structlog

from .store import ProductStore
from .timeutil import age_hours

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GarbageCollector:
    """Clear named or expired aliases, then reclaim unreferenced entries."""

    def __init__(self, store: ProductStore, clock: Clock | None = None) -> None:
        self.store = store
        self.clock = clock or utc_now
        self.logger = structlog.get_logger("wxproduct.purge")

    def expired_names(self) -> set[str]:
        ceiling = self.store.age_ceiling
        if not ceiling:
            return set()
        now = self.clock()
        expired: set[str] = set()
        for name in self.store.list_names():
            header = self.store.get_field(name, "header")
            if header is None:
                continue
            age = age_hours(header.time, now)
            if age is not None and age > ceiling:
                expired.add(name)
        return expired

    def purge(self, names: Iterable[str] = ()) -> set[int]:
        """Run one full pass and return the ids of the deleted entries.

        Every alias in the purge set is cleared before the referenced ids are
        computed, so an entry named only by purged aliases goes in this pass.
        """

        purge_set = set(names) | self.expired_names()
        cleared = [name for name in sorted(purge_set) if self.store.clear_alias(name)]

        referenced = self.store.referenced_ids()
        orphans = self.store.entry_ids() - referenced
        for entry_id in orphans:
            self.store.delete_entry(entry_id)

        if cleared or orphans:
            self.logger.info(
                "entries_purged",
                cleared=cleared,
                deleted=sorted(orphans),
                remaining=len(self.store),
            )
        return orphans


__all__ = ["Clock", "GarbageCollector", "utc_now"]
