"""Two-level product store: id-indexed entries plus a name-to-id alias table."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Dict, Literal

import structlog

from ..errors import ClassMismatch
from .header import ProductHeader

EntryField = Literal["header", "body"]
_FIELDS: tuple[str, ...] = ("header", "body")


@dataclass(frozen=True, slots=True)
class Entry:
    """One parsed bulletin segment."""

    id: int
    header: ProductHeader
    body: str


class ProductStore:
    """Hold parsed entries and the aliases that name them.

    Several names (product code, station code) may point at one entry. An
    alias may be cleared without being removed; cleared aliases resolve to
    nothing and leave their entry to be reclaimed by the next purge.
    """

    def __init__(self, age_ceiling: int = 0) -> None:
        self._entries: Dict[int, Entry] = {}
        self._aliases: Dict[str, int | None] = {}
        self._ids = itertools.count()
        self._product_class: ProductHeader | None = None
        self._age_ceiling = 0
        self.age_ceiling = age_ceiling
        self.logger = structlog.get_logger("wxproduct.store")

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    def reserve_id(self) -> int:
        return next(self._ids)

    def create_entry(self, header: ProductHeader, body: str, entry_id: int | None = None) -> int:
        if entry_id is None:
            entry_id = self.reserve_id()
        if entry_id in self._entries:
            raise ValueError(f"Entry id already in use: {entry_id}")
        self._entries[entry_id] = Entry(id=entry_id, header=header, body=body)
        if self._product_class is None:
            self._product_class = header
        self.logger.debug("entry_created", entry_id=entry_id, product=header.product, station=header.station)
        return entry_id

    def check_class(self, header: ProductHeader) -> None:
        if self._product_class is None:
            return
        if not header.equals_product_class(self._product_class):
            raise ClassMismatch(self._product_class.product, header.product)

    def delete_entry(self, entry_id: int) -> None:
        self._entries.pop(entry_id, None)

    def entry_ids(self) -> set[int]:
        return set(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------
    def add_alias(self, name: str, entry_id: int) -> None:
        self._aliases[name] = entry_id

    def clear_alias(self, name: str) -> bool:
        if self._aliases.get(name) is None:
            return False
        self._aliases[name] = None
        return True

    def resolve(self, name: str | None) -> int | None:
        if name is None:
            return None
        return self._aliases.get(name)

    def get_field(self, name: str | None, field: EntryField) -> Any:
        """Return ``field`` of the entry ``name`` points at, or ``None``."""

        if field not in _FIELDS:
            raise ValueError(f"Unknown entry field: {field}")
        entry_id = self.resolve(name)
        if entry_id is None:
            return None
        entry = self._entries.get(entry_id)
        if entry is None:
            return None
        return getattr(entry, field)

    def list_names(self) -> set[str]:
        return {name for name, entry_id in self._aliases.items() if entry_id is not None}

    def referenced_ids(self) -> set[int]:
        return {entry_id for entry_id in self._aliases.values() if entry_id is not None}

    # ------------------------------------------------------------------
    # Store-level settings
    # ------------------------------------------------------------------
    @property
    def product_class(self) -> ProductHeader | None:
        return self._product_class

    @property
    def age_ceiling(self) -> int:
        return self._age_ceiling

    @age_ceiling.setter
    def age_ceiling(self, hours: int) -> None:
        if hours < 0:
            raise ValueError("age_ceiling must be >= 0")
        self._age_ceiling = int(hours)


__all__ = ["Entry", "EntryField", "ProductStore"]
