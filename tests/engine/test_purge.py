from __future__ import annotations

from wxproduct.engine import BulletinParser, GarbageCollector, ProductStore
from wxproduct.engine.header import WMOHeader


def _collector(store: ProductStore, clock) -> GarbageCollector:
    return GarbageCollector(store, clock=clock)


def test_purge_without_names_keeps_aliased_entries(store: ProductStore, clock) -> None:
    kept = store.create_entry(WMOHeader("FPUS51", "KOKX", "150900"), "kept\n")
    orphan = store.create_entry(WMOHeader("FPUS51", "KBOX", "150900"), "orphan\n")
    store.add_alias("KOKX", kept)

    deleted = _collector(store, clock).purge()

    assert deleted == {orphan}
    assert store.entry_ids() == {kept}
    assert store.get_field("KOKX", "body") == "kept\n"


def test_explicit_purge_of_every_alias_reclaims_in_same_pass(parser: BulletinParser, store: ProductStore, clock, bulletin) -> None:
    entry_id = parser.parse(bulletin())
    deleted = _collector(store, clock).purge(["FPUS51", "KOKX"])
    assert deleted == {entry_id}
    assert len(store) == 0
    assert store.list_names() == set()


def test_explicit_purge_of_one_alias_keeps_entry(parser: BulletinParser, store: ProductStore, clock, bulletin, body_of) -> None:
    entry_id = parser.parse(bulletin())
    deleted = _collector(store, clock).purge(["FPUS51"])
    assert deleted == set()
    assert store.resolve("FPUS51") is None
    assert store.resolve("KOKX") == entry_id
    assert store.get_field("KOKX", "body") == body_of()


def test_unknown_names_are_ignored(parser: BulletinParser, store: ProductStore, clock, bulletin) -> None:
    parser.parse(bulletin())
    assert _collector(store, clock).purge(["NOPE"]) == set()
    assert store.list_names() == {"FPUS51", "KOKX"}


def test_age_ceiling_purges_once_product_expires(parser: BulletinParser, store: ProductStore, clock, bulletin) -> None:
    parser.parse(bulletin(time_field="151130"))
    store.age_ceiling = 1
    collector = _collector(store, clock)

    assert collector.purge() == set()
    assert store.list_names() == {"FPUS51", "KOKX"}

    clock.advance(hours=1)
    assert collector.expired_names() == {"FPUS51", "KOKX"}
    assert len(collector.purge()) == 1
    assert store.list_names() == set()
    assert len(store) == 0


def test_age_ceiling_disabled_keeps_old_products(parser: BulletinParser, store: ProductStore, clock, bulletin) -> None:
    parser.parse(bulletin(time_field="140000"))
    collector = _collector(store, clock)
    assert collector.expired_names() == set()
    assert collector.purge() == set()
    assert store.list_names() == {"FPUS51", "KOKX"}


def test_unresolvable_times_are_not_age_purged(parser: BulletinParser, store: ProductStore, clock, bulletin) -> None:
    parser.parse(bulletin(time_field="152000"))
    parser.parse(bulletin(station="KBOX", time_field="154500"))
    store.age_ceiling = 1
    clock.advance(hours=2)
    collector = _collector(store, clock)
    # 152000 is still in the future at 14:00 and hour 45 never resolves
    assert collector.expired_names() == set()
    assert collector.purge() == set()
    assert store.list_names() == {"FPUS51", "KOKX", "KBOX"}


def test_age_purge_spares_fresh_entry_sharing_no_alias(parser: BulletinParser, store: ProductStore, clock, bulletin) -> None:
    parser.parse(bulletin(time_field="150600", body=("OLD",)))
    parser.parse(bulletin(station="KBOX", time_field="151130", body=("FRESH",)))
    store.age_ceiling = 2
    _collector(store, clock).purge()
    assert store.list_names() == {"FPUS51", "KBOX"}
    assert store.get_field("KBOX", "body") == "FRESH\n"
    assert len(store) == 1
