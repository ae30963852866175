from wishscan.models import CardRecord, DropCard, SeriesRecord
from wishscan.store import CardStore, keys_match, normalize_key


def test_normalize_key_flags_truncated_names():
    assert normalize_key("Aria Starfall") == (False, "ariastarfall")
    assert normalize_key("Aria Star...") == (True, "ariastar")
    assert normalize_key("Aria Star..") == (True, "ariastar")


def test_keys_match_accepts_single_ocr_confusion_only_when_tolerant():
    assert keys_match("nocturne", "n0cturne", truncated=False, tolerant=True)
    assert not keys_match("nocturne", "n0cturne", truncated=False)
    assert not keys_match("nocturne", "n0ctvrne", truncated=False, tolerant=True)
    assert not keys_match("nocturne", "nacturne", truncated=False, tolerant=True)


def test_upsert_card_inserts_then_updates():
    store = CardStore()

    store.upsert_card(CardRecord(wishlist_count=3, name="Nocturne", series="Arcview"))
    updated = store.upsert_card(CardRecord(wishlist_count=8, name="nocturne", series="ARCVIEW"))

    assert len(store.cards) == 1
    assert updated == CardRecord(wishlist_count=8, name="Nocturne", series="Arcview")


def test_truncated_card_updates_by_prefix_but_never_inserts():
    store = CardStore()
    store.upsert_card(CardRecord(wishlist_count=3, name="Aria Starfall", series="Skyline Chronicles"))

    updated = store.upsert_card(
        CardRecord(wishlist_count=11, name="Aria Starfall", series="Skyline Chron...")
    )
    missing = store.upsert_card(CardRecord(wishlist_count=2, name="Bram...", series="Skyline"))

    assert updated.wishlist_count == 11
    assert updated.series == "Skyline Chronicles"
    assert missing is None
    assert len(store.cards) == 1


def test_upsert_series_keeps_latest():
    store = CardStore()
    store.upsert_series(SeriesRecord(wishlist_count=1, series="Arcview"))
    store.upsert_series(SeriesRecord(wishlist_count=4, series="Arcview"))

    assert list(store.series.values()) == [SeriesRecord(wishlist_count=4, series="Arcview")]


def test_lookup_annotates_known_drop_cards():
    store = CardStore()
    store.upsert_card(CardRecord(wishlist_count=42, name="Nocturne", series="Arcview"))

    cards = store.lookup(
        [
            DropCard(name="N0cturne", series="Arcview", edition="7"),
            DropCard(name="Unknown", series="Nowhere"),
        ]
    )

    assert cards[0].wishlist_count == 42
    assert cards[0].edition == "7"
    assert cards[1].wishlist_count is None


def test_bare_truncation_marker_matches_nothing():
    store = CardStore()
    store.upsert_card(CardRecord(wishlist_count=500, name="Nocturne", series="Arcview"))

    assert store.upsert_card(CardRecord(wishlist_count=1, name="...", series="Arcview")) is None
    assert store.upsert_card(CardRecord(wishlist_count=1, name="Nocturne", series="...")) is None
    assert store.cards[("nocturne", "arcview")].wishlist_count == 500

    [card] = store.lookup([DropCard(name="...", series="...")])
    assert card.wishlist_count is None
