from wishscan.drop_trigger import DropTrigger, dropper_id, is_drop_message
from wishscan.models import CardRecord, DropCard, DropMessage
from wishscan.store import CardStore


def test_is_drop_message_matches_both_phrasings():
    assert is_drop_message("<@1234> is dropping the cards")
    assert is_drop_message("Your extra drop is being used.")
    assert not is_drop_message("Your extra drop is being used")
    assert not is_drop_message("is dropping the cards now")
    assert not is_drop_message(None)


def test_dropper_id_reads_mention():
    assert dropper_id("<@1234> is dropping the cards") == "1234"
    assert dropper_id("Your extra drop is being used.") is None


def test_run_without_image_does_not_call_collaborators():
    calls = []
    trigger = DropTrigger(lambda url: calls.append(url), lambda *args: calls.append(args))
    message = DropMessage(content="<@1> is dropping the cards", guild_id="99")

    assert trigger.filter(message)
    assert trigger.run(message) is None
    assert calls == []


def test_run_reads_first_attachment_then_fetches_config():
    calls = []

    def ocr(url):
        calls.append(("ocr", url))
        return "raw text"

    def config(guild_id, scope):
        calls.append(("config", guild_id, scope))
        return {"wishlist_ping": True}

    trigger = DropTrigger(ocr, config)
    message = DropMessage(
        content="<@42> is dropping the cards",
        guild_id="99",
        attachments=["https://cdn.example/drop.webp", "https://cdn.example/other.webp"],
    )

    result = trigger.run(message)

    assert calls == [("ocr", "https://cdn.example/drop.webp"), ("config", "99", "_all")]
    assert result.dropper == "42"
    assert result.ocr == "raw text"
    assert result.server_config == {"wishlist_ping": True}


def test_explicit_url_wins_and_store_annotates_cards():
    store = CardStore()
    store.upsert_card(CardRecord(wishlist_count=15, name="Aria", series="Skyline"))
    trigger = DropTrigger(
        lambda url: [DropCard(name="Aria", series="Skyline", edition="3")],
        lambda guild_id, scope: None,
        store=store,
    )
    message = DropMessage(content="Your extra drop is being used.", attachments=["https://a/b.png"])

    result = trigger.run(message, url="https://c/d.png")

    assert result.url == "https://c/d.png"
    assert result.ocr[0].wishlist_count == 15
