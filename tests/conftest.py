import pytest

from wishscan.models import Document


@pytest.fixture
def sorted_by_wishlist() -> Document:
    return Document(
        title="Card Collection (Sort By: Wishlist)",
        description=(
            "> `12` **Aria** •  *Skyline*\n"
            "> `9` **Bram** •  *Skyline*\n"
            "\n"
            "> `4` **Cato** •  *Harbor Lights*"
        ),
    )


@pytest.fixture
def leaderboard_characters() -> Document:
    return Document(
        title="WISHLIST LEADERBOARD - CHARACTERS",
        description=(
            "> `1,204` • **Aria** • *Skyline*\n"
            "> `877` • **Juno** • *Wander*"
        ),
    )


@pytest.fixture
def leaderboard_series() -> Document:
    return Document(
        title="WISHLIST LEADERBOARD - SERIES",
        description="> `7` • **Arcview**\n> `5` • **Skyline**",
    )


@pytest.fixture
def collection_summary() -> Document:
    return Document.model_validate(
        {
            "title": "Arcview",
            "description": "**Cards Collected:** 12/40\n*Total Wishlist:* **42**",
            "fields": [{"name": "Cards", "value": "❤️ `3` **Nocturne**", "inline": False}],
        }
    )


@pytest.fixture
def character_profile() -> Document:
    return Document(
        title="Juno",
        description=(
            "**Series:** Wander\n"
            "**Category:** Rare\n"
            "\n"
            "**Wishlisted ➜** `5`\n"
            "**Generated ➜** `100`\n"
            "**Burned ➜** `10`\n"
            "**3D ➜** `2`\n"
            "\n"
            "**Card ID:** `JX-01`"
        ),
    )
