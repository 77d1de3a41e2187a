from __future__ import annotations

import unittest

from rooms_strategy.models.schemas import (
    CustomCard,
    EntitiesCard,
    HeadingCard,
    HomeAssistantSnapshot,
    LovelaceConfig,
    MediaControlCard,
)


class TestLovelaceConfigParsing(unittest.TestCase):
    def test_known_and_unknown_card_types(self) -> None:
        config = LovelaceConfig.model_validate(
            {
                "views": [
                    {
                        "title": "Home",
                        "path": "home",
                        "type": "sections",
                        "sections": [
                            {
                                "type": "grid",
                                "column_span": 4,
                                "cards": [
                                    {"type": "heading", "heading": "Areas", "heading_style": "title"},
                                    {"type": "media-control", "entity": "media_player.tv"},
                                    {"type": "custom:mushroom-light-card", "entity": "light.a"},
                                ],
                            }
                        ],
                    }
                ]
            }
        )
        cards = config.views[0].sections[0].cards
        self.assertIsInstance(cards[0], HeadingCard)
        self.assertIsInstance(cards[1], MediaControlCard)
        self.assertIsInstance(cards[2], CustomCard)
        self.assertEqual(
            {"type": "custom:mushroom-light-card", "entity": "light.a"},
            cards[2].model_dump(mode="json"),
        )

    def test_entities_card_accepts_rows(self) -> None:
        card = EntitiesCard(entities=["light.a", {"entity": "light.b", "name": "B"}])
        self.assertEqual({"entity": "light.b", "name": "B"}, card.entities[1])


class TestSnapshot(unittest.TestCase):
    def test_panel_url_alias_and_extra_registry_keys(self) -> None:
        snapshot = HomeAssistantSnapshot.model_validate(
            {
                "panelUrl": "rooms",
                "entities": {"light.a": {"entity_id": "light.a", "translation_key": "ceiling"}},
                "language": "en",
            }
        )
        self.assertEqual("rooms", snapshot.panel_url)
        self.assertEqual("ceiling", snapshot.entities["light.a"].model_dump()["translation_key"])


if __name__ == "__main__":
    unittest.main()
