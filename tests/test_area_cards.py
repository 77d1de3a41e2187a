from __future__ import annotations

import unittest

from rooms_strategy.models.schemas import Area, AreaCard, Device, Entity, HeadingCard, HomeSummaryCard
from rooms_strategy.services.area_cards import build_area_card, build_area_cards_section, get_area_ids_from_cards


class TestAreaCard(unittest.TestCase):
    def test_card_shape(self) -> None:
        card = build_area_card(Area(area_id="kitchen", name="Kitchen"), "")
        self.assertEqual(
            {
                "type": "area",
                "title": "Kitchen",
                "area": "kitchen",
                "features_position": "bottom",
                "display_type": "picture",
                "grid_options": {"columns": 12, "rows": 3},
                "features": [
                    {
                        "type": "area-controls",
                        "controls": [
                            "light",
                            "switch",
                            "fan",
                            "cover-shade",
                            "cover-blind",
                            "cover-garage",
                            "cover-door",
                        ],
                    }
                ],
                "navigation_path": "/kitchen",
            },
            card.model_dump(mode="json", exclude_none=True),
        )

    def test_base_path_prefixes_navigation(self) -> None:
        card = build_area_card(Area(area_id="kitchen", name="Kitchen"), "dashboard-rooms")
        self.assertEqual("/dashboard-rooms/kitchen", card.navigation_path)


class TestAreaCardsSection(unittest.TestCase):
    def test_sorted_by_name_after_heading(self) -> None:
        areas = [
            Area(area_id="c", name="Zebra"),
            Area(area_id="a", name="Apple"),
            Area(area_id="b", name="Banana"),
        ]
        entities = [
            Entity(entity_id="light.c", area_id="c"),
            Entity(entity_id="light.a", area_id="a"),
            Entity(entity_id="light.b", area_id="b"),
        ]
        cards = build_area_cards_section(areas, entities, {}, "")

        self.assertEqual(HeadingCard(heading="Areas", heading_style="title"), cards[0])
        self.assertEqual(["a", "b", "c"], [card.area for card in cards[1:]])
        self.assertEqual(["c", "a", "b"], [a.area_id for a in areas])

    def test_default_area_never_shown(self) -> None:
        areas = [Area(area_id="default", name="Default"), Area(area_id="den", name="Den")]
        entities = [
            Entity(entity_id="light.a", area_id="default"),
            Entity(entity_id="light.b", area_id="default"),
            Entity(entity_id="light.c", device_id="dev1"),
        ]
        devices = {"dev1": Device(id="dev1", area_id="den")}
        cards = build_area_cards_section(areas, entities, devices, "")
        self.assertEqual(["den"], get_area_ids_from_cards(cards))

    def test_heading_only_without_valid_areas(self) -> None:
        cards = build_area_cards_section([Area(area_id="empty", name="Empty")], [], None, "")
        self.assertEqual(1, len(cards))
        self.assertIsInstance(cards[0], HeadingCard)


class TestAreaIdsFromCards(unittest.TestCase):
    def test_keeps_order_and_skips_cards_without_area(self) -> None:
        cards = [
            HeadingCard(heading="Areas", heading_style="title"),
            AreaCard(title="B", area="b", navigation_path="/b"),
            HomeSummaryCard(summary="light"),
            AreaCard(title="A", area="a", navigation_path="/a"),
            AreaCard(title="Blank", area="", navigation_path="/"),
        ]
        self.assertEqual(["b", "a"], get_area_ids_from_cards(cards))

    def test_empty_input(self) -> None:
        self.assertEqual([], get_area_ids_from_cards([]))


if __name__ == "__main__":
    unittest.main()
