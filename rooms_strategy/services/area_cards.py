from collections.abc import Iterable, Mapping, Sequence

from rooms_strategy.models.schemas import (
    Area,
    AreaCard,
    CardFeature,
    Device,
    Entity,
    GridOptions,
    HeadingCard,
    StrategyCard,
)
from rooms_strategy.services.entity_filters import filter_valid_areas, sort_areas_alphabetically


AREA_CONTROLS = ("light", "switch", "fan", "cover-shade", "cover-blind", "cover-garage", "cover-door")


def build_area_card(area: Area, base_path: str) -> AreaCard:
    path_prefix = f"/{base_path}" if base_path else ""
    return AreaCard(
        title=area.name or area.area_id,
        area=area.area_id,
        features_position="bottom",
        display_type="picture",
        grid_options=GridOptions(columns=12, rows=3),
        features=[CardFeature(type="area-controls", controls=list(AREA_CONTROLS))],
        navigation_path=f"{path_prefix}/{area.area_id}",
    )


def build_area_cards_section(
    areas: Iterable[Area],
    entities: Sequence[Entity],
    devices: Mapping[str, Device] | None,
    base_path: str,
) -> list[StrategyCard]:
    """Home view room list: an "Areas" heading followed by one card per valid area, by name."""
    valid_areas = filter_valid_areas(sort_areas_alphabetically(areas), entities, devices)
    cards: list[StrategyCard] = [HeadingCard(heading="Areas", heading_style="title")]
    cards.extend(build_area_card(area, base_path) for area in valid_areas)
    return cards


def get_area_ids_from_cards(cards: Iterable[StrategyCard]) -> list[str]:
    area_ids: list[str] = []
    for card in cards:
        area_id = getattr(card, "area", None)
        if area_id:
            area_ids.append(area_id)
    return area_ids
