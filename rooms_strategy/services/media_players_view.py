from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from rooms_strategy.models.schemas import (
    Device,
    Entity,
    GridSection,
    HeadingCard,
    MediaControlCard,
    SectionsView,
    StrategyCard,
)
from rooms_strategy.services.entity_filters import get_entity_area_id


@dataclass
class MediaGrouping:
    # Keys keep first-seen order; players keep input order within each area.
    media_by_area: dict[str, list[str]] = field(default_factory=dict)
    unassigned_media: list[str] = field(default_factory=list)


def group_media_players_by_area(
    media_entities: Iterable[Entity],
    devices: Mapping[str, Device] | None,
) -> MediaGrouping:
    grouping = MediaGrouping()
    for entity in media_entities:
        area_id = get_entity_area_id(entity, devices)
        if area_id:
            grouping.media_by_area.setdefault(area_id, []).append(entity.entity_id)
        else:
            grouping.unassigned_media.append(entity.entity_id)
    return grouping


def _media_control_cards(entity_ids: Iterable[str]) -> list[StrategyCard]:
    return [MediaControlCard(entity=entity_id) for entity_id in entity_ids]


def build_area_media_cards(
    area_ids: Iterable[str],
    area_names: Mapping[str, str],
    media_by_area: Mapping[str, Sequence[str]],
) -> list[StrategyCard]:
    cards: list[StrategyCard] = [HeadingCard(heading="Areas", heading_style="title")]

    for area_id in area_ids:
        players = media_by_area.get(area_id)
        if not players:
            continue
        cards.append(HeadingCard(heading=area_names.get(area_id) or area_id, heading_style="subtitle"))
        cards.extend(_media_control_cards(players))

    return cards


def build_unassigned_media_cards(entity_ids: Sequence[str]) -> list[StrategyCard]:
    if not entity_ids:
        return []

    return [
        HeadingCard(heading="Other media players", heading_style="subtitle"),
        *_media_control_cards(entity_ids),
    ]


def build_media_players_view(
    media_by_area: Mapping[str, Sequence[str]],
    unassigned_media: Sequence[str],
    area_ids: Iterable[str],
    area_names: Mapping[str, str],
) -> SectionsView:
    area_cards = build_area_media_cards(area_ids, area_names, media_by_area)
    other_cards = build_unassigned_media_cards(unassigned_media)

    return SectionsView(
        title="Media players",
        path="media-players",
        subview=True,
        icon="mdi:multimedia",
        max_columns=2,
        sections=[GridSection(column_span=4, cards=[*area_cards, *other_cards])],
    )
