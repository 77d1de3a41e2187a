from collections.abc import Iterable, Mapping, Sequence

from rooms_strategy.models.schemas import Device, EntitiesCard, Entity, EntityDomainInfo, GridSection, SectionsView
from rooms_strategy.services.entity_filters import get_area_domain_entities


def build_entities_domain_card(domain_info: EntityDomainInfo, area_entities: Sequence[Entity]) -> EntitiesCard | None:
    if not area_entities:
        return None

    return EntitiesCard(
        title=domain_info.name,
        entities=[entity.entity_id for entity in area_entities],
        show_header_toggle=True,
        state_color=True,
    )


def build_area_domain_cards(
    entities: Sequence[Entity],
    area_id: str,
    domains: Iterable[EntityDomainInfo],
    devices: Mapping[str, Device] | None,
) -> list[EntitiesCard]:
    # Domain order is the configured display order; empty domains are skipped.
    cards: list[EntitiesCard] = []
    for domain_info in domains:
        area_entities = get_area_domain_entities(entities, area_id, domain_info.id, devices)
        card = build_entities_domain_card(domain_info, area_entities)
        if card is not None:
            cards.append(card)
    return cards


def build_area_view(
    area_title: str,
    area_id: str,
    entities: Sequence[Entity],
    domains: Iterable[EntityDomainInfo],
    devices: Mapping[str, Device] | None,
) -> SectionsView:
    domain_cards = build_area_domain_cards(entities, area_id, domains, devices)
    return SectionsView(
        title=area_title,
        path=area_id,
        max_columns=2,
        subview=True,
        sections=[GridSection(column_span=2, columns=2, cards=domain_cards)],
    )


def build_area_views(
    area_ids: Iterable[str],
    area_names: Mapping[str, str],
    entities: Sequence[Entity],
    domains: Sequence[EntityDomainInfo],
    devices: Mapping[str, Device] | None,
) -> list[SectionsView]:
    return [
        build_area_view(area_names.get(area_id) or area_id, area_id, entities, domains, devices)
        for area_id in area_ids
    ]
