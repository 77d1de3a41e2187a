import unicodedata
from collections.abc import Iterable, Mapping

from rooms_strategy.models.schemas import Area, Device, Entity, EntityDomainInfo


DEFAULT_AREA_ID = "default"

DEFAULT_ENTITY_DOMAINS: tuple[EntityDomainInfo, ...] = (
    EntityDomainInfo(id="light", name="Lights", icon="mdi:lightbulb"),
    EntityDomainInfo(id="switch", name="Switches", icon="mdi:toggle-switch"),
    EntityDomainInfo(id="fan", name="Fans", icon="mdi:fan"),
    EntityDomainInfo(id="cover", name="Covers", icon="mdi:window-shutter"),
    EntityDomainInfo(id="camera", name="Security", icon="mdi:camera"),
)


def _character_rank(ch: str) -> int:
    category = unicodedata.category(ch)
    if category.startswith("L"):
        return 2
    if category.startswith("N"):
        return 1
    return 0


def _collation_key(text: str) -> tuple[tuple[tuple[int, str], ...], str, str]:
    # Punctuation and symbols sort before digits, digits before letters.
    # Base letters first, then accents, then lowercase ahead of uppercase.
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return tuple((_character_rank(ch), ch) for ch in base), text.casefold(), text.swapcase()


def _has_domain_prefix(entity_id: str, domain: str) -> bool:
    return entity_id.startswith(f"{domain}.")


def get_entity_area_id(entity: Entity, devices: Mapping[str, Device] | None) -> str | None:
    """Area of an entity: its own assignment, else its device's, else None."""
    if entity.area_id:
        return entity.area_id
    if entity.device_id and devices:
        device = devices.get(entity.device_id)
        if device is not None:
            return device.area_id or None
    return None


def filter_entities_by_domain_and_exclusions(
    entities: Iterable[Entity],
    domains: Iterable[EntityDomainInfo],
    excluded_entities: Iterable[str],
) -> list[Entity]:
    domain_ids = [info.id for info in domains]
    excluded = set(excluded_entities)
    return [
        entity
        for entity in entities
        if any(_has_domain_prefix(entity.entity_id, domain) for domain in domain_ids)
        and entity.entity_id not in excluded
    ]


def sort_entities_alphabetically(entities: Iterable[Entity]) -> list[Entity]:
    return sorted(entities, key=lambda entity: _collation_key(entity.name or entity.entity_id))


def get_entities_by_domain(entities: Iterable[Entity], domain: str) -> list[Entity]:
    return [entity for entity in entities if _has_domain_prefix(entity.entity_id, domain)]


def filter_valid_areas(
    areas: Iterable[Area],
    entities: Iterable[Entity],
    devices: Mapping[str, Device] | None,
) -> list[Area]:
    """
    Areas that can be shown as rooms.

    An area qualifies when it is not the reserved default area, has a
    non-blank name, and at least one entity resolves to it.
    """
    populated = {get_entity_area_id(entity, devices) for entity in entities}
    populated.discard(None)

    valid: list[Area] = []
    for area in areas:
        if area.area_id == DEFAULT_AREA_ID:
            continue
        if not area.name or not area.name.strip():
            continue
        if area.area_id not in populated:
            continue
        valid.append(area)
    return valid


def sort_areas_alphabetically(areas: Iterable[Area]) -> list[Area]:
    return sorted(areas, key=lambda area: _collation_key(area.name or ""))


def get_area_domain_entities(
    entities: Iterable[Entity],
    area_id: str,
    domain: str,
    devices: Mapping[str, Device] | None,
) -> list[Entity]:
    return [
        entity
        for entity in entities
        if get_entity_area_id(entity, devices) == area_id and _has_domain_prefix(entity.entity_id, domain)
    ]


def has_domain(entity_ids: Iterable[str], domain: str) -> bool:
    return any(_has_domain_prefix(entity_id, domain) for entity_id in entity_ids)
