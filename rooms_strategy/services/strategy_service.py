"""
Rooms sections dashboard strategy.

Builds a complete sections dashboard from a registry snapshot:
- Home view: favorites, domain summaries and one card per room
- One subview per room, entities grouped by domain
- Media players subview, players grouped by room

generate_views is a pure function of (config, hass). RoomsSectionsStrategy
is the wrapper the host calls; it adds the operation log entry.
"""

from collections.abc import Mapping
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from rooms_strategy.core.errors import InputShapeError
from rooms_strategy.models.schemas import DashboardStrategyConfig, HomeAssistantSnapshot, LovelaceConfig
from rooms_strategy.services.area_cards import build_area_cards_section, get_area_ids_from_cards
from rooms_strategy.services.area_views import build_area_views
from rooms_strategy.services.entity_filters import (
    DEFAULT_ENTITY_DOMAINS,
    filter_entities_by_domain_and_exclusions,
    sort_areas_alphabetically,
    sort_entities_alphabetically,
)
from rooms_strategy.services.log_service import log_operation
from rooms_strategy.services.media_players_view import build_media_players_view, group_media_players_by_area
from rooms_strategy.services.summary_cards import build_summary_cards
from rooms_strategy.services.view_assembly import (
    build_area_cards_grid_section,
    build_favorites_section,
    build_home_view,
    build_summary_section,
)


MEDIA_PLAYER_DOMAIN = "media_player"


def _validation_error_to_shape_error(root: str, ex: ValidationError) -> InputShapeError:
    errors = ex.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    field_path = f"{root}.{location}" if location else root
    return InputShapeError(field_path=field_path, message=str(first.get("msg", "invalid input shape")))


def coerce_config(raw: Any) -> DashboardStrategyConfig:
    """Strategy config from a model or mapping; None means an empty config."""
    if isinstance(raw, DashboardStrategyConfig):
        return raw
    if raw is None:
        return DashboardStrategyConfig()
    if not isinstance(raw, Mapping):
        raise InputShapeError(field_path="config", message=f"expected a mapping, got {type(raw).__name__}")
    try:
        return DashboardStrategyConfig.model_validate(dict(raw))
    except ValidationError as ex:
        raise _validation_error_to_shape_error("config", ex) from ex


def coerce_snapshot(raw: Any) -> HomeAssistantSnapshot:
    """Registry snapshot from a model or mapping; None means no registry data at all."""
    if isinstance(raw, HomeAssistantSnapshot):
        return raw
    if raw is None:
        return HomeAssistantSnapshot()
    if not isinstance(raw, Mapping):
        raise InputShapeError(field_path="hass", message=f"expected a mapping, got {type(raw).__name__}")
    try:
        return HomeAssistantSnapshot.model_validate(dict(raw))
    except ValidationError as ex:
        raise _validation_error_to_shape_error("hass", ex) from ex


def generate_views(
    config: DashboardStrategyConfig | Mapping[str, Any] | None,
    hass: HomeAssistantSnapshot | Mapping[str, Any] | None,
) -> LovelaceConfig:
    strategy_config = coerce_config(config)
    snapshot = coerce_snapshot(hass)

    excluded_entities = set(strategy_config.excluded_entities)
    base_path = snapshot.panel_url
    favorite_entity_ids = [entity_id for entity_id in strategy_config.favorite_entities if entity_id in snapshot.states]

    areas = sort_areas_alphabetically(snapshot.areas.values())
    all_entities = list(snapshot.entities.values())
    all_entity_ids = list(snapshot.states.keys())
    devices = snapshot.devices

    filtered_entities = filter_entities_by_domain_and_exclusions(all_entities, DEFAULT_ENTITY_DOMAINS, excluded_entities)
    sorted_entities = sort_entities_alphabetically(filtered_entities)

    area_cards = build_area_cards_section(areas, sorted_entities, devices, base_path)
    area_ids = get_area_ids_from_cards(area_cards)
    area_names = {area.area_id: area.name or area.area_id for area in areas}

    area_views = build_area_views(area_ids, area_names, sorted_entities, DEFAULT_ENTITY_DOMAINS, devices)

    media_entities = [
        entity
        for entity in all_entities
        if entity.entity_id.startswith(f"{MEDIA_PLAYER_DOMAIN}.") and entity.entity_id not in excluded_entities
    ]
    media_grouping = group_media_players_by_area(media_entities, devices)
    media_players_view = build_media_players_view(
        media_grouping.media_by_area,
        media_grouping.unassigned_media,
        area_ids,
        area_names,
    )

    # Summaries look at every known entity, exclusions included.
    summary_cards = build_summary_cards(all_entity_ids)

    home_view = build_home_view(
        [
            build_favorites_section(favorite_entity_ids),
            build_summary_section(summary_cards),
            build_area_cards_grid_section(area_cards),
        ],
        strategy_config,
    )

    return LovelaceConfig(views=[home_view, *area_views, media_players_view])


class RoomsSectionsStrategy:
    """Dashboard strategy the host looks up by tag and calls with (config, hass)."""

    tag = "ll-strategy-dashboard-rooms-sections"

    def generate(self, config: Any, hass: Any, *, trace_id: str | None = None) -> LovelaceConfig:
        started = perf_counter()
        try:
            result = generate_views(config, hass)
        except InputShapeError as ex:
            log_operation(
                event_type="strategy",
                source="strategy",
                action="strategy.generate",
                trace_id=trace_id,
                success=False,
                detail={"strategy": self.tag, **ex.to_error_detail()},
            )
            raise

        log_operation(
            event_type="strategy",
            source="strategy",
            action="strategy.generate",
            duration_ms=round((perf_counter() - started) * 1000, 2),
            trace_id=trace_id,
            success=True,
            detail={
                "strategy": self.tag,
                "view_count": len(result.views),
                "view_paths": [view.path for view in result.views],
            },
        )
        return result
