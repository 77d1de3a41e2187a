from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator


# Registry snapshot supplied by the host. Entries carry many more keys than
# the strategy reads, so every registry model keeps unknown fields.


class Area(BaseModel):
    area_id: str = Field(min_length=1, description="Area registry id, e.g. living_room")
    name: str | None = Field(default=None, description="Area display name")
    icon: str | None = None

    model_config = ConfigDict(extra="allow")


class Entity(BaseModel):
    entity_id: str = Field(min_length=1, description="Domain-qualified id, e.g. light.kitchen")
    name: str | None = None
    area_id: str | None = None
    device_id: str | None = None
    platform: str | None = None
    icon: str | None = None
    disabled_by: str | None = None
    hidden_by: str | None = None

    model_config = ConfigDict(extra="allow")


class Device(BaseModel):
    id: str = ""
    area_id: str | None = None
    name: str | None = None
    model: str | None = None
    manufacturer: str | None = None
    disabled_by: str | None = None

    model_config = ConfigDict(extra="allow")


class EntityState(BaseModel):
    # Only the presence of a state matters here, so payload values are not checked.
    state: Any = None
    attributes: dict[str, Any] | None = None
    last_changed: Any = None
    last_updated: Any = None

    model_config = ConfigDict(extra="allow")


class HomeAssistantSnapshot(BaseModel):
    entities: dict[str, Entity] = Field(default_factory=dict)
    devices: dict[str, Device] = Field(default_factory=dict)
    areas: dict[str, Area] = Field(default_factory=dict)
    states: dict[str, EntityState] = Field(default_factory=dict)
    panel_url: str = Field(default="", alias="panelUrl", description="Dashboard url path the strategy runs under")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("entities", "devices", "areas", "states", mode="before")
    @classmethod
    def _missing_registry_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("panel_url", mode="before")
    @classmethod
    def _missing_panel_url_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class EntityDomainInfo(BaseModel):
    id: str = Field(min_length=1, description="Entity domain, e.g. light")
    name: str = Field(description="Heading used for the domain card")
    icon: str = ""

    model_config = ConfigDict(frozen=True)


class DashboardStrategyConfig(BaseModel):
    type: str = ""
    excluded_entities: list[str] = Field(default_factory=list, description="Entity ids hidden from room views")
    favorite_entities: list[str] = Field(default_factory=list, description="Entity ids pinned on the home view")
    header: dict[str, Any] | None = None
    badges: list[Any] | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("excluded_entities", "favorite_entities", mode="before")
    @classmethod
    def _missing_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# Generated dashboard shapes. Field names and tag values are the wire format
# the dashboard frontend reads.


class GridOptions(BaseModel):
    columns: int | None = None
    rows: int | None = None


class ActionConfig(BaseModel):
    action: Literal["navigate", "call-service", "toggle", "more-info", "url"]
    navigation_path: str | None = None
    service: str | None = None
    service_data: dict[str, Any] | None = None
    target: dict[str, Any] | None = None
    url: str | None = None


class CardFeature(BaseModel):
    type: str

    model_config = ConfigDict(extra="allow")


class HeadingCard(BaseModel):
    type: Literal["heading"] = "heading"
    heading: str
    heading_style: Literal["title", "subtitle"] | None = None


class AreaCard(BaseModel):
    type: Literal["area"] = "area"
    title: str
    area: str
    features_position: Literal["bottom", "top"] | None = None
    display_type: Literal["picture", "compact", "icon", "camera"] | None = None
    grid_options: GridOptions | None = None
    features: list[CardFeature] = Field(default_factory=list)
    navigation_path: str
    exclude_entities: list[str] | None = None


class EntitiesCard(BaseModel):
    type: Literal["entities"] = "entities"
    title: str | None = None
    entities: list[str | dict[str, Any]] = Field(default_factory=list)
    show_header_toggle: bool | None = None
    state_color: bool | None = None
    icon: str | None = None


class MediaControlCard(BaseModel):
    type: Literal["media-control"] = "media-control"
    entity: str
    name: str | None = None


class HomeSummaryCard(BaseModel):
    type: Literal["home-summary"] = "home-summary"
    summary: str
    tap_action: ActionConfig | None = None
    grid_options: GridOptions | None = None


class CustomCard(BaseModel):
    """Any card type this strategy does not build itself, kept verbatim."""

    type: str

    model_config = ConfigDict(extra="allow")


StrategyCard = HeadingCard | AreaCard | EntitiesCard | MediaControlCard | HomeSummaryCard

STRATEGY_CARD_TYPES = frozenset({"heading", "area", "entities", "media-control", "home-summary"})


def _card_tag(value: Any) -> str:
    if isinstance(value, dict):
        card_type = value.get("type")
    else:
        card_type = getattr(value, "type", None)
    if isinstance(card_type, str) and card_type in STRATEGY_CARD_TYPES:
        return card_type
    return "custom"


LovelaceCard = Annotated[
    Union[
        Annotated[HeadingCard, Tag("heading")],
        Annotated[AreaCard, Tag("area")],
        Annotated[EntitiesCard, Tag("entities")],
        Annotated[MediaControlCard, Tag("media-control")],
        Annotated[HomeSummaryCard, Tag("home-summary")],
        Annotated[CustomCard, Tag("custom")],
    ],
    Discriminator(_card_tag),
]


class GridSection(BaseModel):
    type: Literal["grid"] = "grid"
    column_span: int = 4
    columns: int | None = None
    title: str | None = None
    cards: list[LovelaceCard] = Field(default_factory=list)


class SectionsView(BaseModel):
    type: Literal["sections"] = "sections"
    title: str
    path: str
    subview: bool | None = None
    icon: str | None = None
    max_columns: int | None = None
    sections: list[GridSection] = Field(default_factory=list)
    header: dict[str, Any] | None = None
    badges: list[Any] | None = None
    theme: str | None = None


class LovelaceConfig(BaseModel):
    views: list[SectionsView] = Field(default_factory=list)


def dump_lovelace_config(config: LovelaceConfig) -> dict[str, Any]:
    return config.model_dump(mode="json", exclude_none=True)


# HTTP surface.


class StrategyGenerateRequest(BaseModel):
    # Left untyped so malformed host payloads reach InputShapeError with a field path.
    config: Any = Field(default=None, description="Strategy config, e.g. excluded_entities/favorite_entities")
    hass: Any = Field(default=None, description="Registry snapshot: entities, devices, areas, states, panelUrl")
    trace_id: str | None = Field(default=None, description="Optional trace id for logs")

    model_config = {
        "json_schema_extra": {
            "example": {
                "config": {"favorite_entities": ["light.kitchen"], "excluded_entities": []},
                "hass": {
                    "areas": {"kitchen": {"area_id": "kitchen", "name": "Kitchen"}},
                    "entities": {"light.kitchen": {"entity_id": "light.kitchen", "area_id": "kitchen"}},
                    "devices": {},
                    "states": {"light.kitchen": {"state": "on"}},
                    "panelUrl": "home-rooms",
                },
                "trace_id": "req-001",
            }
        }
    }


class OperationLogItem(BaseModel):
    event_id: str
    created_at: str
    event_type: str
    source: str
    action: str
    method: str | None = None
    path: str | None = None
    status_code: int | None = None
    duration_ms: float | None = None
    client_ip: str | None = None
    trace_id: str | None = None
    success: bool | None = None
    detail: dict[str, Any] = Field(default_factory=dict)
