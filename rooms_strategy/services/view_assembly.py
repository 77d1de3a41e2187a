from collections.abc import Iterable, Sequence

from rooms_strategy.models.schemas import (
    DashboardStrategyConfig,
    EntitiesCard,
    GridSection,
    HeadingCard,
    SectionsView,
    StrategyCard,
)


def build_grid_section(cards: Iterable[StrategyCard], column_span: int = 4) -> GridSection:
    return GridSection(column_span=column_span, cards=list(cards))


def build_home_view(sections: Iterable[GridSection | None], config: DashboardStrategyConfig) -> SectionsView:
    return SectionsView(
        title="Home",
        path="home",
        max_columns=4,
        sections=[section for section in sections if section is not None],
        header=dict(config.header) if config.header is not None else {},
        badges=list(config.badges) if config.badges is not None else [],
    )


def build_favorites_section(favorite_entity_ids: Sequence[str]) -> GridSection | None:
    if not favorite_entity_ids:
        return None

    return build_grid_section(
        [
            HeadingCard(heading="Favorites", heading_style="title"),
            EntitiesCard(title="Favorites", entities=list(favorite_entity_ids), show_header_toggle=False),
        ],
        4,
    )


def build_summary_section(summary_cards: Sequence[StrategyCard]) -> GridSection | None:
    # Only the heading means no summary matched.
    if len(summary_cards) <= 1:
        return None
    return build_grid_section(summary_cards, 4)


def build_area_cards_grid_section(area_cards: Sequence[StrategyCard]) -> GridSection:
    return build_grid_section(area_cards, 4)
