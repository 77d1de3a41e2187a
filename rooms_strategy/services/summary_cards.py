from collections.abc import Iterable

from rooms_strategy.models.schemas import ActionConfig, GridOptions, HeadingCard, HomeSummaryCard, StrategyCard
from rooms_strategy.services.entity_filters import has_domain


# (summary, domains that enable it, navigation path), in display order.
SUMMARY_RULES: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("light", ("light",), "/light?historyBack=1"),
    ("climate", ("climate",), "/climate?historyBack=1"),
    ("security", ("alarm_control_panel", "binary_sensor"), "/security?historyBack=1"),
    ("media_players", ("media_player",), "/media-players"),
)


def build_summary_card(summary: str, navigation_path: str) -> HomeSummaryCard:
    return HomeSummaryCard(
        summary=summary,
        tap_action=ActionConfig(action="navigate", navigation_path=navigation_path),
        grid_options=GridOptions(columns=12),
    )


def build_summary_cards(all_entity_ids: Iterable[str]) -> list[StrategyCard]:
    """
    Summary heading plus one home-summary card per summary whose domains are present.

    Presence is a prefix scan over every known entity id; exclusions do not apply.
    """
    entity_ids = list(all_entity_ids)
    cards: list[StrategyCard] = [HeadingCard(heading="Summaries", heading_style="title")]
    for summary, domains, navigation_path in SUMMARY_RULES:
        if any(has_domain(entity_ids, domain) for domain in domains):
            cards.append(build_summary_card(summary, navigation_path))
    return cards
