from typing import Any, Protocol

from rooms_strategy.core import settings
from rooms_strategy.core.errors import StrategyNotFoundError
from rooms_strategy.models.schemas import LovelaceConfig
from rooms_strategy.services.strategy_service import RoomsSectionsStrategy


class DashboardStrategy(Protocol):
    tag: str

    def generate(self, config: Any, hass: Any, *, trace_id: str | None = None) -> LovelaceConfig: ...


STRATEGY_REGISTRY: dict[str, DashboardStrategy] = {}


def register_strategy(name: str, strategy: DashboardStrategy) -> DashboardStrategy:
    # First registration under a name wins.
    return STRATEGY_REGISTRY.setdefault(name, strategy)


def get_strategy_or_raise(name: str) -> DashboardStrategy:
    strategy = STRATEGY_REGISTRY.get(name)
    if strategy is not None:
        return strategy
    for candidate in STRATEGY_REGISTRY.values():
        if candidate.tag == name:
            return candidate
    raise StrategyNotFoundError(name)


def list_strategies() -> list[str]:
    return sorted(STRATEGY_REGISTRY.keys())


def install() -> dict[str, Any]:
    register_strategy(settings.DEFAULT_STRATEGY_NAME, RoomsSectionsStrategy())
    return {
        "version": settings.APP_VERSION,
        "strategies": list_strategies(),
    }
