from typing import Any

from fastapi import APIRouter, HTTPException

from rooms_strategy.core.errors import InputShapeError, StrategyNotFoundError
from rooms_strategy.models.schemas import StrategyGenerateRequest, dump_lovelace_config
from rooms_strategy.services.strategy_registry import get_strategy_or_raise, list_strategies

router = APIRouter(prefix="/v1/strategies", tags=["strategy"])


@router.get("")
async def get_strategies() -> dict[str, Any]:
    return {"strategies": list_strategies()}


@router.post("/{name}/generate")
def generate_dashboard(name: str, req: StrategyGenerateRequest) -> dict[str, Any]:
    try:
        strategy = get_strategy_or_raise(name)
    except StrategyNotFoundError as ex:
        raise HTTPException(status_code=404, detail=ex.to_error_detail()) from ex

    try:
        result = strategy.generate(req.config, req.hass, trace_id=req.trace_id)
    except InputShapeError as ex:
        raise HTTPException(status_code=422, detail=ex.to_error_detail()) from ex

    return dump_lovelace_config(result)
