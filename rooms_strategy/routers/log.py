from typing import Any

from fastapi import APIRouter, Query

from rooms_strategy.services.log_service import get_log_storage_meta, list_recent_logs

router = APIRouter(prefix="/v1/logs", tags=["system"])


@router.get("/recent")
def get_recent_logs(
    limit: int = Query(default=200, ge=1, le=1000),
    source: str | None = Query(default=None),
    event_type: str | None = Query(default=None),
) -> dict[str, Any]:
    source = source.strip() if source else None
    logs = list_recent_logs(limit=limit, source=source or None, event_type=event_type)
    return {
        **get_log_storage_meta(),
        "logs": [x.model_dump(mode="json") for x in logs],
    }
