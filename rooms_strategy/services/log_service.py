import json
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from rooms_strategy.core import settings
from rooms_strategy.models.schemas import OperationLogItem


_DETAIL_MAX_CHARS = 4000


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _backup_path(index: int) -> Path:
    return settings.STRATEGY_LOG_PATH.with_name(f"{settings.STRATEGY_LOG_PATH.name}.{index}")


def _compress_detail(detail: Any) -> dict[str, Any]:
    data = detail if isinstance(detail, dict) else {"value": detail}

    try:
        raw = json.dumps(data, ensure_ascii=False)
    except TypeError:
        raw = json.dumps({"value": str(data)}, ensure_ascii=False)

    if len(raw) <= _DETAIL_MAX_CHARS:
        parsed = json.loads(raw)
        return parsed if isinstance(parsed, dict) else {"value": parsed}

    return {
        "_truncated": True,
        "_size": len(raw),
        "preview": raw[:_DETAIL_MAX_CHARS],
    }


def _rotate_if_needed() -> None:
    path = settings.STRATEGY_LOG_PATH
    if not path.exists() or path.stat().st_size < settings.STRATEGY_LOG_MAX_BYTES:
        return

    _backup_path(settings.STRATEGY_LOG_BACKUP_COUNT).unlink(missing_ok=True)
    for idx in range(settings.STRATEGY_LOG_BACKUP_COUNT - 1, 0, -1):
        src = _backup_path(idx)
        if src.exists():
            src.replace(_backup_path(idx + 1))

    path.replace(_backup_path(1))


def _append(entry: OperationLogItem) -> None:
    line = json.dumps(entry.model_dump(mode="json"), ensure_ascii=False)
    with settings.log_lock:
        settings.STRATEGY_LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        _rotate_if_needed()
        with settings.STRATEGY_LOG_PATH.open("a", encoding="utf-8") as f:
            f.write(line)
            f.write("\n")


def log_operation(
    *,
    event_type: str,
    source: str,
    action: str,
    method: str | None = None,
    path: str | None = None,
    status_code: int | None = None,
    duration_ms: float | None = None,
    client_ip: str | None = None,
    trace_id: str | None = None,
    success: bool | None = None,
    detail: Any = None,
) -> OperationLogItem:
    item = OperationLogItem(
        event_id=uuid4().hex,
        created_at=_now_iso(),
        event_type=event_type,
        source=source,
        action=action,
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
        client_ip=client_ip,
        trace_id=trace_id,
        success=success,
        detail=_compress_detail(detail or {}),
    )
    if settings.STRATEGY_LOG_ENABLED:
        _append(item)
    return item


def log_http_request(
    *,
    source: str,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client_ip: str | None,
    detail: dict[str, Any] | None = None,
) -> OperationLogItem:
    return log_operation(
        event_type="http_request",
        source=source,
        action="http.request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
        client_ip=client_ip,
        success=status_code < 400,
        detail=detail or {},
    )


def list_recent_logs(
    *,
    limit: int = 200,
    source: str | None = None,
    event_type: str | None = None,
) -> list[OperationLogItem]:
    safe_limit = max(1, min(limit, 1000))

    with settings.log_lock:
        files: list[Path] = []
        if settings.STRATEGY_LOG_PATH.exists():
            files.append(settings.STRATEGY_LOG_PATH)
        for idx in range(1, settings.STRATEGY_LOG_BACKUP_COUNT + 1):
            p = _backup_path(idx)
            if p.exists():
                files.append(p)

        result: list[OperationLogItem] = []
        for file_path in files:
            try:
                lines = file_path.read_text(encoding="utf-8").splitlines()
            except OSError:
                continue

            for line in reversed(lines):
                text = line.strip()
                if not text:
                    continue
                try:
                    item = OperationLogItem.model_validate_json(text)
                except ValueError:
                    continue

                if source and item.source != source:
                    continue
                if event_type and item.event_type != event_type:
                    continue

                result.append(item)
                if len(result) >= safe_limit:
                    return result

        return result


def get_log_storage_meta() -> dict[str, Any]:
    with settings.log_lock:
        path = settings.STRATEGY_LOG_PATH
        size = path.stat().st_size if path.exists() else 0
    return {
        "storage": "file",
        "enabled": settings.STRATEGY_LOG_ENABLED,
        "log_path": str(settings.STRATEGY_LOG_PATH),
        "current_size_bytes": size,
        "max_bytes": settings.STRATEGY_LOG_MAX_BYTES,
        "backup_count": settings.STRATEGY_LOG_BACKUP_COUNT,
    }
