from time import perf_counter
from typing import Any

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool

from rooms_strategy.core import settings
from rooms_strategy.routers import log, strategy
from rooms_strategy.services.log_service import log_http_request
from rooms_strategy.services.strategy_registry import install, list_strategies

install()

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
app.include_router(strategy.router)
app.include_router(log.router)


@app.middleware("http")
async def record_http_request(request: Request, call_next):
    started = perf_counter()
    response = await call_next(request)
    # Reading the log must not append to it. File writes stay off the event loop.
    if request.url.path != "/v1/logs/recent":
        await run_in_threadpool(
            log_http_request,
            source="api",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((perf_counter() - started) * 1000, 2),
            client_ip=request.client.host if request.client else None,
        )
    return response


@app.get("/health")
async def health() -> dict[str, Any]:
    return {
        "service": settings.APP_NAME,
        "status": "ok",
        "version": settings.APP_VERSION,
        "strategy_count": len(list_strategies()),
    }
