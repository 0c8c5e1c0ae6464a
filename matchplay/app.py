from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from matchplay.api.health import health as _health_handler
from matchplay.api.routers.handicaps import router as handicaps_router
from matchplay.api.routers.matches import router as matches_router
from matchplay.api.routers.players import router as players_router
from matchplay.api.routers.rounds import router as rounds_router
from matchplay.config import env_bool, get_settings
from matchplay.errors import MatchplayError
from matchplay.metrics import MetricsMiddleware, metrics_app

logger = logging.getLogger(__name__)

app = FastAPI(title="matchplay")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if env_bool("METRICS_ENABLED", True):
    app.add_middleware(MetricsMiddleware)


@app.exception_handler(MatchplayError)
async def _matchplay_error_handler(
    request: Request, exc: MatchplayError
) -> JSONResponse:
    logger.warning("rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


app.include_router(matches_router)
app.include_router(handicaps_router)
app.include_router(rounds_router)
app.include_router(players_router)
app.add_api_route(
    "/health",
    _health_handler,
    methods=["GET"],
    response_model=None,
    tags=["health"],
)


_metrics_router = APIRouter()


@_metrics_router.get("/metrics", include_in_schema=False)
async def _metrics_endpoint(request: Request):
    return await metrics_app(request)


app.include_router(_metrics_router)
