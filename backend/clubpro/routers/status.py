"""Service identity and status endpoints."""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from fastapi.routing import APIRoute

from clubpro import payloads
from clubpro.config import Settings, get_app_settings
from clubpro.schemas import HealthResponse, RootResponse, StatusResponse, VVCResponse

API_PREFIX = "/api/"

router = APIRouter(tags=["Status"])

_READ_METHODS = ["GET", "HEAD"]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.api_route(
    "/", methods=_READ_METHODS, response_model=RootResponse, summary="Service information"
)
async def root(settings: Settings = Depends(get_app_settings)):
    """Service identity, version and the club feature list."""
    return payloads.root_info(_now(), settings)


@router.api_route(
    "/api/health", methods=_READ_METHODS, response_model=HealthResponse, summary="Health check"
)
async def health(settings: Settings = Depends(get_app_settings)):
    """Liveness plus configured/not configured flags for backing services."""
    return payloads.health(_now(), settings)


@router.api_route(
    "/api/status", methods=_READ_METHODS, response_model=StatusResponse, summary="Deployment status"
)
async def deployment_status(settings: Settings = Depends(get_app_settings)):
    return payloads.deployment_status(_now(), settings)


@router.api_route(
    "/api/vvc", methods=_READ_METHODS, response_model=VVCResponse, summary="VVC Brasschaat info"
)
async def vvc(settings: Settings = Depends(get_app_settings)):
    return payloads.club_info(_now(), settings)


def api_route_directory(api_router: APIRouter = router) -> List[str]:
    """List the registered API routes as ``"<path> - <summary>"`` lines."""
    return [
        f"{route.path} - {route.summary}"
        for route in api_router.routes
        if isinstance(route, APIRoute) and route.path.startswith(API_PREFIX)
    ]
