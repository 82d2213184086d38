"""Health check endpoint — no database access, always available."""

from fastapi import APIRouter, Depends
from starlette.responses import Response

from app.config import get_settings
from app.infrastructure.database import ObjectRegistry
from app.infrastructure.dependencies import get_object_registry
from app.presentation.rest import RestResponse, to_http_response

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    registry: ObjectRegistry = Depends(get_object_registry),
) -> Response:
    """Returns the current application health status and registered objects."""
    settings = get_settings()
    payload = {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "objects": registry.names(),
    }
    return to_http_response(RestResponse().set_data(payload))
