"""Health check API endpoints."""

from fastapi import APIRouter, Depends

from operand_demos.core.config import Settings
from operand_demos.core.health import get_health_status
from operand_demos.dependencies import get_app_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Report that the service is running and which integrations are configured."""
    return get_health_status(settings)
