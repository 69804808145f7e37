"""Health check module for application monitoring."""

from operand_demos.core.config import Settings


def get_health_status(settings: Settings):
    """
    Get health status response.

    Args:
        settings: Application settings, used to report optional integrations
    """
    return {
        "message": "Service is healthy",
        "data": {
            "status": "healthy",
            "app": settings.APP_NAME,
            "storage": (
                "configured" if settings.storage_configured else "not_configured"
            ),
        },
    }
