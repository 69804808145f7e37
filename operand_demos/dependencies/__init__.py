"""FastAPI dependency injection functions."""

from .get_ingestion_service import (
    get_app_settings,
    get_operand_client,
    get_storage_service,
    get_ingestion_service,
)

__all__ = [
    "get_app_settings",
    "get_operand_client",
    "get_storage_service",
    "get_ingestion_service",
]
