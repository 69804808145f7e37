"""Dependency injection functions for the webhook ingestion service."""

from typing import Optional

from fastapi import Depends, Request

from operand_demos.core.config import Settings
from operand_demos.services.ingestion import IngestionService
from operand_demos.services.operand import OperandClient
from operand_demos.services.storage import S3StorageService


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_operand_client(request: Request) -> OperandClient:
    """Get the shared Operand client created at startup."""
    return request.app.state.operand_client


def get_storage_service(request: Request) -> Optional[S3StorageService]:
    """Get the attachment storage service, or None if storage is not configured."""
    return request.app.state.storage


def get_ingestion_service(
    settings: Settings = Depends(get_app_settings),
    operand_client: OperandClient = Depends(get_operand_client),
    storage: Optional[S3StorageService] = Depends(get_storage_service),
) -> IngestionService:
    """Get ingestion service instance with injected clients."""
    return IngestionService(
        settings=settings,
        operand_client=operand_client,
        storage=storage,
    )
