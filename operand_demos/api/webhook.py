"""Webhook endpoint receiving messages to index."""

from fastapi import APIRouter, Depends, HTTPException, status

from operand_demos.core.exceptions import OperandDemoError
from operand_demos.core.logging import setup_logger
from operand_demos.dependencies import get_ingestion_service
from operand_demos.schemas.webhook import IncomingMessage, WebhookResponse
from operand_demos.services.ingestion import IngestionService

logger = setup_logger(__name__)

router = APIRouter(tags=["webhook"])


@router.post(
    "/",
    status_code=status.HTTP_200_OK,
    response_model=WebhookResponse,
    summary="Index an inbound message and its attachment",
)
async def ingest_message(
    message: IncomingMessage,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> WebhookResponse:
    """
    Index an inbound message.

    This endpoint:
    1. Strips non-printable characters from the message text
    2. Indexes the text, if any is left
    3. Uploads a JPEG, PNG or PDF attachment to S3 (when configured) and
       indexes it by URL; other attachment types are skipped

    Raises:
        HTTPException: 400 on a malformed body, 500 if storage or indexing fails
    """
    try:
        sent = await ingestion_service.ingest(message)
    except OperandDemoError as e:
        logger.error(f"error: {e.message}", exc_info=True)
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return WebhookResponse(success=True, indexed=[request.type for request in sent])
