"""Inbound message ingestion: classify a webhook message and index its parts."""

import time
from typing import Dict, List, Optional

from operand_demos.core.config import Settings
from operand_demos.core.logging import setup_logger
from operand_demos.schemas.indexing import (
    ImageIndexRequest,
    ImageMetadata,
    IndexRequest,
    ObjectType,
    PdfIndexRequest,
    PdfMetadata,
    TextIndexRequest,
    TextMetadata,
)
from operand_demos.schemas.webhook import IncomingMessage
from operand_demos.services.operand import OperandClientProtocol
from operand_demos.services.storage import StorageServiceProtocol

logger = setup_logger(__name__)

# Attachment MIME types we know how to index, mapped to their content category
SUPPORTED_ATTACHMENT_TYPES: Dict[str, ObjectType] = {
    "image/jpeg": ObjectType.IMAGE,
    "image/png": ObjectType.IMAGE,
    "application/pdf": ObjectType.PDF,
}


def sanitize_text(text: str) -> str:
    """Drop every non-printable character, keeping the rest in order."""
    return "".join(ch for ch in text if ch.isprintable())


def classify_attachment(mime_type: Optional[str]) -> Optional[ObjectType]:
    """Return the content category for a MIME type, or None if unsupported."""
    if not mime_type:
        return None
    return SUPPORTED_ATTACHMENT_TYPES.get(mime_type)


class IngestionService:
    """Turns inbound messages into Operand index requests and sends them."""

    def __init__(
        self,
        settings: Settings,
        operand_client: OperandClientProtocol,
        storage: Optional[StorageServiceProtocol] = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            settings: Application settings (parent collection ID)
            operand_client: Client used to create objects
            storage: Attachment storage, or None when storage is not configured
        """
        self.parent_id = settings.OPERAND_PARENT_ID
        self._operand = operand_client
        self._storage = storage

    def _label(self) -> str:
        return str(int(time.time()))

    def build_text_request(self, sender: str, text: str) -> TextIndexRequest:
        return TextIndexRequest(
            metadata=TextMetadata(text=text),
            properties={"from": sender},
            label=self._label(),
            parent_id=self.parent_id,
        )

    def build_attachment_request(
        self, sender: str, category: ObjectType, url: str
    ) -> IndexRequest:
        if category == ObjectType.IMAGE:
            return ImageIndexRequest(
                metadata=ImageMetadata(image_url=url),
                properties={"from": sender},
                label=self._label(),
                parent_id=self.parent_id,
            )
        return PdfIndexRequest(
            metadata=PdfMetadata(pdf_url=url),
            properties={"from": sender},
            label=self._label(),
            parent_id=self.parent_id,
        )

    async def _attachment_request(
        self, message: IncomingMessage
    ) -> Optional[IndexRequest]:
        """Store the attachment and build its request, if it can be indexed."""
        if not message.attachment or not message.attachment_type:
            return None

        if self._storage is None:
            logger.info(
                f"Skipping {message.attachment_type} attachment from {message.sender}: "
                "storage not configured"
            )
            return None

        category = classify_attachment(message.attachment_type)
        if category is None:
            logger.warning(
                f"got unsupported attachment type {message.attachment_type}"
            )
            return None

        path = self._storage.build_object_path(category.value)
        url = await self._storage.store_file(path, message.attachment)
        return self.build_attachment_request(message.sender, category, url)

    async def ingest(self, message: IncomingMessage) -> List[IndexRequest]:
        """
        Index the text and attachment of an inbound message.

        The text request (if any) is sent before the attachment is stored.
        The first failure aborts the remaining work and propagates.

        Args:
            message: Parsed webhook payload

        Returns:
            The index requests that were sent, in order

        Raises:
            IndexingError: If the indexing API rejects a request
            StorageError: If the attachment upload fails
        """
        sent: List[IndexRequest] = []

        text = sanitize_text(message.message)
        if text:
            request = self.build_text_request(message.sender, text)
            await self._operand.create_object(request)
            sent.append(request)

        attachment_request = await self._attachment_request(message)
        if attachment_request is not None:
            await self._operand.create_object(attachment_request)
            sent.append(attachment_request)

        logger.info(
            f"Indexed message from {message.sender}: "
            f"{[request.type for request in sent] or 'nothing to index'}"
        )
        return sent
