import base64
from unittest.mock import patch

import pytest

from conftest import FakeOperandClient, FakeStorage
from operand_demos.core.exceptions import IndexingError, StorageError
from operand_demos.schemas.indexing import ObjectType, encode_index_request
from operand_demos.schemas.webhook import IncomingMessage
from operand_demos.services.ingestion import (
    IngestionService,
    classify_attachment,
    sanitize_text,
)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("hi\u0007", "hi"),
        ("line one\nline two", "line oneline two"),
        ("tab\there", "tabhere"),
        ("\u200bzero width", "zero width"),
        ("plain text, kept as is!", "plain text, kept as is!"),
        ("émoji 🎉 ok", "émoji 🎉 ok"),
        ("\x00\x1f\x7f", ""),
    ],
)
def test_sanitize_text(raw, expected):
    sanitized = sanitize_text(raw)
    assert sanitized == expected
    assert all(ch.isprintable() for ch in sanitized)
    # Nothing printable was dropped
    assert sanitized == "".join(ch for ch in raw if ch.isprintable())


def test_classify_attachment():
    assert classify_attachment("image/jpeg") == ObjectType.IMAGE
    assert classify_attachment("image/png") == ObjectType.IMAGE
    assert classify_attachment("application/pdf") == ObjectType.PDF
    assert classify_attachment("image/gif") is None
    assert classify_attachment("") is None
    assert classify_attachment(None) is None


@pytest.mark.asyncio
async def test_text_message_is_sanitized_and_indexed(settings, operand_client):
    service = IngestionService(settings, operand_client)
    message = IncomingMessage.model_validate({"from": "alice", "message": "hi\u0007"})

    with patch("operand_demos.services.ingestion.time.time", return_value=1700000000.9):
        sent = await service.ingest(message)

    assert len(sent) == 1
    assert operand_client.created == sent
    assert encode_index_request(sent[0]) == {
        "type": "text",
        "metadata": {"text": "hi"},
        "properties": {"from": "alice"},
        "label": "1700000000",
    }


@pytest.mark.asyncio
async def test_parent_id_is_attached_when_configured(settings, operand_client):
    settings.OPERAND_PARENT_ID = "collection-1"
    service = IngestionService(settings, operand_client)

    await service.ingest(IncomingMessage(sender="bob", message="hello"))

    body = encode_index_request(operand_client.created[0])
    assert body["parentId"] == "collection-1"


@pytest.mark.asyncio
async def test_empty_message_without_attachment_sends_nothing(
    settings, operand_client, storage
):
    service = IngestionService(settings, operand_client, storage)

    sent = await service.ingest(IncomingMessage(sender="alice", message="\u0007\n"))

    assert sent == []
    assert operand_client.created == []
    assert storage.stored == []


@pytest.mark.asyncio
async def test_image_attachment_is_stored_and_indexed(settings, operand_client, storage):
    service = IngestionService(settings, operand_client, storage)
    message = IncomingMessage(
        sender="alice",
        message="look at this",
        attachment=b64(b"\x89PNG"),
        attachment_type="image/png",
    )

    sent = await service.ingest(message)

    assert [request.type for request in sent] == ["text", "image"]
    assert storage.stored == [("imessage/image/fixed-id", b"\x89PNG")]
    body = encode_index_request(sent[1])
    assert body["metadata"] == {
        "imageUrl": "https://s3.example.com/bucket/imessage/image/fixed-id"
    }
    assert body["properties"] == {"from": "alice"}
    assert "parentId" not in body


@pytest.mark.asyncio
async def test_pdf_attachment_without_text(settings, operand_client, storage):
    service = IngestionService(settings, operand_client, storage)
    message = IncomingMessage(
        sender="alice", attachment=b64(b"%PDF-1.4"), attachment_type="application/pdf"
    )

    sent = await service.ingest(message)

    assert [request.type for request in sent] == ["pdf"]
    assert encode_index_request(sent[0])["metadata"] == {
        "pdfUrl": "https://s3.example.com/bucket/imessage/pdf/fixed-id"
    }


@pytest.mark.asyncio
async def test_unsupported_attachment_is_skipped(
    settings, operand_client, storage, caplog
):
    service = IngestionService(settings, operand_client, storage)
    message = IncomingMessage(
        sender="alice",
        message="animated",
        attachment=b64(b"GIF89a"),
        attachment_type="image/gif",
    )

    sent = await service.ingest(message)

    assert [request.type for request in sent] == ["text"]
    assert storage.stored == []
    assert "unsupported attachment type image/gif" in caplog.text


@pytest.mark.asyncio
async def test_attachment_skipped_without_storage(settings, operand_client):
    service = IngestionService(settings, operand_client, storage=None)
    message = IncomingMessage(
        sender="alice", attachment=b64(b"\xff\xd8"), attachment_type="image/jpeg"
    )

    assert await service.ingest(message) == []
    assert operand_client.created == []


@pytest.mark.asyncio
async def test_empty_attachment_is_not_indexed(settings, operand_client, storage):
    service = IngestionService(settings, operand_client, storage)
    message = IncomingMessage(sender="alice", attachment=b64(b""), attachment_type="image/png")

    assert await service.ingest(message) == []
    assert storage.stored == []


@pytest.mark.asyncio
async def test_text_failure_aborts_attachment(settings, storage):
    operand_client = FakeOperandClient(
        fail_on_call=0, error=IndexingError("unexpected status code: 500 (boom)")
    )
    service = IngestionService(settings, operand_client, storage)
    message = IncomingMessage(
        sender="alice",
        message="hello",
        attachment=b64(b"%PDF"),
        attachment_type="application/pdf",
    )

    with pytest.raises(IndexingError):
        await service.ingest(message)

    assert storage.stored == []


@pytest.mark.asyncio
async def test_storage_failure_propagates(settings, operand_client):
    storage = FakeStorage(error=StorageError("S3 client error: denied"))
    service = IngestionService(settings, operand_client, storage)
    message = IncomingMessage(
        sender="alice",
        message="hello",
        attachment=b64(b"\xff\xd8"),
        attachment_type="image/jpeg",
    )

    with pytest.raises(StorageError):
        await service.ingest(message)

    # The text was already indexed before the upload failed
    assert [request.type for request in operand_client.created] == ["text"]
