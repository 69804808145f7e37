"""Webhook payload models for inbound messages."""

from typing import List, Optional

from pydantic import Base64Bytes, BaseModel, Field, field_validator


class IncomingMessage(BaseModel):
    """Message forwarded by the messaging bridge."""

    sender: str = Field(default="", alias="from", description="Sender identifier")
    message: str = Field(default="", description="Message text")
    attachment: Optional[Base64Bytes] = Field(
        default=None, description="Base64 encoded attachment bytes"
    )
    attachment_type: Optional[str] = Field(
        default=None, description="MIME type of the attachment"
    )
    token: Optional[str] = Field(default=None, description="Continuation token")

    @field_validator("sender", "message", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        # The bridge sends null for a missing sender or text
        return "" if value is None else value

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "from": "+15555550123",
                "message": "Notes from the meeting are attached",
                "attachment": "JVBERi0xLjQK",
                "attachment_type": "application/pdf",
            }
        }


class WebhookResponse(BaseModel):
    """Response model for an ingested message."""

    success: bool = Field(..., description="Whether every index request succeeded")
    indexed: List[str] = Field(
        default_factory=list, description="Object types that were indexed, in order"
    )
