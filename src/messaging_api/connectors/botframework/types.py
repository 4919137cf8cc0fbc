"""Modelos do Bot Framework Connector (campos em snake_case).

O cliente converte para camelCase no envio e devolve respostas em
snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChannelAccount(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    aad_object_id: str | None = None
    role: str | None = None


class ConversationAccount(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    is_group: bool | None = None
    conversation_type: str | None = None
    tenant_id: str | None = None


class Attachment(BaseModel):
    model_config = ConfigDict(extra="allow")

    content_type: str
    content_url: str | None = None
    content: Any = None
    name: str | None = None
    thumbnail_url: str | None = None


class Activity(BaseModel):
    """Activity enviada ou recebida; campos não mapeados são preservados."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = "message"
    id: str | None = None
    timestamp: str | None = None
    service_url: str | None = None
    channel_id: str | None = None
    from_: ChannelAccount | None = Field(default=None, alias="from")
    conversation: ConversationAccount | None = None
    recipient: ChannelAccount | None = None
    text: str | None = None
    text_format: str | None = None
    locale: str | None = None
    attachments: list[Attachment] | None = None
    attachment_layout: str | None = None
    reply_to_id: str | None = None
    channel_data: Any = None


class ConversationParameters(BaseModel):
    model_config = ConfigDict(extra="allow")

    is_group: bool = False
    bot: ChannelAccount | None = None
    members: list[ChannelAccount] | None = None
    topic_name: str | None = None
    tenant_id: str | None = None
    activity: Activity | None = None
    channel_data: Any = None


class AttachmentUpload(BaseModel):
    """Upload de anexo para o canal (``original_base64`` em base64)."""

    model_config = ConfigDict(extra="ignore")

    type: str
    name: str
    original_base64: str
    thumbnail_base64: str | None = None
