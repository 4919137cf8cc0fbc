"""Modelos de entrada do cliente LINE.

Campos em snake_case; o cliente converte para camelCase no envio.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ImageContent(BaseModel):
    """Conteúdo de mensagem de imagem."""

    model_config = ConfigDict(extra="ignore")

    original_content_url: str
    preview_image_url: str | None = None


class VideoContent(BaseModel):
    """Conteúdo de mensagem de vídeo."""

    model_config = ConfigDict(extra="ignore")

    original_content_url: str
    preview_image_url: str
    tracking_id: str | None = None


class AudioContent(BaseModel):
    """Conteúdo de mensagem de áudio."""

    model_config = ConfigDict(extra="ignore")

    original_content_url: str
    duration: int = Field(..., ge=0, description="Duração em milissegundos.")


class Location(BaseModel):
    """Localização enviada como mensagem."""

    model_config = ConfigDict(extra="ignore")

    title: str
    address: str
    latitude: float
    longitude: float


class Sticker(BaseModel):
    """Sticker identificado por pacote e id."""

    model_config = ConfigDict(extra="ignore")

    package_id: str
    sticker_id: str
