"""Modelos de entrada do cliente Viber."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Sender(BaseModel):
    """Remetente exibido nas mensagens do bot."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., max_length=28)
    avatar: str | None = None


class Picture(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str = ""
    media: str
    thumbnail: str | None = None


class Video(BaseModel):
    model_config = ConfigDict(extra="ignore")

    media: str
    size: int = Field(..., ge=0, description="Tamanho em bytes.")
    thumbnail: str | None = None
    duration: int | None = None


class File(BaseModel):
    model_config = ConfigDict(extra="ignore")

    media: str
    size: int = Field(..., ge=0)
    file_name: str


class Contact(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    phone_number: str


class Location(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lat: float
    lon: float
