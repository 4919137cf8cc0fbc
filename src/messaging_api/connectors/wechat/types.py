"""Modelos de entrada do cliente WeChat."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Video(BaseModel):
    model_config = ConfigDict(extra="ignore")

    media_id: str
    thumb_media_id: str
    title: str | None = None
    description: str | None = None


class Music(BaseModel):
    model_config = ConfigDict(extra="ignore")

    musicurl: str
    hqmusicurl: str
    thumb_media_id: str
    title: str | None = None
    description: str | None = None


class Article(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    description: str
    url: str
    picurl: str


class News(BaseModel):
    """Mensagem de notícia (apenas 1 artigo é aceito pela API)."""

    model_config = ConfigDict(extra="ignore")

    articles: list[Article] = Field(..., min_length=1, max_length=1)


class MiniProgramPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    appid: str
    pagepath: str
    thumb_media_id: str
