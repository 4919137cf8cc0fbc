"""Conector WeChat Official Account (atendimento)."""

from .client import WechatClient, create_wechat_client
from .errors import parse_wechat_error
from .types import Article, MiniProgramPage, Music, News, Video

__all__ = [
    "Article",
    "MiniProgramPage",
    "Music",
    "News",
    "Video",
    "WechatClient",
    "create_wechat_client",
    "parse_wechat_error",
]
