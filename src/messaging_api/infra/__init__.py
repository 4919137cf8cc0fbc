"""Infraestrutura compartilhada: transporte HTTP e criptografia."""

from messaging_api.infra.http import HttpClient, HttpClientConfig

__all__ = ["HttpClient", "HttpClientConfig"]
