"""Helpers para aceitar modelos pydantic ou dicts como entrada."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def to_payload(value: BaseModel | dict[str, Any] | None) -> dict[str, Any]:
    """Normaliza entrada tipada para dict.

    Args:
        value: Modelo pydantic, dict ou None.

    Returns:
        Dict sem campos None (modelos) ou cópia rasa do dict recebido.

    Raises:
        TypeError: Se o valor não for modelo nem dict.
    """
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, dict):
        return dict(value)
    raise TypeError(f"Esperado BaseModel ou dict, recebido {type(value).__name__}")


def compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove chaves com valor None (equivalente a omitir o campo)."""
    return {key: value for key, value in payload.items() if value is not None}
