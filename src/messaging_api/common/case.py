"""Conversão de chaves entre snake_case, camelCase e PascalCase.

Cada provedor fala uma convenção diferente no fio (LINE usa camelCase,
Viber exige PascalCase em keyboards, Messenger e Telegram usam snake_case).
Os clientes convertem na fronteira HTTP, então o consumidor sempre usa
snake_case.

Regras de quebra de palavras:
- Fronteira minúscula/dígito seguida de maiúscula (``myKey``)
- Sequência de maiúsculas seguida de Maiúscula+minúscula (``HTMLParser``)
- Qualquer sequência não alfanumérica é separador

Valores que não são dict/list/tuple (datetime, bytes, modelos, instâncias)
são preservados sem alteração. Estruturas cíclicas são suportadas.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_UPPER_UPPER_LOWER = re.compile(r"([A-Z])([A-Z][a-z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_DIGITS = re.compile(r"(\d+)")
_LEADING_DIGITS = re.compile(r"^\d+")


def _split_words(value: str) -> list[str]:
    result = _LOWER_UPPER.sub(r"\1 \2", value)
    result = _UPPER_UPPER_LOWER.sub(r"\1 \2", result)
    result = _NON_ALNUM.sub(" ", result)
    return result.split()


def _pascal_word(word: str, index: int) -> str:
    first, rest = word[0], word[1:].lower()
    if index > 0 and first.isdigit():
        return f"_{first}{rest}"
    return first.upper() + rest


def snakecase(key: str) -> str:
    """Converte chave para snake_case.

    Grupos de dígitos viram palavras próprias: ``has2fa`` -> ``has_2fa``.
    """
    words = _split_words(_DIGITS.sub(r"_\1", key))
    return "_".join(word.lower() for word in words)


def camelcase(key: str) -> str:
    """Converte chave para camelCase.

    Partes iniciadas por dígito são coladas na anterior antes da conversão:
    ``image_1024`` -> ``image1024``.
    """
    merged = ""
    for part in key.split("_"):
        if not merged:
            merged = part
        elif _LEADING_DIGITS.match(part):
            merged += part
        else:
            merged = f"{merged}_{part}"

    words = _split_words(merged)
    return "".join(
        word.lower() if index == 0 else _pascal_word(word, index)
        for index, word in enumerate(words)
    )


def pascalcase(key: str) -> str:
    """Converte chave para PascalCase (``myKey`` -> ``MyKey``)."""
    if key and key[-1].isdigit():
        key = f"{key[:-1]}_{key[-1]}"
    words = _split_words(key)
    return "".join(_pascal_word(word, index) for index, word in enumerate(words))


def _map_keys(value: Any, convert: Callable[[str], str], deep: bool) -> Any:
    """Reescreve chaves preservando estrutura, tipos e ciclos."""
    memo: dict[int, Any] = {}

    def visit(node: Any, nested: bool) -> Any:
        if nested and not deep:
            return node
        node_id = id(node)
        if node_id in memo:
            return memo[node_id]

        if isinstance(node, dict):
            mapped: dict[Any, Any] = {}
            memo[node_id] = mapped
            for key, item in node.items():
                new_key = convert(key) if isinstance(key, str) else key
                mapped[new_key] = visit(item, True)
            return mapped

        if isinstance(node, list):
            items: list[Any] = []
            memo[node_id] = items
            items.extend(visit(item, nested) for item in node)
            return items

        if isinstance(node, tuple):
            # Tuplas não podem conter a si mesmas sem um container mutável no meio
            converted = tuple(visit(item, nested) for item in node)
            memo[node_id] = converted
            return converted

        return node

    return visit(value, False)


def snakecase_keys(value: Any, deep: bool = False) -> Any:
    """Converte chaves de dict para snake_case.

    Args:
        value: dict (ou lista de dicts) a converter.
        deep: Se True, converte também dicts aninhados.

    Returns:
        Nova estrutura com chaves convertidas. Valores não-dict inalterados.
    """
    return _map_keys(value, snakecase, deep)


def snakecase_keys_deep(value: Any) -> Any:
    return snakecase_keys(value, deep=True)


def camelcase_keys(value: Any, deep: bool = False) -> Any:
    """Converte chaves de dict para camelCase. Ver ``snakecase_keys``."""
    return _map_keys(value, camelcase, deep)


def camelcase_keys_deep(value: Any) -> Any:
    return camelcase_keys(value, deep=True)


def pascalcase_keys(value: Any, deep: bool = False) -> Any:
    """Converte chaves de dict para PascalCase. Ver ``snakecase_keys``."""
    return _map_keys(value, pascalcase, deep)


def pascalcase_keys_deep(value: Any) -> Any:
    return pascalcase_keys(value, deep=True)
