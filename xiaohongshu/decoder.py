"""Decode located JSON text into page records."""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, List, Type

from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import EXCERPT_LIMIT
from .errors import DecodeError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _adapter(model: Type[BaseModel], many: bool) -> TypeAdapter:
    return TypeAdapter(List[model] if many else model)


def shape_name(model: Type[BaseModel], many: bool = False) -> str:
    return f"list[{model.__name__}]" if many else model.__name__


def _replace_lone_surrogates(value: Any) -> Any:
    # page text cut inside an emoji leaves half a surrogate pair; it becomes U+FFFD
    if isinstance(value, str):
        return value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    if isinstance(value, list):
        return [_replace_lone_surrogates(item) for item in value]
    if isinstance(value, dict):
        return {
            _replace_lone_surrogates(key): _replace_lone_surrogates(item)
            for key, item in value.items()
        }
    return value


def decode_snapshot(payload: str, model: Type[BaseModel], many: bool = False) -> Any:
    """
    Parse ``payload`` into ``model`` (or a list of them when ``many``).

    Unknown keys are ignored and missing ones take their zero value. Any other
    mismatch raises DecodeError carrying at most EXCERPT_LIMIT characters of
    the payload.
    """
    try:
        data = _replace_lone_surrogates(json.loads(payload))
        return _adapter(model, many).validate_python(data)
    except ValueError as exc:
        # pydantic's ValidationError is a ValueError as well
        reason = _summarize(exc) if isinstance(exc, ValidationError) else str(exc)
        shape = shape_name(model, many)
        excerpt = payload[:EXCERPT_LIMIT]
        if len(payload) > EXCERPT_LIMIT:
            logger.error("Failed to decode %s, payload (first %d chars): %s...", shape, EXCERPT_LIMIT, excerpt)
        else:
            logger.error("Failed to decode %s, payload: %s", shape, excerpt)
        raise DecodeError(shape, excerpt, reason) from exc


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    more = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{location}: {first.get('msg', '')}{more}"
