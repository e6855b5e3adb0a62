"""Stateless helpers shared by the Secrets Manager operations."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from secretsjack.base.models import SecretFilter, SecretTag


def convert_filters(
    filters: Iterable[SecretFilter | Mapping[str, Any]] | None,
) -> list[dict[str, Any]] | None:
    """Convert filter predicates into the service's ``Filters`` shape.

    Args:
        filters: :class:`SecretFilter` models or plain dicts using either
            ``key``/``values`` or ``Key``/``Values``.

    Returns:
        A list of ``{"Key": ..., "Values": [...]}`` dicts, or ``None`` when
        no filters were given.

    Raises:
        pydantic.ValidationError: If a filter key is not one the service knows.
    """
    if filters is None:
        return None
    converted = []
    for item in filters:
        flt = item if isinstance(item, SecretFilter) else SecretFilter.model_validate(dict(item))
        converted.append({"Key": flt.key, "Values": list(flt.values)})
    return converted


def convert_tags(tags: Iterable[SecretTag | Mapping[str, Any]] | None) -> list[dict[str, str]] | None:
    """Convert create-time tags into the service's ``Tags`` shape."""
    if tags is None:
        return None
    converted = []
    for item in tags:
        tag = item if isinstance(item, SecretTag) else SecretTag.model_validate(dict(item))
        converted.append({"Key": tag.key, "Value": tag.value})
    return converted


def parse_secret_value(value: str) -> Any:
    """Best-effort JSON decode: return the raw string when it is not JSON."""
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


def encode_secret_value(value: Any) -> str:
    """Strings are stored as-is; everything else as its JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def drop_none(**params: Any) -> dict[str, Any]:
    """Keep only request parameters that were actually set.

    boto3 validates parameters client-side and rejects ``None`` values.
    """
    return {key: val for key, val in params.items() if val is not None}
