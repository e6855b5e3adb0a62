"""
Pydantic models for request options and call results.

Every result is built fresh for a single call; nothing here is cached.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field


FilterKey = Literal[
    "description",
    "name",
    "tag-key",
    "tag-value",
    "primary-region",
    "owning-service",
    "all",
]


class SecretFilter(BaseModel):
    """A filter predicate for list / batch requests.

    Accepts both ``{"key": ..., "values": [...]}`` and the service's own
    ``{"Key": ..., "Values": [...]}`` spelling.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    key: FilterKey = Field(alias="Key")
    values: list[str] = Field(alias="Values")


class SecretTag(BaseModel):
    """A single ``Key`` / ``Value`` tag sent on secret creation."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    key: str = Field(alias="Key")
    value: str = Field(alias="Value")


class BatchSecretError(BaseModel):
    """Per-secret failure reported inside a batch fetch."""

    secret_id: str | None = None
    error_code: str | None = None
    error_message: str | None = None


class BatchGetSecretResult(BaseModel):
    """One page of a batch fetch."""

    secrets: dict[str, Any] = Field(default_factory=dict)
    errors: list[BatchSecretError] = Field(default_factory=list)
    next_token: str | None = None


class ListSecretsResult(BaseModel):
    """One page of secret names."""

    secret_names: list[str] = Field(default_factory=list)
    next_token: str | None = None


class TagSecretResult(BaseModel):
    success: Literal[True] = True
    message: str


class SecretVersion(BaseModel):
    """A single historical version of a secret."""

    version_id: str
    created_date: datetime | None = None
    is_latest: bool = False


__all__ = [
    "FilterKey",
    "SecretFilter",
    "SecretTag",
    "BatchSecretError",
    "BatchGetSecretResult",
    "ListSecretsResult",
    "TagSecretResult",
    "SecretVersion",
]
