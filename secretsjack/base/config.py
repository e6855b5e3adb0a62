"""
Pydantic configuration models for the Secrets Manager client.

Validates configs at initialization time instead of silently passing bad
values to the boto3 client.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


DEFAULT_REGION = "us-east-1"


class AWSCredentials(BaseModel):
    """An explicit AWS credentials object (e.g. STS temporary credentials)."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    access_key_id: str = Field(alias="accessKeyId", description="AWS access key ID")
    secret_access_key: str = Field(alias="secretAccessKey", description="AWS secret access key")
    session_token: str | None = Field(
        default=None, alias="sessionToken", description="Session token for temporary credentials"
    )


class SecretsManagerConfig(BaseModel):
    """Configuration for the Secrets Manager client.

    The region is resolved in order:
    1. Explicit ``region_name`` passed in the config.
    2. Environment variables (AWS_REGION, then AWS_DEFAULT_REGION).
    3. ``us-east-1``.

    Credentials are resolved in order:
    1. An explicit access-key / secret-key pair (both must be set).
    2. An explicit :class:`AWSCredentials` object.
    3. Nothing is passed, so boto3 falls back to its own credential chain
       (environment, ~/.aws/credentials, instance metadata, etc.).
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    region_name: str | None = Field(default=None, alias="region", description="AWS region (e.g. 'us-east-1')")
    aws_access_key_id: str | None = Field(default=None, alias="accessKeyId", description="AWS access key ID")
    aws_secret_access_key: str | None = Field(
        default=None, alias="secretAccessKey", description="AWS secret access key"
    )
    credentials: AWSCredentials | None = Field(default=None, description="Explicit credentials object")

    @model_validator(mode="before")
    @classmethod
    def resolve_region_from_env(cls, values: Any) -> Any:
        """Fall back to environment variables, then the default, for the region."""
        if not isinstance(values, dict):
            return values
        values = dict(values)
        if not values.get("region_name") and not values.get("region"):
            values.pop("region", None)
            values["region_name"] = (
                os.environ.get("AWS_REGION")
                or os.environ.get("AWS_DEFAULT_REGION")
                or DEFAULT_REGION
            )
        return values

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.client("secretsmanager", ...)``.

        Credential keys are only included when explicitly configured so the
        boto3 default chain stays in charge otherwise.
        """
        kwargs: dict[str, Any] = {"region_name": self.region_name}
        if self.aws_access_key_id and self.aws_secret_access_key:
            kwargs["aws_access_key_id"] = self.aws_access_key_id
            kwargs["aws_secret_access_key"] = self.aws_secret_access_key
        elif self.credentials is not None:
            kwargs["aws_access_key_id"] = self.credentials.access_key_id
            kwargs["aws_secret_access_key"] = self.credentials.secret_access_key
            if self.credentials.session_token:
                kwargs["aws_session_token"] = self.credentials.session_token
        return kwargs


def validate_config(config: SecretsManagerConfig | dict | None) -> SecretsManagerConfig:
    """Validate and return a typed config model.

    Args:
        config: A ready model, a raw configuration dictionary, or ``None``
            for all defaults.

    Returns:
        A validated :class:`SecretsManagerConfig`.

    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    if isinstance(config, SecretsManagerConfig):
        return config
    return SecretsManagerConfig(**(config or {}))


__all__ = [
    "DEFAULT_REGION",
    "AWSCredentials",
    "SecretsManagerConfig",
    "validate_config",
]
