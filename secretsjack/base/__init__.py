"""Configuration, result models and core utilities.

Everything here is provider-neutral plumbing used by
:class:`secretsjack.aws.AWSSecretsManager`.
"""

from .config import AWSCredentials, SecretsManagerConfig, validate_config
from .models import (
    BatchGetSecretResult,
    BatchSecretError,
    ListSecretsResult,
    SecretFilter,
    SecretTag,
    SecretVersion,
    TagSecretResult,
)


__all__ = [
    "AWSCredentials",
    "SecretsManagerConfig",
    "validate_config",
    "BatchGetSecretResult",
    "BatchSecretError",
    "ListSecretsResult",
    "SecretFilter",
    "SecretTag",
    "SecretVersion",
    "TagSecretResult",
]
