"""Secretsjack — a convenience wrapper around AWS Secrets Manager.

Entry point for the library::

    from secretsjack import AWSSecretsManager

    manager = AWSSecretsManager({"region_name": "us-east-1"})
    creds = manager.get_secret("prod/db")
"""

from .aws import AWSSecretsManager
from .base import (
    AWSCredentials,
    SecretsManagerConfig,
    BatchGetSecretResult,
    BatchSecretError,
    ListSecretsResult,
    SecretFilter,
    SecretTag,
    SecretVersion,
    TagSecretResult,
)
from .base.exceptions import (
    SecretsManagerError,
    SecretNotFoundError,
    SecretAccessDeniedError,
    SecretThrottledError,
    SecretMarkedForDeletionError,
    UnsupportedSecretFormatError,
    SecretRetrievalError,
    SecretCreateError,
    SecretUpdateError,
    SecretDeleteError,
    SecretExistenceCheckError,
    SecretListError,
    SecretTagError,
    SecretGetTagsError,
    SecretGetVersionsError,
)

__all__ = [
    "AWSSecretsManager",
    "AWSCredentials",
    "SecretsManagerConfig",
    "BatchGetSecretResult",
    "BatchSecretError",
    "ListSecretsResult",
    "SecretFilter",
    "SecretTag",
    "SecretVersion",
    "TagSecretResult",
    "SecretsManagerError",
    "SecretNotFoundError",
    "SecretAccessDeniedError",
    "SecretThrottledError",
    "SecretMarkedForDeletionError",
    "UnsupportedSecretFormatError",
    "SecretRetrievalError",
    "SecretCreateError",
    "SecretUpdateError",
    "SecretDeleteError",
    "SecretExistenceCheckError",
    "SecretListError",
    "SecretTagError",
    "SecretGetTagsError",
    "SecretGetVersionsError",
]
