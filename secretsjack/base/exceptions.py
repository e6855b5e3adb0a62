"""
Secretsjack exception hierarchy.

Every failure surfaced to callers is a :class:`SecretsManagerError`.
Reads (``get_secret`` / ``batch_get_secrets``) distinguish the common
service conditions (not-found, access-denied, throttled, marked for
deletion, binary payload); every other operation raises one
operation-specific "failed to ..." error carrying the original cause.
"""

from __future__ import annotations


# ── Base ──────────────────────────────────────────────────────────────
class SecretsManagerError(Exception):
    """Root exception for all Secretsjack errors.

    Attributes:
        original_error: The underlying botocore exception, when there is one.
    """

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


# ── Read conditions ───────────────────────────────────────────────────
class SecretNotFoundError(SecretsManagerError):
    """Secret not found."""


class SecretAccessDeniedError(SecretsManagerError):
    """Caller is not allowed to read the secret."""


class SecretThrottledError(SecretsManagerError):
    """Request was throttled by the service."""


class SecretMarkedForDeletionError(SecretsManagerError):
    """Secret is scheduled for deletion and cannot be accessed."""


class UnsupportedSecretFormatError(SecretsManagerError):
    """Secret only carries a binary payload."""


class SecretRetrievalError(SecretsManagerError):
    """Unrecognised failure while fetching one or more secret values."""


# ── Operation failures ────────────────────────────────────────────────
class SecretCreateError(SecretsManagerError):
    """Failed to create a secret."""


class SecretUpdateError(SecretsManagerError):
    """Failed to update a secret."""


class SecretDeleteError(SecretsManagerError):
    """Failed to delete a secret."""


class SecretExistenceCheckError(SecretsManagerError):
    """Failed to check whether a secret exists."""


class SecretListError(SecretsManagerError):
    """Failed to list secrets."""


class SecretTagError(SecretsManagerError):
    """Failed to tag a secret."""


class SecretGetTagsError(SecretsManagerError):
    """Failed to read a secret's tags."""


class SecretGetVersionsError(SecretsManagerError):
    """Failed to list a secret's versions."""
