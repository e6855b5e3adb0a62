"""AWS Secrets Manager façade."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, NoReturn, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from secretsjack.aws.utils import (
    convert_filters,
    convert_tags,
    drop_none,
    encode_secret_value,
    parse_secret_value,
)
from secretsjack.base.async_support import AsyncMixin
from secretsjack.base.config import SecretsManagerConfig, validate_config
from secretsjack.base.exceptions import (
    SecretsManagerError,
    SecretAccessDeniedError,
    SecretCreateError,
    SecretDeleteError,
    SecretExistenceCheckError,
    SecretGetTagsError,
    SecretGetVersionsError,
    SecretListError,
    SecretMarkedForDeletionError,
    SecretNotFoundError,
    SecretRetrievalError,
    SecretTagError,
    SecretThrottledError,
    SecretUpdateError,
    UnsupportedSecretFormatError,
)
from secretsjack.base.logger import sj_logger
from secretsjack.base.models import (
    BatchGetSecretResult,
    BatchSecretError,
    ListSecretsResult,
    SecretFilter,
    SecretTag,
    SecretVersion,
    TagSecretResult,
)

# Failures raised by the boto3 client itself.
_SERVICE_ERRORS = (ClientError, BotoCoreError)
# Unserialisable values and malformed tags; pydantic's ValidationError is a ValueError.
_ENCODE_ERRORS = (TypeError, ValueError)

DEFAULT_RECOVERY_DAYS = 30
CURRENT_STAGE = "AWSCURRENT"
UNKNOWN_VERSION_ID = "unknown"

_BINARY_MESSAGE = "Binary secrets are not supported"
_MARKED_FOR_DELETION_MESSAGE = "The requested secret is marked for deletion and cannot be accessed."
_THROTTLED_MESSAGE = "Request throttled. Try again later."


def _error_code(e: BaseException) -> str | None:
    if isinstance(e, ClientError):
        return e.response.get("Error", {}).get("Code")
    return None


def _is_marked_for_deletion(e: BaseException) -> bool:
    """Secrets Manager reports this only as a generic InvalidRequestException."""
    if _error_code(e) != "InvalidRequestException":
        return False
    message = e.response.get("Error", {}).get("Message") or ""  # type: ignore[attr-defined]
    return "marked for deletion" in message.lower()


def _raise(
    exc_class: type[SecretsManagerError],
    message: str,
    e: BaseException,
    *,
    operation: str,
    name: str | None = None,
) -> NoReturn:
    """Log a failed call and raise *exc_class* chained to the botocore error."""
    sj_logger.warning(message, operation=operation, secret_name=name, error_code=_error_code(e))
    raise exc_class(message, e) from e


def _unsupported_format(*, operation: str, name: str | None) -> NoReturn:
    sj_logger.warning(_BINARY_MESSAGE, operation=operation, secret_name=name)
    raise UnsupportedSecretFormatError(_BINARY_MESSAGE)


def _handle_read_error(
    e: BaseException,
    *,
    operation: str,
    name: str | None,
    not_found: str,
    access_denied: str,
    fallback: str,
) -> NoReturn:
    """Map a failed value read to its specific error kind."""
    if _is_marked_for_deletion(e):
        _raise(SecretMarkedForDeletionError, _MARKED_FOR_DELETION_MESSAGE, e, operation=operation, name=name)
    mapped = {
        "ResourceNotFoundException": (SecretNotFoundError, not_found),
        "AccessDeniedException": (SecretAccessDeniedError, access_denied),
        "ThrottlingException": (SecretThrottledError, _THROTTLED_MESSAGE),
    }.get(_error_code(e) or "")
    exc_class, message = mapped or (SecretRetrievalError, fallback)
    _raise(exc_class, message, e, operation=operation, name=name)


class AWSSecretsManager(AsyncMixin):
    """Convenience wrapper around the boto3 Secrets Manager client.

    One method per operation, each issuing exactly one service request.
    The instance holds nothing but the configured client, so concurrent
    calls are independent. Every public method also has an awaitable
    ``a``-prefixed twin (``aget_secret``, ``alist_secrets``, ...).

    Attributes:
        client: boto3 Secrets Manager client.
        region: AWS region name the client talks to.
    """

    def __init__(self, config: SecretsManagerConfig | dict | None = None) -> None:
        """Initialize the Secrets Manager client.

        Creating the client does not touch the network; bad credentials
        surface on the first call.

        Args:
            config: A :class:`SecretsManagerConfig`, a raw dict accepted by
                it, or ``None`` to rely on the environment entirely.
        """
        self.config = validate_config(config)
        self.client = boto3.client("secretsmanager", **self.config.client_kwargs())
        self.region = self.config.region_name

    # --- Reads ---

    def get_secret(self, name: str, *, parse: bool = True, version: str | None = None) -> Any:
        """Retrieve a secret value, JSON-decoded when possible.

        Args:
            name: Name or ARN of the secret.
            parse: Decode the value as JSON, falling back to the raw string
                when it is not valid JSON.
            version: Optional version id to fetch instead of the current one.

        Returns:
            The decoded value, or the raw string.

        Raises:
            UnsupportedSecretFormatError: If the secret only has a binary payload.
            SecretMarkedForDeletionError: If the secret is scheduled for deletion.
            SecretNotFoundError: If the secret does not exist.
            SecretAccessDeniedError: If the caller may not read it.
            SecretThrottledError: If the request was throttled.
            SecretRetrievalError: If retrieval fails for any other reason.
        """
        sj_logger.debug("Fetching secret value", operation="get_secret", secret_name=name)
        try:
            response = self.client.get_secret_value(**drop_none(SecretId=name, VersionId=version))
        except _SERVICE_ERRORS as e:
            _handle_read_error(
                e,
                operation="get_secret",
                name=name,
                not_found=f'Secret "{name}" not found.',
                access_denied="Access denied to the requested secret.",
                fallback=f"Failed to retrieve secret '{name}': {e}",
            )

        secret_string = response.get("SecretString")
        if secret_string is None:
            _unsupported_format(operation="get_secret", name=name)
        return parse_secret_value(secret_string) if parse else secret_string

    def batch_get_secrets(
        self,
        secret_ids: Sequence[str] | None = None,
        *,
        filters: Iterable[SecretFilter | Mapping[str, Any]] | None = None,
        max_results: int | None = None,
        next_token: str | None = None,
        parse: bool = False,
    ) -> BatchGetSecretResult:
        """Retrieve one page of several secret values in a single request.

        Per-secret failures are returned in ``errors`` rather than raised.
        Only one page is fetched; pass the returned ``next_token`` back to
        continue.

        Args:
            secret_ids: Names or ARNs to fetch.
            filters: Optional filter predicates.
            max_results: Optional page size.
            next_token: Continuation token from a previous page.
            parse: JSON-decode values (best effort).

        Returns:
            A :class:`BatchGetSecretResult` for this page.

        Raises:
            ValueError: If neither secret ids nor filters are given.
            UnsupportedSecretFormatError: If any returned secret is binary.
            SecretsManagerError: If the request as a whole fails (same kinds
                as :meth:`get_secret`).
        """
        if not secret_ids and not filters:
            raise ValueError("batch_get_secrets needs secret_ids or filters.")

        request = drop_none(
            SecretIdList=list(secret_ids) if secret_ids else None,
            Filters=convert_filters(filters),
            MaxResults=max_results,
            NextToken=next_token,
        )
        sj_logger.debug("Fetching secret values in batch", operation="batch_get_secrets")
        try:
            response = self.client.batch_get_secret_value(**request)
        except _SERVICE_ERRORS as e:
            _handle_read_error(
                e,
                operation="batch_get_secrets",
                name=None,
                not_found="One or more secrets not found",
                access_denied="Access denied to one or more secrets",
                fallback=f"Failed to retrieve secrets: {e}",
            )

        secrets: dict[str, Any] = {}
        for item in response.get("SecretValues") or []:
            secret_name = item.get("Name")
            if not secret_name:
                continue
            if item.get("SecretString") is not None:
                value = item["SecretString"]
                secrets[secret_name] = parse_secret_value(value) if parse else value
            elif item.get("SecretBinary") is not None:
                _unsupported_format(operation="batch_get_secrets", name=secret_name)

        errors = [
            BatchSecretError(
                secret_id=err.get("SecretId"),
                error_code=err.get("ErrorCode"),
                error_message=err.get("Message"),
            )
            for err in response.get("Errors") or []
        ]
        return BatchGetSecretResult(
            secrets=secrets,
            errors=errors,
            next_token=response.get("NextToken") or None,
        )

    # --- Writes ---

    def create_secret(
        self,
        name: str,
        value: Any,
        *,
        description: str | None = None,
        tags: Iterable[SecretTag | Mapping[str, Any]] | None = None,
    ) -> str:
        """Create a new secret.

        Args:
            name: Name of the secret to create.
            value: A string, stored as-is, or any JSON-serialisable value,
                stored as its JSON text.
            description: Optional description.
            tags: Optional ``Key`` / ``Value`` tags.

        Returns:
            The ARN of the new secret, or ``name`` if the service returns none.

        Raises:
            SecretCreateError: If creation fails.
        """
        sj_logger.debug("Creating secret", operation="create_secret", secret_name=name)
        try:
            request = drop_none(
                Name=name,
                SecretString=encode_secret_value(value),
                Description=description,
                Tags=convert_tags(tags),
            )
            response = self.client.create_secret(**request)
        except _SERVICE_ERRORS + _ENCODE_ERRORS as e:
            _raise(SecretCreateError, f"Failed to create secret '{name}': {e}", e, operation="create_secret", name=name)
        return response.get("ARN") or name

    def update_secret(self, name: str, value: Any, *, description: str | None = None) -> str:
        """Replace a secret's value and, optionally, its description.

        Tags are not touched here; use :meth:`tag_secret`.

        Returns:
            The ARN of the secret, or ``name`` if the service returns none.

        Raises:
            SecretUpdateError: If the update fails.
        """
        sj_logger.debug("Updating secret", operation="update_secret", secret_name=name)
        try:
            request = drop_none(
                SecretId=name,
                SecretString=encode_secret_value(value),
                Description=description,
            )
            response = self.client.update_secret(**request)
        except _SERVICE_ERRORS + _ENCODE_ERRORS as e:
            _raise(SecretUpdateError, f"Failed to update secret '{name}': {e}", e, operation="update_secret", name=name)
        return response.get("ARN") or name

    def delete_secret(
        self,
        name: str,
        *,
        force_delete: bool = False,
        recovery_days: int | None = None,
    ) -> None:
        """Delete a secret.

        Without ``force_delete`` the secret stays recoverable for
        ``recovery_days`` (30 by default). With it, deletion is immediate
        and no recovery window is sent.

        Raises:
            SecretDeleteError: If deletion fails.
        """
        if force_delete:
            request = {"SecretId": name, "ForceDeleteWithoutRecovery": True}
        else:
            days = recovery_days if recovery_days is not None else DEFAULT_RECOVERY_DAYS
            request = {"SecretId": name, "RecoveryWindowInDays": days}
        sj_logger.debug("Deleting secret", operation="delete_secret", secret_name=name)
        try:
            self.client.delete_secret(**request)
        except _SERVICE_ERRORS as e:
            _raise(SecretDeleteError, f"Failed to delete secret '{name}': {e}", e, operation="delete_secret", name=name)

    # --- Metadata ---

    def secret_exists(self, name: str) -> bool:
        """Check whether a secret exists without reading its value.

        Raises:
            SecretExistenceCheckError: For any failure other than not-found.
        """
        sj_logger.debug("Checking secret existence", operation="secret_exists", secret_name=name)
        try:
            self.client.describe_secret(SecretId=name)
        except _SERVICE_ERRORS as e:
            if _error_code(e) == "ResourceNotFoundException":
                return False
            _raise(
                SecretExistenceCheckError,
                f"Failed to check secret existence for '{name}': {e}",
                e,
                operation="secret_exists",
                name=name,
            )
        return True

    def list_secrets(
        self,
        *,
        max_results: int | None = None,
        next_token: str | None = None,
        filters: Iterable[SecretFilter | Mapping[str, Any]] | None = None,
    ) -> ListSecretsResult:
        """List one page of secret names.

        Raises:
            SecretListError: If listing fails.
        """
        request = drop_none(
            MaxResults=max_results,
            NextToken=next_token,
            Filters=convert_filters(filters),
        )
        sj_logger.debug("Listing secrets", operation="list_secrets")
        try:
            response = self.client.list_secrets(**request)
        except _SERVICE_ERRORS as e:
            _raise(SecretListError, f"Failed to list secrets: {e}", e, operation="list_secrets")
        return ListSecretsResult(
            secret_names=[entry["Name"] for entry in response.get("SecretList") or [] if entry.get("Name")],
            next_token=response.get("NextToken") or None,
        )

    def tag_secret(self, name: str, tags: Mapping[str, str]) -> TagSecretResult:
        """Add or overwrite tags on a secret.

        Args:
            name: Name or ARN of the secret.
            tags: Tag key to value mapping.

        Raises:
            SecretTagError: If tagging fails.
        """
        sj_logger.debug("Tagging secret", operation="tag_secret", secret_name=name)
        try:
            self.client.tag_resource(
                SecretId=name,
                Tags=[{"Key": key, "Value": value} for key, value in tags.items()],
            )
        except _SERVICE_ERRORS as e:
            _raise(SecretTagError, f"Failed to tag secret '{name}': {e}", e, operation="tag_secret", name=name)
        return TagSecretResult(message=f'Successfully tagged secret "{name}" with {len(tags)} tags')

    def get_tags(self, name: str) -> dict[str, str]:
        """Return a secret's tags as a dict (empty if it has none).

        Tags without a key or with an empty value are skipped.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            SecretGetTagsError: If the lookup fails for any other reason.
        """
        sj_logger.debug("Reading secret tags", operation="get_tags", secret_name=name)
        try:
            response = self.client.describe_secret(SecretId=name)
        except _SERVICE_ERRORS as e:
            if _error_code(e) == "ResourceNotFoundException":
                _raise(SecretNotFoundError, f'Secret "{name}" not found.', e, operation="get_tags", name=name)
            _raise(SecretGetTagsError, f"Failed to get secret tags for '{name}': {e}", e, operation="get_tags", name=name)

        return {
            tag["Key"]: tag["Value"]
            for tag in response.get("Tags") or []
            if tag.get("Key") and tag.get("Value")
        }

    def get_secret_versions(self, name: str) -> list[SecretVersion]:
        """List every version of a secret, deprecated ones included.

        ``is_latest`` is set on the version(s) carrying the ``AWSCURRENT``
        stage label.

        Raises:
            SecretGetVersionsError: If the listing fails.
        """
        sj_logger.debug("Listing secret versions", operation="get_secret_versions", secret_name=name)
        try:
            response = self.client.list_secret_version_ids(SecretId=name, IncludeDeprecated=True)
        except _SERVICE_ERRORS as e:
            _raise(
                SecretGetVersionsError,
                f"Failed to get secret versions for '{name}': {e}",
                e,
                operation="get_secret_versions",
                name=name,
            )
        return [
            SecretVersion(
                version_id=version.get("VersionId") or UNKNOWN_VERSION_ID,
                created_date=version.get("CreatedDate"),
                is_latest=CURRENT_STAGE in (version.get("VersionStages") or []),
            )
            for version in response.get("Versions") or []
        ]
