"""Secretsjack CLI — quick Secrets Manager operations from the command line.

Usage examples::

    secretsjack --region eu-west-1 get-secret prod/db
    secretsjack list-secrets --kwargs '{"max_results": 10}'
    secretsjack tag-secret prod/db --kwargs '{"tags": {"team": "payments"}}'
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from pydantic import BaseModel, ValidationError


OPERATIONS = [
    "get-secret",
    "batch-get-secrets",
    "create-secret",
    "update-secret",
    "delete-secret",
    "secret-exists",
    "list-secrets",
    "tag-secret",
    "get-tags",
    "get-secret-versions",
]


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``secretsjack`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="secretsjack",
        description="AWS Secrets Manager from the command line",
    )
    parser.add_argument(
        "--region", "-r",
        default=None,
        help="AWS region (defaults to AWS_REGION / AWS_DEFAULT_REGION / us-east-1)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"aws_access_key_id": "...", "aws_secret_access_key": "..."}\')',
    )
    parser.add_argument(
        "operation",
        choices=OPERATIONS,
        help="Operation to perform",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="Positional arguments for the operation (e.g. the secret name)",
    )
    parser.add_argument(
        "--kwargs", "-k",
        type=str,
        default="{}",
        help="JSON keyword arguments for the operation",
    )
    return parser


def _render(result: Any) -> str:
    """Turn an operation result into printable text."""
    if isinstance(result, BaseModel):
        return result.model_dump_json(indent=2)
    if isinstance(result, list) and result and all(isinstance(r, BaseModel) for r in result):
        return json.dumps([r.model_dump(mode="json") for r in result], indent=2)
    if isinstance(result, (dict, list, bool)):
        return json.dumps(result, indent=2, default=str)
    return str(result)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, creates an :class:`AWSSecretsManager`, and invokes
    the requested operation. Results are printed as JSON (dicts, lists,
    result models) or plain text.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        kwargs: dict[str, Any] = json.loads(ns.kwargs)
    except json.JSONDecodeError as e:
        print(f"Invalid --kwargs JSON: {e}", file=sys.stderr)
        sys.exit(1)

    if ns.region:
        config["region_name"] = ns.region

    # Lazy-import so --help does not load boto3
    from secretsjack.aws import AWSSecretsManager
    from secretsjack.base.exceptions import SecretsManagerError

    try:
        manager = AWSSecretsManager(config)
    except ValidationError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        sys.exit(1)

    method = getattr(manager, ns.operation.replace("-", "_"))
    args = list(ns.args)
    if ns.operation == "batch-get-secrets" and args:
        kwargs.setdefault("secret_ids", args)
        args = []

    try:
        result = method(*args, **kwargs)
    except (SecretsManagerError, ValueError, TypeError) as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None:
        print("OK")
    else:
        print(_render(result))


if __name__ == "__main__":
    main()
